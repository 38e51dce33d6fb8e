"""Shared pytest fixtures and test helpers for akita tests."""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog
from click.testing import CliRunner

from akita_cli.config.settings import AkitaSettings
from akita_cli.domain.ci import PullRequestContext

# Anything that could leak in from the machine running the tests.
_AMBIENT_ENV_VARS = (
    "CI",
    "GITHUB_ACTIONS",
    "GITHUB_EVENT_NAME",
    "GITHUB_EVENT_PATH",
    "GITHUB_REPOSITORY",
    "GITHUB_SHA",
    "GITHUB_HEAD_REF",
    "GITHUB_REF_NAME",
    "CIRCLECI",
    "CIRCLE_PULL_REQUEST",
    "CIRCLE_PROJECT_USERNAME",
    "CIRCLE_PROJECT_REPONAME",
    "CIRCLE_SHA1",
    "CIRCLE_BRANCH",
    "TRAVIS",
    "TRAVIS_PULL_REQUEST",
    "TRAVIS_REPO_SLUG",
    "TRAVIS_PULL_REQUEST_SHA",
    "TRAVIS_PULL_REQUEST_BRANCH",
    "TRAVIS_BRANCH",
    "TRAVIS_COMMIT",
    "POSTMAN_API_KEY",
    "POSTMAN_ENV",
    "AKITA_CONFIG",
    "AKITA_DOMAIN",
    "AKITA_CLIENT_ID",
    "AKITA_TEST_ONLY_DISABLE_GITHUB_TEAMS_CHECK",
    "AKITA_QUIET",
    "AKITA_VERBOSE",
    "AKITA_JSON_OUTPUT",
    "AKITA_LOG_JSON",
    "AKITA_POSTMAN__API_KEY",
    "AKITA_POSTMAN__ENVIRONMENT",
    "AKITA_API__KEY_ID",
    "AKITA_API__KEY_SECRET",
    "FORCE_COLOR",
)


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run every test outside CI, without credentials, in an empty directory.

    ``AKITA_HOME`` points into *tmp_path* so the stored client ID never
    touches the real home directory.
    """
    for name in _AMBIENT_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("AKITA_HOME", str(tmp_path / "akita-home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def _restore_logging() -> Generator[None]:
    """Restore logging state after each test (AppContext reconfigures it)."""
    root = logging.getLogger()
    original_handlers = root.handlers[:]
    original_level = root.level
    akita = logging.getLogger("akita_cli")
    akita_level = akita.level
    yield
    structlog.contextvars.clear_contextvars()
    root.handlers = original_handlers
    root.setLevel(original_level)
    akita.setLevel(akita_level)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings() -> AkitaSettings:
    """Settings with code defaults and a fixed client ID."""
    return AkitaSettings(client_id="test-client")


@pytest.fixture
def pull_request() -> PullRequestContext:
    return PullRequestContext(
        owner="acme", repo="widgets", number=42, commit="abc123", branch="feature/x"
    )


@pytest.fixture
def github_pr_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PullRequestContext:
    """Make the environment look like a GitHub Actions pull_request build."""
    event = tmp_path / "event.json"
    event.write_text(
        json.dumps(
            {
                "action": "synchronize",
                "number": 42,
                "pull_request": {
                    "number": 42,
                    "head": {"sha": "abc123", "ref": "feature/x"},
                },
            }
        )
    )
    monkeypatch.setenv("GITHUB_ACTIONS", "true")
    monkeypatch.setenv("GITHUB_EVENT_NAME", "pull_request")
    monkeypatch.setenv("GITHUB_EVENT_PATH", str(event))
    monkeypatch.setenv("GITHUB_REPOSITORY", "acme/widgets")
    monkeypatch.setenv("GITHUB_SHA", "merge456")
    return PullRequestContext(
        owner="acme", repo="widgets", number=42, commit="abc123", branch="feature/x"
    )


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def backend_transport(
    status_code: int = 200,
    payload: Any = None,
    *,
    requests: list[httpx.Request] | None = None,
    raises: Exception | None = None,
) -> httpx.MockTransport:
    """Build a MockTransport answering every request the same way.

    Requests are appended to *requests* when given.
    """

    def handler(request: httpx.Request) -> httpx.Response:
        if requests is not None:
            requests.append(request)
        if raises is not None:
            raise raises
        if isinstance(payload, (dict, list)) or payload is None:
            return httpx.Response(status_code, json=payload if payload is not None else {})
        return httpx.Response(status_code, text=str(payload))

    return httpx.MockTransport(handler)


def fake_checker(result: bool | Exception, calls: list[Any]) -> Callable[..., bool]:
    """Stand-in for ``is_pr_akita_enabled`` that records its calls."""

    def check(pr: PullRequestContext, **kwargs: Any) -> bool:
        calls.append((pr, kwargs))
        if isinstance(result, Exception):
            raise result
        return result

    return check
