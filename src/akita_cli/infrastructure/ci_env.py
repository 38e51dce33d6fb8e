"""CI context detection from the process environment.

Recognises GitHub Actions, CircleCI and Travis CI, in that order. For each
system a reader pulls out the repository, commit and branch, and, when the
build was triggered by a pull request, a :class:`PullRequestContext`.

INVARIANT: Detection never raises and never touches the network. Anything
that cannot be parsed simply means "no pull request".
"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Callable, Mapping
from pathlib import Path

from akita_cli.domain.ci import CIInfo, CIKind, PullRequestContext

logger = logging.getLogger(__name__)

TAG_CI = "x-akita-ci"
TAG_REPO = "x-akita-git-repo"
TAG_BRANCH = "x-akita-git-branch"
TAG_COMMIT = "x-akita-git-commit"
TAG_PR = "x-akita-github-pr"

_GITHUB_PR_EVENTS = frozenset({"pull_request", "pull_request_target"})

_ReadResult = tuple[PullRequestContext | None, dict[str, str]]
_Reader = Callable[[Mapping[str, str]], _ReadResult]


def _split_slug(slug: str) -> tuple[str, str] | None:
    """Split ``owner/repo``; None if it is not exactly that shape."""
    owner, sep, repo = slug.partition("/")
    if not sep or not owner or not repo or "/" in repo:
        return None
    return owner, repo


def _parse_number(raw: object) -> int | None:
    if isinstance(raw, bool):
        return None
    if isinstance(raw, int):
        return raw if raw > 0 else None
    if not isinstance(raw, str) or not raw.strip().isdecimal():
        return None
    try:
        number = int(raw)
    except ValueError:
        return None
    return number if number > 0 else None


def _compact(tags: dict[str, str]) -> dict[str, str]:
    return {k: v for k, v in tags.items() if v}


def _read_github_actions(env: Mapping[str, str]) -> _ReadResult:
    slug = env.get("GITHUB_REPOSITORY", "")
    tags = {
        TAG_REPO: slug,
        TAG_BRANCH: env.get("GITHUB_HEAD_REF") or env.get("GITHUB_REF_NAME", ""),
        TAG_COMMIT: env.get("GITHUB_SHA", ""),
    }
    if env.get("GITHUB_EVENT_NAME", "") not in _GITHUB_PR_EVENTS:
        return None, _compact(tags)

    event_path = env.get("GITHUB_EVENT_PATH", "")
    if not event_path:
        logger.debug("GitHub PR event without GITHUB_EVENT_PATH")
        return None, _compact(tags)
    try:
        event = json.loads(Path(event_path).read_text(encoding="utf-8"))
    except (OSError, ValueError):
        logger.debug("Could not read GitHub event payload %s", event_path, exc_info=True)
        return None, _compact(tags)

    pr = event.get("pull_request") if isinstance(event, dict) else None
    if not isinstance(pr, dict):
        return None, _compact(tags)
    number = _parse_number(pr.get("number"))
    head = pr.get("head") if isinstance(pr.get("head"), dict) else {}
    commit = str(head.get("sha") or tags[TAG_COMMIT])
    branch = str(head.get("ref") or tags[TAG_BRANCH])
    tags.update({TAG_COMMIT: commit, TAG_BRANCH: branch})

    parts = _split_slug(slug)
    if number is None or parts is None:
        logger.debug("Incomplete GitHub PR metadata: repo=%r number=%r", slug, pr.get("number"))
        return None, _compact(tags)

    tags[TAG_PR] = str(number)
    owner, repo = parts
    ctx = PullRequestContext(owner=owner, repo=repo, number=number, commit=commit, branch=branch)
    return ctx, _compact(tags)


def _read_circleci(env: Mapping[str, str]) -> _ReadResult:
    owner = env.get("CIRCLE_PROJECT_USERNAME", "")
    repo = env.get("CIRCLE_PROJECT_REPONAME", "")
    tags = {
        TAG_REPO: f"{owner}/{repo}" if owner and repo else "",
        TAG_BRANCH: env.get("CIRCLE_BRANCH", ""),
        TAG_COMMIT: env.get("CIRCLE_SHA1", ""),
    }
    pr_url = env.get("CIRCLE_PULL_REQUEST", "")
    if not pr_url:
        return None, _compact(tags)

    number = _parse_number(pr_url.rstrip("/").rsplit("/", 1)[-1])
    if number is None or not owner or not repo:
        logger.debug("Incomplete CircleCI PR metadata: %r", pr_url)
        return None, _compact(tags)

    tags[TAG_PR] = str(number)
    ctx = PullRequestContext(
        owner=owner,
        repo=repo,
        number=number,
        commit=tags[TAG_COMMIT],
        branch=tags[TAG_BRANCH],
    )
    return ctx, _compact(tags)


def _read_travis(env: Mapping[str, str]) -> _ReadResult:
    slug = env.get("TRAVIS_REPO_SLUG", "")
    tags = {
        TAG_REPO: slug,
        TAG_BRANCH: env.get("TRAVIS_PULL_REQUEST_BRANCH") or env.get("TRAVIS_BRANCH", ""),
        TAG_COMMIT: env.get("TRAVIS_PULL_REQUEST_SHA") or env.get("TRAVIS_COMMIT", ""),
    }
    # TRAVIS_PULL_REQUEST is the literal string "false" for push builds.
    number = _parse_number(env.get("TRAVIS_PULL_REQUEST"))
    parts = _split_slug(slug)
    if number is None or parts is None:
        return None, _compact(tags)

    tags[TAG_PR] = str(number)
    owner, repo = parts
    ctx = PullRequestContext(
        owner=owner,
        repo=repo,
        number=number,
        commit=tags[TAG_COMMIT],
        branch=tags[TAG_BRANCH],
    )
    return ctx, _compact(tags)


# Ordered: the first marker present decides the CI kind.
CI_READERS: tuple[tuple[CIKind, str, _Reader], ...] = (
    (CIKind.GITHUB_ACTIONS, "GITHUB_ACTIONS", _read_github_actions),
    (CIKind.CIRCLECI, "CIRCLECI", _read_circleci),
    (CIKind.TRAVIS, "TRAVIS", _read_travis),
)


def detect_ci_info(environ: Mapping[str, str] | None = None) -> CIInfo:
    """Inspect *environ* (default: ``os.environ``) for a known CI system."""
    env = os.environ if environ is None else environ
    for kind, marker, reader in CI_READERS:
        if env.get(marker, "").lower() != "true":
            continue
        pull_request, tags = reader(env)
        logger.debug("Detected CI %s (pull request: %s)", kind, pull_request and pull_request.slug)
        return CIInfo(kind=kind, pull_request=pull_request, tags={TAG_CI: kind.value, **tags})
    return CIInfo()
