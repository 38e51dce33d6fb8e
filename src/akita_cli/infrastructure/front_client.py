"""HTTP client for the Akita front-end API.

Only the pull-request enablement query lives here. Each call opens its own
``httpx.Client`` in a ``with`` block on a worker thread, so the caller waits
at most the call's timeout and the connection pool is released on every
exit path.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from typing import Any

import httpx

from akita_cli import __version__
from akita_cli.domain.backends import domain_to_host
from akita_cli.domain.ci import PullRequestContext
from akita_cli.errors import BackendResponseError

logger = logging.getLogger(__name__)

CLIENT_ID_HEADER = "X-Akita-Client-ID"
POSTMAN_API_KEY_HEADER = "x-api-key"
DEFAULT_TIMEOUT_SECONDS = 10.0


class FrontClient:
    """Talks to the backend selected by *domain*.

    Args:
        domain: Backend domain; converted with :func:`domain_to_host`.
        client_id: Sent on every request so the backend can correlate calls.
        api_key_id: Akita API key ID (HTTP basic auth user).
        api_key_secret: Akita API key secret (HTTP basic auth password).
        postman_api_key: Postman API key, sent as ``x-api-key``.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        domain: str,
        client_id: str,
        *,
        api_key_id: str = "",
        api_key_secret: str = "",
        postman_api_key: str = "",
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.host = domain_to_host(domain)
        self.base_url = f"https://{self.host}"
        self._client_id = client_id
        self._auth = httpx.BasicAuth(api_key_id, api_key_secret) if api_key_id else None
        self._postman_api_key = postman_api_key
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"akita-cli/{__version__}",
            CLIENT_ID_HEADER: self._client_id,
        }
        if self._postman_api_key:
            headers[POSTMAN_API_KEY_HEADER] = self._postman_api_key
        return headers

    def _client(self, timeout: float) -> httpx.Client:
        kwargs: dict[str, Any] = {
            "base_url": self.base_url,
            "headers": self._headers(),
            "timeout": httpx.Timeout(timeout),
        }
        if self._auth is not None:
            kwargs["auth"] = self._auth
        if self._transport is not None:
            kwargs["transport"] = self._transport
        return httpx.Client(**kwargs)

    def get_github_pr_enabled_state(
        self,
        pr: PullRequestContext,
        *,
        team: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ) -> bool:
        """Ask whether the user who opened *pr* belongs to ``<owner>/<team>``.

        *timeout* bounds the whole call, from connecting to the last byte of
        the body. A backend that trickles its response is cut off too.

        Raises:
            httpx.HTTPError: Transport failure or timeout.
            BackendResponseError: Non-2xx status or unexpected payload.
        """
        path = f"/v1/github/repos/{pr.owner}/{pr.repo}/pulls/{pr.number}/enabled"
        deadline = time.monotonic() + timeout
        outcome: dict[str, Any] = {}

        def fetch() -> None:
            try:
                outcome["response"] = self._fetch(path, {"team": team}, timeout, deadline)
            except Exception as exc:
                outcome["error"] = exc

        # Daemon worker: an abandoned request never keeps the process alive.
        worker = threading.Thread(target=fetch, name="akita-pr-enabled", daemon=True)
        worker.start()
        worker.join(timeout)
        if worker.is_alive():
            raise httpx.TimeoutException(f"no answer from {self.host} within {timeout:g}s")
        if "error" in outcome:
            raise outcome["error"]

        status_code, body = outcome["response"]
        logger.debug("GET %s%s -> %d", self.host, path, status_code)
        if status_code >= 400:
            msg = f"backend returned HTTP {status_code} for {pr.slug}"
            raise BackendResponseError(msg, status_code=status_code)
        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise BackendResponseError(f"backend returned invalid JSON for {pr.slug}") from exc

        enabled = payload.get("enabled") if isinstance(payload, dict) else None
        if not isinstance(enabled, bool):
            raise BackendResponseError(f"backend response for {pr.slug} lacks 'enabled' flag")
        return enabled

    def _fetch(
        self, path: str, params: dict[str, str], timeout: float, deadline: float
    ) -> tuple[int, bytes]:
        """Stream one GET, giving up once *deadline* passes between chunks."""
        chunks: list[bytes] = []
        with (
            self._client(timeout) as client,
            client.stream("GET", path, params=params) as response,
        ):
            for chunk in response.iter_bytes():
                if time.monotonic() > deadline:
                    msg = f"response from {self.host} exceeded {timeout:g}s"
                    raise httpx.ReadTimeout(msg, request=response.request)
                chunks.append(chunk)
            return response.status_code, b"".join(chunks)
