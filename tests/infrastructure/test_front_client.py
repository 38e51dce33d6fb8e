"""Tests for the front-end HTTP client."""

import time
from collections.abc import Iterator

import httpx
import pytest

from akita_cli.domain.ci import PullRequestContext
from akita_cli.errors import BackendResponseError
from akita_cli.infrastructure.front_client import CLIENT_ID_HEADER, FrontClient
from tests.conftest import backend_transport


class TestFrontClient:
    def test_base_url_uses_host_mapping(self) -> None:
        assert FrontClient("akita.software", "cid").base_url == "https://api.akita.software"
        assert FrontClient("localhost:50443", "cid").base_url == "https://localhost:50443"

    def test_enabled_request_shape(self, pull_request: PullRequestContext) -> None:
        requests: list[httpx.Request] = []
        client = FrontClient(
            "akita.software",
            "cid-1",
            transport=backend_transport(payload={"enabled": True}, requests=requests),
        )
        assert client.get_github_pr_enabled_state(pull_request, team="akita-users") is True

        assert len(requests) == 1
        req = requests[0]
        assert req.method == "GET"
        assert req.url.host == "api.akita.software"
        assert req.url.path == "/v1/github/repos/acme/widgets/pulls/42/enabled"
        assert req.url.params["team"] == "akita-users"
        assert req.headers[CLIENT_ID_HEADER] == "cid-1"
        assert "authorization" not in req.headers

    def test_disabled(self, pull_request: PullRequestContext) -> None:
        client = FrontClient("x.test", "cid", transport=backend_transport(payload={"enabled": False}))
        assert client.get_github_pr_enabled_state(pull_request, team="akita-users") is False

    def test_credentials_are_sent(self, pull_request: PullRequestContext) -> None:
        requests: list[httpx.Request] = []
        client = FrontClient(
            "x.test",
            "cid",
            api_key_id="apk_1",
            api_key_secret="s3cret",
            postman_api_key="PMAK-1",
            transport=backend_transport(payload={"enabled": True}, requests=requests),
        )
        client.get_github_pr_enabled_state(pull_request, team="akita-users")
        headers = requests[0].headers
        assert headers["authorization"].startswith("Basic ")
        assert headers["x-api-key"] == "PMAK-1"

    def test_http_error_status(self, pull_request: PullRequestContext) -> None:
        client = FrontClient("x.test", "cid", transport=backend_transport(503, {"message": "down"}))
        with pytest.raises(BackendResponseError) as exc_info:
            client.get_github_pr_enabled_state(pull_request, team="akita-users")
        assert exc_info.value.status_code == 503

    @pytest.mark.parametrize("payload", [{}, {"enabled": "yes"}, ["enabled"], "not json"])
    def test_malformed_payload(self, pull_request: PullRequestContext, payload: object) -> None:
        client = FrontClient("x.test", "cid", transport=backend_transport(payload=payload))
        with pytest.raises(BackendResponseError):
            client.get_github_pr_enabled_state(pull_request, team="akita-users")

    def test_transport_error_propagates(self, pull_request: PullRequestContext) -> None:
        transport = backend_transport(raises=httpx.ConnectError("refused"))
        client = FrontClient("x.test", "cid", transport=transport)
        with pytest.raises(httpx.ConnectError):
            client.get_github_pr_enabled_state(pull_request, team="akita-users")


class _TrickleStream(httpx.SyncByteStream):
    """Response body that arrives one byte at a time."""

    def __init__(self, body: bytes, delay: float) -> None:
        self._body = body
        self._delay = delay

    def __iter__(self) -> Iterator[bytes]:
        for i in range(len(self._body)):
            time.sleep(self._delay)
            yield self._body[i : i + 1]


class TestOverallTimeout:
    def test_trickling_body_is_cut_off(self, pull_request: PullRequestContext) -> None:
        body = b'{"enabled": true}'

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=_TrickleStream(body, 0.25))

        client = FrontClient("x.test", "cid", transport=httpx.MockTransport(handler))
        started = time.monotonic()
        with pytest.raises(httpx.TimeoutException):
            client.get_github_pr_enabled_state(pull_request, team="akita-users", timeout=1.0)
        assert time.monotonic() - started < 2.0

    def test_stalled_backend_is_abandoned(self, pull_request: PullRequestContext) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            time.sleep(5.0)
            return httpx.Response(200, json={"enabled": True})

        client = FrontClient("x.test", "cid", transport=httpx.MockTransport(handler))
        started = time.monotonic()
        with pytest.raises(httpx.TimeoutException):
            client.get_github_pr_enabled_state(pull_request, team="akita-users", timeout=0.5)
        assert time.monotonic() - started < 2.0

    def test_fast_trickle_within_deadline(self, pull_request: PullRequestContext) -> None:
        body = b'{"enabled": false}'

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, stream=_TrickleStream(body, 0.001))

        client = FrontClient("x.test", "cid", transport=httpx.MockTransport(handler))
        assert client.get_github_pr_enabled_state(pull_request, team="akita-users") is False
