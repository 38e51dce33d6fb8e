"""Pull-request authorization check against the Akita backend.

A GitHub PR is *Akita-enabled* when the user that opened it is a member of
the ``akita-users`` team of the PR's owning organization.

INVARIANT: A failed check is never read as either answer. Timeouts,
transport errors and malformed responses all raise
:class:`AuthorizationCheckError`; the caller picks the policy.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx

from akita_cli.config.credentials import postman_credentials
from akita_cli.errors import AuthorizationCheckError, BackendResponseError
from akita_cli.infrastructure.front_client import FrontClient

if TYPE_CHECKING:
    from akita_cli.config.settings import AkitaSettings
    from akita_cli.domain.ci import PullRequestContext

logger = logging.getLogger(__name__)

AKITA_GITHUB_USERS_TEAM_SLUG = "akita-users"
AUTHORIZATION_TIMEOUT_SECONDS = 10.0


def is_pr_akita_enabled(
    pr: PullRequestContext,
    *,
    domain: str,
    client_id: str,
    settings: AkitaSettings,
    timeout: float = AUTHORIZATION_TIMEOUT_SECONDS,
    transport: httpx.BaseTransport | None = None,
) -> bool:
    """Query the backend to determine whether *pr* is Akita-enabled.

    Returns True without any network I/O when
    ``test_only_disable_github_teams_check`` is set.

    Raises:
        AuthorizationCheckError: The answer could not be obtained. The
            original exception is chained as ``__cause__``.
    """
    if settings.test_only_disable_github_teams_check:
        logger.debug("GitHub teams check disabled, treating %s as enabled", pr.slug)
        return True

    client = FrontClient(
        domain,
        client_id,
        api_key_id=settings.api.key_id,
        api_key_secret=settings.api.key_secret,
        postman_api_key=postman_credentials(settings).api_key,
        transport=transport,
    )
    try:
        enabled = client.get_github_pr_enabled_state(
            pr, team=AKITA_GITHUB_USERS_TEAM_SLUG, timeout=timeout
        )
    except httpx.TimeoutException as exc:
        raise AuthorizationCheckError(f"request to {client.host} timed out") from exc
    except httpx.HTTPError as exc:
        raise AuthorizationCheckError(f"request to {client.host} failed: {exc}") from exc
    except BackendResponseError as exc:
        raise AuthorizationCheckError(exc.message) from exc

    logger.debug("PR %s Akita-enabled: %s", pr.slug, enabled)
    return enabled
