"""CIService — report the detected CI context and its authorization state."""

from __future__ import annotations

from typing import TYPE_CHECKING

from akita_cli.errors import AuthorizationCheckError
from akita_cli.infrastructure.ci_env import detect_ci_info
from akita_cli.services.authorization import AKITA_GITHUB_USERS_TEAM_SLUG, is_pr_akita_enabled
from akita_cli.services.base import BaseService
from akita_cli.services.result import ServiceResult

if TYPE_CHECKING:
    import httpx

    from akita_cli.domain.ci import CIInfo


class CIService(BaseService):
    """Read-only view of the CI environment for ``akita ci``."""

    def info(self, ci_info: CIInfo | None = None) -> ServiceResult:
        """Describe the CI system and pull request, if any."""
        info = ci_info if ci_info is not None else detect_ci_info()
        pr = info.pull_request
        return ServiceResult.success(
            "ci_info",
            ci=info.kind.value,
            pull_request=pr.model_dump() if pr is not None else None,
            tags=dict(info.tags),
        )

    def check(
        self,
        ci_info: CIInfo | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> ServiceResult:
        """Run the authorization check for the detected pull request."""
        op = "ci_check"
        info = ci_info if ci_info is not None else detect_ci_info()
        pr = info.pull_request
        if pr is None:
            return ServiceResult.failure(
                op,
                "NO_PULL_REQUEST",
                "No GitHub pull request detected in the CI environment",
                ci=info.kind.value,
            )

        try:
            enabled = is_pr_akita_enabled(
                pr,
                domain=self._domain,
                client_id=self._settings.client_id,
                settings=self._settings,
                transport=transport,
            )
        except AuthorizationCheckError as exc:
            return ServiceResult.failure(
                op, "AUTHORIZATION_UNCONFIRMABLE", exc.message, pull_request=pr.slug
            )

        return ServiceResult.success(
            op,
            pull_request=pr.slug,
            team=f"{pr.owner}/{AKITA_GITHUB_USERS_TEAM_SLUG}",
            enabled=enabled,
        )
