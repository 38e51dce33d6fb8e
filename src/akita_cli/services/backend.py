"""BackendService — report which backend this process talks to."""

from __future__ import annotations

from akita_cli.config.credentials import postman_credentials
from akita_cli.domain.backends import domain_to_host
from akita_cli.services.base import BaseService
from akita_cli.services.result import ServiceResult


class BackendService(BaseService):
    def describe(self) -> ServiceResult:
        """Return the resolved domain, its host and how it was chosen."""
        if self._settings.domain:
            source = "override"
        elif postman_credentials(self._settings).api_key:
            source = "postman"
        else:
            source = "default"
        return ServiceResult.success(
            "domain", domain=self._domain, host=domain_to_host(self._domain), source=source
        )
