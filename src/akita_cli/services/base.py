"""BaseService — shared foundation for akita services.

Every service receives the frozen settings and the backend domain that the
CLI resolved for this process. Services never resolve the domain themselves.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from akita_cli.config.settings import AkitaSettings


class BaseService:
    """Base for service-layer classes.

    Usage::

        class CIService(BaseService):
            def info(self) -> ServiceResult:
                ...
    """

    def __init__(self, settings: AkitaSettings, domain: str) -> None:
        self._settings = settings
        self._domain = domain
