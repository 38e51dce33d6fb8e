"""Exception hierarchy for akita.

Every error raised below a command derives from :class:`AkitaError`, which
is a ``click.ClickException`` so Click prints ``Error: <message>`` and exits
with status 1 without a traceback.
"""

from __future__ import annotations

import click


class AkitaError(click.ClickException):
    """Base class for user-facing akita failures."""


class BackendResponseError(AkitaError):
    """The backend answered, but not with something we understand."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthorizationCheckError(AkitaError):
    """The backend could not confirm whether a pull request is Akita-enabled.

    The underlying cause is chained via ``raise ... from exc``.
    """

    def __init__(self, cause: str) -> None:
        super().__init__(f"failed to determine whether GitHub PR is Akita-enabled: {cause}")
