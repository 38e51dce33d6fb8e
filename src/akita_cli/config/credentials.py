"""Stored credential lookup.

The well-known ``POSTMAN_API_KEY`` and ``POSTMAN_ENV`` variables take
priority over the ``[postman]`` section of the settings.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from typing import TYPE_CHECKING

from akita_cli.domain.backends import PostmanCredentials

if TYPE_CHECKING:
    from akita_cli.config.settings import AkitaSettings

POSTMAN_API_KEY_ENV_VAR = "POSTMAN_API_KEY"
POSTMAN_ENV_ENV_VAR = "POSTMAN_ENV"


def postman_credentials(
    settings: AkitaSettings, environ: Mapping[str, str] | None = None
) -> PostmanCredentials:
    """Return the Postman API key and environment in effect."""
    env = os.environ if environ is None else environ
    return PostmanCredentials(
        api_key=env.get(POSTMAN_API_KEY_ENV_VAR) or settings.postman.api_key,
        environment=env.get(POSTMAN_ENV_ENV_VAR) or settings.postman.environment,
    )
