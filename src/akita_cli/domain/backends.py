"""Backend domain resolution.

Picks which backend the CLI talks to. Priority (highest to lowest):
  1. An explicit override (``--domain`` / ``AKITA_DOMAIN``), used verbatim.
  2. The Postman environment, when a Postman API key is configured.
  3. The Akita backend, ``akita.software``.

A *domain* is a logical backend identifier; :func:`domain_to_host` turns it
into the host name to connect to. Only the two legacy Akita spellings need
an ``api.`` prefix; every other domain is already a host.

No network I/O happens here.
"""

from __future__ import annotations

import logging
from enum import StrEnum

from pydantic import BaseModel

logger = logging.getLogger(__name__)

AKITA_DOMAIN = "akita.software"


class PostmanEnvironment(StrEnum):
    """Postman backend tiers, keyed by the upper-cased environment tag."""

    UNSET = ""
    PRODUCTION = "PRODUCTION"
    STAGE = "STAGE"
    PREVIEW = "PREVIEW"
    BETA = "BETA"
    DEV = "DEV"


POSTMAN_ENVIRONMENT_HOSTS: dict[PostmanEnvironment, str] = {
    PostmanEnvironment.UNSET: "api.observability.postman.com",
    PostmanEnvironment.PRODUCTION: "api.observability.postman.com",
    PostmanEnvironment.STAGE: "api.observability.postman-stage.com",
    PostmanEnvironment.PREVIEW: "api.observability.postman-preview.com",
    PostmanEnvironment.BETA: "api.observability.postman-beta.com",
    PostmanEnvironment.DEV: "localhost:50443",
}

_DOMAIN_HOSTS: dict[str, str] = {
    "akita.software": "api.akita.software",
    "staging.akita.software": "api.staging.akita.software",
}


class PostmanCredentials(BaseModel):
    """Stored Postman API key and the environment it belongs to."""

    model_config = {"frozen": True}

    api_key: str = ""
    environment: str = ""


def default_domain(credentials: PostmanCredentials) -> str:
    """Return the domain implied by the stored credentials alone."""
    if not credentials.api_key:
        logger.debug("No Postman API key, using Akita backend")
        return AKITA_DOMAIN

    try:
        env = PostmanEnvironment(credentials.environment.upper())
    except ValueError:
        logger.warning("Unknown Postman environment %r, using production", credentials.environment)
        return POSTMAN_ENVIRONMENT_HOSTS[PostmanEnvironment.PRODUCTION]

    domain = POSTMAN_ENVIRONMENT_HOSTS[env]
    logger.debug("Selected %s for Postman environment %r", domain, env.value or "default")
    return domain


def resolve_domain(override: str | None, credentials: PostmanCredentials) -> str:
    """Resolve the backend domain for this process.

    A non-empty *override* wins unconditionally and is not validated.
    """
    if override:
        return override
    return default_domain(credentials)


def domain_to_host(domain: str) -> str:
    """Convert a domain to the host to contact.

    Idempotent: canonical hosts pass through unchanged.
    """
    return _DOMAIN_HOSTS.get(domain, domain)
