"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, akita.toml only contains overrides.
An empty file (or no file at all) is a valid configuration.
"""

from __future__ import annotations

from pydantic import BaseModel


class PostmanConfig(BaseModel):
    """[postman] section."""

    model_config = {"frozen": True}

    api_key: str = ""
    environment: str = ""


class ApiConfig(BaseModel):
    """[api] section — Akita API key pair."""

    model_config = {"frozen": True}

    key_id: str = ""
    key_secret: str = ""
