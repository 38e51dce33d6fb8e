"""Persistent client ID.

The backend correlates calls from one installation by its client ID, so the
ID is generated on first use and kept in ``~/.akita/client_id``. The
``AKITA_HOME`` env var moves that directory.
"""

from __future__ import annotations

import logging
import os
import uuid
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

AKITA_HOME_ENV_VAR = "AKITA_HOME"
CLIENT_ID_FILENAME = "client_id"


def akita_home(environ: Mapping[str, str] | None = None) -> Path:
    env = os.environ if environ is None else environ
    override = env.get(AKITA_HOME_ENV_VAR)
    return Path(override) if override else Path.home() / ".akita"


def _valid(candidate: str) -> bool:
    try:
        uuid.UUID(candidate)
    except ValueError:
        return False
    return True


def load_client_id(home: Path | None = None) -> str:
    """Return the stored client ID, creating and storing one if needed.

    An unreadable or unwritable home directory (read-only CI runners) still
    yields a usable ID; it just does not survive the process.
    """
    path = (home or akita_home()) / CLIENT_ID_FILENAME
    try:
        stored = path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        stored = ""
    except OSError:
        logger.debug("Could not read client ID from %s", path, exc_info=True)
        return str(uuid.uuid4())
    if stored and _valid(stored):
        return stored

    client_id = str(uuid.uuid4())
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(client_id + "\n", encoding="utf-8")
    except OSError:
        logger.debug("Could not store client ID in %s", path, exc_info=True)
    return client_id
