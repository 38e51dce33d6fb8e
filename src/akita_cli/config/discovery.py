"""Locate ``akita.toml``.

``AKITA_CONFIG`` names the file outright. Otherwise the search walks up from
the working directory and stops at the enclosing git checkout, so a CI job
never reads a config file that lives outside the repository it builds.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "akita.toml"
CONFIG_ENV_VAR = "AKITA_CONFIG"


def find_config(
    start: Path | None = None, environ: Mapping[str, str] | None = None
) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None."""
    env = os.environ if environ is None else environ
    explicit = env.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        if not path.is_file():
            logger.warning("%s=%s is not a file, ignoring it", CONFIG_ENV_VAR, explicit)
            return None
        return path

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
        if (directory / ".git").exists():
            logger.debug("No %s up to repository root %s", CONFIG_FILENAME, directory)
            break
    return None
