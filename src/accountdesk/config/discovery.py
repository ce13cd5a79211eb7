"""Locate accountdesk.toml.

``ACCOUNTDESK_CONFIG`` wins when set (a missing file there means "no
config", not "keep searching"). Otherwise walk up from the start
directory the way git looks for ``.git``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "accountdesk.toml"
CONFIG_ENV_VAR = "ACCOUNTDESK_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the nearest accountdesk.toml at or above *start*, or None."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        return candidate if candidate.is_file() else None

    origin = (start or Path.cwd()).resolve()
    for directory in (origin, *origin.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
