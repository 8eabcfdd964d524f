"""Locate ``portraitctl.toml``.

``PORTRAITCTL_CONFIG`` names the file explicitly; otherwise the nearest
``portraitctl.toml`` in the start directory or one of its parents wins, the
way git finds ``.git/``.
"""

from __future__ import annotations

import os
from pathlib import Path

CONFIG_FILENAME = "portraitctl.toml"
CONFIG_ENV_VAR = "PORTRAITCTL_CONFIG"


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), or None.

    An explicit ``PORTRAITCTL_CONFIG`` that points at a missing file yields
    None rather than falling back to the walk-up search.
    """
    explicit = os.environ.get(CONFIG_ENV_VAR)
    if explicit:
        path = Path(explicit)
        return path if path.is_file() else None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None
