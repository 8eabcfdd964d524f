"""Built-in manifest formats: TOML, JSON, and YAML.

Registered with ``trylast`` so third-party plugins can take over a suffix
by implementing ``load_portrait_manifest`` themselves.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import pluggy

from portraitctl.infrastructure.manifest import MANIFEST_READERS

hookimpl = pluggy.HookimplMarker("portraitctl")

logger = logging.getLogger(__name__)


class ManifestFormatsPlugin:
    """Reads manifests by file suffix."""

    @hookimpl(trylast=True)
    def load_portrait_manifest(self, path: Path) -> dict[str, Any] | None:
        reader = MANIFEST_READERS.get(path.suffix.lower())
        if reader is None:
            return None
        logger.debug("Reading %s manifest %s", path.suffix.lower(), path)
        return reader(path)
