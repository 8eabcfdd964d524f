"""Pluggy hook specifications for portraitctl.

One loading hook lets plugins teach portraitctl new manifest formats.
One event hook fires after a directive has been applied to a portrait.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pluggy

hookspec = pluggy.HookspecMarker("portraitctl")


class PortraitctlHookSpec:
    """Hook specifications for the portraitctl plugin system."""

    @hookspec(firstresult=True)
    def load_portrait_manifest(self, path: Path) -> dict[str, Any] | None:
        """Parse *path* into raw manifest data.

        Return None when the file format is not handled by this plugin.
        The first non-None result wins.
        """

    @hookspec
    def post_apply(
        self,
        portrait: str,
        directive: str,
        applied: list[dict[str, Any]],
        diagnostics: list[dict[str, Any]],
    ) -> None:
        """Called after a directive is applied to a portrait."""
