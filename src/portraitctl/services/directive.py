"""DirectiveService — parse and apply layer directives as service operations.

Diagnostics never make an operation fail unless strict mode is on; they are
reported both as structured ``data["diagnostics"]`` and as plain warnings.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from portraitctl.infrastructure.manifest import ManifestError
from portraitctl.services.base import BaseService
from portraitctl.services.engine import LayerDirectiveEngine
from portraitctl.services.portrait import PortraitService
from portraitctl.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path

    from portraitctl.domain.diagnostics import Diagnostic
    from portraitctl.domain.tree import LayerTree
    from portraitctl.plugins.manager import PluginManager

DIAGNOSTICS_ERROR = "DIRECTIVE_DIAGNOSTICS"


class DirectiveService(BaseService):
    """Directive operations for the CLI and embedding hosts."""

    def __init__(self, plugins: PluginManager | None = None, *, strict: bool = False) -> None:
        super().__init__(plugins)
        self._strict = strict
        self._engine = LayerDirectiveEngine(diagnostic_level=logging.DEBUG)

    def parse(self, text: str) -> ServiceResult:
        """Parse *text* without touching any tree."""
        op = "parse_directive"
        parsed = self._engine.parse(text)
        commands = [c.to_dict() for c in parsed.commands]
        if self._strict and parsed.diagnostics:
            return self._strict_failure(op, parsed.diagnostics, extra={"commands": commands})
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "commands": commands,
                "count": len(commands),
                "diagnostics": [d.to_dict() for d in parsed.diagnostics],
            },
            warnings=[d.message for d in parsed.diagnostics],
        )

    def apply(
        self,
        text: str,
        tree: LayerTree,
        *,
        portrait: str = "portrait",
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        """Apply *text* to *tree* and dispatch ``post_apply``."""
        op = "apply_directive"
        warnings = list(warnings or [])
        parsed = self._engine.parse(text)
        report = self._engine.execute(parsed.commands, tree)
        diagnostics = [*parsed.diagnostics, *report.diagnostics]

        applied = [c.to_dict() for c in report.applied]
        diagnostic_dicts = [d.to_dict() for d in diagnostics]
        self._dispatch_event(
            "post_apply",
            {
                "portrait": portrait,
                "directive": text,
                "applied": applied,
                "diagnostics": diagnostic_dicts,
            },
            warnings,
        )
        warnings.extend(d.message for d in diagnostics)

        if self._strict and diagnostics:
            return self._strict_failure(
                op, diagnostics, extra={"applied": applied}, warnings=warnings
            )

        data: dict[str, Any] = {
            "portrait": portrait,
            "commands": [c.to_dict() for c in parsed.commands],
            "applied": applied,
            "diagnostics": diagnostic_dicts,
        }
        snapshot = getattr(tree, "snapshot", None)
        if callable(snapshot):
            data["layers"] = snapshot()
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def apply_to_manifest(self, text: str, path: Path) -> ServiceResult:
        """Load the manifest at *path*, then apply *text* to its tree."""
        try:
            portrait, defaults = PortraitService(self._plugins).open(path)
        except ManifestError as exc:
            return ServiceResult.failure(
                "apply_directive", exc.code, str(exc), detail={"path": str(path)}
            )
        result = self.apply(
            text,
            portrait.tree,
            portrait=portrait.name,
            warnings=[f"default directive: {d.message}" for d in defaults],
        )
        if not result.ok:
            return result
        return result.model_copy(update={"meta": {"source": str(path)}})

    def list_layers(self, tree: LayerTree) -> ServiceResult:
        """Report the current layer state of a tree that supports snapshots."""
        op = "list_layers"
        snapshot = getattr(tree, "snapshot", None)
        if not callable(snapshot):
            return ServiceResult.failure(
                op, "NO_SNAPSHOT", "Tree does not support listing its layers"
            )
        layers = snapshot()
        return ServiceResult(ok=True, op=op, data={"layers": layers, "count": len(layers)})

    @staticmethod
    def _strict_failure(
        op: str,
        diagnostics: list[Diagnostic] | tuple[Diagnostic, ...],
        *,
        extra: dict[str, Any],
        warnings: list[str] | None = None,
    ) -> ServiceResult:
        count = len(diagnostics)
        return ServiceResult.failure(
            op,
            DIAGNOSTICS_ERROR,
            f"Directive produced {count} diagnostic{'s' if count != 1 else ''} in strict mode",
            detail={"diagnostics": [d.to_dict() for d in diagnostics], **extra},
            warnings=warnings if warnings is not None else [d.message for d in diagnostics],
        )
