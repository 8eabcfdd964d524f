"""PortraitService — load manifests into in-memory layer trees."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from portraitctl.infrastructure.layer_tree import InMemoryLayerTree
from portraitctl.infrastructure.manifest import (
    MANIFEST_READERS,
    ManifestError,
    validate_manifest,
)
from portraitctl.services.base import BaseService
from portraitctl.services.engine import LayerDirectiveEngine
from portraitctl.services.result import ServiceResult

if TYPE_CHECKING:
    from portraitctl.domain.diagnostics import Diagnostic
    from portraitctl.domain.portrait import PortraitManifest

logger = logging.getLogger(__name__)


@dataclass
class Portrait:
    """A manifest together with the live tree built from it."""

    manifest: PortraitManifest
    tree: InMemoryLayerTree
    source: Path

    @property
    def name(self) -> str:
        return self.manifest.name


class PortraitService(BaseService):
    """Open portrait manifests and report their layers."""

    def open(self, path: Path) -> tuple[Portrait, list[Diagnostic]]:
        """Read, validate, and build *path*, then apply its default directive.

        Returns the portrait and any diagnostics from the default directive.
        Raises :class:`ManifestError` if the file is missing, in an unknown
        format, or invalid.
        """
        if not path.is_file():
            raise ManifestError(path, "Manifest file not found", code="MANIFEST_NOT_FOUND")

        data = self._read(path)
        if data is None:
            raise ManifestError(
                path,
                f"Unsupported manifest format {path.suffix or '(none)'!r}",
                code="UNSUPPORTED_FORMAT",
            )
        manifest = validate_manifest(data, path)
        portrait = Portrait(
            manifest=manifest,
            tree=InMemoryLayerTree.from_specs(manifest.layers),
            source=path,
        )
        logger.debug("Loaded portrait %s from %s", portrait.name, path)

        diagnostics: list[Diagnostic] = []
        if manifest.default_directive.strip():
            engine = LayerDirectiveEngine(diagnostic_level=logging.DEBUG)
            report = engine.run(manifest.default_directive, portrait.tree)
            diagnostics = report.diagnostics
        return portrait, diagnostics

    def load(self, path: Path) -> ServiceResult:
        """Load a manifest and list its layers after the default directive."""
        op = "load_portrait"
        try:
            portrait, diagnostics = self.open(path)
        except ManifestError as exc:
            return ServiceResult.failure(op, exc.code, str(exc), detail={"path": str(path)})

        layers = portrait.tree.snapshot()
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "portrait": portrait.name,
                "layers": layers,
                "count": len(layers),
            },
            warnings=[f"default directive: {d.message}" for d in diagnostics],
            meta={"source": str(path)},
        )

    def _read(self, path: Path) -> dict | None:
        if self._plugins is not None:
            return self._plugins.hook.load_portrait_manifest(path=path)
        reader = MANIFEST_READERS.get(path.suffix.lower())
        return reader(path) if reader is not None else None
