"""Portrait manifest file I/O.

Readers turn a file into raw data; :func:`validate_manifest` turns raw data
into a :class:`PortraitManifest`. Format selection happens in the plugin
layer so third-party plugins can add formats.
"""

from __future__ import annotations

import json
import tomllib
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import ValidationError
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from portraitctl.domain.portrait import PortraitManifest


class ManifestError(Exception):
    """A manifest file could not be read or validated."""

    def __init__(self, path: Path, message: str, *, code: str = "INVALID_MANIFEST") -> None:
        super().__init__(f"{path}: {message}")
        self.path = path
        self.code = code


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except UnicodeDecodeError as exc:
        raise ManifestError(path, f"Manifest is not valid UTF-8: {exc}") from exc
    except OSError as exc:
        raise ManifestError(path, f"Cannot read manifest: {exc.strerror or exc}") from exc


def read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(_read_text(path))
    except tomllib.TOMLDecodeError as exc:
        raise ManifestError(path, f"Invalid TOML: {exc}") from exc


def read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(_read_text(path))
    except json.JSONDecodeError as exc:
        raise ManifestError(path, f"Invalid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(path, "Manifest root must be an object")
    return data


def read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = YAML(typ="safe").load(_read_text(path))
    except YAMLError as exc:
        raise ManifestError(path, f"Invalid YAML: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ManifestError(path, "Manifest root must be a mapping")
    return data


# Map lowercase file suffix to reader.
MANIFEST_READERS: dict[str, Callable[[Path], dict[str, Any]]] = {
    ".toml": read_toml,
    ".json": read_json,
    ".yaml": read_yaml,
    ".yml": read_yaml,
}


def validate_manifest(data: dict[str, Any], path: Path) -> PortraitManifest:
    """Validate raw manifest data, wrapping pydantic errors in ManifestError."""
    try:
        return PortraitManifest.model_validate(data)
    except ValidationError as exc:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in exc.errors()
        )
        raise ManifestError(path, details) from exc
