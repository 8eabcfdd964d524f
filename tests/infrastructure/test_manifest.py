"""Tests for manifest readers and validation."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from portraitctl.infrastructure.manifest import (
    MANIFEST_READERS,
    ManifestError,
    read_json,
    read_toml,
    read_yaml,
    validate_manifest,
)

_YAML = """\
name: villain
default_directive: hide mask
layers:
  - name: mask
  - name: mouth
    children:
      - name: grin
      - name: frown
        visible: false
"""


class TestReaders:
    def test_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "p.toml"
        path.write_text('name = "hero"\n[[layers]]\nname = "a"\n', encoding="utf-8")
        assert read_toml(path) == {"name": "hero", "layers": [{"name": "a"}]}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "p.toml"
        path.write_text("name = \n", encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid TOML") as exc_info:
            read_toml(path)
        assert exc_info.value.code == "INVALID_MANIFEST"
        assert exc_info.value.path == path

    def test_json(self, tmp_path: Path) -> None:
        path = tmp_path / "p.json"
        path.write_text(json.dumps({"layers": [{"name": "a"}]}), encoding="utf-8")
        assert read_json(path) == {"layers": [{"name": "a"}]}

    def test_json_root_must_be_object(self, tmp_path: Path) -> None:
        path = tmp_path / "p.json"
        path.write_text("[1, 2]", encoding="utf-8")
        with pytest.raises(ManifestError, match="must be an object"):
            read_json(path)

    def test_invalid_json(self, tmp_path: Path) -> None:
        path = tmp_path / "p.json"
        path.write_text("{", encoding="utf-8")
        with pytest.raises(ManifestError, match="Invalid JSON"):
            read_json(path)

    def test_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "p.yaml"
        path.write_text(_YAML, encoding="utf-8")
        data = read_yaml(path)
        assert data["name"] == "villain"
        assert data["layers"][1]["children"][1] == {"name": "frown", "visible": False}

    def test_empty_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "p.yml"
        path.write_text("", encoding="utf-8")
        assert read_yaml(path) == {}

    def test_yaml_root_must_be_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "p.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ManifestError, match="must be a mapping"):
            read_yaml(path)

    def test_reader_table(self) -> None:
        assert set(MANIFEST_READERS) == {".toml", ".json", ".yaml", ".yml"}


class TestValidateManifest:
    def test_valid(self, tmp_path: Path) -> None:
        manifest = validate_manifest({"name": "x", "layers": [{"name": "a"}]}, tmp_path / "x")
        assert manifest.name == "x"

    def test_errors_name_location(self, tmp_path: Path) -> None:
        with pytest.raises(ManifestError, match=r"layers\.0\.name") as exc_info:
            validate_manifest({"layers": [{"name": "a/b"}]}, tmp_path / "bad.toml")
        assert "bad.toml" in str(exc_info.value)


class TestUndecodableFiles:
    @pytest.mark.parametrize("filename", ["p.toml", "p.json", "p.yaml"])
    def test_invalid_utf8(self, tmp_path: Path, filename: str) -> None:
        path = tmp_path / filename
        path.write_bytes(b'name = "\xff"\n')
        with pytest.raises(ManifestError, match="not valid UTF-8") as exc_info:
            MANIFEST_READERS[path.suffix](path)
        assert exc_info.value.code == "INVALID_MANIFEST"

    def test_unreadable_path(self, tmp_path: Path) -> None:
        # A directory passes the suffix lookup but cannot be read as text.
        path = tmp_path / "dir.toml"
        path.mkdir()
        with pytest.raises(ManifestError, match="Cannot read manifest"):
            read_toml(path)
