"""Tests for PluginManager — registration and hook relay."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pluggy

from portraitctl.plugins.manager import PluginManager

hookimpl = pluggy.HookimplMarker("portraitctl")


class _DummyPlugin:
    @hookimpl
    def post_apply(self, portrait, directive, applied, diagnostics) -> None:
        pass


class _OverrideTomlPlugin:
    """Takes over .toml files before the built-in reader."""

    @hookimpl
    def load_portrait_manifest(self, path: Path) -> dict[str, Any] | None:
        if path.suffix == ".toml":
            return {"name": "overridden"}
        return None


class TestPluginManager:
    def test_hook_relay_accessible(self) -> None:
        pm = PluginManager()
        assert hasattr(pm.hook, "load_portrait_manifest")
        assert hasattr(pm.hook, "post_apply")

    def test_builtin_registered(self, tmp_path: Path) -> None:
        names = PluginManager().discover_and_load(local_dir=tmp_path)
        assert "manifest-formats" in names

    def test_register_named(self, tmp_path: Path) -> None:
        pm = PluginManager()
        pm.register(_DummyPlugin(), name="dummy")
        assert "dummy" in pm.discover_and_load(local_dir=tmp_path)

    def test_register_default_name(self, tmp_path: Path) -> None:
        pm = PluginManager()
        pm.register(_DummyPlugin())
        assert "_DummyPlugin" in pm.discover_and_load(local_dir=tmp_path)

    def test_third_party_reader_wins(self, tmp_path: Path) -> None:
        path = tmp_path / "p.toml"
        path.write_text('name = "from-file"\n', encoding="utf-8")
        pm = PluginManager()
        pm.register(_OverrideTomlPlugin())
        assert pm.hook.load_portrait_manifest(path=path) == {"name": "overridden"}

    def test_falls_through_to_builtin(self, tmp_path: Path) -> None:
        path = tmp_path / "p.json"
        path.write_text('{"name": "from-file"}', encoding="utf-8")
        pm = PluginManager()
        pm.register(_OverrideTomlPlugin())
        assert pm.hook.load_portrait_manifest(path=path) == {"name": "from-file"}
