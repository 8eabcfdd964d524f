"""Shared pytest fixtures and test helpers for portraitctl tests."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from portraitctl.domain.portrait import PortraitManifest
from portraitctl.infrastructure.layer_tree import InMemoryLayerTree

HERO_TOML = """\
name = "hero"
default_directive = "set face/neutral"

[[layers]]
name = "body"
children = [
    { name = "torso" },
    { name = "torso_damaged", visible = false },
]

[[layers]]
name = "face"
children = [
    { name = "neutral", visible = false },
    { name = "angry" },
    { name = "sad" },
]

[[layers]]
name = "scar_left"
visible = false

[[layers]]
name = "eyepatch"
"""


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def hero_tree() -> InMemoryLayerTree:
    """The hero portrait as a tree, before any default directive."""
    import tomllib

    manifest = PortraitManifest.model_validate(tomllib.loads(HERO_TOML))
    return InMemoryLayerTree.from_specs(manifest.layers)


@pytest.fixture
def project_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary project with a hero ``portrait.toml`` and no config file.

    Clears config env vars so the walk-up discovery stays inside tmp_path.
    """
    monkeypatch.delenv("PORTRAITCTL_CONFIG", raising=False)
    monkeypatch.delenv("PORTRAITCTL_STRICT", raising=False)
    (tmp_path / "portrait.toml").write_text(HERO_TOML, encoding="utf-8")
    return tmp_path


@pytest.fixture
def _isolated_project(project_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to the temp project so the CLI finds its manifest.

    Use via ``@pytest.mark.usefixtures("_isolated_project")`` on command
    test classes.
    """
    monkeypatch.chdir(project_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_tree(layers: Iterable[dict[str, Any]]) -> InMemoryLayerTree:
    """Build an in-memory tree from plain layer dicts."""
    manifest = PortraitManifest.model_validate({"layers": list(layers)})
    return InMemoryLayerTree.from_specs(manifest.layers)


def visibility(tree: InMemoryLayerTree) -> dict[str, bool]:
    """Map every node path to its own ``visible`` flag."""
    return {node.path: node.visible for node in tree.walk()}
