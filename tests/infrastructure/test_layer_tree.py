"""Tests for InMemoryLayerTree — path resolution, siblings, snapshots."""

from __future__ import annotations

from portraitctl.domain.directive import parse_directive
from portraitctl.domain.tree import LayerTree, execute_commands
from portraitctl.infrastructure.layer_tree import InMemoryLayerTree, LayerNode
from tests.conftest import make_tree, visibility


class TestResolve:
    def test_top_level(self, hero_tree: InMemoryLayerTree) -> None:
        node = hero_tree.resolve("eyepatch")
        assert node is not None
        assert node.name == "eyepatch"

    def test_nested(self, hero_tree: InMemoryLayerTree) -> None:
        node = hero_tree.resolve("face/angry")
        assert node is not None
        assert node.path == "face/angry"

    def test_missing(self, hero_tree: InMemoryLayerTree) -> None:
        assert hero_tree.resolve("face/happy") is None
        assert hero_tree.resolve("nope/angry") is None

    def test_dot_and_empty_parts_ignored(self, hero_tree: InMemoryLayerTree) -> None:
        node = hero_tree.resolve("./face//angry/")
        assert node is not None
        assert node.path == "face/angry"

    def test_parent_parts(self, hero_tree: InMemoryLayerTree) -> None:
        node = hero_tree.resolve("face/angry/../sad")
        assert node is not None
        assert node.path == "face/sad"

    def test_parent_above_root(self, hero_tree: InMemoryLayerTree) -> None:
        assert hero_tree.resolve("..") is None
        assert hero_tree.resolve("../face") is None

    def test_names_are_exact(self, hero_tree: InMemoryLayerTree) -> None:
        assert hero_tree.resolve("Face/Angry") is None


class TestCapability:
    def test_satisfies_protocol(self, hero_tree: InMemoryLayerTree) -> None:
        assert isinstance(hero_tree, LayerTree)

    def test_siblings_include_self(self, hero_tree: InMemoryLayerTree) -> None:
        angry = hero_tree.resolve("face/angry")
        assert angry is not None
        names = [n.name for n in hero_tree.siblings(angry)]
        assert names == ["neutral", "angry", "sad"]

    def test_root_siblings(self) -> None:
        tree = InMemoryLayerTree()
        assert tree.siblings(tree.root) == [tree.root]

    def test_groups_are_not_layers(self, hero_tree: InMemoryLayerTree) -> None:
        assert hero_tree.is_layer_node(hero_tree.resolve("face")) is False
        assert hero_tree.is_layer_node(hero_tree.resolve("face/sad")) is True
        assert hero_tree.is_layer_node(hero_tree.root) is False
        assert hero_tree.is_layer_node("face") is False

    def test_show_hide(self, hero_tree: InMemoryLayerTree) -> None:
        scar = hero_tree.resolve("scar_left")
        assert scar is not None
        hero_tree.show(scar)
        assert scar.visible is True
        hero_tree.hide(scar)
        assert scar.visible is False


class TestInspection:
    def test_walk_is_depth_first(self, hero_tree: InMemoryLayerTree) -> None:
        paths = [n.path for n in hero_tree.walk()]
        assert paths == [
            "body",
            "body/torso",
            "body/torso_damaged",
            "face",
            "face/neutral",
            "face/angry",
            "face/sad",
            "scar_left",
            "eyepatch",
        ]

    def test_layers_excludes_groups(self, hero_tree: InMemoryLayerTree) -> None:
        assert "face" not in [n.path for n in hero_tree.layers()]
        assert len(hero_tree.layers()) == 7

    def test_shown_respects_ancestors(self) -> None:
        tree = make_tree([{"name": "face", "visible": False, "children": [{"name": "eye"}]}])
        eye = tree.resolve("face/eye")
        assert eye is not None
        assert eye.visible is True
        assert eye.shown is False

    def test_snapshot(self) -> None:
        tree = make_tree([{"name": "g", "children": [{"name": "a", "visible": False}]}])
        assert tree.snapshot() == [
            {"path": "g", "layer": False, "visible": True, "shown": True},
            {"path": "g/a", "layer": True, "visible": False, "shown": False},
        ]

    def test_nodes_compare_by_identity(self) -> None:
        assert LayerNode(name="a") != LayerNode(name="a")


class TestDirectivesOnTree:
    def test_set_exclusive_within_group(self, hero_tree: InMemoryLayerTree) -> None:
        execute_commands(parse_directive("set face/sad").commands, hero_tree)
        state = visibility(hero_tree)
        assert state["face/sad"] is True
        assert state["face/angry"] is False
        assert state["face/neutral"] is False
        # Other groups untouched.
        assert state["body/torso"] is True

    def test_set_at_top_level_skips_groups(self, hero_tree: InMemoryLayerTree) -> None:
        execute_commands(parse_directive("set scar_left").commands, hero_tree)
        state = visibility(hero_tree)
        assert state["scar_left"] is True
        assert state["eyepatch"] is False
        assert state["face"] is True
        assert state["body"] is True

    def test_example_directive(self, hero_tree: InMemoryLayerTree) -> None:
        report = execute_commands(
            parse_directive("set body/torso_damaged, show scar_left, hide eyepatch").commands,
            hero_tree,
        )
        assert report.diagnostics == []
        state = visibility(hero_tree)
        assert state["body/torso_damaged"] is True
        assert state["body/torso"] is False
        assert state["scar_left"] is True
        assert state["eyepatch"] is False
