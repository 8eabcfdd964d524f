"""In-memory layer tree — a host-free :class:`LayerTree` implementation.

Used by the CLI to apply directives to a portrait manifest, and by tests as
the reference host. Paths are resolved relative to an unnamed root, the way
an engine resolves a relative node path from the portrait node.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from portraitctl.domain.portrait import LayerSpec

PATH_SEPARATOR = "/"


@dataclass(eq=False)
class LayerNode:
    """A node in the portrait hierarchy. Compared by identity."""

    name: str
    is_layer: bool = True
    visible: bool = True
    children: list[LayerNode] = field(default_factory=list)
    parent: LayerNode | None = field(default=None, repr=False)

    def add(self, child: LayerNode) -> LayerNode:
        child.parent = self
        self.children.append(child)
        return child

    def child(self, name: str) -> LayerNode | None:
        for candidate in self.children:
            if candidate.name == name:
                return candidate
        return None

    @property
    def path(self) -> str:
        parts: list[str] = []
        node: LayerNode | None = self
        while node is not None and node.parent is not None:
            parts.append(node.name)
            node = node.parent
        return PATH_SEPARATOR.join(reversed(parts))

    @property
    def shown(self) -> bool:
        """Effective visibility: this node and every ancestor are visible."""
        node: LayerNode | None = self
        while node is not None:
            if not node.visible:
                return False
            node = node.parent
        return True


class InMemoryLayerTree:
    """Layer tree backed by :class:`LayerNode` objects.

    ``siblings`` includes the node itself, matching engines that enumerate
    a parent's children.
    """

    def __init__(self, root: LayerNode | None = None) -> None:
        self.root = root or LayerNode(name="", is_layer=False)

    @classmethod
    def from_specs(cls, specs: Iterable[LayerSpec]) -> InMemoryLayerTree:
        tree = cls()
        for spec in specs:
            _attach(tree.root, spec)
        return tree

    # -- LayerTree capability ------------------------------------------

    def resolve(self, path: str) -> LayerNode | None:
        node: LayerNode | None = self.root
        for part in path.split(PATH_SEPARATOR):
            if node is None:
                return None
            if part in ("", "."):
                continue
            if part == "..":
                node = node.parent
                continue
            node = node.child(part)
        return node

    def siblings(self, node: LayerNode) -> list[LayerNode]:
        if node.parent is None:
            return [node]
        return list(node.parent.children)

    def is_layer_node(self, node: Any) -> bool:
        return isinstance(node, LayerNode) and node.is_layer

    def show(self, node: LayerNode) -> None:
        node.visible = True

    def hide(self, node: LayerNode) -> None:
        node.visible = False

    # -- Inspection ----------------------------------------------------

    def walk(self) -> Iterator[LayerNode]:
        """Yield every node below the root, depth-first in child order."""
        stack = list(reversed(self.root.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def layers(self) -> list[LayerNode]:
        return [node for node in self.walk() if node.is_layer]

    def snapshot(self) -> list[dict[str, Any]]:
        return [
            {
                "path": node.path,
                "layer": node.is_layer,
                "visible": node.visible,
                "shown": node.shown,
            }
            for node in self.walk()
        ]


def _attach(parent: LayerNode, spec: LayerSpec) -> None:
    node = parent.add(LayerNode(name=spec.name, is_layer=not spec.group, visible=spec.visible))
    for child in spec.children:
        _attach(node, child)
