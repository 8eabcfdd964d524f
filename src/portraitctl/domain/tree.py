"""Layer tree capability and directive evaluation.

The host (a renderer, an editor, or :class:`InMemoryLayerTree`) supplies a
:class:`LayerTree`. Evaluation is a left-to-right fold over the commands with
side effects on the host's nodes. A failure on one command never aborts the
ones after it.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from portraitctl.domain.diagnostics import Diagnostic, DiagnosticKind
from portraitctl.domain.directive import LayerCommand, LayerOperation


@runtime_checkable
class LayerTree(Protocol):
    """Host capability the evaluator drives.

    ``siblings`` may or may not include the node itself; the evaluator
    never hides the target of a ``set`` command either way.
    """

    def resolve(self, path: str) -> Any | None: ...

    def siblings(self, node: Any) -> Iterable[Any]: ...

    def is_layer_node(self, node: Any) -> bool: ...

    def show(self, node: Any) -> None: ...

    def hide(self, node: Any) -> None: ...


@dataclass
class ExecutionReport:
    """Commands that took effect and diagnostics for the ones that did not."""

    applied: list[LayerCommand] = field(default_factory=list)
    diagnostics: list[Diagnostic] = field(default_factory=list)


def _apply(command: LayerCommand, node: Any, tree: LayerTree) -> None:
    if command.operation is LayerOperation.SHOW:
        tree.show(node)
    elif command.operation is LayerOperation.HIDE:
        tree.hide(node)
    else:
        for sibling in tree.siblings(node):
            if sibling is node or sibling == node:
                continue
            if tree.is_layer_node(sibling):
                tree.hide(sibling)
        tree.show(node)


def _evaluate(index: int, command: LayerCommand, tree: LayerTree) -> Diagnostic | None:
    path = command.target_path
    node = tree.resolve(path)
    if node is None:
        return Diagnostic(
            kind=DiagnosticKind.UNRESOLVED_PATH,
            message=f"Layer path not found: {path!r}",
            index=index,
            path=path,
        )
    if not tree.is_layer_node(node):
        return Diagnostic(
            kind=DiagnosticKind.NOT_A_LAYER_NODE,
            message=f"Node at {path!r} is not a layer",
            index=index,
            path=path,
        )
    _apply(command, node, tree)
    return None


def execute_commands(commands: Sequence[LayerCommand], tree: LayerTree) -> ExecutionReport:
    """Apply *commands* to *tree* in order.

    Unresolvable paths and non-layer targets are skipped with a diagnostic.
    Any exception raised by the host (while resolving, classifying, showing
    or hiding) is recorded as a ``HOST_ERROR`` diagnostic; evaluation
    continues with the next command.
    """
    report = ExecutionReport()

    for index, command in enumerate(commands):
        try:
            diagnostic = _evaluate(index, command, tree)
        except Exception as exc:
            diagnostic = Diagnostic(
                kind=DiagnosticKind.HOST_ERROR,
                message=f"Host failed to {command.operation} {command.target_path!r}: {exc}",
                index=index,
                path=command.target_path,
            )
        if diagnostic is None:
            report.applied.append(command)
        else:
            report.diagnostics.append(diagnostic)

    return report
