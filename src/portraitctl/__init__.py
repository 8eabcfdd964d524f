"""portraitctl — layered-portrait directive parsing and evaluation.

Hosts embed the engine directly::

    from portraitctl import LayerDirectiveEngine

    report = LayerDirectiveEngine().run("set torso_damaged, show scar_left", tree)
"""

from portraitctl.domain.diagnostics import Diagnostic, DiagnosticKind
from portraitctl.domain.directive import (
    LayerCommand,
    LayerOperation,
    ParsedDirective,
    parse_directive,
)
from portraitctl.domain.tree import ExecutionReport, LayerTree, execute_commands
from portraitctl.services.engine import LayerDirectiveEngine

__version__ = "0.1.0"

__all__ = [
    "Diagnostic",
    "DiagnosticKind",
    "ExecutionReport",
    "LayerCommand",
    "LayerDirectiveEngine",
    "LayerOperation",
    "LayerTree",
    "ParsedDirective",
    "__version__",
    "execute_commands",
    "parse_directive",
]
