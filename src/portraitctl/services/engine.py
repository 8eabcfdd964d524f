"""LayerDirectiveEngine — the embeddable entry point for hosts.

Wraps the pure domain functions and logs every diagnostic, so a host that
ignores the returned diagnostics still sees them in its log.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from portraitctl.domain.diagnostics import Diagnostic
from portraitctl.domain.directive import LayerCommand, ParsedDirective, parse_directive
from portraitctl.domain.tree import ExecutionReport, LayerTree, execute_commands

logger = logging.getLogger(__name__)


class LayerDirectiveEngine:
    """Parse and evaluate layer directives against a host tree.

    Stateless: one engine can serve any number of trees. Usage::

        engine = LayerDirectiveEngine()
        report = engine.run("set torso_damaged, show scar_left", tree)
        for diagnostic in report.diagnostics:
            ...

    Diagnostics are logged at *diagnostic_level* (WARNING by default).
    Callers that report diagnostics through another channel, such as the
    service layer's ``ServiceResult.warnings``, pass ``logging.DEBUG``.
    """

    def __init__(self, *, diagnostic_level: int = logging.WARNING) -> None:
        self.diagnostic_level = diagnostic_level

    def parse(self, text: str) -> ParsedDirective:
        parsed = parse_directive(text)
        self._log(parsed.diagnostics)
        return parsed

    def execute(self, commands: Sequence[LayerCommand], tree: LayerTree) -> ExecutionReport:
        report = execute_commands(commands, tree)
        self._log(report.diagnostics)
        logger.debug("Applied %d of %d layer commands", len(report.applied), len(commands))
        return report

    def run(self, text: str, tree: LayerTree) -> ExecutionReport:
        """Parse *text* and execute it; parse diagnostics come first."""
        parsed = self.parse(text)
        report = self.execute(parsed.commands, tree)
        report.diagnostics[:0] = parsed.diagnostics
        return report

    def _log(self, diagnostics: Sequence[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            logger.log(self.diagnostic_level, "%s [%s]", diagnostic.message, diagnostic.kind)
