"""Directive parsing — the layered-portrait command language.

A directive is a comma-separated list of ``operator path`` segments::

    set torso_damaged, show scar_left, hide eyepatch

Pure functions, no infrastructure dependencies. Commands are returned in
input order; later commands may override earlier ones when evaluated.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from portraitctl.domain.diagnostics import Diagnostic, DiagnosticKind

# Anchored: the operator must be the first token of the trimmed segment.
# Anything after the first path token is ignored.
_SEGMENT_PATTERN = re.compile(r"^(?P<operation>show|hide|set)\s+(?P<path>\S+)")

SEGMENT_SEPARATOR = ","


class LayerOperation(StrEnum):
    """Visibility operations a directive can request."""

    SHOW = "show"
    HIDE = "hide"
    SET_EXCLUSIVE = "set"


@dataclass(frozen=True)
class LayerCommand:
    """One parsed ``operator path`` segment."""

    operation: LayerOperation
    target_path: str

    def to_dict(self) -> dict[str, Any]:
        return {"operation": str(self.operation), "path": self.target_path}


@dataclass(frozen=True)
class ParsedDirective:
    """Commands in input order plus any segments that were dropped."""

    commands: tuple[LayerCommand, ...] = ()
    diagnostics: tuple[Diagnostic, ...] = ()


def clean_path(raw: str) -> str:
    """Strip literal backslashes and surrounding whitespace from a path.

    Examples:
        >>> clean_path("a\\\\b")
        'ab'
        >>> clean_path("  torso ")
        'torso'
    """
    return raw.replace("\\", "").strip()


def parse_segment(segment: str) -> LayerCommand | None:
    """Parse one trimmed segment, or return None if it does not match."""
    match = _SEGMENT_PATTERN.match(segment)
    if match is None:
        return None
    path = clean_path(match.group("path"))
    if not path:
        return None
    return LayerCommand(
        operation=LayerOperation(match.group("operation")),
        target_path=path,
    )


def parse_directive(text: str) -> ParsedDirective:
    """Parse a directive string into an ordered tuple of commands.

    Empty segments (e.g. a trailing comma) are skipped silently. Segments
    that do not match ``(show|hide|set) <path>`` produce a
    ``MALFORMED_SEGMENT`` diagnostic and contribute no command.
    """
    commands: list[LayerCommand] = []
    diagnostics: list[Diagnostic] = []

    for index, raw in enumerate(text.split(SEGMENT_SEPARATOR)):
        segment = raw.strip()
        if not segment:
            continue
        command = parse_segment(segment)
        if command is None:
            diagnostics.append(
                Diagnostic(
                    kind=DiagnosticKind.MALFORMED_SEGMENT,
                    message=f"Malformed directive segment: {segment!r}",
                    index=index,
                    segment=segment,
                )
            )
            continue
        commands.append(command)

    return ParsedDirective(commands=tuple(commands), diagnostics=tuple(diagnostics))
