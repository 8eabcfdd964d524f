"""Diagnostics — non-fatal problems found while parsing or applying directives.

Neither parsing nor evaluation ever raises for bad input. Each problem is
recorded as a :class:`Diagnostic` and returned to the caller alongside the
result, so hosts and tests can inspect exactly what was skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any


class DiagnosticKind(StrEnum):
    """Categories of skipped segments and commands."""

    MALFORMED_SEGMENT = "malformed_segment"
    UNRESOLVED_PATH = "unresolved_path"
    NOT_A_LAYER_NODE = "not_a_layer_node"
    HOST_ERROR = "host_error"


@dataclass(frozen=True)
class Diagnostic:
    """A single skipped segment or command."""

    kind: DiagnosticKind
    message: str
    index: int  # position of the segment (parse) or command (execute)
    segment: str | None = None
    path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": str(self.kind),
            "message": self.message,
            "index": self.index,
            "segment": self.segment,
            "path": self.path,
        }
