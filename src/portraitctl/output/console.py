"""Rich Console factory and theme for portraitctl output.

Creates Console instances that render to a StringIO buffer, preserving
the ``format_result() -> str`` contract.  In non-TTY environments
(tests, pipes) Rich automatically disables color codes.
"""

from __future__ import annotations

from io import StringIO

from rich.console import Console
from rich.theme import Theme

PORTRAIT_THEME = Theme(
    {
        "portrait.ok": "bold green",
        "portrait.error": "bold red",
        "portrait.warning": "bold yellow",
        "portrait.op": "bold cyan",
        "portrait.key": "dim",
        "portrait.path": "bold",
        "portrait.group": "dim italic",
        "portrait.shown": "green",
        "portrait.hidden": "dim",
        "portrait.op.show": "green",
        "portrait.op.hide": "red",
        "portrait.op.set": "magenta",
    }
)

_OPERATION_STYLES: dict[str, str] = {
    "show": "portrait.op.show",
    "hide": "portrait.op.hide",
    "set": "portrait.op.set",
}


def create_console(*, no_color: bool = False, width: int | None = None) -> Console:
    """Create a Console that renders to a StringIO buffer.

    Args:
        no_color: Disable ANSI escape codes (used in tests).
        width: Override terminal width (useful for consistent test output).
    """
    return Console(
        file=StringIO(),
        theme=PORTRAIT_THEME,
        no_color=no_color,
        highlight=False,
        width=width or 120,
    )


def get_output(console: Console) -> str:
    """Extract rendered text from a StringIO-backed Console."""
    assert isinstance(console.file, StringIO)
    return console.file.getvalue()


def style_for_operation(operation: str) -> str:
    """Return the Rich style name for a directive operation."""
    return _OPERATION_STYLES.get(operation, "")
