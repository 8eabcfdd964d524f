"""Operation-specific Rich renderers for ServiceResult.

Each renderer writes to a Rich Console (backed by StringIO).  The caller
extracts the rendered text via ``get_output(console)``.

Renderers are dispatched by ``result.op`` in :func:`render_result`.
Unknown ops fall through to a generic key-value renderer.
"""

from __future__ import annotations

import json as _json
from typing import TYPE_CHECKING, Any

from rich.table import Table
from rich.text import Text

from portraitctl.output.console import create_console, get_output, style_for_operation

if TYPE_CHECKING:
    from rich.console import Console

    from portraitctl.services.result import ServiceResult


# ── Public API ────────────────────────────────────────────────────────


def render_result(result: ServiceResult, *, verbose: bool = False) -> str:
    """Render a ServiceResult to a styled string via Rich.

    Returns plain text (no ANSI) when Rich detects no terminal,
    which is the case inside Click's CliRunner and piped output.
    """
    console = create_console()

    if result.ok:
        renderer = _OP_RENDERERS.get(result.op, _render_generic)
        renderer(result, console, verbose=verbose)
    else:
        _render_error(result, console, verbose=verbose)

    return get_output(console).rstrip("\n")


def render_quiet(result: ServiceResult) -> str:
    """Render minimal output for ``--quiet`` mode.

    Directives print one ``operation path`` line per command; layer
    listings print the paths of shown layers.
    """
    if not result.ok:
        msg = result.error.message if result.error else "Unknown error"
        return f"ERROR: {result.op} — {msg}"

    if result.op == "parse_directive":
        return "\n".join(f"{c['operation']} {c['path']}" for c in result.data.get("commands", []))

    layers = result.data.get("layers")
    if isinstance(layers, list):
        return "\n".join(
            item["path"] for item in layers if item.get("layer") and item.get("shown")
        )

    return f"OK: {result.op}"


# ── Helpers ───────────────────────────────────────────────────────────


def _status_line(console: Console, result: ServiceResult) -> None:
    """Print the OK status line."""
    console.print(Text.assemble(("OK", "portrait.ok"), (f"  {result.op}", "portrait.op")))


def _field(console: Console, key: str, value: Any) -> None:
    """Print a single indented ``key: value`` field."""
    style = "portrait.path" if key in ("path", "portrait") else ""
    console.print(Text.assemble((f"  {key}: ", "portrait.key"), (str(value), style)))


def _command_table(commands: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Operation")
    table.add_column("Path", style="portrait.path")
    for i, command in enumerate(commands, start=1):
        operation = command["operation"]
        table.add_row(str(i), Text(operation, style=style_for_operation(operation)), command["path"])
    return table


def _layer_table(layers: list[dict[str, Any]]) -> Table:
    table = Table(show_header=True, show_lines=False, pad_edge=False, expand=False)
    table.add_column("Layer")
    table.add_column("Kind")
    table.add_column("Visible")
    table.add_column("Shown")
    for item in layers:
        depth = item["path"].count("/")
        name = item["path"].rsplit("/", 1)[-1]
        is_layer = item.get("layer", True)
        label = Text("  " * depth + name, style="" if is_layer else "portrait.group")
        shown = item.get("shown", False)
        table.add_row(
            label,
            "layer" if is_layer else "group",
            "yes" if item.get("visible") else "no",
            Text("yes" if shown else "no", style="portrait.shown" if shown else "portrait.hidden"),
        )
    return table


def _render_diagnostics(console: Console, diagnostics: list[dict[str, Any]]) -> None:
    if not diagnostics:
        return
    console.print()
    console.print(Text(f"  {len(diagnostics)} skipped:", style="portrait.warning"))
    for diag in diagnostics:
        console.print(Text(f"    [{diag['kind']}] {diag['message']}"))


# ── Renderers ─────────────────────────────────────────────────────────


def _render_error(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    err = result.error
    msg = err.message if err else "Unknown error"
    console.print(
        Text.assemble(("ERROR", "portrait.error"), (f"  {result.op}", "portrait.op"), " — ", msg)
    )

    if err and err.detail:
        diagnostics = err.detail.get("diagnostics")
        if isinstance(diagnostics, list):
            _render_diagnostics(console, diagnostics)
        if verbose:
            console.print(Text("  detail:", style="dim"))
            for k, v in err.detail.items():
                console.print(Text(f"    {k}: {v}"))


def _render_parse(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render parsed commands as a numbered table."""
    _status_line(console, result)
    commands = result.data.get("commands", [])
    if commands:
        console.print(_command_table(commands))
    else:
        console.print(Text("  no commands", style="dim"))
    _render_diagnostics(console, result.data.get("diagnostics", []))


def _render_apply(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render applied commands and the resulting layer state."""
    _status_line(console, result)
    d = result.data
    _field(console, "portrait", d.get("portrait", ""))
    _field(console, "applied", f"{len(d.get('applied', []))}/{len(d.get('commands', []))}")
    if verbose and d.get("applied"):
        console.print(_command_table(d["applied"]))
    layers = d.get("layers")
    if layers:
        console.print(_layer_table(layers))
    _render_diagnostics(console, d.get("diagnostics", []))
    if verbose and result.meta:
        for k, v in result.meta.items():
            _field(console, k, v)


def _render_layers(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Render a layer listing."""
    _status_line(console, result)
    if "portrait" in result.data:
        _field(console, "portrait", result.data["portrait"])
    layers = result.data.get("layers", [])
    if layers:
        console.print(_layer_table(layers))
    else:
        console.print(Text("  no layers", style="dim"))
    if verbose and result.meta:
        for k, v in result.meta.items():
            _field(console, k, v)


def _render_generic(result: ServiceResult, console: Console, *, verbose: bool = False) -> None:
    """Fallback renderer: status line + all data as key-value pairs."""
    _status_line(console, result)
    for key, value in result.data.items():
        if isinstance(value, (dict, list)):
            _field(console, key, _json.dumps(value, separators=(",", ":")))
        else:
            _field(console, key, value)


# ── Dispatch table ────────────────────────────────────────────────────

_OP_RENDERERS: dict[str, Any] = {
    "parse_directive": _render_parse,
    "apply_directive": _render_apply,
    "list_layers": _render_layers,
    "load_portrait": _render_layers,
}
