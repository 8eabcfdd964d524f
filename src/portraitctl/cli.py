"""Root CLI group for portraitctl with global flags and command registration."""

from __future__ import annotations

import click

from portraitctl import __version__
from portraitctl.commands import register_commands
from portraitctl.commands._context import AppContext
from portraitctl.config.settings import PortraitSettings


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="portraitctl")
@click.option("--json", "json_output", is_flag=True, help="Structured JSON output.")
@click.option("-q", "--quiet", is_flag=True, help="Minimal output.")
@click.option("-v", "--verbose", is_flag=True, help="Detailed output with debug info.")
@click.option("--log-json", is_flag=True, help="Structured JSON log output to stderr.")
@click.option(
    "--strict/--lenient",
    default=None,
    help="Fail when a directive has skipped segments or commands.",
)
@click.option("-c", "--config", "config_path", default=None, help="Override config file path.")
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    strict: bool | None,
    config_path: str | None,
) -> None:
    """portraitctl — layered-portrait directive tool."""
    flags: dict[str, bool] = {}
    if strict is not None:
        flags["strict"] = strict
    settings = PortraitSettings.from_cli(
        config_path=config_path,
        json_output=json_output,
        quiet=quiet,
        verbose=verbose,
        log_json=log_json,
        **flags,
    )
    ctx.obj = AppContext(settings)
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
