"""Subcommand modules for portraitctl.

Provides register_commands() which uses deferred imports to keep
``portraitctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from portraitctl.commands.apply import apply
    from portraitctl.commands.layers import layers
    from portraitctl.commands.parse import parse

    cli.add_command(parse)
    cli.add_command(apply)
    cli.add_command(layers)
