"""Command: parse a directive without applying it."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from portraitctl.commands._base import PortraitCommand

if TYPE_CHECKING:
    from portraitctl.commands._context import AppContext


@click.command(
    cls=PortraitCommand,
    examples="""\
  portraitctl parse "set torso_damaged, show scar_left, hide eyepatch"
  portraitctl --json parse "show face/angry"
  portraitctl --strict parse "show a, wave b\"""",
)
@click.argument("directive")
@click.pass_obj
def parse(app: AppContext, directive: str) -> None:
    """Parse DIRECTIVE into layer commands and report skipped segments."""
    from portraitctl.services.directive import DirectiveService

    app.emit(DirectiveService(strict=app.settings.strict_mode).parse(directive))
