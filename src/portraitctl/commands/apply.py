"""Command: apply a directive to a portrait manifest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from portraitctl.commands._base import PortraitCommand, manifest_option

if TYPE_CHECKING:
    from portraitctl.commands._context import AppContext


@click.command(
    cls=PortraitCommand,
    examples="""\
  portraitctl apply "set torso_damaged, show scar_left"
  portraitctl apply "hide eyepatch" --manifest portraits/hero.yaml
  portraitctl --json apply "set face/angry\"""",
)
@click.argument("directive")
@manifest_option
@click.pass_obj
def apply(app: AppContext, directive: str, manifest: str | None) -> None:
    """Apply DIRECTIVE to a portrait and show the resulting layers.

    The manifest's default directive runs first. Nothing is written back.
    """
    from portraitctl.services.directive import DirectiveService

    service = DirectiveService(app.plugins, strict=app.settings.strict_mode)
    app.emit(service.apply_to_manifest(directive, app.manifest_path(manifest)))
