"""Command: list the layers of a portrait manifest."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from portraitctl.commands._base import PortraitCommand, manifest_option

if TYPE_CHECKING:
    from portraitctl.commands._context import AppContext


@click.command(
    cls=PortraitCommand,
    examples="""\
  portraitctl layers
  portraitctl layers --manifest portraits/hero.toml
  portraitctl -q layers""",
)
@manifest_option
@click.pass_obj
def layers(app: AppContext, manifest: str | None) -> None:
    """List portrait layers after the manifest's default directive."""
    from portraitctl.services.portrait import PortraitService

    app.emit(PortraitService(app.plugins).load(app.manifest_path(manifest)))
