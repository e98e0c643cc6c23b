"""Command: populate the base gallery with folders and assets."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress seed
  repostress seed --folders 10 --assets 20""",
)
@click.option("--folders", type=click.IntRange(min=0), default=None, help="Folder count.")
@click.option("--assets", type=click.IntRange(min=0), default=None, help="Assets per folder.")
@click.pass_obj
def seed(app: AppContext, folders: int | None, assets: int | None) -> None:
    """Create folder-N galleries with asset-M items below the base path."""
    from repostress.services.seed import SeedService

    app.emit(SeedService(app.repository).seed(folders=folders, assets=assets))
