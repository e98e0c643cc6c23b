"""Command: rename one asset document to a free suffixed name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress rename /assets/folder-0/asset-1/asset-1
  repostress rename /assets/folder-0/asset-1/asset-1 --seed 42""",
)
@click.argument("path")
@click.option("--seed", type=int, default=None, help="Seed for the suffix generator.")
@click.pass_obj
def rename(app: AppContext, path: str, seed: int | None) -> None:
    """Rename the asset document at PATH and its handle."""
    from repostress.services.action import ActionService

    app.emit(ActionService(app.repository, plugins=app.plugins).rename(path, seed=seed))
