"""Command: print the node tree."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress tree
  repostress tree /assets/folder-0 --depth 2
  repostress --json tree /assets""",
)
@click.argument("path", default="/")
@click.option("--depth", type=click.IntRange(min=0), default=None, help="Maximum depth.")
@click.pass_obj
def tree(app: AppContext, path: str, depth: int | None) -> None:
    """List nodes below PATH."""
    from repostress.services.tree import TreeService

    app.emit(TreeService(app.repository).tree(path, depth=depth))
