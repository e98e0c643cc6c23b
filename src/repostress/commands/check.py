"""Command: layout integrity check."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress check
  repostress check /assets/folder-0
  repostress -q check""",
)
@click.argument("path", required=False)
@click.pass_obj
def check(app: AppContext, path: str | None) -> None:
    """Report handles and documents that break the layout convention."""
    from repostress.services.check import CheckService

    app.emit(CheckService(app.repository).check(path))
