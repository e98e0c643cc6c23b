"""Command: create the repository database and the base galleries."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    "init",
    cls=RsCommand,
    examples="""\
  repostress init
  repostress -c ./repostress.toml init
  REPOSTRESS_REPOSITORY__BASE_PATH=/media/assets repostress init""",
)
@click.pass_obj
def init_cmd(app: AppContext) -> None:
    """Create .repostress/ and the galleries on the configured base path."""
    from repostress.services.seed import SeedService

    app.emit(SeedService(app.repository).init())
