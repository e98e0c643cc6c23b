"""Command: run one named action against one node."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress act add_asset /assets/folder-0
  repostress act copy_asset /assets/folder-0/asset-1/asset-1 --seed 7
  repostress act browse /assets""",
)
@click.argument("action_name")
@click.argument("path")
@click.option("--seed", type=int, default=None, help="Seed for the action's generator.")
@click.pass_obj
def act(app: AppContext, action_name: str, path: str, seed: int | None) -> None:
    """Run ACTION_NAME on the node at PATH."""
    from repostress.services.action import ActionService

    svc = ActionService(app.repository, plugins=app.plugins)
    app.emit(svc.execute(action_name, path, seed=seed))
