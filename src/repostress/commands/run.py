"""Command: concurrent randomized stress run."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from repostress.commands._base import RsCommand

if TYPE_CHECKING:
    from repostress.commands._context import AppContext


@click.command(
    cls=RsCommand,
    examples="""\
  repostress run
  repostress run --workers 8 --iterations 200
  repostress run --seed 1234 --action rename_asset --action browse
  repostress --json run -w 2 -n 10""",
)
@click.option("-w", "--workers", type=click.IntRange(min=1), default=None, help="Worker threads.")
@click.option(
    "-n", "--iterations", type=click.IntRange(min=0), default=None, help="Steps per worker."
)
@click.option("--seed", type=int, default=None, help="Master seed for the run.")
@click.option(
    "--action",
    "actions",
    multiple=True,
    help="Restrict the run to this action (repeatable).",
)
@click.pass_obj
def run(
    app: AppContext,
    workers: int | None,
    iterations: int | None,
    seed: int | None,
    actions: tuple[str, ...],
) -> None:
    """Run randomized actions from several workers and report outcomes."""
    from repostress.services.stress import StressService

    svc = StressService(app.repository, plugins=app.plugins)
    app.emit(
        svc.run(
            workers=workers,
            iterations=iterations,
            seed=seed,
            actions=list(actions) or None,
        )
    )
