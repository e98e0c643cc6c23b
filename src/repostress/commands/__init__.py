"""Subcommand modules for repostress.

Provides register_commands() which uses deferred imports to keep
``repostress --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from repostress.commands.act import act
    from repostress.commands.check import check
    from repostress.commands.init_cmd import init_cmd
    from repostress.commands.rename import rename
    from repostress.commands.run import run
    from repostress.commands.seed import seed
    from repostress.commands.tree import tree

    cli.add_command(init_cmd)
    cli.add_command(seed)
    cli.add_command(tree)
    cli.add_command(rename)
    cli.add_command(act)
    cli.add_command(run)
    cli.add_command(check)
