"""Pluggy hook specifications for repostress.

One setup-time hook lets plugins contribute actions; two observer hooks
are called synchronously by the stress runner.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import pluggy

if TYPE_CHECKING:
    from repostress.actions.base import Action

hookspec = pluggy.HookspecMarker("repostress")


class RepoStressHookSpec:
    """Hook specifications for the repostress plugin system."""

    @hookspec
    def register_actions(self) -> dict[str, type[Action]] | None:
        """Return name -> Action class mappings to extend the action registry."""

    @hookspec
    def post_action(
        self,
        worker: int,
        action: str,
        path: str,
        ok: bool,
        error: str | None,
    ) -> None:
        """Called after each action a worker executes."""

    @hookspec
    def post_run(self, stats: dict[str, Any]) -> None:
        """Called once after a stress run with the report data."""
