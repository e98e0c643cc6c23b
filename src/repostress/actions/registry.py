"""Action registry — built-in actions plus plugin contributions."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repostress.actions.gallery import (
    AddAssetAction,
    BrowseAction,
    CopyAssetAction,
    DeleteAssetAction,
)
from repostress.actions.rename_asset import RenameAssetAction

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from repostress.actions.base import Action
    from repostress.actions.context import ActionContext
    from repostress.plugins.manager import PluginManager

BUILTIN_ACTIONS: dict[str, type[Action]] = {
    cls.name: cls
    for cls in (
        AddAssetAction,
        RenameAssetAction,
        CopyAssetAction,
        DeleteAssetAction,
        BrowseAction,
    )
}


def available_actions(plugins: PluginManager | None = None) -> dict[str, type[Action]]:
    """Built-in actions, extended (never overridden) by plugin actions."""
    registry = dict(BUILTIN_ACTIONS)
    if plugins is not None:
        for name, action_cls in plugins.collect_actions().items():
            registry.setdefault(name, action_cls)
    return registry


def build_actions(
    context: ActionContext,
    registry: Mapping[str, type[Action]],
    *,
    only: Iterable[str] | None = None,
    disabled: Iterable[str] = (),
    weights: Mapping[str, float] | None = None,
) -> list[Action]:
    """Instantiate the selected actions for one worker context.

    Raises:
        KeyError: *only* names an action missing from *registry*.
    """
    names = list(only) if only else list(registry)
    unknown = [n for n in names if n not in registry]
    if unknown:
        msg = f"Unknown action(s): {', '.join(unknown)}"
        raise KeyError(msg)
    skip = set(disabled)
    actions: list[Action] = []
    for name in names:
        if name in skip:
            continue
        action = registry[name](context)
        if weights and name in weights:
            action.weight = float(weights[name])
        if action.weight > 0:
            actions.append(action)
    return actions
