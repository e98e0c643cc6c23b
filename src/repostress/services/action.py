"""ActionService — run a single named action against a single node."""

from __future__ import annotations

from repostress.actions.context import ActionContext
from repostress.actions.registry import available_actions
from repostress.actions.rename_asset import RenameAssetAction
from repostress.errors import ActionError, RepositoryError
from repostress.services.base import BaseService
from repostress.services.result import ServiceResult
from repostress.services.telemetry import traced


class ActionService(BaseService):
    """One-shot action execution, mostly for scripting and debugging."""

    @traced
    def execute(self, action_name: str, path: str, *, seed: int | None = None) -> ServiceResult:
        """Run *action_name* on the node at *path*."""
        return self._execute("act", action_name, path, seed)

    @traced
    def rename(self, path: str, *, seed: int | None = None) -> ServiceResult:
        """Rename the asset document at *path* to a free suffixed name."""
        return self._execute("rename", RenameAssetAction.name, path, seed)

    def _execute(self, op: str, action_name: str, path: str, seed: int | None) -> ServiceResult:
        registry = available_actions(self._plugins)
        action_cls = registry.get(action_name)
        if action_cls is None:
            return ServiceResult.failure(
                op,
                "UNKNOWN_ACTION",
                f"Unknown action: {action_name!r}",
                available=sorted(registry),
            )

        try:
            node = self._repository.get_node(path)
            context = ActionContext.for_repository(self._repository, seed=seed)
            action = action_cls(context)
            if not action.can_operate_on_node(node):
                return ServiceResult.failure(
                    op,
                    "NOT_OPERABLE",
                    f"Action {action_name!r} cannot operate on {path!r}",
                    node_type=node.node_type,
                )
            produced = action.execute(node)
            new_path = produced.path if produced is not None else None
        except (RepositoryError, ActionError) as exc:
            return self._error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={"action": action_name, "source": path, "path": new_path},
        )
