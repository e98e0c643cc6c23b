"""RenameAssetAction — rename an asset to a random, still-free sibling name."""

from __future__ import annotations

import logging
import random
from typing import TYPE_CHECKING, ClassVar

from repostress.actions.workflow import AssetWorkflowAction
from repostress.domain.naming import SuffixNamer
from repostress.errors import ItemExistsError, ItemNotFoundError, PreconditionError

if TYPE_CHECKING:
    from repostress.actions.context import ActionContext
    from repostress.infrastructure.node import Node
    from repostress.workflow.asset import AssetWorkflow

logger = logging.getLogger(__name__)


class RenameAssetAction(AssetWorkflowAction):
    """Rename the asset behind *node* to ``<name>.<d>[.<d>...]``.

    The candidate is checked against the naming scope (the gallery two
    levels up), then handed to the workflow rename. A rename that loses a
    race against a concurrent writer counts as one more collision. The
    renamed document is returned from ``scope/<candidate>/<candidate>``.
    """

    name: ClassVar[str] = "rename_asset"
    workflow_method_name: ClassVar[str] = "move"

    def __init__(self, context: ActionContext, *, rng: random.Random | None = None) -> None:
        super().__init__(context, rng=rng)
        self._namer = SuffixNamer(self._random, max_attempts=context.max_attempts)

    def do_execute(self, node: Node) -> Node:
        layout = self._context.layout
        scope = layout.scope_of(node)
        self._require_handle_scope(node, scope)
        workflow: AssetWorkflow = self.get_workflow(node)  # type: ignore[assignment]

        candidates = self._namer.candidates(node.name)
        while True:
            candidate = next(candidates)
            if scope.has_node(candidate):
                continue
            try:
                workflow.rename(candidate)
            except ItemExistsError:
                logger.debug("Lost rename race for %r, drawing another name", candidate)
                continue
            return layout.content_of(scope, candidate)

    @staticmethod
    def _require_handle_scope(node: Node, scope: Node) -> None:
        """The workflow renames the handle, so the scope must be its container."""
        try:
            container = node.parent.parent
        except ItemNotFoundError as exc:
            msg = f"Node {node.path!r} has no handle container to rename within"
            raise PreconditionError(msg) from exc
        if container != scope:
            msg = (
                f"Naming scope {scope.path!r} differs from {container.path!r}, "
                f"where the handle of {node.path!r} would be renamed"
            )
            raise PreconditionError(msg)
