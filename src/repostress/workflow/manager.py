"""WorkflowManager — resolves a workflow for a (category, node) pair."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repostress.domain.types import NodeType
from repostress.errors import WorkflowError
from repostress.workflow.asset import AssetWorkflow
from repostress.workflow.gallery import GalleryWorkflow

if TYPE_CHECKING:
    from repostress.infrastructure.node import Node
    from repostress.infrastructure.repository import Repository
    from repostress.workflow.base import Workflow

# category -> (node type the workflow binds to, workflow class)
WORKFLOWS: dict[str, tuple[str, type[Workflow]]] = {
    GalleryWorkflow.category: (NodeType.GALLERY, GalleryWorkflow),
    AssetWorkflow.category: (NodeType.ASSET, AssetWorkflow),
}


class WorkflowManager:
    """Hands out workflows bound to a subject node."""

    def __init__(self, repository: Repository) -> None:
        self._repository = repository

    def get_workflow(self, category: str, node: Node) -> Workflow:
        """Return the *category* workflow for *node*.

        Raises:
            WorkflowError: unknown category, or the node's type does not
                carry that workflow.
        """
        entry = WORKFLOWS.get(category)
        if entry is None:
            msg = f"Unknown workflow category: {category!r}"
            raise WorkflowError(msg)
        node_type, workflow_cls = entry
        if node.node_type != node_type:
            msg = f"No {category!r} workflow for node type {node.node_type!r}"
            raise WorkflowError(msg)
        return workflow_cls(self._repository, node)
