"""Actions that go through a repository workflow."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar

from repostress.actions.base import Action
from repostress.domain.types import NodeType
from repostress.errors import ItemNotFoundError, WorkflowError

if TYPE_CHECKING:
    from repostress.infrastructure.node import Node
    from repostress.workflow.base import Workflow


class WorkflowAction(Action):
    """Operable where the workflow's hints allow ``workflow_method_name``."""

    workflow_category: ClassVar[str] = ""
    workflow_method_name: ClassVar[str] = ""

    def get_workflow(self, node: Node) -> Workflow:
        return self._context.workflows.get_workflow(self.workflow_category, node)

    def can_operate_on_node(self, node: Node) -> bool:
        try:
            hints = self.get_workflow(node).hints()
        except (WorkflowError, ItemNotFoundError):
            return False
        return bool(hints.get(self.workflow_method_name, False))


class AssetWorkflowAction(WorkflowAction):
    """Workflow action on gallery asset documents."""

    workflow_category: ClassVar[str] = "asset"

    def can_operate_on_node(self, node: Node) -> bool:
        try:
            if node.node_type != NodeType.ASSET:
                return False
        except ItemNotFoundError:
            return False
        return super().can_operate_on_node(node)
