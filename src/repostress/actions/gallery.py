"""Actions that add, copy, delete, or read gallery assets."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, ClassVar

from repostress.actions.base import Action
from repostress.actions.workflow import AssetWorkflowAction, WorkflowAction
from repostress.domain.naming import SuffixNamer
from repostress.errors import ItemNotFoundError, WorkflowError

if TYPE_CHECKING:
    from repostress.infrastructure.node import Node
    from repostress.workflow.asset import AssetWorkflow
    from repostress.workflow.gallery import GalleryWorkflow

logger = logging.getLogger(__name__)


class AddAssetAction(WorkflowAction):
    """Create a new gallery item with a random name and type."""

    name: ClassVar[str] = "add_asset"
    workflow_category: ClassVar[str] = "gallery"
    workflow_method_name: ClassVar[str] = "createGalleryItem"

    def do_execute(self, node: Node) -> Node:
        workflow: GalleryWorkflow = self.get_workflow(node)  # type: ignore[assignment]
        types = workflow.gallery_types()
        if not types:
            msg = f"Gallery {node.path!r} declares no gallery types"
            raise WorkflowError(msg)
        item_name = f"asset-{self._random.getrandbits(32):08x}"
        return workflow.create_gallery_item(item_name, self._random.choice(types))


class CopyAssetAction(AssetWorkflowAction):
    """Copy an asset next to itself under a free suffixed name."""

    name: ClassVar[str] = "copy_asset"
    workflow_method_name: ClassVar[str] = "copy"
    weight = 0.5

    def do_execute(self, node: Node) -> Node:
        layout = self._context.layout
        scope = layout.scope_of(node)
        workflow: AssetWorkflow = self.get_workflow(node)  # type: ignore[assignment]
        namer = SuffixNamer(self._random, max_attempts=self._context.max_attempts)
        candidates = namer.candidates(node.name)
        while True:
            candidate = next(candidates)
            if not scope.has_node(candidate):
                return workflow.copy(scope.path, candidate)


class DeleteAssetAction(AssetWorkflowAction):
    """Delete an asset together with its handle."""

    name: ClassVar[str] = "delete_asset"
    workflow_method_name: ClassVar[str] = "delete"
    weight = 0.5

    def do_execute(self, node: Node) -> None:
        workflow: AssetWorkflow = self.get_workflow(node)  # type: ignore[assignment]
        workflow.delete()
        return None


class BrowseAction(Action):
    """Read a node's properties and its children's names."""

    name: ClassVar[str] = "browse"
    is_write_action: ClassVar[bool] = False

    def can_operate_on_node(self, node: Node) -> bool:
        return node.exists

    def do_execute(self, node: Node) -> Node:
        node.get_properties()
        names: list[str] = []
        for child in node.get_nodes():
            try:
                names.append(child.name)
            except ItemNotFoundError:
                continue
        logger.debug("Browsed %d children of node %d", len(names), node.id)
        return node
