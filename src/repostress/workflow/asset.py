"""AssetWorkflow — rename, move, copy, and delete of gallery items.

The subject is an asset document. The operations act on its handle and
keep the convention that a handle and its documents share one name.
"""

from __future__ import annotations

import logging

from repostress.domain.naming import validate_name
from repostress.domain.types import NodeType
from repostress.errors import ItemNotFoundError, WorkflowError
from repostress.infrastructure.node import Node
from repostress.workflow.base import Workflow

logger = logging.getLogger(__name__)

_OPERATIONS = ("rename", "move", "copy", "delete")


class AssetWorkflow(Workflow):
    """Operations on an ``asset`` document sitting under a like-named handle."""

    category = "asset"

    def hints(self) -> dict[str, bool]:
        available = self._is_gallery_item()
        return {op: available for op in _OPERATIONS}

    def _is_gallery_item(self) -> bool:
        try:
            if self._subject.node_type != NodeType.ASSET:
                return False
            handle = self._subject.parent
            return handle.node_type == NodeType.HANDLE and handle.name == self._subject.name
        except ItemNotFoundError:
            return False

    def _handle(self) -> Node:
        return self._subject.parent

    def _documents(self, handle: Node, name: str) -> list[Node]:
        return [
            child
            for child in handle.get_nodes()
            if child.name == name and child.node_type == NodeType.ASSET
        ]

    def rename(self, new_name: str) -> None:
        """Rename the handle and its like-named documents to *new_name*.

        Atomic rename-if-absent: the name is re-checked inside the write
        transaction and guarded by the store's sibling-name constraint.

        Raises:
            ItemExistsError: a sibling of the handle already uses *new_name*.
        """
        validate_name(new_name)
        with self._repository.transaction() as txn:
            self._require_hint("rename")
            handle = self._handle()
            old_name = handle.name
            documents = self._documents(handle, old_name)
            txn.rename_node(handle, new_name)
            for document in documents:
                txn.rename_node(document, new_name)
        logger.debug("Renamed asset %r -> %r (%d documents)", old_name, new_name, len(documents))

    def move(self, target_path: str, new_name: str) -> None:
        """Move the handle into the gallery at *target_path* as *new_name*."""
        validate_name(new_name)
        with self._repository.transaction() as txn:
            self._require_hint("move")
            target = self._repository.get_node(target_path)
            if target.node_type != NodeType.GALLERY:
                msg = f"Move target {target_path!r} is not a gallery"
                raise WorkflowError(msg)
            handle = self._handle()
            documents = self._documents(handle, handle.name)
            txn.move_node(handle, target, new_name)
            for document in documents:
                txn.rename_node(document, new_name)

    def copy(self, target_path: str, new_name: str) -> Node:
        """Copy the handle into the gallery at *target_path*; return the new document."""
        validate_name(new_name)
        with self._repository.transaction() as txn:
            self._require_hint("copy")
            target = self._repository.get_node(target_path)
            if target.node_type != NodeType.GALLERY:
                msg = f"Copy target {target_path!r} is not a gallery"
                raise WorkflowError(msg)
            handle = self._handle()
            old_name = handle.name
            copy = txn.copy_node(handle, target, new_name)
            for document in self._documents(copy, old_name):
                txn.rename_node(document, new_name)
            return copy.get_node(new_name)

    def delete(self) -> None:
        """Remove the handle and everything below it."""
        with self._repository.transaction() as txn:
            self._require_hint("delete")
            txn.remove_node(self._handle())
