"""Node types and the handle/document layout convention."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from repostress.errors import ItemNotFoundError, PostconditionError, PreconditionError

if TYPE_CHECKING:
    from repostress.infrastructure.node import Node


class NodeType(StrEnum):
    """Primary node types in the repository."""

    ROOT = "root"
    GALLERY = "gallery"
    HANDLE = "handle"
    ASSET = "asset"
    RESOURCE = "resource"


RESOURCE_NAME = "resource"
DEFAULT_MIME_TYPE = "application/octet-stream"
DEFAULT_AVAILABILITY = ("live", "preview")


@dataclass(frozen=True)
class HandleLayout:
    """Where a document's naming scope and renamed content live.

    Attributes:
        scope_levels: Number of parent hops from a document to the node
            whose children must not already carry a new name. Gallery
            assets sit at ``gallery/<handle>/<document>``, hence 2.
        nested_content: Whether the renamed entity is a container holding
            a like-named child (handle -> document) that callers get back.
    """

    scope_levels: int = 2
    nested_content: bool = True

    def __post_init__(self) -> None:
        if self.scope_levels < 1:
            msg = f"scope_levels must be at least 1, got {self.scope_levels}"
            raise ValueError(msg)

    def scope_of(self, node: Node) -> Node:
        """Walk ``scope_levels`` parents up from *node*.

        Raises:
            PreconditionError: *node* sits too shallow in the tree.
        """
        scope = node
        try:
            for _ in range(self.scope_levels):
                scope = scope.parent
        except ItemNotFoundError as exc:
            msg = (
                f"Node {node.path!r} has no ancestor {self.scope_levels} levels up; "
                "cannot determine its naming scope"
            )
            raise PreconditionError(msg) from exc
        return scope

    def content_of(self, scope: Node, name: str) -> Node:
        """Resolve the entity called *name* in *scope* after a rename.

        Raises:
            PostconditionError: The renamed entity or its like-named
                child is missing.
        """
        if not scope.has_node(name):
            msg = f"Renamed node {name!r} not found under {scope.path!r}"
            raise PostconditionError(msg)
        renamed = scope.get_node(name)
        if not self.nested_content:
            return renamed
        if not renamed.has_node(name):
            msg = f"Renamed node {renamed.path!r} holds no child named {name!r}"
            raise PostconditionError(msg)
        return renamed.get_node(name)
