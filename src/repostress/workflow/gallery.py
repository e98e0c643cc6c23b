"""GalleryWorkflow — creates asset folders and gallery items."""

from __future__ import annotations

from repostress.domain.naming import validate_name
from repostress.domain.types import (
    DEFAULT_AVAILABILITY,
    DEFAULT_MIME_TYPE,
    RESOURCE_NAME,
    NodeType,
)
from repostress.errors import WorkflowError
from repostress.infrastructure.node import Node
from repostress.services._helpers import now_iso
from repostress.workflow.base import Workflow

GALLERY_TYPE_PROPERTY = "gallerytype"


class GalleryWorkflow(Workflow):
    """Operations on a ``gallery`` folder node."""

    category = "gallery"

    def hints(self) -> dict[str, bool]:
        is_gallery = self._subject.node_type == NodeType.GALLERY
        return {"createGalleryItem": is_gallery, "createFolder": is_gallery}

    def gallery_types(self) -> list[str]:
        """Asset types this gallery accepts."""
        return list(self._subject.get_property(GALLERY_TYPE_PROPERTY, []))

    def create_gallery_item(self, name: str, item_type: str) -> Node:
        """Create ``<name>/<name>/resource`` and return the asset document.

        Raises:
            WorkflowError: *item_type* is not one of :meth:`gallery_types`.
            ItemExistsError: the gallery already holds *name*.
        """
        self._require_hint("createGalleryItem")
        validate_name(name)
        allowed = self.gallery_types()
        if item_type not in allowed:
            msg = f"Gallery {self._subject.path!r} does not accept type {item_type!r}: {allowed}"
            raise WorkflowError(msg)

        with self._repository.transaction() as txn:
            handle = txn.add_node(self._subject, name, NodeType.HANDLE)
            document = txn.add_node(
                handle,
                name,
                NodeType.ASSET,
                {"assettype": item_type, "availability": list(DEFAULT_AVAILABILITY)},
            )
            txn.add_node(
                document,
                RESOURCE_NAME,
                NodeType.RESOURCE,
                {"data": "", "mimeType": DEFAULT_MIME_TYPE, "lastModified": now_iso()},
            )
        return document

    def create_folder(self, name: str) -> Node:
        """Create a sub gallery that inherits this gallery's types."""
        self._require_hint("createFolder")
        types = self.gallery_types()
        with self._repository.transaction() as txn:
            return txn.add_node(
                self._subject, name, NodeType.GALLERY, {GALLERY_TYPE_PROPERTY: types}
            )
