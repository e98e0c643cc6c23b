"""SeedService — repository initialization and test-content population."""

from __future__ import annotations

from repostress.domain.naming import split_path
from repostress.domain.types import NodeType
from repostress.errors import ActionError, RepositoryError
from repostress.services.base import BaseService
from repostress.services.result import ServiceResult
from repostress.services.telemetry import trace_span, traced
from repostress.workflow.gallery import GALLERY_TYPE_PROPERTY, GalleryWorkflow


class SeedService(BaseService):
    """Creates the base gallery and fills it with folders and assets."""

    @traced
    def init(self) -> ServiceResult:
        """Ensure every gallery on the configured base path exists."""
        op = "init"
        config = self._repository.settings.repository
        created: list[str] = []
        try:
            with self._repository.transaction() as txn:
                current = self._repository.root_node
                for segment in split_path(config.base_path):
                    if current.has_node(segment):
                        current = current.get_node(segment)
                        continue
                    current = txn.add_node(
                        current,
                        segment,
                        NodeType.GALLERY,
                        {GALLERY_TYPE_PROPERTY: list(config.gallery_types)},
                    )
                    created.append(current.path)
        except (RepositoryError, ActionError) as exc:
            return self._error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "root": str(self._repository.root),
                "base_path": config.base_path,
                "created": created,
            },
        )

    @traced
    def seed(self, *, folders: int | None = None, assets: int | None = None) -> ServiceResult:
        """Create ``folder-N`` galleries holding ``asset-M`` items.

        Existing folders and assets are kept; only missing ones are added.
        """
        op = "seed"
        config = self._repository.settings
        n_folders = config.seed.folders if folders is None else folders
        n_assets = config.seed.assets_per_folder if assets is None else assets

        try:
            base = self._repository.get_node(config.repository.base_path)
            base_workflow = GalleryWorkflow(self._repository, base)
            item_types = base_workflow.gallery_types()
            if n_assets and not item_types:
                return ServiceResult.failure(
                    op,
                    "NO_GALLERY_TYPES",
                    f"Gallery {base.path!r} declares no gallery types",
                )
            folders_created = 0
            assets_created = 0
            for i in range(n_folders):
                folder_name = f"folder-{i}"
                with trace_span(folder_name):
                    if base.has_node(folder_name):
                        folder = base.get_node(folder_name)
                    else:
                        folder = base_workflow.create_folder(folder_name)
                        folders_created += 1
                    folder_workflow = GalleryWorkflow(self._repository, folder)
                    for j in range(n_assets):
                        asset_name = f"asset-{j}"
                        if folder.has_node(asset_name):
                            continue
                        item_type = item_types[j % len(item_types)]
                        folder_workflow.create_gallery_item(asset_name, item_type)
                        assets_created += 1
        except (RepositoryError, ActionError) as exc:
            return self._error_result(op, exc)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "base_path": config.repository.base_path,
                "folders_created": folders_created,
                "assets_created": assets_created,
            },
        )
