"""Tests for AssetWorkflow."""

import pytest

from repostress.domain.types import NodeType
from repostress.errors import ItemExistsError, ItemNotFoundError, WorkflowError
from repostress.infrastructure.repository import Repository
from repostress.workflow.asset import AssetWorkflow
from tests.conftest import add_folder, add_item, child_names


class TestHints:
    def test_gallery_item(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        hints = AssetWorkflow(gallery_repository, document).hints()
        assert hints == {"rename": True, "move": True, "copy": True, "delete": True}

    def test_handle_mismatch(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        with gallery_repository.transaction() as txn:
            txn.rename_node(document, "other")
        assert not any(AssetWorkflow(gallery_repository, document).hints().values())

    def test_non_asset(self, gallery_repository: Repository) -> None:
        base = gallery_repository.get_node("/assets")
        assert not any(AssetWorkflow(gallery_repository, base).hints().values())


class TestRename:
    def test_renames_handle_and_document(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        AssetWorkflow(gallery_repository, document).rename("logo.4")
        assert document.path == "/assets/logo.4/logo.4"
        assert child_names(gallery_repository, "/assets") == ["logo.4"]
        assert document.get_node("resource").exists

    def test_taken_name(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        add_item(gallery_repository, "/assets", "logo.4")
        with pytest.raises(ItemExistsError):
            AssetWorkflow(gallery_repository, document).rename("logo.4")
        assert document.path == "/assets/logo/logo"

    def test_stale_subject(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        workflow = AssetWorkflow(gallery_repository, document)
        workflow.delete()
        with pytest.raises(ItemNotFoundError):
            workflow.rename("logo.1")

    def test_refused_without_hint(self, gallery_repository: Repository) -> None:
        base = gallery_repository.get_node("/assets")
        with pytest.raises(WorkflowError):
            AssetWorkflow(gallery_repository, base).rename("x")


class TestMoveCopyDelete:
    def test_move(self, gallery_repository: Repository) -> None:
        add_folder(gallery_repository, "/assets", "sub")
        document = add_item(gallery_repository, "/assets", "logo")
        AssetWorkflow(gallery_repository, document).move("/assets/sub", "moved")
        assert document.path == "/assets/sub/moved/moved"

    def test_move_to_non_gallery(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        other = add_item(gallery_repository, "/assets", "other")
        with pytest.raises(WorkflowError):
            AssetWorkflow(gallery_repository, document).move(other.path, "x")

    def test_copy(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        copy = AssetWorkflow(gallery_repository, document).copy("/assets", "logo.2")
        assert copy.path == "/assets/logo.2/logo.2"
        assert copy.node_type == NodeType.ASSET
        assert document.path == "/assets/logo/logo"

    def test_delete(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        AssetWorkflow(gallery_repository, document).delete()
        assert child_names(gallery_repository, "/assets") == []
