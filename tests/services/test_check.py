"""Tests for CheckService — layout integrity reporting."""

from repostress.domain.types import NodeType
from repostress.infrastructure.repository import Repository
from repostress.services.check import CheckService
from tests.conftest import add_item


def _kinds(result) -> set[str]:
    return {issue["kind"] for issue in result.data["issues"]}


class TestCheck:
    def test_clean(self, seeded_repository: Repository) -> None:
        result = CheckService(seeded_repository).check()
        assert result.ok
        assert result.data["path"] == "/assets"
        assert result.data["count"] == 0
        assert result.data["checked"] == 1 + 2 + 18

    def test_stray_and_orphan(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        with gallery_repository.transaction() as txn:
            txn.rename_node(document, "other")
        result = CheckService(gallery_repository).check()
        assert _kinds(result) == {"empty_handle", "stray_document", "orphan_document"}

    def test_missing_resource(self, gallery_repository: Repository) -> None:
        document = add_item(gallery_repository, "/assets", "logo")
        with gallery_repository.transaction() as txn:
            txn.remove_node(document.get_node("resource"))
        result = CheckService(gallery_repository).check()
        assert _kinds(result) == {"missing_resource"}
        assert result.data["issues"][0]["path"] == "/assets/logo/logo"

    def test_empty_handle(self, gallery_repository: Repository) -> None:
        with gallery_repository.transaction() as txn:
            txn.add_node(gallery_repository.get_node("/assets"), "hollow", NodeType.HANDLE)
        assert _kinds(CheckService(gallery_repository).check()) == {"empty_handle"}

    def test_subtree_only(self, seeded_repository: Repository) -> None:
        result = CheckService(seeded_repository).check("/assets/folder-1")
        assert result.data["checked"] == 1 + 9

    def test_missing_path(self, seeded_repository: Repository) -> None:
        result = CheckService(seeded_repository).check("/ghost")
        assert result.error.code == "NOT_FOUND"
