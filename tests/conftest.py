"""Shared pytest fixtures and test helpers for repostress tests."""

from __future__ import annotations

import os
import random
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from repostress.config.settings import RepoStressSettings
from repostress.infrastructure.node import Node
from repostress.infrastructure.repository import Repository


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host REPOSTRESS_* variables out of settings resolution."""
    for key in list(os.environ):
        if key.startswith("REPOSTRESS_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def repo_root(tmp_path: Path) -> Path:
    """Temporary directory that will hold ``.repostress/``."""
    return tmp_path


@pytest.fixture
def repository(repo_root: Path) -> Iterator[Repository]:
    """Repository with the database created but no galleries yet."""
    repo = make_repository(repo_root)
    try:
        yield repo
    finally:
        repo.close()


@pytest.fixture
def gallery_repository(repository: Repository) -> Repository:
    """Repository with the base gallery ``/assets`` created."""
    from repostress.services.seed import SeedService

    result = SeedService(repository).init()
    assert result.ok, result.error
    return repository


@pytest.fixture
def seeded_repository(gallery_repository: Repository) -> Repository:
    """``/assets/folder-{0,1}`` holding ``asset-{0,1,2}`` each."""
    from repostress.services.seed import SeedService

    result = SeedService(gallery_repository).seed(folders=2, assets=3)
    assert result.ok, result.error
    return gallery_repository


@pytest.fixture
def _isolated_repo(repo_root: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp repository root so the CLI works in isolation.

    Use via ``@pytest.mark.usefixtures("_isolated_repo")`` on command test
    classes.
    """
    monkeypatch.chdir(repo_root)


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


class ScriptedRandom(random.Random):
    """Random source whose ``randrange`` returns scripted digits in order."""

    def __init__(self, digits: Iterable[int]) -> None:
        super().__init__(0)
        self._digits = iter(digits)

    def randrange(self, *args: Any, **kwargs: Any) -> int:  # type: ignore[override]
        return next(self._digits)


def make_repository(root: Path, **overrides: Any) -> Repository:
    """Build a Repository on *root* with settings overrides."""
    settings = RepoStressSettings.from_cli(repo_root=root, **overrides)
    return Repository(settings)


def add_item(repository: Repository, gallery_path: str, name: str, item_type: str = "asset") -> Node:
    """Create ``gallery/<name>/<name>/resource`` and return the document."""
    from repostress.workflow.gallery import GalleryWorkflow

    gallery = repository.get_node(gallery_path)
    return GalleryWorkflow(repository, gallery).create_gallery_item(name, item_type)


def add_folder(repository: Repository, parent_path: str, name: str) -> Node:
    """Create a sub gallery under *parent_path*."""
    from repostress.workflow.gallery import GalleryWorkflow

    parent = repository.get_node(parent_path)
    return GalleryWorkflow(repository, parent).create_folder(name)


def child_names(repository: Repository, path: str) -> list[str]:
    return [child.name for child in repository.get_node(path).get_nodes()]
