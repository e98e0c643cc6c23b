"""Tests for telemetry spans and the @traced decorator."""

from collections.abc import Iterator

import pytest

from repostress.infrastructure.repository import Repository
from repostress.services.seed import SeedService
from repostress.services.telemetry import (
    disable_telemetry,
    enable_telemetry,
    get_current_span,
    trace_span,
)
from repostress.services.tree import TreeService


@pytest.fixture
def telemetry() -> Iterator[None]:
    enable_telemetry()
    try:
        yield
    finally:
        disable_telemetry()


class TestDisabled:
    def test_no_meta(self, gallery_repository: Repository) -> None:
        result = TreeService(gallery_repository).tree()
        assert result.meta is None

    def test_trace_span_yields_none(self) -> None:
        with trace_span("x") as span:
            assert span is None
        assert get_current_span() is None


@pytest.mark.usefixtures("telemetry")
class TestEnabled:
    def test_meta_injected(self, gallery_repository: Repository) -> None:
        result = TreeService(gallery_repository).tree()
        span = result.meta["telemetry"]
        assert span["name"] == "TreeService.tree"
        assert span["duration_ms"] >= 0

    def test_child_spans(self, gallery_repository: Repository) -> None:
        result = SeedService(gallery_repository).seed(folders=2, assets=1)
        children = [c["name"] for c in result.meta["telemetry"]["children"]]
        assert children == ["folder-0", "folder-1"]
