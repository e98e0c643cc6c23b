"""Tests for output formatting and Rich renderers."""

import json

from repostress.output.formatters import OutputSettings, format_result
from repostress.output.renderers import render_quiet, render_result
from repostress.services.result import ServiceResult

TREE = ServiceResult(
    ok=True,
    op="tree",
    data={
        "path": "/",
        "count": 2,
        "items": [
            {"id": 1, "path": "/", "type": "root", "depth": 0},
            {"id": 2, "path": "/assets", "type": "gallery", "depth": 1},
        ],
    },
)

RUN = ServiceResult(
    ok=True,
    op="run",
    data={
        "seed": 7,
        "workers": 2,
        "iterations": 3,
        "duration_ms": 12.5,
        "executed": 5,
        "succeeded": 4,
        "failed": 1,
        "skipped": 1,
        "actions": {"rename_asset": {"ok": 4, "failed": 1}},
        "errors": {"ConcurrentModificationError": 1},
        "failures": [
            {
                "worker": 1,
                "action": "rename_asset",
                "path": "/assets/a/a",
                "error": "ConcurrentModificationError",
                "message": "database is locked",
            }
        ],
    },
)

FAILED = ServiceResult.failure("rename", "NOT_FOUND", "No node at path '/x'", type="ItemNotFoundError")


class TestFormatResult:
    def test_json(self) -> None:
        out = format_result(TREE, settings=OutputSettings(json_output=True))
        assert json.loads(out)["data"]["count"] == 2

    def test_json_wins_over_quiet(self) -> None:
        out = format_result(TREE, settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "tree"

    def test_quiet(self) -> None:
        assert format_result(TREE, settings=OutputSettings(quiet=True)) == "/\n/assets"

    def test_default_is_rich(self) -> None:
        assert "assets" in format_result(TREE)


class TestRenderers:
    def test_tree_indents(self) -> None:
        lines = render_result(TREE).splitlines()
        assert lines == ["/", "  assets"]

    def test_run_summary(self) -> None:
        out = render_result(RUN)
        assert "OK" in out
        assert "executed: 5" in out
        assert "rename_asset" in out
        assert "ConcurrentModificationError: 1" in out
        assert "database is locked" not in out

    def test_run_verbose_lists_failures(self) -> None:
        assert "database is locked" in render_result(RUN, verbose=True)

    def test_error(self) -> None:
        out = render_result(FAILED)
        assert "ERROR" in out
        assert "NOT_FOUND: No node at path '/x'" in out

    def test_generic(self) -> None:
        result = ServiceResult(ok=True, op="rename", data={"source": "/a/a", "path": "/b/b"})
        out = render_result(result)
        assert "source: /a/a" in out
        assert "path: /b/b" in out

    def test_quiet_error(self) -> None:
        assert render_quiet(FAILED).startswith("ERROR: rename")

    def test_quiet_single_path(self) -> None:
        result = ServiceResult(ok=True, op="rename", data={"path": "/b/b"})
        assert render_quiet(result) == "/b/b"
