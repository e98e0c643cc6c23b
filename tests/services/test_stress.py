"""Tests for StressService — concurrent randomized runs."""

from __future__ import annotations

import random
from pathlib import Path

import pytest

from repostress.infrastructure.repository import Repository
from repostress.plugins import hookimpl
from repostress.plugins.manager import PluginManager
from repostress.services.check import CheckService
from repostress.services.stress import StressService, random_walk
from tests.conftest import make_repository


class _Recorder:
    def __init__(self) -> None:
        self.actions: list[dict] = []
        self.runs: list[dict] = []

    @hookimpl
    def post_action(self, worker, action, path, ok, error) -> None:
        self.actions.append({"worker": worker, "action": action, "ok": ok})

    @hookimpl
    def post_run(self, stats) -> None:
        self.runs.append(stats)


class _Broken:
    @hookimpl
    def post_run(self, stats) -> None:
        raise RuntimeError("observer failed")


class TestRandomWalk:
    def test_stops_at_leaf(self, seeded_repository: Repository) -> None:
        leaf = seeded_repository.get_node("/assets/folder-0/asset-0/asset-0/resource")
        assert random_walk(leaf, random.Random(0), 0.0) == leaf

    def test_never_stops_early_at_zero(self, seeded_repository: Repository) -> None:
        start = seeded_repository.get_node("/assets")
        node = random_walk(start, random.Random(4), 0.0)
        assert node.name == "resource"

    def test_stops_immediately_at_one(self, seeded_repository: Repository) -> None:
        start = seeded_repository.get_node("/assets")
        assert random_walk(start, random.Random(4), 1.0) == start


class TestRun:
    def test_report_totals(self, seeded_repository: Repository) -> None:
        result = StressService(seeded_repository).run(workers=2, iterations=10, seed=7)
        assert result.ok
        assert result.op == "run"
        d = result.data
        assert d["seed"] == 7
        assert d["executed"] + d["skipped"] == 2 * 10
        assert d["succeeded"] + d["failed"] == d["executed"]
        assert sum(c["ok"] + c["failed"] for c in d["actions"].values()) == d["executed"]

    def test_renames_keep_layout(self, seeded_repository: Repository) -> None:
        result = StressService(seeded_repository).run(
            workers=3, iterations=15, seed=1, actions=["rename_asset", "browse"]
        )
        assert result.ok
        assert set(result.data["actions"]) <= {"rename_asset", "browse"}
        check = CheckService(seeded_repository).check()
        assert check.data["issues"] == []
        # six assets in, six assets out
        tree = [
            n
            for folder in seeded_repository.get_node("/assets").get_nodes()
            for n in folder.get_nodes()
        ]
        assert len(tree) == 6

    def test_single_worker_reproducible(self, tmp_path: Path) -> None:
        reports = []
        for name in ("a", "b"):
            root = tmp_path / name
            root.mkdir()
            repo = make_repository(root)
            try:
                from repostress.services.seed import SeedService

                SeedService(repo).init()
                SeedService(repo).seed(folders=2, assets=2)
                result = StressService(repo).run(workers=1, iterations=20, seed=99)
                reports.append({k: result.data[k] for k in ("executed", "skipped", "actions")})
            finally:
                repo.close()
        assert reports[0] == reports[1]

    def test_zero_iterations(self, seeded_repository: Repository) -> None:
        result = StressService(seeded_repository).run(workers=2, iterations=0, seed=1)
        assert result.ok
        assert result.data["executed"] == 0

    def test_config_defaults(self, tmp_path: Path) -> None:
        repo = make_repository(tmp_path, stress={"workers": 1, "iterations": 3, "seed": 5})
        try:
            from repostress.services.seed import SeedService

            SeedService(repo).init()
            result = StressService(repo).run()
            assert result.data["workers"] == 1
            assert result.data["iterations"] == 3
            assert result.data["seed"] == 5
        finally:
            repo.close()


class TestRunErrors:
    def test_not_initialized(self, repository: Repository) -> None:
        result = StressService(repository).run(workers=1, iterations=1)
        assert not result.ok
        assert result.error.code == "NOT_FOUND"
        assert "repostress init" in result.error.message

    def test_unknown_action(self, seeded_repository: Repository) -> None:
        result = StressService(seeded_repository).run(workers=1, iterations=1, actions=["nope"])
        assert result.error.code == "UNKNOWN_ACTION"

    @pytest.mark.parametrize(("workers", "iterations"), [(0, 1), (1, -1)])
    def test_invalid_arguments(self, seeded_repository: Repository, workers, iterations) -> None:
        result = StressService(seeded_repository).run(workers=workers, iterations=iterations)
        assert result.error.code == "INVALID_ARGUMENT"

    def test_all_disabled(self, tmp_path: Path) -> None:
        repo = make_repository(tmp_path, actions={"disabled": ["browse"]})
        try:
            from repostress.services.seed import SeedService

            SeedService(repo).init()
            result = StressService(repo).run(workers=1, iterations=1, actions=["browse"])
            assert result.error.code == "NO_ACTIONS"
        finally:
            repo.close()


class TestPluginHooks:
    def test_observers_called(self, seeded_repository: Repository) -> None:
        pm = PluginManager()
        recorder = _Recorder()
        pm.register_plugin(recorder, name="recorder")
        result = StressService(seeded_repository, plugins=pm).run(workers=2, iterations=5, seed=3)
        assert len(recorder.actions) == result.data["executed"]
        assert len(recorder.runs) == 1
        assert recorder.runs[0]["executed"] == result.data["executed"]

    def test_observer_failure_is_warning(self, seeded_repository: Repository) -> None:
        pm = PluginManager()
        pm.register_plugin(_Broken(), name="broken")
        result = StressService(seeded_repository, plugins=pm).run(workers=1, iterations=2, seed=3)
        assert result.ok
        assert result.warnings == ["Plugin hook post_run failed"]
