"""Tests for the init, seed, tree, rename, act, run, and check commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from repostress.cli import cli

DOCUMENT = "/assets/folder-0/asset-0/asset-0"


def _json(cli_runner: CliRunner, *args: str) -> dict:
    result = cli_runner.invoke(cli, ["--json", *args])
    assert result.exit_code == 0, result.output
    return json.loads(result.stdout)


@pytest.fixture
def seeded(cli_runner: CliRunner, _isolated_repo: None) -> None:
    _json(cli_runner, "init")
    _json(cli_runner, "seed", "--folders", "1", "--assets", "2")


@pytest.mark.usefixtures("_isolated_repo")
class TestInitAndSeed:
    def test_init(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        data = _json(cli_runner, "init")
        assert data["ok"] is True
        assert data["data"]["created"] == ["/assets"]
        assert (tmp_path / ".repostress" / "repository.db").is_file()

    def test_init_rich(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["init"])
        assert result.exit_code == 0
        assert "OK" in result.output
        assert "init" in result.output

    def test_seed(self, cli_runner: CliRunner) -> None:
        _json(cli_runner, "init")
        data = _json(cli_runner, "seed", "--folders", "2", "--assets", "1")
        assert data["data"]["folders_created"] == 2
        assert data["data"]["assets_created"] == 2

    def test_seed_before_init_fails(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "seed"])
        assert result.exit_code == 1
        assert result.stdout == ""

    def test_config_file_base_path(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "repostress.toml").write_text('[repository]\nbase_path = "/media"\n')
        data = _json(cli_runner, "init")
        assert data["data"]["base_path"] == "/media"


@pytest.mark.usefixtures("seeded")
class TestTreeRenameAct:
    def test_tree(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "tree", "/assets", "--depth", "1")
        assert [i["path"] for i in data["data"]["items"]] == ["/assets", "/assets/folder-0"]

    def test_tree_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "tree", "/assets/folder-0", "--depth", "1"])
        assert result.exit_code == 0
        assert result.output.split() == [
            "/assets/folder-0",
            "/assets/folder-0/asset-0",
            "/assets/folder-0/asset-1",
        ]

    def test_rename(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "rename", DOCUMENT, "--seed", "1")
        assert data["op"] == "rename"
        new_path = data["data"]["path"]
        assert new_path.startswith("/assets/folder-0/asset-0.")
        assert _json(cli_runner, "check")["data"]["count"] == 0

    def test_rename_not_operable(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["rename", "/assets"])
        assert result.exit_code == 1
        assert "NOT_OPERABLE" in result.output

    def test_act(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "act", "copy_asset", DOCUMENT, "--seed", "2")
        assert data["data"]["action"] == "copy_asset"
        assert data["data"]["path"].startswith("/assets/folder-0/asset-0.")

    def test_act_unknown(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "act", "explode", "/assets"])
        assert result.exit_code == 1
        assert result.stdout == ""


@pytest.mark.usefixtures("seeded")
class TestRunAndCheck:
    def test_run(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "run", "-w", "2", "-n", "4", "--seed", "5")
        assert data["ok"] is True
        report = data["data"]
        assert report["executed"] + report["skipped"] == 8

    def test_run_restricted(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "run", "-w", "1", "-n", "3", "--action", "browse")
        assert set(data["data"]["actions"]) <= {"browse"}

    def test_run_rich(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "-w", "1", "-n", "2", "--seed", "1"])
        assert result.exit_code == 0
        assert "executed:" in result.output

    def test_run_bad_workers(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["run", "-w", "0"])
        assert result.exit_code == 2

    def test_check(self, cli_runner: CliRunner) -> None:
        data = _json(cli_runner, "check")
        assert data["data"]["count"] == 0
        assert data["data"]["checked"] == 1 + 1 + 6
