"""Tests for repository discovery by walk-up."""

from pathlib import Path

import pytest

from repostress.config.discovery import Discovered, discover


class TestDiscover:
    def test_config_in_start_dir(self, tmp_path: Path) -> None:
        (tmp_path / "repostress.toml").write_text("")
        found = discover(tmp_path)
        assert found.root == tmp_path.resolve()
        assert found.config == (tmp_path / "repostress.toml").resolve()

    def test_walks_up_to_config(self, tmp_path: Path) -> None:
        (tmp_path / "repostress.toml").write_text("")
        deep = tmp_path / "x" / "y"
        deep.mkdir(parents=True)
        assert discover(deep).root == tmp_path.resolve()

    def test_state_dir_marks_root_without_config(self, tmp_path: Path) -> None:
        (tmp_path / ".repostress").mkdir()
        deep = tmp_path / "galleries"
        deep.mkdir()
        found = discover(deep)
        assert found.root == tmp_path.resolve()
        assert found.config is None

    def test_nearest_state_dir_shadows_outer_config(self, tmp_path: Path) -> None:
        (tmp_path / "repostress.toml").write_text("")
        inner = tmp_path / "inner"
        (inner / ".repostress").mkdir(parents=True)
        found = discover(inner)
        assert found.root == inner.resolve()
        assert found.config is None

    def test_config_beside_state_dir(self, tmp_path: Path) -> None:
        (tmp_path / ".repostress").mkdir()
        (tmp_path / "repostress.toml").write_text("")
        assert discover(tmp_path).config == (tmp_path / "repostress.toml").resolve()

    def test_env_var_wins(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        target = tmp_path / "elsewhere" / "other.toml"
        target.parent.mkdir()
        target.write_text("")
        (tmp_path / "repostress.toml").write_text("")
        monkeypatch.setenv("REPOSTRESS_CONFIG", str(target))
        found = discover(tmp_path)
        assert found.config == target
        assert found.root == target.parent.resolve()

    def test_env_var_missing_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("REPOSTRESS_CONFIG", str(tmp_path / "absent.toml"))
        assert discover(tmp_path) == Discovered()
