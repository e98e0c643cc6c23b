"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``REPOSTRESS_*`` prefix
  3. TOML file    — ``repostress.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from repostress.config.discovery import discover
from repostress.config.models import (
    ActionsConfig,
    NamingConfig,
    RepositoryConfig,
    SeedConfig,
    StressConfig,
)


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from a ``repostress.toml`` file discovered via walk-up."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            raw = toml_path.read_text(encoding="utf-8")
            try:
                self._data = tomllib.loads(raw)
            except tomllib.TOMLDecodeError as exc:
                msg = f"Invalid TOML in {toml_path}: {exc}"
                raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        val = self._data.get(field_name)
        return val, field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class RepoStressSettings(BaseSettings):
    """Unified settings for the repostress CLI.

    Attributes:
        repo_root: Directory holding ``.repostress/`` (the enclosing
            repository found by walk-up, or CWD if there is none).
        config_path: The TOML file in effect, or None.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "REPOSTRESS_",
        "env_nested_delimiter": "__",
    }

    repo_root: Path = Field(default_factory=Path.cwd)
    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    repository: RepositoryConfig = Field(default_factory=RepositoryConfig)
    seed: SeedConfig = Field(default_factory=SeedConfig)
    stress: StressConfig = Field(default_factory=StressConfig)
    naming: NamingConfig = Field(default_factory=NamingConfig)
    actions: ActionsConfig = Field(default_factory=ActionsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        toml_path = getattr(_tls, "toml_path", None)
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, toml_path),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        repo_root: Path | None = None,
        **cli_flags: Any,
    ) -> RepoStressSettings:
        """Construct settings from a CLI invocation.

        Without an explicit *config_path*, walks up to the enclosing
        repository (``repostress.toml`` or ``.repostress/``) and takes
        *repo_root* from there. CLI flags are the highest-priority overrides.
        """
        toml_path: Path | None = None
        discovered_root: Path | None = None
        if config_path:
            p = Path(config_path)
            if p.is_file():
                toml_path = p
        else:
            discovered = discover(repo_root)
            toml_path = discovered.config
            discovered_root = discovered.root

        resolved_root = repo_root or discovered_root or Path.cwd()

        _tls.toml_path = toml_path
        try:
            return cls(
                repo_root=resolved_root,
                config_path=toml_path,
                **cli_flags,
            )
        finally:
            _tls.toml_path = None
