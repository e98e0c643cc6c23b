"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, repostress.toml only contains
overrides. A fresh repository needs no config file at all.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator


class RepositoryConfig(BaseModel):
    """[repository] section."""

    model_config = {"frozen": True}

    name: str = "stress-repository"
    base_path: str = "/assets"
    gallery_types: list[str] = Field(default_factory=lambda: ["asset"])
    busy_timeout: float = Field(default=30.0, gt=0)

    @field_validator("base_path")
    @classmethod
    def _absolute(cls, value: str) -> str:
        if not value.startswith("/"):
            msg = f"base_path must be absolute, got {value!r}"
            raise ValueError(msg)
        return value.rstrip("/") or "/"


class SeedConfig(BaseModel):
    """[seed] section."""

    model_config = {"frozen": True}

    folders: int = 3
    assets_per_folder: int = 5


class StressConfig(BaseModel):
    """[stress] section."""

    model_config = {"frozen": True}

    workers: int = 4
    iterations: int = 50
    seed: int | None = None
    max_failures_reported: int = 20
    stop_probability: float = 1 / 3


class NamingConfig(BaseModel):
    """[naming] section.

    ``max_attempts = 0`` disables the bound on random-suffix draws.
    """

    model_config = {"frozen": True}

    max_attempts: int = Field(default=32, ge=0)
    scope_levels: int = Field(default=2, ge=1)
    nested_content: bool = True


class ActionsConfig(BaseModel):
    """[actions] section."""

    model_config = {"frozen": True}

    weights: dict[str, float] = Field(default_factory=dict)
    disabled: list[str] = Field(default_factory=list)

