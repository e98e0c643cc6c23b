"""Locate the repository a command runs against.

The walk-up stops at the first directory holding either a
``repostress.toml`` or an initialised ``.repostress/`` state directory,
so commands run from anywhere below a repository reuse its database
instead of creating a fresh one. ``REPOSTRESS_CONFIG`` names a config
file explicitly and skips the walk.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

CONFIG_FILENAME = "repostress.toml"
CONFIG_ENV_VAR = "REPOSTRESS_CONFIG"
STATE_DIRNAME = ".repostress"


@dataclass(frozen=True)
class Discovered:
    """Outcome of a walk-up: the repository root and its config file, if any."""

    root: Path | None = None
    config: Path | None = None


def discover(start: Path | None = None) -> Discovered:
    """Walk up from *start* (default: cwd) to the enclosing repository.

    A directory with ``repostress.toml`` wins over a ``.repostress/``
    directory at the same level. An unset or dangling
    ``REPOSTRESS_CONFIG`` is ignored or yields nothing, respectively.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        p = Path(env_path)
        if p.is_file():
            return Discovered(root=p.resolve().parent, config=p)
        return Discovered()

    current = (start or Path.cwd()).resolve()
    while True:
        config = current / CONFIG_FILENAME
        if config.is_file():
            return Discovered(root=current, config=config)
        if (current / STATE_DIRNAME).is_dir():
            return Discovered(root=current)
        parent = current.parent
        if parent == current:
            return Discovered()
        current = parent
