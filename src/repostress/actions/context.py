"""ActionContext — everything an action needs besides the node it acts on."""

from __future__ import annotations

import random
import threading
import time
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from repostress.domain.types import HandleLayout
from repostress.workflow.manager import WorkflowManager

if TYPE_CHECKING:
    from repostress.infrastructure.repository import Repository


@dataclass
class ActionContext:
    """Per-worker context shared by that worker's action instances.

    Attributes:
        repository: The store under test.
        workflows: Workflow lookup bound to *repository*.
        random: Seeded source actions draw their own seeds from.
        base_path: Root of the subtree the harness may touch.
        layout: Handle/document convention used to find naming scopes.
        max_attempts: Bound on random-suffix draws (None = unbounded).
        worker: Index of the owning worker thread.
    """

    repository: Repository
    workflows: WorkflowManager
    random: random.Random = field(default_factory=lambda: random.Random(time.time_ns()))
    base_path: str = "/assets"
    layout: HandleLayout = field(default_factory=HandleLayout)
    max_attempts: int | None = 32
    worker: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @classmethod
    def for_repository(
        cls,
        repository: Repository,
        *,
        seed: int | None = None,
        worker: int = 0,
    ) -> ActionContext:
        """Build a context from the repository's settings."""
        settings = repository.settings
        return cls(
            repository=repository,
            workflows=WorkflowManager(repository),
            random=random.Random(time.time_ns() if seed is None else seed),
            base_path=settings.repository.base_path,
            layout=HandleLayout(
                scope_levels=settings.naming.scope_levels,
                nested_content=settings.naming.nested_content,
            ),
            max_attempts=settings.naming.max_attempts or None,
            worker=worker,
        )

    def next_seed(self) -> int:
        """Draw a seed for a new per-action random source."""
        with self._lock:
            return self.random.getrandbits(64)
