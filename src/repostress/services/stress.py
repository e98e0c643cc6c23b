"""StressService — concurrent randomized action runs.

Each worker thread owns an :class:`ActionContext` and its own action
instances, all seeded from one master seed so a run can be replayed
(modulo thread interleaving). A step is:

    random walk from the base path -> weighted pick among operable
    actions -> execute -> record the outcome

Action failures are outcomes, not errors: the run always returns
``ok=True`` with a report unless the run itself cannot start.
"""

from __future__ import annotations

import random
import threading
import time
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import structlog

from repostress.actions.context import ActionContext
from repostress.actions.registry import available_actions, build_actions
from repostress.errors import ActionError, ItemNotFoundError, RepositoryError
from repostress.services.base import BaseService
from repostress.services.result import ServiceResult
from repostress.services.telemetry import traced

if TYPE_CHECKING:
    from collections.abc import Sequence

    from repostress.actions.base import Action
    from repostress.infrastructure.node import Node

log = structlog.get_logger(__name__)


def random_walk(start: Node, rng: random.Random, stop_probability: float) -> Node:
    """Descend from *start* into random children until a leaf or a random stop."""
    node = start
    while True:
        children = node.get_nodes()
        if not children or rng.random() < stop_probability:
            return node
        node = rng.choice(children)


@dataclass
class _Tally:
    """Thread-safe outcome counters shared by all workers of one run."""

    max_failures: int
    executed: int = 0
    succeeded: int = 0
    skipped: int = 0
    per_action: dict[str, Counter[str]] = field(default_factory=dict)
    errors: Counter[str] = field(default_factory=Counter)
    failures: list[dict[str, Any]] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def skip(self) -> None:
        with self._lock:
            self.skipped += 1

    def success(self, action: str) -> None:
        with self._lock:
            self.executed += 1
            self.succeeded += 1
            self.per_action.setdefault(action, Counter())["ok"] += 1

    def failure(self, worker: int, action: str, path: str, exc: Exception) -> None:
        with self._lock:
            self.executed += 1
            self.per_action.setdefault(action, Counter())["failed"] += 1
            self.errors[type(exc).__name__] += 1
            if len(self.failures) < self.max_failures:
                self.failures.append(
                    {
                        "worker": worker,
                        "action": action,
                        "path": path,
                        "error": type(exc).__name__,
                        "message": str(exc),
                    }
                )

    def report(self) -> dict[str, Any]:
        with self._lock:
            return {
                "executed": self.executed,
                "succeeded": self.succeeded,
                "failed": self.executed - self.succeeded,
                "skipped": self.skipped,
                "actions": {
                    name: {"ok": c["ok"], "failed": c["failed"]}
                    for name, c in sorted(self.per_action.items())
                },
                "errors": dict(self.errors.most_common()),
                "failures": list(self.failures),
            }


class StressService(BaseService):
    """Runs randomized actions from several worker threads."""

    @traced
    def run(
        self,
        *,
        workers: int | None = None,
        iterations: int | None = None,
        seed: int | None = None,
        actions: Sequence[str] | None = None,
    ) -> ServiceResult:
        """Execute ``workers x iterations`` randomized steps and report outcomes."""
        op = "run"
        settings = self._repository.settings
        config = settings.stress
        n_workers = config.workers if workers is None else workers
        n_iterations = config.iterations if iterations is None else iterations
        if seed is None:
            seed = config.seed if config.seed is not None else random.SystemRandom().getrandbits(32)

        if n_workers < 1 or n_iterations < 0:
            return ServiceResult.failure(
                op,
                "INVALID_ARGUMENT",
                f"Need at least one worker and non-negative iterations "
                f"(workers={n_workers}, iterations={n_iterations})",
            )

        base_path = settings.repository.base_path
        try:
            self._repository.get_node(base_path)
        except ItemNotFoundError:
            return ServiceResult.failure(
                op,
                "NOT_FOUND",
                f"Base path {base_path!r} does not exist; run 'repostress init' first",
            )

        registry = available_actions(self._plugins)
        master = random.Random(seed)
        plans: list[tuple[ActionContext, list[Action]]] = []
        try:
            for worker in range(n_workers):
                context = ActionContext.for_repository(
                    self._repository, seed=master.getrandbits(64), worker=worker
                )
                worker_actions = build_actions(
                    context,
                    registry,
                    only=actions,
                    disabled=settings.actions.disabled,
                    weights=settings.actions.weights,
                )
                plans.append((context, worker_actions))
        except KeyError as exc:
            return ServiceResult.failure(
                op, "UNKNOWN_ACTION", str(exc.args[0]), available=sorted(registry)
            )
        if not plans[0][1]:
            return ServiceResult.failure(op, "NO_ACTIONS", "Every selected action is disabled")

        tally = _Tally(max_failures=config.max_failures_reported)
        started = time.perf_counter()
        log.info("run.start", seed=seed, workers=n_workers, iterations=n_iterations)
        with ThreadPoolExecutor(max_workers=n_workers, thread_name_prefix="repostress") as pool:
            futures = [
                pool.submit(self._work, context, worker_actions, n_iterations, tally)
                for context, worker_actions in plans
            ]
            for future in futures:
                future.result()
        duration_ms = round((time.perf_counter() - started) * 1000, 2)

        data: dict[str, Any] = {
            "seed": seed,
            "workers": n_workers,
            "iterations": n_iterations,
            "duration_ms": duration_ms,
            **tally.report(),
        }
        warnings = list(tally.warnings)
        self._dispatch_event("post_run", {"stats": data}, warnings)
        log.info(
            "run.complete",
            executed=data["executed"],
            failed=data["failed"],
            skipped=data["skipped"],
            duration_ms=duration_ms,
        )
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings)

    def _work(
        self,
        context: ActionContext,
        actions: list[Action],
        iterations: int,
        tally: _Tally,
    ) -> None:
        """Worker loop: one thread, one context, *iterations* steps."""
        worker_log = log.bind(worker=context.worker)
        rng = random.Random(context.next_seed())
        stop_probability = self._repository.settings.stress.stop_probability

        for _step in range(iterations):
            try:
                start = self._repository.get_node(context.base_path)
                node = random_walk(start, rng, stop_probability)
                operable = [a for a in actions if a.can_operate_on_node(node)]
                path = node.path
            except RepositoryError:
                # the node vanished under a concurrent writer while being selected
                tally.skip()
                continue
            if not operable:
                tally.skip()
                continue

            action = rng.choices(operable, weights=[a.weight for a in operable])[0]
            try:
                action.execute(node)
            except (RepositoryError, ActionError) as exc:
                worker_log.debug("action.failed", action=action.name, path=path, error=str(exc))
                tally.failure(context.worker, action.name, path, exc)
                self._notify(context.worker, action.name, path, str(exc), tally)
            except Exception as exc:
                worker_log.warning("action.crashed", action=action.name, path=path, exc_info=True)
                tally.failure(context.worker, action.name, path, exc)
                self._notify(context.worker, action.name, path, str(exc), tally)
            else:
                tally.success(action.name)
                self._notify(context.worker, action.name, path, None, tally)

    def _notify(
        self,
        worker: int,
        action: str,
        path: str,
        error: str | None,
        tally: _Tally,
    ) -> None:
        payload = {
            "worker": worker,
            "action": action,
            "path": path,
            "ok": error is None,
            "error": error,
        }
        with tally._lock:
            self._dispatch_event("post_action", payload, tally.warnings)
