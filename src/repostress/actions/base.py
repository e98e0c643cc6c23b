"""Action base class.

An action is one randomized operation the harness can apply to a node.
Subclasses declare ``name``, ``weight`` and ``is_write_action``, decide
operability in :meth:`Action.can_operate_on_node`, and implement
:meth:`Action.do_execute`.
"""

from __future__ import annotations

import logging
import random
import time
from typing import TYPE_CHECKING, ClassVar

if TYPE_CHECKING:
    from repostress.actions.context import ActionContext
    from repostress.infrastructure.node import Node

logger = logging.getLogger(__name__)


class Action:
    """Base class for all harness actions."""

    name: ClassVar[str] = ""
    weight: float = 1.0
    is_write_action: ClassVar[bool] = True

    def __init__(self, context: ActionContext, *, rng: random.Random | None = None) -> None:
        self._context = context
        self._random = rng if rng is not None else random.Random(context.next_seed())

    @property
    def context(self) -> ActionContext:
        return self._context

    def can_operate_on_node(self, node: Node) -> bool:
        return False

    def execute(self, node: Node) -> Node | None:
        """Run the action on *node* and return the node it produced, if any.

        Errors propagate unchanged; the caller decides how to record them.
        """
        started = time.perf_counter()
        logger.debug("worker %d: %s on node %d", self._context.worker, self.name, node.id)
        try:
            return self.do_execute(node)
        finally:
            logger.debug(
                "worker %d: %s done in %.2fms",
                self._context.worker,
                self.name,
                (time.perf_counter() - started) * 1000,
            )

    def do_execute(self, node: Node) -> Node | None:
        raise NotImplementedError
