"""Workflow base class and hint checking."""

from __future__ import annotations

from typing import TYPE_CHECKING

from repostress.errors import ItemNotFoundError, WorkflowError

if TYPE_CHECKING:
    from repostress.infrastructure.node import Node
    from repostress.infrastructure.repository import Repository


class Workflow:
    """A set of operations bound to one subject node.

    ``hints()`` advertises which operations the subject currently allows.
    Every mutating operation checks its hint first and raises
    :class:`WorkflowError` when the hint is missing or False.
    """

    category: str = ""

    def __init__(self, repository: Repository, subject: Node) -> None:
        self._repository = repository
        self._subject = subject

    @property
    def subject(self) -> Node:
        return self._subject

    def hints(self) -> dict[str, bool]:
        return {}

    def _require_hint(self, method: str) -> None:
        if not self._subject.exists:
            msg = f"Workflow subject {self._subject!r} no longer exists"
            raise ItemNotFoundError(msg)
        if not self.hints().get(method, False):
            msg = f"{type(self).__name__}.{method} is not available on {self._subject.path!r}"
            raise WorkflowError(msg)
