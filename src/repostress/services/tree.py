"""TreeService — read-only listing of a repository subtree."""

from __future__ import annotations

from typing import Any

from repostress.errors import RepositoryError
from repostress.infrastructure.node import Node
from repostress.services.base import BaseService
from repostress.services.result import ServiceResult
from repostress.services.telemetry import traced


class TreeService(BaseService):
    """Lists nodes below a path, depth first, children ordered by name."""

    @traced
    def tree(self, path: str = "/", *, depth: int | None = None) -> ServiceResult:
        op = "tree"
        try:
            start = self._repository.get_node(path)
            items: list[dict[str, Any]] = []
            self._walk(start, 0, depth, items)
        except RepositoryError as exc:
            return self._error_result(op, exc)
        return ServiceResult(ok=True, op=op, data={"path": path, "count": len(items), "items": items})

    def _walk(self, node: Node, level: int, max_depth: int | None, out: list[dict[str, Any]]) -> None:
        out.append({"id": node.id, "path": node.path, "type": node.node_type, "depth": level})
        if max_depth is not None and level >= max_depth:
            return
        for child in node.get_nodes():
            self._walk(child, level + 1, max_depth, out)
