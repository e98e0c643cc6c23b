"""CheckService — verifies the handle/document layout after a run.

Reads the whole node table in one query so the check sees a single
consistent snapshot, then walks the subtree below the requested path.

Rules:
- every handle holds at least one asset document of the same name
- every asset document sits under a like-named handle
- every asset document holds a ``resource`` child
- every node name is legal
"""

from __future__ import annotations

from collections import defaultdict
from typing import Any

from sqlalchemy import select

from repostress.domain.naming import join_path, validate_name
from repostress.domain.types import RESOURCE_NAME, NodeType
from repostress.errors import InvalidNameError, RepositoryError
from repostress.infrastructure.database.schema import nodes
from repostress.services.base import BaseService
from repostress.services.result import ServiceResult
from repostress.services.telemetry import traced


class CheckService(BaseService):
    """Integrity check of the gallery layout convention."""

    @traced
    def check(self, path: str | None = None) -> ServiceResult:
        op = "check"
        path = path or self._repository.settings.repository.base_path
        try:
            start = self._repository.get_node(path)
        except RepositoryError as exc:
            return self._error_result(op, exc)

        with self._repository.reading() as conn:
            rows = conn.execute(
                select(nodes.c.id, nodes.c.parent_id, nodes.c.name, nodes.c.node_type)
            ).fetchall()

        by_id = {r.id: r for r in rows}
        children: dict[int, list[Any]] = defaultdict(list)
        for r in rows:
            if r.parent_id is not None:
                children[r.parent_id].append(r)

        issues: list[dict[str, str]] = []
        checked = 0
        stack: list[tuple[int, str]] = [(start.id, path)]
        while stack:
            node_id, node_path = stack.pop()
            row = by_id.get(node_id)
            if row is None:
                continue
            checked += 1
            self._check_node(row, node_path, by_id, children[node_id], issues)
            for child in sorted(children[node_id], key=lambda c: c.name, reverse=True):
                stack.append((child.id, join_path(node_path, child.name)))

        return ServiceResult(
            ok=True,
            op=op,
            data={"path": path, "checked": checked, "count": len(issues), "issues": issues},
        )

    @staticmethod
    def _check_node(
        row: Any,
        path: str,
        by_id: dict[int, Any],
        kids: list[Any],
        issues: list[dict[str, str]],
    ) -> None:
        def report(kind: str, message: str) -> None:
            issues.append({"path": path, "kind": kind, "message": message})

        if row.parent_id is not None:
            try:
                validate_name(row.name)
            except InvalidNameError as exc:
                report("invalid_name", str(exc))

        if row.node_type == NodeType.HANDLE:
            if not any(k.node_type == NodeType.ASSET and k.name == row.name for k in kids):
                report("empty_handle", f"Handle holds no document named {row.name!r}")
            for k in kids:
                if k.node_type == NodeType.ASSET and k.name != row.name:
                    report("stray_document", f"Document {k.name!r} does not match its handle")
        elif row.node_type == NodeType.ASSET:
            parent = by_id.get(row.parent_id)
            if parent is None or parent.node_type != NodeType.HANDLE or parent.name != row.name:
                report("orphan_document", "Document is not held by a like-named handle")
            if not any(k.node_type == NodeType.RESOURCE and k.name == RESOURCE_NAME for k in kids):
                report("missing_resource", "Document holds no resource")
