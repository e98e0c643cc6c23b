"""Node — a handle on one entry of the repository tree.

A handle holds nothing but the row id. Every accessor is a blocking
round trip to the store, so a handle always reflects the committed (or,
inside a transaction on the same thread, the pending) state. Handles
whose row was removed raise :class:`ItemNotFoundError` when used.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

from sqlalchemy import func, select

from repostress.domain.naming import join_path
from repostress.errors import ItemNotFoundError
from repostress.infrastructure.database.schema import nodes, properties

if TYPE_CHECKING:
    from sqlalchemy import Connection, Row

    from repostress.infrastructure.repository import Repository

_MISSING = object()


class Node:
    """Handle on a stored node, identified by its row id."""

    __slots__ = ("_id", "_repository")

    def __init__(self, repository: Repository, node_id: int) -> None:
        self._repository = repository
        self._id = node_id

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def id(self) -> int:
        return self._id

    @property
    def repository(self) -> Repository:
        return self._repository

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Node):
            return NotImplemented
        return self._id == other._id and self._repository is other._repository

    def __hash__(self) -> int:
        return hash((id(self._repository), self._id))

    def __repr__(self) -> str:
        return f"Node(id={self._id})"

    # ------------------------------------------------------------------
    # Row access
    # ------------------------------------------------------------------

    def _row(self, conn: Connection) -> Row[Any]:
        row = conn.execute(select(nodes).where(nodes.c.id == self._id)).first()
        if row is None:
            msg = f"Node {self._id} no longer exists"
            raise ItemNotFoundError(msg)
        return row

    @property
    def exists(self) -> bool:
        with self._repository.reading() as conn:
            row = conn.execute(select(nodes.c.id).where(nodes.c.id == self._id)).first()
        return row is not None

    @property
    def name(self) -> str:
        with self._repository.reading() as conn:
            return str(self._row(conn).name)

    @property
    def node_type(self) -> str:
        with self._repository.reading() as conn:
            return str(self._row(conn).node_type)

    @property
    def parent(self) -> Node:
        """The parent node. The root has none and raises ItemNotFoundError."""
        with self._repository.reading() as conn:
            row = self._row(conn)
        if row.parent_id is None:
            msg = "The root node has no parent"
            raise ItemNotFoundError(msg)
        return Node(self._repository, row.parent_id)

    @property
    def is_root(self) -> bool:
        with self._repository.reading() as conn:
            return self._row(conn).parent_id is None

    @property
    def path(self) -> str:
        """Absolute path, resolved by walking parent rows up to the root."""
        segments: list[str] = []
        with self._repository.reading() as conn:
            row = self._row(conn)
            while row.parent_id is not None:
                segments.append(row.name)
                parent = conn.execute(select(nodes).where(nodes.c.id == row.parent_id)).first()
                if parent is None:
                    msg = f"Node {self._id} was detached while resolving its path"
                    raise ItemNotFoundError(msg)
                row = parent
        path = "/"
        for segment in reversed(segments):
            path = join_path(path, segment)
        return path

    @property
    def depth(self) -> int:
        """Number of ancestors; the root has depth 0."""
        depth = 0
        with self._repository.reading() as conn:
            row = self._row(conn)
            while row.parent_id is not None:
                depth += 1
                row = conn.execute(select(nodes).where(nodes.c.id == row.parent_id)).one()
        return depth

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    def has_node(self, name: str) -> bool:
        """Whether a direct child called *name* exists."""
        with self._repository.reading() as conn:
            self._row(conn)
            row = conn.execute(
                select(nodes.c.id).where(nodes.c.parent_id == self._id, nodes.c.name == name)
            ).first()
        return row is not None

    def get_node(self, name: str) -> Node:
        """The direct child called *name*."""
        with self._repository.reading() as conn:
            self._row(conn)
            row = conn.execute(
                select(nodes.c.id).where(nodes.c.parent_id == self._id, nodes.c.name == name)
            ).first()
        if row is None:
            msg = f"No child {name!r} under node {self._id}"
            raise ItemNotFoundError(msg)
        return Node(self._repository, row.id)

    def get_nodes(self) -> list[Node]:
        """All direct children, ordered by name."""
        with self._repository.reading() as conn:
            self._row(conn)
            rows = conn.execute(
                select(nodes.c.id).where(nodes.c.parent_id == self._id).order_by(nodes.c.name)
            ).fetchall()
        return [Node(self._repository, r.id) for r in rows]

    def child_count(self) -> int:
        with self._repository.reading() as conn:
            self._row(conn)
            return int(
                conn.execute(
                    select(func.count()).select_from(nodes).where(nodes.c.parent_id == self._id)
                ).scalar_one()
            )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    def get_property(self, name: str, default: Any = _MISSING) -> Any:
        """Decoded property value; ItemNotFoundError when absent and no default."""
        with self._repository.reading() as conn:
            self._row(conn)
            row = conn.execute(
                select(properties.c.value).where(
                    properties.c.node_id == self._id, properties.c.name == name
                )
            ).first()
        if row is None:
            if default is _MISSING:
                msg = f"No property {name!r} on node {self._id}"
                raise ItemNotFoundError(msg)
            return default
        return json.loads(row.value)

    def get_properties(self) -> dict[str, Any]:
        with self._repository.reading() as conn:
            self._row(conn)
            rows = conn.execute(
                select(properties.c.name, properties.c.value)
                .where(properties.c.node_id == self._id)
                .order_by(properties.c.name)
            ).fetchall()
        return {r.name: json.loads(r.value) for r in rows}
