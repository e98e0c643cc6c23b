"""Repository — transactional access to the node tree.

The Repository is the single dependency injected into every workflow,
action, and service. It owns the SQLAlchemy engine and hands out
:class:`Node` handles. Writes go through :meth:`Repository.transaction`,
which yields a :class:`RepositoryTransaction`:

- **Write lock**: the transaction starts with ``BEGIN IMMEDIATE``, so
  concurrent writers queue instead of failing on lock upgrade.
- **Visibility**: while a transaction is open, node handles used on the
  same thread read through its connection and see pending writes.
- **Errors**: sibling-name constraint violations surface as
  :class:`ItemExistsError`, busy/locked database errors as
  :class:`ConcurrentModificationError`.
"""

from __future__ import annotations

import json
import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, OperationalError

from repostress.domain.naming import split_path, validate_name
from repostress.errors import (
    ConcurrentModificationError,
    InvalidNameError,
    ItemExistsError,
    ItemNotFoundError,
)
from repostress.infrastructure.database.engine import IMMEDIATE_OPTION, init_database
from repostress.infrastructure.database.schema import SIBLING_NAME_CONSTRAINT, nodes, properties
from repostress.infrastructure.node import Node
from repostress.services._helpers import now_iso

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from repostress.config.settings import RepoStressSettings

logger = logging.getLogger(__name__)

_BUSY_MARKERS = ("database is locked", "database is busy", "database table is locked")


def _is_sibling_conflict(exc: IntegrityError) -> bool:
    message = str(exc.orig)
    return "nodes.parent_id, nodes.name" in message or SIBLING_NAME_CONSTRAINT in message


def _is_busy(exc: OperationalError) -> bool:
    message = str(exc.orig).lower()
    return any(marker in message for marker in _BUSY_MARKERS)


# ---------------------------------------------------------------------------
# RepositoryTransaction: yielded to callers within transaction()
# ---------------------------------------------------------------------------


@dataclass
class RepositoryTransaction:
    """Active write transaction with node-level mutation helpers."""

    conn: Connection
    _repository: Repository

    def _require(self, node: Node) -> Any:
        row = self.conn.execute(select(nodes).where(nodes.c.id == node.id)).first()
        if row is None:
            msg = f"Node {node.id} no longer exists"
            raise ItemNotFoundError(msg)
        return row

    def _check_free(self, parent_id: int, name: str, *, ignore_id: int | None = None) -> None:
        row = self.conn.execute(
            select(nodes.c.id).where(nodes.c.parent_id == parent_id, nodes.c.name == name)
        ).first()
        if row is not None and row.id != ignore_id:
            msg = f"A node named {name!r} already exists under node {parent_id}"
            raise ItemExistsError(msg)

    def _check_not_below(self, node: Node, target: Node) -> None:
        ancestor_id: int | None = target.id
        while ancestor_id is not None:
            if ancestor_id == node.id:
                msg = f"Node {target.id} lies inside the subtree of node {node.id}"
                raise InvalidNameError(msg)
            ancestor_id = self.conn.execute(
                select(nodes.c.parent_id).where(nodes.c.id == ancestor_id)
            ).scalar_one()

    def _touch(self, node_id: int, stamp: str) -> None:
        self.conn.execute(update(nodes).where(nodes.c.id == node_id).values(modified=stamp))

    def add_node(
        self,
        parent: Node,
        name: str,
        node_type: str,
        props: dict[str, Any] | None = None,
    ) -> Node:
        """Create a child of *parent*. Raises ItemExistsError if *name* is taken."""
        validate_name(name)
        self._require(parent)
        self._check_free(parent.id, name)
        stamp = now_iso()
        result = self.conn.execute(
            insert(nodes).values(
                parent_id=parent.id,
                name=name,
                node_type=node_type,
                created=stamp,
                modified=stamp,
            )
        )
        node_id = result.inserted_primary_key[0]
        assert node_id is not None
        node = Node(self._repository, int(node_id))
        for key, value in (props or {}).items():
            self.set_property(node, key, value)
        self._touch(parent.id, stamp)
        return node

    def rename_node(self, node: Node, new_name: str) -> None:
        """Rename *node* in place. Raises ItemExistsError if a sibling holds *new_name*."""
        validate_name(new_name)
        row = self._require(node)
        if row.parent_id is None:
            msg = "The root node cannot be renamed"
            raise InvalidNameError(msg)
        self._check_free(row.parent_id, new_name, ignore_id=node.id)
        stamp = now_iso()
        self.conn.execute(
            update(nodes).where(nodes.c.id == node.id).values(name=new_name, modified=stamp)
        )
        self._touch(row.parent_id, stamp)

    def move_node(self, node: Node, new_parent: Node, new_name: str) -> None:
        """Reparent *node* under *new_parent* as *new_name*."""
        validate_name(new_name)
        row = self._require(node)
        if row.parent_id is None:
            msg = "The root node cannot be moved"
            raise InvalidNameError(msg)
        self._require(new_parent)
        self._check_not_below(node, new_parent)
        self._check_free(new_parent.id, new_name, ignore_id=node.id)
        stamp = now_iso()
        self.conn.execute(
            update(nodes)
            .where(nodes.c.id == node.id)
            .values(parent_id=new_parent.id, name=new_name, modified=stamp)
        )
        self._touch(row.parent_id, stamp)
        self._touch(new_parent.id, stamp)

    def copy_node(self, node: Node, new_parent: Node, new_name: str) -> Node:
        """Deep-copy *node* and its subtree under *new_parent* as *new_name*."""
        row = self._require(node)
        self._check_not_below(node, new_parent)
        copy = self.add_node(new_parent, new_name, row.node_type, self._properties_of(node.id))
        children = self.conn.execute(
            select(nodes.c.id, nodes.c.name).where(nodes.c.parent_id == node.id)
        ).fetchall()
        for child in children:
            self.copy_node(Node(self._repository, child.id), copy, child.name)
        return copy

    def remove_node(self, node: Node) -> None:
        """Remove *node* and, through the foreign-key cascade, its subtree."""
        row = self._require(node)
        if row.parent_id is None:
            msg = "The root node cannot be removed"
            raise InvalidNameError(msg)
        self.conn.execute(delete(nodes).where(nodes.c.id == node.id))
        self._touch(row.parent_id, now_iso())

    def set_property(self, node: Node, name: str, value: Any) -> None:
        """Insert or replace a JSON-encoded property."""
        self.conn.execute(
            delete(properties).where(properties.c.node_id == node.id, properties.c.name == name)
        )
        self.conn.execute(
            insert(properties).values(node_id=node.id, name=name, value=json.dumps(value))
        )

    def _properties_of(self, node_id: int) -> dict[str, Any]:
        rows = self.conn.execute(
            select(properties.c.name, properties.c.value).where(properties.c.node_id == node_id)
        ).fetchall()
        return {r.name: json.loads(r.value) for r in rows}


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class Repository:
    """The content repository: engine, node lookup, and transactions.

    Constructed once per CLI invocation (or per test) from
    :class:`RepoStressSettings`. Safe to share across worker threads;
    each thread gets its own connections.
    """

    def __init__(self, settings: RepoStressSettings) -> None:
        self._settings = settings
        self._engine: Engine = init_database(
            self.root, busy_timeout=settings.repository.busy_timeout
        )
        self._write_engine = self._engine.execution_options(**{IMMEDIATE_OPTION: True})
        self._tls = threading.local()

    @property
    def root(self) -> Path:
        """The directory holding ``.repostress/``."""
        return self._settings.repo_root

    @property
    def engine(self) -> Engine:
        return self._engine

    @property
    def settings(self) -> RepoStressSettings:
        return self._settings

    def close(self) -> None:
        """Dispose of the engine's pooled connections."""
        self._engine.dispose()

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    @property
    def root_node(self) -> Node:
        with self.reading() as conn:
            row = conn.execute(select(nodes.c.id).where(nodes.c.parent_id.is_(None))).one()
        return Node(self, row.id)

    def get_node(self, path: str) -> Node:
        """Resolve an absolute path. Raises ItemNotFoundError if any segment is missing."""
        segments = split_path(path)
        with self.reading() as conn:
            current = conn.execute(select(nodes.c.id).where(nodes.c.parent_id.is_(None))).one().id
            for segment in segments:
                row = conn.execute(
                    select(nodes.c.id).where(nodes.c.parent_id == current, nodes.c.name == segment)
                ).first()
                if row is None:
                    msg = f"No node at path {path!r}"
                    raise ItemNotFoundError(msg)
                current = row.id
        return Node(self, current)

    def node_exists(self, path: str) -> bool:
        try:
            self.get_node(path)
        except ItemNotFoundError:
            return False
        return True

    # ------------------------------------------------------------------
    # Connections
    # ------------------------------------------------------------------

    @contextmanager
    def reading(self) -> Iterator[Connection]:
        """Connection for reads: the thread's open transaction, or a fresh one."""
        txn: RepositoryTransaction | None = getattr(self._tls, "txn", None)
        if txn is not None:
            yield txn.conn
            return
        try:
            with self._engine.connect() as conn:
                yield conn
        except OperationalError as exc:
            if _is_busy(exc):
                raise ConcurrentModificationError(str(exc.orig)) from exc
            raise

    @contextmanager
    def transaction(self) -> Iterator[RepositoryTransaction]:
        """Write transaction; commits on success, rolls back on any exception.

        Nested calls on the same thread join the outer transaction.

        Usage::

            with repository.transaction() as txn:
                handle = txn.add_node(gallery, "logo", NodeType.HANDLE)
                txn.add_node(handle, "logo", NodeType.ASSET)
        """
        active: RepositoryTransaction | None = getattr(self._tls, "txn", None)
        if active is not None:
            yield active
            return
        try:
            with self._write_engine.begin() as conn:
                txn = RepositoryTransaction(conn=conn, _repository=self)
                self._tls.txn = txn
                try:
                    yield txn
                finally:
                    self._tls.txn = None
        except IntegrityError as exc:
            if _is_sibling_conflict(exc):
                raise ItemExistsError(str(exc.orig)) from exc
            raise
        except OperationalError as exc:
            if _is_busy(exc):
                logger.debug("Write transaction hit a busy database: %s", exc.orig)
                raise ConcurrentModificationError(str(exc.orig)) from exc
            raise
