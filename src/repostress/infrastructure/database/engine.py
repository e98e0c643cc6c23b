"""Database engine setup for SQLite with WAL mode.

The DB is stored at {root}/.repostress/repository.db. Every connection
runs with foreign keys on (subtree removal cascades) and manages its own
``BEGIN``: write transactions take ``BEGIN IMMEDIATE`` so concurrent
workers queue on the write lock instead of failing on lock upgrade.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, insert, select
from sqlalchemy.engine import Connection, Engine

from repostress.config.discovery import STATE_DIRNAME
from repostress.domain.types import NodeType
from repostress.infrastructure.database.schema import metadata, nodes
from repostress.services._helpers import now_iso

DB_DIRNAME = STATE_DIRNAME
DB_FILENAME = "repository.db"
BUSY_TIMEOUT_SECONDS = 30.0

# Execution option marking a connection whose transaction will write.
IMMEDIATE_OPTION = "repostress_immediate"


def create_db_engine(db_path: Path, *, busy_timeout: float = BUSY_TIMEOUT_SECONDS) -> Engine:
    """Create a SQLite engine with WAL mode and foreign keys enabled.

    *busy_timeout* is how many seconds a connection waits on another
    writer's lock before SQLite reports the database as locked.
    """
    engine = create_engine(
        f"sqlite:///{db_path}",
        echo=False,
        connect_args={"timeout": busy_timeout},
    )

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        # Let SQLAlchemy's "begin" hook below emit BEGIN instead of pysqlite.
        dbapi_conn.isolation_level = None
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _begin(conn: Connection) -> None:
        if conn.get_execution_options().get(IMMEDIATE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")

    return engine


def init_database(root: Path, *, busy_timeout: float = BUSY_TIMEOUT_SECONDS) -> Engine:
    """Initialize the repository database at ``{root}/.repostress/repository.db``.

    Creates the directory, all tables, and the single root node.
    Idempotent — safe to call on an existing repository.
    """
    state_dir = root / DB_DIRNAME
    state_dir.mkdir(parents=True, exist_ok=True)
    (state_dir / "plugins").mkdir(exist_ok=True)

    engine = create_db_engine(state_dir / DB_FILENAME, busy_timeout=busy_timeout)
    metadata.create_all(engine)
    _seed_root(engine)
    return engine


def _seed_root(engine: Engine) -> None:
    """Insert the root node if it doesn't exist."""
    with engine.begin() as conn:
        row = conn.execute(select(nodes.c.id).where(nodes.c.parent_id.is_(None))).first()
        if row is None:
            stamp = now_iso()
            conn.execute(
                insert(nodes).values(
                    parent_id=None,
                    name="",
                    node_type=NodeType.ROOT,
                    created=stamp,
                    modified=stamp,
                )
            )
