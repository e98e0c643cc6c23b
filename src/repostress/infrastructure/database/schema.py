"""SQLAlchemy Core table definitions for the repository database.

The node tree is an adjacency list: each row points at its parent.
Sibling names are unique per parent, which turns a rename into an
atomic rename-if-absent at the storage level.
"""

from __future__ import annotations

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
    UniqueConstraint,
)

metadata = MetaData()

SIBLING_NAME_CONSTRAINT = "uq_nodes_sibling_name"

nodes = Table(
    "nodes",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("parent_id", Integer, ForeignKey("nodes.id", ondelete="CASCADE")),
    Column("name", Text, nullable=False),
    Column("node_type", Text, nullable=False),
    Column("created", Text, nullable=False),
    Column("modified", Text, nullable=False),
    UniqueConstraint("parent_id", "name", name=SIBLING_NAME_CONSTRAINT),
)

properties = Table(
    "properties",
    metadata,
    Column("node_id", Integer, ForeignKey("nodes.id", ondelete="CASCADE"), nullable=False),
    Column("name", Text, nullable=False),
    Column("value", Text, nullable=False),  # JSON
    UniqueConstraint("node_id", "name"),
)

Index("ix_nodes_parent", nodes.c.parent_id)
Index("ix_nodes_type", nodes.c.node_type)
Index("ix_properties_node", properties.c.node_id)