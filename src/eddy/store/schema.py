# src/eddy/store/schema.py
"""SQLAlchemy table definitions for the engine store.

Uses SQLAlchemy Core (not ORM) for explicit control over queries
and compatibility with multiple database backends. Key columns are
binary so range predicates compare byte-wise.
"""

from sqlalchemy import (
    BigInteger,
    Column,
    Integer,
    LargeBinary,
    MetaData,
    PrimaryKeyConstraint,
    Table,
)

# Shared metadata for all tables
metadata = MetaData()

# Single oracle row; every read allocates the next timestamp
ORACLE_ROW_ID = 1

# === Versioned key-value data ===

entries_table = Table(
    "entries",
    metadata,
    Column("row_key", LargeBinary, nullable=False),
    Column("family", LargeBinary, nullable=False),
    Column("qualifier", LargeBinary, nullable=False),
    Column("commit_ts", BigInteger, nullable=False),
    # NULL marks a delete at commit_ts
    Column("value", LargeBinary),
    PrimaryKeyConstraint("row_key", "family", "qualifier", "commit_ts"),
)

# === Outstanding reactive work ===

notifications_table = Table(
    "notifications",
    metadata,
    Column("row_key", LargeBinary, nullable=False),
    Column("family", LargeBinary, nullable=False),
    Column("qualifier", LargeBinary, nullable=False),
    PrimaryKeyConstraint("row_key", "family", "qualifier"),
)

# === Logical clock ===

oracle_table = Table(
    "oracle",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=False),
    Column("last_timestamp", BigInteger, nullable=False),
)
