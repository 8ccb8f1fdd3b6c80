# src/eddy/store/client.py
"""Engine capabilities backed by the SQL store.

StoreClient implements NotificationSource, LogicalClock and SnapshotSource
over one StoreDB, so the clock reads and the count read of a quiescence
poll share a session as required.

Snapshot isolation is multi-version: each cell keeps every committed
version tagged with its commit timestamp, and a snapshot taken at
timestamp T sees the newest version with commit_ts <= T. A version whose
value is NULL is a delete marker.
"""

from __future__ import annotations

import itertools
from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from operator import itemgetter
from typing import Any

import structlog
from sqlalchemy import Connection, and_, delete, func, insert, or_, select, update
from sqlalchemy.exc import OperationalError, SQLAlchemyError
from sqlalchemy.sql.elements import ColumnElement

from eddy.contracts import (
    Column,
    ColumnFilter,
    EngineError,
    EngineUnavailableError,
    Family,
    ScanQuery,
    Span,
)
from eddy.contracts.protocols import RowSequence
from eddy.store.database import StoreDB
from eddy.store.schema import ORACLE_ROW_ID, entries_table, notifications_table, oracle_table

logger = structlog.get_logger(__name__)

# Rows fetched per round-trip while streaming a snapshot
_FETCH_SIZE = 500

Cell = tuple[bytes, Column]
Mutation = tuple[bytes, Column, bytes | None]


@contextmanager
def _engine_errors(action: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into engine errors, keeping the cause."""
    try:
        yield
    except OperationalError as e:
        raise EngineUnavailableError(f"Engine store unavailable while trying to {action}: {e.orig}") from e
    except SQLAlchemyError as e:
        raise EngineError(f"Failed to {action}: {e}") from e


class StoreClient:
    """Client session over the engine store.

    Example:
        with StoreDB("sqlite:///./data/app.db") as db:
            client = StoreClient(db)
            client.commit([(b"r1", Column(b"doc", b"text"), b"hello")])
            with client.open(ScanQuery()) as rows:
                for row, columns in rows:
                    for column, value in columns:
                        ...
    """

    def __init__(self, db: StoreDB) -> None:
        self._db = db

    # === LogicalClock ===

    def now(self) -> int:
        """Allocate the next oracle timestamp (one tick per call)."""
        with _engine_errors("read the logical clock"), self._db.engine.begin() as conn:
            return self._next_timestamp(conn)

    @staticmethod
    def _next_timestamp(conn: Connection) -> int:
        stmt = (
            update(oracle_table)
            .where(oracle_table.c.id == ORACLE_ROW_ID)
            .values(last_timestamp=oracle_table.c.last_timestamp + 1)
            .returning(oracle_table.c.last_timestamp)
        )
        timestamp: int = conn.execute(stmt).scalar_one()
        return timestamp

    # === NotificationSource ===

    def count(self) -> int:
        """Number of outstanding notifications."""
        with _engine_errors("count notifications"), self._db.engine.connect() as conn:
            outstanding: int = conn.execute(select(func.count()).select_from(notifications_table)).scalar_one()
            return outstanding

    # === SnapshotSource ===

    @contextmanager
    def open(self, query: ScanQuery) -> Iterator[RowSequence]:
        """Open a snapshot at a fresh oracle timestamp and scan it."""
        snapshot_ts = self.now()
        with _engine_errors("open a snapshot"):
            conn = self._db.engine.connect()
        logger.debug("Snapshot opened", snapshot_ts=snapshot_ts)
        try:
            yield self._rows(conn, query, snapshot_ts)
        finally:
            conn.close()

    def _rows(self, conn: Connection, query: ScanQuery, snapshot_ts: int) -> RowSequence:
        cells = self._visible_cells(conn, query, snapshot_ts)
        for row, group in itertools.groupby(cells, key=itemgetter(0)):
            yield row, ((column, value) for _, column, value in group)

    def _visible_cells(self, conn: Connection, query: ScanQuery, snapshot_ts: int) -> Iterator[tuple[bytes, Column, bytes]]:
        """Newest live version of each matching cell, in key order."""
        e = entries_table.c
        conditions: list[ColumnElement[bool]] = [e.commit_ts <= snapshot_ts, *_span_conditions(query.span)]
        if query.columns:
            conditions.append(or_(*(_column_condition(column_filter) for column_filter in query.columns)))
        stmt = select(e.row_key, e.family, e.qualifier, e.value).where(*conditions).order_by(e.row_key, e.family, e.qualifier, e.commit_ts.desc())

        with _engine_errors("scan the snapshot"):
            result = conn.execution_options(stream_results=True, yield_per=_FETCH_SIZE).execute(stmt)
            previous: tuple[Any, Any, Any] | None = None
            for row_key, family, qualifier, value in result:
                cell = (row_key, family, qualifier)
                if cell == previous:
                    continue  # older version
                previous = cell
                if value is None:
                    continue  # deleted
                yield bytes(row_key), Column(bytes(family), bytes(qualifier)), bytes(value)

    # === Writes ===

    def commit(
        self,
        writes: Iterable[Mutation],
        *,
        notify: Iterable[Cell] = (),
        acknowledge: Iterable[Cell] = (),
    ) -> int:
        """Apply a write transaction and return its commit timestamp.

        A transaction allocates a start timestamp and a commit timestamp,
        so every commit advances the clock by two ticks.

        Args:
            writes: (row, column, value) triples; a value of None deletes the cell.
            notify: Cells to flag as outstanding work.
            acknowledge: Cells whose notification has been processed.
        """
        self.now()
        with _engine_errors("commit a transaction"), self._db.engine.begin() as conn:
            commit_ts = self._next_timestamp(conn)
            rows = [
                {"row_key": row, "family": column.family, "qualifier": column.qualifier, "commit_ts": commit_ts, "value": value}
                for row, column, value in writes
            ]
            if rows:
                conn.execute(insert(entries_table), rows)
            for row, column in acknowledge:
                conn.execute(delete(notifications_table).where(_notification_key(row, column)))
            for row, column in notify:
                conn.execute(delete(notifications_table).where(_notification_key(row, column)))
                conn.execute(insert(notifications_table).values(row_key=row, family=column.family, qualifier=column.qualifier))
        logger.debug("Transaction committed", commit_ts=commit_ts, writes=len(rows))
        return commit_ts


def _span_conditions(span: Span) -> list[ColumnElement[bool]]:
    row_key = entries_table.c.row_key
    conditions: list[ColumnElement[bool]] = []
    if span.start is not None:
        conditions.append(row_key >= span.start if span.start_inclusive else row_key > span.start)
    if span.end is not None:
        conditions.append(row_key <= span.end if span.end_inclusive else row_key < span.end)
    return conditions


def _column_condition(column_filter: ColumnFilter) -> ColumnElement[bool]:
    e = entries_table.c
    if isinstance(column_filter, Family):
        return e.family == column_filter.family
    return and_(e.family == column_filter.family, e.qualifier == column_filter.qualifier)


def _notification_key(row: bytes, column: Column) -> ColumnElement[bool]:
    n = notifications_table.c
    return and_(n.row_key == row, n.family == column.family, n.qualifier == column.qualifier)
