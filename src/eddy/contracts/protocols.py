# src/eddy/contracts/protocols.py
"""Capability protocols for the engine and the output target.

These are the only seams between eddy and the dataflow engine. Engine-side
implementations raise EngineError (or a subclass) on transport failures.
They're used for type checking, not runtime enforcement.

Capabilities:
- NotificationSource: counts outstanding reactive work
- LogicalClock: the engine's timestamp oracle
- SnapshotSource: consistent point-in-time reads
- OutputSink: where scanned entries are written
"""

from collections.abc import Iterator
from contextlib import AbstractContextManager
from typing import Protocol, runtime_checkable

from eddy.contracts.scan import Column, ScanQuery

# Each row yields its key and a forward-only iterator over its cells.
# The column iterator MUST be drained before advancing to the next row.
ColumnSequence = Iterator[tuple[Column, bytes]]
RowSequence = Iterator[tuple[bytes, ColumnSequence]]


@runtime_checkable
class NotificationSource(Protocol):
    """Source of the outstanding-work count."""

    def count(self) -> int:
        """Number of outstanding notifications at the time of the call.

        Raises:
            EngineError: If the count cannot be read.
        """
        ...


@runtime_checkable
class LogicalClock(Protocol):
    """Monotonic logical clock (the engine's timestamp oracle).

    Every read advances the clock by one tick. Any transaction committing
    between two reads advances it further.
    """

    def now(self) -> int:
        """Allocate and return the next timestamp.

        Raises:
            EngineError: If the oracle cannot be reached.
        """
        ...


@runtime_checkable
class SnapshotSource(Protocol):
    """Opens consistent point-in-time views of the key-value data."""

    def open(self, query: ScanQuery) -> AbstractContextManager[RowSequence]:
        """Open a snapshot and scan it with ``query``.

        The snapshot is released when the context exits, on every path.
        Rows arrive in ascending key order, columns in ascending
        (family, qualifier) order within a row. Sources may narrow the
        result to the span and column filters themselves; the executor
        drops any entry the query does not match either way.

        Raises:
            EngineError: On open or while iterating.
        """
        ...


@runtime_checkable
class OutputSink(Protocol):
    """Write target for scanned entries."""

    def emit(self, row: bytes, column: Column, value: bytes) -> bool:
        """Write one entry.

        Returns:
            True if the entry was written, False if the sink no longer
            accepts output (the entry was not written).
        """
        ...
