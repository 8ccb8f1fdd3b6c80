"""Scripted stand-ins for the engine capabilities.

These let engine-level tests drive the quiescence loop and the scan executor
through exact sample sequences without a store or real sleeps.
"""

import threading
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager

from eddy.contracts import Column, EngineError, ScanQuery
from eddy.contracts.protocols import RowSequence


class ScriptedEngine:
    """Clock and notification source replaying fixed (T1, N, T2) samples.

    Also records the order of calls so tests can check that each count read
    is bracketed by two clock reads.
    """

    def __init__(self, samples: Sequence[tuple[int, int, int]], *, fail_on_poll: int | None = None) -> None:
        self._clock_reads: list[int] = [t for t1, _, t2 in samples for t in (t1, t2)]
        self._counts: list[int] = [n for _, n, _ in samples]
        self._fail_on_poll = fail_on_poll
        self._polls = 0
        self.calls: list[str] = []

    def now(self) -> int:
        self.calls.append("now")
        return self._clock_reads.pop(0)

    def count(self) -> int:
        self.calls.append("count")
        self._polls += 1
        if self._fail_on_poll is not None and self._polls == self._fail_on_poll:
            raise EngineError("connection refused")
        return self._counts.pop(0)


class RecordingEvent(threading.Event):
    """Cancellation event whose wait() returns immediately.

    Records every requested sleep; optionally sets itself after N sleeps to
    simulate an operator abort arriving mid-sleep.
    """

    def __init__(self, cancel_after_sleeps: int | None = None) -> None:
        super().__init__()
        self.sleeps: list[float] = []
        self._cancel_after = cancel_after_sleeps

    def wait(self, timeout: float | None = None) -> bool:
        self.sleeps.append(timeout if timeout is not None else 0.0)
        if self._cancel_after is not None and len(self.sleeps) >= self._cancel_after:
            self.set()
        return self.is_set()


Entry = tuple[Column, bytes]


class ListSnapshotSource:
    """Snapshot source over an in-memory list of rows.

    Returns every row regardless of the query, like a source that cannot
    push span or column filters down. Tracks open/close so tests can assert
    the snapshot is released.
    """

    def __init__(
        self,
        rows: Iterable[tuple[bytes, Sequence[Entry]]],
        *,
        fail_after_entries: int | None = None,
        fail_on_open: bool = False,
    ) -> None:
        self._rows = list(rows)
        self._fail_after = fail_after_entries
        self._fail_on_open = fail_on_open
        self.opened = 0
        self.closed = 0
        self.queries: list[ScanQuery] = []

    @contextmanager
    def open(self, query: ScanQuery) -> Iterator[RowSequence]:
        if self._fail_on_open:
            raise EngineError("snapshot unavailable")
        self.opened += 1
        self.queries.append(query)
        try:
            yield self._iterate()
        finally:
            self.closed += 1

    def _iterate(self) -> RowSequence:
        produced = 0

        def columns(entries: Sequence[Entry]) -> Iterator[Entry]:
            nonlocal produced
            for entry in entries:
                if self._fail_after is not None and produced >= self._fail_after:
                    raise EngineError("tablet server went away")
                produced += 1
                yield entry

        for row, entries in self._rows:
            yield row, columns(entries)


class RecordingSink:
    """Output sink that accepts up to ``capacity`` entries."""

    def __init__(self, capacity: int | None = None) -> None:
        self._capacity = capacity
        self.entries: list[tuple[bytes, Column, bytes]] = []

    def emit(self, row: bytes, column: Column, value: bytes) -> bool:
        if self._capacity is not None and len(self.entries) >= self._capacity:
            return False
        self.entries.append((row, column, value))
        return True
