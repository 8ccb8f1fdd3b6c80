# src/eddy/contracts/scan.py
"""Scan contracts: row selection, column filters, spans and results.

Row keys, families, qualifiers and values are raw bytes. The key space is
ordered lexicographically by byte value, which is also how SQLite and
PostgreSQL compare BLOB/BYTEA columns.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from eddy.contracts.enums import ScanStatus
from eddy.contracts.errors import EngineError


@dataclass(frozen=True)
class Column:
    """A (family, qualifier) pair as stored by the engine."""

    family: bytes
    qualifier: bytes = b""

    def __str__(self) -> str:
        return f"{_text(self.family)}:{_text(self.qualifier)}"


@dataclass(frozen=True)
class Family:
    """Column filter matching every qualifier within a family."""

    family: bytes

    def matches(self, column: Column) -> bool:
        return column.family == self.family


@dataclass(frozen=True)
class FamilyQualifier:
    """Column filter matching exactly one (family, qualifier) column."""

    family: bytes
    qualifier: bytes

    def matches(self, column: Column) -> bool:
        return column.family == self.family and column.qualifier == self.qualifier


ColumnFilter = Family | FamilyQualifier


@dataclass(frozen=True)
class Span:
    """Contiguous range over the ordered row key space.

    A bound of None is open (extends to -inf for start, +inf for end).
    Each bound carries its own inclusive flag; the flag is ignored when the
    bound is open.
    """

    start: bytes | None = None
    start_inclusive: bool = True
    end: bytes | None = None
    end_inclusive: bool = True

    @classmethod
    def all(cls) -> Span:
        """Span covering the entire key space."""
        return cls()

    @classmethod
    def exact(cls, row: bytes) -> Span:
        """Span covering exactly one row."""
        return cls(start=row, start_inclusive=True, end=row, end_inclusive=True)

    @classmethod
    def prefix(cls, prefix: bytes) -> Span:
        """Half-open span covering every row that starts with ``prefix``."""
        return cls(start=prefix, start_inclusive=True, end=following_prefix(prefix), end_inclusive=False)

    def contains(self, row: bytes) -> bool:
        """Whether ``row`` falls within this span."""
        if self.start is not None and (row < self.start or (row == self.start and not self.start_inclusive)):
            return False
        return not (self.end is not None and (row > self.end or (row == self.end and not self.end_inclusive)))


def following_prefix(prefix: bytes) -> bytes | None:
    """Smallest key greater than every key that starts with ``prefix``.

    Trailing 0xFF bytes cannot be incremented, so they are dropped before
    incrementing the last remaining byte. Returns None when no such key
    exists (empty prefix or all 0xFF), meaning the range is open-ended.
    """
    stripped = prefix.rstrip(b"\xff")
    if not stripped:
        return None
    return stripped[:-1] + bytes([stripped[-1] + 1])


@dataclass(frozen=True)
class ExactRow:
    """Row selection matching a single row."""

    row: bytes


@dataclass(frozen=True)
class RowPrefix:
    """Row selection matching every row sharing a prefix."""

    prefix: bytes


@dataclass(frozen=True)
class RowRange:
    """Row selection over an inclusive range; either end may be open."""

    start: bytes | None = None
    end: bytes | None = None


RowSelection = ExactRow | RowPrefix | RowRange


@dataclass(frozen=True)
class ScanOptions:
    """Operator-supplied scan options, before validation.

    The four row fields are independent on input. At most one selection
    mode (exact, prefix, range) may be used; start_row and end_row together
    form the range mode.
    """

    exact_row: bytes | None = None
    row_prefix: bytes | None = None
    start_row: bytes | None = None
    end_row: bytes | None = None
    columns: Sequence[str] = ()


@dataclass(frozen=True)
class ScanQuery:
    """Validated, immutable scan request.

    An empty ``columns`` set means every column is returned.
    """

    span: Span = field(default_factory=Span.all)
    columns: frozenset[ColumnFilter] = frozenset()

    def accepts(self, column: Column) -> bool:
        """Whether an entry in ``column`` passes the column filters."""
        if not self.columns:
            return True
        return any(column_filter.matches(column) for column_filter in self.columns)


@dataclass(frozen=True)
class ScanResult:
    """Outcome of a snapshot scan.

    Attributes:
        entries_emitted: Entries the output sink accepted.
        status: Why the scan ended.
        failure: Engine error that stopped the scan (status FAILED only).
    """

    entries_emitted: int
    status: ScanStatus
    failure: EngineError | None = None


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="backslashreplace")
