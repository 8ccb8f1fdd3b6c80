# src/eddy/core/span.py
"""Translate operator scan options into a single range query.

Pure functions, no I/O. Every failure is a ConfigError that names the
offending field or column string, raised before anything touches the
engine.

Row selection has three mutually exclusive modes:
- exact:  one row
- prefix: every row sharing a prefix
- range:  start_row and/or end_row (inclusive on both ends)

Mixing modes is rejected, never resolved by precedence.
"""

from collections.abc import Iterable

from eddy.contracts import (
    ColumnFilter,
    ConflictingRowSelectorsError,
    ExactRow,
    Family,
    FamilyQualifier,
    MalformedColumnError,
    RowPrefix,
    RowRange,
    RowSelection,
    ScanOptions,
    ScanQuery,
    Span,
)

COLUMN_SEPARATOR = ":"


def select_rows(options: ScanOptions) -> RowSelection:
    """Resolve the four independent row fields into one selection mode.

    Raises:
        ConflictingRowSelectorsError: If fields from more than one mode are set.
    """
    modes = {
        "exact": ("exact_row",) if options.exact_row is not None else (),
        "prefix": ("row_prefix",) if options.row_prefix is not None else (),
        "range": tuple(name for name in ("start_row", "end_row") if getattr(options, name) is not None),
    }
    active = [fields for fields in modes.values() if fields]
    if len(active) > 1:
        raise ConflictingRowSelectorsError(tuple(name for fields in active for name in fields))

    if options.exact_row is not None:
        return ExactRow(options.exact_row)
    if options.row_prefix is not None:
        return RowPrefix(options.row_prefix)
    return RowRange(start=options.start_row, end=options.end_row)


def span_for(selection: RowSelection) -> Span:
    """Canonical span for a row selection."""
    match selection:
        case ExactRow(row=row):
            return Span.exact(row)
        case RowPrefix(prefix=prefix):
            return Span.prefix(prefix)
        case RowRange(start=start, end=end):
            return Span(start=start, start_inclusive=True, end=end, end_inclusive=True)


def parse_column(raw: str) -> ColumnFilter:
    """Parse ``family`` or ``family:qualifier``.

    Raises:
        MalformedColumnError: If ``raw`` contains more than one separator.
    """
    family, sep, qualifier = raw.partition(COLUMN_SEPARATOR)
    if not sep:
        return Family(family.encode("utf-8"))
    if COLUMN_SEPARATOR in qualifier:
        raise MalformedColumnError(raw)
    return FamilyQualifier(family.encode("utf-8"), qualifier.encode("utf-8"))


def parse_columns(raw_columns: Iterable[str]) -> frozenset[ColumnFilter]:
    return frozenset(parse_column(raw) for raw in raw_columns)


def build_scan_query(options: ScanOptions) -> ScanQuery:
    """Build a validated scan query from operator options.

    Raises:
        ConflictingRowSelectorsError: If more than one row-selection mode is used.
        MalformedColumnError: If any column specifier is malformed.
    """
    span = span_for(select_rows(options))
    return ScanQuery(span=span, columns=parse_columns(options.columns))
