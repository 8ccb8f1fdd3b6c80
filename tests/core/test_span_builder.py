"""Tests for translating scan options into a range query."""

import pytest

from eddy.contracts import (
    Column,
    ConflictingRowSelectorsError,
    ExactRow,
    Family,
    FamilyQualifier,
    MalformedColumnError,
    RowPrefix,
    RowRange,
    ScanOptions,
    ScanQuery,
    Span,
)
from eddy.core.span import build_scan_query, parse_column, select_rows, span_for


class TestRowSelectorConflicts:
    """Mixing row-selection modes is always rejected, in every direction."""

    @pytest.mark.parametrize(
        ("options", "expected_fields"),
        [
            (ScanOptions(exact_row=b"r1", row_prefix=b"r"), ("exact_row", "row_prefix")),
            (ScanOptions(exact_row=b"r1", start_row=b"a"), ("exact_row", "start_row")),
            (ScanOptions(exact_row=b"r1", end_row=b"z"), ("exact_row", "end_row")),
            (ScanOptions(row_prefix=b"r", start_row=b"a"), ("row_prefix", "start_row")),
            (ScanOptions(row_prefix=b"r", end_row=b"z"), ("row_prefix", "end_row")),
            (
                ScanOptions(exact_row=b"r1", row_prefix=b"r", start_row=b"a", end_row=b"z"),
                ("exact_row", "row_prefix", "start_row", "end_row"),
            ),
        ],
    )
    def test_conflicting_modes_rejected(self, options: ScanOptions, expected_fields: tuple[str, ...]) -> None:
        with pytest.raises(ConflictingRowSelectorsError) as exc_info:
            build_scan_query(options)

        assert exc_info.value.fields == expected_fields
        for field in expected_fields:
            assert field in str(exc_info.value)

    def test_exact_with_prefix_rejected_like_exact_with_range(self) -> None:
        """The check is symmetric; no mode silently wins by precedence."""
        with pytest.raises(ConflictingRowSelectorsError):
            select_rows(ScanOptions(exact_row=b"r1", row_prefix=b"r"))
        with pytest.raises(ConflictingRowSelectorsError):
            select_rows(ScanOptions(row_prefix=b"r", exact_row=b"r1"))
        with pytest.raises(ConflictingRowSelectorsError):
            select_rows(ScanOptions(exact_row=b"r1", start_row=b"a", end_row=b"b"))

    def test_start_and_end_together_are_one_mode(self) -> None:
        assert select_rows(ScanOptions(start_row=b"a", end_row=b"m")) == RowRange(start=b"a", end=b"m")


class TestRowSelection:
    """Each valid single-mode selection produces the matching span."""

    def test_exact_row_covers_only_that_row(self) -> None:
        query = build_scan_query(ScanOptions(exact_row=b"r1"))

        assert query.span == Span.exact(b"r1")
        assert query.span.contains(b"r1")
        assert not query.span.contains(b"r0")
        assert not query.span.contains(b"r10")
        assert not query.span.contains(b"r2")

    def test_prefix_is_half_open(self) -> None:
        span = span_for(RowPrefix(b"user:"))

        assert span == Span(start=b"user:", start_inclusive=True, end=b"user;", end_inclusive=False)
        assert span.contains(b"user:")
        assert span.contains(b"user:zzz")
        assert not span.contains(b"user;")
        assert not span.contains(b"use")

    def test_prefix_with_trailing_ff_bytes(self) -> None:
        assert Span.prefix(b"a\xff\xff").end == b"b"
        assert Span.prefix(b"\xff\xff").end is None
        assert Span.prefix(b"\xff").contains(b"\xff\xff\xff")

    def test_bounded_range_is_inclusive_on_both_ends(self) -> None:
        query = build_scan_query(ScanOptions(start_row=b"b", end_row=b"d"))

        assert query.span == Span(start=b"b", start_inclusive=True, end=b"d", end_inclusive=True)
        assert query.span.contains(b"b")
        assert query.span.contains(b"d")
        assert not query.span.contains(b"d0")
        assert not query.span.contains(b"a")

    def test_start_only_is_open_above(self) -> None:
        span = build_scan_query(ScanOptions(start_row=b"m")).span

        assert span.start == b"m"
        assert span.end is None
        assert span.contains(b"m")
        assert span.contains(b"\xff\xff")
        assert not span.contains(b"l")

    def test_end_only_is_open_below(self) -> None:
        span = build_scan_query(ScanOptions(end_row=b"m")).span

        assert span.start is None
        assert span.end == b"m"
        assert span.contains(b"")
        assert span.contains(b"m")
        assert not span.contains(b"m0")

    def test_no_selection_covers_everything(self) -> None:
        query = build_scan_query(ScanOptions())

        assert query.span == Span.all()
        assert query.span.contains(b"")
        assert query.span.contains(b"anything")

    def test_selection_variants(self) -> None:
        assert select_rows(ScanOptions(exact_row=b"r1")) == ExactRow(b"r1")
        assert select_rows(ScanOptions(row_prefix=b"p")) == RowPrefix(b"p")
        assert select_rows(ScanOptions()) == RowRange()


class TestColumnParsing:
    """Column specifiers split on ':' into family or family+qualifier."""

    def test_family_only(self) -> None:
        assert parse_column("fam") == Family(b"fam")

    def test_family_and_qualifier(self) -> None:
        assert parse_column("fam:qual") == FamilyQualifier(b"fam", b"qual")

    def test_empty_qualifier_is_still_a_qualifier(self) -> None:
        assert parse_column("fam:") == FamilyQualifier(b"fam", b"")

    def test_two_separators_rejected_with_original_string(self) -> None:
        with pytest.raises(MalformedColumnError) as exc_info:
            parse_column("a:b:c")

        assert exc_info.value.column == "a:b:c"
        assert "'a:b:c'" in str(exc_info.value)

    def test_malformed_column_fails_whole_query(self) -> None:
        with pytest.raises(MalformedColumnError, match="x:y:z"):
            build_scan_query(ScanOptions(columns=("ok", "x:y:z")))

    def test_columns_collected_into_query(self) -> None:
        query = build_scan_query(ScanOptions(columns=("doc", "stat:count", "doc")))

        assert query.columns == frozenset({Family(b"doc"), FamilyQualifier(b"stat", b"count")})

    def test_query_accepts_matching_columns(self) -> None:
        query = build_scan_query(ScanOptions(columns=("doc", "stat:count")))

        assert query.accepts(Column(b"doc", b"anything"))
        assert query.accepts(Column(b"stat", b"count"))
        assert not query.accepts(Column(b"stat", b"sum"))
        assert not query.accepts(Column(b"other", b""))

    def test_no_filters_accept_everything(self) -> None:
        assert ScanQuery().accepts(Column(b"any", b"thing"))


class TestIdempotence:
    def test_same_options_build_equal_queries(self) -> None:
        options = ScanOptions(row_prefix=b"user:", columns=("doc:text", "stat"))

        assert build_scan_query(options) == build_scan_query(options)
