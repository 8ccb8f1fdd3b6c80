# tests/property/conftest.py
"""Shared Hypothesis strategies for property-based tests.

Usage:
    from tests.property.conftest import row_keys, scan_options

    @given(options=scan_options())
    def test_build_is_deterministic(options: ScanOptions) -> None:
        ...
"""

from hypothesis import strategies as st

from eddy.contracts import ScanOptions

# Short keys over a small alphabet so ranges and prefixes overlap often
row_keys = st.binary(min_size=0, max_size=6).map(lambda b: bytes(x % 4 + 0x61 if x < 0xF0 else 0xFF for x in b))

column_specs = st.text(alphabet="abc:", min_size=1, max_size=6)


@st.composite
def scan_options(draw: st.DrawFn) -> ScanOptions:
    """Any combination of the four row fields plus raw column strings."""
    return ScanOptions(
        exact_row=draw(st.none() | row_keys),
        row_prefix=draw(st.none() | row_keys),
        start_row=draw(st.none() | row_keys),
        end_row=draw(st.none() | row_keys),
        columns=tuple(draw(st.lists(column_specs, max_size=3))),
    )
