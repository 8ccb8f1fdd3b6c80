"""CLI helper functions for store access and option translation."""

import shutil
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import TYPE_CHECKING

from eddy.contracts import ScanOptions

if TYPE_CHECKING:
    from eddy.core.config import EddySettings
    from eddy.store import StoreClient


def _encode(value: str | None) -> bytes | None:
    return value.encode("utf-8") if value is not None else None


def scan_options_from_cli(
    *,
    exact_row: str | None,
    row_prefix: str | None,
    start_row: str | None,
    end_row: str | None,
    columns: Sequence[str] | None,
) -> ScanOptions:
    """Convert raw CLI strings into ScanOptions (UTF-8 row keys).

    No validation happens here; build_scan_query() rejects conflicts.
    """
    return ScanOptions(
        exact_row=_encode(exact_row),
        row_prefix=_encode(row_prefix),
        start_row=_encode(start_row),
        end_row=_encode(end_row),
        columns=tuple(columns or ()),
    )


@contextmanager
def open_store(settings: "EddySettings") -> Iterator["StoreClient"]:
    """Open the engine store described by settings and yield a client.

    Raises:
        EngineUnavailableError: If the store cannot be opened.
    """
    from eddy.store import StoreClient, StoreDB

    db = StoreDB.from_settings(settings)
    try:
        yield StoreClient(db)
    finally:
        db.close()


def remove_mini_data_dir(settings: "EddySettings") -> bool:
    """Delete the local mini data directory.

    Only acts when eddy manages the directory (mini.start_local) and it
    exists.

    Returns:
        True if the directory was removed, False if there was nothing to do.
    """
    data_dir = settings.mini.data_dir.expanduser()
    if not settings.mini.start_local or not data_dir.exists():
        return False
    shutil.rmtree(data_dir)
    return True
