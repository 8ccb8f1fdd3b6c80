# src/eddy/core/__init__.py
"""Core infrastructure: Configuration, Logging, Span building, Backoff."""

from eddy.core.backoff import BackoffPolicy
from eddy.core.config import (
    BackoffSettings,
    EddySettings,
    MiniSettings,
    StoreSettings,
    load_settings,
    resolve_settings_path,
)
from eddy.core.logging import configure_logging
from eddy.core.span import (
    build_scan_query,
    parse_column,
    select_rows,
    span_for,
)

__all__ = [
    "BackoffPolicy",
    "BackoffSettings",
    "EddySettings",
    "MiniSettings",
    "StoreSettings",
    "build_scan_query",
    "configure_logging",
    "load_settings",
    "parse_column",
    "resolve_settings_path",
    "select_rows",
    "span_for",
]
