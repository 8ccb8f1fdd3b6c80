# src/eddy/store/__init__.py
"""Engine store: SQL-backed notification count, logical clock and snapshots."""

from eddy.store.client import StoreClient
from eddy.store.database import StoreDB

__all__ = [
    "StoreClient",
    "StoreDB",
]
