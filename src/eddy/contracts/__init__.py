"""Shared contracts for cross-boundary data types.

All dataclasses, enums and protocols that cross subsystem boundaries
(core, engine, store, cli) are defined here.

This package is a LEAF MODULE with no outbound dependencies to core/engine.
Settings classes are NOT re-exported here - import them from eddy.core.config.
"""

from eddy.contracts.enums import ScanStatus, WaitStatus
from eddy.contracts.errors import (
    ConfigError,
    ConflictingRowSelectorsError,
    EngineError,
    EngineUnavailableError,
    MalformedColumnError,
)
from eddy.contracts.protocols import (
    ColumnSequence,
    LogicalClock,
    NotificationSource,
    OutputSink,
    RowSequence,
    SnapshotSource,
)
from eddy.contracts.quiescence import (
    Finished,
    QuiescenceVerdict,
    StillWorking,
    WorkSample,
)
from eddy.contracts.scan import (
    Column,
    ColumnFilter,
    ExactRow,
    Family,
    FamilyQualifier,
    RowPrefix,
    RowRange,
    RowSelection,
    ScanOptions,
    ScanQuery,
    ScanResult,
    Span,
    following_prefix,
)

__all__ = [
    "Column",
    "ColumnFilter",
    "ColumnSequence",
    "ConfigError",
    "ConflictingRowSelectorsError",
    "EngineError",
    "EngineUnavailableError",
    "ExactRow",
    "Family",
    "FamilyQualifier",
    "Finished",
    "LogicalClock",
    "MalformedColumnError",
    "NotificationSource",
    "OutputSink",
    "QuiescenceVerdict",
    "RowPrefix",
    "RowRange",
    "RowSelection",
    "RowSequence",
    "ScanOptions",
    "ScanQuery",
    "ScanResult",
    "ScanStatus",
    "SnapshotSource",
    "Span",
    "StillWorking",
    "WaitStatus",
    "WorkSample",
    "following_prefix",
]
