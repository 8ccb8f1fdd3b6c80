# src/eddy/engine/scan.py
"""Stream a snapshot scan into an output sink.

One snapshot per scan, held for the whole scan and released on every exit
path. Rows and their columns are consumed lazily in lock-step: each row's
column iterator is drained before the next row is fetched.

Entries outside the query's span or column filters are dropped here, so a
snapshot source that cannot push the query down still scans correctly.
"""

from __future__ import annotations

import structlog

from eddy.contracts import (
    EngineError,
    OutputSink,
    ScanQuery,
    ScanResult,
    ScanStatus,
    SnapshotSource,
)

logger = structlog.get_logger(__name__)


class ScanExecutor:
    """Run a ScanQuery against a snapshot source.

    Never raises for engine failures: the error is attached to the returned
    ScanResult along with the number of entries already emitted.
    """

    def __init__(self, snapshots: SnapshotSource) -> None:
        self._snapshots = snapshots

    def run(self, query: ScanQuery, sink: OutputSink) -> ScanResult:
        emitted = 0
        matched = False
        try:
            with self._snapshots.open(query) as rows:
                for row, columns in rows:
                    in_span = query.span.contains(row)
                    for column, value in columns:
                        if not (in_span and query.accepts(column)):
                            continue
                        matched = True
                        if not sink.emit(row, column, value):
                            logger.debug("Output sink closed, stopping scan", entries_emitted=emitted)
                            return ScanResult(entries_emitted=emitted, status=ScanStatus.SINK_CLOSED)
                        emitted += 1
        except EngineError as e:
            logger.error("Scan failed", error=str(e), entries_emitted=emitted)
            return ScanResult(entries_emitted=emitted, status=ScanStatus.FAILED, failure=e)

        if not matched:
            return ScanResult(entries_emitted=0, status=ScanStatus.NO_DATA)
        logger.debug("Scan completed", entries_emitted=emitted)
        return ScanResult(entries_emitted=emitted, status=ScanStatus.COMPLETED)
