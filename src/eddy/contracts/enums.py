"""Status codes for terminal outcomes of operator commands."""

from enum import StrEnum


class WaitStatus(StrEnum):
    """Terminal outcome of the quiescence polling loop.

    Engine failures are not a status; they propagate as EngineError.
    """

    FINISHED = "finished"
    CANCELLED = "cancelled"


class ScanStatus(StrEnum):
    """Terminal outcome of a snapshot scan.

    Values:
        COMPLETED: Every matching entry was emitted.
        NO_DATA: The snapshot held no matching rows (informational).
        SINK_CLOSED: The output sink stopped accepting data; scan ended early.
        FAILED: The engine failed mid-scan; partial count is preserved.
    """

    COMPLETED = "completed"
    NO_DATA = "no_data"
    SINK_CLOSED = "sink_closed"
    FAILED = "failed"
