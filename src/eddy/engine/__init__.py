"""Engine-facing operations: quiescence detection and snapshot scans."""

from eddy.engine.quiescence import QuiescenceDetector
from eddy.engine.scan import ScanExecutor
from eddy.engine.shutdown import shutdown_handler_context

__all__ = [
    "QuiescenceDetector",
    "ScanExecutor",
    "shutdown_handler_context",
]
