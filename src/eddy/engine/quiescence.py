# src/eddy/engine/quiescence.py
"""Detect when all reactive work in the cluster has drained.

Reading the outstanding-notification count alone is racy: a transaction can
create a notification and a worker can clear it entirely inside the window
in which the count is read, so a zero count proves nothing by itself. The
detector therefore brackets every count read with two reads of the engine's
logical clock. Each read consumes exactly one tick, so with no other
activity the second read is exactly one tick past the first. Any commit
inside the window pushes the clock further, and the poll is treated as
"still working" even when the count read zero.

The loop is pure polling; there is no push signal from the engine.
"""

from __future__ import annotations

import threading

import structlog

from eddy.contracts import (
    Finished,
    LogicalClock,
    NotificationSource,
    QuiescenceVerdict,
    StillWorking,
    WaitStatus,
    WorkSample,
)
from eddy.core.backoff import BackoffPolicy

logger = structlog.get_logger(__name__)


class QuiescenceDetector:
    """Poll the engine until no work is pending and no commits are observed.

    Example:
        detector = QuiescenceDetector(client, client, worker_count=4)
        with shutdown_handler_context() as cancel_event:
            status = detector.run(cancel_event)

    Engine failures from either source propagate out of run() unchanged;
    a down connection is never retried here.
    """

    def __init__(
        self,
        notifications: NotificationSource,
        clock: LogicalClock,
        worker_count: int,
        policy: BackoffPolicy | None = None,
        *,
        expected_clock_advance: int = 1,
    ) -> None:
        """Initialize detector.

        Args:
            notifications: Source of the outstanding-notification count.
            clock: The engine's logical clock. Must share the session used
                for the count so the bracketing reads are meaningful.
            worker_count: Workers processing notifications (>= 1).
            policy: Backoff between polls. Defaults to 10s..300s.
            expected_clock_advance: Ticks consumed by the two bracketing
                reads alone. 1 for oracles that allocate a timestamp per
                read; 0 for oracles whose reads are free.

        Raises:
            ValueError: If worker_count < 1 or expected_clock_advance < 0.
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        if expected_clock_advance < 0:
            raise ValueError(f"expected_clock_advance must be non-negative, got {expected_clock_advance}")
        self._notifications = notifications
        self._clock = clock
        self._worker_count = worker_count
        self._policy = policy if policy is not None else BackoffPolicy()
        self._expected_clock_advance = expected_clock_advance

    @property
    def worker_count(self) -> int:
        return self._worker_count

    def sample(self) -> WorkSample:
        """Take one bracketed observation: clock, count, clock.

        Raises:
            EngineError: If the clock or the count cannot be read.
        """
        clock_before = self._clock.now()
        outstanding = self._notifications.count()
        clock_after = self._clock.now()
        return WorkSample(clock_before=clock_before, outstanding_count=outstanding, clock_after=clock_after)

    def evaluate(self, sample: WorkSample) -> QuiescenceVerdict:
        """Decide whether a sample proves quiescence."""
        if sample.outstanding_count == 0 and sample.clock_advance == self._expected_clock_advance:
            return Finished()
        return StillWorking(
            outstanding_count=sample.outstanding_count,
            next_sleep_seconds=self._policy.next_sleep_seconds(sample.outstanding_count, self._worker_count),
        )

    def run(self, cancel_event: threading.Event | None = None) -> WaitStatus:
        """Block until the cluster is quiescent or the wait is cancelled.

        The cancel event is checked at the top of every iteration and is
        also what the loop sleeps on, so setting it wakes a pending sleep
        immediately.

        Returns:
            WaitStatus.FINISHED or WaitStatus.CANCELLED.

        Raises:
            EngineError: If sampling fails. Fatal to this run.
        """
        event = cancel_event if cancel_event is not None else threading.Event()
        logger.info("Waiting until all notifications are processed", worker_count=self._worker_count)

        while not event.is_set():
            verdict = self.evaluate(self.sample())
            if isinstance(verdict, Finished):
                logger.info("All processing has finished")
                return WaitStatus.FINISHED

            logger.info(
                "Notifications still outstanding",
                outstanding=verdict.outstanding_count,
                retry_in_seconds=verdict.next_sleep_seconds,
            )
            if event.wait(timeout=verdict.next_sleep_seconds):
                break

        logger.warning("Wait cancelled before processing finished")
        return WaitStatus.CANCELLED
