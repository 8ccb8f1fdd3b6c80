# src/eddy/core/backoff.py
"""Backoff between quiescence polls.

The sleep scales with the backlog so a large queue of notifications is not
hammered with count scans, and is clamped so a tiny backlog still waits a
little (no busy polling) while a huge one never waits so long that the
"finished" signal goes stale.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from eddy.core.config import BackoffSettings

DEFAULT_MIN_SLEEP_SECONDS = 10
DEFAULT_MAX_SLEEP_SECONDS = 300
# Notifications one worker is assumed to clear per sampling interval
DEFAULT_RATE_DIVISOR = 100


@dataclass(frozen=True)
class BackoffPolicy:
    """Maps (outstanding work, worker count) to a bounded sleep in seconds.

    Example:
        policy = BackoffPolicy()
        policy.next_sleep_seconds(0, 1)        # 10
        policy.next_sleep_seconds(100_000, 1)  # 300
    """

    min_sleep_seconds: int = DEFAULT_MIN_SLEEP_SECONDS
    max_sleep_seconds: int = DEFAULT_MAX_SLEEP_SECONDS
    rate_divisor: int = DEFAULT_RATE_DIVISOR

    def __post_init__(self) -> None:
        if self.min_sleep_seconds < 0:
            raise ValueError(f"min_sleep_seconds must be non-negative, got {self.min_sleep_seconds}")
        if self.max_sleep_seconds < self.min_sleep_seconds:
            raise ValueError(f"max_sleep_seconds ({self.max_sleep_seconds}) must be >= min_sleep_seconds ({self.min_sleep_seconds})")
        if self.rate_divisor <= 0:
            raise ValueError(f"rate_divisor must be positive, got {self.rate_divisor}")

    @classmethod
    def from_settings(cls, settings: BackoffSettings) -> BackoffPolicy:
        return cls(
            min_sleep_seconds=settings.min_sleep_seconds,
            max_sleep_seconds=settings.max_sleep_seconds,
            rate_divisor=settings.rate_divisor,
        )

    def next_sleep_seconds(self, outstanding_count: int, worker_count: int) -> int:
        """Seconds to wait before the next poll.

        Raises:
            ValueError: If worker_count < 1.
        """
        if worker_count < 1:
            raise ValueError(f"worker_count must be at least 1, got {worker_count}")
        estimate = outstanding_count // worker_count // self.rate_divisor
        return max(self.min_sleep_seconds, min(estimate, self.max_sleep_seconds))
