# src/eddy/contracts/quiescence.py
"""Quiescence-detection value types."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WorkSample:
    """One observation taken during a single polling iteration.

    The two clock reads bracket the count read: clock_before is taken
    strictly before the count and clock_after strictly after, on the same
    session.
    """

    clock_before: int
    outstanding_count: int
    clock_after: int

    @property
    def clock_advance(self) -> int:
        return self.clock_after - self.clock_before


@dataclass(frozen=True)
class Finished:
    """No work pending and no commits observed during the sampling window."""


@dataclass(frozen=True)
class StillWorking:
    """Work may still be pending; poll again after ``next_sleep_seconds``."""

    outstanding_count: int
    next_sleep_seconds: int


QuiescenceVerdict = Finished | StillWorking
