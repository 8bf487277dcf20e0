"""Countdown to failure for timed games."""

from __future__ import annotations
import logging
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_TIME_LIMIT = 10 * 60


class CountdownTimer:
    """
    Seconds remaining before the game is lost.

    ``tick`` is driven by the host with the seconds that actually elapsed.
    Reaching zero reports "time up" once; the timer then holds at zero until
    it is extended or reset.
    """

    def __init__(self, time_limit: int = DEFAULT_TIME_LIMIT):
        if time_limit <= 0:
            raise ValueError(f"time_limit must be positive, got {time_limit}")
        self.time_limit = time_limit
        self.remaining = time_limit
        self.expired = False

    def tick(self, seconds: int = 1) -> bool:
        """
        Count down by ``seconds``.

        Returns:
            True only on the tick that brings the timer to zero.
        """
        if seconds < 0:
            raise ValueError(f"seconds must not be negative, got {seconds}")
        if self.expired:
            return False

        self.remaining = max(0, self.remaining - seconds)
        if self.remaining == 0:
            self.expired = True
            logger.info("Countdown reached zero")
            return True
        return False

    def extend(self, seconds: int) -> None:
        """Add time; an expired timer starts running again."""
        if seconds <= 0:
            raise ValueError(f"seconds must be positive, got {seconds}")
        self.remaining += seconds
        self.expired = False

    def reset(self, time_limit: Optional[int] = None) -> None:
        if time_limit is not None:
            if time_limit <= 0:
                raise ValueError(f"time_limit must be positive, got {time_limit}")
            self.time_limit = time_limit
        self.remaining = self.time_limit
        self.expired = False

    def format(self) -> str:
        """Remaining time as m:ss."""
        return f"{self.remaining // 60}:{self.remaining % 60:02d}"

    def __repr__(self) -> str:
        return f"CountdownTimer(remaining={self.remaining}, limit={self.time_limit})"
