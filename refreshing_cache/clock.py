from __future__ import annotations

from dataclasses import dataclass
import time


@dataclass(frozen=True, slots=True)
class MonotonicClock:
    def now(self) -> float:
        return time.monotonic()


@dataclass(frozen=True, slots=True)
class WallClock:
    """Seconds since the epoch. Jumps with system time adjustments."""

    def now(self) -> float:
        return time.time()
