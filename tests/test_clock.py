from __future__ import annotations

import time

from refreshing_cache.clock import MonotonicClock, WallClock


def test_monotonic_clock_never_goes_backwards() -> None:
    clock = MonotonicClock()

    first = clock.now()
    second = clock.now()

    assert second >= first


def test_wall_clock_tracks_epoch_seconds() -> None:
    before = time.time()
    reading = WallClock().now()
    after = time.time()

    assert before <= reading <= after
