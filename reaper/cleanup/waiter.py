"""Bounded polling."""

from __future__ import annotations

import time
from typing import Callable


def wait_until(
    condition: Callable[[], bool],
    max_duration: float,
    sleep_interval: float,
    clock: Callable[[], float] = time.monotonic,
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Poll a condition until it holds or the deadline passes.

    The condition is always checked at least once. Timing out is not an error.

    Args:
        condition: Zero-argument predicate
        max_duration: Maximum total wait in seconds
        sleep_interval: Seconds between checks
        clock: Monotonic time source (default: time.monotonic)
        sleep: Sleep function (default: time.sleep)

    Returns:
        True if the condition held before the deadline, False on timeout
    """
    deadline = clock() + max_duration

    while True:
        if condition():
            return True

        if clock() >= deadline:
            return False

        sleep(sleep_interval)
