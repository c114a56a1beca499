"""Bounded polling."""

import time
from typing import Callable, Optional


def poll_until(
    predicate: Callable[[], bool],
    attempts: int,
    interval: float,
    sleep: Callable[[float], None] = time.sleep,
    on_attempt: Optional[Callable[[int, bool], None]] = None,
) -> Optional[int]:
    """
    Call *predicate* up to *attempts* times, sleeping *interval* seconds between calls.

    No sleep follows the final attempt.

    Args:
        predicate: Zero-argument check; a truthy result stops polling
        attempts: Maximum number of calls (>= 1)
        interval: Seconds to sleep between calls
        sleep: Sleep function (injectable for tests)
        on_attempt: Optional callback(attempt, result) invoked after each call

    Returns:
        The 1-based attempt that succeeded, or None if every attempt failed
    """
    if attempts < 1:
        raise ValueError(f"attempts must be >= 1, got {attempts}")
    for attempt in range(1, attempts + 1):
        ok = bool(predicate())
        if on_attempt:
            on_attempt(attempt, ok)
        if ok:
            return attempt
        if attempt < attempts:
            sleep(interval)
    return None
