from __future__ import annotations

from datetime import time

SECONDS_PER_DAY = 24 * 3600


def seconds_since_midnight(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


def time_from_seconds(seconds: int) -> time:
    """Wall-clock time for a second offset; values outside a day wrap around."""

    s = int(seconds) % SECONDS_PER_DAY
    return time(hour=s // 3600, minute=(s % 3600) // 60, second=s % 60)


def add_seconds(t: time, seconds: int) -> time:
    return time_from_seconds(seconds_since_midnight(t) + int(seconds))


def elapsed_seconds(start: time, end: time) -> int:
    """Seconds from start to end, assuming end is the next occurrence of that time."""

    return (seconds_since_midnight(end) - seconds_since_midnight(start)) % SECONDS_PER_DAY
