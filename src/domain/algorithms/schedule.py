from __future__ import annotations

import logging
from dataclasses import replace
from datetime import time
from typing import Sequence

from src.domain.exceptions import InvalidSearchArgument
from src.domain.models import Leg, Line, TransitNetwork

from .clock import add_seconds
from .connections import ConnectionIndex

logger = logging.getLogger(__name__)


def require_weekday(weekday: int) -> int:
    if isinstance(weekday, bool) or not isinstance(weekday, int):
        raise InvalidSearchArgument(f"Weekday must be an integer, got {weekday!r}")
    if not 1 <= weekday <= 7:
        raise InvalidSearchArgument(f"Weekday must be between 1 and 7, got {weekday}")
    return weekday


def next_weekday(weekday: int) -> int:
    return (weekday % 7) + 1


def path_duration(stop_codes: Sequence[int], index: ConnectionIndex) -> int:
    """Sum of segment durations along consecutive stops.

    The first segment found for each pair is used. A pair with no segment
    contributes 0 seconds.
    """

    if stop_codes is None or index is None:
        raise InvalidSearchArgument("stop_codes and index are required")

    total = 0
    for a, b in zip(stop_codes, stop_codes[1:]):
        seg = index.segment_between(a, b)
        if seg is None:
            logger.warning("No segment from stop %s to stop %s, counting 0s", a, b)
            continue
        total += seg.duration_s
    return total


def next_departure(
    line: Line, weekday: int, arrival_at_stop: time, travel_time_s: int
) -> time | None:
    """Arrival time at the rider's stop of the first bus they can catch.

    `travel_time_s` is the ride from the head of the line to the rider's stop.
    When no head departure on `weekday` is late enough, the earliest one of
    the following weekday is taken without re-checking the minimum.
    Returns None when neither day has departures.
    """

    if line is None or arrival_at_stop is None:
        raise InvalidSearchArgument("line and arrival_at_stop are required")
    require_weekday(weekday)

    min_head_departure = add_seconds(arrival_at_stop, -travel_time_s)

    today = [t for t in line.departures_on(weekday) if t >= min_head_departure]
    if today:
        head = min(today)
        logger.debug(
            "Line %s day %s: head departure %s (min %s)",
            line.code,
            weekday,
            head,
            min_head_departure,
        )
        return add_seconds(head, travel_time_s)

    following = next_weekday(weekday)
    tomorrow = line.departures_on(following)
    if tomorrow:
        head = min(tomorrow)
        logger.debug(
            "Line %s: no departure left on day %s, using %s on day %s",
            line.code,
            weekday,
            head,
            following,
        )
        return add_seconds(head, travel_time_s)

    logger.warning(
        "Line %s has no departures on day %s nor day %s", line.code, weekday, following
    )
    return None


def assign_departures(
    legs: Sequence[Leg],
    weekday: int,
    initial_arrival: time,
    index: ConnectionIndex,
) -> list[Leg] | None:
    """Return the legs with departure times chained from `initial_arrival`.

    Bus legs wait for the line's next departure; walking legs leave as soon
    as the rider gets there. Returns None if any bus leg has no departure.
    """

    if legs is None or initial_arrival is None or index is None:
        raise InvalidSearchArgument("legs, initial_arrival and index are required")
    require_weekday(weekday)

    current = initial_arrival
    resolved: list[Leg] = []
    for leg in legs:
        if leg.line is None:
            departure: time | None = current
        else:
            line = leg.line
            start = line.index_of(leg.origin.code)
            if start < 0:
                raise InvalidSearchArgument(
                    f"Stop {leg.origin.code} is not served by line {line.code}"
                )
            head_travel_s = path_duration(line.stop_codes[: start + 1], index)
            departure = next_departure(line, weekday, current, head_travel_s)
            if departure is None:
                return None

        resolved.append(replace(leg, departure=departure))
        current = add_seconds(departure, leg.duration_s)

    return resolved


def build_bus_leg(
    network: TransitNetwork,
    line: Line,
    start: int,
    end: int,
    *,
    weekday: int,
    arrival_time: time,
    index: ConnectionIndex,
) -> Leg | None:
    """Ride on `line` from stop position `start` to `end` (inclusive), scheduled.

    Returns None when the positions are invalid or the line has no departure.
    """

    if not (0 <= start <= end < len(line.stop_codes)):
        logger.error(
            "Invalid stop positions on line %s: start=%s end=%s size=%s",
            line.code,
            start,
            end,
            len(line.stop_codes),
        )
        return None

    stop_codes = line.stop_codes[start : end + 1]
    leg = Leg(
        line=line,
        stops=network.stops_for(stop_codes),
        duration_s=path_duration(stop_codes, index),
    )

    scheduled = assign_departures([leg], weekday, arrival_time, index)
    if scheduled is None:
        logger.warning("No departure for line %s on day %s", line.code, weekday)
        return None

    logger.debug("Built leg on line %s with %s stops", line.code, len(stop_codes))
    return scheduled[0]
