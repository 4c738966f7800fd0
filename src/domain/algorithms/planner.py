from __future__ import annotations

import logging
from datetime import time
from typing import Mapping, Sequence

from src.domain.exceptions import InvalidSearchArgument
from src.domain.models import Itinerary, Segment, Stop, TransitNetwork

from .connections import ConnectionIndex
from .schedule import require_weekday
from .strategies import DEFAULT_STRATEGIES, SearchContext, SearchStrategy

logger = logging.getLogger(__name__)


def plan(
    network: TransitNetwork,
    origin: Stop,
    destination: Stop,
    *,
    weekday: int,
    arrival_time: time,
    segments: Mapping[str, Segment] | None = None,
    strategies: Sequence[SearchStrategy] = DEFAULT_STRATEGIES,
) -> list[Itinerary]:
    """Plan itineraries from `origin` to `destination`.

    `arrival_time` is when the rider gets to the origin stop on `weekday`
    (1 = Monday ... 7 = Sunday). Strategies are tried in order and the first
    one that yields anything wins; there is no ranking across tiers. A tier
    that fails unexpectedly is logged and counts as empty.

    Raises InvalidSearchArgument for missing arguments or a weekday outside
    1..7, and NetworkIntegrityError when the segments cannot be indexed.
    An empty list means no route.
    """

    if network is None or origin is None or destination is None:
        raise InvalidSearchArgument("network, origin and destination are required")
    if not isinstance(arrival_time, time):
        raise InvalidSearchArgument(f"arrival_time must be a time, got {arrival_time!r}")
    require_weekday(weekday)

    if segments is None:
        segments = network.segments_by_key

    logger.info(
        "Planning from stop %s (%s) to stop %s (%s) on day %s arriving at %s",
        origin.code,
        origin.address,
        destination.code,
        destination.address,
        weekday,
        arrival_time,
    )

    context = SearchContext(
        network=network,
        segments=segments,
        index=ConnectionIndex.from_segments(segments),
        weekday=weekday,
        arrival_time=arrival_time,
    )

    for strategy in strategies:
        try:
            found = strategy.search(origin, destination, context)
        except Exception:
            logger.exception("Unexpected failure in %s search", strategy.name)
            found = []

        if found:
            logger.info("%s search found %s itineraries", strategy.name, len(found))
            return found

    logger.info("No itinerary from stop %s to stop %s", origin.code, destination.code)
    return []
