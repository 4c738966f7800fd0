from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import time
from typing import Mapping

from src.domain.models import Itinerary, Leg, Segment, Stop, TransitNetwork

from .connections import ConnectionIndex
from .schedule import build_bus_leg

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SearchContext:
    """Read-only inputs shared by every strategy during one search."""

    network: TransitNetwork
    segments: Mapping[str, Segment]
    index: ConnectionIndex
    weekday: int
    arrival_time: time


class SearchStrategy(ABC):
    """One tier of the itinerary search."""

    name: str = "strategy"

    @abstractmethod
    def search(
        self, origin: Stop, destination: Stop, context: SearchContext
    ) -> list[Itinerary]:
        """Return candidate itineraries, possibly none."""


@dataclass(frozen=True, slots=True)
class DirectStrategy(SearchStrategy):
    """A single ride on a line that reaches the destination after the origin."""

    name: str = "direct"

    def search(
        self, origin: Stop, destination: Stop, context: SearchContext
    ) -> list[Itinerary]:
        found: list[Itinerary] = []
        for line in context.network.lines_serving(origin):
            if not destination.serves(line.code):
                continue

            start = line.index_of(origin.code)
            end = line.index_of(destination.code)
            if end <= start:
                continue

            leg = build_bus_leg(
                context.network,
                line,
                start,
                end,
                weekday=context.weekday,
                arrival_time=context.arrival_time,
                index=context.index,
            )
            if leg is not None:
                found.append(
                    Itinerary(legs=(leg,), requested_arrival=context.arrival_time)
                )
        return found


@dataclass(frozen=True, slots=True)
class TransferStrategy(SearchStrategy):
    """Two rides joined at the first shared stop found along the first line."""

    name: str = "transfer"

    def search(
        self, origin: Stop, destination: Stop, context: SearchContext
    ) -> list[Itinerary]:
        network = context.network
        found: list[Itinerary] = []

        for first_line in network.lines_serving(origin):
            origin_pos = first_line.index_of(origin.code)
            downstream = first_line.stop_codes[origin_pos + 1 :]

            for second_line in network.lines_serving(destination):
                transfer_code = _first_transfer_stop(
                    downstream, second_line.stop_codes, destination.code
                )
                if transfer_code is None:
                    continue

                transfer_pos = second_line.index_of(transfer_code)
                destination_pos = second_line.index_of(destination.code)
                if destination_pos <= transfer_pos:
                    continue

                first_leg = build_bus_leg(
                    network,
                    first_line,
                    origin_pos,
                    first_line.index_of(transfer_code),
                    weekday=context.weekday,
                    arrival_time=context.arrival_time,
                    index=context.index,
                )
                if first_leg is None or first_leg.arrival is None:
                    continue

                second_leg = build_bus_leg(
                    network,
                    second_line,
                    transfer_pos,
                    destination_pos,
                    weekday=context.weekday,
                    arrival_time=first_leg.arrival,
                    index=context.index,
                )
                if second_leg is None:
                    continue

                found.append(
                    Itinerary(
                        legs=(first_leg, second_leg),
                        requested_arrival=context.arrival_time,
                    )
                )
        return found


def _first_transfer_stop(
    downstream: tuple[int, ...], other_line_stops: tuple[int, ...], final_stop: int
) -> int | None:
    # Line order decides: the first shared stop wins, not the best one.
    candidates = set(other_line_stops)
    candidates.discard(final_stop)
    for code in downstream:
        if code in candidates:
            return code
    return None


@dataclass(frozen=True, slots=True)
class WalkStrategy(SearchStrategy):
    """Ride, walk between two nearby stops, ride again.

    Both rides are searched directly against the caller's arrival time; they
    are not chained to each other.
    """

    name: str = "walk"
    direct: DirectStrategy = field(default_factory=DirectStrategy)

    def search(
        self, origin: Stop, destination: Stop, context: SearchContext
    ) -> list[Itinerary]:
        network = context.network
        found: list[Itinerary] = []

        for walk in context.segments.values():
            if not walk.is_walk:
                continue

            alight = network.stops_by_code.get(walk.origin)
            board = network.stops_by_code.get(walk.destination)
            if alight is None or board is None:
                logger.warning(
                    "Skipping walk %s -> %s: stop not in network",
                    walk.origin,
                    walk.destination,
                )
                continue

            to_walk = self.direct.search(origin, alight, context)
            if not to_walk:
                continue
            from_walk = self.direct.search(board, destination, context)
            if not from_walk:
                continue

            for first in to_walk:
                walk_start = first.arrival
                if walk_start is None:
                    continue
                walking_leg = Leg(
                    line=None,
                    stops=(alight, board),
                    departure=walk_start,
                    duration_s=walk.duration_s,
                )
                for last in from_walk:
                    found.append(
                        Itinerary(
                            legs=(*first.legs, walking_leg, *last.legs),
                            requested_arrival=context.arrival_time,
                        )
                    )

            logger.debug(
                "Walk %s -> %s: %s x %s combinations",
                walk.origin,
                walk.destination,
                len(to_walk),
                len(from_walk),
            )
        return found


DEFAULT_STRATEGIES: tuple[SearchStrategy, ...] = (
    DirectStrategy(),
    TransferStrategy(),
    WalkStrategy(),
)

