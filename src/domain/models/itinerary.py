from __future__ import annotations

from dataclasses import dataclass, field
from datetime import time
from enum import Enum

from src.domain.algorithms.clock import add_seconds, elapsed_seconds

from .geo import path_length_m
from .network import Line
from .stop import Stop


class TravelMode(str, Enum):
    WALK = "walk"
    BUS = "bus"


@dataclass(frozen=True, slots=True)
class Leg:
    """One ride on a line, or a walk between two stops when `line` is None."""

    line: Line | None
    stops: tuple[Stop, ...]
    departure: time | None = None
    duration_s: int = 0

    @property
    def mode(self) -> TravelMode:
        return TravelMode.WALK if self.line is None else TravelMode.BUS

    @property
    def origin(self) -> Stop:
        return self.stops[0]

    @property
    def destination(self) -> Stop:
        return self.stops[-1]

    @property
    def arrival(self) -> time | None:
        if self.departure is None:
            return None
        return add_seconds(self.departure, self.duration_s)

    @property
    def distance_m(self) -> float:
        # Straight lines between consecutive stops.
        return path_length_m(s.location for s in self.stops)


@dataclass(frozen=True, slots=True)
class Itinerary:
    legs: tuple[Leg, ...] = field(default_factory=tuple)
    # When the rider reaches the origin stop; the first wait counts from here.
    requested_arrival: time | None = None

    def __post_init__(self) -> None:
        if not self.legs:
            raise ValueError("An itinerary needs at least one leg")

    @property
    def origin(self) -> Stop:
        return self.legs[0].origin

    @property
    def destination(self) -> Stop:
        return self.legs[-1].destination

    @property
    def departure(self) -> time | None:
        return self.legs[0].departure

    @property
    def arrival(self) -> time | None:
        return self.legs[-1].arrival

    @property
    def travel_duration_s(self) -> int:
        """Time spent riding or walking, without waits."""
        return sum(leg.duration_s for leg in self.legs)

    @property
    def walking_duration_s(self) -> int:
        return sum(leg.duration_s for leg in self.legs if leg.mode == TravelMode.WALK)

    @property
    def total_duration_s(self) -> int:
        """Wall-clock seconds from the rider reaching the origin stop to the
        final arrival, waits included.

        Without `requested_arrival` the count starts at the first departure.
        Falls back to the sum of leg durations when a leg is unscheduled.
        """
        departures = [leg.departure for leg in self.legs if leg.departure is not None]
        if len(departures) != len(self.legs):
            return self.travel_duration_s

        total = 0
        current = self.requested_arrival
        for leg, departure in zip(self.legs, departures):
            if current is not None:
                total += elapsed_seconds(current, departure)
            total += leg.duration_s
            current = add_seconds(departure, leg.duration_s)
        return total

    @property
    def transfers(self) -> int:
        rides = sum(1 for leg in self.legs if leg.mode == TravelMode.BUS)
        return max(0, rides - 1)

    @property
    def line_codes(self) -> tuple[str, ...]:
        return tuple(leg.line.code for leg in self.legs if leg.line is not None)

    @property
    def stop_codes(self) -> tuple[tuple[int, ...], ...]:
        return tuple(tuple(s.code for s in leg.stops) for leg in self.legs)
