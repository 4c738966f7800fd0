from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from datetime import time
from enum import IntEnum
from typing import Iterable, Mapping

from src.domain.exceptions import NetworkIntegrityError

from .stop import Stop

logger = logging.getLogger(__name__)

WEEKDAYS = range(1, 8)  # 1 = Monday ... 7 = Sunday


class SegmentKind(IntEnum):
    BUS = 1
    WALK = 2


def segment_key(origin: int, destination: int, kind: SegmentKind | int) -> str:
    """Composite key used for the segment map: "origin-destination-kind"."""

    return f"{origin}-{destination}-{int(kind)}"


@dataclass(frozen=True, slots=True)
class Segment:
    """A timed, directed edge between two stops (codes)."""

    origin: int
    destination: int
    duration_s: int
    kind: SegmentKind = SegmentKind.BUS

    @property
    def key(self) -> str:
        return segment_key(self.origin, self.destination, self.kind)

    @property
    def is_walk(self) -> bool:
        return self.kind == SegmentKind.WALK

    def reversed(self) -> Segment:
        return replace(self, origin=self.destination, destination=self.origin)


@dataclass(frozen=True, slots=True)
class Line:
    """Bus line: ordered stop codes plus per-weekday departures at the head stop."""

    code: str
    name: str
    stop_codes: tuple[int, ...] = ()
    departures: Mapping[int, tuple[time, ...]] = field(
        default_factory=dict, compare=False, hash=False
    )

    @property
    def head_stop_code(self) -> int | None:
        return self.stop_codes[0] if self.stop_codes else None

    def departures_on(self, weekday: int) -> tuple[time, ...]:
        return tuple(self.departures.get(weekday, ()))

    def index_of(self, stop_code: int) -> int:
        """Position of a stop on the line, -1 when the line does not serve it."""

        try:
            return self.stop_codes.index(stop_code)
        except ValueError:
            return -1


@dataclass(frozen=True, slots=True, eq=False)
class TransitNetwork:
    """Immutable snapshot of stops, lines and segments.

    Built once by whoever loads the data and shared read-only by every search.
    Maps keep insertion order; strategies depend on that order.
    """

    stops_by_code: Mapping[int, Stop]
    lines_by_code: Mapping[str, Line]
    segments_by_key: Mapping[str, Segment]

    @classmethod
    def build(
        cls,
        *,
        stops: Iterable[Stop],
        lines: Iterable[Line] = (),
        segments: Iterable[Segment] = (),
    ) -> TransitNetwork:
        raw_stops: dict[int, Stop] = {}
        for stop in stops:
            if stop.code in raw_stops:
                raise NetworkIntegrityError(f"Duplicate stop code: {stop.code}")
            raw_stops[stop.code] = stop

        lines_by_code: dict[str, Line] = {}
        for line in lines:
            if line.code in lines_by_code:
                raise NetworkIntegrityError(f"Duplicate line code: {line.code}")
            normalized = _normalize_line(line, raw_stops)
            if normalized is None:
                continue
            lines_by_code[line.code] = normalized

        segments_by_key: dict[str, Segment] = {}
        for seg in segments:
            if seg.duration_s < 0:
                raise NetworkIntegrityError(f"Negative duration for segment {seg.key}")
            if seg.origin not in raw_stops or seg.destination not in raw_stops:
                logger.warning("Dropping segment %s: unknown stop", seg.key)
                continue
            segments_by_key[seg.key] = seg
            if seg.is_walk:
                # Walking is undirected: keep the mirror even if the caller omitted it.
                mirror = seg.reversed()
                segments_by_key.setdefault(mirror.key, mirror)

        line_codes_by_stop: dict[int, list[str]] = {code: [] for code in raw_stops}
        for line in lines_by_code.values():
            for code in line.stop_codes:
                line_codes_by_stop[code].append(line.code)

        neighbors_by_stop: dict[int, set[int]] = {code: set() for code in raw_stops}
        for seg in segments_by_key.values():
            if seg.is_walk:
                neighbors_by_stop[seg.origin].add(seg.destination)

        stops_by_code = {
            code: replace(
                stop,
                line_codes=tuple(line_codes_by_stop[code]),
                walking_neighbors=frozenset(neighbors_by_stop[code]),
            )
            for code, stop in raw_stops.items()
        }

        return cls(
            stops_by_code=stops_by_code,
            lines_by_code=lines_by_code,
            segments_by_key=segments_by_key,
        )

    def stop(self, code: int) -> Stop:
        return self.stops_by_code[code]

    def stops_for(self, codes: Iterable[int]) -> tuple[Stop, ...]:
        return tuple(self.stops_by_code[c] for c in codes)

    def lines_serving(self, stop: Stop) -> list[Line]:
        return [
            self.lines_by_code[code]
            for code in stop.line_codes
            if code in self.lines_by_code
        ]

    def walk_segments(self) -> list[Segment]:
        return [s for s in self.segments_by_key.values() if s.is_walk]


def _normalize_line(line: Line, stops_by_code: Mapping[int, Stop]) -> Line | None:
    stop_codes: list[int] = []
    for code in line.stop_codes:
        if code not in stops_by_code:
            logger.warning("Line %s references unknown stop %s", line.code, code)
            continue
        # Circular lines come back to their head; keep the first visit only.
        if code in stop_codes:
            continue
        stop_codes.append(code)

    if not stop_codes:
        logger.warning("Line %s has no known stops, skipped", line.code)
        return None

    departures: dict[int, tuple[time, ...]] = {}
    for weekday, times in line.departures.items():
        if weekday not in WEEKDAYS:
            raise NetworkIntegrityError(
                f"Line {line.code} has departures for invalid weekday {weekday}"
            )
        departures[weekday] = tuple(sorted(times))

    return replace(line, stop_codes=tuple(stop_codes), departures=departures)
