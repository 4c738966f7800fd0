from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

EARTH_RADIUS_M = 6371000.0


@dataclass(frozen=True, slots=True)
class GeoPoint:
    lat: float
    lon: float

    def __post_init__(self) -> None:
        if not (-90.0 <= self.lat <= 90.0):
            raise ValueError(f"Invalid latitude: {self.lat}")
        if not (-180.0 <= self.lon <= 180.0):
            raise ValueError(f"Invalid longitude: {self.lon}")

    def distance_to(self, other: GeoPoint) -> float:
        """Great-circle distance in meters."""

        lat1 = math.radians(self.lat)
        lat2 = math.radians(other.lat)
        dlat = lat2 - lat1
        dlon = math.radians(other.lon) - math.radians(self.lon)

        s = (
            math.sin(dlat / 2.0) ** 2
            + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2.0) ** 2
        )
        return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(s))


def path_length_m(points: Iterable[GeoPoint]) -> float:
    pts = list(points)
    if len(pts) < 2:
        return 0.0
    return float(sum(a.distance_to(b) for a, b in zip(pts, pts[1:])))
