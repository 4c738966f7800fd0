from __future__ import annotations

from dataclasses import dataclass

from .geo import GeoPoint


@dataclass(frozen=True, slots=True)
class Stop:
    """A boarding/alighting point.

    Line membership and walking adjacency are kept as codes and resolved
    through the network maps, so stops never own Line objects.
    """

    code: int
    address: str
    location: GeoPoint
    line_codes: tuple[str, ...] = ()
    walking_neighbors: frozenset[int] = frozenset()

    def __post_init__(self) -> None:
        if isinstance(self.code, bool) or not isinstance(self.code, int):
            raise ValueError(f"Stop code must be an integer: {self.code!r}")
        if self.code <= 0:
            raise ValueError(f"Stop code must be positive: {self.code}")

    def serves(self, line_code: str) -> bool:
        return line_code in self.line_codes
