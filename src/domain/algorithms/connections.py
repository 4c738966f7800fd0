from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping

from src.domain.exceptions import NetworkIntegrityError
from src.domain.models import Segment


@dataclass(frozen=True, slots=True)
class ConnectionIndex:
    """Outgoing segments per stop code, in segment-map insertion order.

    Built fresh for every search; cheap enough that no caching is done here.
    """

    outgoing_by_stop: Mapping[int, tuple[Segment, ...]]

    @classmethod
    def from_segments(cls, segments: Mapping[str, Segment] | None) -> ConnectionIndex:
        if segments is None:
            raise NetworkIntegrityError("Segment collection is required")

        outgoing: dict[int, list[Segment]] = {}
        try:
            for seg in segments.values():
                outgoing.setdefault(seg.origin, []).append(seg)
        except (AttributeError, TypeError) as exc:
            raise NetworkIntegrityError(f"Malformed segment collection: {exc}") from exc

        return cls(outgoing_by_stop={k: tuple(v) for k, v in outgoing.items()})

    def outgoing(self, stop_code: int) -> tuple[Segment, ...]:
        return tuple(self.outgoing_by_stop.get(stop_code, ()))

    def segment_between(self, origin: int, destination: int) -> Segment | None:
        """First segment from origin to destination (any kind), if any."""

        for seg in self.outgoing_by_stop.get(origin, ()):
            if seg.destination == destination:
                return seg
        return None
