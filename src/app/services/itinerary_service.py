from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import time

from src.app.ports.output import INetworkRepository
from src.domain.algorithms.planner import plan
from src.domain.exceptions import UnknownStopError
from src.domain.models import Itinerary, Line, Stop, TransitNetwork

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ItineraryPlanningService:
    """Application service (use case) for bus itinerary planning.

    Resolves stop codes against the current network snapshot and delegates
    the search to the pure domain planner.
    """

    network_repository: INetworkRepository

    # Tuning knobs
    max_itineraries: int | None = None

    def plan_itineraries(
        self,
        *,
        origin_code: int,
        destination_code: int,
        weekday: int,
        arrival_time: time,
    ) -> list[Itinerary]:
        network = self.network_repository.load_network()
        origin = self._stop(network, origin_code)
        destination = self._stop(network, destination_code)

        itineraries = plan(
            network,
            origin,
            destination,
            weekday=weekday,
            arrival_time=arrival_time,
            segments=network.segments_by_key,
        )

        if self.max_itineraries is not None and len(itineraries) > self.max_itineraries:
            logger.debug(
                "Truncating %s itineraries to %s", len(itineraries), self.max_itineraries
            )
            itineraries = itineraries[: self.max_itineraries]
        return itineraries

    def list_stops(self) -> list[Stop]:
        return list(self.network_repository.load_network().stops_by_code.values())

    def get_stop(self, code: int) -> Stop:
        return self._stop(self.network_repository.load_network(), code)

    def lines_serving(self, code: int) -> list[Line]:
        network = self.network_repository.load_network()
        return network.lines_serving(self._stop(network, code))

    def _stop(self, network: TransitNetwork, code: int) -> Stop:
        try:
            return network.stop(code)
        except KeyError:
            raise UnknownStopError(code) from None
