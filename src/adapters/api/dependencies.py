from __future__ import annotations

import os

from fastapi import Depends, Request

from src.app.ports.output import INetworkRepository
from src.app.services.itinerary_service import ItineraryPlanningService


def get_network_repository(request: Request) -> INetworkRepository:
    repository = getattr(request.app.state, "network_repository", None)
    if repository is None:
        raise RuntimeError("Network repository not configured")
    return repository


def get_planning_service(
    repository: INetworkRepository = Depends(get_network_repository),
) -> ItineraryPlanningService:
    service = ItineraryPlanningService(network_repository=repository)

    # Allow tuning via env without changing code.
    if os.getenv("PLANNER_MAX_ITINERARIES"):
        service.max_itineraries = int(os.environ["PLANNER_MAX_ITINERARIES"])

    return service
