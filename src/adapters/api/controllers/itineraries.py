from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from src.adapters.api.dependencies import get_planning_service
from src.adapters.api.schemas.itineraries import (
    GeoPointSchema,
    ItineraryRequestSchema,
    ItinerarySchema,
    LegSchema,
    LineSchema,
    StopRefSchema,
    StopSchema,
)
from src.app.services.itinerary_service import ItineraryPlanningService
from src.domain.exceptions import UnknownStopError
from src.domain.models import Itinerary, Stop

router = APIRouter(tags=["itineraries"])


def _stop_to_schema(stop: Stop) -> StopSchema:
    return StopSchema(
        code=stop.code,
        address=stop.address,
        location=GeoPointSchema(lat=stop.location.lat, lon=stop.location.lon),
        line_codes=list(stop.line_codes),
    )


def _itinerary_to_schema(itinerary: Itinerary) -> ItinerarySchema:
    return ItinerarySchema(
        legs=[
            LegSchema(
                mode=leg.mode.value,
                line_code=leg.line.code if leg.line else None,
                line_name=leg.line.name if leg.line else None,
                stops=[StopRefSchema(code=s.code, address=s.address) for s in leg.stops],
                departure=leg.departure,
                arrival=leg.arrival,
                duration_s=leg.duration_s,
                distance_m=leg.distance_m,
            )
            for leg in itinerary.legs
        ],
        departure=itinerary.departure,
        arrival=itinerary.arrival,
        travel_duration_s=itinerary.travel_duration_s,
        total_duration_s=itinerary.total_duration_s,
        walking_duration_s=itinerary.walking_duration_s,
        transfers=itinerary.transfers,
    )


@router.post("/itineraries", response_model=list[ItinerarySchema])
def plan_itineraries(
    req: ItineraryRequestSchema,
    service: ItineraryPlanningService = Depends(get_planning_service),
) -> list[ItinerarySchema]:
    try:
        itineraries = service.plan_itineraries(
            origin_code=req.origin_stop,
            destination_code=req.destination_stop,
            weekday=req.weekday,
            arrival_time=req.arrival_time,
        )
    except UnknownStopError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return [_itinerary_to_schema(it) for it in itineraries]


@router.get("/stops", response_model=list[StopSchema])
def list_stops(
    service: ItineraryPlanningService = Depends(get_planning_service),
) -> list[StopSchema]:
    return [_stop_to_schema(s) for s in service.list_stops()]


@router.get("/stops/{code}/lines", response_model=list[LineSchema])
def lines_for_stop(
    code: int,
    service: ItineraryPlanningService = Depends(get_planning_service),
) -> list[LineSchema]:
    try:
        lines = service.lines_serving(code)
    except UnknownStopError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return [
        LineSchema(code=line.code, name=line.name, stop_codes=list(line.stop_codes))
        for line in lines
    ]
