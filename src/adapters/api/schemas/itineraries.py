from __future__ import annotations

from datetime import time
from typing import Literal

from pydantic import BaseModel, Field


class GeoPointSchema(BaseModel):
    lat: float = Field(..., ge=-90.0, le=90.0)
    lon: float = Field(..., ge=-180.0, le=180.0)


class StopSchema(BaseModel):
    code: int
    address: str
    location: GeoPointSchema
    line_codes: list[str] = []


class StopRefSchema(BaseModel):
    code: int
    address: str


class LineSchema(BaseModel):
    code: str
    name: str
    stop_codes: list[int] = []


class LegSchema(BaseModel):
    mode: Literal["walk", "bus"]
    line_code: str | None = None
    line_name: str | None = None
    stops: list[StopRefSchema] = []
    departure: time | None = None
    arrival: time | None = None
    duration_s: int
    distance_m: float | None = None


class ItinerarySchema(BaseModel):
    legs: list[LegSchema] = []

    departure: time | None = None
    arrival: time | None = None
    travel_duration_s: int
    total_duration_s: int
    walking_duration_s: int = 0
    transfers: int = 0


class ItineraryRequestSchema(BaseModel):
    origin_stop: int = Field(..., gt=0)
    destination_stop: int = Field(..., gt=0)
    weekday: int = Field(..., ge=1, le=7, description="1 = Monday ... 7 = Sunday")
    arrival_time: time = Field(..., description="When the rider reaches the origin stop")
