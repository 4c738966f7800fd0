from __future__ import annotations

from datetime import time

import pytest

from src.domain.models import GeoPoint, Line, Segment, SegmentKind, Stop, TransitNetwork

BUS = SegmentKind.BUS
WALK = SegmentKind.WALK


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


def _stop(code: int, address: str, lat: float, lon: float) -> Stop:
    return Stop(code=code, address=address, location=GeoPoint(lat=lat, lon=lon))


@pytest.fixture
def network() -> TransitNetwork:
    """Small hand-built network.

    L1I  1 -> 44 -> 43 -> 47 -> 50       (600, 90, 90, 120 s)
    L5   44 -> 47 -> 60                  (240, 60 s)
    L3   70 -> 43 -> 47 -> 80            (300, 90, 200 s)
    L6   90 -> 91                        (300 s)
    L7   92 -> 95                        (240 s)
    walk 91 <-> 92                       (120 s)
    L8   100 -> 101                      (60 s) late-night wraparound
    L9   110 -> 111                      (60 s) no departures at all
    99 is served by nothing.
    """

    stops = [
        _stop(1, "Terminal Norte", -42.7600, -65.0400),
        _stop(44, "España 1660", -42.7650, -65.0420),
        _stop(43, "España 1200", -42.7670, -65.0390),
        _stop(47, "España 928", -42.7690, -65.0360),
        _stop(50, "Terminal Sur", -42.7720, -65.0330),
        _stop(60, "Costanera 100", -42.7740, -65.0300),
        _stop(70, "Roca 300", -42.7610, -65.0500),
        _stop(80, "Mitre 55", -42.7730, -65.0310),
        _stop(90, "Belgrano 10", -42.7800, -65.0500),
        _stop(91, "Belgrano 900", -42.7810, -65.0450),
        _stop(92, "San Martín 850", -42.7815, -65.0445),
        _stop(95, "Hospital", -42.7850, -65.0400),
        _stop(99, "Aislada", -42.7900, -65.0600),
        _stop(100, "Nocturna 1", -42.7500, -65.0200),
        _stop(101, "Nocturna 2", -42.7510, -65.0210),
        _stop(110, "Fantasma 1", -42.7400, -65.0100),
        _stop(111, "Fantasma 2", -42.7410, -65.0110),
    ]

    lines = [
        Line(
            code="L1I",
            name="Línea 1 Ida",
            stop_codes=(1, 44, 43, 47, 50),
            departures={
                1: (time(10, 0), time(10, 40), time(11, 20)),
                2: (time(6, 0),),
            },
        ),
        Line(
            code="L5",
            name="Línea 5",
            stop_codes=(44, 47, 60),
            departures={1: (time(10, 30), time(11, 30))},
        ),
        Line(
            code="L3",
            name="Línea 3",
            stop_codes=(70, 43, 47, 80),
            departures={1: (time(10, 0), time(11, 0), time(12, 0))},
        ),
        Line(
            code="L6",
            name="Línea 6",
            stop_codes=(90, 91),
            departures={1: (time(10, 0), time(10, 45))},
        ),
        Line(
            code="L7",
            name="Línea 7",
            stop_codes=(92, 95),
            departures={1: (time(11, 0), time(11, 30))},
        ),
        Line(
            code="L8",
            name="Nocturna",
            stop_codes=(100, 101),
            departures={
                1: (time(6, 0), time(7, 0)),
                2: (time(8, 0), time(5, 30)),
            },
        ),
        Line(code="L9", name="Sin servicio", stop_codes=(110, 111)),
    ]

    segments = [
        Segment(1, 44, 600, BUS),
        Segment(44, 43, 90, BUS),
        Segment(43, 47, 90, BUS),
        Segment(47, 50, 120, BUS),
        Segment(44, 47, 240, BUS),
        Segment(47, 60, 60, BUS),
        Segment(70, 43, 300, BUS),
        Segment(47, 80, 200, BUS),
        Segment(90, 91, 300, BUS),
        Segment(92, 95, 240, BUS),
        Segment(91, 92, 120, WALK),
        Segment(100, 101, 60, BUS),
        Segment(110, 111, 60, BUS),
    ]

    return TransitNetwork.build(stops=stops, lines=lines, segments=segments)
