from __future__ import annotations

import logging

import httpx
import pytest

from src.adapters.api.dependencies import get_planning_service
from src.adapters.persistence import InMemoryNetworkRepository
from src.domain.exceptions import InvalidSearchArgument, NetworkIntegrityError
from src.domain.models import TransitNetwork
from src.main import app, create_app


class _ExplodingService:
    def plan_itineraries(self, **kwargs):
        raise RuntimeError("network snapshot unavailable")


class _BrokenNetworkService:
    def plan_itineraries(self, **kwargs):
        raise NetworkIntegrityError("segments are required")


class _InvalidArgumentService:
    def plan_itineraries(self, **kwargs):
        raise InvalidSearchArgument("Weekday must be between 1 and 7, got 9")


def _client(application) -> httpx.AsyncClient:
    transport = httpx.ASGITransport(app=application, raise_app_exceptions=False)
    return httpx.AsyncClient(transport=transport, base_url="http://test")


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_itineraries_returns_direct_options(network: TransitNetwork) -> None:
    application = create_app(InMemoryNetworkRepository(network))

    async with _client(application) as client:
        resp = await client.post(
            "/itineraries",
            json={
                "origin_stop": 44,
                "destination_stop": 47,
                "weekday": 1,
                "arrival_time": "10:35",
            },
        )

    assert resp.status_code == 200
    payload = resp.json()
    assert len(payload) == 2

    leg = payload[0]["legs"][0]
    assert leg["mode"] == "bus"
    assert leg["line_code"] == "L1I"
    assert [s["code"] for s in leg["stops"]] == [44, 43, 47]
    assert leg["departure"] == "10:50:00"
    assert leg["arrival"] == "10:53:00"
    assert leg["duration_s"] == 180
    # 15 minutes waiting at stop 44 plus the ride.
    assert payload[0]["total_duration_s"] == 15 * 60 + 180
    assert payload[0]["transfers"] == 0


@pytest.mark.unit
@pytest.mark.anyio
async def test_post_itineraries_empty_when_no_route(network: TransitNetwork) -> None:
    application = create_app(InMemoryNetworkRepository(network))

    async with _client(application) as client:
        resp = await client.post(
            "/itineraries",
            json={
                "origin_stop": 95,
                "destination_stop": 90,
                "weekday": 1,
                "arrival_time": "10:35:00",
            },
        )

    assert resp.status_code == 200
    assert resp.json() == []


@pytest.mark.unit
@pytest.mark.anyio
async def test_unknown_stop_is_404(network: TransitNetwork) -> None:
    application = create_app(InMemoryNetworkRepository(network))

    async with _client(application) as client:
        resp = await client.post(
            "/itineraries",
            json={
                "origin_stop": 12345,
                "destination_stop": 47,
                "weekday": 1,
                "arrival_time": "10:35",
            },
        )
        lines_resp = await client.get("/stops/12345/lines")

    assert resp.status_code == 404
    assert lines_resp.status_code == 404


@pytest.mark.unit
@pytest.mark.anyio
async def test_weekday_out_of_range_is_rejected(network: TransitNetwork) -> None:
    application = create_app(InMemoryNetworkRepository(network))

    async with _client(application) as client:
        resp = await client.post(
            "/itineraries",
            json={
                "origin_stop": 44,
                "destination_stop": 47,
                "weekday": 8,
                "arrival_time": "10:35",
            },
        )

    assert resp.status_code == 422


@pytest.mark.unit
@pytest.mark.anyio
async def test_stop_listing_and_lines(network: TransitNetwork) -> None:
    application = create_app(InMemoryNetworkRepository(network))

    async with _client(application) as client:
        stops = await client.get("/stops")
        lines = await client.get("/stops/47/lines")

    assert stops.status_code == 200
    by_code = {s["code"]: s for s in stops.json()}
    assert by_code[44]["line_codes"] == ["L1I", "L5"]
    assert by_code[44]["location"]["lat"] == pytest.approx(-42.765)

    assert lines.status_code == 200
    assert [line["code"] for line in lines.json()] == ["L1I", "L5", "L3"]


_REQUEST = {
    "origin_stop": 44,
    "destination_stop": 47,
    "weekday": 1,
    "arrival_time": "10:35",
}


@pytest.mark.unit
@pytest.mark.anyio
@pytest.mark.parametrize(
    ("reveal", "detail"),
    [
        ("", "Internal Server Error"),
        ("true", "network snapshot unavailable"),
    ],
)
async def test_unexpected_errors_are_json(
    monkeypatch: pytest.MonkeyPatch, reveal: str, detail: str
) -> None:
    monkeypatch.setenv("PLANNER_REVEAL_ERRORS", reveal)
    app.dependency_overrides[get_planning_service] = lambda: _ExplodingService()

    async with _client(app) as client:
        resp = await client.post("/itineraries", json=_REQUEST)

    app.dependency_overrides.clear()

    assert resp.status_code == 500
    assert resp.json() == {"detail": detail}


@pytest.mark.unit
@pytest.mark.anyio
async def test_broken_network_is_503() -> None:
    app.dependency_overrides[get_planning_service] = lambda: _BrokenNetworkService()

    async with _client(app) as client:
        resp = await client.post("/itineraries", json=_REQUEST)

    app.dependency_overrides.clear()

    assert resp.status_code == 503
    assert "segments are required" in resp.json()["detail"]


@pytest.mark.unit
@pytest.mark.anyio
async def test_invalid_search_argument_is_422() -> None:
    app.dependency_overrides[get_planning_service] = lambda: _InvalidArgumentService()

    async with _client(app) as client:
        resp = await client.post("/itineraries", json=_REQUEST)

    app.dependency_overrides.clear()

    assert resp.status_code == 422
    assert resp.json() == {"detail": "Weekday must be between 1 and 7, got 9"}


@pytest.mark.unit
def test_unknown_log_level_is_ignored(monkeypatch: pytest.MonkeyPatch) -> None:
    src_logger = logging.getLogger("src")
    previous = src_logger.level
    monkeypatch.setenv("PLANNER_LOG_LEVEL", "verbose")

    try:
        create_app()
        assert src_logger.level == previous

        monkeypatch.setenv("PLANNER_LOG_LEVEL", "debug")
        create_app()
        assert src_logger.level == logging.DEBUG
    finally:
        src_logger.setLevel(previous)


@pytest.mark.unit
@pytest.mark.anyio
async def test_health() -> None:
    async with _client(app) as client:
        resp = await client.get("/health")

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}
