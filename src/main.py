from __future__ import annotations

import logging
import os

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from src.adapters.api.controllers.itineraries import router as itineraries_router
from src.adapters.persistence import InMemoryNetworkRepository
from src.app.ports.output import INetworkRepository
from src.domain.exceptions import InvalidSearchArgument, NetworkIntegrityError

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    name = (os.getenv("PLANNER_LOG_LEVEL") or "").strip().upper()
    if not name:
        return

    level = logging.getLevelName(name)
    if not isinstance(level, int):
        logger.warning("Ignoring unknown PLANNER_LOG_LEVEL %r", name)
        return
    logging.getLogger("src").setLevel(level)


def _reveal_errors() -> bool:
    return (os.getenv("PLANNER_REVEAL_ERRORS") or "").strip().lower() in {
        "1",
        "true",
        "yes",
        "on",
    }


async def network_integrity_handler(
    request: Request, exc: NetworkIntegrityError
) -> JSONResponse:
    """The loaded network cannot be searched until the host replaces it."""

    logger.error("Network integrity failure on %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": f"Transit network unavailable: {exc}"},
    )


async def invalid_search_handler(
    request: Request, exc: InvalidSearchArgument
) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Ensure API errors are JSON so clients can display them."""

    logging.getLogger("uvicorn.error").exception(
        "Unhandled exception", extra={"path": str(request.url.path)}
    )

    if _reveal_errors():
        detail = str(exc) or exc.__class__.__name__
    else:
        detail = "Internal Server Error"

    return JSONResponse(status_code=500, content={"detail": detail})


def create_app(network_repository: INetworkRepository | None = None) -> FastAPI:
    """Build the API around a network repository supplied by the host.

    Without one, an empty in-memory network is served.
    """

    _configure_logging()

    application = FastAPI(title="Bus Itinerary Planner")
    application.state.network_repository = (
        network_repository or InMemoryNetworkRepository()
    )
    application.include_router(itineraries_router)
    application.add_exception_handler(NetworkIntegrityError, network_integrity_handler)
    application.add_exception_handler(InvalidSearchArgument, invalid_search_handler)
    application.add_exception_handler(Exception, unhandled_exception_handler)

    @application.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    return application


app = create_app()
