"""Exception handlers turning domain errors into typed JSON responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from eventhost.exceptions import CapacityExceededError, EventHostError

logger = logging.getLogger(__name__)


def handle_eventhost_error(request: Request, exc: EventHostError) -> JSONResponse:
    """Render any domain error as ``{"error": code, "detail": message, ...}``."""
    body = {"error": exc.code, "detail": exc.detail}
    body.update(exc.extra())
    return JSONResponse(status_code=exc.status_code, content=body)


def handle_capacity_exceeded(request: Request, exc: CapacityExceededError) -> JSONResponse:
    logger.warning(
        "Capacity rejected on %s %s: %d/%d reserved, %d requested",
        request.method, request.url.path, exc.effective_guests, exc.max_guests, exc.requested,
    )
    return handle_eventhost_error(request, exc)


EXCEPTION_HANDLERS = {
    EventHostError: handle_eventhost_error,
    CapacityExceededError: handle_capacity_exceeded,
}


def register_exception_handlers(app: FastAPI) -> None:
    for exc, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exc, handler)
