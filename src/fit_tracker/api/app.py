"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from fit_tracker.api.health_data import router as health_data_router
from fit_tracker.api.insights import router as insights_router
from fit_tracker.api.logs import router as logs_router
from fit_tracker.api.profile import router as profile_router
from fit_tracker.api.scan import router as scan_router
from fit_tracker.app_logging import configure_logging
from fit_tracker.containers import AppContainer
from fit_tracker.domain.errors import (
    EntryValidationError,
    NetworkUnavailableError,
    NotFoundError,
    TrackerError,
    UnauthorizedError,
)

_ERROR_STATUS: list[tuple[type[TrackerError], int]] = [
    (UnauthorizedError, status.HTTP_401_UNAUTHORIZED),
    (NetworkUnavailableError, status.HTTP_503_SERVICE_UNAVAILABLE),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (EntryValidationError, 422),
]


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.identity_service.ensure_identity()
        except TrackerError:
            logger.exception("Failed to resolve user identity at startup")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(logs_router)
    app.include_router(health_data_router)
    app.include_router(profile_router)
    app.include_router(insights_router)
    app.include_router(scan_router)

    @app.exception_handler(TrackerError)
    async def tracker_error_handler(
        request: Request, exc: TrackerError
    ) -> JSONResponse:
        status_code = error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.exception("Request failed", exc_info=exc)
        return JSONResponse(status_code=status_code, content={"error": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def error_status(exc: TrackerError) -> int:
    """Map a tracker error to the HTTP status reported to clients."""
    for error_type, status_code in _ERROR_STATUS:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR
