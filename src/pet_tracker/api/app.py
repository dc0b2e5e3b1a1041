"""FastAPI application factory."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from pet_tracker.api.feeding import router as feeding_router
from pet_tracker.api.foods import router as foods_router
from pet_tracker.api.insights import router as insights_router
from pet_tracker.api.pets import router as pets_router
from pet_tracker.api.weights import router as weights_router
from pet_tracker.app_logging import configure_logging
from pet_tracker.containers import AppContainer
from pet_tracker.services.errors import (
    DataAccessError,
    NotFoundError,
    SetupIncompleteError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Pet Tracker")
    app.state.container = container

    app.include_router(pets_router)
    app.include_router(foods_router)
    app.include_router(feeding_router)
    app.include_router(weights_router)
    app.include_router(insights_router)

    @app.exception_handler(DataAccessError)
    async def data_access_failed(
        request: Request, exc: DataAccessError
    ) -> JSONResponse:
        logger.error(
            "Backend request failed: %s %s",
            request.method,
            request.url.path,
            exc_info=exc,
        )
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={"detail": "Request failed"},
        )

    @app.exception_handler(NotFoundError)
    async def not_found(request: Request, exc: NotFoundError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": f"{exc.entity} not found"},
        )

    @app.exception_handler(SetupIncompleteError)
    async def setup_incomplete(
        request: Request, exc: SetupIncompleteError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content={"detail": str(exc)},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
