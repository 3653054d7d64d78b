"""
ranklist API - FastAPI application.

Serves list sessions over HTTP:
- GET  /lists                       available lists and the selected one
- POST /lists/{list_id}/open        load, reconcile and fit a list
- GET  /lists/{list_id}/matchup     current pair
- POST /lists/{list_id}/choices     record the preferred item
- POST /lists/{list_id}/skip        draw another pair
- GET  /lists/{list_id}/standings   ranked view

Run locally with `python -m ranklist.api.main`.
"""

import os
import logging
from datetime import datetime, timezone
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ranklist import __version__
from ranklist.api.schemas import ErrorResponse, HealthResponse
from ranklist.api.middleware import RequestLoggingMiddleware
from ranklist.api.dependencies import cleanup, storage_writable
from ranklist.api.routes import lists_router
from ranklist.config.settings import get_settings
from ranklist.utils.logger_config import setup_logging


logger = logging.getLogger(__name__)

API_VERSION = __version__
DEFAULT_CORS_ORIGINS = "http://localhost:3000,http://127.0.0.1:3000"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Configure logging on startup and drop the workflow on shutdown."""
    settings = get_settings()
    setup_logging(level=settings.log_level, format_string=settings.log_format)
    logger.info(f"ranklist API {API_VERSION} starting with {settings.to_dict()}")

    yield

    cleanup()
    logger.info("ranklist API stopped")


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _add_service_routes(app: FastAPI) -> None:
    @app.get("/", tags=["root"])
    async def root():
        """Service info and entry points."""
        return {
            "name": "ranklist API",
            "version": API_VERSION,
            "lists": "/lists",
            "docs": "/docs",
            "health": "/health",
        }

    @app.get("/health", response_model=HealthResponse, tags=["health"])
    async def health_check():
        """Liveness plus whether state can be persisted."""
        return HealthResponse(
            status="healthy",
            version=API_VERSION,
            storage_writable=storage_writable(),
            timestamp=_utc_timestamp(),
        )


def _add_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=True)
        body = ErrorResponse(
            error="Internal server error",
            detail=str(exc) if os.getenv("DEBUG") else None,
            code="INTERNAL_ERROR",
        )
        return JSONResponse(status_code=500, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Build the ranklist FastAPI application.

    CORS origins come from the comma-separated CORS_ORIGINS variable.

    Returns:
        Configured FastAPI instance
    """
    app = FastAPI(
        title="ranklist API",
        description=(
            "Rank the items of a list by repeatedly choosing the better of two. "
            "Choices accumulate in a win matrix, a Bradley-Terry fit turns them "
            "into abilities, and the next pair is drawn where a comparison is "
            "most informative."
        ),
        version=API_VERSION,
        lifespan=lifespan,
    )

    origins = os.getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS).split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[origin.strip() for origin in origins if origin.strip()],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(lists_router)
    _add_service_routes(app)
    _add_error_handlers(app)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "ranklist.api.main:app",
        host=os.getenv("API_HOST", "127.0.0.1"),
        port=int(os.getenv("API_PORT", "8000")),
        reload=os.getenv("DEBUG", "false").lower() == "true",
    )
