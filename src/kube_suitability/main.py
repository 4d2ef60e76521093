"""Kubernetes suitability assessment service entry point."""

import time
import uuid
from collections.abc import AsyncGenerator, Awaitable, Callable
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, Response, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from kube_suitability.adapters.database import Database, seed_sample_data
from kube_suitability.api.routes import router
from kube_suitability.errors import NotFoundError, StorageUnavailableError
from kube_suitability.observability import configure_logging, get_logger
from kube_suitability.settings import Settings

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application startup and shutdown lifecycle.

    Args:
        app: The FastAPI application instance.

    Yields:
        None
    """
    settings: Settings = app.state.settings

    # Startup
    database = Database(settings.database_url, echo=settings.database_echo)
    if settings.create_schema_on_startup:
        await database.create_schema()
    if settings.seed_sample_data:
        await seed_sample_data(database)
    app.state.database = database
    logger.info("Service started", service=settings.service_name, version=settings.version)

    yield

    # Shutdown
    await database.dispose()
    logger.info("Service stopped", service=settings.service_name)


async def _log_requests(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Bind a request id and log method, path, status, and duration for every request."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        request_id=request.headers.get("x-request-id") or str(uuid.uuid4())
    )
    started = time.perf_counter()
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    try:
        response = await call_next(request)
        status_code = response.status_code
    finally:
        logger.info(
            "HTTP request",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )
    return response


async def _storage_unavailable_handler(
    request: Request,
    exc: StorageUnavailableError,
) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"detail": exc.message},
    )


async def _not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": exc.message},
    )


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Service settings. Defaults to settings read from the environment.

    Returns:
        Configured FastAPI application; the database is opened by its lifespan.
    """
    settings = settings or Settings()
    configure_logging(settings.log_level, json_logs=settings.log_json)

    app = FastAPI(
        title=settings.service_name,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(_log_requests)
    app.add_exception_handler(StorageUnavailableError, _storage_unavailable_handler)
    app.add_exception_handler(NotFoundError, _not_found_handler)

    app.include_router(router, prefix="/api")
    return app


app: FastAPI = create_app()
