# =============================================================================
# Application Entry Point
# =============================================================================
#
# Builds the FastAPI app: logging, routers, middleware, exception handlers
# and the lifespan hook that prepares the store.
#
# STARTUP:
#   1. Build the configured store (Redis or in-memory)
#   2. Create the search index if missing
#   3. If seed_on_startup: wipe and load the six demo people
# SHUTDOWN:
#   Close the store and the shared Redis client.
#
# Run with:
#   uvicorn people_api.main:app --reload
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from people_api.api import people_v1, people_v2
from people_api.api.request_log import RequestLoggingMiddleware
from people_api.config import settings
from people_api.db.engine import close_redis
from people_api.exceptions import ApplicationError
from people_api.logging_config import setup_logging
from people_api.models.responses import ErrorResponse, HealthResponse
from people_api.services.seed import load_demo_data
from people_api.services.store import get_person_store

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI) -> AsyncIterator[None]:
    """Prepare the store on startup and release connections on shutdown."""
    store = get_person_store()
    await store.create_index()
    if settings.seed_on_startup:
        await load_demo_data(store)
    logger.info("%s v%s ready (store=%s)", settings.app_name, settings.app_version, settings.store_type)

    yield

    await store.close()
    await close_redis()


async def handle_application_error(_: Request, exc: ApplicationError) -> JSONResponse:
    """Render application errors as `{"detail", "code"}` with their HTTP status."""
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(detail=exc.message, code=exc.code).model_dump(),
    )


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.add_middleware(RequestLoggingMiddleware)
    app.add_exception_handler(ApplicationError, handle_application_error)

    app.include_router(people_v1.router)
    app.include_router(people_v2.router)

    @app.get("/health", response_model=HealthResponse, tags=["Health"])
    async def health() -> HealthResponse:
        return HealthResponse(
            version=settings.app_version,
            service=settings.app_name,
            store=settings.store_type,
        )

    return app


app = create_app()
