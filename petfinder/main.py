"""
FastAPI application entry point.
Mounts routes, CORS, Prometheus metrics and the JSON error handlers.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from prometheus_client import make_asgi_app
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from petfinder import __version__
from petfinder.api.router import api_router
from petfinder.config import get_settings
from petfinder.core.exceptions import InternalError, PetFinderError, format_validation_errors
from petfinder.core.logging import setup_logging
from petfinder.services.geocoding import get_neighborhood_table

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup: load the neighborhood table, optionally create tables."""
    settings = get_settings()
    get_neighborhood_table()
    if settings.storage_backend == "sql" and settings.create_tables_on_startup:
        from petfinder.db import models  # noqa: F401 - register tables on metadata
        from petfinder.db.base import Base
        from petfinder.db.session import engine

        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables verified")
    logger.info("%s started (storage=%s)", settings.app_name, settings.storage_backend)
    yield


async def petfinder_error_handler(request: Request, exc: PetFinderError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed body, path or query: always 400, never 422."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "Invalid request", "details": format_validation_errors(exc.errors())},
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """Store failures surface once as 500; driver text only outside production."""
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    details = None if get_settings().is_production else str(exc)
    error = InternalError(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Anything not mapped above still answers JSON."""
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    details = None if get_settings().is_production else f"{type(exc).__name__}: {exc}"
    error = InternalError(details=details)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


def create_app() -> FastAPI:
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)

    app = FastAPI(
        title=settings.app_name,
        description="Lost and found pet announcements: accounts, announcements, comments, neighborhoods.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(PetFinderError, petfinder_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # Prometheus metrics at /metrics
    app.mount("/metrics", make_asgi_app())

    app.include_router(api_router, prefix="/api")

    return app


app = create_app()
