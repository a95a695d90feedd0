"""
Main entrypoint for the UPoint Purchase API.

This module assembles the FastAPI application: it sets up logging,
creates the database handle, registers error handlers and includes
the API router.  The ``create_app`` function builds and configures the
app, which is then instantiated at module import time as ``app``, so
it can be served with uvicorn, e.g.::

    uvicorn upoint_purchase_api.app.main:app --reload

The application title and version are provided via ``Settings`` from
``core.config``.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import create_database
from .core.errors import AppError
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Map every failure to a JSON body of the form ``{"message": ...}``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        headers = None
        if exc.status_code == status.HTTP_401_UNAUTHORIZED:
            headers = {"WWW-Authenticate": "Bearer"}
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message}, headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"message": "Invalid request payload"},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": "Internal server error"},
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to build the app with.  Defaults to the
        module‑level settings read from the environment.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the startup below
    # can log.
    setup_logging(settings)

    db = create_database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        # Create the database file if it does not exist and bring the
        # schema up to date.
        db.init()
        logger.info("Database ready at %s", db.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.db = db

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
