"""
Main entrypoint for the Exercise Tracker API.

This module assembles the FastAPI application: logging, the SQLite
``Database`` handle, CORS, the plain‑text error handlers and the API
routes.  ``create_app`` builds a configured app and ``app`` is an
instance created at import time for ASGI servers, e.g.::

    uvicorn exercise_tracker_api.app.main:app --reload

Tests call ``create_app`` with their own ``Settings`` so that each one
works against a separate database file.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration to use; defaults to the environment‑driven
        module‑level settings.

    Returns
    -------
    FastAPI
        A configured application whose database is migrated on start‑up.
    """
    settings = settings or default_settings
    # Configure logging first so that start‑up messages are formatted.
    setup_logging(settings.log_level, settings.log_file)

    db = Database(settings.database_url)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        db.init()
        logger.info("%s %s ready (database %s)", settings.project_name, settings.api_version, db.path)
        yield

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.db = db
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    @app.get("/api", response_class=PlainTextResponse, tags=["info"])
    async def greeting() -> str:
        return "Hello world"

    app.include_router(api_router, prefix="/api")
    return app


# Created at import time so that uvicorn can discover it.
app = create_app()
