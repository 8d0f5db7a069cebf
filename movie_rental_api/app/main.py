"""
Main entrypoint for the Movie Rental API.

This module assembles the FastAPI application, sets up logging,
registers the error envelope and includes the versioned routers.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn movie_rental_api.app.main:app --reload

The document store can be passed to ``create_app``; without one, a
``SqliteDocumentStore`` on ``settings.database_url`` is opened at
startup.
"""

from typing import Optional

from fastapi import FastAPI

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import SqliteDocumentStore
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging
from .core.store import DocumentStore


def create_app(store: Optional[DocumentStore] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    store : Optional[DocumentStore]
        Store the routes operate on.  Tests pass an
        ``InMemoryDocumentStore``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version, debug=settings.debug)
    app.state.store = store

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Opening the SQLite store creates the file and applies
        # migrations when needed.
        if app.state.store is None:
            app.state.store = SqliteDocumentStore(settings.database_url)

    return app


app = create_app()
