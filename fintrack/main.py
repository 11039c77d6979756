#!/usr/bin/env python
"""
fintrack/main.py

Sets up the FastAPI application for FinTrack, a small income/expense tracker.

Key Roles:
 - Builds the app from Settings (environment + .env by default)
 - Opens the store at startup and disposes it at shutdown
 - Adds CORS middleware for browser clients
 - Registers the error handlers and the 'users' and 'transactions' routers

Run with:
    python -m fintrack.main
or:
    uvicorn fintrack.main:create_app --factory --port 8080
"""

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from fintrack import __version__
from fintrack.config import Settings, get_settings
from fintrack.database import Database
from fintrack.errors import register_exception_handlers
from fintrack.routers import transaction, user

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """
    Application factory. Pass explicit Settings to point the app at a
    different store or secret (the tests do this).
    """
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    # ---------------------------------------------------------
    # Initialize the FastAPI application
    # ---------------------------------------------------------
    app = FastAPI(
        title="FinTrack API",
        description="Users with token auth, plus income/expense transaction records.",
        version=__version__,
    )
    app.state.settings = settings

    # ---------------------------------------------------------
    # CORS Middleware
    # ---------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # ---------------------------------------------------------
    # Database lifecycle
    # ---------------------------------------------------------
    @app.on_event("startup")
    def startup_event():
        """
        Connects to the store and ensures tables exist.
        This won't delete or overwrite existing data; it's idempotent.
        """
        database = Database(settings.database_url)
        database.create_tables()
        app.state.database = database
        logger.info("Database ready")

    @app.on_event("shutdown")
    def shutdown_event():
        database = getattr(app.state, "database", None)
        if database is not None:
            database.dispose()

    # ---------------------------------------------------------
    # Routers
    # ---------------------------------------------------------
    app.include_router(user.router, prefix="/users", tags=["users"])
    app.include_router(transaction.router, prefix="/transactions", tags=["transactions"])

    @app.get("/", response_class=PlainTextResponse)
    def read_root():
        """
        Basic root path to confirm the API is running.
        """
        return "hello"

    return app


def main() -> None:
    import uvicorn

    settings = get_settings()
    app = create_app(settings)
    logger.info(f"listen on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
