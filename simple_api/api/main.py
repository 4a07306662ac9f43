"""FastAPI application entrypoint for the Simple User API."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from pymongo.errors import PyMongoError

from simple_api.api.errors import register_exception_handlers
from simple_api.api.middleware.logging import LoggingMiddleware
from simple_api.api.routes import health, users
from simple_api.core.config import Settings, settings as default_settings
from simple_api.core.database import DatabaseManager
from simple_api.core.seed import seed_users

logger = logging.getLogger(__name__)


async def seed_on_startup(database_manager: DatabaseManager) -> None:
    """Seed mock users once; a failure here is logged and startup continues."""

    logger.info("Seeding data on startup...")
    try:
        count = await seed_users(database_manager.database, database_manager.settings.USERS_COLLECTION)
    except PyMongoError:
        logger.exception("Error seeding data on startup")
        return
    if count > 0:
        logger.info("Seeded %d users on startup", count)


def create_app(config: Optional[Settings] = None, database_manager: Optional[DatabaseManager] = None) -> FastAPI:
    """Build the application. A custom ``database_manager`` is used as-is."""

    config = config or default_settings
    manager = database_manager or DatabaseManager(config)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        """Connect on startup and disconnect on shutdown.

        A connection failure propagates and aborts startup.
        """

        await manager.initialize()
        if config.SEED_ON_STARTUP:
            await seed_on_startup(manager)

        try:
            yield
        finally:
            await manager.close()

    app = FastAPI(
        title=config.API_TITLE,
        version=config.API_VERSION,
        debug=config.DEBUG,
        lifespan=lifespan,
    )
    app.state.database_manager = manager

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(LoggingMiddleware)

    register_exception_handlers(app)

    # Routers
    app.include_router(health.router)
    app.include_router(users.router)

    return app


app = create_app()
