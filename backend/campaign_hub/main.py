"""Campaign Hub API - FastAPI application entry point.

Invariants:
    - Routers are listed explicitly in ROUTERS (no auto-discovery)
    - Logging is configured and the database manager created before the first request
    - The database manager is disposed on shutdown

Design Decisions:
    - create_app() builds the app from Settings; the module-level `app` is what uvicorn serves
    - Error handlers live in api/error_handlers.py; this module only wires them
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import campaign_hub.infrastructure.database as database
from campaign_hub.api.error_handlers import register_error_handlers
from campaign_hub.api.routes import (
    admins, applications, budget, campaigns, health, influencers, messages,
)
from campaign_hub.config import Settings, get_settings
from campaign_hub.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)

ROUTERS = (
    health.router,
    admins.router,
    campaigns.router,
    budget.router,
    influencers.router,
    applications.router,
    messages.router,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    setup_logging(settings.log_level, settings.log_format, settings.database_echo)
    manager = database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info(f"{settings.service_name} {settings.service_version} started")
    try:
        yield
    finally:
        await manager.dispose()
        logger.info(f"{settings.service_name} shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Campaign Hub API",
        version=settings.service_version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    for router in ROUTERS:
        app.include_router(router)
    register_error_handlers(app)
    return app


app = create_app()
