"""CityInfo API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map CityInfoError → structured JSON responses
    - CORS configured from settings (not hardcoded); pagination and location
      headers exposed to browsers
    - Database initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema is owned by Alembic migrations; startup never creates tables
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

import cityinfo.infrastructure.database as database
from cityinfo.api.error_handlers import register_error_handlers
from cityinfo.api.routes import cities, health, points_of_interest
from cityinfo.api.routes.cities import PAGINATION_HEADER
from cityinfo.config import API_VERSION, get_settings
from cityinfo.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("CityInfo API started")
    yield
    if database.db_manager:
        await database.db_manager.dispose()
    logger.info("CityInfo API shutting down")


app = FastAPI(
    title="CityInfo API", version=API_VERSION, lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=[PAGINATION_HEADER, "Location"],
)

app.include_router(health.router)
app.include_router(cities.legacy_router)
app.include_router(cities.router)
app.include_router(points_of_interest.router)

register_error_handlers(app)
