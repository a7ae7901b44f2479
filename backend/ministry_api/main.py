"""Ministry Registry API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (one include_router per resource, no auto-discovery)
    - Global error handlers map RegistryError → structured JSON responses
    - CORS, gzip and security headers configured from settings (not hardcoded)
    - Connection pool created on startup and disposed on shutdown via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from ministry_api.api.error_handlers import register_error_handlers
from ministry_api.api.routes import auth, health
from ministry_api.api.routes.resources import build_resource_router
from ministry_api.api.security_headers import SecurityHeadersMiddleware
from ministry_api.config import get_settings
from ministry_api.infrastructure.database import dispose_db, init_db
from ministry_api.infrastructure.observability import setup_logging
from ministry_api.services import resources

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        pool_timeout=settings.database_pool_timeout,
        pool_recycle=settings.database_pool_recycle,
    )
    logger.info("Ministry Registry API started")
    yield
    await dispose_db()
    logger.info("Ministry Registry API shut down")


app = FastAPI(
    title="Burning Bush Ministries Registry API",
    version="1.0.0",
    description="Churches, people, statistics, users, calendar events, assets and locations.",
    lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=settings.gzip_minimum_size)
app.add_middleware(
    SecurityHeadersMiddleware,
    enable_hsts=settings.hsts_enabled,
    hsts_max_age=settings.hsts_max_age,
)

app.include_router(health.router)
app.include_router(auth.router)
app.include_router(build_resource_router(resources.CHURCHES))
app.include_router(build_resource_router(resources.PEOPLE))
app.include_router(build_resource_router(resources.STATISTICS))
app.include_router(build_resource_router(resources.USERS))
app.include_router(build_resource_router(resources.CALENDAR_EVENTS))
app.include_router(build_resource_router(resources.LOCATIONS))
app.include_router(build_resource_router(resources.ASSETS))

register_error_handlers(app)


def run() -> None:
    """Console entry point: serve the app with uvicorn."""
    uvicorn.run(
        "ministry_api.main:app", host=settings.host, port=settings.port,
    )
