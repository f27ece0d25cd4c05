"""PulseCheck API: FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map PulseCheckError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - Database and services initialized on startup via lifespan context manager

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Schema managed by Alembic, never create_all at startup
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.error_handlers import register_error_handlers
from app.api.routes import checks, health, tokens, users
from app.config import get_settings
from app.infrastructure.database import init_db
from app.infrastructure.observability import setup_logging
from app.services.service_container import init_services

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    init_services(manager, settings)
    logger.info("PulseCheck API started")
    yield
    await manager.dispose()
    logger.info("PulseCheck API shutting down")


app = FastAPI(
    title="PulseCheck API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes: explicit registration
app.include_router(health.router)
app.include_router(users.router)
app.include_router(tokens.router)
app.include_router(checks.router)

register_error_handlers(app)
