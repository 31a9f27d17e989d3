"""Legacy API Gateway — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery, ExMA anti-pattern)
    - Health router registered BEFORE the legacy catch-all (/api/{command})
    - Routing table, dispatcher, rate limiter and network lookup are built once
      in the lifespan and live on app.state
    - Database initialized on startup and disposed on shutdown

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
      (ADR: FastAPI 0.128)
    - In-process rate limiter: quota is per worker process, acceptable for the
      single-worker deployment this gateway targets
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from gateway.api.error_handlers import register_error_handlers
from gateway.api.routes import health, legacy_api
from gateway.config import get_settings
from gateway.infrastructure import database
from gateway.infrastructure.network_lookup import StatusNetLookup
from gateway.infrastructure.observability import setup_logging
from gateway.infrastructure.rate_limit import RateLimiter
from gateway.services.dispatcher import ApiDispatcher
from gateway.services.routing_table import build_routing_table

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    database.init_db(settings)

    routes = build_routing_table()
    app.state.dispatcher = ApiDispatcher(routes)
    app.state.rate_limiter = RateLimiter(settings.rate_limit_hourly)
    app.state.network_lookup = (
        StatusNetLookup(settings.network_lookup_timeout_seconds)
        if settings.network_lookup_enabled else None
    )
    logger.info(f"Legacy API gateway started with {len(routes)} endpoints")
    yield

    logger.info("Legacy API gateway shutting down")
    if app.state.network_lookup is not None:
        await app.state.network_lookup.aclose()
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="Legacy API Gateway", version="1.0.0", lifespan=lifespan,
)

# CORS from settings
settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routes: explicit registration, the legacy catch-all last
app.include_router(health.router)
app.include_router(legacy_api.router)
