"""Health & Readiness Probes — liveness and readiness for the gateway process.

Invariants:
    - GET /api/v1/health/ is 200 while the process serves requests
    - GET /api/v1/health/ready is 503 only when the database is unreachable;
      a disabled network lookup is reported, never fatal
    - Registered before the legacy catch-all so /api/v1/health is never
      treated as a legacy command

Design Decisions:
    - db_manager read through the module: the lifespan assigns it after import
"""

import logging

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from gateway.config import get_settings
from gateway.infrastructure import database
from gateway.schemas.viewer import HealthResponse

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check():
    return HealthResponse(
        status="healthy",
        service="legacy-api-gateway",
        version=get_settings().api_version,
    )


@router.get("/ready")
async def readiness_check(request: Request):
    """Database round-trip plus the state of the remote screen-name lookup."""
    manager = database.db_manager
    checks = {
        "database": "healthy" if manager and await manager.health_check() else "unavailable",
        "network_lookup": (
            "enabled" if getattr(request.app.state, "network_lookup", None) else "disabled"
        ),
    }
    if checks["database"] != "healthy":
        logger.warning("Readiness failed", extra={"api_path": request.url.path})
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
