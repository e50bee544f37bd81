"""Simple health and readiness endpoints."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from product_api.api.dependencies.services import get_database
from product_api.core.exceptions import StorageError, error_message
from product_api.db.session import Database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/health", tags=["health"])

SERVICE_NAME = "product-catalog-api"


@router.get("/live", summary="Liveness probe")
async def live() -> dict[str, str]:
    """Indicates API process is running.

    Used by orchestration systems (Kubernetes, Docker, etc.) to determine
    if the container/process should be restarted.
    """
    return {"status": "ok", "service": SERVICE_NAME}


@router.get("/ready", summary="Readiness probe")
async def ready(database: Database = Depends(get_database)) -> Any:
    """Check database connectivity.

    Used by load balancers to determine if traffic should be routed to this
    instance. The process keeps serving while the database is down, so this
    probe is the place where that state becomes visible.
    """
    checks: dict[str, Any] = {
        "status": "ok",
        "service": SERVICE_NAME,
        "checks": {},
    }

    try:
        database.ping()
        checks["checks"]["database"] = {
            "status": "healthy",
            "message": "Database connection successful",
        }
    except StorageError as e:
        logger.error(f"Database health check failed: {e}", exc_info=True)
        checks["status"] = "unhealthy"
        checks["message"] = "Service unavailable"
        checks["checks"]["database"] = {
            "status": "unhealthy",
            "message": f"Database connection failed: {error_message(e)}",
        }
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content=checks
        )

    return checks
