"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/health/ returns 200 whenever the process serves requests
    - GET /api/health/ready returns 503 until the database answers a round-trip
"""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import cityinfo.infrastructure.database as database
from cityinfo.config import API_VERSION, SERVICE_NAME

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE_NAME, "version": API_VERSION}


@router.get("/ready")
async def readiness_check():
    # db_manager is read at call time: it is assigned in the lifespan
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        logger.warning("Readiness probe failed: database unavailable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
