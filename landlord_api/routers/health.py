"""
Health check endpoints for liveness and database connectivity.
"""

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from typing import Dict, Any
import logging

from landlord_api.config import settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get("/health", response_model=Dict[str, Any])
async def health_check() -> Dict[str, Any]:
    """Liveness; does not touch the database."""
    return {
        "status": "healthy",
        "service": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }


@router.get("/health/db", response_model=Dict[str, Any])
async def database_health(request: Request):
    """
    Database connectivity check.

    Returns 503 when the database cannot be reached.
    """
    database = request.app.state.db
    connected = await database.ping()

    if not connected:
        logger.error("Database health check failed")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unhealthy", "database": {"connected": False}}
        )

    return {
        "status": "healthy",
        "database": {
            "connected": True,
            "pool": database.pool_status(),
        }
    }
