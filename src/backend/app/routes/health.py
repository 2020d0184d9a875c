"""
Health check endpoint handler.
"""

from fastapi import APIRouter

from core.database import check_database
from core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Health check endpoint for monitoring.
    Checks database connectivity.
    """
    health_status = {
        "status": "healthy",
        "version": settings.api.app_version,
        "services": {},
    }

    database_healthy = await check_database()
    health_status["services"]["database"] = {
        "status": "healthy" if database_healthy else "unhealthy",
    }
    if not database_healthy:
        health_status["status"] = "degraded"

    return health_status
