"""
Dashboard API endpoint (staff).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import async_sessionmaker

from api.schemas.back_office import DashboardStats
from api.services.dashboard_service import DashboardService
from core.database import get_session_factory
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(
    session_factory: async_sessionmaker = Depends(get_session_factory),
    principal: Principal = Depends(require_staff),
):
    """
    Headline counts: clients, open requests (pending or in progress),
    unpaid invoices and leads from the last seven days.
    """
    try:
        return await DashboardService.get_stats(session_factory)
    except Exception as e:
        logger.error(f"Error fetching dashboard stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch dashboard stats",
        )
