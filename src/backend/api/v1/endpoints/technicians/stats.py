"""
Tech stats API endpoint (staff).
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import TechStats
from api.services.tech_stats_service import TechStatsService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tech_profile_id}", response_model=TechStats)
async def get_tech_stats(
    tech_profile_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """
    Completion summary: count, total hours, average rating, per-category counts.

    ``averageRating`` is 0 when no completion is rated.
    """
    try:
        return await TechStatsService.compute_stats(db, tech_profile_id)
    except Exception as e:
        logger.error(f"Error fetching tech stats: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tech stats",
        )
