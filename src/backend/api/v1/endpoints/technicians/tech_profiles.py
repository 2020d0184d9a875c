"""
Tech profile API endpoints.

A staff user reads and writes their own profile; the profile is created on
the first write.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import TechProfileRead, TechProfileUpsert
from api.services.tech_directory_service import TechDirectoryService
from core.database import get_session
from core.dependencies import get_current_user
from db import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=Optional[TechProfileRead])
async def get_my_profile(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """The current staff user's profile, or null if none exists yet."""
    try:
        return await TechDirectoryService.get_profile_for_user(db, current_user.id)
    except Exception as e:
        logger.error(f"Error fetching tech profile: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tech profile",
        )


@router.post("", response_model=TechProfileRead)
async def upsert_my_profile(
    profile_data: TechProfileUpsert,
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Create or update the current staff user's profile."""
    try:
        return await TechDirectoryService.upsert_profile(db, current_user.id, profile_data)
    except Exception as e:
        logger.error(f"Error saving tech profile: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save tech profile",
        )


@router.get("/all", response_model=List[TechProfileRead])
async def list_profiles(
    db: AsyncSession = Depends(get_session),
    current_user: User = Depends(get_current_user),
):
    """Every tech profile, regardless of availability."""
    try:
        return await TechDirectoryService.list_profiles(db)
    except Exception as e:
        logger.error(f"Error fetching tech profiles: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tech profiles",
        )
