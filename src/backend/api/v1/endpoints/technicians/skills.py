"""
Tech skill API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import TechSkillCreate, TechSkillRead, TechSkillUpdate
from api.services.tech_credential_service import TechCredentialService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tech_profile_id}", response_model=List[TechSkillRead])
async def list_skills(
    tech_profile_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Skills of a profile, by category then name."""
    try:
        return await TechCredentialService.list_skills(db, tech_profile_id)
    except Exception as e:
        logger.error(f"Error fetching skills: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch skills",
        )


@router.post("", response_model=TechSkillRead)
async def create_skill(
    data: TechSkillCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.create_skill(db, data)
    except Exception as e:
        logger.error(f"Error creating skill: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create skill",
        )


@router.patch("/{skill_id}", response_model=Optional[TechSkillRead])
async def update_skill(
    skill_id: int,
    data: TechSkillUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.update_skill(db, skill_id, data)
    except Exception as e:
        logger.error(f"Error updating skill: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update skill",
        )


@router.delete("/{skill_id}")
async def delete_skill(
    skill_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        await TechCredentialService.delete_skill(db, skill_id)
        return {"success": True}
    except Exception as e:
        logger.error(f"Error deleting skill: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete skill",
        )
