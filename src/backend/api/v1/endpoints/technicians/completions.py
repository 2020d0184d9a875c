"""
Service completion API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import (
    ServiceCompletionCreate,
    ServiceCompletionRead,
    ServiceCompletionUpdate,
)
from api.services.tech_credential_service import TechCredentialService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tech_profile_id}", response_model=List[ServiceCompletionRead])
async def list_completions(
    tech_profile_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Completions of a profile, most recent first."""
    try:
        return await TechCredentialService.list_completions(db, tech_profile_id)
    except Exception as e:
        logger.error(f"Error fetching service completions: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch service completions",
        )


@router.post("", response_model=ServiceCompletionRead)
async def create_completion(
    data: ServiceCompletionCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.create_completion(db, data)
    except Exception as e:
        logger.error(f"Error creating service completion: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create service completion",
        )


@router.patch("/{completion_id}", response_model=Optional[ServiceCompletionRead])
async def update_completion(
    completion_id: int,
    data: ServiceCompletionUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.update_completion(db, completion_id, data)
    except Exception as e:
        logger.error(f"Error updating service completion: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update service completion",
        )


@router.delete("/{completion_id}")
async def delete_completion(
    completion_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        deleted = await TechCredentialService.delete_completion(db, completion_id)
        return {"success": deleted}
    except Exception as e:
        logger.error(f"Error deleting service completion: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete service completion",
        )
