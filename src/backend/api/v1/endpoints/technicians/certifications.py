"""
Tech certification API endpoints (staff).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import (
    TechCertificationCreate,
    TechCertificationRead,
    TechCertificationUpdate,
)
from api.services.tech_credential_service import TechCredentialService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/{tech_profile_id}", response_model=List[TechCertificationRead])
async def list_certifications(
    tech_profile_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Certifications of a profile, most recently issued first."""
    try:
        return await TechCredentialService.list_certifications(db, tech_profile_id)
    except Exception as e:
        logger.error(f"Error fetching certifications: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch certifications",
        )


@router.post("", response_model=TechCertificationRead)
async def create_certification(
    data: TechCertificationCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.create_certification(db, data)
    except Exception as e:
        logger.error(f"Error creating certification: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create certification",
        )


@router.patch("/{certification_id}", response_model=Optional[TechCertificationRead])
async def update_certification(
    certification_id: int,
    data: TechCertificationUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await TechCredentialService.update_certification(db, certification_id, data)
    except Exception as e:
        logger.error(f"Error updating certification: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update certification",
        )


@router.delete("/{certification_id}")
async def delete_certification(
    certification_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        await TechCredentialService.delete_certification(db, certification_id)
        return {"success": True}
    except Exception as e:
        logger.error(f"Error deleting certification: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete certification",
        )
