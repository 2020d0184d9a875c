"""
Web lead API endpoints.

Submitting a lead is public (the website contact form); everything else is
staff-only.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.back_office import WebLeadCreate, WebLeadRead
from api.schemas.client import ClientRead
from api.services.back_office_service import LeadService
from core.config import settings
from core.database import get_session
from core.dependencies import Principal, require_staff
from core.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=WebLeadRead)
@limiter.limit(settings.rate_limit.auth_limit)
async def submit_lead(
    request: Request,  # Must be first param for rate limiter
    lead_data: WebLeadCreate,
    db: AsyncSession = Depends(get_session),
):
    """
    Capture a contact-form submission.

    **Permissions:** Public
    """
    try:
        return await LeadService.create_lead(db, lead_data)
    except Exception as e:
        logger.error(f"Error creating lead: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid lead data",
        )


@router.get("", response_model=List[WebLeadRead])
async def list_leads(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """All leads, newest first."""
    try:
        return await LeadService.list_leads(db)
    except Exception as e:
        logger.error(f"Error fetching leads: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch leads",
        )


@router.post("/{lead_id}/convert", response_model=Optional[ClientRead])
async def convert_lead(
    lead_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Promote a lead to a client; null when the lead does not exist."""
    try:
        return await LeadService.convert_lead(db, lead_id)
    except Exception as e:
        logger.error(f"Error converting lead {lead_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to convert lead",
        )


@router.delete("/{lead_id}")
async def delete_lead(
    lead_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return {"success": await LeadService.delete_lead(db, lead_id)}
    except Exception as e:
        logger.error(f"Error deleting lead {lead_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete lead",
        )
