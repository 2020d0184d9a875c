"""
Incident API endpoints (staff).

Incidents track physical repair progress through four independent stage
flags: call, receive, repair and pickup.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.incident import (
    IncidentCreate,
    IncidentRead,
    IncidentStageToggle,
    IncidentUpdate,
)
from api.services.incident_service import IncidentService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[IncidentRead])
async def list_incidents(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await IncidentService.list_all(db)
    except Exception as e:
        logger.error(f"Error fetching incidents: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch incidents",
        )


@router.get("/client/{client_id}", response_model=List[IncidentRead])
async def list_client_incidents(
    client_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await IncidentService.list_by_client(db, client_id)
    except Exception as e:
        logger.error(f"Error fetching client incidents: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch client incidents",
        )


@router.post("", response_model=IncidentRead)
async def create_incident(
    incident_data: IncidentCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await IncidentService.create_incident(db, incident_data)
    except Exception as e:
        logger.error(f"Error creating incident: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create incident",
        )


@router.get("/{incident_id}", response_model=Optional[IncidentRead])
async def get_incident(
    incident_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await IncidentService.get_incident(db, incident_id)
    except Exception as e:
        logger.error(f"Error fetching incident {incident_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch incident",
        )


@router.patch("/{incident_id}", response_model=Optional[IncidentRead])
async def update_incident(
    incident_id: int,
    update_data: IncidentUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Set stage flags or details; no stage ordering is enforced."""
    try:
        return await IncidentService.update_incident(db, incident_id, update_data)
    except Exception as e:
        logger.error(f"Error updating incident {incident_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update incident",
        )


@router.post("/{incident_id}/toggle", response_model=Optional[IncidentRead])
async def toggle_incident_stage(
    incident_id: int,
    toggle: IncidentStageToggle,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Flip one stage flag."""
    try:
        return await IncidentService.toggle_stage(db, incident_id, toggle.stage)
    except Exception as e:
        logger.error(f"Error toggling incident {incident_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update incident",
        )


@router.delete("/{incident_id}")
async def delete_incident(
    incident_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return {"success": await IncidentService.delete_incident(db, incident_id)}
    except Exception as e:
        logger.error(f"Error deleting incident {incident_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete incident",
        )
