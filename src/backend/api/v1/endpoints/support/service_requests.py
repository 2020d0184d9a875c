"""
Service request API endpoints (staff).

Also hosts the ticket lookups keyed by service request, including the
get-or-create used when staff open the conversation for a request.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.service_request import (
    ServiceRequestCreate,
    ServiceRequestRead,
    ServiceRequestUpdate,
)
from api.schemas.ticket import TicketRead
from api.services.service_request_service import ServiceRequestService
from api.services.ticket_service import TicketService
from core.database import get_session
from core.dependencies import Principal, require_staff

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[ServiceRequestRead])
async def list_service_requests(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """All service requests, newest first."""
    try:
        return await ServiceRequestService.list_service_requests(db)
    except Exception as e:
        logger.error(f"Error fetching service requests: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch service requests",
        )


@router.post("", response_model=ServiceRequestRead)
async def create_service_request(
    request_data: ServiceRequestCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await ServiceRequestService.create_service_request(db, request_data)
    except Exception as e:
        logger.error(f"Error creating service request: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to create service request",
        )


@router.get("/{service_request_id}", response_model=Optional[ServiceRequestRead])
async def get_service_request(
    service_request_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    try:
        return await ServiceRequestService.get_service_request(db, service_request_id)
    except Exception as e:
        logger.error(f"Error fetching service request {service_request_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch service request",
        )


@router.put("/{service_request_id}", response_model=Optional[ServiceRequestRead])
async def update_service_request(
    service_request_id: int,
    update_data: ServiceRequestUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Update a service request; null when it does not exist."""
    try:
        return await ServiceRequestService.update_service_request(
            db, service_request_id, update_data
        )
    except Exception as e:
        logger.error(f"Error updating service request {service_request_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Failed to update service request",
        )


@router.get("/{service_request_id}/tickets", response_model=List[TicketRead])
async def list_service_request_tickets(
    service_request_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Tickets of a service request (at most one)."""
    try:
        return await TicketService.list_tickets_for_service_request(db, service_request_id)
    except Exception as e:
        logger.error(f"Error fetching service request tickets: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tickets",
        )


@router.post("/{service_request_id}/ticket", response_model=Optional[TicketRead])
async def open_service_request_ticket(
    service_request_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """
    Return the request's ticket, creating it from the request on first use.

    Concurrent calls for the same request all receive the same ticket.
    Returns null when the service request does not exist.
    """
    try:
        return await TicketService.get_or_create_ticket_for_service_request(
            db, service_request_id
        )
    except Exception as e:
        logger.error(f"Error opening ticket for request {service_request_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create ticket",
        )
