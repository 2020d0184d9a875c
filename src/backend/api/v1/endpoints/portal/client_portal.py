"""
Client portal endpoints.

Everything here runs on the client session cookie alone; a staff Bearer
token does not open these routes. The caller's client ID comes from
``require_client`` and is never read from the request body.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.client import ClientRead
from api.schemas.service_request import ClientServiceRequestCreate, ServiceRequestRead
from api.schemas.tech import PublicTechProfile
from api.schemas.ticket import TicketMessageCreate, TicketMessageRead
from api.services.client_service import ClientService
from api.services.service_request_service import ServiceRequestService
from api.services.tech_directory_service import TechDirectoryService
from api.services.ticket_service import TicketService
from core.config import settings
from core.database import get_session
from core.dependencies import Principal, require_client
from core.rate_limit import limiter
from db import SenderType

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/profile", response_model=ClientRead)
async def get_profile(
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """
    The signed-in client's own record, without the password hash.

    Raises:
        HTTPException 404: The session names a client that no longer exists
    """
    try:
        client = await ClientService.get_client(db, principal.id)
    except Exception as e:
        logger.error(f"Get client profile error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get profile",
        )

    if not client:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Client not found")
    return client


@router.get("/service-requests", response_model=List[ServiceRequestRead])
async def list_my_service_requests(
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """The signed-in client's service requests, newest first."""
    try:
        return await ServiceRequestService.list_for_client(db, principal.id)
    except Exception as e:
        logger.error(f"Get client requests error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get service requests",
        )


@router.post("/service-requests", response_model=ServiceRequestRead)
async def create_my_service_request(
    request_data: ClientServiceRequestCreate,
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """Submit a service request; it is owned by the caller and starts pending."""
    try:
        return await ServiceRequestService.submit_for_client(db, principal.id, request_data)
    except Exception as e:
        logger.error(f"Create client request error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create service request",
        )


@router.get("/available-techs", response_model=List[PublicTechProfile])
async def list_available_techs(
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """Technicians the caller is allowed to see."""
    try:
        return await TechDirectoryService.list_available_techs(db, principal.id)
    except Exception as e:
        logger.error(f"Get available techs error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get available techs",
        )


@router.get("/tickets/{ticket_id}/messages", response_model=List[TicketMessageRead])
async def list_ticket_messages(
    ticket_id: int,
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """Client-only alias of ``GET /tickets/{id}/messages``."""
    try:
        return await TicketService.list_messages(db, ticket_id)
    except Exception as e:
        logger.error(f"Get client ticket messages error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to get messages",
        )


@router.post("/tickets/{ticket_id}/messages", response_model=TicketMessageRead)
@limiter.limit(settings.rate_limit.messages_limit)
async def post_ticket_message(
    request: Request,  # Must be first param for rate limiter
    ticket_id: int,
    message_data: TicketMessageCreate,
    principal: Principal = Depends(require_client),
    db: AsyncSession = Depends(get_session),
):
    """Client-only alias of ``POST /tickets/{id}/messages``; always sent as client."""
    if not await TicketService.get_ticket(db, ticket_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ticket")

    try:
        return await TicketService.append_message(
            db, ticket_id, SenderType.CLIENT, message_data
        )
    except Exception as e:
        logger.error(f"Create client ticket message error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create message",
        )
