"""
Ticket API endpoints.

Ticket management is staff-only. The message log endpoints accept either a
staff Bearer token or a client session cookie; the stored sender type is
taken from whichever identity authenticated the call.

**Known gap:** internal messages (``isInternal``) are returned to clients as
well; no read path filters them.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.ticket import (
    TicketCreate,
    TicketMessageCreate,
    TicketMessageRead,
    TicketRead,
    TicketUpdate,
)
from api.services.ticket_service import TicketService
from core.config import settings
from core.database import get_session
from core.dependencies import Principal, get_principal, require_staff
from core.rate_limit import limiter
from db import SenderType

logger = logging.getLogger(__name__)

router = APIRouter()


def sender_type_for(principal: Principal) -> SenderType:
    """Staff write as tech, portal clients as client."""
    return SenderType.TECH if principal.is_staff else SenderType.CLIENT


@router.get("", response_model=List[TicketRead])
async def list_tickets(
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """All tickets, newest first."""
    try:
        return await TicketService.list_tickets(db)
    except Exception as e:
        logger.error(f"Error fetching tickets: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch tickets",
        )


@router.post("", response_model=TicketRead)
async def create_ticket(
    ticket_data: TicketCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """
    Create a ticket.

    Status and priority default to open/medium.

    Raises:
        HTTPException 400: The service request already has a ticket
    """
    try:
        return await TicketService.create_ticket(db, ticket_data)
    except IntegrityError:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Service request already has a ticket",
        )
    except Exception as e:
        logger.error(f"Error creating ticket: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create ticket",
        )


@router.get("/{ticket_id}", response_model=Optional[TicketRead])
async def get_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """A ticket, or null when it does not exist."""
    try:
        return await TicketService.get_ticket(db, ticket_id)
    except Exception as e:
        logger.error(f"Error fetching ticket {ticket_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch ticket",
        )


@router.patch("/{ticket_id}", response_model=Optional[TicketRead])
async def update_ticket(
    ticket_id: int,
    update_data: TicketUpdate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """
    Merge the supplied fields into a ticket.

    Any status may be set from any other. Returns null for an unknown ticket.
    """
    try:
        return await TicketService.update_ticket(db, ticket_id, update_data)
    except Exception as e:
        logger.error(f"Error updating ticket {ticket_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update ticket",
        )


@router.delete("/{ticket_id}")
async def delete_ticket(
    ticket_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(require_staff),
):
    """Delete a ticket and its messages."""
    try:
        deleted = await TicketService.delete_ticket(db, ticket_id)
        return {"success": deleted}
    except Exception as e:
        logger.error(f"Error deleting ticket {ticket_id}: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete ticket",
        )


@router.get("/{ticket_id}/messages", response_model=List[TicketMessageRead])
async def list_messages(
    ticket_id: int,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """
    The ticket's message log, newest first.

    **Permissions:** Staff token or client session
    """
    try:
        return await TicketService.list_messages(db, ticket_id)
    except Exception as e:
        logger.error(f"Error fetching ticket messages: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch messages",
        )


@router.post("/{ticket_id}/messages", response_model=TicketMessageRead)
@limiter.limit(settings.rate_limit.messages_limit)
async def post_message(
    request: Request,  # Must be first param for rate limiter
    ticket_id: int,
    message_data: TicketMessageCreate,
    db: AsyncSession = Depends(get_session),
    principal: Principal = Depends(get_principal),
):
    """
    Append a message to the ticket's log.

    ``senderType`` is set from the caller's identity; a value sent in the
    body is ignored.

    **Permissions:** Staff token or client session

    Raises:
        HTTPException 400: Unknown ticket
    """
    if not await TicketService.get_ticket(db, ticket_id):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid ticket")

    try:
        return await TicketService.append_message(
            db, ticket_id, sender_type_for(principal), message_data
        )
    except Exception as e:
        logger.error(f"Error creating ticket message: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create message",
        )
