"""
Ticket service: ticket lifecycle and the append-only message log.

Status and priority may be set to any value at any time; open is the initial
status and closed is terminal by convention only. No notification is sent
from here even when the notification flags are set.
"""
import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.ticket import TicketCreate, TicketMessageCreate, TicketUpdate
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from core.logging_config import TicketLogger
from crud import ServiceRequestCRUD, TicketCRUD, TicketMessageCRUD
from db import SenderType, Ticket, TicketMessage, utc_now

# Module-level logger using __name__
logger = logging.getLogger(__name__)
ticket_logger = TicketLogger()

_LOGGED_FIELDS = ("status", "priority")
_REQUIRED_COLUMNS = ("status", "priority", "client_notifications", "email_notifications")


class TicketService:
    """Service for tickets and their messages."""

    @staticmethod
    @transactional_database_operation("create_ticket")
    @log_database_operation("ticket creation", level="debug")
    async def create_ticket(db: AsyncSession, ticket_data: TicketCreate) -> Ticket:
        """
        Create a ticket.

        Args:
            db: Database session
            ticket_data: Ticket fields; status/priority default to open/medium

        Returns:
            Created ticket

        Raises:
            IntegrityError: If the service request already has a ticket
        """
        ticket = await TicketCRUD.create(db, obj_in=ticket_data.model_dump())
        ticket_logger.ticket_created(
            ticket.id, ticket.service_request_id, ticket.client_id, ticket.assigned_to
        )
        return ticket

    @staticmethod
    @transactional_database_operation("get_or_create_ticket_for_service_request")
    @log_database_operation("ticket get-or-create", level="debug")
    async def get_or_create_ticket_for_service_request(
        db: AsyncSession, service_request_id: int
    ) -> Optional[Ticket]:
        """
        Return the ticket of a service request, creating it on first use.

        A concurrent caller may insert the ticket between our read and write;
        the unique constraint on service_request_id rejects the second insert,
        and the loser rolls back and returns the winner's row.

        Args:
            db: Database session
            service_request_id: Service request ID

        Returns:
            The request's only ticket, or None if the request does not exist
        """
        existing = await TicketCRUD.find_by_service_request(db, service_request_id)
        if existing:
            ticket_logger.ticket_reused(existing.id, service_request_id)
            return existing

        service_request = await ServiceRequestCRUD.find_by_id(db, service_request_id)
        if not service_request:
            return None

        try:
            ticket = await TicketCRUD.create(
                db,
                obj_in={
                    "service_request_id": service_request.id,
                    "client_id": service_request.client_id,
                    "title": service_request.service_type,
                    "description": service_request.description,
                    "assigned_to": service_request.assigned_to,
                },
            )
        except IntegrityError:
            await db.rollback()
            existing = await TicketCRUD.find_by_service_request(db, service_request_id)
            if existing is None:
                raise
            ticket_logger.ticket_reused(existing.id, service_request_id)
            return existing

        ticket_logger.ticket_created(
            ticket.id, ticket.service_request_id, ticket.client_id, ticket.assigned_to
        )
        return ticket

    @staticmethod
    @transactional_database_operation("update_ticket")
    @log_database_operation("ticket update", level="debug")
    async def update_ticket(
        db: AsyncSession, ticket_id: int, update_data: TicketUpdate
    ) -> Optional[Ticket]:
        """
        Merge the supplied fields into a ticket and stamp updated_at.

        Args:
            db: Database session
            ticket_id: Ticket ID
            update_data: Partial ticket fields (unset fields are left alone)

        Returns:
            Updated ticket or None if not found
        """
        ticket = await TicketCRUD.find_by_id(db, ticket_id)
        if not ticket:
            return None

        changes: Dict[str, Any] = update_data.model_dump(exclude_unset=True)
        for column in _REQUIRED_COLUMNS:
            if changes.get(column, True) is None:
                del changes[column]
        for field in _LOGGED_FIELDS:
            if field in changes and changes[field] != getattr(ticket, field):
                ticket_logger.field_changed(
                    ticket.id, field, getattr(ticket, field), changes[field]
                )

        changes["updated_at"] = utc_now()
        return await TicketCRUD.update(db, id_value=ticket_id, obj_in=changes)

    @staticmethod
    @critical_database_operation("get_ticket")
    async def get_ticket(db: AsyncSession, ticket_id: int) -> Optional[Ticket]:
        return await TicketCRUD.find_by_id(db, ticket_id)

    @staticmethod
    @critical_database_operation("list_tickets")
    async def list_tickets(db: AsyncSession) -> List[Ticket]:
        """All tickets, newest first."""
        return await TicketCRUD.find_all(db)

    @staticmethod
    @critical_database_operation("list_tickets_for_service_request")
    async def list_tickets_for_service_request(
        db: AsyncSession, service_request_id: int
    ) -> List[Ticket]:
        return await TicketCRUD.find_all_by_service_request(db, service_request_id)

    @staticmethod
    @transactional_database_operation("delete_ticket")
    @log_database_operation("ticket deletion", level="info")
    async def delete_ticket(db: AsyncSession, ticket_id: int) -> bool:
        """
        Delete a ticket together with its message log.

        Returns:
            True if deleted, False if not found
        """
        if not await TicketCRUD.exists(db, filters={"id": ticket_id}):
            return False

        removed = await TicketMessageCRUD.delete_by_ticket(db, ticket_id)
        logger.debug(f"Removed {removed} messages of ticket {ticket_id}")
        return await TicketCRUD.delete(db, id_value=ticket_id)

    # ------------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------------

    @staticmethod
    @transactional_database_operation("append_message")
    @log_database_operation("ticket message append", level="debug")
    async def append_message(
        db: AsyncSession,
        ticket_id: int,
        sender_type: SenderType,
        message_data: TicketMessageCreate,
        email_sent: bool = False,
    ) -> TicketMessage:
        """
        Append a message to a ticket's log.

        The ticket row itself is not touched, so appending never changes its
        status or updated_at.

        Args:
            db: Database session
            ticket_id: Ticket ID
            sender_type: Sender kind derived from the caller's credentials
            message_data: Message body, type, internal flag and sender details
            email_sent: Whether an email copy was dispatched

        Returns:
            Stored message
        """
        message = await TicketMessageCRUD.create(
            db,
            obj_in={
                "ticket_id": ticket_id,
                "sender_type": SenderType(sender_type).value,
                "email_sent": email_sent,
                **message_data.model_dump(),
            },
        )
        ticket_logger.message_appended(
            ticket_id,
            message.id,
            message.sender_type,
            message.message_type,
            message.is_internal,
        )
        return message

    @staticmethod
    @critical_database_operation("list_messages")
    @log_database_operation("ticket messages retrieval", level="debug")
    async def list_messages(db: AsyncSession, ticket_id: int) -> List[TicketMessage]:
        """
        Get a ticket's messages, newest first.

        Internal messages are included; no read path filters them.
        """
        return await TicketMessageCRUD.find_by_ticket(db, ticket_id)
