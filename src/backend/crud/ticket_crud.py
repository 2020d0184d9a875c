"""
Ticket CRUD for database operations.

Handles all database queries related to tickets and their message logs.
"""
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import Ticket, TicketMessage


class TicketCRUD(BaseCRUD[Ticket]):
    """CRUD for Ticket database operations."""

    model = Ticket
    default_order = (Ticket.created_at.desc(), Ticket.id.desc())

    @classmethod
    async def find_by_service_request(
        cls, db: AsyncSession, service_request_id: int
    ) -> Optional[Ticket]:
        """
        Find the ticket attached to a service request.

        The unique constraint on service_request_id guarantees at most one.
        """
        stmt = select(Ticket).where(Ticket.service_request_id == service_request_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def find_all_by_service_request(
        cls, db: AsyncSession, service_request_id: int
    ) -> List[Ticket]:
        return await cls.find_all(
            db, filters={"service_request_id": service_request_id}
        )


class TicketMessageCRUD(BaseCRUD[TicketMessage]):
    """CRUD for TicketMessage database operations."""

    model = TicketMessage
    # id breaks ties between messages stored within the same timestamp
    default_order = (TicketMessage.created_at.desc(), TicketMessage.id.desc())

    @classmethod
    async def find_by_ticket(
        cls, db: AsyncSession, ticket_id: int
    ) -> List[TicketMessage]:
        """
        Get the message log of a ticket.

        Returns:
            Messages newest first
        """
        return await cls.find_all(db, filters={"ticket_id": ticket_id})

    @classmethod
    async def delete_by_ticket(cls, db: AsyncSession, ticket_id: int) -> int:
        """
        Delete every message of a ticket.

        Returns:
            Number of deleted rows
        """
        stmt = delete(TicketMessage).where(TicketMessage.ticket_id == ticket_id)
        result = await db.execute(stmt)
        return result.rowcount or 0
