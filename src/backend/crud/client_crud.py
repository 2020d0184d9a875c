"""
Client CRUD for database operations.

Handles all database queries related to portal/back-office clients.
"""
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import Client


class ClientCRUD(BaseCRUD[Client]):
    """CRUD for Client database operations."""

    model = Client
    default_order = (Client.created_at.desc(), Client.id.desc())

    @classmethod
    async def find_by_email(
        cls, db: AsyncSession, email: str
    ) -> Optional[Client]:
        """
        Find client by email (case-insensitive).

        Args:
            db: Database session
            email: Email to search for

        Returns:
            Client or None
        """
        stmt = select(Client).where(func.lower(Client.email) == email.lower())
        result = await db.execute(stmt)
        return result.scalars().first()
