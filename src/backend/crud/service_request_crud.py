"""
Service request CRUD for database operations.
"""
from typing import List, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import ServiceRequest


class ServiceRequestCRUD(BaseCRUD[ServiceRequest]):
    """CRUD for ServiceRequest database operations."""

    model = ServiceRequest
    default_order = (ServiceRequest.created_at.desc(), ServiceRequest.id.desc())

    @classmethod
    async def find_by_client(
        cls, db: AsyncSession, client_id: int
    ) -> List[ServiceRequest]:
        """Service requests owned by a client, newest first."""
        return await cls.find_all(db, filters={"client_id": client_id})

    @classmethod
    async def find_by_statuses(
        cls, db: AsyncSession, statuses: Sequence[str]
    ) -> List[ServiceRequest]:
        """Service requests whose status is one of ``statuses``."""
        stmt = (
            select(ServiceRequest)
            .where(ServiceRequest.status.in_(list(statuses)))
            .order_by(*cls.default_order)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())
