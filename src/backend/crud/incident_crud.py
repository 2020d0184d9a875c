"""
Incident CRUD for database operations.
"""
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import Incident


class IncidentCRUD(BaseCRUD[Incident]):
    """CRUD for Incident database operations."""

    model = Incident
    default_order = (Incident.created_at.desc(), Incident.id.desc())

    @classmethod
    async def find_by_client(
        cls, db: AsyncSession, client_id: int
    ) -> List[Incident]:
        return await cls.find_all(db, filters={"client_id": client_id})
