"""
Client service for the back office.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.client import ClientCreate, ClientUpdate
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import ClientCRUD
from db import Client

logger = logging.getLogger(__name__)


class ClientService:
    """Service for managing clients."""

    @staticmethod
    @critical_database_operation("list_clients")
    async def list_clients(db: AsyncSession) -> List[Client]:
        """All clients, newest first."""
        return await ClientCRUD.find_all(db)

    @staticmethod
    @critical_database_operation("get_client")
    async def get_client(db: AsyncSession, client_id: int) -> Optional[Client]:
        return await ClientCRUD.find_by_id(db, client_id)

    @staticmethod
    @transactional_database_operation("create_client")
    @log_database_operation("client creation", level="debug")
    async def create_client(db: AsyncSession, client_data: ClientCreate) -> Client:
        values = client_data.model_dump()
        if values.get("email"):
            values["email"] = values["email"].lower()
        return await ClientCRUD.create(db, obj_in=values)

    @staticmethod
    @transactional_database_operation("update_client")
    @log_database_operation("client update", level="debug")
    async def update_client(
        db: AsyncSession, client_id: int, update_data: ClientUpdate
    ) -> Optional[Client]:
        values = update_data.model_dump(exclude_unset=True)
        if values.get("email"):
            values["email"] = values["email"].lower()
        if values.get("is_active", True) is None:
            del values["is_active"]
        return await ClientCRUD.update(db, id_value=client_id, obj_in=values)

    @staticmethod
    @transactional_database_operation("delete_client")
    @log_database_operation("client deletion", level="info")
    async def delete_client(db: AsyncSession, client_id: int) -> bool:
        """
        Delete a client.

        Rows referencing the client (requests, tickets, incidents) are left in
        place; on PostgreSQL the foreign keys reject the delete while any exist.
        """
        return await ClientCRUD.delete(db, id_value=client_id)
