"""
Incident service: four-stage repair progress per client.

Stage flags are independent booleans. Flipping a later stage while an
earlier one is still False is allowed; the dashboard disables those controls
but the service does not enforce any order.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.incident import IncidentCreate, IncidentUpdate
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import IncidentCRUD
from db import Incident, IncidentStage, utc_now

logger = logging.getLogger(__name__)


class IncidentService:
    """Service for incident stage tracking."""

    @staticmethod
    @transactional_database_operation("create_incident")
    @log_database_operation("incident creation", level="debug")
    async def create_incident(db: AsyncSession, incident_data: IncidentCreate) -> Incident:
        return await IncidentCRUD.create(db, obj_in=incident_data.model_dump())

    @staticmethod
    @transactional_database_operation("toggle_stage")
    @log_database_operation("incident stage toggle", level="debug")
    async def toggle_stage(
        db: AsyncSession, incident_id: int, stage: IncidentStage
    ) -> Optional[Incident]:
        """
        Flip exactly one stage flag and stamp updated_at.

        Args:
            db: Database session
            incident_id: Incident ID
            stage: Which of call/receive/repair/pickup to flip

        Returns:
            Updated incident or None if not found
        """
        incident = await IncidentCRUD.find_by_id(db, incident_id)
        if not incident:
            return None

        column = IncidentStage(stage).column
        flipped = not getattr(incident, column)
        logger.info(f"Incident {incident_id}: {column} -> {flipped}")

        return await IncidentCRUD.update(
            db,
            id_value=incident_id,
            obj_in={column: flipped, "updated_at": utc_now()},
        )

    @staticmethod
    @transactional_database_operation("update_incident")
    @log_database_operation("incident update", level="debug")
    async def update_incident(
        db: AsyncSession, incident_id: int, update_data: IncidentUpdate
    ) -> Optional[Incident]:
        """
        Set the supplied fields and stamp updated_at.

        Returns:
            Updated incident or None if not found
        """
        changes = update_data.model_dump(exclude_unset=True, exclude_none=True)
        changes["updated_at"] = utc_now()
        return await IncidentCRUD.update(db, id_value=incident_id, obj_in=changes)

    @staticmethod
    @critical_database_operation("get_incident")
    async def get_incident(db: AsyncSession, incident_id: int) -> Optional[Incident]:
        return await IncidentCRUD.find_by_id(db, incident_id)

    @staticmethod
    @critical_database_operation("list_incidents_by_client")
    async def list_by_client(db: AsyncSession, client_id: int) -> List[Incident]:
        """A client's incidents, newest first."""
        return await IncidentCRUD.find_by_client(db, client_id)

    @staticmethod
    @critical_database_operation("list_incidents")
    async def list_all(db: AsyncSession) -> List[Incident]:
        return await IncidentCRUD.find_all(db)

    @staticmethod
    @transactional_database_operation("delete_incident")
    async def delete_incident(db: AsyncSession, incident_id: int) -> bool:
        return await IncidentCRUD.delete(db, id_value=incident_id)
