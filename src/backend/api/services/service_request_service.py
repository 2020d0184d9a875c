"""
Service request service.
"""
import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.service_request import (
    ClientServiceRequestCreate,
    ServiceRequestCreate,
    ServiceRequestUpdate,
)
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import ServiceRequestCRUD
from db import ServiceRequest, ServiceRequestStatus

logger = logging.getLogger(__name__)


class ServiceRequestService:
    """Service for managing service requests."""

    @staticmethod
    @critical_database_operation("list_service_requests")
    async def list_service_requests(db: AsyncSession) -> List[ServiceRequest]:
        """All service requests, newest first."""
        return await ServiceRequestCRUD.find_all(db)

    @staticmethod
    @critical_database_operation("list_client_service_requests")
    async def list_for_client(db: AsyncSession, client_id: int) -> List[ServiceRequest]:
        return await ServiceRequestCRUD.find_by_client(db, client_id)

    @staticmethod
    @critical_database_operation("get_service_request")
    async def get_service_request(
        db: AsyncSession, service_request_id: int
    ) -> Optional[ServiceRequest]:
        return await ServiceRequestCRUD.find_by_id(db, service_request_id)

    @staticmethod
    @transactional_database_operation("create_service_request")
    @log_database_operation("service request creation", level="debug")
    async def create_service_request(
        db: AsyncSession, request_data: ServiceRequestCreate
    ) -> ServiceRequest:
        return await ServiceRequestCRUD.create(db, obj_in=request_data.model_dump())

    @staticmethod
    @transactional_database_operation("submit_client_service_request")
    @log_database_operation("portal service request submission", level="info")
    async def submit_for_client(
        db: AsyncSession, client_id: int, request_data: ClientServiceRequestCreate
    ) -> ServiceRequest:
        """
        Create a request on behalf of the signed-in client.

        The owner is the session's client and the status is always pending.
        """
        return await ServiceRequestCRUD.create(
            db,
            obj_in={
                **request_data.model_dump(),
                "client_id": client_id,
                "status": ServiceRequestStatus.PENDING.value,
            },
        )

    @staticmethod
    @transactional_database_operation("update_service_request")
    @log_database_operation("service request update", level="debug")
    async def update_service_request(
        db: AsyncSession, service_request_id: int, update_data: ServiceRequestUpdate
    ) -> Optional[ServiceRequest]:
        values = update_data.model_dump(exclude_unset=True)
        if values.get("status", True) is None:
            del values["status"]
        return await ServiceRequestCRUD.update(
            db, id_value=service_request_id, obj_in=values
        )
