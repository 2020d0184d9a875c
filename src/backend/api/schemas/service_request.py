"""
Service request schemas for API validation and serialization.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from core.schema_base import HTTPSchemaModel
from db.enums import ServiceRequestStatus


class ServiceRequestBase(HTTPSchemaModel):
    """Base service request schema with common fields."""
    client_id: Optional[int] = None
    service_type: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    status: ServiceRequestStatus = ServiceRequestStatus.PENDING
    assigned_to: Optional[str] = Field(None, max_length=100)


class ServiceRequestCreate(ServiceRequestBase):
    """Schema for creating a service request from the back office."""
    pass


class ClientServiceRequestCreate(HTTPSchemaModel):
    """
    Schema for a service request submitted through the portal.

    Owner and status are set by the server.
    """
    service_type: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None


class ServiceRequestUpdate(HTTPSchemaModel):
    """Schema for updating a service request."""
    client_id: Optional[int] = None
    service_type: Optional[str] = Field(None, min_length=1, max_length=100)
    description: Optional[str] = None
    status: Optional[ServiceRequestStatus] = None
    assigned_to: Optional[str] = Field(None, max_length=100)


class ServiceRequestRead(HTTPSchemaModel):
    """Schema for reading service request data."""
    id: int
    client_id: Optional[int] = None
    service_type: Optional[str] = None
    description: Optional[str] = None
    status: str
    assigned_to: Optional[str] = None
    created_at: datetime
