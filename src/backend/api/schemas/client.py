"""
Client schemas for API validation and serialization.

The stored password hash is never part of any response schema.
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field

from core.schema_base import HTTPSchemaModel


class ClientBase(HTTPSchemaModel):
    """Base client schema with common fields."""
    name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=20)
    address: Optional[str] = None
    notes: Optional[str] = None


class ClientCreate(ClientBase):
    """Schema for creating a client from the back office."""
    name: str = Field(..., min_length=1, max_length=100)


class ClientUpdate(ClientBase):
    """Schema for updating a client."""
    is_active: Optional[bool] = None


class ClientRead(HTTPSchemaModel):
    """Schema for reading client data."""
    id: int
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    notes: Optional[str] = None
    is_active: bool
    created_at: datetime
