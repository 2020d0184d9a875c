"""
Ticket and ticket message schemas for API validation and serialization.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from core.schema_base import HTTPSchemaModel
from db.enums import MessageType, TicketPriority, TicketStatus


class TicketCreate(HTTPSchemaModel):
    """
    Schema for creating a ticket.

    Unspecified status and priority fall back to open/medium.
    """
    service_request_id: Optional[int] = None
    client_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    priority: TicketPriority = TicketPriority.MEDIUM
    status: TicketStatus = TicketStatus.OPEN
    assigned_to: Optional[str] = Field(None, max_length=100)
    tech_email: Optional[str] = Field(None, max_length=100)
    client_notifications: bool = True
    email_notifications: bool = False


class TicketUpdate(HTTPSchemaModel):
    """Partial ticket update; any status may move to any other."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    priority: Optional[TicketPriority] = None
    status: Optional[TicketStatus] = None
    assigned_to: Optional[str] = Field(None, max_length=100)
    tech_email: Optional[str] = Field(None, max_length=100)
    client_notifications: Optional[bool] = None
    email_notifications: Optional[bool] = None


class TicketRead(HTTPSchemaModel):
    """Schema for reading ticket data."""
    id: int
    service_request_id: Optional[int] = None
    client_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    priority: str
    status: str
    assigned_to: Optional[str] = None
    tech_email: Optional[str] = None
    client_notifications: bool
    email_notifications: bool
    created_at: datetime
    updated_at: datetime


class TicketMessageCreate(HTTPSchemaModel):
    """
    Schema for posting a ticket message.

    There is no sender_type field: the sender kind comes from the caller's
    credentials and any value in the body is dropped.
    """
    message: str = Field(..., min_length=1)
    message_type: MessageType = MessageType.CHAT
    is_internal: bool = False
    sender_name: Optional[str] = Field(None, max_length=100)
    sender_email: Optional[str] = Field(None, max_length=100)


class TicketMessageRead(HTTPSchemaModel):
    """Schema for reading ticket message data."""
    id: int
    ticket_id: int
    sender_type: Optional[str] = None
    sender_name: Optional[str] = None
    sender_email: Optional[str] = None
    message: Optional[str] = None
    message_type: str
    is_internal: bool
    email_sent: bool
    created_at: datetime
