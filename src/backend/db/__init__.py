"""
Database models and enums.

All tables are declared in models.py; enums closing the string-valued
columns live in enums.py.
"""
from .models import (
    # Identities
    User,
    Client,

    # Back-office records
    ServiceRequest,
    InventoryItem,
    Invoice,
    WebLead,

    # Repair progress
    Incident,

    # Tickets
    Ticket,
    TicketMessage,

    # Technicians
    TechProfile,
    TechCertification,
    TechSkill,
    ServiceCompletion,

    # Utilities
    TableModel,
    utc_now,
)

from .enums import (
    AvailabilityMode,
    IncidentStage,
    InvoiceStatus,
    MessageType,
    SenderType,
    ServiceRequestStatus,
    TicketPriority,
    TicketStatus,
)

__all__ = [
    # Enums
    "AvailabilityMode",
    "IncidentStage",
    "InvoiceStatus",
    "MessageType",
    "SenderType",
    "ServiceRequestStatus",
    "TicketPriority",
    "TicketStatus",

    # Models
    "User",
    "Client",
    "ServiceRequest",
    "InventoryItem",
    "Invoice",
    "WebLead",
    "Incident",
    "Ticket",
    "TicketMessage",
    "TechProfile",
    "TechCertification",
    "TechSkill",
    "ServiceCompletion",

    # Utilities
    "TableModel",
    "utc_now",
]
