"""
CRUD layer for database operations.

This package contains all data access logic isolated from business logic.
Every table is read and written only through these classes.

Pattern:
    await TicketCRUD.find_by_id(db, ticket_id)
"""

from .base_repository import BaseCRUD
from .back_office_crud import InventoryCRUD, InvoiceCRUD, WebLeadCRUD
from .client_crud import ClientCRUD
from .incident_crud import IncidentCRUD
from .service_request_crud import ServiceRequestCRUD
from .tech_crud import (
    ServiceCompletionCRUD,
    TechCertificationCRUD,
    TechProfileCRUD,
    TechSkillCRUD,
)
from .ticket_crud import TicketCRUD, TicketMessageCRUD
from .user_crud import UserCRUD

__all__ = [
    "BaseCRUD",
    "ClientCRUD",
    "IncidentCRUD",
    "InventoryCRUD",
    "InvoiceCRUD",
    "ServiceCompletionCRUD",
    "ServiceRequestCRUD",
    "TechCertificationCRUD",
    "TechProfileCRUD",
    "TechSkillCRUD",
    "TicketCRUD",
    "TicketMessageCRUD",
    "UserCRUD",
    "WebLeadCRUD",
]
