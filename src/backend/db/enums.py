"""
Enums for database models.

Columns store the plain string values; the enums close the value sets at the
API boundary and in service code.
"""
from enum import Enum


class ServiceRequestStatus(str, Enum):
    """Lifecycle of a customer service request."""
    PENDING = "pending"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class TicketPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class TicketStatus(str, Enum):
    """
    Ticket status.

    open is initial and closed terminal by convention only; any status may be
    set to any other.
    """
    OPEN = "open"
    IN_PROGRESS = "in-progress"
    RESOLVED = "resolved"
    CLOSED = "closed"


class SenderType(str, Enum):
    """Who wrote a ticket message. Derived from the caller's session kind."""
    TECH = "tech"
    CLIENT = "client"
    SYSTEM = "system"


class MessageType(str, Enum):
    CHAT = "chat"
    EMAIL = "email"
    UPDATE = "update"
    SYSTEM = "system"


class AvailabilityMode(str, Enum):
    """
    Which clients can discover a technician.

    Used by TechProfile.availability_mode; SPECIFIC consults
    TechProfile.allowed_client_ids.
    """
    NONE = "none"
    ALL = "all"
    SPECIFIC = "specific"


class IncidentStage(str, Enum):
    """The four repair gates, in their intended order."""
    CALL = "call"
    RECEIVE = "receive"
    REPAIR = "repair"
    PICKUP = "pickup"

    @property
    def column(self) -> str:
        """Name of the boolean column backing this stage."""
        return f"{self.value}_stage"


class InvoiceStatus(str, Enum):
    UNPAID = "unpaid"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"
