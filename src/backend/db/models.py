"""
Database models using SQLModel.

Staff users and customer clients are separate identities: staff come from the
external identity provider (string subject IDs), clients sign up through the
portal (integer IDs). Everything else hangs off clients, service requests and
tech profiles.
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    Date,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
    text,
)
from sqlmodel import Field, Relationship, SQLModel

from db.enums import (
    AvailabilityMode,
    IncidentStage,
    InvoiceStatus,
    MessageType,
    ServiceRequestStatus,
    TicketPriority,
    TicketStatus,
)


def utc_now() -> datetime:
    """
    Current time in UTC, timezone-naive, for database storage.

    The API layer appends the 'Z' marker when serializing.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


class TableModel(SQLModel):
    """Base table model with common functionality."""

    pass


# ============================================================================
# IDENTITIES
# ============================================================================


class User(TableModel, table=True):
    """Staff user. The ID is the identity provider's subject claim."""

    __tablename__ = "users"

    id: str = Field(
        default_factory=lambda: str(uuid4()),
        sa_column=Column(String(255), primary_key=True),
    )
    username: str = Field(
        sa_column=Column(String(100), nullable=False, unique=True),
        description="Login name for local staff authentication",
    )
    email: Optional[str] = Field(
        default=None, sa_column=Column(String(255), nullable=True, unique=True)
    )
    first_name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    last_name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    profile_image_url: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    password_hash: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="bcrypt hash; NULL for users that only sign in through the provider",
    )
    is_active: bool = Field(
        default=True, sa_column=Column(Boolean, default=True, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={
            "server_default": text("CURRENT_TIMESTAMP"),
            "onupdate": utc_now,
        },
    )

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or self.username


class Client(TableModel, table=True):
    """Customer of the repair shop; also the portal login identity."""

    __tablename__ = "clients"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    email: Optional[str] = Field(
        default=None, sa_column=Column(String(100), unique=True, nullable=True)
    )
    phone: Optional[str] = Field(default=None, sa_column=Column(String(20)))
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    password_hash: Optional[str] = Field(
        default=None,
        sa_column=Column(String(255), nullable=True),
        description="bcrypt hash of the portal password; NULL for staff-created clients",
    )
    is_active: bool = Field(
        default=True, sa_column=Column(Boolean, default=True, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (Index("ix_clients_created_at", "created_at"),)


# ============================================================================
# BACK-OFFICE RECORDS
# ============================================================================


class ServiceRequest(TableModel, table=True):
    """A customer's request for service."""

    __tablename__ = "service_requests"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    service_type: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    status: str = Field(
        default=ServiceRequestStatus.PENDING.value,
        sa_column=Column(String(50), default=ServiceRequestStatus.PENDING.value, nullable=False),
    )
    assigned_to: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100)),
        description="Free-text technician name",
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (
        Index("ix_service_requests_client_id", "client_id"),
        Index("ix_service_requests_status", "status"),
    )


class InventoryItem(TableModel, table=True):
    __tablename__ = "inventory"

    id: Optional[int] = Field(default=None, primary_key=True)
    item_name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    quantity: Optional[int] = Field(default=None, sa_column=Column(Integer))
    notes: Optional[str] = Field(default=None, sa_column=Column(Text))
    last_used: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))


class Invoice(TableModel, table=True):
    __tablename__ = "invoices"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    amount: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(10, 2)))
    status: str = Field(
        default=InvoiceStatus.UNPAID.value,
        sa_column=Column(String(50), default=InvoiceStatus.UNPAID.value, nullable=False),
    )
    invoice_date: Optional[date] = Field(default=None, sa_column=Column(Date))
    pdf_url: Optional[str] = Field(default=None, sa_column=Column(Text))


class WebLead(TableModel, table=True):
    """Prospective client captured from the public contact form."""

    __tablename__ = "web_leads"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    email: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    message: Optional[str] = Field(default=None, sa_column=Column(Text))
    source: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )


# ============================================================================
# REPAIR PROGRESS
# ============================================================================


class Incident(TableModel, table=True):
    """
    Physical repair progress for a client: four independent stage flags.

    The flags are meant to advance call -> receive -> repair -> pickup but
    nothing enforces that order.
    """

    __tablename__ = "incidents"

    id: Optional[int] = Field(default=None, primary_key=True)
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    title: Optional[str] = Field(default=None, sa_column=Column(String(200)))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    call_stage: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    receive_stage: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    repair_stage: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    pickup_stage: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (Index("ix_incidents_client_id", "client_id"),)

    @property
    def progress(self) -> Optional[IncidentStage]:
        """Furthest stage reached without skipping an earlier one."""
        reached = None
        for stage in IncidentStage:
            if not getattr(self, stage.column):
                break
            reached = stage
        return reached


# ============================================================================
# TICKETS
# ============================================================================


class Ticket(TableModel, table=True):
    """Conversation and status record for a service request."""

    __tablename__ = "tickets"

    id: Optional[int] = Field(default=None, primary_key=True)
    service_request_id: Optional[int] = Field(
        default=None, foreign_key="service_requests.id"
    )
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    title: Optional[str] = Field(default=None, sa_column=Column(String(200)))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    priority: str = Field(
        default=TicketPriority.MEDIUM.value,
        sa_column=Column(String(20), default=TicketPriority.MEDIUM.value, nullable=False),
    )
    status: str = Field(
        default=TicketStatus.OPEN.value,
        sa_column=Column(String(20), default=TicketStatus.OPEN.value, nullable=False),
    )
    assigned_to: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    tech_email: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    client_notifications: bool = Field(
        default=True, sa_column=Column(Boolean, default=True, nullable=False)
    )
    email_notifications: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (
        # At most one ticket per service request (NULLs are not compared)
        UniqueConstraint("service_request_id", name="uq_tickets_service_request_id"),
        Index("ix_tickets_client_id", "client_id"),
        Index("ix_tickets_created_at", "created_at"),
    )


class TicketMessage(TableModel, table=True):
    """Append-only entry in a ticket's message log."""

    __tablename__ = "ticket_messages"

    id: Optional[int] = Field(default=None, primary_key=True)
    ticket_id: Optional[int] = Field(default=None, foreign_key="tickets.id")
    sender_type: Optional[str] = Field(default=None, sa_column=Column(String(20)))
    sender_name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    sender_email: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    message: Optional[str] = Field(default=None, sa_column=Column(Text))
    message_type: str = Field(
        default=MessageType.CHAT.value,
        sa_column=Column(String(20), default=MessageType.CHAT.value, nullable=False),
    )
    is_internal: bool = Field(
        default=False,
        sa_column=Column(Boolean, default=False, nullable=False),
        description="Internal tech note; read paths do not filter it",
    )
    email_sent: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (
        Index("ix_ticket_messages_ticket_created", "ticket_id", "created_at"),
    )


# ============================================================================
# TECHNICIANS
# ============================================================================


class TechProfile(TableModel, table=True):
    """Customer-facing profile of a staff technician (1:1 with User)."""

    __tablename__ = "tech_profiles"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: str = Field(
        sa_column=Column(String(255), ForeignKey("users.id"), unique=True, nullable=False)
    )
    name: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    personal_email: Optional[str] = Field(default=None, sa_column=Column(String(100)))
    email_signature: Optional[str] = Field(default=None, sa_column=Column(Text))
    notification_preferences: Optional[Dict[str, Any]] = Field(
        default=None, sa_column=Column(JSON)
    )
    is_available: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    availability_mode: str = Field(
        default=AvailabilityMode.NONE.value,
        sa_column=Column(String(20), default=AvailabilityMode.NONE.value, nullable=False),
    )
    allowed_client_ids: Optional[List[int]] = Field(
        default=None,
        sa_column=Column(JSON),
        description="Client IDs that may see this tech when availability_mode is 'specific'",
    )
    specialties: Optional[str] = Field(default=None, sa_column=Column(Text))
    latitude: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(10, 8)))
    longitude: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(11, 8)))
    address: Optional[str] = Field(default=None, sa_column=Column(Text))
    phone: Optional[str] = Field(default=None, sa_column=Column(String(20)))
    profile_image_url: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    bio: Optional[str] = Field(default=None, sa_column=Column(Text))
    hourly_rate: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(8, 2)))
    years_experience: Optional[int] = Field(default=None, sa_column=Column(Integer))
    education: Optional[str] = Field(default=None, sa_column=Column(Text))
    resume_url: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    portfolio_url: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    updated_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    # Relationships (deleted with the profile)
    certifications: List["TechCertification"] = Relationship(
        back_populates="tech_profile",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )
    skills: List["TechSkill"] = Relationship(
        back_populates="tech_profile",
        sa_relationship_kwargs={"lazy": "selectin", "cascade": "all, delete-orphan"},
    )

    __table_args__ = (Index("ix_tech_profiles_is_available", "is_available"),)


class TechCertification(TableModel, table=True):
    __tablename__ = "tech_certifications"

    id: Optional[int] = Field(default=None, primary_key=True)
    tech_profile_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("tech_profiles.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    name: str = Field(sa_column=Column(String(255), nullable=False))
    issuing_organization: str = Field(sa_column=Column(String(255), nullable=False))
    credential_id: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    credential_url: Optional[str] = Field(default=None, sa_column=Column(String(255)))
    issue_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    expiration_date: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    tech_profile: Optional[TechProfile] = Relationship(back_populates="certifications")


class TechSkill(TableModel, table=True):
    __tablename__ = "tech_skills"

    id: Optional[int] = Field(default=None, primary_key=True)
    tech_profile_id: int = Field(
        sa_column=Column(
            Integer,
            ForeignKey("tech_profiles.id", ondelete="CASCADE"),
            nullable=False,
        )
    )
    name: str = Field(sa_column=Column(String(255), nullable=False))
    category: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100)),
        description="hardware, software, networking, security, ...",
    )
    proficiency_level: Optional[str] = Field(
        default=None,
        sa_column=Column(String(50)),
        description="beginner, intermediate, advanced, expert",
    )
    verified: bool = Field(
        default=False, sa_column=Column(Boolean, default=False, nullable=False)
    )
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    tech_profile: Optional[TechProfile] = Relationship(back_populates="skills")


class ServiceCompletion(TableModel, table=True):
    """Finished engagement, used to derive technician statistics."""

    __tablename__ = "service_completions"

    id: Optional[int] = Field(default=None, primary_key=True)
    tech_profile_id: int = Field(
        sa_column=Column(Integer, ForeignKey("tech_profiles.id"), nullable=False)
    )
    service_request_id: Optional[int] = Field(
        default=None, foreign_key="service_requests.id"
    )
    client_id: Optional[int] = Field(default=None, foreign_key="clients.id")
    title: str = Field(sa_column=Column(String(255), nullable=False))
    description: Optional[str] = Field(default=None, sa_column=Column(Text))
    category: Optional[str] = Field(
        default=None,
        sa_column=Column(String(100)),
        description="repair, maintenance, installation, consultation",
    )
    hours_worked: Optional[Decimal] = Field(default=None, sa_column=Column(Numeric(5, 2)))
    client_satisfaction_rating: Optional[int] = Field(
        default=None, sa_column=Column(Integer), description="1-5 stars"
    )
    client_testimonial: Optional[str] = Field(default=None, sa_column=Column(Text))
    completed_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )
    skills_used: Optional[List[str]] = Field(default=None, sa_column=Column(JSON))
    challenges_solved: Optional[str] = Field(default=None, sa_column=Column(Text))
    created_at: datetime = Field(
        default_factory=utc_now,
        sa_column_kwargs={"server_default": text("CURRENT_TIMESTAMP")},
    )

    __table_args__ = (
        Index("ix_service_completions_tech_profile_id", "tech_profile_id"),
    )
