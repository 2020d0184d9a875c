"""
Technician schemas: profiles, credentials, completions and derived stats.
"""
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import Field

from core.schema_base import HTTPSchemaModel
from db.enums import AvailabilityMode


# ============================================================================
# TECH PROFILE
# ============================================================================


class TechProfileUpsert(HTTPSchemaModel):
    """
    Fields a technician may set on their own profile.

    Omitted fields keep their stored value on update.
    """
    name: Optional[str] = Field(None, max_length=100)
    personal_email: Optional[str] = Field(None, max_length=100)
    email_signature: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    is_available: Optional[bool] = None
    availability_mode: Optional[AvailabilityMode] = None
    allowed_client_ids: Optional[List[int]] = None
    specialties: Optional[str] = None
    latitude: Optional[Decimal] = Field(None, ge=-90, le=90)
    longitude: Optional[Decimal] = Field(None, ge=-180, le=180)
    address: Optional[str] = None
    phone: Optional[str] = Field(None, max_length=20)
    profile_image_url: Optional[str] = Field(None, max_length=255)
    bio: Optional[str] = None
    hourly_rate: Optional[Decimal] = Field(None, ge=0)
    years_experience: Optional[int] = Field(None, ge=0)
    education: Optional[str] = None
    resume_url: Optional[str] = Field(None, max_length=255)
    portfolio_url: Optional[str] = Field(None, max_length=255)


class PublicTechProfile(HTTPSchemaModel):
    """What a portal client sees of an available technician."""
    id: int
    name: Optional[str] = None
    specialties: Optional[str] = None
    bio: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    latitude: Optional[Decimal] = None
    longitude: Optional[Decimal] = None
    profile_image_url: Optional[str] = None
    hourly_rate: Optional[Decimal] = None
    years_experience: Optional[int] = None
    education: Optional[str] = None
    portfolio_url: Optional[str] = None
    is_available: bool


class TechProfileRead(PublicTechProfile):
    """Full profile, for the owning technician and other staff."""
    user_id: str
    personal_email: Optional[str] = None
    email_signature: Optional[str] = None
    notification_preferences: Optional[Dict[str, Any]] = None
    availability_mode: str
    allowed_client_ids: Optional[List[int]] = None
    resume_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime


# ============================================================================
# CERTIFICATIONS
# ============================================================================


class TechCertificationCreate(HTTPSchemaModel):
    tech_profile_id: int
    name: str = Field(..., min_length=1, max_length=255)
    issuing_organization: str = Field(..., min_length=1, max_length=255)
    credential_id: Optional[str] = Field(None, max_length=255)
    credential_url: Optional[str] = Field(None, max_length=255)
    issue_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None


class TechCertificationUpdate(HTTPSchemaModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    issuing_organization: Optional[str] = Field(None, min_length=1, max_length=255)
    credential_id: Optional[str] = Field(None, max_length=255)
    credential_url: Optional[str] = Field(None, max_length=255)
    issue_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None


class TechCertificationRead(HTTPSchemaModel):
    id: int
    tech_profile_id: int
    name: str
    issuing_organization: str
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    issue_date: Optional[datetime] = None
    expiration_date: Optional[datetime] = None
    created_at: datetime


# ============================================================================
# SKILLS
# ============================================================================


class TechSkillCreate(HTTPSchemaModel):
    tech_profile_id: int
    name: str = Field(..., min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    proficiency_level: Optional[str] = Field(None, max_length=50)
    verified: bool = False


class TechSkillUpdate(HTTPSchemaModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    category: Optional[str] = Field(None, max_length=100)
    proficiency_level: Optional[str] = Field(None, max_length=50)
    verified: Optional[bool] = None


class TechSkillRead(HTTPSchemaModel):
    id: int
    tech_profile_id: int
    name: str
    category: Optional[str] = None
    proficiency_level: Optional[str] = None
    verified: bool
    created_at: datetime


# ============================================================================
# SERVICE COMPLETIONS
# ============================================================================


class ServiceCompletionCreate(HTTPSchemaModel):
    tech_profile_id: int
    service_request_id: Optional[int] = None
    client_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    hours_worked: Optional[Decimal] = Field(None, ge=0)
    client_satisfaction_rating: Optional[int] = Field(None, ge=1, le=5)
    client_testimonial: Optional[str] = None
    completed_at: Optional[datetime] = None
    skills_used: Optional[List[str]] = None
    challenges_solved: Optional[str] = None


class ServiceCompletionUpdate(HTTPSchemaModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(None, max_length=100)
    hours_worked: Optional[Decimal] = Field(None, ge=0)
    client_satisfaction_rating: Optional[int] = Field(None, ge=1, le=5)
    client_testimonial: Optional[str] = None
    completed_at: Optional[datetime] = None
    skills_used: Optional[List[str]] = None
    challenges_solved: Optional[str] = None


class ServiceCompletionRead(HTTPSchemaModel):
    id: int
    tech_profile_id: int
    service_request_id: Optional[int] = None
    client_id: Optional[int] = None
    title: str
    description: Optional[str] = None
    category: Optional[str] = None
    hours_worked: Optional[Decimal] = None
    client_satisfaction_rating: Optional[int] = None
    client_testimonial: Optional[str] = None
    completed_at: datetime
    skills_used: Optional[List[str]] = None
    challenges_solved: Optional[str] = None
    created_at: datetime


# ============================================================================
# STATS
# ============================================================================


class CategoryCount(HTTPSchemaModel):
    category: str
    count: int


class TechStats(HTTPSchemaModel):
    """
    Summary of a technician's completion history.

    average_rating is 0 when no completion carries a rating; real ratings are
    1-5 so the value never collides with a genuine average.
    """
    total_completions: int = 0
    total_hours: float = 0.0
    average_rating: float = 0.0
    categories: List[CategoryCount] = Field(default_factory=list)
