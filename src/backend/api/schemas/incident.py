"""
Incident schemas for API validation and serialization.
"""
from datetime import datetime
from typing import Optional

from pydantic import Field

from core.schema_base import HTTPSchemaModel
from db.enums import IncidentStage


class IncidentCreate(HTTPSchemaModel):
    """Schema for creating an incident; stage flags default to False."""
    client_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    call_stage: bool = False
    receive_stage: bool = False
    repair_stage: bool = False
    pickup_stage: bool = False


class IncidentUpdate(HTTPSchemaModel):
    """Schema for updating an incident. Stage flags are set as given, in any order."""
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    call_stage: Optional[bool] = None
    receive_stage: Optional[bool] = None
    repair_stage: Optional[bool] = None
    pickup_stage: Optional[bool] = None


class IncidentStageToggle(HTTPSchemaModel):
    stage: IncidentStage


class IncidentRead(HTTPSchemaModel):
    """Schema for reading incident data."""
    id: int
    client_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    call_stage: bool
    receive_stage: bool
    repair_stage: bool
    pickup_stage: bool
    progress: Optional[IncidentStage] = Field(
        None, description="Furthest stage reached without gaps"
    )
    created_at: datetime
    updated_at: datetime
