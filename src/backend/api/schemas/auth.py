"""
Authentication schemas for staff and client-portal logins.
"""

from typing import Optional

from pydantic import EmailStr, Field

from core.schema_base import HTTPSchemaModel


# ---------------------------------------------------------------------------
# Staff
# ---------------------------------------------------------------------------


class StaffLoginRequest(HTTPSchemaModel):
    """Schema for local staff login."""

    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=1)


class TokenResponse(HTTPSchemaModel):
    """Schema for token response."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Token expiration time in seconds")


class StaffUserRead(HTTPSchemaModel):
    """Current staff user, as returned by /auth/user."""

    id: str
    username: str
    email: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    profile_image_url: Optional[str] = None
    is_active: bool


class StaffLoginResponse(TokenResponse):
    user: StaffUserRead


# ---------------------------------------------------------------------------
# Client portal
# ---------------------------------------------------------------------------


class ClientSignupRequest(HTTPSchemaModel):
    """Schema for client self-registration."""

    name: str = Field(..., min_length=2, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=20)
    password: str = Field(..., min_length=6, max_length=128)


class ClientLoginRequest(HTTPSchemaModel):
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=128)


class ClientSignupResponse(HTTPSchemaModel):
    message: str
    client_id: int


class ClientSessionInfo(HTTPSchemaModel):
    """Client summary returned on successful login."""

    id: int
    name: Optional[str] = None
    email: Optional[str] = None


class ClientLoginResponse(HTTPSchemaModel):
    message: str
    client: ClientSessionInfo


class MessageResponse(HTTPSchemaModel):
    """Plain acknowledgement."""

    message: str
