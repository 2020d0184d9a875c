"""
Authentication dependencies for FastAPI.

Two independent credentials reach the API:
- staff: a Bearer JWT naming a row in ``users``
- client: a signed session cookie holding a client ID

``get_principal`` folds whichever is present into a tagged ``Principal`` so
endpoints that accept either identity can branch on ``principal.kind``.
Identity is always passed explicitly through these dependencies; nothing is
read from module-level state.
"""

import logging
from dataclasses import dataclass
from typing import Literal, Optional, Union

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from core.config import settings
from core.database import get_session
from core.security import (
    CLIENT_TOKEN,
    STAFF_TOKEN,
    SecurityError,
    decode_token,
)
from crud import UserCRUD
from db import User

logger = logging.getLogger(__name__)

# HTTP Bearer security scheme; missing headers are handled by the dependencies
security = HTTPBearer(auto_error=False)

PrincipalKind = Literal["staff", "client"]


class AuthenticationError(HTTPException):
    """Custom authentication error."""

    def __init__(self, detail: str = "Authentication required"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


@dataclass(frozen=True)
class Principal:
    """Authenticated caller: a staff user (str ID) or a portal client (int ID)."""

    kind: PrincipalKind
    id: Union[str, int]

    @property
    def is_staff(self) -> bool:
        return self.kind == "staff"

    @property
    def is_client(self) -> bool:
        return self.kind == "client"


async def _load_staff_user(token: str, db: AsyncSession) -> User:
    try:
        payload = decode_token(token, expected_type=STAFF_TOKEN)
    except SecurityError as e:
        raise AuthenticationError(str(e))

    user = await UserCRUD.find_by_id(db, payload["sub"])
    if not user:
        raise AuthenticationError("User not found")
    if not user.is_active:
        raise AuthenticationError("User account is inactive")
    return user


def get_session_client_id(request: Request) -> Optional[int]:
    """Client ID carried by the session cookie, or None when absent or invalid."""
    token = request.cookies.get(settings.security.client_cookie_name)
    if not token:
        return None

    try:
        payload = decode_token(token, expected_type=CLIENT_TOKEN)
        return int(payload["sub"])
    except (SecurityError, ValueError) as e:
        logger.debug(f"Ignoring client session cookie: {e}")
        return None


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_session),
) -> User:
    """Get the current staff user from the Bearer token.

    Raises:
        AuthenticationError: If the token is missing, invalid or names no active user
    """
    if credentials is None:
        raise AuthenticationError()
    return await _load_staff_user(credentials.credentials, db)


async def get_principal(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: AsyncSession = Depends(get_session),
) -> Principal:
    """Resolve the caller's identity.

    A staff Bearer token takes precedence over a client session cookie when
    both are sent.

    Raises:
        AuthenticationError: If neither credential is present and valid
    """
    if credentials is not None:
        user = await _load_staff_user(credentials.credentials, db)
        return Principal(kind="staff", id=user.id)

    client_id = get_session_client_id(request)
    if client_id is not None:
        return Principal(kind="client", id=client_id)

    raise AuthenticationError()


async def require_staff(principal: Principal = Depends(get_principal)) -> Principal:
    if not principal.is_staff:
        raise AuthenticationError("Staff authentication required")
    return principal


async def require_client(request: Request) -> Principal:
    """Client-only routes look at the session cookie and nothing else."""
    client_id = get_session_client_id(request)
    if client_id is None:
        raise AuthenticationError("Not authenticated")
    return Principal(kind="client", id=client_id)


def get_client_ip(request: Request) -> str:
    """Extract client IP address from request.

    Checks X-Forwarded-For, then X-Real-IP, then the socket peer.
    """
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()

    real_ip = request.headers.get("X-Real-IP")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else "unknown"
