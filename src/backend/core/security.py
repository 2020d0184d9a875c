"""
Security utilities: password hashing and signed tokens.

Two token kinds are issued with the same signing key:
- "staff" access tokens, sent as a Bearer header by the dashboard
- "client" session tokens, stored in the portal's HttpOnly cookie
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

import bcrypt
import jwt
from jwt.exceptions import ExpiredSignatureError, InvalidTokenError

from core.config import settings

STAFF_TOKEN = "staff"
CLIENT_TOKEN = "client"


class SecurityError(Exception):
    """Base exception for security-related errors."""

    pass


class TokenExpiredError(SecurityError):
    """Raised when a token has expired."""

    pass


class TokenInvalidError(SecurityError):
    """Raised when a token is invalid."""

    pass


def hash_password(password: str) -> str:
    """Hash a password using bcrypt with a fresh salt."""
    salt = bcrypt.gensalt()
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify a password against its bcrypt hash.

    Returns False for missing or malformed hashes instead of raising.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        return False


def _create_token(
    subject: str,
    token_type: str,
    expires_delta: timedelta,
    extra_claims: Optional[Dict[str, Any]] = None,
) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "type": token_type,
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
        "jti": str(uuid4()),
        "iss": settings.security.jwt_issuer,
        "aud": settings.security.jwt_audience,
    }
    if extra_claims:
        payload.update(extra_claims)

    try:
        return jwt.encode(
            payload,
            settings.security.secret_key,
            algorithm=settings.security.algorithm,
        )
    except Exception as e:
        raise SecurityError(f"Failed to create token: {e}")


def create_staff_token(user_id: str, username: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a Bearer access token for a staff user."""
    return _create_token(
        subject=str(user_id),
        token_type=STAFF_TOKEN,
        expires_delta=expires_delta
        or timedelta(minutes=settings.security.staff_token_expire_minutes),
        extra_claims={"username": username},
    )


def create_client_session_token(
    client_id: int, email: str, expires_delta: Optional[timedelta] = None
) -> str:
    """Create the signed value stored in the client session cookie."""
    return _create_token(
        subject=str(client_id),
        token_type=CLIENT_TOKEN,
        expires_delta=expires_delta
        or timedelta(minutes=settings.security.client_session_expire_minutes),
        extra_claims={"email": email},
    )


def decode_token(token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
    """Decode and validate a token.

    Args:
        token: Encoded JWT
        expected_type: When given, the token's "type" claim must match

    Raises:
        TokenExpiredError: If token has expired
        TokenInvalidError: If token is invalid or of the wrong type
    """
    try:
        payload = jwt.decode(
            token,
            settings.security.secret_key,
            algorithms=[settings.security.algorithm],
            audience=settings.security.jwt_audience,
            issuer=settings.security.jwt_issuer,
        )
    except ExpiredSignatureError:
        raise TokenExpiredError("Token has expired")
    except InvalidTokenError as e:
        raise TokenInvalidError(f"Invalid token: {e}")

    if expected_type and payload.get("type") != expected_type:
        raise TokenInvalidError("Unexpected token type")

    if not payload.get("sub"):
        raise TokenInvalidError("Subject missing from token")

    return payload
