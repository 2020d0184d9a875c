"""
Client portal authentication endpoints.

The session is a signed token in an HttpOnly cookie. Login sets it, logout
clears it; failed logins never set it.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.auth import (
    ClientLoginRequest,
    ClientLoginResponse,
    ClientSessionInfo,
    ClientSignupRequest,
    ClientSignupResponse,
    MessageResponse,
)
from api.services.client_auth_service import ClientAuthService
from core.config import settings
from core.database import get_session
from core.dependencies import get_client_ip, get_session_client_id
from core.rate_limit import limiter

logger = logging.getLogger(__name__)

router = APIRouter()


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.security.client_cookie_name,
        value=token,
        max_age=settings.security.client_session_expire_minutes * 60,
        httponly=True,
        secure=settings.security.client_cookie_secure,
        samesite=settings.security.client_cookie_samesite,
        path="/",
    )


@router.post("/signup", response_model=ClientSignupResponse)
@limiter.limit(settings.rate_limit.auth_limit)
async def signup(
    request: Request,  # Must be first param for rate limiter
    signup_data: ClientSignupRequest,
    db: AsyncSession = Depends(get_session),
):
    """
    Register a portal account.

    Raises:
        HTTPException 400: Invalid input or email already registered
        HTTPException 500: Unexpected failure
    """
    try:
        client = await ClientAuthService.signup(db, signup_data)
        return ClientSignupResponse(
            message="Account created successfully", client_id=client.id
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Client signup error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create account",
        )


@router.post("/login", response_model=ClientLoginResponse)
@limiter.limit(settings.rate_limit.auth_limit)
async def login(
    request: Request,  # Must be first param for rate limiter
    response: Response,
    login_data: ClientLoginRequest,
    db: AsyncSession = Depends(get_session),
):
    """
    Sign in to the portal and receive the session cookie.

    Raises:
        HTTPException 401: Invalid credentials (no cookie is set)
    """
    try:
        client, token = await ClientAuthService.login(
            db, login_data, client_ip=get_client_ip(request)
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Client login error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed"
        )

    _set_session_cookie(response, token)
    return ClientLoginResponse(
        message="Login successful",
        client=ClientSessionInfo(id=client.id, name=client.name, email=client.email),
    )


@router.post("/logout", response_model=MessageResponse)
async def logout(request: Request, response: Response):
    """Clear the session cookie. Succeeds whether or not a session exists."""
    ClientAuthService.logout(get_session_client_id(request))
    response.delete_cookie(key=settings.security.client_cookie_name, path="/")
    return MessageResponse(message="Logout successful")
