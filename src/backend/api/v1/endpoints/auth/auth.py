"""
Staff authentication endpoints.

- ``POST /auth/login``: local username + password login returning a Bearer token
- ``GET /auth/user``: the staff user named by the current token
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.auth import StaffLoginRequest, StaffLoginResponse, StaffUserRead
from api.services.auth_service import AuthenticationService
from core.config import settings
from core.database import get_session
from core.dependencies import get_client_ip, get_current_user
from core.rate_limit import limiter
from db import User

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=StaffLoginResponse)
@limiter.limit(settings.rate_limit.auth_limit)
async def staff_login(
    request: Request,  # Must be first param for rate limiter
    login_data: StaffLoginRequest,
    db: AsyncSession = Depends(get_session),
) -> StaffLoginResponse:
    """Local staff login.

    Returns:
        StaffLoginResponse with the access token and user summary

    Raises:
        HTTPException 401: Unknown user, wrong password or inactive account
    """
    try:
        return await AuthenticationService.staff_login(
            db, login_data, client_ip=get_client_ip(request)
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Staff login error: {e}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Login failed"
        )


@router.get("/user", response_model=StaffUserRead)
async def get_auth_user(current_user: User = Depends(get_current_user)):
    """Current staff user.

    **Permissions:** Staff token required
    """
    return current_user
