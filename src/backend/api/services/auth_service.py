"""
Staff authentication service.

Staff normally arrive with a token minted by the identity provider; this
module adds the local username/password login used for the back office
and the token issued by it.
"""

import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.auth import StaffLoginRequest, StaffLoginResponse, StaffUserRead
from core.config import settings
from core.decorators import log_database_operation
from core.security import create_staff_token, verify_password
from crud import UserCRUD

logger = logging.getLogger(__name__)


class AuthenticationService:
    """Service for staff authentication."""

    @staticmethod
    @log_database_operation("staff login", level="debug")
    async def staff_login(
        db: AsyncSession,
        login_data: StaffLoginRequest,
        client_ip: Optional[str] = None,
    ) -> StaffLoginResponse:
        """Local database staff login.

        Args:
            db: Database session
            login_data: Username and password
            client_ip: Client IP address, for the log line

        Returns:
            StaffLoginResponse with a Bearer token and the user

        Raises:
            HTTPException: 401 on unknown user, wrong password or inactive account
        """
        user = await UserCRUD.find_by_username(db, login_data.username)

        # Same message for unknown users and wrong passwords
        if not user or not verify_password(login_data.password, user.password_hash):
            logger.warning(
                f"Staff login failed | Username: {login_data.username} | IP: {client_ip}"
            )
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid username or password",
            )

        if not user.is_active:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Account is inactive",
            )

        token = create_staff_token(user.id, user.username)
        logger.info(f"Staff login | User ID: {user.id} | IP: {client_ip}")

        return StaffLoginResponse(
            access_token=token,
            token_type="bearer",
            expires_in=settings.security.staff_token_expire_minutes * 60,
            user=StaffUserRead.model_validate(user),
        )
