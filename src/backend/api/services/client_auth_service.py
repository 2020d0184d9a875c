"""
Client portal authentication service.

Portal passwords are stored as bcrypt hashes and checked with
bcrypt.checkpw; the plaintext is never stored or logged.
"""

import logging
from typing import Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.auth import ClientLoginRequest, ClientSignupRequest
from core.decorators import log_database_operation, transactional_database_operation
from core.logging_config import ClientAuthLogger
from core.security import create_client_session_token, hash_password, verify_password
from crud import ClientCRUD
from db import Client

logger = logging.getLogger(__name__)
auth_logger = ClientAuthLogger()

EMAIL_TAKEN = "Email already registered"
INVALID_CREDENTIALS = "Invalid credentials"


class ClientAuthService:
    """Service for portal signup and login."""

    @staticmethod
    @transactional_database_operation("client_signup")
    @log_database_operation("client signup", level="debug")
    async def signup(db: AsyncSession, signup_data: ClientSignupRequest) -> Client:
        """
        Register a portal client.

        Args:
            db: Database session
            signup_data: Name, email, optional phone and password

        Returns:
            The created client

        Raises:
            HTTPException: 400 if the email is already registered
        """
        email = signup_data.email.lower()

        if await ClientCRUD.find_by_email(db, email):
            auth_logger.signup_rejected(email, "duplicate email")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_TAKEN)

        try:
            client = await ClientCRUD.create(
                db,
                obj_in={
                    "name": signup_data.name,
                    "email": email,
                    "phone": signup_data.phone,
                    "password_hash": hash_password(signup_data.password),
                    "is_active": True,
                },
            )
        except IntegrityError:
            # Lost a race against a concurrent signup with the same email
            await db.rollback()
            auth_logger.signup_rejected(email, "duplicate email")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=EMAIL_TAKEN)

        auth_logger.signup(client.id, email)
        return client

    @staticmethod
    @log_database_operation("client login", level="debug")
    async def login(
        db: AsyncSession,
        login_data: ClientLoginRequest,
        client_ip: Optional[str] = None,
    ) -> Tuple[Client, str]:
        """
        Check portal credentials and mint a session token.

        Returns:
            Tuple of (client, signed session token for the cookie)

        Raises:
            HTTPException: 401 on unknown email, wrong password or inactive account
        """
        email = login_data.email.lower()
        client = await ClientCRUD.find_by_email(db, email)

        if (
            not client
            or not client.is_active
            or not verify_password(login_data.password, client.password_hash)
        ):
            auth_logger.login_failed(email, client_ip)
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED, detail=INVALID_CREDENTIALS
            )

        auth_logger.login_succeeded(client.id, client_ip)
        return client, create_client_session_token(client.id, client.email)

    @staticmethod
    def logout(client_id: Optional[int]) -> None:
        auth_logger.logout(client_id)
