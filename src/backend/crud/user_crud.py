"""
User CRUD for database operations.

Handles all database queries related to staff users.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import User


class UserCRUD(BaseCRUD[User]):
    """CRUD for User database operations."""

    model = User
    default_order = (User.username,)

    @classmethod
    async def find_by_username(
        cls, db: AsyncSession, username: str
    ) -> Optional[User]:
        """
        Find user by username.

        Args:
            db: Database session
            username: Username to search for

        Returns:
            User or None
        """
        stmt = select(User).where(User.username == username)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()
