"""
Initialize database tables from SQLModel models and seed the staff account.

Admin configuration comes from the environment:
    ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_EMAIL

Usage:
    python init_db.py            # tables + admin user
    python init_db.py --no-seed  # tables only
"""
import argparse
import asyncio
import logging
import os
from typing import Optional

from sqlalchemy import select

from core.database import close_db, init_db, session_scope
from core.logging_config import setup_logging
from core.security import hash_password
from db import User, utc_now

logger = logging.getLogger(__name__)


class AdminSeeder:
    """Create or refresh the initial staff account."""

    def __init__(self):
        self.admin_username = os.getenv("ADMIN_USERNAME", "admin")
        self.admin_password = os.getenv("ADMIN_PASSWORD", "Admin123!@#")
        self.admin_email = os.getenv("ADMIN_EMAIL", "admin@repairdesk.local")

        logger.info("Admin seed configuration:")
        logger.info(f"  Admin username: {self.admin_username}")
        logger.info(f"  Admin email: {self.admin_email}")

    async def create_admin_user(self) -> Optional[User]:
        async with session_scope() as db:
            stmt = select(User).where(
                (User.username == self.admin_username)
                | (User.email == self.admin_email)
            )
            result = await db.execute(stmt)
            existing_user = result.scalar_one_or_none()

            password_hash = hash_password(self.admin_password)

            if existing_user:
                logger.info(
                    f"Admin user '{self.admin_username}' already exists. Updating..."
                )
                existing_user.email = self.admin_email
                existing_user.password_hash = password_hash
                existing_user.is_active = True
                existing_user.updated_at = utc_now()
                await db.commit()
                await db.refresh(existing_user)
                return existing_user

            logger.info(f"Creating new admin user '{self.admin_username}'...")
            admin_user = User(
                username=self.admin_username,
                email=self.admin_email,
                first_name="System",
                last_name="Administrator",
                password_hash=password_hash,
                is_active=True,
            )
            db.add(admin_user)
            await db.commit()
            await db.refresh(admin_user)
            logger.info(f"Admin user '{self.admin_username}' created successfully")
            return admin_user


async def main(seed: bool = True) -> None:
    """Create all tables, then optionally seed the admin account."""
    try:
        await init_db()
        if seed:
            await AdminSeeder().create_admin_user()
    finally:
        await close_db()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the database")
    parser.add_argument(
        "--no-seed", action="store_true", help="Create tables without the admin user"
    )
    args = parser.parse_args()

    setup_logging()
    asyncio.run(main(seed=not args.no_seed))
