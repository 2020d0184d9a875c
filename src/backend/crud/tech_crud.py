"""
Technician CRUD for database operations.

Handles tech profiles and the credential records that hang off them
(certifications, skills, service completions).
"""
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from crud.base_repository import BaseCRUD
from db import ServiceCompletion, TechCertification, TechProfile, TechSkill


class TechProfileCRUD(BaseCRUD[TechProfile]):
    """CRUD for TechProfile database operations."""

    model = TechProfile
    default_order = (TechProfile.id,)

    @classmethod
    async def find_by_user_id(
        cls, db: AsyncSession, user_id: str
    ) -> Optional[TechProfile]:
        """
        Find the profile belonging to a staff user.

        Args:
            db: Database session
            user_id: Staff user ID

        Returns:
            TechProfile or None
        """
        stmt = select(TechProfile).where(TechProfile.user_id == user_id)
        result = await db.execute(stmt)
        return result.scalar_one_or_none()

    @classmethod
    async def find_available(cls, db: AsyncSession) -> List[TechProfile]:
        """Profiles flagged as available; audience filtering happens in the service."""
        stmt = (
            select(TechProfile)
            .where(TechProfile.is_available.is_(True))
            .order_by(*cls.default_order)
        )
        result = await db.execute(stmt)
        return list(result.scalars().all())


class TechCertificationCRUD(BaseCRUD[TechCertification]):
    model = TechCertification
    default_order = (TechCertification.issue_date.desc(), TechCertification.id.desc())

    @classmethod
    async def find_by_profile(
        cls, db: AsyncSession, tech_profile_id: int
    ) -> List[TechCertification]:
        return await cls.find_all(db, filters={"tech_profile_id": tech_profile_id})


class TechSkillCRUD(BaseCRUD[TechSkill]):
    model = TechSkill
    default_order = (TechSkill.category, TechSkill.name)

    @classmethod
    async def find_by_profile(
        cls, db: AsyncSession, tech_profile_id: int
    ) -> List[TechSkill]:
        return await cls.find_all(db, filters={"tech_profile_id": tech_profile_id})


class ServiceCompletionCRUD(BaseCRUD[ServiceCompletion]):
    model = ServiceCompletion
    default_order = (ServiceCompletion.completed_at.desc(), ServiceCompletion.id.desc())

    @classmethod
    async def find_by_profile(
        cls, db: AsyncSession, tech_profile_id: int
    ) -> List[ServiceCompletion]:
        return await cls.find_all(db, filters={"tech_profile_id": tech_profile_id})
