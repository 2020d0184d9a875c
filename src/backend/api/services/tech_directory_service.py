"""
Tech directory service: technician profiles and client-facing discovery.

A profile's audience is modelled as a closed set of variants:

- ``Unavailable``: nobody sees the technician
- ``Everyone``: every client sees the technician
- ``SpecificClients``: only the listed client IDs see the technician

``availability_of`` maps a stored profile onto a variant. The stored mode is
a free string; anything other than "all" or "specific" (including "none")
maps to ``Unavailable``, as does ``is_available = False``.
"""
import logging
from dataclasses import dataclass
from typing import FrozenSet, Iterable, List, Optional, Union

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import TechProfileUpsert
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import TechProfileCRUD
from db import AvailabilityMode, TechProfile, utc_now

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Unavailable:
    pass


@dataclass(frozen=True)
class Everyone:
    pass


@dataclass(frozen=True)
class SpecificClients:
    allowed_client_ids: FrozenSet[int]


Availability = Union[Unavailable, Everyone, SpecificClients]

# NOT NULL columns keep their stored value when sent as null
_REQUIRED_COLUMNS = ("is_available", "availability_mode")


def _client_ids(raw: Optional[Iterable]) -> FrozenSet[int]:
    ids = set()
    for value in raw or ():
        try:
            ids.add(int(value))
        except (TypeError, ValueError):
            logger.warning(f"Ignoring malformed allowed client id: {value!r}")
    return frozenset(ids)


def availability_of(profile: TechProfile) -> Availability:
    """Classify a profile's audience."""
    if not profile.is_available:
        return Unavailable()

    if profile.availability_mode == AvailabilityMode.ALL.value:
        return Everyone()

    if profile.availability_mode == AvailabilityMode.SPECIFIC.value:
        return SpecificClients(_client_ids(profile.allowed_client_ids))

    return Unavailable()


def visible_to(availability: Availability, client_id: int) -> bool:
    """Whether a client may see a technician with the given availability."""
    if isinstance(availability, Everyone):
        return True
    if isinstance(availability, SpecificClients):
        return client_id in availability.allowed_client_ids
    if isinstance(availability, Unavailable):
        return False
    raise TypeError(f"Unknown availability variant: {availability!r}")


class TechDirectoryService:
    """Service for tech profiles and available-tech discovery."""

    @staticmethod
    @critical_database_operation("list_available_techs")
    @log_database_operation("available techs retrieval", level="debug")
    async def list_available_techs(db: AsyncSession, client_id: int) -> List[TechProfile]:
        """
        Technicians a given client may see.

        Filters on is_available in the query, then on the audience in process.
        """
        candidates = await TechProfileCRUD.find_available(db)
        return [
            profile
            for profile in candidates
            if visible_to(availability_of(profile), client_id)
        ]

    @staticmethod
    @critical_database_operation("get_profile_for_user")
    async def get_profile_for_user(db: AsyncSession, user_id: str) -> Optional[TechProfile]:
        return await TechProfileCRUD.find_by_user_id(db, user_id)

    @staticmethod
    @critical_database_operation("get_profile")
    async def get_profile(db: AsyncSession, profile_id: int) -> Optional[TechProfile]:
        return await TechProfileCRUD.find_by_id(db, profile_id)

    @staticmethod
    @critical_database_operation("list_profiles")
    async def list_profiles(db: AsyncSession) -> List[TechProfile]:
        return await TechProfileCRUD.find_all(db)

    @staticmethod
    @transactional_database_operation("upsert_profile")
    @log_database_operation("tech profile upsert", level="debug")
    async def upsert_profile(
        db: AsyncSession, user_id: str, profile_data: TechProfileUpsert
    ) -> TechProfile:
        """
        Create or update the profile of a staff user.

        Args:
            db: Database session
            user_id: Owning staff user ID
            profile_data: Fields to set; unset fields keep their stored value

        Returns:
            The stored profile
        """
        changes = profile_data.model_dump(exclude_unset=True)
        for column in _REQUIRED_COLUMNS:
            if changes.get(column, True) is None:
                del changes[column]
        existing = await TechProfileCRUD.find_by_user_id(db, user_id)

        if existing:
            changes["updated_at"] = utc_now()
            return await TechProfileCRUD.update(db, id_value=existing.id, obj_in=changes)

        values = {key: value for key, value in changes.items() if value is not None}
        logger.info(f"Creating tech profile for user {user_id}")
        return await TechProfileCRUD.create(db, obj_in={"user_id": user_id, **values})
