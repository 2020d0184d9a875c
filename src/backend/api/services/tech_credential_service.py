"""
Tech credential service: certifications, skills and service completions.

All three record types belong to a tech profile; certifications and skills
are removed with their profile, completions are kept.
"""
import logging
from typing import Any, Dict, Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import (
    ServiceCompletionCreate,
    ServiceCompletionUpdate,
    TechCertificationCreate,
    TechCertificationUpdate,
    TechSkillCreate,
    TechSkillUpdate,
)
from core.decorators import (
    critical_database_operation,
    log_database_operation,
    transactional_database_operation,
)
from crud import ServiceCompletionCRUD, TechCertificationCRUD, TechSkillCRUD
from db import ServiceCompletion, TechCertification, TechSkill

logger = logging.getLogger(__name__)


def _drop_nulls(values: Dict[str, Any], required: Iterable[str]) -> Dict[str, Any]:
    """Remove explicit nulls aimed at NOT NULL columns."""
    for column in required:
        if values.get(column, True) is None:
            del values[column]
    return values


class TechCredentialService:
    """Service for a technician's certifications, skills and completions."""

    # ------------------------------------------------------------------
    # Certifications
    # ------------------------------------------------------------------

    @staticmethod
    @critical_database_operation("list_certifications")
    async def list_certifications(
        db: AsyncSession, tech_profile_id: int
    ) -> List[TechCertification]:
        """Certifications of a profile, most recently issued first."""
        return await TechCertificationCRUD.find_by_profile(db, tech_profile_id)

    @staticmethod
    @transactional_database_operation("create_certification")
    @log_database_operation("certification creation", level="debug")
    async def create_certification(
        db: AsyncSession, data: TechCertificationCreate
    ) -> TechCertification:
        return await TechCertificationCRUD.create(db, obj_in=data.model_dump())

    @staticmethod
    @transactional_database_operation("update_certification")
    async def update_certification(
        db: AsyncSession, certification_id: int, data: TechCertificationUpdate
    ) -> Optional[TechCertification]:
        values = _drop_nulls(
            data.model_dump(exclude_unset=True), ("name", "issuing_organization")
        )
        return await TechCertificationCRUD.update(
            db, id_value=certification_id, obj_in=values
        )

    @staticmethod
    @transactional_database_operation("delete_certification")
    async def delete_certification(db: AsyncSession, certification_id: int) -> bool:
        return await TechCertificationCRUD.delete(db, id_value=certification_id)

    # ------------------------------------------------------------------
    # Skills
    # ------------------------------------------------------------------

    @staticmethod
    @critical_database_operation("list_skills")
    async def list_skills(db: AsyncSession, tech_profile_id: int) -> List[TechSkill]:
        """Skills of a profile, ordered by category then name."""
        return await TechSkillCRUD.find_by_profile(db, tech_profile_id)

    @staticmethod
    @transactional_database_operation("create_skill")
    @log_database_operation("skill creation", level="debug")
    async def create_skill(db: AsyncSession, data: TechSkillCreate) -> TechSkill:
        return await TechSkillCRUD.create(db, obj_in=data.model_dump())

    @staticmethod
    @transactional_database_operation("update_skill")
    async def update_skill(
        db: AsyncSession, skill_id: int, data: TechSkillUpdate
    ) -> Optional[TechSkill]:
        values = _drop_nulls(data.model_dump(exclude_unset=True), ("name", "verified"))
        return await TechSkillCRUD.update(db, id_value=skill_id, obj_in=values)

    @staticmethod
    @transactional_database_operation("delete_skill")
    async def delete_skill(db: AsyncSession, skill_id: int) -> bool:
        return await TechSkillCRUD.delete(db, id_value=skill_id)

    # ------------------------------------------------------------------
    # Service completions
    # ------------------------------------------------------------------

    @staticmethod
    @critical_database_operation("list_completions")
    async def list_completions(
        db: AsyncSession, tech_profile_id: int
    ) -> List[ServiceCompletion]:
        """Completions of a profile, most recent first."""
        return await ServiceCompletionCRUD.find_by_profile(db, tech_profile_id)

    @staticmethod
    @transactional_database_operation("create_completion")
    @log_database_operation("service completion creation", level="debug")
    async def create_completion(
        db: AsyncSession, data: ServiceCompletionCreate
    ) -> ServiceCompletion:
        # completed_at falls back to the column default when omitted
        values = data.model_dump()
        if values.get("completed_at") is None:
            values.pop("completed_at", None)
        return await ServiceCompletionCRUD.create(db, obj_in=values)

    @staticmethod
    @transactional_database_operation("update_completion")
    async def update_completion(
        db: AsyncSession, completion_id: int, data: ServiceCompletionUpdate
    ) -> Optional[ServiceCompletion]:
        values = data.model_dump(exclude_unset=True)
        if values.get("completed_at", True) is None:
            del values["completed_at"]
        return await ServiceCompletionCRUD.update(
            db, id_value=completion_id, obj_in=values
        )

    @staticmethod
    @transactional_database_operation("delete_completion")
    async def delete_completion(db: AsyncSession, completion_id: int) -> bool:
        return await ServiceCompletionCRUD.delete(db, id_value=completion_id)
