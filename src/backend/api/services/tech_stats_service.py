"""
Tech stats service: read-time summary of a technician's completions.

Nothing is cached or maintained incrementally; every call folds over the
full completion history.
"""
import logging
import math
from typing import Any, Dict, Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from api.schemas.tech import CategoryCount, TechStats
from core.decorators import critical_database_operation, log_database_operation
from crud import ServiceCompletionCRUD
from db import ServiceCompletion

logger = logging.getLogger(__name__)


def _hours(value: Any) -> float:
    """Hours worked as a float; missing or unparseable values count as 0."""
    if value is None:
        return 0.0
    try:
        hours = float(value)
    except (TypeError, ValueError):
        return 0.0
    return hours if math.isfinite(hours) else 0.0


def summarize_completions(completions: Iterable[ServiceCompletion]) -> TechStats:
    """
    Fold completion rows into a TechStats summary.

    - total_hours sums hours_worked, counting missing values as 0
    - average_rating averages only the completions that carry a rating and
      is 0 when none do
    - categories counts completions per category in first-seen order,
      skipping completions without a category
    """
    total_completions = 0
    total_hours = 0.0
    ratings = []
    category_counts: Dict[str, int] = {}

    for completion in completions:
        total_completions += 1
        total_hours += _hours(completion.hours_worked)

        rating: Optional[int] = completion.client_satisfaction_rating
        if rating:
            ratings.append(rating)

        if completion.category:
            category_counts[completion.category] = (
                category_counts.get(completion.category, 0) + 1
            )

    return TechStats(
        total_completions=total_completions,
        total_hours=total_hours,
        average_rating=sum(ratings) / len(ratings) if ratings else 0.0,
        categories=[
            CategoryCount(category=category, count=count)
            for category, count in category_counts.items()
        ],
    )


class TechStatsService:
    """Service for technician statistics."""

    @staticmethod
    @critical_database_operation("compute_tech_stats")
    @log_database_operation("tech stats computation", level="debug")
    async def compute_stats(db: AsyncSession, tech_profile_id: int) -> TechStats:
        completions = await ServiceCompletionCRUD.find_by_profile(db, tech_profile_id)
        return summarize_completions(completions)
