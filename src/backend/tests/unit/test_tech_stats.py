"""
Unit tests for technician statistics.

Tests:
- Empty history
- Hour totals with missing values
- Ratings average over rated completions only
- Category counts in first-seen order
"""

from decimal import Decimal

import pytest

from api.services.tech_stats_service import TechStatsService, summarize_completions
from tests.factories import ServiceCompletionFactory, TechProfileFactory, UserFactory


class TestSummarizeCompletions:
    """Tests for the pure completion fold."""

    def test_no_completions(self):
        stats = summarize_completions([])

        assert stats.total_completions == 0
        assert stats.total_hours == 0
        assert stats.average_rating == 0
        assert stats.categories == []

    def test_rating_average_ignores_unrated(self):
        completions = [
            ServiceCompletionFactory.create(
                hours_worked=Decimal("2.0"), client_satisfaction_rating=5
            ),
            ServiceCompletionFactory.create(
                hours_worked=Decimal("3.5"), client_satisfaction_rating=None
            ),
        ]

        stats = summarize_completions(completions)

        assert stats.total_completions == 2
        assert stats.total_hours == pytest.approx(5.5)
        assert stats.average_rating == 5

    def test_missing_hours_count_as_zero(self):
        completions = [
            ServiceCompletionFactory.create(hours_worked=None),
            ServiceCompletionFactory.create(hours_worked=Decimal("1.25")),
        ]

        assert summarize_completions(completions).total_hours == pytest.approx(1.25)

    def test_categories_in_first_seen_order(self):
        completions = [
            ServiceCompletionFactory.create(category="repair"),
            ServiceCompletionFactory.create(category="installation"),
            ServiceCompletionFactory.create(category=None),
            ServiceCompletionFactory.create(category="repair"),
        ]

        stats = summarize_completions(completions)

        assert [(c.category, c.count) for c in stats.categories] == [
            ("repair", 2),
            ("installation", 1),
        ]
        assert stats.total_completions == 4


class TestComputeStats:
    """Tests for stats computed from stored completions."""

    @pytest.mark.asyncio
    async def test_compute_stats_reads_only_that_profile(self, db_session):
        user = UserFactory.create()
        other_user = UserFactory.create()
        db_session.add_all([user, other_user])
        await db_session.commit()

        profile = TechProfileFactory.create(user_id=user.id)
        other_profile = TechProfileFactory.create(user_id=other_user.id)
        db_session.add_all([profile, other_profile])
        await db_session.commit()

        db_session.add_all([
            ServiceCompletionFactory.create(
                tech_profile_id=profile.id,
                hours_worked=Decimal("4.00"),
                client_satisfaction_rating=4,
            ),
            ServiceCompletionFactory.create(
                tech_profile_id=other_profile.id,
                hours_worked=Decimal("9.00"),
                client_satisfaction_rating=1,
            ),
        ])
        await db_session.commit()

        stats = await TechStatsService.compute_stats(db_session, profile.id)

        assert stats.total_completions == 1
        assert stats.total_hours == pytest.approx(4.0)
        assert stats.average_rating == 4

    @pytest.mark.asyncio
    async def test_compute_stats_unknown_profile(self, db_session):
        stats = await TechStatsService.compute_stats(db_session, 999)

        assert stats.total_completions == 0
        assert stats.categories == []
