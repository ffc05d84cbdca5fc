"""
Shared fixtures: a reference clock and athlete factories.
"""
from datetime import datetime, timezone

import pytest

from scholarmatch.models.athlete import AthleteProfile, MajorCategory, SportInfo


# A Sunday
NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_athlete():
    """Factory for athletes with an empty profile unless overridden."""
    def _make(**overrides) -> AthleteProfile:
        data = {"id": "athlete-1", "first_name": "Jordan", "last_name": "Lee"}
        data.update(overrides)
        return AthleteProfile(**data)
    return _make


@pytest.fixture
def scholar_athlete(make_athlete) -> AthleteProfile:
    """Gold-tier verified football player with 5,000 followers and six deals."""
    return make_athlete(
        total_followers=5000,
        gpa=3.8,
        scholar_tier="gold",
        sport=SportInfo(name="Football"),
        enrollment_verified=True,
        sport_verified=True,
        grades_verified=True,
        deals_completed=6,
        major_category=MajorCategory(name="Business", industries=["Finance", "technology"]),
    )
