"""
Test fixtures for workout-scheduler-api.

Provides a pinned clock, sample plans and mock prediction services so the
scheduler can be exercised offline and deterministically.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Make src/ importable so tests can do `import workout_scheduler_api...`
for p in {ROOT, SRC}:
    p_str = str(p)
    if p_str not in sys.path:
        sys.path.insert(0, p_str)

from workout_scheduler_api.clients.base import DayDescriptor, GeneratedWeek, Recommendation
from workout_scheduler_api.clock import Clock
from workout_scheduler_api.models import UserProfile, WeeklyPlan

from factories import DAY_LABELS, WEEK_START, make_plan, sample_detail


# ---------------------------------------------------------------------------
# Core fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def clock() -> Clock:
    """Clock pinned to the Sunday the test week starts on."""
    return Clock(override=WEEK_START.isoformat())


@pytest.fixture
def profile() -> UserProfile:
    return UserProfile(
        current_weight=75,
        target_weight=70,
        height=1.75,
        age=30,
        fat_percentage=20,
        avg_duration=1.0,
        avg_calories=500,
        goal="lose_weight",
        gender="Male",
        days_ahead=30,
    )


@pytest.fixture
def plan() -> WeeklyPlan:
    return make_plan()


# ---------------------------------------------------------------------------
# Prediction service mocks
# ---------------------------------------------------------------------------


@pytest.fixture
def generated_week() -> GeneratedWeek:
    """Six training days and a Saturday rest day."""
    week_plan = [DayDescriptor(day=label, workout="Strength", duration=1.0) for label in DAY_LABELS[:6]]
    week_plan.append(DayDescriptor(day="Saturday", workout="Rest", duration=0))
    return GeneratedWeek(user_id="user-1", goal="lose_weight", ai_recommended="Strength", week_plan=week_plan)


@pytest.fixture
def services(generated_week) -> MagicMock:
    """One mock standing in for all three prediction services."""
    mock = MagicMock()
    mock.generate_week = AsyncMock(return_value=generated_week)
    mock.daily_workout = AsyncMock(side_effect=lambda profile, day_offset: sample_detail(day_offset))
    mock.recommend = AsyncMock(
        return_value=Recommendation(recommended_workout="Cycling", duration_hours=0.5, confidence=0.8)
    )
    return mock
