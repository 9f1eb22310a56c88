"""Contracts for the external prediction services the scheduler consumes."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from workout_scheduler_api.models import REST_LABEL, UserProfile


class PlanServiceError(RuntimeError):
    """Raised when a prediction service call fails."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class ServicePayloadError(PlanServiceError):
    """Raised when a service answers with a body we cannot use."""


# ---------------------------------------------------------------------------
# Payloads
# ---------------------------------------------------------------------------


class DayDescriptor(BaseModel):
    """One entry of a generated week skeleton."""
    day: str
    workout: str
    duration: float = 0

    model_config = ConfigDict(extra="ignore")

    @property
    def is_rest(self) -> bool:
        return self.workout == REST_LABEL or self.duration == 0


class GeneratedWeek(BaseModel):
    user_id: Optional[str] = None
    goal: Optional[str] = None
    ai_recommended: Optional[str] = None
    daily_calorie_shift: Optional[float] = None
    week_plan: List[DayDescriptor]

    model_config = ConfigDict(extra="ignore")


class DetailedExercise(BaseModel):
    name: str
    duration_min: int = Field(gt=0)
    sets: Optional[int] = None
    reps: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class WorkoutDetail(BaseModel):
    """Exercise breakdown for one day of the week."""
    exercises: List[DetailedExercise] = Field(default_factory=list)
    focus: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class Recommendation(BaseModel):
    recommended_workout: str
    duration_hours: float = Field(ge=0)
    confidence: Optional[float] = None
    explanation: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


# ---------------------------------------------------------------------------
# Services
# ---------------------------------------------------------------------------


class PlanGenerationService(ABC):
    @abstractmethod
    async def generate_week(self, profile: UserProfile) -> GeneratedWeek:
        """Return the seven-day skeleton plan for ``profile``."""
        ...


class WorkoutDetailService(ABC):
    @abstractmethod
    async def daily_workout(self, profile: UserProfile, day_offset: int) -> WorkoutDetail:
        """Return the exercise breakdown for the day ``day_offset`` into the week."""
        ...


class RecommendationService(ABC):
    @abstractmethod
    async def recommend(self, profile: UserProfile) -> Recommendation:
        """Return one recommended activity sized to ``profile.avg_duration``."""
        ...
