"""Data models for the weekly workout plan."""
import datetime as dt
from enum import Enum
from typing import List, Literal, Optional, Set

from pydantic import BaseModel, ConfigDict, Field, model_validator

Goal = Literal["lose_weight", "gain_muscle", "maintain"]
Gender = Literal["Male", "Female"]

DAYS_PER_WEEK = 7
REST_LABEL = "Rest"


class DayStatus(str, Enum):
    """Lifecycle of a training day. Rest days stay at PENDING and never move."""
    PENDING = "pending"
    COMPLETED = "completed"
    MISSED = "missed"
    UNAVAILABLE = "unavailable"


class UserProfile(BaseModel):
    """Profile sent to the prediction API."""
    current_weight: float
    target_weight: float
    height: float
    age: int
    fat_percentage: float
    avg_duration: float  # hours
    avg_calories: float
    goal: Goal
    gender: Gender
    days_ahead: Optional[int] = 30

    model_config = ConfigDict(extra="ignore")

    def with_session_minutes(self, minutes: int) -> "UserProfile":
        """Copy of the profile asking for sessions of ``minutes`` length."""
        return self.model_copy(update={"avg_duration": minutes / 60})


class Exercise(BaseModel):
    """A single exercise scheduled on a day."""
    id: str
    name: str
    duration: int = Field(gt=0)  # minutes
    sets: Optional[int] = None
    reps: Optional[int] = None
    completed: bool = False

    model_config = ConfigDict(extra="ignore")


class DayPlan(BaseModel):
    """One calendar date of the week, either a rest day or a training day."""
    id: str
    label: str
    date: dt.date
    is_rest_day: bool = False
    exercises: List[Exercise] = Field(default_factory=list)
    # Only changed through services.status_engine
    status: DayStatus = DayStatus.PENDING
    focus: Optional[str] = None

    @model_validator(mode="after")
    def _rest_day_is_empty(self) -> "DayPlan":
        if self.is_rest_day and self.exercises:
            raise ValueError(f"Rest day {self.id} cannot carry exercises")
        return self

    def find_exercise(self, exercise_id: str) -> Optional[Exercise]:
        for exercise in self.exercises:
            if exercise.id == exercise_id:
                return exercise
        return None


class WeeklyPlan(BaseModel):
    """
    A seven-day plan for one user.

    ``total_planned_workouts`` is fixed when the plan is built (number of
    non-rest days) and never recomputed. ``completed_workouts`` is kept in
    step with the day statuses by ``refresh_completed_count``.
    """
    id: str
    user_id: str
    week_start: dt.date
    days: List[DayPlan]
    total_planned_workouts: int = Field(ge=0)
    completed_workouts: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_week(self) -> "WeeklyPlan":
        if self.week_start.weekday() != 6:
            raise ValueError(f"Week must start on a Sunday, got {self.week_start.isoformat()}")
        if len(self.days) != DAYS_PER_WEEK:
            raise ValueError(f"A week has {DAYS_PER_WEEK} days, got {len(self.days)}")

        day_ids: Set[str] = set()
        exercise_ids: Set[str] = set()
        for index, day in enumerate(self.days):
            expected = self.week_start + dt.timedelta(days=index)
            if day.date != expected:
                raise ValueError(
                    f"Day {day.id} is dated {day.date.isoformat()}, expected {expected.isoformat()}"
                )
            if day.id in day_ids:
                raise ValueError(f"Duplicate day id: {day.id}")
            day_ids.add(day.id)
            for exercise in day.exercises:
                if exercise.id in exercise_ids:
                    raise ValueError(f"Duplicate exercise id: {exercise.id}")
                exercise_ids.add(exercise.id)

        if self.completed_workouts > self.total_planned_workouts:
            raise ValueError("completed_workouts cannot exceed total_planned_workouts")
        return self

    def find_day(self, day_id: str) -> Optional[DayPlan]:
        for day in self.days:
            if day.id == day_id:
                return day
        return None

    def day_for(self, date: dt.date) -> Optional[DayPlan]:
        for day in self.days:
            if day.date == date:
                return day
        return None

    def exercise_ids(self) -> Set[str]:
        return {exercise.id for day in self.days for exercise in day.exercises}

    def refresh_completed_count(self) -> int:
        self.completed_workouts = sum(1 for day in self.days if day.status == DayStatus.COMPLETED)
        return self.completed_workouts

    def progress_percent(self) -> float:
        if not self.total_planned_workouts:
            return 0.0
        return round(self.completed_workouts / self.total_planned_workouts * 100, 1)
