"""Builders for plans and service payloads used across the tests."""
from datetime import date, timedelta
from typing import Dict, Iterable, List, Optional

from workout_scheduler_api.clients.base import DetailedExercise, WorkoutDetail
from workout_scheduler_api.models import DayPlan, DayStatus, Exercise, WeeklyPlan

# Sunday
WEEK_START = date(2026, 10, 18)
DAY_LABELS = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def week_day(index: int) -> date:
    return WEEK_START + timedelta(days=index)


def make_exercise(exercise_id: str, duration: int = 30, **kwargs) -> Exercise:
    name = kwargs.pop("name", f"Exercise {exercise_id}")
    return Exercise(id=exercise_id, name=name, duration=duration, **kwargs)


def make_plan(
    exercises: Optional[Dict[int, List[Exercise]]] = None,
    rest_days: Iterable[int] = (6,),
    statuses: Optional[Dict[int, DayStatus]] = None,
) -> WeeklyPlan:
    """Build a plan for WEEK_START. Training days get one exercise unless given."""
    exercises = exercises or {}
    statuses = statuses or {}
    rest = set(rest_days)
    days = []
    for index in range(7):
        if index in rest:
            day_exercises: List[Exercise] = []
        else:
            day_exercises = exercises.get(index, [make_exercise(f"ex-{index}-0")])
        days.append(
            DayPlan(
                id=f"day-{index}",
                label=DAY_LABELS[index],
                date=week_day(index),
                is_rest_day=index in rest,
                exercises=day_exercises,
                status=statuses.get(index, DayStatus.PENDING),
            )
        )
    return WeeklyPlan(
        id="week-test",
        user_id="user-1",
        week_start=WEEK_START,
        days=days,
        total_planned_workouts=7 - len(rest),
    )


def sample_detail(day_offset: int) -> WorkoutDetail:
    return WorkoutDetail(
        focus="Full Body",
        exercises=[
            DetailedExercise(name=f"Squats {day_offset}", duration_min=30, sets=3, reps=10),
            DetailedExercise(name=f"Rowing {day_offset}", duration_min=45),
        ],
    )
