"""Turns generated week skeletons and workout details into a WeeklyPlan."""
import logging
from datetime import date, timedelta
from typing import List, Sequence

from workout_scheduler_api.clients.base import GeneratedWeek, ServicePayloadError, WorkoutDetail
from workout_scheduler_api.models import DAYS_PER_WEEK, DayPlan, Exercise, WeeklyPlan

logger = logging.getLogger(__name__)


def day_id(index: int) -> str:
    return f"day-{index}"


def initial_exercise_id(day_index: int, exercise_index: int) -> str:
    return f"ex-{day_index}-{exercise_index}"


def build_weekly_plan(
    week: GeneratedWeek,
    details: Sequence[WorkoutDetail],
    week_start: date,
    user_id: str,
) -> WeeklyPlan:
    """
    Build the plan for the week starting at ``week_start`` (a Sunday).

    A day is a rest day when the generator labels it "Rest" or gives it no
    duration; rest days keep no exercises even if the detail service sent
    some. Every training day starts pending, including days already in the
    past: flipping those to missed is the sweeper's job.

    Raises:
        ServicePayloadError: If the generator did not return exactly seven days
    """
    if len(week.week_plan) != DAYS_PER_WEEK:
        raise ServicePayloadError(
            f"Plan API returned {len(week.week_plan)} days, expected {DAYS_PER_WEEK}"
        )
    if len(details) != DAYS_PER_WEEK:
        raise ServicePayloadError(
            f"Got workout details for {len(details)} days, expected {DAYS_PER_WEEK}"
        )

    days: List[DayPlan] = []
    for index, (descriptor, detail) in enumerate(zip(week.week_plan, details)):
        is_rest = descriptor.is_rest
        exercises = []
        if not is_rest:
            exercises = [
                Exercise(
                    id=initial_exercise_id(index, ex_index),
                    name=ex.name,
                    duration=ex.duration_min,
                    sets=ex.sets,
                    reps=ex.reps,
                )
                for ex_index, ex in enumerate(detail.exercises)
            ]
        days.append(
            DayPlan(
                id=day_id(index),
                label=descriptor.day,
                date=week_start + timedelta(days=index),
                is_rest_day=is_rest,
                exercises=exercises,
                focus=detail.focus,
            )
        )

    plan = WeeklyPlan(
        id=f"week-{week_start.isoformat()}",
        user_id=user_id,
        week_start=week_start,
        days=days,
        total_planned_workouts=sum(1 for day in days if not day.is_rest_day),
    )
    logger.info(
        f"Built plan {plan.id}: {plan.total_planned_workouts} workout day(s), "
        f"{len(plan.exercise_ids())} exercise(s)"
    )
    return plan
