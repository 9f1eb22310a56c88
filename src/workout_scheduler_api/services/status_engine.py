"""
Day status state machine.

    pending ──complete──▶ completed
       │  └──miss──▶ missed
       │               │
       └──unavailable──┴──▶ unavailable

Nothing leads back to ``pending``. Rest days are outside the machine: every
transition on a rest day is rejected.
"""
import logging
from datetime import datetime
from typing import Dict, FrozenSet, List

from workout_scheduler_api.models import DayPlan, DayStatus, Exercise
from workout_scheduler_api.utils import end_of_day

logger = logging.getLogger(__name__)


class InvalidTransitionError(ValueError):
    """Raised when a day cannot move to the requested status."""


ALLOWED_TRANSITIONS: Dict[DayStatus, FrozenSet[DayStatus]] = {
    DayStatus.PENDING: frozenset({DayStatus.COMPLETED, DayStatus.MISSED, DayStatus.UNAVAILABLE}),
    DayStatus.MISSED: frozenset({DayStatus.UNAVAILABLE}),
    DayStatus.COMPLETED: frozenset(),
    DayStatus.UNAVAILABLE: frozenset(),
}


def can_transition(day: DayPlan, target: DayStatus) -> bool:
    if day.is_rest_day:
        return False
    return target in ALLOWED_TRANSITIONS[day.status]


def transition(day: DayPlan, target: DayStatus) -> bool:
    """
    Move ``day`` to ``target``.

    Returns:
        True if the status changed, False if the day was already in ``target``

    Raises:
        InvalidTransitionError: If the move is not part of the state machine
    """
    if day.is_rest_day:
        raise InvalidTransitionError(f"Rest day {day.id} has no status lifecycle")
    if day.status == target:
        return False
    if target not in ALLOWED_TRANSITIONS[day.status]:
        raise InvalidTransitionError(
            f"Day {day.id} cannot move from {day.status.value} to {target.value}"
        )
    logger.debug(f"Day {day.id}: {day.status.value} -> {target.value}")
    day.status = target
    return True


def complete_day(day: DayPlan) -> bool:
    """Mark the day completed and flag every exercise on it as done."""
    changed = transition(day, DayStatus.COMPLETED)
    if changed:
        for exercise in day.exercises:
            exercise.completed = True
    return changed


def miss_day(day: DayPlan) -> bool:
    return transition(day, DayStatus.MISSED)


def make_unavailable(day: DayPlan) -> List[Exercise]:
    """
    Mark the day unavailable and take its exercises off it.

    Returns:
        The evacuated exercises, in their original order
    """
    transition(day, DayStatus.UNAVAILABLE)
    evacuated = list(day.exercises)
    day.exercises.clear()
    return evacuated


def is_overdue(day: DayPlan, now: datetime) -> bool:
    """True when a pending training day's calendar date has fully elapsed."""
    # Millisecond resolution, so the last instant of a day still counts as that day.
    now = now.replace(microsecond=now.microsecond // 1000 * 1000)
    return (
        not day.is_rest_day
        and day.status == DayStatus.PENDING
        and now > end_of_day(day.date)
    )
