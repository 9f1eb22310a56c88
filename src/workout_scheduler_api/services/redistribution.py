"""
Redistribution of exercises off days that can no longer host them.

Both variants fill the same targets: non-rest, pending days dated today or
later, taken once each in week order. When there are more displaced
exercises than targets the rest are dropped; this is best effort and not an
error.

The simple variant moves the exercises as they are. The recommendation
variant asks the recommendation service for a replacement activity of the
same length for every displaced exercise, one call at a time, so target
assignment order stays deterministic.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional

from workout_scheduler_api.clients.base import PlanServiceError, RecommendationService
from workout_scheduler_api.models import DayPlan, DayStatus, Exercise, UserProfile, WeeklyPlan
from workout_scheduler_api.services.status_engine import make_unavailable
from workout_scheduler_api.utils import hours_to_minutes, new_exercise_id

logger = logging.getLogger(__name__)

REDISTRIBUTED_ID_PREFIX = "redist"


class ReconfigurationError(RuntimeError):
    """Raised when recommendation-backed reconfiguration is abandoned."""

    def __init__(self, message: str, placed: int = 0, dropped: int = 0):
        super().__init__(message)
        self.placed = placed
        # Displaced exercises that were taken off the source day and not placed
        self.dropped = dropped


@dataclass
class ReconfigurationResult:
    day_id: str
    placed: List[Exercise] = field(default_factory=list)
    dropped: int = 0
    cancelled: bool = False


def eligible_targets(plan: WeeklyPlan, today: date) -> List[DayPlan]:
    """Days that may receive exercises, in week order."""
    return [
        day
        for day in plan.days
        if not day.is_rest_day and day.status == DayStatus.PENDING and day.date >= today
    ]


def redistribute_simple(
    plan: WeeklyPlan,
    today: date,
    displaced: Iterable[Exercise] = (),
) -> List[Exercise]:
    """
    Move exercises off unavailable days onto eligible targets, one per target.

    ``displaced`` holds exercises already taken off a day that just became
    unavailable; they go first, followed by anything still sitting on an
    unavailable day. Exercises are moved unchanged (same id).

    Returns:
        The exercises that were placed. Empty when nothing needed moving.
    """
    pending = list(displaced)
    sources = [day for day in plan.days if day.status == DayStatus.UNAVAILABLE and day.exercises]
    targets = eligible_targets(plan, today)

    if not targets:
        if pending:
            logger.warning(f"Dropped {len(pending)} exercise(s): no eligible days left this week")
        return []

    for day in sources:
        pending.extend(day.exercises)
        day.exercises.clear()
    if not pending:
        return []

    placed: List[Exercise] = []
    for target, exercise in zip(targets, pending):
        target.exercises.append(exercise)
        placed.append(exercise)
        logger.debug(f"Moved exercise {exercise.id} ({exercise.name}) to {target.id}")

    dropped = len(pending) - len(placed)
    if dropped:
        logger.warning(
            f"Dropped {dropped} exercise(s): only {len(targets)} eligible day(s) left this week"
        )
    logger.info(f"Redistributed {len(placed)} exercise(s)")
    return placed


async def redistribute_with_recommendations(
    plan: WeeklyPlan,
    day_id: str,
    profile: UserProfile,
    service: RecommendationService,
    today: date,
    cancel_event: Optional[asyncio.Event] = None,
) -> Optional[ReconfigurationResult]:
    """
    Make ``day_id`` unavailable and refill eligible days with recommended activities.

    Every displaced exercise costs one recommendation call, sized to that
    exercise's duration. Calls are issued strictly one after another. Work
    already written to the plan is kept if a call fails or the operation is
    cancelled through ``cancel_event``.

    Returns:
        The result, or None when ``day_id`` is not in the plan

    Raises:
        ReconfigurationError: If a recommendation call fails
        InvalidTransitionError: If the day cannot become unavailable
    """
    source = plan.find_day(day_id)
    if source is None:
        logger.debug(f"Reconfiguration skipped: no day {day_id}")
        return None

    displaced = make_unavailable(source)
    targets = eligible_targets(plan, today)
    result = ReconfigurationResult(day_id=day_id)

    for index, exercise in enumerate(displaced):
        if not targets:
            result.dropped = len(displaced) - index
            logger.warning(
                f"Dropped {result.dropped} exercise(s) from {day_id}: no eligible days left"
            )
            break
        if cancel_event is not None and cancel_event.is_set():
            result.cancelled = True
            result.dropped = len(displaced) - index
            logger.warning(
                f"Reconfiguration of {day_id} cancelled after {len(result.placed)} exercise(s); "
                f"dropped {result.dropped}"
            )
            break

        target = targets.pop(0)
        try:
            recommendation = await service.recommend(profile.with_session_minutes(exercise.duration))
        except PlanServiceError as e:
            logger.error(f"Recommendation failed while reconfiguring {day_id}: {e}")
            raise ReconfigurationError(
                f"Failed to reconfigure plan: {e}",
                placed=len(result.placed),
                dropped=len(displaced) - index,
            ) from e

        replacement = Exercise(
            id=new_exercise_id(REDISTRIBUTED_ID_PREFIX),
            name=recommendation.recommended_workout,
            duration=hours_to_minutes(recommendation.duration_hours),
            sets=exercise.sets,
            reps=exercise.reps,
            completed=False,
        )
        target.exercises.append(replacement)
        result.placed.append(replacement)
        logger.debug(f"Placed {replacement.name} ({replacement.duration} min) on {target.id}")

    logger.info(f"Reconfigured {day_id}: {len(result.placed)} placed, {result.dropped} dropped")
    return result
