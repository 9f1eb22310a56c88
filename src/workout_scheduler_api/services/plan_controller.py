"""User-facing plan operations."""
import asyncio
import logging
from typing import Callable, List, Optional

from workout_scheduler_api.clients.base import (
    PlanGenerationService,
    PlanServiceError,
    RecommendationService,
    WorkoutDetail,
    WorkoutDetailService,
)
from workout_scheduler_api.clock import Clock
from workout_scheduler_api.config import settings
from workout_scheduler_api.models import DayPlan, DayStatus, Exercise, UserProfile, WeeklyPlan
from workout_scheduler_api.services.plan_builder import build_weekly_plan
from workout_scheduler_api.services.plan_state import PlanState
from workout_scheduler_api.services.plan_store import PlanStore
from workout_scheduler_api.services.redistribution import (
    ReconfigurationError,
    ReconfigurationResult,
    redistribute_simple,
    redistribute_with_recommendations,
)
from workout_scheduler_api.services.status_engine import (
    InvalidTransitionError,
    can_transition,
    complete_day,
    make_unavailable,
    miss_day,
)
from workout_scheduler_api.services.sweeper import MissedDaySweeper
from workout_scheduler_api.utils import new_exercise_id, week_start_for

logger = logging.getLogger(__name__)

REPLACEMENT_ID_PREFIX = "repl"


class PlanController:
    """
    Facade over the plan, the status engine, redistribution and the sweeper.

    Operations naming a day or exercise that does not exist (or a rest day)
    are silent no-ops: a redistribution may legitimately have removed the
    target before the user's action arrived. Mutating operations return
    whether anything changed.

    While a service call is outstanding ``busy`` is True; callers are
    expected to hold back other mutations until it clears.
    """

    def __init__(
        self,
        plan_service: PlanGenerationService,
        detail_service: WorkoutDetailService,
        recommendation_service: RecommendationService,
        clock: Optional[Clock] = None,
        state: Optional[PlanState] = None,
        store: Optional[PlanStore] = None,
        user_id: Optional[str] = None,
        sweep_interval: Optional[float] = None,
        prompt_delay: Optional[float] = None,
    ):
        self.plan_service = plan_service
        self.detail_service = detail_service
        self.recommendation_service = recommendation_service
        self.clock = clock or Clock(override=settings.DEBUG_DATE_OVERRIDE)
        self.state = state or PlanState()
        self.store = store
        self.user_id = user_id or settings.DEFAULT_USER_ID
        self.sweeper = MissedDaySweeper(
            self.state,
            self.clock,
            on_missed_today=self._raise_prompt,
            interval=sweep_interval,
            prompt_delay=prompt_delay,
            on_swept=self._on_swept,
        )

    @property
    def plan(self) -> Optional[WeeklyPlan]:
        return self.state.plan

    @property
    def busy(self) -> bool:
        return self.state.busy

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_initial_plan(self, profile: UserProfile) -> WeeklyPlan:
        """
        Generate a fresh plan for ``profile`` and make it the session plan.

        The week skeleton is fetched first, then each day's workout detail,
        one call at a time. The previous plan stays in place if any call
        fails.

        Raises:
            PlanServiceError: If a service call fails or returns a bad payload
        """
        self.state.busy = True
        try:
            week = await self.plan_service.generate_week(profile)
            details: List[WorkoutDetail] = []
            for offset in range(len(week.week_plan)):
                details.append(await self.detail_service.daily_workout(profile, offset))
            plan = build_weekly_plan(
                week,
                details,
                week_start=week_start_for(self.clock.today()),
                user_id=self.user_id,
            )
        except PlanServiceError as e:
            logger.error(f"Failed to load plan: {e}")
            raise
        finally:
            self.state.busy = False

        self.state.plan = plan
        self.state.profile = profile
        self.state.reconfigure_prompt = None
        self.sweeper.sweep()
        self._save()
        return plan

    def resume_saved_plan(self, profile: Optional[UserProfile] = None) -> Optional[WeeklyPlan]:
        """Restore the plan kept in the store, if one is wired in and holds a plan."""
        if self.store is None:
            return None
        plan = self.store.load()
        if plan is None:
            return None
        self.state.plan = plan
        if profile is not None:
            self.state.profile = profile
        self.state.reconfigure_prompt = None
        logger.info(f"Resumed saved plan {plan.id}")
        self.sweeper.sweep()
        return plan

    # ------------------------------------------------------------------
    # Day status
    # ------------------------------------------------------------------

    def mark_day_completed(self, day_id: str) -> bool:
        return self._apply(day_id, complete_day)

    def mark_day_missed(self, day_id: str) -> bool:
        return self._apply(day_id, miss_day)

    def mark_day_unavailable(self, day_id: str) -> bool:
        return self._make_unavailable(day_id) is not None

    # ------------------------------------------------------------------
    # Exercise edits
    # ------------------------------------------------------------------

    def remove_exercise(self, day_id: str, exercise_id: str) -> bool:
        day = self._find_day(day_id)
        if day is None:
            return False
        exercise = day.find_exercise(exercise_id)
        if exercise is None:
            logger.debug(f"Remove skipped: no exercise {exercise_id} on {day_id}")
            return False
        day.exercises.remove(exercise)
        self._after_mutation()
        return True

    def replace_exercise(self, day_id: str, exercise_id: str, new_exercise: Exercise) -> Optional[Exercise]:
        """
        Swap an exercise in place, keeping its position in the day.

        The replacement starts not completed. It keeps its own id unless that
        id is already used elsewhere in the plan.

        Returns:
            The exercise now in the plan, or None if nothing was replaced
        """
        day = self._find_day(day_id)
        if day is None:
            return None
        for index, exercise in enumerate(day.exercises):
            if exercise.id == exercise_id:
                break
        else:
            logger.debug(f"Replace skipped: no exercise {exercise_id} on {day_id}")
            return None

        taken = self.state.plan.exercise_ids() - {exercise_id}
        replacement_id = new_exercise.id
        if replacement_id in taken:
            replacement_id = new_exercise_id(REPLACEMENT_ID_PREFIX)
        replacement = new_exercise.model_copy(update={"id": replacement_id, "completed": False})
        day.exercises[index] = replacement
        self._after_mutation()
        return replacement

    # ------------------------------------------------------------------
    # Reconfiguration
    # ------------------------------------------------------------------

    async def request_reconfiguration(
        self,
        day_id: str,
        use_assistance: bool,
        cancel_event: Optional[asyncio.Event] = None,
    ) -> Optional[ReconfigurationResult]:
        """
        Take ``day_id`` out of the week and redistribute its exercises.

        Without assistance the exercises move as they are. With assistance
        each one is swapped for a recommended activity of the same length;
        if a recommendation fails the work already done is kept and
        ReconfigurationError is raised.

        Returns:
            What was placed, or None when the request was a no-op
        """
        if not use_assistance:
            return self._make_unavailable(day_id)

        day = self._find_day(day_id)
        if day is None:
            return None
        if not can_transition(day, DayStatus.UNAVAILABLE):
            logger.warning(f"Day {day_id} is {day.status.value}; nothing to reconfigure")
            return None
        if self.state.profile is None:
            raise ReconfigurationError("No user profile available for recommendations")

        plan = self.state.plan
        self.state.busy = True
        try:
            result = await redistribute_with_recommendations(
                plan,
                day_id,
                self.state.profile,
                self.recommendation_service,
                today=self.clock.today(),
                cancel_event=cancel_event,
            )
        finally:
            self.state.busy = False
            self._clear_prompt_for(day_id)
            self._after_mutation()
        return result

    # ------------------------------------------------------------------
    # Clock and prompts
    # ------------------------------------------------------------------

    def set_clock_override(self, value: str) -> List[str]:
        """Time-travel to ``value`` (YYYY-MM-DD) and sweep. Returns newly missed day ids."""
        self.clock.set_override(value)
        return self.sweeper.sweep()

    def clear_clock_override(self) -> List[str]:
        self.clock.clear_override()
        return self.sweeper.sweep()

    def dismiss_prompt(self) -> None:
        self.state.reconfigure_prompt = None

    def _raise_prompt(self, day_id: str) -> None:
        logger.info(f"Offering reconfiguration for missed day {day_id}")
        self.state.reconfigure_prompt = day_id

    def _clear_prompt_for(self, day_id: str) -> None:
        if self.state.reconfigure_prompt == day_id:
            self.state.reconfigure_prompt = None

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _find_day(self, day_id: str) -> Optional[DayPlan]:
        plan = self.state.plan
        if plan is None:
            logger.debug(f"No plan loaded; ignoring action on {day_id}")
            return None
        day = plan.find_day(day_id)
        if day is None:
            logger.debug(f"No day {day_id} in plan {plan.id}")
            return None
        if day.is_rest_day:
            logger.debug(f"Day {day_id} is a rest day; ignoring")
            return None
        return day

    def _apply(self, day_id: str, action: Callable[[DayPlan], bool]) -> bool:
        day = self._find_day(day_id)
        if day is None:
            return False
        try:
            changed = action(day)
        except InvalidTransitionError as e:
            logger.warning(str(e))
            return False
        if changed:
            self._after_mutation()
        return changed

    def _make_unavailable(self, day_id: str) -> Optional[ReconfigurationResult]:
        day = self._find_day(day_id)
        if day is None or day.status == DayStatus.UNAVAILABLE:
            return None
        try:
            evacuated = make_unavailable(day)
        except InvalidTransitionError as e:
            logger.warning(str(e))
            return None
        moved = redistribute_simple(self.state.plan, self.clock.today(), displaced=evacuated)
        # moved may also hold exercises left over on other unavailable days
        evacuated_ids = {exercise.id for exercise in evacuated}
        placed = [exercise for exercise in moved if exercise.id in evacuated_ids]
        self._clear_prompt_for(day_id)
        self._after_mutation()
        return ReconfigurationResult(day_id=day_id, placed=placed, dropped=len(evacuated) - len(placed))

    def _after_mutation(self) -> None:
        plan = self.state.plan
        if plan is None:
            return
        plan.refresh_completed_count()
        redistribute_simple(plan, self.clock.today())
        self._save()

    def _on_swept(self, missed_day_ids: List[str]) -> None:
        self._save()

    def _save(self) -> None:
        if self.store is not None and self.state.plan is not None:
            self.store.save(self.state.plan)
