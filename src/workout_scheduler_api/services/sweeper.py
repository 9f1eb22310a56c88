"""Periodic scan that turns elapsed pending days into missed days."""
import asyncio
import logging
from typing import Callable, List, Optional

from workout_scheduler_api.clock import Clock
from workout_scheduler_api.config import settings
from workout_scheduler_api.services.plan_state import PlanState
from workout_scheduler_api.services.status_engine import is_overdue, miss_day

logger = logging.getLogger(__name__)

PromptCallback = Callable[[str], None]
SweepCallback = Callable[[List[str]], None]


class MissedDaySweeper:
    """
    Flags overdue days on a fixed interval.

    A sweep only ever moves ``pending -> missed`` and is a no-op when no day
    has elapsed. If the day matching today is among the newly missed, the
    ``on_missed_today`` callback receives its id after ``prompt_delay``
    seconds so the new status can be shown before the reconfiguration prompt.
    ``on_swept`` receives the ids of every pass that changed something,
    whether it came from a timer tick or a direct call.
    """

    def __init__(
        self,
        state: PlanState,
        clock: Clock,
        on_missed_today: Optional[PromptCallback] = None,
        interval: Optional[float] = None,
        prompt_delay: Optional[float] = None,
        on_swept: Optional[SweepCallback] = None,
    ):
        self.state = state
        self.clock = clock
        self.on_missed_today = on_missed_today
        self.on_swept = on_swept
        self.interval = interval if interval is not None else settings.SWEEP_INTERVAL_SECONDS
        self.prompt_delay = (
            prompt_delay if prompt_delay is not None else settings.RECONFIGURE_PROMPT_DELAY_SECONDS
        )
        self._task: Optional[asyncio.Task] = None

    def sweep(self) -> List[str]:
        """Run one pass. Returns the ids of the days that became missed."""
        plan = self.state.plan
        if plan is None:
            return []

        now = self.clock.now()
        newly_missed = [day for day in plan.days if is_overdue(day, now)]
        for day in newly_missed:
            miss_day(day)

        if not newly_missed:
            return []

        missed_ids = [day.id for day in newly_missed]
        logger.info(f"Sweep marked {len(missed_ids)} day(s) missed: {missed_ids}")
        if self.on_swept is not None:
            self.on_swept(missed_ids)
        today = self.clock.today()
        for day in newly_missed:
            if day.date == today:
                self._schedule_prompt(day.id)
                break
        return missed_ids

    def _schedule_prompt(self, day_id: str) -> None:
        if self.on_missed_today is None:
            return
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            self.on_missed_today(day_id)
            return
        loop.call_later(self.prompt_delay, self.on_missed_today, day_id)

    async def run(self) -> None:
        while True:
            self.sweep()
            await asyncio.sleep(self.interval)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> asyncio.Task:
        if not self.running:
            self._task = asyncio.create_task(self.run())
            logger.info(f"Sweeper started (every {self.interval:.0f}s)")
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
        logger.info("Sweeper stopped")
