"""Single source of "now" for the scheduler.

Every "is this the active day" and "has this day's window elapsed" check goes
through a Clock. Setting a debug override date makes the whole plan run as if
it were that day (at local midnight), which is how the scheduler is
time-travelled in development and tests.
"""
import logging
from datetime import date, datetime
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class Clock:
    """Wall clock with an optional debug date override."""

    def __init__(
        self,
        override: Optional[str] = None,
        source: Callable[[], datetime] = datetime.now,
    ):
        self._source = source
        self._override: Optional[date] = None
        if override:
            self.set_override(override)

    @property
    def override(self) -> Optional[date]:
        return self._override

    def set_override(self, value: str) -> None:
        """Drive the clock from an ISO date string (``YYYY-MM-DD``).

        Raises:
            ValueError: If the string is not a valid ISO date
        """
        parsed = date.fromisoformat(value.strip())
        self._override = parsed
        logger.info(f"Clock override set to {parsed.isoformat()}")

    def clear_override(self) -> None:
        if self._override is not None:
            logger.info("Clock override cleared, using wall clock")
        self._override = None

    def now(self) -> datetime:
        if self._override is not None:
            return datetime.combine(self._override, datetime.min.time())
        return self._source()

    def today(self) -> date:
        return self.now().date()
