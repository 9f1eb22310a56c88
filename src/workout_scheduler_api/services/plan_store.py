"""Optional persistence of the session plan."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from workout_scheduler_api.models import WeeklyPlan

logger = logging.getLogger(__name__)


class PlanStore(ABC):
    """Somewhere a plan can outlive the session."""

    @abstractmethod
    def load(self) -> Optional[WeeklyPlan]:
        ...

    @abstractmethod
    def save(self, plan: WeeklyPlan) -> bool:
        ...


class JsonFilePlanStore(PlanStore):
    """Keeps the current plan as a JSON document on disk.

    Reads and writes are best effort: a missing or corrupt file reads as no
    plan, and a failed write is logged and reported as False.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def load(self) -> Optional[WeeklyPlan]:
        if not self.path.exists():
            return None
        try:
            plan = WeeklyPlan.model_validate_json(self.path.read_text(encoding="utf-8"))
        except (OSError, ValidationError) as e:
            logger.warning(f"Ignoring unreadable plan file {self.path}: {e}")
            return None
        logger.debug(f"Loaded plan {plan.id} from {self.path}")
        return plan

    def save(self, plan: WeeklyPlan) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(plan.model_dump_json(indent=2), encoding="utf-8")
        except OSError as e:
            logger.error(f"Plan save error for {self.path}: {e}")
            return False
        return True
