"""Shared plan state handed to both the controller and the sweeper."""
from dataclasses import dataclass
from typing import Optional

from workout_scheduler_api.models import UserProfile, WeeklyPlan


@dataclass
class PlanState:
    """
    The one mutable plan of the session.

    All access happens on the event loop thread, so there is no lock: a
    sweep tick that lands while a reconfiguration call is outstanding applies
    to the plan as it is, and the reconfiguration result is written on top
    when the call returns.
    """
    plan: Optional[WeeklyPlan] = None
    profile: Optional[UserProfile] = None
    busy: bool = False
    reconfigure_prompt: Optional[str] = None
