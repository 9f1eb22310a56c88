"""Plain-data views of the plan for the presentation layer."""
from datetime import date
from typing import Any, Dict

from workout_scheduler_api.models import DayPlan, DayStatus
from workout_scheduler_api.services.plan_state import PlanState
from workout_scheduler_api.services.status_engine import can_transition

_STATUS_MESSAGES = {
    DayStatus.COMPLETED: "Great job!",
    DayStatus.MISSED: "Day missed. Reconfigure?",
    DayStatus.UNAVAILABLE: "Day marked unavailable",
    DayStatus.PENDING: "Mark complete when done",
}


def day_message(day: DayPlan, today: date) -> str:
    if day.is_rest_day:
        return "Rest Day"
    if day.date != today:
        return "Actions available on this day only"
    return _STATUS_MESSAGES[day.status]


def day_actions(day: DayPlan, today: date) -> Dict[str, bool]:
    """Which actions the UI offers for ``day``. Only the active day gets any."""
    active = day.date == today and not day.is_rest_day
    pending = day.status == DayStatus.PENDING
    return {
        "complete": active and pending,
        "cant_train": active and pending,
        "reconfigure": active and day.status == DayStatus.MISSED,
        "edit_exercises": active and can_transition(day, DayStatus.COMPLETED),
    }


def day_view(day: DayPlan, today: date) -> Dict[str, Any]:
    data = day.model_dump(mode="json")
    data["is_today"] = day.date == today
    data["message"] = day_message(day, today)
    data["actions"] = day_actions(day, today)
    return data


def plan_view(state: PlanState, today: date) -> Dict[str, Any]:
    plan = state.plan
    if plan is None:
        return {"plan": None, "busy": state.busy, "reconfigure_prompt": None, "today": today.isoformat()}
    return {
        "plan": {
            "id": plan.id,
            "user_id": plan.user_id,
            "week_start": plan.week_start.isoformat(),
            "total_planned_workouts": plan.total_planned_workouts,
            "completed_workouts": plan.completed_workouts,
            "progress_percent": plan.progress_percent(),
            "days": [day_view(day, today) for day in plan.days],
        },
        "busy": state.busy,
        "reconfigure_prompt": state.reconfigure_prompt,
        "today": today.isoformat(),
    }
