"""API routes for the weekly plan."""
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from pydantic import BaseModel, Field

from workout_scheduler_api.api.views import plan_view
from workout_scheduler_api.catalog import find_replacement, replacement_options
from workout_scheduler_api.clients.base import PlanServiceError
from workout_scheduler_api.models import Exercise, UserProfile
from workout_scheduler_api.services.plan_controller import PlanController
from workout_scheduler_api.services.redistribution import ReconfigurationError, ReconfigurationResult
from workout_scheduler_api.utils import new_exercise_id


router = APIRouter()

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class ReconfigureRequest(BaseModel):
    use_assistance: bool = True


class ClockOverrideRequest(BaseModel):
    date: str


class ExerciseInput(BaseModel):
    id: Optional[str] = None
    name: str
    duration: int = Field(gt=0)
    sets: Optional[int] = None
    reps: Optional[int] = None


class ReplaceExerciseRequest(BaseModel):
    """Either pick a stock exercise by ``catalog_id`` or describe one."""
    catalog_id: Optional[str] = None
    exercise: Optional[ExerciseInput] = None


# ---------------------------------------------------------------------------
# Dependencies and helpers
# ---------------------------------------------------------------------------


def get_controller(request: Request) -> PlanController:
    return request.app.state.controller


def _require_plan(controller: PlanController) -> None:
    if controller.plan is None:
        raise HTTPException(status_code=404, detail="No plan loaded")


def _require_idle(controller: PlanController) -> None:
    if controller.busy:
        raise HTTPException(status_code=409, detail="Plan is being updated, try again shortly")


def _view(controller: PlanController) -> Dict[str, Any]:
    return plan_view(controller.state, controller.clock.today())


def _result(changed: bool, controller: PlanController) -> Dict[str, Any]:
    return {"changed": changed, **_view(controller)}


def _reconfiguration_payload(result: Optional[ReconfigurationResult]) -> Optional[Dict[str, Any]]:
    if result is None:
        return None
    return {
        "day_id": result.day_id,
        "placed": [exercise.model_dump() for exercise in result.placed],
        "dropped": result.dropped,
        "cancelled": result.cancelled,
    }


# ---------------------------------------------------------------------------
# Plan
# ---------------------------------------------------------------------------


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/plan")
def get_plan(controller: PlanController = Depends(get_controller)):
    return _view(controller)


@router.post("/plan/load")
async def load_plan(profile: UserProfile, controller: PlanController = Depends(get_controller)):
    """Generate a new plan for ``profile``; replaces the current plan wholesale."""
    _require_idle(controller)
    try:
        await controller.load_initial_plan(profile)
    except PlanServiceError as e:
        raise HTTPException(status_code=502, detail=f"Failed to load plan: {e}")
    return _view(controller)


@router.post("/plan/resume")
def resume_plan(
    profile: Optional[UserProfile] = None,
    controller: PlanController = Depends(get_controller),
):
    _require_idle(controller)
    if controller.resume_saved_plan(profile) is None:
        raise HTTPException(status_code=404, detail="No saved plan")
    return _view(controller)


@router.delete("/plan/prompt")
def dismiss_prompt(controller: PlanController = Depends(get_controller)):
    controller.dismiss_prompt()
    return _view(controller)


# ---------------------------------------------------------------------------
# Day actions
# ---------------------------------------------------------------------------


@router.post("/plan/days/{day_id}/complete")
def complete_day(day_id: str, controller: PlanController = Depends(get_controller)):
    _require_plan(controller)
    _require_idle(controller)
    return _result(controller.mark_day_completed(day_id), controller)


@router.post("/plan/days/{day_id}/missed")
def miss_day(day_id: str, controller: PlanController = Depends(get_controller)):
    _require_plan(controller)
    _require_idle(controller)
    return _result(controller.mark_day_missed(day_id), controller)


@router.post("/plan/days/{day_id}/unavailable")
def make_day_unavailable(day_id: str, controller: PlanController = Depends(get_controller)):
    _require_plan(controller)
    _require_idle(controller)
    return _result(controller.mark_day_unavailable(day_id), controller)


@router.post("/plan/days/{day_id}/reconfigure")
async def reconfigure_day(
    day_id: str,
    payload: Optional[ReconfigureRequest] = None,
    controller: PlanController = Depends(get_controller),
):
    _require_plan(controller)
    _require_idle(controller)
    use_assistance = payload.use_assistance if payload else True
    try:
        result = await controller.request_reconfiguration(day_id, use_assistance)
    except ReconfigurationError as e:
        raise HTTPException(
            status_code=502,
            detail={"message": str(e), "placed": e.placed, "dropped": e.dropped},
        )
    return {
        "changed": result is not None,
        "reconfiguration": _reconfiguration_payload(result),
        **_view(controller),
    }


# ---------------------------------------------------------------------------
# Exercise edits
# ---------------------------------------------------------------------------


@router.get("/replacements")
def list_replacements() -> List[Dict[str, Any]]:
    return [exercise.model_dump() for exercise in replacement_options()]


@router.delete("/plan/days/{day_id}/exercises/{exercise_id}")
def remove_exercise(day_id: str, exercise_id: str, controller: PlanController = Depends(get_controller)):
    _require_plan(controller)
    _require_idle(controller)
    return _result(controller.remove_exercise(day_id, exercise_id), controller)


@router.put("/plan/days/{day_id}/exercises/{exercise_id}")
def replace_exercise(
    day_id: str,
    exercise_id: str,
    payload: ReplaceExerciseRequest,
    controller: PlanController = Depends(get_controller),
):
    _require_plan(controller)
    _require_idle(controller)

    if payload.catalog_id:
        new_exercise = find_replacement(payload.catalog_id)
        if new_exercise is None:
            raise HTTPException(status_code=400, detail=f"Unknown replacement: {payload.catalog_id}")
    elif payload.exercise:
        data = payload.exercise.model_dump()
        data["id"] = data["id"] or new_exercise_id("custom")
        new_exercise = Exercise(**data)
    else:
        raise HTTPException(status_code=400, detail="Provide catalog_id or exercise")

    replacement = controller.replace_exercise(day_id, exercise_id, new_exercise)
    return {
        "changed": replacement is not None,
        "replacement": replacement.model_dump() if replacement else None,
        **_view(controller),
    }


# ---------------------------------------------------------------------------
# Debug clock
# ---------------------------------------------------------------------------


@router.put("/debug/clock")
def set_clock(payload: ClockOverrideRequest, controller: PlanController = Depends(get_controller)):
    """Simulate any day: the plan runs as if it were ``payload.date``."""
    try:
        missed = controller.set_clock_override(payload.date)
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid date: {payload.date}")
    return {"newly_missed": missed, **_view(controller)}


@router.delete("/debug/clock")
def reset_clock(controller: PlanController = Depends(get_controller)):
    missed = controller.clear_clock_override()
    return {"newly_missed": missed, **_view(controller)}
