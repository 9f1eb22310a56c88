"""httpx implementation of the prediction API contracts."""
import logging
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from workout_scheduler_api.clients.base import (
    GeneratedWeek,
    PlanGenerationService,
    PlanServiceError,
    Recommendation,
    RecommendationService,
    ServicePayloadError,
    WorkoutDetail,
    WorkoutDetailService,
)
from workout_scheduler_api.clients.retry import DEFAULT_MIN_WAIT_SECONDS, create_async_retrying
from workout_scheduler_api.config import settings
from workout_scheduler_api.models import UserProfile

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)

PLAN_WEEK_PATH = "/plan-week"
DAILY_WORKOUT_PATH = "/workout/daily-workout"
RECOMMEND_PATH = "/recommend-ml"


def _parse(model: Type[M], data: Any, label: str) -> M:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise ServicePayloadError(f"{label} API returned a malformed payload: {e}") from e


def _first_entry(data: Any, key: str, label: str) -> Any:
    entries = data.get(key) if isinstance(data, dict) else None
    if not isinstance(entries, list) or not entries:
        raise ServicePayloadError(f"{label} API response has no '{key}' list")
    return entries[0]


class HttpPlanServices(PlanGenerationService, WorkoutDetailService, RecommendationService):
    """Talks to the prediction API over HTTP.

    One instance serves all three contracts; each call opens its own client
    and is retried on transient failures.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_attempts: Optional[int] = None,
        min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
        max_wait_seconds: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url or settings.BACKEND_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT_SECONDS
        self.max_attempts = max_attempts or settings.SERVICE_MAX_ATTEMPTS
        self.min_wait_seconds = min_wait_seconds
        self.max_wait_seconds = max_wait_seconds
        self._transport = transport

    async def generate_week(self, profile: UserProfile) -> GeneratedWeek:
        data = await self._post_json(PLAN_WEEK_PATH, profile.model_dump(), "Plan")
        return _parse(GeneratedWeek, _first_entry(data, "plans", "Plan"), "Plan")

    async def daily_workout(self, profile: UserProfile, day_offset: int) -> WorkoutDetail:
        payload = {"user": profile.model_dump(), "day_offset": day_offset}
        data = await self._post_json(DAILY_WORKOUT_PATH, payload, "Workout")
        return _parse(WorkoutDetail, data, "Workout")

    async def recommend(self, profile: UserProfile) -> Recommendation:
        data = await self._post_json(RECOMMEND_PATH, profile.model_dump(), "ML")
        return _parse(Recommendation, _first_entry(data, "recommendations", "ML"), "ML")

    async def _post_json(self, path: str, payload: Dict[str, Any], label: str) -> Any:
        url = f"{self.base_url}{path}"
        retrying = create_async_retrying(
            max_attempts=self.max_attempts,
            min_wait_seconds=self.min_wait_seconds,
            max_wait_seconds=self.max_wait_seconds,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                        response = await client.post(url, json=payload)
                    if response.status_code >= 400:
                        raise PlanServiceError(
                            f"{label} API error: {response.status_code}",
                            status_code=response.status_code,
                        )
                    try:
                        return response.json()
                    except ValueError as e:
                        raise ServicePayloadError(f"{label} API returned invalid JSON") from e
        except httpx.HTTPError as e:
            logger.warning(f"{label} API request to {url} failed: {e}")
            raise PlanServiceError(f"{label} API request failed: {e}") from e
        raise PlanServiceError(f"{label} API gave no response")
