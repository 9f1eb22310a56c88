"""Prediction API clients for the workout scheduler."""
from .base import (
    DayDescriptor,
    DetailedExercise,
    GeneratedWeek,
    PlanGenerationService,
    PlanServiceError,
    Recommendation,
    RecommendationService,
    ServicePayloadError,
    WorkoutDetail,
    WorkoutDetailService,
)
from .http_services import HttpPlanServices
from .retry import create_async_retrying, is_retryable_error

__all__ = [
    "DayDescriptor",
    "DetailedExercise",
    "GeneratedWeek",
    "HttpPlanServices",
    "PlanGenerationService",
    "PlanServiceError",
    "Recommendation",
    "RecommendationService",
    "ServicePayloadError",
    "WorkoutDetail",
    "WorkoutDetailService",
    "create_async_retrying",
    "is_retryable_error",
]
