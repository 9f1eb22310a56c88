"""Retry utilities for prediction API calls with exponential backoff."""
import logging

import httpx
from tenacity import (
    AsyncRetrying,
    before_sleep_log,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from workout_scheduler_api.clients.base import PlanServiceError, ServicePayloadError

logger = logging.getLogger(__name__)

# Default retry configuration
DEFAULT_MAX_ATTEMPTS = 3
DEFAULT_MIN_WAIT_SECONDS = 1
DEFAULT_MAX_WAIT_SECONDS = 10

RETRYABLE_STATUS_CODES = {429, 500, 502, 503, 504}


def is_retryable_error(exception: BaseException) -> bool:
    """
    Determine if an exception is retryable.

    Retryable errors include:
    - Rate limit errors (429)
    - Server errors (5xx)
    - Timeout errors
    - Connection errors

    Non-retryable errors include:
    - Client errors (4xx other than 429)
    - Malformed payloads
    """
    if isinstance(exception, ServicePayloadError):
        return False

    if isinstance(exception, PlanServiceError):
        return exception.status_code in RETRYABLE_STATUS_CODES

    if isinstance(exception, (httpx.TimeoutException, httpx.NetworkError)):
        return True

    error_str = str(exception).lower()
    exception_type = type(exception).__name__.lower()

    if "timeout" in exception_type or "timed out" in error_str:
        return True
    if "connect" in exception_type or "connection" in error_str:
        return True

    # Default: don't retry unknown errors
    return False


def create_async_retrying(
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    min_wait_seconds: float = DEFAULT_MIN_WAIT_SECONDS,
    max_wait_seconds: float = DEFAULT_MAX_WAIT_SECONDS,
) -> AsyncRetrying:
    """
    Create an async retry controller with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        min_wait_seconds: Minimum wait time between retries
        max_wait_seconds: Maximum wait time between retries

    Returns:
        An AsyncRetrying instance that re-raises the last error
    """
    return AsyncRetrying(
        retry=retry_if_exception(is_retryable_error),
        stop=stop_after_attempt(max_attempts),
        wait=wait_exponential(
            multiplier=1,
            min=min_wait_seconds,
            max=max_wait_seconds,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
