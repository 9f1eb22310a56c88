"""Configuration settings for the workout scheduler API."""
import os
from typing import Literal, Optional


EnvironmentType = Literal["development", "staging", "production"]


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


class Settings:
    """Application settings."""

    # Environment
    ENVIRONMENT: EnvironmentType = "development"

    # Prediction API
    BACKEND_URL: str = "http://localhost:8000"
    REQUEST_TIMEOUT_SECONDS: float = 30.0
    SERVICE_MAX_ATTEMPTS: int = 3

    # Scheduling
    SWEEP_INTERVAL_SECONDS: float = 60.0
    RECONFIGURE_PROMPT_DELAY_SECONDS: float = 0.5
    DEBUG_DATE_OVERRIDE: Optional[str] = None

    # Session
    PLAN_STORE_PATH: Optional[str] = None
    DEFAULT_USER_ID: str = "user-1"

    def __init__(self):
        # Environment
        env = os.getenv("ENVIRONMENT", "development").lower()
        if env in ("development", "staging", "production"):
            self.ENVIRONMENT = env  # type: ignore
        else:
            self.ENVIRONMENT = "development"

        # Prediction API
        self.BACKEND_URL = os.getenv("BACKEND_URL", "http://localhost:8000").rstrip("/")
        self.REQUEST_TIMEOUT_SECONDS = _float_env("REQUEST_TIMEOUT_SECONDS", 30.0)
        self.SERVICE_MAX_ATTEMPTS = _int_env("SERVICE_MAX_ATTEMPTS", 3)

        # Scheduling
        self.SWEEP_INTERVAL_SECONDS = _float_env("SWEEP_INTERVAL_SECONDS", 60.0)
        self.RECONFIGURE_PROMPT_DELAY_SECONDS = _float_env("RECONFIGURE_PROMPT_DELAY_SECONDS", 0.5)
        self.DEBUG_DATE_OVERRIDE = os.getenv("DEBUG_DATE_OVERRIDE") or None

        # Session
        self.PLAN_STORE_PATH = os.getenv("PLAN_STORE_PATH") or None
        self.DEFAULT_USER_ID = os.getenv("DEFAULT_USER_ID", "user-1")


settings = Settings()
