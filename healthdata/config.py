"""Load .env and settings.yaml, expose all configuration."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator

log = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parent.parent

MINUTE = 60
HOUR = 60 * MINUTE
DAY = 24 * HOUR


def _load_env() -> None:
    env_path = PROJECT_ROOT / ".env"
    load_dotenv(env_path)


def _load_yaml() -> dict:
    settings_path = PROJECT_ROOT / "settings.yaml"
    if settings_path.exists():
        try:
            with open(settings_path) as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError:
            log.warning("Failed to parse settings.yaml, using defaults")
            return {}
    return {}


class Settings(BaseModel):
    openweather_api_key: str = ""

    @field_validator("openweather_api_key")
    @classmethod
    def strip_api_key(cls, v: str) -> str:
        return v.strip()

    # Cache TTLs in seconds, one per data domain.
    weather_cache_ttl: float = 30 * MINUTE
    food_cache_ttl: float = DAY
    education_cache_ttl: float = 7 * DAY
    global_health_cache_ttl: float = DAY
    cache_cleanup_interval: float = MINUTE

    http_timeout: float = 10.0
    rate_limit_requests: int = 10
    rate_limit_period: float = 1.0

    # New York, used when a caller has no location.
    default_latitude: float = 40.7128
    default_longitude: float = -74.0060

    @field_validator(
        "weather_cache_ttl",
        "food_cache_ttl",
        "education_cache_ttl",
        "global_health_cache_ttl",
        "cache_cleanup_interval",
        "http_timeout",
        "rate_limit_period",
    )
    @classmethod
    def must_be_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("must be positive")
        return v

    @field_validator("rate_limit_requests")
    @classmethod
    def requests_must_be_positive(cls, v: int) -> int:
        if v < 1:
            raise ValueError("must be at least 1")
        return v

    @property
    def has_weather_key(self) -> bool:
        return bool(self.openweather_api_key)


def load_settings() -> Settings:
    _load_env()
    raw = _load_yaml()
    raw["openweather_api_key"] = os.getenv("OPENWEATHER_API_KEY", "")
    return Settings(**raw)
