"""Shared test fixtures."""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock

import pytest

from healthdata.api.models import FoodEntry, HealthProfile, Weather
from healthdata.config import Settings
from healthdata.services.caches import CacheRegistry
from healthdata.services.data_service import HealthDataService


@pytest.fixture
def settings() -> Settings:
    return Settings(openweather_api_key="test_key")


@pytest.fixture
def caches(settings):
    registry = CacheRegistry.from_settings(settings)
    yield registry
    registry.stop_cleanup()


@pytest.fixture
def mock_client():
    return AsyncMock()


@pytest.fixture
def service(settings, mock_client, caches) -> HealthDataService:
    return HealthDataService(settings=settings, client=mock_client, caches=caches)


@pytest.fixture
def clear_weather() -> Weather:
    return Weather(temperature=22, condition="clear", description="clear sky")


@pytest.fixture
def rainy_weather() -> Weather:
    return Weather(temperature=12, condition="rain", description="light rain")


@pytest.fixture
def diabetic_profile() -> HealthProfile:
    return HealthProfile(
        medical_conditions=["Type 2 Diabetes"],
        activity_level="sedentary",
        country="us",
    )


@pytest.fixture
def week_of_entries() -> list[FoodEntry]:
    """Three high-carb, low-fiber days."""
    return [
        _entry("Pasta", date(2026, 3, 1), carbs=180, fiber=4),
        _entry("Rice bowl", date(2026, 3, 2), carbs=170, fiber=3),
        _entry("Pancakes", date(2026, 3, 3), carbs=160, fiber=2),
    ]


def _entry(name: str, day: date, *, carbs: float, fiber: float) -> FoodEntry:
    return FoodEntry(
        name=name,
        date=day,
        meal_type="lunch",
        portion="1 plate",
        calories=600,
        carbs=carbs,
        protein=20,
        fat=15,
        fiber=fiber,
    )
