"""Tests for HealthDataService with injected mocks."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from healthdata.api.models import (
    EducationContent,
    FoodComposition,
    FoodItem,
    GlobalHealthStat,
)
from healthdata.config import Settings
from healthdata.errors import APIError
from healthdata.services.data_service import HealthDataService, compare_to_global

MODULE = "healthdata.services.data_service"


# ── Weather / activity ──


async def test_activity_suggestions_fetches_and_caches(service, clear_weather):
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        mock_weather.return_value = clear_weather

        first = await service.get_activity_suggestions(40.7, -74.0)
        second = await service.get_activity_suggestions(40.7, -74.0)

    assert mock_weather.await_count == 1
    assert first == second
    assert first is not second
    assert first.weather.temperature == 22
    assert [a.name for a in first.activities] == ["Walking", "Cycling", "Swimming"]
    assert service.caches.weather.get("weather_40.7_-74.0") == first


async def test_activity_suggestions_default_to_new_york(service, clear_weather):
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        mock_weather.return_value = clear_weather
        await service.get_activity_suggestions()

    args = mock_weather.await_args.args
    assert args[1:] == (40.7128, -74.0060)
    assert service.caches.weather.get("weather_40.7128_-74.006") is not None


async def test_activity_suggestions_distinct_keys_per_location(service, clear_weather, rainy_weather):
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        mock_weather.side_effect = [clear_weather, rainy_weather]
        ny = await service.get_activity_suggestions(40.7, -74.0)
        london = await service.get_activity_suggestions(51.5, -0.1)

    assert ny.weather.condition == "clear"
    assert london.weather.condition == "rain"
    assert all(a.indoor for a in london.activities)


async def test_activity_suggestions_fallback_on_failure(service):
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        mock_weather.side_effect = APIError("boom", code="server_error", status_code=500)
        result = await service.get_activity_suggestions(40.7, -74.0)

    assert result.weather.temperature == 20
    assert [a.name for a in result.activities] == ["Indoor Walking", "Home Workout"]
    # fallback is not cached
    assert service.caches.weather.get("weather_40.7_-74.0") is None


async def test_activity_suggestions_without_api_key(mock_client, caches):
    service = HealthDataService(Settings(), client=mock_client, caches=caches)
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        result = await service.get_activity_suggestions(1.0, 2.0)

    mock_weather.assert_not_awaited()
    assert result.activities[0].name == "Indoor Walking"


# ── Food ──


async def test_search_food_caches_by_normalized_query(service):
    apple = FoodItem(name="Apple juice", calories=46, carbs=11)
    with patch(f"{MODULE}.search_foods", new_callable=AsyncMock) as mock_search:
        mock_search.return_value = [apple]
        first = await service.search_food("  Apple ")
        second = await service.search_food("apple")

    assert mock_search.await_count == 1
    assert first == [apple]
    assert second == first


async def test_search_food_mutating_result_leaves_cache_intact(service):
    apple = FoodItem(name="Apple juice", calories=46, carbs=11)
    with patch(f"{MODULE}.search_foods", new_callable=AsyncMock) as mock_search:
        mock_search.return_value = [apple]
        first = await service.search_food("apple")
        first[0].calories = 0
        first.append(FoodItem(name="Injected"))

        second = await service.search_food("apple")

    assert mock_search.await_count == 1
    assert [f.name for f in second] == ["Apple juice"]
    assert second[0].calories == 46


async def test_activity_suggestions_mutating_hit_leaves_cache_intact(service, clear_weather):
    with patch(f"{MODULE}.get_current_weather", new_callable=AsyncMock) as mock_weather:
        mock_weather.return_value = clear_weather
        await service.get_activity_suggestions(40.7, -74.0)
        hit = await service.get_activity_suggestions(40.7, -74.0)
        hit.weather.temperature = -40
        hit.activities.clear()

        again = await service.get_activity_suggestions(40.7, -74.0)

    assert mock_weather.await_count == 1
    assert again.weather.temperature == 22
    assert len(again.activities) == 3


async def test_search_food_empty_result_uses_static_table(service):
    with patch(f"{MODULE}.search_foods", new_callable=AsyncMock) as mock_search:
        mock_search.return_value = []
        foods = await service.search_food("banana")

    assert [f.name for f in foods] == ["Banana"]
    assert service.caches.food.get("food_banana") == foods


async def test_search_food_failure_falls_back_without_caching(service):
    with patch(f"{MODULE}.search_foods", new_callable=AsyncMock) as mock_search:
        mock_search.side_effect = APIError("offline", code="network_error")
        foods = await service.search_food("quinoa")

    assert [f.name for f in foods] == ["Apple", "Banana", "Chicken Breast"]
    assert service.caches.food.get("food_quinoa") is None


async def test_food_composition_shares_food_cache_with_prefix(service):
    composition = FoodComposition(name="Oats")
    with patch(f"{MODULE}.get_food_composition", new_callable=AsyncMock) as mock_comp:
        mock_comp.return_value = composition
        result = await service.get_food_composition("Oats")

    assert result == composition
    assert service.caches.food.get("composition_oats") == composition
    assert service.caches.food.get("food_oats") is None


async def test_food_composition_no_match_uses_generic(service):
    with patch(f"{MODULE}.get_food_composition", new_callable=AsyncMock) as mock_comp:
        mock_comp.return_value = None
        result = await service.get_food_composition("Mystery stew")

    assert result.name == "Mystery stew"
    assert result.nutrients.calories == 100


# ── Health education ──


async def test_health_education_caches_first_entry(service):
    entry = EducationContent(title="Diabetes", summary="About diabetes")
    with patch(f"{MODULE}.get_health_education", new_callable=AsyncMock) as mock_edu:
        mock_edu.return_value = [entry, EducationContent(title="Other", summary="")]
        result = await service.get_health_education("Diabetes")
        again = await service.get_health_education("diabetes")

    assert result == entry
    assert again == entry
    assert mock_edu.await_count == 1
    assert service.caches.education.get("education_diabetes_en") == entry


async def test_health_education_language_is_part_of_key(service):
    with patch(f"{MODULE}.get_health_education", new_callable=AsyncMock) as mock_edu:
        mock_edu.side_effect = [
            [EducationContent(title="Diabetes", summary="")],
            [EducationContent(title="Diabetes (es)", summary="")],
        ]
        en = await service.get_health_education("diabetes", "en")
        es = await service.get_health_education("diabetes", "es")

    assert en.title == "Diabetes"
    assert es.title == "Diabetes (es)"


async def test_health_education_failure_serves_static_content(service):
    with patch(f"{MODULE}.get_health_education", new_callable=AsyncMock) as mock_edu:
        mock_edu.side_effect = RuntimeError("bad payload")
        diabetes = await service.get_health_education("diabetes")
        other = await service.get_health_education("sleep")

    assert diabetes.title == "Understanding Diabetes"
    assert "symptoms" in diabetes.sections
    assert other.title == "Health Information"
    assert len(service.caches.education) == 0


# ── Global health ──


async def test_global_health_compares_country_to_global(service):
    with patch(f"{MODULE}.get_indicator_value", new_callable=AsyncMock) as mock_who:
        mock_who.side_effect = [
            GlobalHealthStat(value=8.0, year=2022),
            GlobalHealthStat(value=10.0, year=2022),
        ]
        stat = await service.get_global_health("diabetes_prevalence", "us")

    assert [c.args[2] for c in mock_who.await_args_list] == ["GLOBAL", "USA"]
    assert stat.value == 10.0
    assert stat.comparison.global_average == 8.0
    assert stat.comparison.percent_difference == 25.0
    assert service.caches.global_health.get("health_diabetes_prevalence_us") == stat


async def test_global_health_unknown_country_uses_global(service):
    with patch(f"{MODULE}.get_indicator_value", new_callable=AsyncMock) as mock_who:
        mock_who.side_effect = [GlobalHealthStat(value=13.1), None]
        stat = await service.get_global_health("obesity_prevalence", "zz")

    assert stat.value == 13.1
    assert stat.comparison is None


async def test_global_health_unknown_indicator_returns_zero_record(service):
    with patch(f"{MODULE}.get_indicator_value", new_callable=AsyncMock) as mock_who:
        stat = await service.get_global_health("smoking_rate")

    mock_who.assert_not_awaited()
    assert stat.value == 0
    assert stat.comparison.global_average == 0


async def test_global_health_failure_uses_static_figures(service):
    with patch(f"{MODULE}.get_indicator_value", new_callable=AsyncMock) as mock_who:
        mock_who.side_effect = APIError("down", code="server_error", status_code=503)
        stat = await service.get_global_health("obesity_prevalence", "us")

    assert stat.value == 36.2
    assert stat.comparison.percent_difference == 176.3
    assert service.caches.global_health.get("health_obesity_prevalence_us") is None


async def test_global_health_mutating_result_leaves_cache_intact(service):
    with patch(f"{MODULE}.get_indicator_value", new_callable=AsyncMock) as mock_who:
        mock_who.side_effect = [
            GlobalHealthStat(value=8.0, year=2022),
            GlobalHealthStat(value=10.0, year=2022),
        ]
        stat = await service.get_global_health("diabetes_prevalence", "us")
        stat.comparison.percent_difference = -1

        again = await service.get_global_health("diabetes_prevalence", "us")

    assert mock_who.await_count == 2
    assert again.comparison.percent_difference == 25.0


def test_compare_to_global_zero_average():
    comparison = compare_to_global(5.0, 0)
    assert comparison.percent_difference == 0


# ── Cache control & lifecycle ──


def test_force_refresh_single_domain(service):
    service.caches.weather.set("weather_1_2", "w")
    service.caches.food.set("food_apple", "f")

    service.force_refresh("weather")

    assert service.caches.weather.get("weather_1_2") is None
    assert service.caches.food.get("food_apple") == "f"


def test_force_refresh_all(service):
    for cache in service.caches:
        cache.set("k", "v")

    service.force_refresh()

    assert all(cache.get("k") is None for cache in service.caches)


def test_force_refresh_unknown_domain(service):
    with pytest.raises(KeyError):
        service.force_refresh("weather_forecast")


async def test_context_manager_runs_sweeps_and_closes_client(service, mock_client):
    async with service:
        assert all(cache.cleanup_running for cache in service.caches)

    assert not any(cache.cleanup_running for cache in service.caches)
    mock_client.close.assert_awaited_once()
