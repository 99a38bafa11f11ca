"""Orchestrator: cached, fail-soft lookups over the upstream health APIs."""

from __future__ import annotations

import logging

from healthdata.api.client import HealthAPIClient, RateLimiter
from healthdata.api.endpoints import (
    WHO_COUNTRIES,
    WHO_INDICATORS,
    get_current_weather,
    get_food_composition,
    get_health_education,
    get_indicator_value,
    search_foods,
)
from healthdata.api.models import (
    ActivitySuggestions,
    EducationContent,
    FoodComposition,
    FoodItem,
    GlobalHealthStat,
    HealthComparison,
)
from healthdata.config import Settings
from healthdata.services.activity import suggest_activities
from healthdata.services.caches import CacheRegistry
from healthdata.services.fallbacks import (
    fallback_activity_suggestions,
    fallback_composition,
    fallback_education,
    fallback_foods,
    fallback_global_health,
)

log = logging.getLogger(__name__)


class HealthDataService:
    """Wraps each upstream lookup with its domain cache and a static fallback.

    A hit returns a deep copy of the cached value, so callers may mutate what
    they get back without touching the cache. A miss fetches, caches and returns. An
    upstream failure is logged and answered with static data, which is not
    cached so the next call tries upstream again.
    """

    def __init__(
        self,
        settings: Settings,
        client: HealthAPIClient | None = None,
        caches: CacheRegistry | None = None,
    ) -> None:
        self.settings = settings
        self.client = client or HealthAPIClient(
            timeout=settings.http_timeout,
            rate_limiter=RateLimiter(
                settings.rate_limit_requests, settings.rate_limit_period
            ),
        )
        self.caches = caches or CacheRegistry.from_settings(settings)

    async def __aenter__(self) -> HealthDataService:
        self.start()
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    def start(self) -> None:
        """Begin the periodic sweep on every domain cache."""
        self.caches.start_cleanup(self.settings.cache_cleanup_interval)

    async def close(self) -> None:
        self.caches.stop_cleanup()
        await self.client.close()

    # ── Weather / activity ──

    async def get_activity_suggestions(
        self, latitude: float | None = None, longitude: float | None = None
    ) -> ActivitySuggestions:
        """Activity ideas for the current weather at a location."""
        if latitude is None or longitude is None:
            latitude = self.settings.default_latitude
            longitude = self.settings.default_longitude

        cache_key = f"weather_{latitude}_{longitude}"
        cached = self.caches.weather.get(cache_key)
        if cached is not None:
            return _detached(cached)

        if not self.settings.has_weather_key:
            log.warning("No OpenWeather API key, serving fallback activities")
            return fallback_activity_suggestions()

        try:
            weather = await get_current_weather(
                self.client,
                latitude,
                longitude,
                api_key=self.settings.openweather_api_key,
            )
        except Exception:
            log.exception("Failed to fetch weather for %s,%s", latitude, longitude)
            return fallback_activity_suggestions()

        result = suggest_activities(weather)
        self.caches.weather.set(cache_key, result)
        return _detached(result)

    # ── Food ──

    async def search_food(self, query: str) -> list[FoodItem]:
        """Search foods by name. Falls back to a small static table."""
        normalized = query.strip().lower()
        cache_key = f"food_{normalized}"
        cached = self.caches.food.get(cache_key)
        if cached is not None:
            return _detached(cached)

        try:
            foods = await search_foods(self.client, normalized)
        except Exception:
            log.exception("Failed to search foods for %r", normalized)
            return fallback_foods(normalized)

        if not foods:
            foods = fallback_foods(normalized)
        self.caches.food.set(cache_key, foods)
        return _detached(foods)

    async def get_food_composition(self, food_name: str) -> FoodComposition:
        """Detailed per-100 g composition of the closest matching product."""
        normalized = food_name.strip().lower()
        cache_key = f"composition_{normalized}"
        cached = self.caches.food.get(cache_key)
        if cached is not None:
            return _detached(cached)

        try:
            composition = await get_food_composition(self.client, normalized)
        except Exception:
            log.exception("Failed to fetch composition for %r", normalized)
            return fallback_composition(food_name)

        if composition is None:
            composition = fallback_composition(food_name)
        self.caches.food.set(cache_key, composition)
        return _detached(composition)

    # ── Health education ──

    async def get_health_education(
        self, topic: str, language: str = "en"
    ) -> EducationContent:
        topic = topic.strip().lower()
        cache_key = f"education_{topic}_{language}"
        cached = self.caches.education.get(cache_key)
        if cached is not None:
            return _detached(cached)

        try:
            entries = await get_health_education(self.client, topic, language=language)
        except Exception:
            log.exception("Failed to fetch health education for %r", topic)
            return fallback_education(topic)

        content = entries[0] if entries else fallback_education(topic)
        self.caches.education.set(cache_key, content)
        return _detached(content)

    # ── Global health statistics ──

    async def get_global_health(
        self, indicator: str, country: str = "us"
    ) -> GlobalHealthStat:
        """Latest value for a WHO indicator, compared with the global average."""
        country = country.strip().lower()
        cache_key = f"health_{indicator}_{country}"
        cached = self.caches.global_health.get(cache_key)
        if cached is not None:
            return _detached(cached)

        indicator_code = WHO_INDICATORS.get(indicator)
        if indicator_code is None:
            log.warning("Unknown health indicator %r", indicator)
            return fallback_global_health(indicator, country)

        try:
            global_stat = await get_indicator_value(self.client, indicator_code, "GLOBAL")
            spatial_code = WHO_COUNTRIES.get(country, country.upper())
            stat = None
            if spatial_code != "GLOBAL":
                stat = await get_indicator_value(self.client, indicator_code, spatial_code)
        except Exception:
            log.exception("Failed to fetch %s for %s", indicator, country)
            return fallback_global_health(indicator, country)

        if stat is None:
            # No country figure: answer with the global one
            stat = global_stat
        elif global_stat is not None:
            stat.comparison = compare_to_global(stat.value, global_stat.value)
        if stat is None:
            log.warning("WHO returned no data for %s", indicator)
            return fallback_global_health(indicator, country)

        self.caches.global_health.set(cache_key, stat)
        return _detached(stat)

    # ── Cache control ──

    def force_refresh(self, domain: str | None = None) -> None:
        """Drop cached data for one domain, or all domains when None."""
        if domain is None:
            self.caches.clear()
            return
        self.caches.get_domain(domain).clear()


def _detached(value):
    if isinstance(value, list):
        return [item.model_copy(deep=True) for item in value]
    return value.model_copy(deep=True)

def compare_to_global(value: float, global_average: float) -> HealthComparison:
    if not global_average:
        return HealthComparison(global_average=global_average, percent_difference=0)
    diff = (value - global_average) / global_average * 100
    return HealthComparison(global_average=global_average, percent_difference=round(diff, 1))
