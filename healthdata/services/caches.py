"""One ExpiringCache per data domain, built from Settings."""

from __future__ import annotations

import logging

from healthdata.config import Settings
from healthdata.services.cache import ExpiringCache

log = logging.getLogger(__name__)

DOMAINS = ("weather", "food", "education", "global_health")


class CacheRegistry:
    """Owns the per-domain caches and their sweep lifecycle."""

    def __init__(
        self,
        weather: ExpiringCache,
        food: ExpiringCache,
        education: ExpiringCache,
        global_health: ExpiringCache,
    ) -> None:
        self.weather = weather
        self.food = food
        self.education = education
        self.global_health = global_health

    @classmethod
    def from_settings(cls, settings: Settings) -> CacheRegistry:
        return cls(
            weather=ExpiringCache(settings.weather_cache_ttl, name="weather"),
            food=ExpiringCache(settings.food_cache_ttl, name="food"),
            education=ExpiringCache(settings.education_cache_ttl, name="education"),
            global_health=ExpiringCache(
                settings.global_health_cache_ttl, name="global_health"
            ),
        )

    def __iter__(self):
        return iter(self.all())

    def all(self) -> list[ExpiringCache]:
        return [getattr(self, domain) for domain in DOMAINS]

    def get_domain(self, domain: str) -> ExpiringCache:
        if domain not in DOMAINS:
            raise KeyError(f"Unknown cache domain: {domain}")
        return getattr(self, domain)

    def start_cleanup(self, interval: float) -> None:
        for cache in self.all():
            cache.start_cleanup(interval)
        log.debug("Started cache sweeps every %ss", interval)

    def stop_cleanup(self) -> None:
        for cache in self.all():
            cache.stop_cleanup()

    def clear(self) -> None:
        for cache in self.all():
            cache.clear()
