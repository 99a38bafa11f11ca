"""Async httpx wrapper with rate limiting and error mapping."""

from __future__ import annotations

import asyncio
import time
from collections import deque
from typing import Any

import httpx

from healthdata.errors import handle_error


class RateLimiter:
    """Sliding-window limiter: at most ``max_requests`` per ``period`` seconds."""

    def __init__(self, max_requests: int = 10, period: float = 1.0) -> None:
        self.max_requests = max_requests
        self.period = period
        self._sent: deque[float] = deque()
        self._lock = asyncio.Lock()

    async def acquire(self) -> None:
        async with self._lock:
            while True:
                now = time.monotonic()
                while self._sent and now - self._sent[0] >= self.period:
                    self._sent.popleft()
                if len(self._sent) < self.max_requests:
                    self._sent.append(now)
                    return
                await asyncio.sleep(self.period - (now - self._sent[0]))


class HealthAPIClient:
    """Async HTTP client shared by all upstream lookups."""

    def __init__(
        self,
        timeout: float = 10.0,
        rate_limiter: RateLimiter | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        kwargs: dict[str, Any] = {
            "timeout": timeout,
            "headers": {"Accept": "application/json"},
        }
        if transport is not None:
            kwargs["transport"] = transport
        self._client = httpx.AsyncClient(**kwargs)
        self._limiter = rate_limiter or RateLimiter()

    async def close(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``url`` and return decoded JSON. Raises APIError on failure."""
        await self._limiter.acquire()
        try:
            response = await self._client.get(url, params=params)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise handle_error(exc, f"GET {url}") from exc
