# conference_api/geocoding.py

"""
Reverse geocoding used to derive a conference's city from its coordinates.

A failed lookup never fails the caller: ``city_for`` logs the problem and
returns ``None`` so the conference is stored without a city.
"""

import logging
from typing import Optional

import httpx
from redis.exceptions import RedisError

from conference_api.cache import get_redis_client
from conference_api.config import get_settings
from conference_api.errors import ExternalDependencyDegraded

logger = logging.getLogger(__name__)

CITY_KEYS = ("city", "town", "village")


class ReverseGeocoder:
    def __init__(
        self,
        url: str,
        timeout: float = 5.0,
        user_agent: str = "conference-api",
        cache=None,
        cache_ttl: int = 86400,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.timeout = timeout
        self.user_agent = user_agent
        self.cache = cache
        self.cache_ttl = cache_ttl
        self._transport = transport

    @staticmethod
    def cache_key(latitude: float, longitude: float) -> str:
        return f"city:{latitude:.4f}:{longitude:.4f}"

    async def city_for(self, latitude: float, longitude: float) -> Optional[str]:
        key = self.cache_key(latitude, longitude)
        cached = await self._cache_get(key)
        if cached:
            return cached

        try:
            city = await self.lookup(latitude, longitude)
        except ExternalDependencyDegraded as e:
            logger.warning("Reverse geocoding failed for (%s, %s): %s", latitude, longitude, e)
            return None

        if city:
            await self._cache_set(key, city)
        return city

    async def lookup(self, latitude: float, longitude: float) -> Optional[str]:
        params = {
            "format": "json",
            "lat": latitude,
            "lon": longitude,
            "addressdetails": 1,
        }
        headers = {"User-Agent": self.user_agent}
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.url, params=params, headers=headers)
                response.raise_for_status()
                data = response.json()
        except (httpx.HTTPError, ValueError) as e:
            raise ExternalDependencyDegraded(str(e)) from e

        address = data.get("address") if isinstance(data, dict) else None
        if not isinstance(address, dict):
            return None
        for key in CITY_KEYS:
            if address.get(key):
                return address[key]
        return None

    async def _cache_get(self, key: str) -> Optional[str]:
        if self.cache is None:
            return None
        try:
            return await self.cache.get(key)
        except RedisError as e:
            logger.warning("Geocoding cache read failed: %s", e)
            return None

    async def _cache_set(self, key: str, city: str) -> None:
        if self.cache is None:
            return
        try:
            await self.cache.set(key, city, ex=self.cache_ttl)
        except RedisError as e:
            logger.warning("Geocoding cache write failed: %s", e)


class DisabledGeocoder:
    async def city_for(self, latitude: float, longitude: float) -> Optional[str]:
        return None


def get_geocoder():
    settings = get_settings()
    if not settings.GEOCODING_ENABLED:
        return DisabledGeocoder()
    return ReverseGeocoder(
        url=settings.GEOCODING_URL,
        timeout=settings.GEOCODING_TIMEOUT,
        user_agent=settings.GEOCODING_USER_AGENT,
        cache=get_redis_client(),
        cache_ttl=settings.GEOCODING_CACHE_TTL,
    )
