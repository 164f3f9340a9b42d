"""Weather resolver that routes queries between the regional and global providers."""
from __future__ import annotations

import logging
from typing import Optional

from tenki.core.abstractions import CoordinateSource, HistoryRecorder
from tenki.core.entities import CanonicalWeather
from tenki.core.exceptions import InvalidQueryError, LocationUnavailableError
from tenki.core.places import classify, normalize_for_global_provider, normalize_for_regional_provider
from tenki.core.providers.kujira import KujiraWeatherProvider
from tenki.core.providers.weatherapi import WeatherApiProvider


logger = logging.getLogger(__name__)


class WeatherResolver:
    """Resolve a place name or coordinate into a ``CanonicalWeather`` record.

    Japanese-domain text queries try the regional provider first when it has
    coverage; any regional failure is logged and the global provider answers
    instead. Global provider errors reach the caller unchanged. Nothing is
    cached and nothing is retried.
    """

    def __init__(
        self,
        *,
        global_provider: WeatherApiProvider,
        regional_provider: Optional[KujiraWeatherProvider] = None,
        regional_enabled: bool = True,
        coordinate_source: Optional[CoordinateSource] = None,
        history: Optional[HistoryRecorder] = None,
    ) -> None:
        self.global_provider = global_provider
        self.regional_provider = regional_provider
        self.regional_enabled = regional_enabled
        self.coordinate_source = coordinate_source
        self.history = history

    # Public API ---------------------------------------------------------
    async def resolve(self, query: str) -> CanonicalWeather:
        query = query.strip()
        if not query:
            raise InvalidQueryError("empty location query")

        weather = await self._try_regional(query)
        if weather is None:
            normalized = normalize_for_global_provider(query)
            logger.info("Using global provider for %s (%s)", query, normalized)
            weather = await self.global_provider.fetch_by_query(normalized, original_query=query)

        self._record(query, weather)
        return weather

    async def resolve_coordinates(self, latitude: float, longitude: float) -> CanonicalWeather:
        return await self.global_provider.fetch_by_coordinates(latitude, longitude)

    async def resolve_current_location(self) -> CanonicalWeather:
        fix = self.coordinate_source.last_known() if self.coordinate_source else None
        if fix is None:
            raise LocationUnavailableError("no known location")
        latitude, longitude = fix
        return await self.resolve_coordinates(latitude, longitude)

    # Helpers ------------------------------------------------------------
    async def _try_regional(self, query: str) -> Optional[CanonicalWeather]:
        if not self.regional_enabled or self.regional_provider is None:
            return None
        if not classify(query).is_japanese_domain:
            return None
        city_id = normalize_for_regional_provider(query)
        if not city_id:
            logger.info("No regional coverage for %s", query)
            return None

        logger.info("Japanese place detected, using regional provider (%s -> %s)", query, city_id)
        try:
            return await self.regional_provider.fetch_by_city(city_id)
        except Exception as exc:  # noqa: BLE001 - regional failures only trigger fallback
            logger.warning("Regional provider failed for %s, falling back: %s", city_id, exc)
            return None

    def _record(self, query: str, weather: CanonicalWeather) -> None:
        if self.history is None:
            return
        try:
            self.history.record(query, weather)
        except Exception as exc:  # noqa: BLE001 - history must not break a lookup
            logger.error("Failed to record search history for %s", query, exc_info=exc)


__all__ = ["WeatherResolver"]
