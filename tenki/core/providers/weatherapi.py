"""WeatherAPI.com current-conditions provider."""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, FrozenSet, Optional, Tuple

from .base import WeatherProvider
from ..abstractions import HttpGetJson
from ..entities import CanonicalWeather
from ..exceptions import InvalidQueryError, UpstreamDataError
from ..places import classify


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LocationCorrection:
    """Identity override for a Japanese place the provider geocodes abroad."""

    query_substring: str
    misdetected_countries: FrozenSet[str]
    name: str
    region: str
    country: str
    tz_id: str


# WeatherAPI resolves 八尾 to Bát Nông, Vietnam.
LOCATION_CORRECTIONS: Tuple[LocationCorrection, ...] = (
    LocationCorrection(
        query_substring="八尾",
        misdetected_countries=frozenset({"ベトナム", "Vietnam"}),
        name="八尾市",
        region="大阪府",
        country="日本",
        tz_id="Asia/Tokyo",
    ),
)


class WeatherApiProvider(WeatherProvider):
    name = "weatherapi"
    base_url = "https://api.weatherapi.com/v1/current.json"

    def __init__(
        self,
        transport: HttpGetJson,
        *,
        api_key: str,
        base_url: Optional[str] = None,
        lang: str = "ja",
    ) -> None:
        super().__init__(transport)
        self.api_key = api_key
        self.base_url = base_url or self.base_url
        self.lang = lang

    # Public API ---------------------------------------------------------
    async def fetch_by_coordinates(self, latitude: float, longitude: float) -> CanonicalWeather:
        return await self._fetch(f"{latitude},{longitude}")

    async def fetch_by_query(self, query: str, original_query: Optional[str] = None) -> CanonicalWeather:
        """Fetch current weather for a normalized place name.

        ``original_query`` is the text the user typed; it drives the postal
        code guard and the location correction table. Defaults to ``query``.
        """
        original = query if original_query is None else original_query
        if not query or not query.strip():
            raise InvalidQueryError("empty location query")
        if classify(query).is_postal_code or classify(original).is_postal_code:
            self._log.info("Postal code search is not supported: %s", original)
            raise InvalidQueryError(f"postal code search is not supported: {original}")
        weather = await self._fetch(query)
        corrected = apply_location_corrections(original, weather)
        self._log.info("Resolved %s to %s, %s, %s", original, corrected.name, corrected.region, corrected.country)
        return corrected

    # Helpers ------------------------------------------------------------
    async def _fetch(self, q: str) -> CanonicalWeather:
        params = {"key": self.api_key, "q": q, "lang": self.lang}
        payload = await self._get_json(self.base_url, params=params)
        return self._decode(payload)

    def _decode(self, payload: Any) -> CanonicalWeather:
        try:
            location = payload["location"]
            current = payload["current"]
            condition = current["condition"]
            return CanonicalWeather(
                name=str(location["name"]),
                region=str(location["region"]),
                country=str(location["country"]),
                lat=float(location["lat"]),
                lon=float(location["lon"]),
                tz_id=str(location["tz_id"]),
                localtime_epoch=int(location["localtime_epoch"]),
                localtime=str(location["localtime"]),
                last_updated_epoch=int(current["last_updated_epoch"]),
                last_updated=str(current["last_updated"]),
                temp_c=float(current["temp_c"]),
                temp_f=float(current["temp_f"]),
                is_day=int(current["is_day"]),
                condition_text=str(condition["text"]),
                condition_icon=str(condition["icon"]),
                condition_code=int(condition["code"]),
                wind_kph=float(current["wind_kph"]),
                wind_degree=int(current["wind_degree"]),
                wind_dir=str(current["wind_dir"]),
                pressure_mb=float(current["pressure_mb"]),
                precip_mm=float(current["precip_mm"]),
                humidity=int(current["humidity"]),
                cloud=int(current["cloud"]),
                feelslike_c=float(current["feelslike_c"]),
                feelslike_f=float(current["feelslike_f"]),
                vis_km=float(current["vis_km"]),
                uv=float(current["uv"]),
                gust_kph=float(current["gust_kph"]),
                source=self.name,
            )
        except (KeyError, TypeError, ValueError) as exc:
            self._log.error("Unexpected WeatherAPI payload", exc_info=exc)
            raise UpstreamDataError("unexpected payload shape") from exc


def apply_location_corrections(query: str, weather: CanonicalWeather) -> CanonicalWeather:
    """Override the identity of known mis-geocoded Japanese places.

    Coordinates, timestamps and readings are kept as returned.
    """
    if not classify(query).is_japanese_domain:
        return weather
    for correction in LOCATION_CORRECTIONS:
        if weather.country in correction.misdetected_countries and correction.query_substring in query:
            logger.info(
                "Correcting location %s, %s to %s, %s",
                weather.name,
                weather.country,
                correction.name,
                correction.country,
            )
            return replace(
                weather,
                name=correction.name,
                region=correction.region,
                country=correction.country,
                tz_id=correction.tz_id,
            )
    return weather


__all__ = ["LOCATION_CORRECTIONS", "LocationCorrection", "WeatherApiProvider", "apply_location_corrections"]
