"""Kujira weekly-forecast provider (Japan only).

The provider answers with forecast-shaped data keyed by Japanese city name,
so the adapter synthesizes a current-conditions record from today's entry
and fills everything the forecast lacks with neutral defaults.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional, Tuple

from .base import WeatherProvider, _safe_float
from ..abstractions import HttpGetJson
from ..entities import CanonicalWeather, celsius_to_fahrenheit
from ..exceptions import UpstreamDataError


logger = logging.getLogger(__name__)

JST = timezone(timedelta(hours=9), "JST")

METADATA_KEY = "mkdate"
DEFAULT_CITY = "東京"
DEFAULT_TEMPERATURE_C = 20.0

# Neutral readings for everything a forecast entry does not carry.
DEFAULT_REGION = "日本"
DEFAULT_COUNTRY = "日本"
DEFAULT_LAT = 35.6812
DEFAULT_LON = 139.7671
DEFAULT_TZ_ID = "Asia/Tokyo"
DEFAULT_WIND_KPH = 0.0
DEFAULT_WIND_DEGREE = 0
DEFAULT_WIND_DIR = "N"
DEFAULT_PRESSURE_MB = 1000.0
DEFAULT_PRECIP_MM = 0.0
DEFAULT_HUMIDITY = 50
DEFAULT_CLOUD = 0
DEFAULT_VIS_KM = 10.0
DEFAULT_UV = 0.0
DEFAULT_GUST_KPH = 0.0

DAYTIME_HOURS = range(6, 18)

_ICON_URL = "//cdn.weatherapi.com/weather/64x64/day/{}.png"

# (words, icon number, condition code), checked in order against the whole text
_EXACT_CONDITIONS: Tuple[Tuple[Tuple[str, ...], int, int], ...] = (
    (("晴", "晴れ", "快晴", "はれ"), 113, 1000),
    (("曇", "曇り", "くもり"), 119, 1003),
    (("雨", "小雨", "あめ"), 308, 1063),
    (("大雨",), 308, 1195),
    (("雪", "小雪", "ゆき"), 326, 1066),
    (("大雪",), 326, 1225),
    (("霧", "霞", "もや"), 248, 1030),
    (("雷", "雷雨", "かみなり"), 389, 1087),
)

# (required substrings, icon number, condition code) for mixed forecasts like 晴時々曇
_COMBINED_CONDITIONS: Tuple[Tuple[Tuple[str, ...], int, int], ...] = (
    (("晴", "曇"), 116, 1003),
    (("晴", "雨"), 176, 1063),
    (("曇", "雨"), 266, 1063),
)

_FALLBACK_CONDITION = (119, 1003)

_ENTRY_FIELDS = ("date", "forecast", "mintemp", "maxtemp", "poptimes", "waves", "winds")


@dataclass(frozen=True)
class RegionalForecastEntry:
    date: str
    forecast: str
    mintemp: str
    maxtemp: str
    poptimes: str
    waves: str
    winds: str
    weathers: Optional[str] = None


@dataclass(frozen=True)
class RegionalCatalog:
    mkdate: str
    cities: Mapping[str, List[RegionalForecastEntry]]


def map_condition(text: str) -> Tuple[str, int]:
    """Return the icon reference and condition code for a Japanese weather word."""
    for words, icon, code in _EXACT_CONDITIONS:
        if text in words:
            return _ICON_URL.format(icon), code
    for required, icon, code in _COMBINED_CONDITIONS:
        if all(part in text for part in required):
            return _ICON_URL.format(icon), code
    icon, code = _FALLBACK_CONDITION
    return _ICON_URL.format(icon), code


def _decode_entry(raw: Any) -> Optional[RegionalForecastEntry]:
    if not isinstance(raw, dict):
        return None
    values = {key: raw.get(key) for key in _ENTRY_FIELDS}
    if not all(isinstance(value, str) for value in values.values()):
        return None
    weathers = raw.get("weathers")
    if weathers is not None and not isinstance(weathers, str):
        return None
    return RegionalForecastEntry(weathers=weathers, **values)


def _decode_entries(raw: Any) -> Optional[List[RegionalForecastEntry]]:
    if not isinstance(raw, list):
        return None
    entries = [_decode_entry(item) for item in raw]
    if any(entry is None for entry in entries):
        return None
    return entries


def decode_catalog(payload: Any, now: Optional[datetime] = None) -> RegionalCatalog:
    """Decode a Kujira payload whose keys are city names known only at runtime.

    Every key except ``mkdate`` is treated as a city. Cities whose value is
    not a list of well-formed day objects are skipped.
    """
    if not isinstance(payload, dict):
        raise UpstreamDataError("unexpected payload type")
    error = payload.get("error")
    if isinstance(error, str):
        logger.error("Kujira reported an error: %s", error)
        raise UpstreamDataError(error)

    mkdate = payload.get(METADATA_KEY)
    if not isinstance(mkdate, str):
        mkdate = (now or datetime.now(tz=JST)).isoformat()

    cities: Dict[str, List[RegionalForecastEntry]] = {}
    for key, value in payload.items():
        if key == METADATA_KEY:
            continue
        entries = _decode_entries(value)
        if entries is None:
            logger.warning("Skipping undecodable city %s", key)
            continue
        cities[key] = entries
    return RegionalCatalog(mkdate=mkdate, cities=cities)


def select_forecast(catalog: RegionalCatalog, city_id: str) -> Optional[Tuple[str, RegionalForecastEntry]]:
    """Pick today's entry for ``city_id``, the default city or the first usable city."""
    for candidate in (city_id, DEFAULT_CITY):
        entries = catalog.cities.get(candidate)
        if entries:
            return candidate, entries[0]
    for name, entries in catalog.cities.items():
        if entries:
            return name, entries[0]
    return None


class KujiraWeatherProvider(WeatherProvider):
    name = "kujira"
    base_url = "https://api.aoikujira.com/tenki/week.php"

    def __init__(
        self,
        transport: HttpGetJson,
        base_url: Optional[str] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        super().__init__(transport)
        self.base_url = base_url or self.base_url
        self.clock = clock or (lambda: datetime.now(tz=JST))

    # Public API ---------------------------------------------------------
    async def fetch_by_city(self, city_id: str) -> CanonicalWeather:
        self._log.info("Requesting Kujira forecast for %s", city_id)
        payload = await self._get_json(self.base_url, params={"city": city_id, "fmt": "json"})
        now = self._now()
        catalog = decode_catalog(payload, now=now)
        return self.to_weather(catalog, city_id, now=now)

    def to_weather(self, catalog: RegionalCatalog, city_id: str, now: Optional[datetime] = None) -> CanonicalWeather:
        now = now or self._now()
        selected = select_forecast(catalog, city_id)
        if selected is None:
            self._log.warning("No usable Kujira data for %s, returning placeholder", city_id)
            return self._dummy(city_id, now)
        name, entry = selected
        if name != city_id:
            self._log.info("Kujira has no forecast for %s, using %s", city_id, name)
        temp_c = _safe_float(entry.maxtemp)
        if temp_c is None:
            temp_c = DEFAULT_TEMPERATURE_C
        icon, code = map_condition(entry.forecast)
        return self._build(
            name,
            now,
            temp_c=temp_c,
            text=entry.forecast,
            icon=icon,
            code=code,
            is_day=1 if now.hour in DAYTIME_HOURS else 0,
        )

    # Helpers ------------------------------------------------------------
    def _now(self) -> datetime:
        now = self.clock()
        if now.tzinfo is None:
            return now.replace(tzinfo=JST)
        return now.astimezone(JST)

    def _dummy(self, city_id: str, now: datetime) -> CanonicalWeather:
        icon, code = map_condition("晴れ")
        return self._build(city_id, now, temp_c=DEFAULT_TEMPERATURE_C, text="晴れ", icon=icon, code=code, is_day=1)

    def _build(
        self,
        name: str,
        now: datetime,
        *,
        temp_c: float,
        text: str,
        icon: str,
        code: int,
        is_day: int,
    ) -> CanonicalWeather:
        epoch = int(now.timestamp())
        stamp = now.strftime("%Y-%m-%d %H:%M")
        temp_f = celsius_to_fahrenheit(temp_c)
        return CanonicalWeather(
            name=name,
            region=DEFAULT_REGION,
            country=DEFAULT_COUNTRY,
            lat=DEFAULT_LAT,
            lon=DEFAULT_LON,
            tz_id=DEFAULT_TZ_ID,
            localtime_epoch=epoch,
            localtime=stamp,
            last_updated_epoch=epoch,
            last_updated=stamp,
            temp_c=temp_c,
            temp_f=temp_f,
            is_day=is_day,
            condition_text=text,
            condition_icon=icon,
            condition_code=code,
            wind_kph=DEFAULT_WIND_KPH,
            wind_degree=DEFAULT_WIND_DEGREE,
            wind_dir=DEFAULT_WIND_DIR,
            pressure_mb=DEFAULT_PRESSURE_MB,
            precip_mm=DEFAULT_PRECIP_MM,
            humidity=DEFAULT_HUMIDITY,
            cloud=DEFAULT_CLOUD,
            feelslike_c=temp_c,
            feelslike_f=temp_f,
            vis_km=DEFAULT_VIS_KM,
            uv=DEFAULT_UV,
            gust_kph=DEFAULT_GUST_KPH,
            source=self.name,
        )


__all__ = [
    "KujiraWeatherProvider",
    "RegionalCatalog",
    "RegionalForecastEntry",
    "decode_catalog",
    "map_condition",
    "select_forecast",
]
