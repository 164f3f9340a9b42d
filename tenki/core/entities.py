from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Dict


def celsius_to_fahrenheit(value: float) -> float:
    return value * 9 / 5 + 32


def fahrenheit_to_celsius(value: float) -> float:
    return (value - 32) * 5 / 9


_LOCATION_FIELDS = ("name", "region", "country", "lat", "lon", "tz_id", "localtime_epoch", "localtime")


@dataclass(frozen=True)
class CanonicalWeather:
    """Normalized current-weather record returned by every provider.

    Field names follow the WeatherAPI.com vocabulary so the global provider
    decodes without conversion:
    - temperatures in Celsius and Fahrenheit (always a consistent pair)
    - wind and gust speed in kilometres per hour (kph)
    - pressure in millibar (mb)
    - precipitation in millimetres (mm), visibility in kilometres (km)

    Every field is mandatory. Providers that lack a reading fill it with a
    documented default instead of leaving it empty.
    """

    name: str
    region: str
    country: str
    lat: float
    lon: float
    tz_id: str
    localtime_epoch: int
    localtime: str
    last_updated_epoch: int
    last_updated: str
    temp_c: float
    temp_f: float
    is_day: int
    condition_text: str
    condition_icon: str
    condition_code: int
    wind_kph: float
    wind_degree: int
    wind_dir: str
    pressure_mb: float
    precip_mm: float
    humidity: int
    cloud: int
    feelslike_c: float
    feelslike_f: float
    vis_km: float
    uv: float
    gust_kph: float
    source: str

    def as_dict(self) -> Dict[str, Any]:
        """Render the record in the nested ``location``/``current`` shape."""
        flat = asdict(self)
        location = {key: flat.pop(key) for key in _LOCATION_FIELDS}
        source = flat.pop("source")
        flat["condition"] = {
            "text": flat.pop("condition_text"),
            "icon": flat.pop("condition_icon"),
            "code": flat.pop("condition_code"),
        }
        return {"location": location, "current": flat, "source": source}


__all__ = ["CanonicalWeather", "celsius_to_fahrenheit", "fahrenheit_to_celsius"]
