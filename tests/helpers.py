from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Optional, Tuple


WEATHERAPI_URL = "https://weatherapi.test/v1/current.json"
KUJIRA_URL = "https://kujira.test/tenki/week.php"


class FakeTransport:
    """Transport double returning canned bodies per URL and recording every call."""

    def __init__(self) -> None:
        self.responses: Dict[str, Tuple[int, bytes]] = {}
        self.errors: Dict[str, Exception] = {}
        self.calls: List[Tuple[str, Dict[str, Any]]] = []

    def add(self, url: str, *, json_body: Any = None, status: int = 200, body: Optional[bytes] = None) -> None:
        if body is None:
            body = json.dumps(json_body, ensure_ascii=False).encode("utf-8")
        self.responses[url] = (status, body)

    def fail(self, url: str, exc: Exception) -> None:
        self.errors[url] = exc

    def calls_to(self, url: str) -> List[Dict[str, Any]]:
        return [params for called, params in self.calls if called == url]

    async def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[int, bytes]:
        self.calls.append((url, dict(params or {})))
        if url in self.errors:
            raise self.errors[url]
        try:
            return self.responses[url]
        except KeyError:
            raise AssertionError(f"No response registered for {url}") from None


def make_weatherapi_payload(**location_overrides: Any) -> Dict[str, Any]:
    location = {
        "name": "Tokyo",
        "region": "Tokyo",
        "country": "Japan",
        "lat": 35.69,
        "lon": 139.69,
        "tz_id": "Asia/Tokyo",
        "localtime_epoch": 1713340800,
        "localtime": "2024-04-17 17:00",
    }
    location.update(location_overrides)
    return {
        "location": location,
        "current": {
            "last_updated_epoch": 1713340500,
            "last_updated": "2024-04-17 16:55",
            "temp_c": 18.0,
            "temp_f": 64.4,
            "is_day": 1,
            "condition": {"text": "晴れ", "icon": "//cdn.weatherapi.com/weather/64x64/day/113.png", "code": 1000},
            "wind_kph": 11.2,
            "wind_degree": 170,
            "wind_dir": "S",
            "pressure_mb": 1012.0,
            "precip_mm": 0.0,
            "humidity": 55,
            "cloud": 25,
            "feelslike_c": 18.0,
            "feelslike_f": 64.4,
            "vis_km": 10.0,
            "uv": 4.0,
            "gust_kph": 14.8,
        },
    }


def make_kujira_day(forecast: str = "晴れ", maxtemp: str = "22", mintemp: str = "12", **extra: Any) -> Dict[str, Any]:
    day = {
        "date": "04/17(水)",
        "forecast": forecast,
        "mintemp": mintemp,
        "maxtemp": maxtemp,
        "poptimes": "0/10/10/0",
        "waves": "0.5メートル",
        "winds": "北の風",
    }
    day.update(extra)
    return day
