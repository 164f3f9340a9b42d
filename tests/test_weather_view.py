from __future__ import annotations

import json
from io import StringIO

import pytest
from django.conf import settings
from django.core.management import call_command
from django.core.management.base import CommandError
from django.test import Client

from helpers import make_kujira_day, make_weatherapi_payload
from tenki.api.views import get_search_history, get_weather_resolver


@pytest.fixture(autouse=True)
def fresh_resolver():
    get_weather_resolver.cache_clear()
    get_search_history.cache_clear()
    yield
    get_weather_resolver.cache_clear()
    get_search_history.cache_clear()


def test_weather_endpoint_for_coordinates(requests_mock) -> None:
    requests_mock.get(settings.WEATHERAPI_URL, json=make_weatherapi_payload())
    client = Client()

    response = client.get("/api/weather", {"lat": "35.69", "lon": "139.69"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["location"]["name"] == "Tokyo"
    assert payload["current"]["temp_c"] == 18.0
    assert payload["current"]["condition"]["code"] == 1000
    assert payload["source"] == "weatherapi"
    assert requests_mock.last_request.qs["q"] == ["35.69,139.69"]


def test_weather_endpoint_for_japanese_city(requests_mock) -> None:
    requests_mock.get(settings.KUJIRA_URL, json={"mkdate": "x", "東京": [make_kujira_day("晴れ", maxtemp="22")]})
    client = Client()

    response = client.get("/api/weather", {"q": "東京"})

    assert response.status_code == 200
    payload = response.json()
    assert payload["location"]["name"] == "東京"
    assert payload["current"]["temp_c"] == 22.0
    assert payload["current"]["temp_f"] == pytest.approx(71.6)
    assert payload["source"] == "kujira"
    assert requests_mock.call_count == 1


def test_weather_endpoint_falls_back_to_global(requests_mock) -> None:
    requests_mock.get(settings.KUJIRA_URL, json={"error": "no data"})
    requests_mock.get(settings.WEATHERAPI_URL, json=make_weatherapi_payload())
    client = Client()

    response = client.get("/api/weather", {"q": "東京"})

    assert response.status_code == 200
    assert response.json()["source"] == "weatherapi"
    assert requests_mock.call_count == 2


def test_weather_endpoint_rejects_postal_code() -> None:
    client = Client()

    response = client.get("/api/weather", {"q": "1234567"})

    assert response.status_code == 400
    assert "postal code" in response.json()["detail"]


def test_weather_endpoint_reports_upstream_failure(requests_mock) -> None:
    requests_mock.get(settings.WEATHERAPI_URL, status_code=500, text="boom")
    client = Client()

    response = client.get("/api/weather", {"q": "Paris"})

    assert response.status_code == 502
    assert "detail" in response.json()


def test_weather_endpoint_validates_params() -> None:
    client = Client()

    assert client.get("/api/weather", {"lat": "abc", "lon": "37.61"}).status_code == 400
    response = client.get("/api/weather")
    assert response.status_code == 400
    assert "detail" in response.json()


@pytest.mark.parametrize("lat, lon", [("nan", "139.69"), ("35.69", "inf"), ("-Infinity", "NaN")])
def test_weather_endpoint_rejects_non_finite_coordinates(requests_mock, lat, lon) -> None:
    client = Client()

    response = client.get("/api/weather", {"lat": lat, "lon": lon})

    assert response.status_code == 400
    assert response.json()["detail"] == "lat and lon must be valid floating point numbers"
    assert requests_mock.call_count == 0


def test_weather_endpoint_for_kujira_nan_temperature(requests_mock) -> None:
    requests_mock.get(settings.KUJIRA_URL, json={"mkdate": "x", "東京": [make_kujira_day("晴れ", maxtemp="NaN")]})
    client = Client()

    response = client.get("/api/weather", {"q": "東京"})

    assert response.status_code == 200
    assert response.json()["current"]["temp_c"] == 20.0
    assert response.json()["current"]["temp_f"] == 68.0


def test_history_endpoint_lists_recent_searches(requests_mock) -> None:
    requests_mock.get(settings.WEATHERAPI_URL, json=make_weatherapi_payload(name="Paris", country="France"))
    client = Client()
    client.get("/api/weather", {"q": "Paris"})
    client.get("/api/weather", {"q": "paris"})

    response = client.get("/api/history", {"limit": "1"})

    assert response.status_code == 200
    [entry] = response.json()
    assert entry["search_term"] == "paris"
    assert entry["location_name"] == "Paris"
    assert client.get("/api/history", {"limit": "x"}).status_code == 400


def test_weather_fetch_command_prints_json(requests_mock) -> None:
    requests_mock.get(settings.WEATHERAPI_URL, json=make_weatherapi_payload())
    out = StringIO()

    call_command("weather_fetch", "--lat", "35.69", "--lon", "139.69", stdout=out)

    payload = json.loads(out.getvalue())
    assert payload["location"]["tz_id"] == "Asia/Tokyo"


def test_weather_fetch_command_requires_location() -> None:
    with pytest.raises(CommandError):
        call_command("weather_fetch")


def test_weather_fetch_command_wraps_engine_errors() -> None:
    with pytest.raises(CommandError):
        call_command("weather_fetch", "--query", "123-4567")


def test_settings_carry_no_database_or_custom_timezone() -> None:
    assert not hasattr(settings, "DEFAULT_TIMEZONE")
    assert settings.DATABASES == {}
