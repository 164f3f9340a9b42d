"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from tenki.api.views import fetch_weather
from tenki.core.exceptions import WeatherError


class Command(BaseCommand):
    help = "Fetch current weather for a place name or coordinates"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--query", type=str, help="Place name or postal code")
        parser.add_argument("--lat", type=float, help="Latitude")
        parser.add_argument("--lon", type=float, help="Longitude")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        query = options.get("query")
        latitude = options.get("lat")
        longitude = options.get("lon")

        if query is None and (latitude is None or longitude is None):
            raise CommandError("--query or both --lat and --lon are required")

        try:
            weather = fetch_weather(query=query, latitude=latitude, longitude=longitude)
        except WeatherError as exc:
            raise CommandError(f"Weather lookup failed: {exc}") from exc

        self.stdout.write(json.dumps(weather.as_dict(), ensure_ascii=False))
