"""REST API views for weather information."""
from __future__ import annotations

import math
from functools import lru_cache

from asgiref.sync import async_to_sync
from django.conf import settings
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from tenki.core.entities import CanonicalWeather
from tenki.core.exceptions import InvalidQueryError, UpstreamDataError, UpstreamUnavailableError
from tenki.core.history import SearchHistory
from tenki.core.providers.kujira import KujiraWeatherProvider
from tenki.core.providers.weatherapi import WeatherApiProvider
from tenki.core.services.weather_service import WeatherResolver
from tenki.core.transport import RequestConfig, RequestsTransport


@lru_cache(maxsize=1)
def get_search_history() -> SearchHistory:
    return SearchHistory(limit=settings.TENKI_HISTORY_LIMIT)


@lru_cache(maxsize=1)
def get_weather_resolver() -> WeatherResolver:
    transport = RequestsTransport(request_config=RequestConfig(timeout=settings.TENKI_HTTP_TIMEOUT))
    return WeatherResolver(
        global_provider=WeatherApiProvider(
            transport,
            api_key=settings.WEATHERAPI_KEY,
            base_url=settings.WEATHERAPI_URL,
            lang=settings.WEATHERAPI_LANG,
        ),
        regional_provider=KujiraWeatherProvider(transport, base_url=settings.KUJIRA_URL),
        regional_enabled=settings.TENKI_REGIONAL_ENABLED,
        history=get_search_history(),
    )


def fetch_weather(query: str | None = None, latitude: float | None = None, longitude: float | None = None) -> CanonicalWeather:
    """Run the resolver synchronously for a text query or a coordinate pair."""
    resolver = get_weather_resolver()
    if query is not None:
        return async_to_sync(resolver.resolve)(query)
    return async_to_sync(resolver.resolve_coordinates)(latitude, longitude)


class WeatherView(APIView):
    """Provide normalized weather data for a place name or coordinates."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot for ``q`` or ``lat``/``lon``."""
        query = request.query_params.get("q")
        latitude = longitude = None
        if query is None:
            try:
                latitude = float(request.query_params["lat"])
                longitude = float(request.query_params["lon"])
                if not (math.isfinite(latitude) and math.isfinite(longitude)):
                    raise ValueError("non-finite coordinate")
            except KeyError:
                return Response({"detail": "q or lat and lon query parameters are required"}, status=status.HTTP_400_BAD_REQUEST)
            except ValueError:
                return Response({"detail": "lat and lon must be valid floating point numbers"}, status=status.HTTP_400_BAD_REQUEST)

        try:
            weather = fetch_weather(query=query, latitude=latitude, longitude=longitude)
        except InvalidQueryError as exc:
            return Response({"detail": str(exc)}, status=status.HTTP_400_BAD_REQUEST)
        except (UpstreamUnavailableError, UpstreamDataError) as exc:
            return Response({"detail": f"weather provider error: {exc}"}, status=status.HTTP_502_BAD_GATEWAY)
        return Response(weather.as_dict(), status=status.HTTP_200_OK)


class HistoryView(APIView):
    """List the most recent successful searches."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        try:
            limit = int(request.query_params.get("limit", "5"))
        except ValueError:
            return Response({"detail": "limit must be an integer"}, status=status.HTTP_400_BAD_REQUEST)
        entries = get_search_history().latest(limit=limit)
        return Response([entry.as_dict() for entry in entries], status=status.HTTP_200_OK)
