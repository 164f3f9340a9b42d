from __future__ import annotations


class WeatherError(RuntimeError):
    """Base error raised by the weather resolution engine."""


class InvalidQueryError(WeatherError):
    """Raised for malformed or disallowed location queries."""


class UpstreamUnavailableError(WeatherError):
    """Raised when a provider answers with a non-success status or cannot be reached."""


class UpstreamDataError(WeatherError):
    """Raised when a provider payload cannot be decoded into weather data."""


class LocationUnavailableError(WeatherError):
    """Raised when no last known device position exists."""


__all__ = [
    "WeatherError",
    "InvalidQueryError",
    "UpstreamUnavailableError",
    "UpstreamDataError",
    "LocationUnavailableError",
]
