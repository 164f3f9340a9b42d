"""Capabilities the weather engine expects from its environment."""
from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Tuple

from tenki.core.entities import CanonicalWeather


class HttpGetJson(Protocol):
    """Asynchronous, cancellable HTTP GET returning the raw status and body."""

    async def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[int, bytes]:
        """Fetch ``url`` and return ``(status_code, body)``."""
        ...


class CoordinateSource(Protocol):
    """Supplies the last known device position."""

    def last_known(self) -> Optional[Tuple[float, float]]:
        """Return ``(latitude, longitude)`` or ``None`` when no fix exists."""
        ...


class HistoryRecorder(Protocol):
    """Consumes successful text searches."""

    def record(self, search_term: str, weather: CanonicalWeather) -> None:
        ...
