from __future__ import annotations

import json
import logging
import math
from typing import Any, Mapping, Optional

from ..abstractions import HttpGetJson
from ..exceptions import UpstreamDataError, UpstreamUnavailableError


class WeatherProvider:
    """Base class for providers talking JSON over an injected transport."""

    name = "base"

    def __init__(self, transport: HttpGetJson) -> None:
        self.transport = transport
        self._log = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")

    async def _get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Any:
        status, body = await self.transport.get_json(url, params)
        if not 200 <= status < 300:
            self._log.error("Provider returned %s: %s", status, body[:200])
            raise UpstreamUnavailableError(f"HTTP {status}")
        try:
            return json.loads(body)
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise UpstreamDataError("invalid json") from exc


def _safe_float(value: Optional[object]) -> Optional[float]:
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


__all__ = ["WeatherProvider"]
