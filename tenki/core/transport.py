from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

import requests

from .exceptions import UpstreamUnavailableError


@dataclass
class RequestConfig:
    timeout: float = 10.0


class RequestsTransport:
    """``HttpGetJson`` implementation backed by a ``requests`` session.

    The blocking call runs in a worker thread so the awaiting coroutine stays
    cancellable. A cancelled caller simply never sees the response.
    """

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self.session = session or requests.Session()
        self._log = logging.getLogger(f"{self.__module__}.{self.__class__.__name__}")

    async def get_json(self, url: str, params: Optional[Mapping[str, Any]] = None) -> Tuple[int, bytes]:
        return await asyncio.to_thread(self._get, url, params)

    def _get(self, url: str, params: Optional[Mapping[str, Any]]) -> Tuple[int, bytes]:
        try:
            response = self.session.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self.request_config.timeout,
            )
        except requests.Timeout as exc:
            self._log.error("Request to %s timed out", url, exc_info=exc)
            raise UpstreamUnavailableError("timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request to %s failed", url, exc_info=exc)
            raise UpstreamUnavailableError("request failed") from exc
        return response.status_code, response.content


__all__ = ["RequestConfig", "RequestsTransport"]
