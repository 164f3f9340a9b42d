"""In-memory search history.

Keeps the most recent successful text searches for the API layer. Persisting
the history is left to whoever embeds the engine; this registry only applies
the retention policy: one entry per search term, newest first, capped.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from threading import Lock
from typing import Callable, Dict, List, Optional

from tenki.core.entities import CanonicalWeather


@dataclass(frozen=True)
class HistoryEntry:
    """Summary of one search kept for display."""

    search_term: str
    searched_at: datetime
    location_name: str
    temperature_c: float
    condition_text: str
    condition_icon: str

    def as_dict(self) -> Dict[str, object]:
        return {
            "search_term": self.search_term,
            "searched_at": self.searched_at.astimezone(timezone.utc).isoformat().replace("+00:00", "Z"),
            "location_name": self.location_name,
            "temperature_c": self.temperature_c,
            "condition_text": self.condition_text,
            "condition_icon": self.condition_icon,
        }


class SearchHistory:
    """Stores the latest searches, deduplicated by search term."""

    def __init__(
        self,
        limit: int = 10,
        time_func: Optional[Callable[[], datetime]] = None,
    ) -> None:
        if limit <= 0:
            raise ValueError("limit must be positive")
        self.limit = limit
        self._time_func = time_func or (lambda: datetime.now(timezone.utc))
        self._entries: List[HistoryEntry] = []
        self._lock = Lock()

    def record(self, search_term: str, weather: CanonicalWeather) -> HistoryEntry:
        if not search_term:
            raise ValueError("search_term must be provided")
        entry = HistoryEntry(
            search_term=search_term,
            searched_at=self._time_func(),
            location_name=weather.name,
            temperature_c=weather.temp_c,
            condition_text=weather.condition_text,
            condition_icon=weather.condition_icon,
        )
        with self._lock:
            self._entries = [item for item in self._entries if item.search_term != search_term]
            self._entries.insert(0, entry)
            del self._entries[self.limit :]
        return entry

    def latest(self, limit: int = 5) -> List[HistoryEntry]:
        if limit <= 0:
            return []
        with self._lock:
            return list(self._entries[:limit])

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


__all__ = ["HistoryEntry", "SearchHistory"]
