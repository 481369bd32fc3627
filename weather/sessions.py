"""Per-browser weather views keyed by a session cookie."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple

from weather.view import WeatherView

logger = logging.getLogger(__name__)

SESSION_COOKIE_NAME = "weather_view_session"
SESSION_MAX_AGE_SECONDS = 60 * 60 * 4


@dataclass
class _SessionEntry:
    view: WeatherView
    last_seen: float


class ViewSessionManager:
    """In-memory session index (cookie token -> ``WeatherView``)."""

    def __init__(
        self,
        factory: Callable[[], WeatherView],
        *,
        max_age_seconds: int = SESSION_MAX_AGE_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._factory = factory
        self._max_age = max_age_seconds
        self._clock = clock
        self._sessions: Dict[str, _SessionEntry] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def create_session(self) -> Tuple[str, WeatherView]:
        token = secrets.token_urlsafe(32)
        view = self._factory()
        now = self._clock()
        with self._lock:
            self._purge_expired(now)
            self._sessions[token] = _SessionEntry(view=view, last_seen=now)
        return token, view

    def get_view(self, token: Optional[str]) -> Optional[WeatherView]:
        if not token:
            return None
        now = self._clock()
        with self._lock:
            entry = self._sessions.get(token)
            if entry is None:
                return None
            if self._max_age and now - entry.last_seen > self._max_age:
                self._sessions.pop(token, None)
                return None
            entry.last_seen = now
            return entry.view

    def destroy_session(self, token: Optional[str]) -> bool:
        if not token:
            return False
        with self._lock:
            return self._sessions.pop(token, None) is not None

    def _purge_expired(self, now: float) -> None:
        if not self._max_age:
            return
        expired = [token for token, entry in self._sessions.items() if now - entry.last_seen > self._max_age]
        for token in expired:
            del self._sessions[token]
        if expired:
            logger.debug("Dropped %d expired weather sessions.", len(expired))


__all__ = [
    "SESSION_COOKIE_NAME",
    "SESSION_MAX_AGE_SECONDS",
    "ViewSessionManager",
]
