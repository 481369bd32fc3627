"""OpenWeatherMap client used by the weather view.

Keeps the HTTP details (URL construction, session defaults, JSON parsing) out
of the view so the view only deals with payloads and fetch failures.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional
from urllib.parse import urlencode

import requests

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_ICON_URL = "http://openweathermap.org/img/w"
DEFAULT_TIMEOUT_SECONDS = 8.0
_USER_AGENT = "weather-card/0.1"
_REDACTED = "***"


class WeatherFetchError(Exception):
    """Raised when the provider request or its JSON body cannot be used."""

    def __init__(self, query: str, reason: str) -> None:
        super().__init__(f"Weather request for '{query}' failed: {reason}")
        self.query = query
        self.reason = reason


def build_request_url(query: str, api_key: Optional[str], base_url: str = DEFAULT_API_URL) -> str:
    """Return the current-weather URL for ``query``.

    The query is passed verbatim as the ``q`` parameter; ``urlencode`` only
    escapes it for the wire.
    """

    params = {"q": query, "appid": api_key or ""}
    return f"{base_url}?{urlencode(params)}"


def build_icon_url(icon: str, base_url: str = DEFAULT_ICON_URL) -> str:
    return f"{base_url.rstrip('/')}/{icon}.png"


def _build_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({
        "User-Agent": _USER_AGENT,
        "Accept": "application/json",
    })
    return session


class WeatherProvider:
    """Fetch current conditions for a free-text location."""

    def __init__(
        self,
        api_key: Optional[str],
        *,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key or ""
        self._base_url = base_url
        self._timeout = timeout
        self._session = session or _build_session()

    @property
    def base_url(self) -> str:
        return self._base_url

    def request_url(self, query: str) -> str:
        return build_request_url(query, self._api_key, self._base_url)

    def fetch_current(self, query: str) -> Dict[str, Any]:
        """Return the parsed JSON body for ``query``.

        Error statuses are not failures here: the upstream error body (for
        example ``{"cod": "404", "message": "city not found"}``) is returned
        like any other payload. Only transport errors and unusable bodies raise
        ``WeatherFetchError``.
        """

        url = self.request_url(query)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            raise WeatherFetchError(query, self._redact(str(exc))) from exc

        try:
            data = response.json()
        except ValueError as exc:
            raise WeatherFetchError(query, f"invalid JSON body (HTTP {response.status_code})") from exc

        if not isinstance(data, dict):
            raise WeatherFetchError(query, f"unexpected {type(data).__name__} body (HTTP {response.status_code})")

        logger.debug("Weather response for %r: HTTP %s", query, response.status_code)
        return data

    def _redact(self, text: str) -> str:
        if not self._api_key:
            return text
        return text.replace(self._api_key, _REDACTED)
