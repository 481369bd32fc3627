"""Centralize defaults and environment lookups for the weather app."""

from __future__ import annotations

import logging
import os
from typing import Dict

from dotenv import load_dotenv

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_WEATHER_API_URL = "https://api.openweathermap.org/data/2.5/weather"
_DEFAULT_WEATHER_ICON_URL = "http://openweathermap.org/img/w"
_DEFAULT_LOCATION = "Irvine, USA"
_DEFAULT_HTTP_TIMEOUT = 8.0
_DEFAULT_WEB_UI_HOST = "127.0.0.1"
_DEFAULT_WEB_UI_PORT = 9000
_DEFAULT_SESSION_MAX_AGE = 60 * 60 * 4
_DEFAULT_LOG_LEVEL = "INFO"

# ---------------------------------------------------------------------------
# Weather provider settings
# ---------------------------------------------------------------------------
def get_weather_api_key(env: Dict[str, str] | None = None) -> str | None:
    """Return the OpenWeatherMap API key.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.

    Returns:
        The API key string if present, otherwise ``None``.
    """

    source = env if env is not None else os.environ
    value = (source.get("OPENWEATHER_API_KEY") or "").strip()
    return value or None


def get_weather_api_url(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("WEATHER_API_URL") or _DEFAULT_WEATHER_API_URL


def get_weather_icon_url(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("WEATHER_ICON_URL") or _DEFAULT_WEATHER_ICON_URL


def get_default_location(env: Dict[str, str] | None = None) -> str:
    """Return the location fetched when a view is first shown."""

    source = env if env is not None else os.environ
    return source.get("DEFAULT_LOCATION", _DEFAULT_LOCATION)


def get_http_timeout(env: Dict[str, str] | None = None) -> float:
    """Return the provider request timeout in seconds."""

    source = env if env is not None else os.environ
    raw = source.get("WEATHER_HTTP_TIMEOUT")
    if raw is None:
        return _DEFAULT_HTTP_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        return _DEFAULT_HTTP_TIMEOUT
    return value if value > 0 else _DEFAULT_HTTP_TIMEOUT

# ---------------------------------------------------------------------------
# Web UI settings
# ---------------------------------------------------------------------------
def get_web_ui_host(env: Dict[str, str] | None = None) -> str:
    source = env if env is not None else os.environ
    return source.get("WEB_UI_HOST", _DEFAULT_WEB_UI_HOST)


def get_web_ui_port(env: Dict[str, str] | None = None) -> int:
    source = env if env is not None else os.environ
    raw = source.get("WEB_UI_PORT")
    if raw is None:
        return _DEFAULT_WEB_UI_PORT
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_WEB_UI_PORT
    return value if 0 < value <= 65535 else _DEFAULT_WEB_UI_PORT


def get_session_max_age(env: Dict[str, str] | None = None) -> int:
    """Return how long an idle browser session keeps its view, in seconds."""

    source = env if env is not None else os.environ
    raw = source.get("SESSION_MAX_AGE_SECONDS")
    if raw is None:
        return _DEFAULT_SESSION_MAX_AGE
    try:
        value = int(raw)
    except ValueError:
        return _DEFAULT_SESSION_MAX_AGE
    return max(value, 0)

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------
def get_log_level(env: Dict[str, str] | None = None) -> int:
    """Return the numeric logging level named by ``LOG_LEVEL``."""

    source = env if env is not None else os.environ
    name = (source.get("LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(name)
    return level if isinstance(level, int) else logging.INFO


def configure_logging(env: Dict[str, str] | None = None) -> None:
    logging.basicConfig(
        level=get_log_level(env),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
