"""Assemble the weather view and run the interactive CLI loop."""

from __future__ import annotations

import logging
from typing import Optional

from app.config import (
    configure_logging,
    get_default_location,
    get_http_timeout,
    get_weather_api_key,
    get_weather_api_url,
    get_weather_icon_url,
)
from weather.card import format_card_text
from weather.countries import CountryNameResolver
from weather.provider import WeatherProvider
from weather.view import WeatherView

logger = logging.getLogger(__name__)

_shared_resolver = CountryNameResolver()

# -- Construction --------------------------------------------------------------
def build_provider() -> WeatherProvider:
    """Create the OpenWeatherMap client from environment configuration.

    WHAT: build a ``WeatherProvider`` with the API key, endpoint and timeout.
    WHY: the key is read once here and injected, so nothing downstream touches
    the environment.
    HOW: pull settings from ``app.config`` accessors and warn when the key is
    missing (the upstream then answers with an error body).
    """

    api_key = get_weather_api_key()
    if not api_key:
        logger.warning("OPENWEATHER_API_KEY is not set; weather requests will be rejected upstream.")
    return WeatherProvider(
        api_key,
        base_url=get_weather_api_url(),
        timeout=get_http_timeout(),
    )


def build_view(
    provider: Optional[WeatherProvider] = None,
    *,
    resolver: Optional[CountryNameResolver] = None,
    initial_query: Optional[str] = None,
) -> WeatherView:
    """Wire a ``WeatherView`` the same way for the CLI and the web API.

    WHAT: instantiate the view with its provider, country resolver, default
    location and icon base URL.
    WHY: every entry point must share identical wiring so cards look the same
    in the terminal and the browser.
    HOW: accept overrides (tests, per-session factories) and fill the rest
    from ``app.config`` plus the module-level shared resolver.
    """

    return WeatherView(
        provider or build_provider(),
        initial_query=initial_query if initial_query is not None else get_default_location(),
        resolver=resolver or _shared_resolver,
        icon_base_url=get_weather_icon_url(),
    )

# -- Interactive CLI loop ------------------------------------------------------
def main(view: Optional[WeatherView] = None) -> None:
    """Minimal CLI driver around ``WeatherView``.

    WHAT: fetch the default location, then prompt for locations and print the
    card (or ``Loading...``) after every search.
    WHY: offers a local debugging surface identical to the web page without
    starting the server.
    HOW: reuse ``build_view`` (same stack the API uses) and exit on
    EOF/KeyboardInterrupt or "quit"/"exit".
    """

    configure_logging()
    view = view or build_view()
    view.ensure_mounted()
    print(format_card_text(view.card()))

    while True:
        try:
            location = input("Enter Location: ")
        except (EOFError, KeyboardInterrupt):
            print("\nExiting.")
            break

        if location.strip().lower() in {"quit", "exit"}:
            print("Goodbye!")
            break

        view.search(location)
        print()
        print(format_card_text(view.card()))
        print()


if __name__ == "__main__":
    main()
