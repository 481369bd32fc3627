"""Render model and markup for the weather card."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from html import escape
from typing import Any, Dict, List, Mapping, Optional

from weather.countries import CountryNameResolver
from weather.provider import DEFAULT_ICON_URL, build_icon_url
from weather.state import has_measurement_block
from weather.temperature import format_fahrenheit

LOADING_TEXT = "Loading..."
APP_TITLE = "Weather App"

_BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@5.3.3/dist/css/bootstrap.min.css"
_FONT_AWESOME_CSS = "https://cdnjs.cloudflare.com/ajax/libs/font-awesome/6.5.2/css/all.min.css"


@dataclass(frozen=True)
class WeatherCard:
    icon_url: Optional[str]
    temperature: str
    location: str
    temp_min: str
    temp_max: str
    condition: str
    country: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _primary_condition(payload: Mapping[str, Any]) -> Mapping[str, Any]:
    conditions = payload.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], Mapping):
        return conditions[0]
    return {}


def build_card(
    payload: Optional[Mapping[str, Any]],
    resolver: CountryNameResolver,
    *,
    icon_base_url: str = DEFAULT_ICON_URL,
) -> Optional[WeatherCard]:
    """Return the card for ``payload`` or ``None`` when it has no measurement block."""

    if not has_measurement_block(payload):
        return None

    main = payload["main"]
    condition = _primary_condition(payload)
    icon = condition.get("icon")
    country_block = payload.get("sys")
    country_code = country_block.get("country") if isinstance(country_block, Mapping) else None
    country = resolver.get_name(country_code, "en", select="official")

    return WeatherCard(
        icon_url=build_icon_url(str(icon), icon_base_url) if icon else None,
        temperature=format_fahrenheit(main["temp"]),
        location=str(payload.get("name") or ""),
        temp_min=format_fahrenheit(main["temp_min"]),
        temp_max=format_fahrenheit(main["temp_max"]),
        condition=str(condition.get("main") or ""),
        country=country if isinstance(country, str) else "",
    )


def render_card_html(card: Optional[WeatherCard]) -> str:
    if card is None:
        return f'<h1 class="text-center p-4">{LOADING_TEXT}</h1>'

    icon = ""
    if card.icon_url:
        icon = f'<img src="{escape(card.icon_url)}" alt="weather status icon" class="weather-icon">'

    return (
        '<div class="card-body text-center">'
        f"{icon}"
        f"<h2>{escape(card.temperature)}</h2>"
        '<p><i class="fa-solid fa-location-dot me-2 text-dark"></i>'
        f"<strong>{escape(card.location)}</strong></p>"
        '<div class="row mt-4">'
        '<div class="col-md-6">'
        '<p><i class="fa-solid fa-temperature-low me-2 text-primary"></i>'
        f"<strong>{escape(card.temp_min)}</strong></p>"
        '<p><i class="fa-solid fa-temperature-high me-2 text-danger"></i>'
        f"<strong>{escape(card.temp_max)}</strong></p>"
        "</div>"
        '<div class="col-md-6">'
        f"<p><strong>{escape(card.condition)}</strong></p>"
        f"<p><strong>{escape(card.country)}</strong></p>"
        "</div>"
        "</div>"
        "</div>"
    )


def render_page_html(draft: str, card: Optional[WeatherCard], *, action: str = "/search") -> str:
    """Return the full page: header, search form bound to ``draft``, card, footer."""

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{APP_TITLE}</title>
<link rel="stylesheet" href="{_BOOTSTRAP_CSS}">
<link rel="stylesheet" href="{_FONT_AWESOME_CSS}">
</head>
<body>
<div class="App">
<header class="d-flex justify-content-center align-items-center p-3"><h2>{APP_TITLE}</h2></header>
<form method="post" action="{escape(action)}" class="container mt-3 d-flex flex-column justify-content-center align-items-center">
<div class="col-auto"><label for="location-name" class="col-form-label">Enter Location:</label></div>
<div class="col-auto"><input type="text" id="location-name" name="location" class="form-control" value="{escape(draft)}"></div>
<button type="submit" class="btn btn-primary mt-2">Search</button>
<div class="card mt-3">{render_card_html(card)}</div>
</form>
<footer class="footer">&copy; {APP_TITLE}</footer>
</div>
</body>
</html>
"""


def format_card_text(card: Optional[WeatherCard]) -> str:
    """Plain-text rendition of the card for terminals."""

    if card is None:
        return LOADING_TEXT

    lines: List[str] = [
        f"{card.temperature}  {card.location}",
        f"Low {card.temp_min} / High {card.temp_max}",
        card.condition,
    ]
    if card.country:
        lines.append(card.country)
    if card.icon_url:
        lines.append(f"Icon: {card.icon_url}")
    return "\n".join(line for line in lines if line)
