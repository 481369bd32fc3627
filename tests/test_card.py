import pytest

from weather.card import (
    LOADING_TEXT,
    WeatherCard,
    build_card,
    format_card_text,
    render_card_html,
    render_page_html,
)
from weather.countries import CountryNameResolver
from weather.state import Failed, Loaded, Loading, displayed_payload, has_measurement_block

PAYLOAD = {
    "main": {"temp": 300, "temp_min": 295, "temp_max": 305},
    "weather": [{"main": "Clear", "icon": "01d"}],
    "name": "Irvine",
    "sys": {"country": "US"},
}


def test_has_measurement_block_requires_numeric_temperatures():
    assert has_measurement_block(PAYLOAD)
    assert not has_measurement_block({})
    assert not has_measurement_block(None)
    assert not has_measurement_block({"main": "warm"})
    assert not has_measurement_block({"main": {"temp": 300, "temp_min": 295}})
    assert not has_measurement_block({"main": {"temp": "300", "temp_min": 295, "temp_max": 305}})


@pytest.mark.parametrize("value", [float("inf"), float("-inf"), float("nan"), 10**400])
def test_non_finite_temperatures_are_not_a_measurement_block(value):
    payload = {"main": {"temp": value, "temp_min": 295, "temp_max": 305}}

    assert not has_measurement_block(payload)
    assert build_card(payload, CountryNameResolver()) is None


def test_displayed_payload_follows_state_variant():
    loaded = Loaded(payload=PAYLOAD)
    assert displayed_payload(Loading()) is None
    assert displayed_payload(loaded) is PAYLOAD
    assert displayed_payload(Failed(reason="x", previous=loaded)) is PAYLOAD
    assert displayed_payload(Failed(reason="x")) is None


def test_build_card_formats_fields():
    card = build_card(PAYLOAD, CountryNameResolver())

    assert card == WeatherCard(
        icon_url="http://openweathermap.org/img/w/01d.png",
        temperature="80° F",
        location="Irvine",
        temp_min="71° F",
        temp_max="89° F",
        condition="Clear",
        country="United States of America",
    )


def test_build_card_without_measurement_block_is_none():
    assert build_card({"cod": "404"}, CountryNameResolver()) is None


def test_unresolved_country_and_missing_conditions_render_blank():
    payload = {"main": {"temp": 273.15, "temp_min": 273.15, "temp_max": 273.15}, "sys": {"country": "ZZ"}}
    card = build_card(payload, CountryNameResolver())

    assert card.country == ""
    assert card.condition == ""
    assert card.icon_url is None
    assert card.location == ""
    assert card.temperature == "32° F"


def test_card_html_escapes_payload_text():
    payload = dict(PAYLOAD, name="<script>alert(1)</script>")
    html = render_card_html(build_card(payload, CountryNameResolver()))

    assert "<script>" not in html
    assert "&lt;script&gt;" in html
    assert "80° F" in html
    assert 'src="http://openweathermap.org/img/w/01d.png"' in html


def test_loading_placeholder_replaces_card():
    html = render_card_html(None)
    assert LOADING_TEXT in html
    assert "card-body" not in html


def test_page_binds_draft_to_location_field():
    page = render_page_html('Irvine, "USA"', None)

    assert 'id="location-name"' in page
    assert 'value="Irvine, &quot;USA&quot;"' in page
    assert "Enter Location:" in page
    assert ">Search</button>" in page
    assert LOADING_TEXT in page


def test_format_card_text():
    text = format_card_text(build_card(PAYLOAD, CountryNameResolver()))

    assert "80° F  Irvine" in text
    assert "Low 71° F / High 89° F" in text
    assert "United States of America" in text
    assert format_card_text(None) == LOADING_TEXT
