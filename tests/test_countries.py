import pytest

import weather.countries as countries
from weather.countries import CountryNameResolver


def test_official_name_for_us():
    resolver = CountryNameResolver()
    assert resolver.get_name("US", "en", select="official") == "United States of America"


def test_official_select_falls_back_to_short_name():
    resolver = CountryNameResolver()
    assert resolver.get_name("CA") == "Canada"


def test_lookup_is_case_insensitive_and_accepts_alpha3():
    resolver = CountryNameResolver()
    assert resolver.get_name("us") == "United States of America"
    assert resolver.get_name("USA") == "United States of America"


@pytest.mark.parametrize(
    "code, expected",
    [
        ("US", "United States of America"),
        ("FR", "France"),
        ("NO", "Norway"),
        ("GB", "United Kingdom"),
        ("DE", "Germany"),
        ("KR", "South Korea"),
        ("TW", "Taiwan"),
        ("XK", "Kosovo"),
    ],
)
def test_official_select_uses_everyday_english_names(code, expected):
    assert CountryNameResolver().get_name(code, "en", select="official") == expected


def test_alias_returns_first_alternative_name():
    resolver = CountryNameResolver()
    assert resolver.get_name("US", select="alias") == "United States"
    assert resolver.get_name("TW", select="alias") == "Taiwan, Province of China"
    assert resolver.get_name("XK", select="alias") == "Kosovo"


def test_all_select_lists_unique_names():
    resolver = CountryNameResolver()
    names = resolver.get_name("GB", select="all")
    assert names[0] == "United Kingdom"
    assert "United Kingdom of Great Britain and Northern Ireland" in names
    assert len(names) == len(set(names))


def test_inverted_iso_names_are_read_in_order():
    assert countries._uninvert("Korea, Republic of") == "Republic of Korea"
    assert (
        countries._uninvert("Congo, The Democratic Republic of the")
        == "The Democratic Republic of the Congo"
    )
    assert countries._uninvert("Bonaire, Sint Eustatius and Saba") == "Bonaire, Sint Eustatius and Saba"


@pytest.mark.parametrize("code", ["XX", "", None, "ABCD", "Q"])
def test_unknown_codes_are_unresolved(code):
    assert CountryNameResolver().get_name(code) is None


def test_only_english_is_supported():
    with pytest.raises(ValueError):
        CountryNameResolver().get_name("US", "de")


def test_unknown_select_option_is_rejected():
    with pytest.raises(ValueError):
        CountryNameResolver().get_name("US", select="nickname")


def test_lookups_are_memoized(monkeypatch):
    resolver = CountryNameResolver()
    calls = []
    original = countries._lookup_country

    def counting_lookup(code):
        calls.append(code)
        return original(code)

    monkeypatch.setattr(countries, "_lookup_country", counting_lookup)

    resolver.get_name("FR")
    resolver.get_name("fr")

    assert calls == ["FR"]


def test_module_level_helper_uses_shared_resolver():
    assert countries.get_country_name("DE") == "Germany"
