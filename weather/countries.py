"""Resolve ISO 3166-1 country codes into readable country names.

The weather payload only carries a country code (``sys.country``). The card
shows the everyday English name ("France", "United Kingdom", "South Korea"),
built from the ISO database shipped by ``pycountry``: the common name when
ISO has one, otherwise the short name in reading order, with a few display
overrides. Unknown codes resolve to ``None`` and the card leaves the field
blank.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, List, Optional, Tuple, Union

import pycountry

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en",)
SELECT_OPTIONS = ("official", "alias", "all")

CountryName = Union[str, List[str]]


class CountryNameResolver:
    """Memoizing lookup from country code to name."""

    def __init__(self) -> None:
        self._cache: Dict[Tuple[str, str], Optional[CountryName]] = {}
        self._lock = threading.Lock()

    def get_name(
        self,
        code: Optional[str],
        lang: str = "en",
        select: str = "official",
    ) -> Optional[CountryName]:
        """Return the name for ``code`` or ``None`` when it is not recognized.

        Args:
            code: alpha-2 (``"US"``) or alpha-3 (``"USA"``) code, any case.
            lang: language of the returned name; only English is available.
            select: ``"official"`` returns the display name (``"US"`` gives
                ``"United States of America"``, ``"FR"`` gives ``"France"``),
                ``"alias"`` the first alternative ISO name, ``"all"`` every
                known name with the display name first.
        """

        if lang not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language '{lang}'.")
        if select not in SELECT_OPTIONS:
            raise ValueError(f"Unknown select option '{select}'.")

        normalized = (code or "").strip().upper()
        if not normalized:
            return None

        key = (normalized, select)
        with self._lock:
            if key in self._cache:
                return self._cache[key]

        country = _lookup_country(normalized)
        if country is None:
            logger.debug("Country code %r is not recognized.", normalized)
            name: Optional[CountryName] = None
        else:
            name = _select_name(country, select)

        with self._lock:
            self._cache[key] = name
        return name


# Display names that differ from the ISO short name, and territories the ISO
# database does not list but the weather provider reports.
_DISPLAY_NAMES: Dict[str, str] = {
    "US": "United States of America",
    "KR": "South Korea",
    "KP": "North Korea",
    "XK": "Kosovo",
}
_INVERTED_SUFFIXES = (" of", " of the")


class _Territory:
    """Stand-in record for codes missing from the ISO database."""

    def __init__(self, alpha_2: str, name: str) -> None:
        self.alpha_2 = alpha_2
        self.name = name


def _lookup_country(code: str):
    if len(code) == 2:
        field = "alpha_2"
    elif len(code) == 3:
        field = "alpha_3"
    else:
        return None
    try:
        country = pycountry.countries.get(**{field: code})
    except LookupError:
        country = None
    if country is None and field == "alpha_2" and code in _DISPLAY_NAMES:
        return _Territory(code, _DISPLAY_NAMES[code])
    return country


def _uninvert(name: str) -> str:
    """Turn ISO sort forms like ``"Korea, Republic of"`` into reading order."""

    head, sep, tail = name.partition(", ")
    if sep and tail.lower().endswith(_INVERTED_SUFFIXES):
        return f"{tail} {head}"
    return name


def _display_name(country) -> str:
    override = _DISPLAY_NAMES.get(country.alpha_2)
    if override:
        return override
    common = getattr(country, "common_name", None)
    return common or _uninvert(country.name)


def _all_names(country) -> List[str]:
    names: List[str] = []
    candidates = (
        _display_name(country),
        country.name,
        getattr(country, "common_name", None),
        getattr(country, "official_name", None),
    )
    for candidate in candidates:
        if candidate and candidate not in names:
            names.append(candidate)
    return names


def _select_name(country, select: str) -> CountryName:
    names = _all_names(country)
    if select == "official":
        return names[0]
    if select == "alias":
        return names[1] if len(names) > 1 else names[0]
    return names


_default_resolver = CountryNameResolver()


def get_country_name(
    code: Optional[str],
    lang: str = "en",
    select: str = "official",
) -> Optional[CountryName]:
    """Resolve ``code`` with the shared module-level resolver."""

    return _default_resolver.get_name(code, lang=lang, select=select)
