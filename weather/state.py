"""Explicit view states for the weather card.

A view is ``Loading`` until a payload with a measurement block (``main``) has
been fetched, ``Loaded`` afterwards, and ``Failed`` when the latest fetch did
not produce a payload at all. ``Failed`` remembers the last ``Loaded`` state so
the card keeps showing it.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real
from typing import Any, Dict, Mapping, Optional, Union

_MEASUREMENT_FIELDS = ("temp", "temp_min", "temp_max")


@dataclass(frozen=True)
class Loading:
    raw: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "loading"}


@dataclass(frozen=True)
class Loaded:
    payload: Dict[str, Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "loaded"}


@dataclass(frozen=True)
class Failed:
    reason: str
    previous: Optional[Loaded] = None

    def to_dict(self) -> Dict[str, Any]:
        return {"status": "failed", "error": self.reason}


ViewState = Union[Loading, Loaded, Failed]


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(float(value))
    except OverflowError:
        return False


def has_measurement_block(payload: Optional[Mapping[str, Any]]) -> bool:
    """Return True when ``payload["main"]`` carries finite numeric temperatures."""

    if not isinstance(payload, Mapping):
        return False
    main = payload.get("main")
    if not isinstance(main, Mapping):
        return False
    return all(_is_finite_number(main.get(field)) for field in _MEASUREMENT_FIELDS)


def last_loaded(state: ViewState) -> Optional[Loaded]:
    if isinstance(state, Loaded):
        return state
    if isinstance(state, Failed):
        return state.previous
    return None


def displayed_payload(state: ViewState) -> Optional[Dict[str, Any]]:
    loaded = last_loaded(state)
    return loaded.payload if loaded else None
