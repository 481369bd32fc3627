"""Kelvin to Fahrenheit conversion for the weather card."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

_KELVIN_OFFSET = 273.15
_DISPLAY_UNIT = "° F"


def kelvin_to_fahrenheit(kelvin: float) -> str:
    """Return ``kelvin`` in Fahrenheit rounded to a whole number, as a string.

    Rounding is half away from zero (``ROUND_HALF_UP`` on a ``Decimal``), so
    ``0`` K gives ``"-460"`` and ``300`` K gives ``"80"``.
    """

    if isinstance(kelvin, bool):
        raise TypeError("Temperature must be a number, not a bool.")
    fahrenheit = (float(kelvin) - _KELVIN_OFFSET) * 1.8 + 32
    rounded = Decimal(repr(fahrenheit)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    if rounded == 0:
        # Decimal keeps the sign of -0.4 after quantizing.
        return "0"
    return str(rounded)


def format_fahrenheit(kelvin: float) -> str:
    return f"{kelvin_to_fahrenheit(kelvin)}{_DISPLAY_UNIT}"
