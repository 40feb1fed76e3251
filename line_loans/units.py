"""Token unit conversion and display formatting."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation

TOKEN_DECIMALS = 18


def parse_units(amount: str, decimals: int = TOKEN_DECIMALS) -> int:
    """Convert a decimal string into integer base units.

    ``parse_units("1.5")`` is ``1_500_000_000_000_000_000``. Raises
    ValueError when the string is not a number or carries more fractional
    digits than the token supports.
    """
    try:
        value = Decimal(amount.strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid amount: {amount!r}") from e

    if not value.is_finite():
        raise ValueError(f"Invalid amount: {amount!r}")

    scaled = value.scaleb(decimals)
    if scaled != scaled.to_integral_value():
        raise ValueError(f"Amount {amount!r} has more than {decimals} decimals")
    return int(scaled)


def format_amount(value: Decimal | float | str, max_fraction_digits: int = 9) -> str:
    """Human readable amount with thousands separators, e.g. ``1,980``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "0"
    text = f"{number:,.{max_fraction_digits}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        return "0"
    return text


def format_percent(rate: float) -> str:
    """Rate as a percentage with at most two decimals: 0.015 -> ``1.5``."""
    return f"{round(rate * 100, 2):g}"
