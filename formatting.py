"""Helper utilities for formatting numeric outputs."""
from __future__ import annotations

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

AMOUNT_UNIT = "百万円"


def to_decimal(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if value is None:
        return Decimal("0")
    return Decimal(str(value))


def format_amount(value: object) -> str:
    """Group thousands and keep up to three decimals, e.g. ``1,234.5``."""

    try:
        amount = to_decimal(value)
    except (InvalidOperation, ValueError):
        return "—"
    if amount.is_nan() or amount.is_infinite():
        return "—"
    if amount == amount.to_integral_value():
        return f"{amount:,.0f}"
    rounded = amount.quantize(Decimal("0.001"), rounding=ROUND_HALF_UP)
    return f"{rounded:,.3f}".rstrip("0").rstrip(".")


def format_amount_with_unit(value: object, unit: str = AMOUNT_UNIT) -> str:
    formatted = format_amount(value)
    return formatted if formatted == "—" else f"{formatted} ({unit})"


def format_percentage(value: object) -> str:
    """Format an already scaled percentage, dropping a trailing ``.0``."""

    try:
        pct = to_decimal(value)
    except (InvalidOperation, ValueError):
        return "—"
    if pct.is_nan() or pct.is_infinite():
        return "—"
    text = f"{pct.quantize(Decimal('0.1'), rounding=ROUND_HALF_UP):f}"
    if text.endswith(".0"):
        text = text[:-2]
    return f"{text}%"


def format_ratio(value: object) -> str:
    try:
        ratio = to_decimal(value)
    except (InvalidOperation, ValueError):
        return "—"
    if ratio.is_nan() or ratio.is_infinite():
        return "—"
    return f"{ratio * Decimal('100'):.1f}%"


__all__ = [
    "AMOUNT_UNIT",
    "format_amount",
    "format_amount_with_unit",
    "format_percentage",
    "format_ratio",
    "to_decimal",
]
