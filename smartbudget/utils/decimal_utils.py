"""Helpers for Decimal normalization."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from storage or user input.

    Returns:
        Decimal: Normalized numeric value.

    Raises:
        ValueError: If the value cannot be read as a number.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Not a numeric value: {value!r}")
    try:
        return Decimal(str(value).strip())
    except InvalidOperation as exc:
        raise ValueError(f"Not a numeric value: {value!r}") from exc


AMOUNT_QUANTUM = Decimal("0.01")


def quantize_amount(value: Decimal) -> Decimal:
    """Round an amount to cents, halves away from zero.

    Raises:
        ValueError: If the value has too many digits to hold in cents.
    """
    try:
        return value.quantize(AMOUNT_QUANTUM, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        raise ValueError(f"Amount out of range: {value!r}") from exc


def round_percentage(value: Decimal) -> int:
    """Round a percentage to the nearest integer, halves away from zero."""
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def decimal_to_json(value: Decimal) -> int | float:
    """Return a JSON-friendly number for a Decimal amount."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


__all__ = [
    "AMOUNT_QUANTUM",
    "coerce_decimal",
    "quantize_amount",
    "round_percentage",
    "decimal_to_json",
]
