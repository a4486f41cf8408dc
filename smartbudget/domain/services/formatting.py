"""Amount formatting shared by advisory text and adapters."""

from decimal import Decimal


def format_amount(value: Decimal, currency_code: str) -> str:
    """Format an amount as ``"LKR 1,234.00"``."""
    return f"{currency_code} {value:,.2f}"


__all__ = ["format_amount"]
