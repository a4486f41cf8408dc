"""Domain validation helpers."""

from collections.abc import Iterable
from decimal import Decimal

from smartbudget.domain.constants import CATEGORIES, TRANSACTION_KINDS
from smartbudget.domain.errors import ValidationError
from smartbudget.utils.decimal_utils import coerce_decimal, quantize_amount


def validate_description(description: str | None) -> str:
    """Return the trimmed description or raise when it is empty.

    Args:
        description: Raw user text.

    Returns:
        str: Description without surrounding whitespace.

    Raises:
        ValidationError: If nothing is left after trimming.
    """
    cleaned = (description or "").strip()
    if not cleaned:
        raise ValidationError("Please enter a description.")
    return cleaned


def validate_amount(value, max_amount: Decimal) -> Decimal:
    """Return a positive, finite amount not above ``max_amount``.

    Args:
        value: Raw amount (number or numeric string).
        max_amount: Inclusive ceiling.

    Returns:
        Decimal: Validated amount rounded to cents.

    Raises:
        ValidationError: If the amount is missing, not numeric, not finite,
            non-positive once rounded, or above the ceiling.
    """
    try:
        amount = coerce_decimal(value) if value is not None else None
    except ValueError as exc:
        raise ValidationError("Please enter a valid positive amount.") from exc
    if amount is None or not amount.is_finite() or amount <= 0:
        raise ValidationError("Please enter a valid positive amount.")
    if amount > max_amount:
        raise ValidationError(
            f"Amount seems too large (maximum is {max_amount}). Please check."
        )
    try:
        amount = quantize_amount(amount)
    except ValueError as exc:
        raise ValidationError("Please enter a valid positive amount.") from exc
    if amount <= 0:
        raise ValidationError("Please enter a valid positive amount.")
    return amount


def validate_category(
    category: str,
    categories: Iterable[str] = CATEGORIES,
) -> str:
    """Raise unless ``category`` is one of the known categories."""
    if category not in tuple(categories):
        raise ValidationError(f"Unknown category: {category!r}")
    return category


def validate_kind(kind: str) -> str:
    """Raise unless ``kind`` is income or expense."""
    if kind not in TRANSACTION_KINDS:
        raise ValidationError(
            f"Transaction type must be one of {', '.join(TRANSACTION_KINDS)}"
        )
    return kind


def validate_limit(category: str, limit) -> Decimal:
    """Validate a budget limit for a known category.

    Returns:
        Decimal: Positive finite limit.

    Raises:
        ValidationError: If the category is unknown or the limit invalid.
    """
    validate_category(category)
    try:
        value = coerce_decimal(limit) if limit is not None else None
    except ValueError as exc:
        raise ValidationError(f"Invalid limit for {category}") from exc
    if value is None or not value.is_finite() or value <= 0:
        raise ValidationError(f"Limit for {category} must be positive")
    try:
        value = quantize_amount(value)
    except ValueError as exc:
        raise ValidationError(f"Invalid limit for {category}") from exc
    if value <= 0:
        raise ValidationError(f"Limit for {category} must be positive")
    return value


__all__ = [
    "validate_description",
    "validate_amount",
    "validate_category",
    "validate_kind",
    "validate_limit",
]
