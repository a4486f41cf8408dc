"""Domain services package."""

from .advisory import classify_savings_tier, generate_advisory
from .alerts import classify_severity, evaluate_budget_alerts
from .finance import (
    compute_category_distribution,
    compute_category_totals,
    compute_totals,
    find_over_budget_categories,
    find_top_category,
    sort_recent_first,
)
from .formatting import format_amount
from .validation import (
    validate_amount,
    validate_category,
    validate_description,
    validate_kind,
    validate_limit,
)

__all__ = [
    "classify_savings_tier",
    "generate_advisory",
    "classify_severity",
    "evaluate_budget_alerts",
    "compute_category_distribution",
    "compute_category_totals",
    "compute_totals",
    "find_over_budget_categories",
    "find_top_category",
    "sort_recent_first",
    "format_amount",
    "validate_amount",
    "validate_category",
    "validate_description",
    "validate_kind",
    "validate_limit",
]
