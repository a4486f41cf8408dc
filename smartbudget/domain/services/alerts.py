"""Budget limit alerting."""

from collections.abc import Mapping
from decimal import Decimal

from smartbudget.domain.constants import (
    ALERT_CRITICAL_PERCENT,
    ALERT_WARNING_PERCENT,
)
from smartbudget.domain.models import AlertSeverity, BudgetAlert
from smartbudget.utils.decimal_utils import round_percentage


def classify_severity(percentage: int) -> AlertSeverity | None:
    """Map a whole-percent usage to a severity, or None below the threshold."""
    if percentage >= ALERT_CRITICAL_PERCENT:
        return AlertSeverity.CRITICAL
    if percentage >= ALERT_WARNING_PERCENT:
        return AlertSeverity.WARNING
    return None


def evaluate_budget_alerts(
    category_totals: Mapping[str, Decimal],
    limits: Mapping[str, Decimal],
) -> list[BudgetAlert]:
    """Compare category spending against configured limits.

    Args:
        category_totals: Expense total by category.
        limits: Limit by category. Categories without a limit are skipped.

    Returns:
        list[BudgetAlert]: Alerts in the order of ``category_totals``.
    """
    alerts: list[BudgetAlert] = []
    for category, spent in category_totals.items():
        limit = limits.get(category)
        if not limit:
            continue
        percentage = round_percentage(spent / limit * Decimal("100"))
        severity = classify_severity(percentage)
        if severity is None:
            continue
        alerts.append(
            BudgetAlert(
                category=category,
                spent=spent,
                limit=limit,
                percentage=percentage,
                severity=severity,
            )
        )
    return alerts


__all__ = ["classify_severity", "evaluate_budget_alerts"]
