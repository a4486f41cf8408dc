"""Domain package for budgeting rules and core models."""

from .constants import (
    CATEGORIES,
    DEFAULT_BUDGET_LIMITS,
    DEFAULT_MAX_AMOUNT,
    EXPENSE,
    INCOME,
)
from .errors import (
    PersistenceError,
    PersistenceReadError,
    SmartBudgetError,
    ValidationError,
)
from .models import (
    Advisory,
    AlertSeverity,
    BudgetAlert,
    BudgetOverview,
    BudgetTotals,
    CategoryShare,
    SavingsTier,
    Transaction,
)
from .services import (
    compute_category_distribution,
    compute_category_totals,
    compute_totals,
    evaluate_budget_alerts,
    generate_advisory,
)

__all__ = [
    "CATEGORIES",
    "DEFAULT_BUDGET_LIMITS",
    "DEFAULT_MAX_AMOUNT",
    "EXPENSE",
    "INCOME",
    "PersistenceError",
    "PersistenceReadError",
    "SmartBudgetError",
    "ValidationError",
    "Advisory",
    "AlertSeverity",
    "BudgetAlert",
    "BudgetOverview",
    "BudgetTotals",
    "CategoryShare",
    "SavingsTier",
    "Transaction",
    "compute_category_distribution",
    "compute_category_totals",
    "compute_totals",
    "evaluate_budget_alerts",
    "generate_advisory",
]
