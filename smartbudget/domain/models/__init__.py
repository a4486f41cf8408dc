"""Domain models package."""

from .finance import (
    Advisory,
    AlertSeverity,
    BudgetAlert,
    BudgetOverview,
    BudgetTotals,
    CategoryShare,
    SavingsTier,
)
from .transactions import Transaction

__all__ = [
    "Transaction",
    "Advisory",
    "AlertSeverity",
    "BudgetAlert",
    "BudgetOverview",
    "BudgetTotals",
    "CategoryShare",
    "SavingsTier",
]
