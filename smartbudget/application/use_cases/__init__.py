"""Application use cases package."""

from .budget_limits import BudgetLimitsStore
from .get_budget_overview import BudgetOverview, GetBudgetOverviewUseCase
from .transaction_store import StoreChange, TransactionStore

__all__ = [
    "BudgetLimitsStore",
    "BudgetOverview",
    "GetBudgetOverviewUseCase",
    "StoreChange",
    "TransactionStore",
]
