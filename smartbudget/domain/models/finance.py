"""Domain models for budget aggregates."""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from smartbudget.domain.constants import DEFAULT_CURRENCY


class AlertSeverity(str, Enum):
    """Severity tier of a budget alert."""

    WARNING = "warning"
    CRITICAL = "critical"


class SavingsTier(str, Enum):
    """Savings-rate bucket selecting the advisory summary."""

    EMPTY = "empty"
    OVER_BUDGET = "over_budget"
    EXCELLENT = "excellent"
    MODERATE = "moderate"
    LOW = "low"


@dataclass(frozen=True)
class BudgetTotals:
    """Summary of income and expense figures.

    Attributes:
        income: Sum of income transactions.
        expense: Sum of expense transactions.
        balance: Income minus expense.
        savings_rate: Whole-percent share of income not spent, 0 without
            income.
    """

    income: Decimal
    expense: Decimal
    balance: Decimal
    savings_rate: int


@dataclass(frozen=True)
class BudgetAlert:
    """Spending of a category measured against its limit."""

    category: str
    spent: Decimal
    limit: Decimal
    percentage: int
    severity: AlertSeverity

    @property
    def is_over_budget(self) -> bool:
        return self.severity is AlertSeverity.CRITICAL


@dataclass(frozen=True)
class Advisory:
    """Rule-based advisor output.

    Attributes:
        tier: Savings tier that matched.
        summary: One summary sentence.
        suggestions: Exactly two suggestions, or none for the empty tier.
        transaction_count: Number of transactions analysed.
    """

    tier: SavingsTier
    summary: str
    suggestions: tuple[str, ...] = ()
    transaction_count: int = 0


@dataclass(frozen=True)
class CategoryShare:
    """Donut slice for one expense category.

    Angles are in radians, clockwise from 12 o'clock (-pi/2).
    """

    category: str
    amount: Decimal
    share: Decimal
    start_angle: float
    end_angle: float
    show_label: bool


@dataclass(frozen=True)
class BudgetOverview:
    """Everything the presentation layer renders after a mutation."""

    totals: BudgetTotals
    category_totals: dict[str, Decimal]
    alerts: list[BudgetAlert]
    advisory: Advisory
    distribution: list[CategoryShare] = field(default_factory=list)
    currency_code: str = DEFAULT_CURRENCY


__all__ = [
    "AlertSeverity",
    "SavingsTier",
    "BudgetTotals",
    "BudgetAlert",
    "Advisory",
    "CategoryShare",
    "BudgetOverview",
]
