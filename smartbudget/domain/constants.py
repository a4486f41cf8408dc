"""Domain constants for budgeting."""

from decimal import Decimal

INCOME = "income"
EXPENSE = "expense"
TRANSACTION_KINDS = (INCOME, EXPENSE)

# Canonical order: drives output ordering and top-category tie-breaks.
CATEGORIES = (
    "Food",
    "Transport",
    "Utilities",
    "Entertainment",
    "Health",
    "Shopping",
    "Salary",
    "Other",
)

# Salary has no entry: income categories are exempt from alerting.
DEFAULT_BUDGET_LIMITS = {
    "Food": Decimal("15000"),
    "Transport": Decimal("8000"),
    "Entertainment": Decimal("5000"),
    "Shopping": Decimal("10000"),
    "Utilities": Decimal("6000"),
    "Health": Decimal("7000"),
    "Other": Decimal("5000"),
}

DEFAULT_MAX_AMOUNT = Decimal("10000000")
DEFAULT_CURRENCY = "LKR"

ALERT_WARNING_PERCENT = 80
ALERT_CRITICAL_PERCENT = 100

EXCELLENT_SAVINGS_RATE = 30
MODERATE_SAVINGS_RATE = 10
TARGET_SAVINGS_RATE = 20
EMERGENCY_FUND_MONTHS = 3

TRANSACTIONS_KEY = "sb_transactions"
BUDGET_LIMITS_KEY = "sb_budget_limits"


__all__ = [
    "INCOME",
    "EXPENSE",
    "TRANSACTION_KINDS",
    "CATEGORIES",
    "DEFAULT_BUDGET_LIMITS",
    "DEFAULT_MAX_AMOUNT",
    "DEFAULT_CURRENCY",
    "ALERT_WARNING_PERCENT",
    "ALERT_CRITICAL_PERCENT",
    "EXCELLENT_SAVINGS_RATE",
    "MODERATE_SAVINGS_RATE",
    "TARGET_SAVINGS_RATE",
    "EMERGENCY_FUND_MONTHS",
    "TRANSACTIONS_KEY",
    "BUDGET_LIMITS_KEY",
]
