"""Domain services for budget aggregates."""

import math
from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

from smartbudget.domain.constants import CATEGORIES
from smartbudget.domain.models import BudgetTotals, CategoryShare, Transaction
from smartbudget.utils.decimal_utils import round_percentage

# Slices narrower than this (in radians) get no label.
MIN_LABEL_ANGLE = 0.25


def compute_totals(transactions: Iterable[Transaction]) -> BudgetTotals:
    """Compute income, expense, balance and savings rate.

    Args:
        transactions: Recorded transactions.

    Returns:
        BudgetTotals: Totals where ``savings_rate`` is 0 without income.
    """
    income = Decimal("0")
    expense = Decimal("0")
    for transaction in transactions:
        if transaction.is_income:
            income += transaction.amount
        elif transaction.is_expense:
            expense += transaction.amount

    balance = income - expense
    savings_rate = 0
    if income > 0:
        savings_rate = round_percentage(balance / income * Decimal("100"))
    return BudgetTotals(
        income=income,
        expense=expense,
        balance=balance,
        savings_rate=savings_rate,
    )


def compute_category_totals(
    transactions: Iterable[Transaction],
) -> dict[str, Decimal]:
    """Sum expense amounts per category.

    Categories without expenses are absent. Keys follow the canonical
    category order; categories outside it follow in first-seen order.

    Args:
        transactions: Recorded transactions.

    Returns:
        dict[str, Decimal]: Expense total by category.
    """
    totals: dict[str, Decimal] = {}
    for transaction in transactions:
        if not transaction.is_expense:
            continue
        totals[transaction.category] = (
            totals.get(transaction.category, Decimal("0"))
            + transaction.amount
        )
    return _in_category_order(totals)


def find_top_category(
    category_totals: Mapping[str, Decimal],
) -> tuple[str, Decimal] | None:
    """Return the category with the highest expense total.

    Ties go to the category that comes first in the canonical order.
    """
    top: tuple[str, Decimal] | None = None
    for category, amount in _in_category_order(category_totals).items():
        if top is None or amount > top[1]:
            top = (category, amount)
    return top


def find_over_budget_categories(
    category_totals: Mapping[str, Decimal],
    limits: Mapping[str, Decimal],
) -> list[str]:
    """Return categories whose spending strictly exceeds their limit.

    Categories without a configured limit never qualify.
    """
    return [
        category
        for category, spent in _in_category_order(category_totals).items()
        if category in limits and spent > limits[category]
    ]


def compute_category_distribution(
    category_totals: Mapping[str, Decimal],
) -> list[CategoryShare]:
    """Compute donut slices for the expense categories.

    The first slice starts at 12 o'clock and slices run clockwise in the
    order of ``category_totals``.

    Args:
        category_totals: Expense total by category.

    Returns:
        list[CategoryShare]: Slices, empty when there is no expense.
    """
    total = sum(category_totals.values(), start=Decimal("0"))
    if total <= 0:
        return []
    shares: list[CategoryShare] = []
    start_angle = -math.pi / 2
    for category, amount in category_totals.items():
        slice_angle = float(amount / total) * 2 * math.pi
        shares.append(
            CategoryShare(
                category=category,
                amount=amount,
                share=amount / total * Decimal("100"),
                start_angle=start_angle,
                end_angle=start_angle + slice_angle,
                show_label=slice_angle > MIN_LABEL_ANGLE,
            )
        )
        start_angle += slice_angle
    return shares


def _in_category_order(
    totals: Mapping[str, Decimal],
) -> dict[str, Decimal]:
    ordered = {
        category: totals[category]
        for category in CATEGORIES
        if category in totals
    }
    for category, amount in totals.items():
        if category not in ordered:
            ordered[category] = amount
    return ordered


def sort_recent_first(
    transactions: Sequence[Transaction],
) -> list[Transaction]:
    """Return transactions newest first; on equal timestamps, later entries first."""
    indexed = list(enumerate(transactions))
    indexed.sort(key=lambda item: (-item[1].timestamp, -item[0]))
    return [transaction for _, transaction in indexed]


__all__ = [
    "compute_totals",
    "compute_category_totals",
    "find_top_category",
    "find_over_budget_categories",
    "compute_category_distribution",
    "sort_recent_first",
]
