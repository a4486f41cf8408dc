"""Tests for the aggregation domain services."""

import math
from decimal import Decimal

from smartbudget.domain import constants
from smartbudget.domain.models import (
    Advisory,
    BudgetOverview,
    SavingsTier,
    Transaction,
)
from smartbudget.domain.services.finance import (
    compute_category_distribution,
    compute_category_totals,
    compute_totals,
    find_over_budget_categories,
    find_top_category,
    sort_recent_first,
)


def _tx(
    amount: str,
    kind: str = "expense",
    category: str = "Food",
    timestamp: int = 1,
    tx_id: str | None = None,
) -> Transaction:
    return Transaction(
        id=tx_id or f"{kind}-{category}-{amount}-{timestamp}",
        description="entry",
        amount=Decimal(amount),
        category=category,
        kind=kind,
        timestamp=timestamp,
    )


def test_compute_totals_for_income_and_expense() -> None:
    """Income 20000 and expense 5000 should give a 75% savings rate."""
    transactions = [
        _tx("5000", category="Food"),
        _tx("20000", kind="income", category="Salary"),
    ]

    totals = compute_totals(transactions)

    assert totals.income == Decimal("20000")
    assert totals.expense == Decimal("5000")
    assert totals.balance == Decimal("15000")
    assert totals.savings_rate == 75


def test_compute_totals_empty_list_is_all_zero() -> None:
    totals = compute_totals([])

    assert totals.income == 0
    assert totals.expense == 0
    assert totals.balance == 0
    assert totals.savings_rate == 0


def test_savings_rate_is_zero_without_income() -> None:
    """No income must give exactly 0, never a division error."""
    totals = compute_totals([_tx("300"), _tx("50", category="Health")])

    assert totals.savings_rate == 0
    assert totals.balance == Decimal("-350")


def test_savings_rate_can_be_negative() -> None:
    totals = compute_totals(
        [_tx("1000", kind="income", category="Salary"), _tx("1500")]
    )

    assert totals.savings_rate == -50


def test_savings_rate_rounds_half_away_from_zero() -> None:
    """2.5% rounds to 3 and -2.5% rounds to -3."""
    positive = compute_totals(
        [_tx("1000", kind="income", category="Salary"), _tx("975")]
    )
    negative = compute_totals(
        [_tx("1000", kind="income", category="Salary"), _tx("1025")]
    )

    assert positive.savings_rate == 3
    assert negative.savings_rate == -3


def test_balance_is_income_minus_expense() -> None:
    transactions = [
        _tx("0.10", kind="income", category="Salary"),
        _tx("0.20", kind="income", category="Salary", timestamp=2),
        _tx("0.05"),
    ]

    totals = compute_totals(transactions)

    assert totals.income - totals.expense == totals.balance
    assert totals.balance == Decimal("0.25")


def test_category_totals_only_sum_expenses() -> None:
    transactions = [
        _tx("100", category="Transport"),
        _tx("200", category="Food"),
        _tx("50", category="Food", timestamp=2),
        _tx("9000", kind="income", category="Salary"),
    ]

    totals = compute_category_totals(transactions)

    assert totals == {"Food": Decimal("250"), "Transport": Decimal("100")}
    assert "Salary" not in totals
    assert list(totals) == ["Food", "Transport"]


def test_category_totals_empty_list() -> None:
    assert compute_category_totals([]) == {}


def test_find_top_category_breaks_ties_in_category_order() -> None:
    """Transport comes before Shopping in the category enumeration."""
    totals = {"Shopping": Decimal("500"), "Transport": Decimal("500")}

    assert find_top_category(totals) == ("Transport", Decimal("500"))


def test_find_top_category_none_without_expenses() -> None:
    assert find_top_category({}) is None


def test_find_over_budget_is_strictly_greater() -> None:
    totals = {
        "Food": Decimal("15000"),
        "Transport": Decimal("8000.01"),
        "Salary": Decimal("999999"),
    }
    limits = {"Food": Decimal("15000"), "Transport": Decimal("8000")}

    assert find_over_budget_categories(totals, limits) == ["Transport"]


def test_category_distribution_angles_cover_full_circle() -> None:
    totals = {"Food": Decimal("750"), "Other": Decimal("250")}

    shares = compute_category_distribution(totals)

    assert [share.category for share in shares] == ["Food", "Other"]
    assert shares[0].start_angle == -math.pi / 2
    assert math.isclose(shares[0].end_angle, math.pi, rel_tol=1e-9)
    assert math.isclose(
        shares[-1].end_angle,
        3 * math.pi / 2,
        rel_tol=1e-9,
    )
    assert shares[0].share == Decimal("75")
    assert all(share.show_label for share in shares)


def test_category_distribution_hides_labels_on_thin_slices() -> None:
    totals = {"Food": Decimal("99"), "Health": Decimal("1")}

    shares = compute_category_distribution(totals)

    assert shares[0].show_label is True
    assert shares[1].show_label is False


def test_category_distribution_empty_without_expenses() -> None:
    assert compute_category_distribution({}) == []


def test_sort_recent_first_orders_by_timestamp() -> None:
    first = _tx("1", timestamp=10, tx_id="a")
    second = _tx("2", timestamp=30, tx_id="b")
    third = _tx("3", timestamp=30, tx_id="c")

    result = sort_recent_first([first, second, third])

    assert [tx.id for tx in result] == ["c", "b", "a"]


def test_overview_currency_follows_default_currency() -> None:
    overview = BudgetOverview(
        totals=compute_totals([]),
        category_totals={},
        alerts=[],
        advisory=Advisory(tier=SavingsTier.EMPTY, summary=""),
    )

    assert overview.currency_code == constants.DEFAULT_CURRENCY
    assert overview.distribution == []
