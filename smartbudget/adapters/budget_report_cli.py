"""CLI adapter printing the budget overview.

This module wires the stored transactions and limits to the
GetBudgetOverviewUseCase and prints totals, alerts and the advisor output.
"""

from smartbudget.domain.services.formatting import format_amount
from smartbudget.infrastructure.container import (
    build_budget_limits_store,
    build_budget_overview_use_case,
    build_transaction_store,
)
from smartbudget.infrastructure.logging.logger import get_app_logger
from smartbudget.infrastructure.settings import SmartBudgetSettings


def main() -> None:
    """Print the budget overview for the configured storage."""
    logger = get_app_logger()
    settings = SmartBudgetSettings.from_env()
    try:
        store = build_transaction_store(settings)
        limits_store = build_budget_limits_store(settings)
    except RuntimeError as exc:
        logger.error(str(exc))
        return

    use_case = build_budget_overview_use_case(store, limits_store, settings)
    overview = use_case.execute()
    currency = overview.currency_code
    totals = overview.totals

    print(f"Transactions: {len(store)}")
    print(
        f"Income: {format_amount(totals.income, currency)} | "
        f"Expense: {format_amount(totals.expense, currency)} | "
        f"Balance: {format_amount(totals.balance, currency)} | "
        f"Savings rate: {totals.savings_rate}%"
    )
    if overview.category_totals:
        print("Spending by category:")
        for category, amount in overview.category_totals.items():
            print(f"  {category}: {format_amount(amount, currency)}")
    if overview.alerts:
        print("Alerts:")
        for alert in overview.alerts:
            print(
                f"  [{alert.severity.value}] {alert.category}: "
                f"{format_amount(alert.spent, currency)} of "
                f"{format_amount(alert.limit, currency)} "
                f"({alert.percentage}% used)"
            )
    else:
        print("No alerts. Stay on track!")
    print(f"Advisor: {overview.advisory.summary}")
    for index, suggestion in enumerate(overview.advisory.suggestions, start=1):
        print(f"  Suggestion {index}: {suggestion}")


if __name__ == "__main__":  # pragma: no cover
    main()
