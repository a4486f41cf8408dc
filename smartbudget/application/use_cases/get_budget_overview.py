"""Use case to compute the budget overview from the transaction store."""

from decimal import Decimal

from smartbudget.application.use_cases.budget_limits import BudgetLimitsStore
from smartbudget.application.use_cases.transaction_store import (
    TransactionStore,
)
from smartbudget.domain.constants import DEFAULT_CURRENCY
from smartbudget.domain.models import (
    Advisory,
    BudgetAlert,
    BudgetOverview,
    BudgetTotals,
    CategoryShare,
)
from smartbudget.domain.services.advisory import generate_advisory
from smartbudget.domain.services.alerts import evaluate_budget_alerts
from smartbudget.domain.services.finance import (
    compute_category_distribution,
    compute_category_totals,
    compute_totals,
)
from smartbudget.infrastructure.logging.logger import get_app_logger


class GetBudgetOverviewUseCase:
    """Query totals, alerts and advice for the current transactions.

    Every query recomputes from the store, so callers simply re-query after
    a store change notification.
    """

    def __init__(
        self,
        store: TransactionStore,
        limits_store: BudgetLimitsStore | None = None,
        currency_code: str = DEFAULT_CURRENCY,
        logger=None,
    ) -> None:
        """Initialize the use case.

        Args:
            store: Transaction store to read from.
            limits_store: Optional limit table; defaults apply when omitted.
            currency_code: Currency shown in advisory amounts.
            logger: Optional logger compatible with logging.Logger-like API.
        """
        self._store = store
        self._limits_store = limits_store or BudgetLimitsStore(logger=logger)
        self._currency_code = currency_code
        self._logger = logger or get_app_logger()

    def totals(self) -> BudgetTotals:
        return compute_totals(self._store.transactions)

    def category_totals(self) -> dict[str, Decimal]:
        return compute_category_totals(self._store.transactions)

    def alerts(self) -> list[BudgetAlert]:
        return evaluate_budget_alerts(
            self.category_totals(),
            self._limits_store.limits,
        )

    def advisory(self) -> Advisory:
        transactions = self._store.transactions
        return generate_advisory(
            len(transactions),
            compute_totals(transactions),
            compute_category_totals(transactions),
            self._limits_store.limits,
            currency_code=self._currency_code,
        )

    def distribution(self) -> list[CategoryShare]:
        return compute_category_distribution(self.category_totals())

    def execute(self) -> BudgetOverview:
        """Return every derived view in one snapshot.

        Returns:
            BudgetOverview: Totals, category totals, alerts, advisory and
            chart distribution.
        """
        transactions = self._store.transactions
        limits = self._limits_store.limits
        totals = compute_totals(transactions)
        category_totals = compute_category_totals(transactions)
        alerts = evaluate_budget_alerts(category_totals, limits)
        advisory = generate_advisory(
            len(transactions),
            totals,
            category_totals,
            limits,
            currency_code=self._currency_code,
        )
        self._logger.info(
            f"Budget overview computed: income={totals.income}, "
            f"expense={totals.expense}, alerts={len(alerts)}, "
            f"tier={advisory.tier.value}"
        )
        return BudgetOverview(
            totals=totals,
            category_totals=category_totals,
            alerts=alerts,
            advisory=advisory,
            distribution=compute_category_distribution(category_totals),
            currency_code=self._currency_code,
        )


__all__ = ["GetBudgetOverviewUseCase", "BudgetOverview"]
