"""Streamlit dashboard entry point."""

import html
import re
from collections.abc import Mapping, Sequence
from datetime import date, datetime

import altair as alt
import streamlit as st

from smartbudget.application.use_cases.budget_limits import BudgetLimitsStore
from smartbudget.application.use_cases.get_budget_overview import (
    GetBudgetOverviewUseCase,
)
from smartbudget.application.use_cases.transaction_store import (
    TransactionStore,
)
from smartbudget.domain.constants import CATEGORIES, EXPENSE, INCOME
from smartbudget.domain.errors import ValidationError
from smartbudget.domain.models import (
    Advisory,
    AlertSeverity,
    BudgetAlert,
    BudgetTotals,
    CategoryShare,
    SavingsTier,
)
from smartbudget.domain.services.formatting import format_amount
from smartbudget.infrastructure.container import (
    build_budget_limits_store,
    build_budget_overview_use_case,
    build_transaction_store,
)
from smartbudget.infrastructure.logging.logger import get_usage_logger
from smartbudget.infrastructure.settings import SmartBudgetSettings
from smartbudget.utils.decimal_utils import coerce_decimal


CATEGORY_ICONS = {
    "Food": "🍔",
    "Transport": "🚌",
    "Utilities": "💡",
    "Entertainment": "🎬",
    "Health": "🏥",
    "Shopping": "🛍️",
    "Salary": "💼",
    "Other": "📦",
}

TIER_ICONS = {
    SavingsTier.EXCELLENT: "✅",
    SavingsTier.MODERATE: "📊",
    SavingsTier.LOW: "⚠️",
    SavingsTier.OVER_BUDGET: "🚨",
}

PALETTE = [
    "#2563eb",
    "#16a34a",
    "#dc2626",
    "#d97706",
    "#7c3aed",
    "#0891b2",
    "#be185d",
    "#64748b",
]

SAVE_FAILED_MESSAGE = (
    "Unable to save data. Your storage may be full or unavailable; "
    "changes will be lost on reload."
)


MARKDOWN_SPECIAL_CHARS = re.compile(r"([\\`*_{}\[\]()#+\-.!|~>])")


def _escape(value: str) -> str:
    """Escape user text so markdown renders it literally.

    Markdown syntax is backslash-escaped first so the HTML entities added
    afterwards stay intact.
    """
    return html.escape(MARKDOWN_SPECIAL_CHARS.sub(r"\\\1", value), quote=True)


def _get_services() -> tuple[
    TransactionStore,
    BudgetLimitsStore,
    GetBudgetOverviewUseCase,
]:
    """Build the stores once per Streamlit session."""
    if "smartbudget_services" not in st.session_state:
        settings = SmartBudgetSettings.from_env()
        store = build_transaction_store(settings)
        limits_store = build_budget_limits_store(settings)
        use_case = build_budget_overview_use_case(
            store,
            limits_store,
            settings,
        )
        st.session_state["smartbudget_services"] = (
            store,
            limits_store,
            use_case,
        )
    return st.session_state["smartbudget_services"]


def _report_persistence(store: TransactionStore) -> None:
    """Warn the user when the last write did not reach storage."""
    change = store.last_change
    if change is not None and not change.persisted:
        st.warning(SAVE_FAILED_MESSAGE)


def _prepare_donut_chart_data(
    distribution: Sequence[CategoryShare],
    currency_code: str,
) -> list[dict[str, str | float]]:
    """Prepare Altair-ready rows from the category distribution.

    Args:
        distribution: Donut slices in category order.
        currency_code: Currency shown in labels.

    Returns:
        list[dict[str, str | float]]: One row per slice.
    """
    return [
        {
            "category": share.category,
            "amount": float(share.amount),
            "amount_label": format_amount(share.amount, currency_code),
            "share_label": f"{share.share:.1f}%",
            "label": share.category[:4] if share.show_label else "",
            "order": index,
        }
        for index, share in enumerate(distribution)
    ]


def _render_summary(totals: BudgetTotals, currency_code: str) -> None:
    """Render the income, expense, balance and savings metrics."""
    income_col, expense_col, balance_col, rate_col = st.columns(4)
    income_col.metric("Total income", format_amount(totals.income, currency_code))
    expense_col.metric(
        "Total expense",
        format_amount(totals.expense, currency_code),
    )
    balance_col.metric("Balance", format_amount(totals.balance, currency_code))
    rate_col.metric("Savings rate", f"{totals.savings_rate}%")


def _render_add_form(store: TransactionStore) -> None:
    """Render the sidebar form that records a transaction."""
    usage_logger = get_usage_logger()
    with st.sidebar.form("add-transaction", clear_on_submit=True):
        st.subheader("Add transaction")
        description = st.text_input("Description")
        amount = st.number_input(
            "Amount",
            min_value=0.0,
            step=100.0,
            format="%.2f",
        )
        category = st.selectbox("Category", options=list(CATEGORIES))
        kind = st.selectbox("Type", options=[EXPENSE, INCOME])
        submitted = st.form_submit_button("Add")

    if not submitted:
        return
    try:
        transaction = store.add(description, amount, category, kind)
    except ValidationError as exc:
        st.sidebar.error(str(exc))
        return
    usage_logger.info(f"Transaction {transaction.id} added from dashboard")
    _report_persistence(store)


def _limit_widget_key(category: str) -> str:
    return f"limit-{category}"


def _apply_limits(
    limits_store: BudgetLimitsStore,
    submitted: Mapping[str, float],
) -> list[str]:
    """Write the edited limits to the store.

    A value of zero removes the limit of that category so it is no longer
    alerted on. Unchanged values are left alone.

    Args:
        limits_store: Store to update.
        submitted: Limit entered per category.

    Returns:
        list[str]: Categories whose limit changed.
    """
    current = limits_store.limits
    changed: list[str] = []
    for category, raw in submitted.items():
        value = coerce_decimal(raw)
        if value > 0:
            if current.get(category) != value:
                limits_store.set_limit(category, value)
                changed.append(category)
        elif category in current:
            limits_store.remove_limit(category)
            changed.append(category)
    return changed


def _render_limits_editor(limits_store: BudgetLimitsStore) -> None:
    """Render the sidebar form that edits the budget limit table."""
    limits = limits_store.limits
    with st.sidebar.form("budget-limits"):
        st.subheader("Budget limits")
        st.caption("Set a limit to 0 to stop alerts for that category.")
        submitted_limits = {
            category: st.number_input(
                category,
                min_value=0.0,
                value=float(limits.get(category, 0)),
                step=500.0,
                format="%.2f",
                key=_limit_widget_key(category),
            )
            for category in CATEGORIES
        }
        submitted = st.form_submit_button("Save limits")

    if submitted:
        try:
            changed = _apply_limits(limits_store, submitted_limits)
        except ValidationError as exc:
            st.sidebar.error(str(exc))
            return
        if changed:
            get_usage_logger().info(
                f"Budget limits updated from dashboard: {', '.join(changed)}"
            )
    if st.sidebar.button("Restore default limits"):
        limits_store.reset()
        for category in CATEGORIES:
            st.session_state.pop(_limit_widget_key(category), None)
        get_usage_logger().info("Budget limits restored from dashboard")
        st.rerun()


def _render_category_chart(
    distribution: Sequence[CategoryShare],
    currency_code: str,
    chart_size: int = 300,
) -> None:
    """Render a donut chart of expenses by category."""
    st.subheader("Spending by category")
    if not distribution:
        st.info("No expenses")
        return
    data = _prepare_donut_chart_data(distribution, currency_code)
    base = alt.Chart(alt.Data(values=data)).encode(
        theta=alt.Theta("amount:Q", stack=True),
        color=alt.Color(
            "category:N",
            scale=alt.Scale(range=PALETTE),
            sort=list(CATEGORIES),
            legend=alt.Legend(orient="bottom", title=None, columns=4),
        ),
        order=alt.Order("order:Q"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    arcs = base.mark_arc(
        innerRadius=chart_size * 0.45 / 2,
        stroke="#fff",
        strokeWidth=2,
    )
    labels = base.mark_text(
        radius=chart_size * 0.65 / 2,
        fontWeight="bold",
        color="#fff",
    ).encode(text="label:N")
    chart = alt.layer(arcs, labels).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.altair_chart(chart, use_container_width=False)


def _render_alerts(alerts: Sequence[BudgetAlert], currency_code: str) -> None:
    """Render budget alerts, or a reassuring note when there are none."""
    st.subheader("Budget alerts")
    if not alerts:
        st.caption("No alerts. Stay on track!")
        return
    for alert in alerts:
        icon = CATEGORY_ICONS.get(alert.category, "📦")
        message = (
            f"{icon} **{_escape(alert.category)}**: "
            f"{format_amount(alert.spent, currency_code)} spent of "
            f"{format_amount(alert.limit, currency_code)} limit "
            f"({alert.percentage}% used)"
        )
        if alert.severity is AlertSeverity.CRITICAL:
            st.error(f"{message} – OVER BUDGET!")
        else:
            st.warning(message)


def _render_advisory(advisory: Advisory) -> None:
    """Render the advisor summary and suggestions."""
    if advisory.tier is SavingsTier.EMPTY:
        st.caption(advisory.summary)
        return
    icon = TIER_ICONS.get(advisory.tier, "")
    st.markdown(f"**Performance summary**  \n{icon} {advisory.summary}")
    for index, suggestion in enumerate(advisory.suggestions, start=1):
        st.markdown(f"**Suggestion {index}:**  \n{suggestion}")
    st.caption(
        f"Analysis based on {advisory.transaction_count} transaction(s) · "
        f"{date.today().strftime('%d/%m/%Y')}"
    )


def _render_transactions(store: TransactionStore, currency_code: str) -> None:
    """Render the transaction list, newest first, with delete buttons."""
    st.subheader("Transactions")
    transactions = store.recent()
    if not transactions:
        st.caption("No transactions yet. Add one from the sidebar!")
        return
    for transaction in transactions:
        info_col, amount_col, action_col = st.columns([6, 3, 1])
        icon = CATEGORY_ICONS.get(transaction.category, "📦")
        created = datetime.fromtimestamp(transaction.timestamp / 1000)
        info_col.markdown(
            f"{icon} {_escape(transaction.description)}  \n"
            f"{_escape(transaction.category)} · "
            f"{created.strftime('%d/%m/%Y')}"
        )
        sign = "−" if transaction.is_expense else "+"
        amount_col.markdown(
            f"{sign}{format_amount(transaction.amount, currency_code)}"
        )
        if action_col.button("🗑️", key=f"delete-{transaction.id}"):
            store.remove(transaction.id)
            get_usage_logger().info(
                f"Transaction {transaction.id} deleted from dashboard"
            )
            _report_persistence(store)
            st.rerun()


def _render_reset(store: TransactionStore) -> None:
    """Render the reset control in the sidebar."""
    st.sidebar.divider()
    confirm = st.sidebar.checkbox("I understand this cannot be undone")
    if st.sidebar.button("Reset all transactions", disabled=not confirm):
        store.clear()
        st.session_state["show_advice"] = False
        get_usage_logger().info("All transactions reset from dashboard")
        _report_persistence(store)
        st.rerun()


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="SmartBudget", layout="wide")
    st.title("SmartBudget")
    st.caption(date.today().strftime("%B %Y"))

    store, limits_store, use_case = _get_services()
    _render_add_form(store)
    _render_limits_editor(limits_store)
    _render_reset(store)

    overview = use_case.execute()
    currency_code = overview.currency_code
    _render_summary(overview.totals, currency_code)

    chart_col, alerts_col = st.columns(2)
    with chart_col:
        _render_category_chart(overview.distribution, currency_code)
    with alerts_col:
        _render_alerts(overview.alerts, currency_code)

    st.subheader("AI advisor")
    if st.button("Analyze my spending"):
        st.session_state["show_advice"] = True
    if st.session_state.get("show_advice"):
        _render_advisory(overview.advisory)
    else:
        st.caption(
            'Click "Analyze my spending" to get personalized insights.'
        )

    _render_transactions(store, currency_code)


if __name__ == "__main__":  # pragma: no cover
    main()
