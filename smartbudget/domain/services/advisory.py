"""Rule-based spending advisor.

The advisor is a fixed decision table: the savings rate picks a summary
tier, then a short list of suggestion rules fills exactly two slots.
"""

from collections.abc import Callable, Mapping
from decimal import Decimal

from smartbudget.domain.constants import (
    DEFAULT_CURRENCY,
    EMERGENCY_FUND_MONTHS,
    EXCELLENT_SAVINGS_RATE,
    MODERATE_SAVINGS_RATE,
    TARGET_SAVINGS_RATE,
)
from smartbudget.domain.models import Advisory, BudgetTotals, SavingsTier
from smartbudget.domain.services.finance import (
    find_over_budget_categories,
    find_top_category,
)
from smartbudget.domain.services.formatting import format_amount

EMPTY_MESSAGE = "No transactions to analyze yet. Add some transactions first."

# First match wins.
SAVINGS_TIER_RULES: tuple[tuple[SavingsTier, Callable[[int], bool]], ...] = (
    (SavingsTier.OVER_BUDGET, lambda rate: rate < 0),
    (SavingsTier.EXCELLENT, lambda rate: rate >= EXCELLENT_SAVINGS_RATE),
    (SavingsTier.MODERATE, lambda rate: rate >= MODERATE_SAVINGS_RATE),
    (SavingsTier.LOW, lambda rate: True),
)

SUMMARY_TEMPLATES = {
    SavingsTier.OVER_BUDGET: (
        "You are currently spending more than you earn. Balance is "
        "{balance}. Immediate budget review needed."
    ),
    SavingsTier.EXCELLENT: (
        "Excellent financial discipline! With a {rate}% savings rate, "
        "you're managing your budget very effectively."
    ),
    SavingsTier.MODERATE: (
        "Moderate savings rate of {rate}%. You have {balance} remaining "
        "this month."
    ),
    SavingsTier.LOW: (
        "Low savings rate of {rate}%. Consider reducing non-essential "
        "spending."
    ),
}

# Fallback text per suggestion slot.
SLOT_FALLBACKS = (
    "Keep tracking your expenses consistently.",
    "Review your budget limits monthly.",
)


def classify_savings_tier(savings_rate: int) -> SavingsTier:
    """Return the first tier whose rule matches ``savings_rate``."""
    for tier, matches in SAVINGS_TIER_RULES:
        if matches(savings_rate):
            return tier
    return SavingsTier.LOW


def generate_advisory(
    transaction_count: int,
    totals: BudgetTotals,
    category_totals: Mapping[str, Decimal],
    limits: Mapping[str, Decimal],
    currency_code: str = DEFAULT_CURRENCY,
) -> Advisory:
    """Build the advisor summary and two suggestions.

    Args:
        transaction_count: Number of recorded transactions.
        totals: Aggregate totals of those transactions.
        category_totals: Expense total by category.
        limits: Budget limit by category.
        currency_code: Currency shown in amounts.

    Returns:
        Advisory: Empty-state advisory without suggestions when there is
        nothing to analyze, otherwise a summary and exactly two suggestions.
    """
    if transaction_count == 0:
        return Advisory(tier=SavingsTier.EMPTY, summary=EMPTY_MESSAGE)

    tier = classify_savings_tier(totals.savings_rate)
    summary = SUMMARY_TEMPLATES[tier].format(
        rate=totals.savings_rate,
        balance=format_amount(totals.balance, currency_code),
    )

    suggestions: list[str] = []
    top = find_top_category(category_totals)
    if top is not None:
        category, amount = top
        suggestions.append(
            f"Your highest spending category is {category} at "
            f"{format_amount(amount, currency_code)}. Review this category "
            "for potential savings."
        )

    over_budget = find_over_budget_categories(category_totals, limits)
    if over_budget:
        suggestions.append(
            f"You have exceeded budget limits in: {', '.join(over_budget)}. "
            "Set stricter limits or reduce spending here."
        )
    elif totals.savings_rate < TARGET_SAVINGS_RATE and totals.income > 0:
        target = totals.income * Decimal(TARGET_SAVINGS_RATE) / Decimal("100")
        suggestions.append(
            "Aim for a 20-30% savings rate. Try allocating "
            f"{format_amount(target, currency_code)} as savings before "
            "spending."
        )

    if len(suggestions) < 2:
        fund = totals.expense * EMERGENCY_FUND_MONTHS
        suggestions.append(
            f"Maintain an emergency fund of at least {EMERGENCY_FUND_MONTHS} "
            f"months' expenses ({format_amount(fund, currency_code)})."
        )
    for slot, fallback in enumerate(SLOT_FALLBACKS):
        if len(suggestions) <= slot:
            suggestions.append(fallback)

    return Advisory(
        tier=tier,
        summary=summary,
        suggestions=tuple(suggestions[:2]),
        transaction_count=transaction_count,
    )


__all__ = [
    "EMPTY_MESSAGE",
    "SAVINGS_TIER_RULES",
    "SUMMARY_TEMPLATES",
    "SLOT_FALLBACKS",
    "classify_savings_tier",
    "generate_advisory",
]
