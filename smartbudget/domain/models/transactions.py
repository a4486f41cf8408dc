"""Domain models for recorded transactions."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from smartbudget.domain.constants import EXPENSE, INCOME
from smartbudget.utils.decimal_utils import coerce_decimal, decimal_to_json


@dataclass(frozen=True)
class Transaction:
    """Immutable income or expense record.

    Attributes:
        id: Unique identifier.
        description: Raw user text. Never assume it is safe to render.
        amount: Positive amount.
        category: One of the known categories.
        kind: ``"income"`` or ``"expense"``.
        timestamp: Creation instant in epoch milliseconds.
    """

    id: str
    description: str
    amount: Decimal
    category: str
    kind: str
    timestamp: int

    @property
    def is_income(self) -> bool:
        return self.kind == INCOME

    @property
    def is_expense(self) -> bool:
        return self.kind == EXPENSE

    def to_record(self) -> dict[str, Any]:
        """Return the persisted JSON representation."""
        return {
            "id": self.id,
            "desc": self.description,
            "amount": decimal_to_json(self.amount),
            "category": self.category,
            "type": self.kind,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Transaction":
        """Build a transaction from its persisted representation.

        Raises:
            KeyError: If a field is missing.
            ValueError: If a numeric field is malformed or the timestamp is
                not a non-negative integer.
        """
        return cls(
            id=str(record["id"]),
            description=str(record["desc"]),
            amount=coerce_decimal(record["amount"]),
            category=str(record["category"]),
            kind=str(record["type"]),
            timestamp=_parse_timestamp(record["timestamp"]),
        )


def _parse_timestamp(value: Any) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return value


__all__ = ["Transaction"]
