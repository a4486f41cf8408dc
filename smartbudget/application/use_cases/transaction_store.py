"""Transaction store backed by the key-value persistence port.

The store is the single source of truth for recorded transactions. Every
mutation is written through the port right away and then announced to the
subscribed listeners, which typically re-query the overview use case.
"""

import json
import time
from collections.abc import Callable
from dataclasses import dataclass, replace
from decimal import Decimal
from uuid import uuid4

from smartbudget.application.ports.key_value_store import KeyValueStorePort
from smartbudget.domain.constants import DEFAULT_MAX_AMOUNT, TRANSACTIONS_KEY
from smartbudget.domain.errors import PersistenceError
from smartbudget.domain.models import Transaction
from smartbudget.domain.services.finance import sort_recent_first
from smartbudget.domain.services.validation import (
    validate_amount,
    validate_category,
    validate_description,
    validate_kind,
)
from smartbudget.infrastructure.logging.logger import get_app_logger


@dataclass(frozen=True)
class StoreChange:
    """Notification sent to listeners after a store operation.

    Attributes:
        action: ``load``, ``add``, ``remove`` or ``clear``.
        transaction_id: Affected transaction, when there is one.
        persisted: False when the write to storage failed.
    """

    action: str
    transaction_id: str | None = None
    persisted: bool = True


StoreListener = Callable[[StoreChange], None]


def _now_millis() -> int:
    return time.time_ns() // 1_000_000


def _new_id() -> str:
    return uuid4().hex


class TransactionStore:
    """Ordered, append/remove-only collection of transactions."""

    def __init__(
        self,
        key_value_store: KeyValueStorePort,
        logger=None,
        max_amount: Decimal = DEFAULT_MAX_AMOUNT,
        storage_key: str = TRANSACTIONS_KEY,
        id_factory: Callable[[], str] | None = None,
        clock: Callable[[], int] | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            key_value_store: Port used to persist transactions.
            logger: Optional logger compatible with logging.Logger-like API.
            max_amount: Inclusive ceiling for transaction amounts.
            storage_key: Key holding the JSON array of transactions.
            id_factory: Optional identifier generator.
            clock: Optional epoch-milliseconds clock.
        """
        self._key_value_store = key_value_store
        self._logger = logger or get_app_logger()
        self._max_amount = max_amount
        self._storage_key = storage_key
        self._id_factory = id_factory or _new_id
        self._clock = clock or _now_millis
        self._transactions: list[Transaction] = []
        self._last_timestamp = 0
        self._listeners: list[StoreListener] = []
        self.last_change: StoreChange | None = None

    @property
    def transactions(self) -> tuple[Transaction, ...]:
        """Transactions in insertion order."""
        return tuple(self._transactions)

    @property
    def max_amount(self) -> Decimal:
        return self._max_amount

    def __len__(self) -> int:
        return len(self._transactions)

    def get(self, transaction_id: str) -> Transaction | None:
        for transaction in self._transactions:
            if transaction.id == transaction_id:
                return transaction
        return None

    def recent(self) -> list[Transaction]:
        """Transactions sorted newest first."""
        return sort_recent_first(self._transactions)

    def subscribe(self, listener: StoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: StoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def load(self) -> int:
        """Replace the in-memory state with the persisted transactions.

        Unreadable or corrupt storage leaves the store empty; malformed
        records are skipped. Nothing is raised.

        Returns:
            int: Number of transactions loaded.
        """
        self._transactions = []
        self._last_timestamp = 0
        try:
            raw = self._key_value_store.get(self._storage_key)
        except PersistenceError as exc:
            self._logger.warning(
                f"Could not read transactions, starting empty: {exc}"
            )
            raw = None

        if raw is not None:
            self._transactions = self._parse(raw)
        if self._transactions:
            self._last_timestamp = max(
                transaction.timestamp for transaction in self._transactions
            )
        self._logger.info(f"Loaded {len(self._transactions)} transactions")
        self._notify(StoreChange(action="load"))
        return len(self._transactions)

    def add(
        self,
        description: str,
        amount,
        category: str,
        kind: str,
    ) -> Transaction:
        """Validate, record and persist a new transaction.

        Args:
            description: Free text; surrounding whitespace is trimmed.
            amount: Positive amount not above the configured ceiling.
            category: One of the known categories.
            kind: ``"income"`` or ``"expense"``.

        Returns:
            Transaction: The recorded transaction.

        Raises:
            ValidationError: If any input is invalid. The store is unchanged.
        """
        transaction = Transaction(
            id=self._id_factory(),
            description=validate_description(description),
            amount=validate_amount(amount, self._max_amount),
            category=validate_category(category),
            kind=validate_kind(kind),
            timestamp=self._next_timestamp(),
        )
        self._transactions.append(transaction)
        persisted = self._save()
        self._logger.info(
            f"Added {transaction.kind} transaction {transaction.id} "
            f"({transaction.category}, {transaction.amount})"
        )
        self._notify(
            StoreChange(
                action="add",
                transaction_id=transaction.id,
                persisted=persisted,
            )
        )
        return transaction

    def remove(self, transaction_id: str) -> bool:
        """Delete the transaction with ``transaction_id`` if present.

        Returns:
            bool: True when a transaction was removed.
        """
        remaining = [
            transaction
            for transaction in self._transactions
            if transaction.id != transaction_id
        ]
        if len(remaining) == len(self._transactions):
            self._logger.debug(f"No transaction {transaction_id} to remove")
            return False
        self._transactions = remaining
        persisted = self._save()
        self._logger.info(f"Removed transaction {transaction_id}")
        self._notify(
            StoreChange(
                action="remove",
                transaction_id=transaction_id,
                persisted=persisted,
            )
        )
        return True

    def clear(self) -> None:
        """Remove every transaction and persist the empty list."""
        count = len(self._transactions)
        self._transactions = []
        persisted = self._save()
        self._logger.info(f"Cleared {count} transactions")
        self._notify(StoreChange(action="clear", persisted=persisted))

    def _parse(self, raw: str) -> list[Transaction]:
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            self._logger.warning(
                f"Stored transactions are corrupt, starting empty: {exc}"
            )
            return []
        if not isinstance(payload, list):
            self._logger.warning(
                "Stored transactions are not a list, starting empty"
            )
            return []

        transactions: list[Transaction] = []
        seen_ids: set[str] = set()
        for index, record in enumerate(payload):
            transaction = self._parse_record(record)
            if transaction is None or transaction.id in seen_ids:
                self._logger.warning(
                    f"Skipping invalid stored transaction at index {index}"
                )
                continue
            seen_ids.add(transaction.id)
            transactions.append(transaction)
        return transactions

    def _parse_record(self, record) -> Transaction | None:
        if not isinstance(record, dict):
            return None
        try:
            transaction = Transaction.from_record(record)
            return replace(
                transaction,
                description=validate_description(transaction.description),
                amount=validate_amount(transaction.amount, self._max_amount),
                category=validate_category(transaction.category),
                kind=validate_kind(transaction.kind),
            )
        except (KeyError, TypeError, ValueError, ArithmeticError):
            return None

    def _save(self) -> bool:
        payload = json.dumps(
            [transaction.to_record() for transaction in self._transactions]
        )
        try:
            self._key_value_store.set(self._storage_key, payload)
        except PersistenceError as exc:
            self._logger.error(
                f"Failed to save transactions, changes will not survive "
                f"a reload: {exc}"
            )
            return False
        return True

    def _next_timestamp(self) -> int:
        timestamp = max(self._clock(), self._last_timestamp)
        self._last_timestamp = timestamp
        return timestamp

    def _notify(self, change: StoreChange) -> None:
        self.last_change = change
        for listener in list(self._listeners):
            listener(change)


__all__ = ["TransactionStore", "StoreChange", "StoreListener"]
