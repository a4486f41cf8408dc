"""Tests for the TransactionStore."""

import json
from decimal import Decimal
from itertools import count
from unittest.mock import MagicMock

import pytest

from smartbudget.application.use_cases.transaction_store import (
    StoreChange,
    TransactionStore,
)
from smartbudget.domain.constants import TRANSACTIONS_KEY
from smartbudget.domain.errors import (
    PersistenceError,
    PersistenceReadError,
    ValidationError,
)
from smartbudget.infrastructure.key_value_store import InMemoryKeyValueStore


def _make_store(kv=None, clock=None):
    ids = count(1)
    return TransactionStore(
        kv if kv is not None else InMemoryKeyValueStore(),
        logger=MagicMock(),
        id_factory=lambda: f"tx-{next(ids)}",
        clock=clock or (lambda: 1_700_000_000_000),
    )


def test_add_records_and_persists_transaction() -> None:
    kv = InMemoryKeyValueStore()
    store = _make_store(kv)

    transaction = store.add("  Groceries ", "5000", "Food", "expense")

    assert transaction.id == "tx-1"
    assert transaction.description == "Groceries"
    assert transaction.amount == Decimal("5000")
    assert store.transactions == (transaction,)
    stored = json.loads(kv.get(TRANSACTIONS_KEY))
    assert stored == [
        {
            "id": "tx-1",
            "desc": "Groceries",
            "amount": 5000,
            "category": "Food",
            "type": "expense",
            "timestamp": 1_700_000_000_000,
        }
    ]


@pytest.mark.parametrize("amount", [0, -50])
def test_non_positive_amount_leaves_store_unchanged(amount) -> None:
    kv = MagicMock()
    store = _make_store(kv)

    with pytest.raises(ValidationError):
        store.add("Refund", amount, "Food", "expense")

    assert store.transactions == ()
    kv.set.assert_not_called()


def test_empty_description_and_ceiling_are_rejected() -> None:
    store = _make_store()

    with pytest.raises(ValidationError):
        store.add("   ", 10, "Food", "expense")
    with pytest.raises(ValidationError):
        store.add("Yacht", 10_000_001, "Shopping", "expense")

    assert len(store) == 0


def test_ids_are_unique_within_the_same_millisecond() -> None:
    store = TransactionStore(InMemoryKeyValueStore(), logger=MagicMock(),
                             clock=lambda: 42)

    ids = {store.add(f"item {i}", 1, "Other", "expense").id
           for i in range(300)}

    assert len(ids) == 300


def test_timestamps_never_go_backwards() -> None:
    ticks = iter([100, 90, 120])
    store = _make_store(clock=lambda: next(ticks))

    stamps = [
        store.add("a", 1, "Food", "expense").timestamp,
        store.add("b", 1, "Food", "expense").timestamp,
        store.add("c", 1, "Food", "expense").timestamp,
    ]

    assert stamps == [100, 100, 120]


def test_remove_existing_and_missing_transaction() -> None:
    kv = InMemoryKeyValueStore()
    store = _make_store(kv)
    first = store.add("Bus", 100, "Transport", "expense")
    store.add("Salary", 20000, "Salary", "income")

    assert store.remove(first.id) is True
    assert [tx.id for tx in store.transactions] == ["tx-2"]
    assert store.remove("missing") is False
    assert [r["id"] for r in json.loads(kv.get(TRANSACTIONS_KEY))] == ["tx-2"]


def test_clear_empties_store_and_storage() -> None:
    kv = InMemoryKeyValueStore()
    store = _make_store(kv)
    store.add("Bus", 100, "Transport", "expense")

    store.clear()

    assert store.transactions == ()
    assert kv.get(TRANSACTIONS_KEY) == "[]"


def test_round_trip_through_storage_preserves_order() -> None:
    kv = InMemoryKeyValueStore()
    store = _make_store(kv)
    store.add("Lunch", "12.50", "Food", "expense")
    store.add("Pay", 20000, "Salary", "income")
    store.add("Cinema", "0.1", "Entertainment", "expense")

    reloaded = _make_store(kv)
    loaded = reloaded.load()

    assert loaded == 3
    assert reloaded.transactions == store.transactions


def test_load_without_stored_data_is_empty() -> None:
    store = _make_store()

    assert store.load() == 0
    assert store.transactions == ()


def test_load_recovers_from_read_failure() -> None:
    kv = MagicMock()
    kv.get.side_effect = PersistenceReadError("disk unavailable")
    logger = MagicMock()
    store = TransactionStore(kv, logger=logger)

    assert store.load() == 0
    logger.warning.assert_called_once()


@pytest.mark.parametrize("payload", ["{not json", '{"id": "x"}', "42"])
def test_load_recovers_from_corrupt_payload(payload) -> None:
    kv = InMemoryKeyValueStore({TRANSACTIONS_KEY: payload})
    logger = MagicMock()
    store = TransactionStore(kv, logger=logger)

    assert store.load() == 0
    assert store.transactions == ()
    logger.warning.assert_called()


def test_load_skips_malformed_records() -> None:
    records = [
        {"id": "ok", "desc": "Bus", "amount": 120, "category": "Transport",
         "type": "expense", "timestamp": 5},
        {"id": "neg", "desc": "Bad", "amount": -1, "category": "Food",
         "type": "expense", "timestamp": 6},
        {"id": "partial"},
        "not a record",
        {"id": "ok", "desc": "Dup", "amount": 1, "category": "Food",
         "type": "expense", "timestamp": 7},
    ]
    kv = InMemoryKeyValueStore({TRANSACTIONS_KEY: json.dumps(records)})
    store = _make_store(kv)

    assert store.load() == 1
    assert store.transactions[0].id == "ok"


@pytest.mark.parametrize(
    "timestamp",
    ["Infinity", "-Infinity", "NaN", "-5", "1.5", '"12"', "true", "null"],
)
def test_load_skips_records_with_invalid_timestamps(timestamp) -> None:
    payload = (
        '[{"id": "ok", "desc": "Bus", "amount": 120, "category": "Transport",'
        ' "type": "expense", "timestamp": 5},'
        ' {"id": "bad", "desc": "Taxi", "amount": 300, "category": "Transport",'
        f' "type": "expense", "timestamp": {timestamp}}}]'
    )
    kv = InMemoryKeyValueStore({TRANSACTIONS_KEY: payload})
    logger = MagicMock()
    store = TransactionStore(kv, logger=logger)

    assert store.load() == 1
    assert [tx.id for tx in store.transactions] == ["ok"]
    logger.warning.assert_called_once()


def test_load_accepts_whole_float_timestamps() -> None:
    payload = (
        '[{"id": "a", "desc": "Bus", "amount": 120, "category": "Transport",'
        ' "type": "expense", "timestamp": 1700000000000.0}]'
    )
    store = _make_store(InMemoryKeyValueStore({TRANSACTIONS_KEY: payload}))

    store.load()

    assert store.transactions[0].timestamp == 1_700_000_000_000


def test_fractional_amounts_survive_a_reload() -> None:
    kv = InMemoryKeyValueStore()
    store = _make_store(kv)
    store.add("Coffee", "1234567.125", "Food", "expense")
    store.add("Refund", "0.1", "Other", "income")
    store.add("Bonus", Decimal("9999999.994999"), "Salary", "income")

    reloaded = _make_store(kv)
    reloaded.load()

    assert reloaded.transactions == store.transactions
    assert [tx.amount for tx in reloaded.transactions] == [
        Decimal("1234567.13"),
        Decimal("0.10"),
        Decimal("9999999.99"),
    ]


def test_write_failure_keeps_memory_state_and_reports_it() -> None:
    kv = MagicMock()
    kv.set.side_effect = PersistenceError("quota exceeded")
    logger = MagicMock()
    store = TransactionStore(kv, logger=logger, id_factory=lambda: "tx")
    changes: list[StoreChange] = []
    store.subscribe(changes.append)

    transaction = store.add("Taxi", 300, "Transport", "expense")

    assert store.transactions == (transaction,)
    assert changes == [
        StoreChange(action="add", transaction_id="tx", persisted=False)
    ]
    assert store.last_change.persisted is False
    logger.error.assert_called_once()


def test_listeners_are_notified_until_unsubscribed() -> None:
    store = _make_store()
    listener = MagicMock()
    store.subscribe(listener)

    added = store.add("Tea", 5, "Food", "expense")
    store.remove(added.id)
    store.unsubscribe(listener)
    store.clear()

    actions = [call.args[0].action for call in listener.call_args_list]
    assert actions == ["add", "remove"]


def test_recent_returns_newest_first() -> None:
    ticks = iter([1, 3, 2])
    store = _make_store(clock=lambda: next(ticks))
    store.add("a", 1, "Food", "expense")
    store.add("b", 1, "Food", "expense")
    store.add("c", 1, "Food", "expense")

    assert [tx.description for tx in store.recent()] == ["c", "b", "a"]
    assert store.get("tx-2").description == "b"
    assert store.get("nope") is None
