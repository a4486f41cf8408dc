"""Composition root for wiring infrastructure adapters."""

from smartbudget.application.ports.database import DatabaseEnginePort
from smartbudget.application.ports.key_value_store import KeyValueStorePort
from smartbudget.application.use_cases.budget_limits import BudgetLimitsStore
from smartbudget.application.use_cases.get_budget_overview import (
    GetBudgetOverviewUseCase,
)
from smartbudget.application.use_cases.transaction_store import (
    TransactionStore,
)
from smartbudget.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from smartbudget.infrastructure.key_value_store import (
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    SqlAlchemyKeyValueStore,
)
from smartbudget.infrastructure.logging.logger import get_app_logger
from smartbudget.infrastructure.settings import BACKENDS, SmartBudgetSettings


def build_database_adapter(
    settings: SmartBudgetSettings | None = None,
) -> DatabaseEnginePort:
    """Return the database adapter instance."""
    resolved = settings or SmartBudgetSettings.from_env()
    if not resolved.db_url:
        raise RuntimeError("SQLAlchemy backend requires SMARTBUDGET_DB_URL.")
    return SqlAlchemyDatabaseEngineAdapter(resolved.db_url)


def build_key_value_store(
    settings: SmartBudgetSettings | None = None,
) -> KeyValueStorePort:
    """Return the configured persistence gateway."""
    resolved = settings or SmartBudgetSettings.from_env()
    if resolved.backend not in BACKENDS:
        raise RuntimeError(
            f"Unknown SMARTBUDGET_BACKEND '{resolved.backend}'. "
            f"Expected one of: {', '.join(BACKENDS)}."
        )
    if resolved.backend == "memory":
        return InMemoryKeyValueStore()
    if resolved.backend == "file":
        if resolved.json_file is None:
            raise RuntimeError("File backend requires SMARTBUDGET_JSON_FILE.")
        return JsonFileKeyValueStore(resolved.json_file)
    return SqlAlchemyKeyValueStore(build_database_adapter(resolved))


def build_transaction_store(
    settings: SmartBudgetSettings | None = None,
    key_value_store: KeyValueStorePort | None = None,
) -> TransactionStore:
    """Return a loaded transaction store."""
    resolved = settings or SmartBudgetSettings.from_env()
    store = TransactionStore(
        key_value_store or build_key_value_store(resolved),
        logger=get_app_logger(),
        max_amount=resolved.max_amount,
    )
    store.load()
    return store


def build_budget_limits_store(
    settings: SmartBudgetSettings | None = None,
    key_value_store: KeyValueStorePort | None = None,
) -> BudgetLimitsStore:
    """Return the limit table, persisted only when configured."""
    resolved = settings or SmartBudgetSettings.from_env()
    persistence = None
    if resolved.persist_limits:
        persistence = key_value_store or build_key_value_store(resolved)
    limits_store = BudgetLimitsStore(persistence, logger=get_app_logger())
    limits_store.load()
    return limits_store


def build_budget_overview_use_case(
    store: TransactionStore,
    limits_store: BudgetLimitsStore,
    settings: SmartBudgetSettings | None = None,
) -> GetBudgetOverviewUseCase:
    """Return the overview use case bound to the given stores."""
    resolved = settings or SmartBudgetSettings.from_env()
    return GetBudgetOverviewUseCase(
        store,
        limits_store=limits_store,
        currency_code=resolved.currency_code,
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_key_value_store",
    "build_transaction_store",
    "build_budget_limits_store",
    "build_budget_overview_use_case",
]
