"""Budget limit table with optional persistence."""

import json
from collections.abc import Mapping
from decimal import Decimal

from smartbudget.application.ports.key_value_store import KeyValueStorePort
from smartbudget.domain.constants import BUDGET_LIMITS_KEY, DEFAULT_BUDGET_LIMITS
from smartbudget.domain.errors import PersistenceError, ValidationError
from smartbudget.domain.services.validation import validate_limit
from smartbudget.infrastructure.logging.logger import get_app_logger
from smartbudget.utils.decimal_utils import decimal_to_json


class BudgetLimitsStore:
    """Category limits used by alerting and the advisor.

    Limits start from the defaults. When a key-value store is given they are
    loaded from and written to it; otherwise they live for the session only.
    """

    def __init__(
        self,
        key_value_store: KeyValueStorePort | None = None,
        logger=None,
        defaults: Mapping[str, Decimal] | None = None,
        storage_key: str = BUDGET_LIMITS_KEY,
    ) -> None:
        """Initialize the limits store.

        Args:
            key_value_store: Optional port used to persist limits.
            logger: Optional logger compatible with logging.Logger-like API.
            defaults: Optional default limit table.
            storage_key: Key holding the JSON object of limits.
        """
        self._key_value_store = key_value_store
        self._logger = logger or get_app_logger()
        self._defaults = dict(
            DEFAULT_BUDGET_LIMITS if defaults is None else defaults
        )
        self._storage_key = storage_key
        self._limits: dict[str, Decimal] = dict(self._defaults)

    @property
    def limits(self) -> dict[str, Decimal]:
        return dict(self._limits)

    def load(self) -> dict[str, Decimal]:
        """Load persisted limits, falling back to the defaults.

        Returns:
            dict[str, Decimal]: Active limit table.
        """
        self._limits = dict(self._defaults)
        if self._key_value_store is None:
            return self.limits
        try:
            raw = self._key_value_store.get(self._storage_key)
        except PersistenceError as exc:
            self._logger.warning(f"Could not read budget limits: {exc}")
            return self.limits
        if raw is None:
            return self.limits

        try:
            payload = json.loads(raw)
        except ValueError as exc:
            self._logger.warning(f"Stored budget limits are corrupt: {exc}")
            return self.limits
        if not isinstance(payload, dict):
            self._logger.warning("Stored budget limits are not an object")
            return self.limits

        limits: dict[str, Decimal] = {}
        for category, value in payload.items():
            try:
                limits[category] = validate_limit(category, value)
            except ValidationError as exc:
                self._logger.warning(f"Skipping stored limit: {exc}")
        self._limits = limits
        return self.limits

    def set_limit(self, category: str, limit) -> Decimal:
        """Set the limit of ``category``.

        Raises:
            ValidationError: If the category is unknown or the limit is not
                a positive number.
        """
        value = validate_limit(category, limit)
        self._limits[category] = value
        self._save()
        self._logger.info(f"Budget limit for {category} set to {value}")
        return value

    def remove_limit(self, category: str) -> bool:
        """Exempt ``category`` from alerting. Returns False if it had no limit."""
        if category not in self._limits:
            return False
        del self._limits[category]
        self._save()
        self._logger.info(f"Budget limit for {category} removed")
        return True

    def reset(self) -> None:
        """Restore the default limits."""
        self._limits = dict(self._defaults)
        self._save()

    def _save(self) -> bool:
        if self._key_value_store is None:
            return True
        payload = json.dumps(
            {
                category: decimal_to_json(limit)
                for category, limit in self._limits.items()
            }
        )
        try:
            self._key_value_store.set(self._storage_key, payload)
        except PersistenceError as exc:
            self._logger.error(f"Failed to save budget limits: {exc}")
            return False
        return True


__all__ = ["BudgetLimitsStore"]
