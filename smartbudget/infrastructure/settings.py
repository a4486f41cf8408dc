"""Settings helpers for infrastructure adapters."""

from dataclasses import dataclass
from decimal import Decimal
import os
from pathlib import Path

from smartbudget.domain.constants import DEFAULT_CURRENCY, DEFAULT_MAX_AMOUNT
from smartbudget.infrastructure.logging.logger import get_app_logger
from smartbudget.utils.decimal_utils import coerce_decimal
from smartbudget.utils.utils import get_project_root


BACKENDS = ("sqlalchemy", "file", "memory")
TRUTHY = ("1", "true", "yes", "on")


@dataclass(frozen=True)
class SmartBudgetSettings:
    """Settings for storage and budgeting rules.

    Attributes:
        backend: Storage backend identifier (sqlalchemy, file, or memory).
        db_url: SQLAlchemy URL used by the sqlalchemy backend.
        json_file: JSON file used by the file backend.
        max_amount: Inclusive ceiling for transaction amounts.
        currency_code: Currency shown in amounts.
        persist_limits: Whether budget limits are stored alongside
            transactions.
    """

    backend: str = "sqlalchemy"
    db_url: str | None = None
    json_file: Path | None = None
    max_amount: Decimal = DEFAULT_MAX_AMOUNT
    currency_code: str = DEFAULT_CURRENCY
    persist_limits: bool = False

    @classmethod
    def from_env(cls) -> "SmartBudgetSettings":
        """Build settings from environment variables.

        Returns:
            SmartBudgetSettings: Settings sourced from environment variables.
        """
        logger = get_app_logger()
        backend = os.getenv("SMARTBUDGET_BACKEND", "sqlalchemy").strip().lower()
        db_url = os.getenv("SMARTBUDGET_DB_URL") or cls._default_db_url()
        raw_json_file = os.getenv("SMARTBUDGET_JSON_FILE")
        json_file = (
            Path(raw_json_file).expanduser().resolve()
            if raw_json_file
            else get_project_root() / "data" / "smartbudget.json"
        )
        max_amount = cls._parse_max_amount(
            os.getenv("SMARTBUDGET_MAX_AMOUNT"),
            logger=logger,
        )
        currency_code = (
            os.getenv("SMARTBUDGET_CURRENCY", DEFAULT_CURRENCY).strip()
            or DEFAULT_CURRENCY
        )
        persist_limits = (
            os.getenv("SMARTBUDGET_PERSIST_LIMITS", "").strip().lower()
            in TRUTHY
        )
        return cls(
            backend=backend,
            db_url=db_url,
            json_file=json_file,
            max_amount=max_amount,
            currency_code=currency_code,
            persist_limits=persist_limits,
        )

    @staticmethod
    def _default_db_url() -> str:
        """Return the SQLite URL under the project data directory."""
        path = get_project_root() / "data" / "smartbudget.db"
        return f"sqlite:///{path}"

    @staticmethod
    def _parse_max_amount(raw_value: str | None, logger) -> Decimal:
        """Parse the amount ceiling, falling back to the default.

        Args:
            raw_value: Raw environment value.
            logger: Logger used for warnings.

        Returns:
            Decimal: Positive ceiling.
        """
        if not raw_value:
            return DEFAULT_MAX_AMOUNT
        try:
            value = coerce_decimal(raw_value)
        except ValueError:
            value = None
        if value is None or not value.is_finite() or value <= 0:
            logger.warning(
                f"Invalid SMARTBUDGET_MAX_AMOUNT '{raw_value}', "
                f"using {DEFAULT_MAX_AMOUNT}"
            )
            return DEFAULT_MAX_AMOUNT
        return value


__all__ = ["SmartBudgetSettings", "BACKENDS"]
