"""Domain error taxonomy."""


class SmartBudgetError(Exception):
    """Base class for SmartBudget errors."""


class ValidationError(SmartBudgetError, ValueError):
    """Raised when user input cannot become a transaction or limit."""


class PersistenceError(SmartBudgetError):
    """Raised by storage adapters when a write fails."""


class PersistenceReadError(PersistenceError):
    """Raised by storage adapters when stored data cannot be read."""


__all__ = [
    "SmartBudgetError",
    "ValidationError",
    "PersistenceError",
    "PersistenceReadError",
]
