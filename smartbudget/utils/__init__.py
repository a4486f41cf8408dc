"""Shared utilities."""

from .decimal_utils import (
    coerce_decimal,
    decimal_to_json,
    quantize_amount,
    round_percentage,
)
from .utils import get_project_root

__all__ = [
    "coerce_decimal",
    "decimal_to_json",
    "quantize_amount",
    "round_percentage",
    "get_project_root",
]
