from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.exceptions import InvalidInputError

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any, field_name: str) -> Decimal:
    """Convert a numeric input (int, float, str, Decimal) to Decimal."""
    if value is None or isinstance(value, bool):
        raise InvalidInputError(f"{field_name} is required")
    if isinstance(value, float):
        # str() keeps the shortest repr instead of the binary expansion
        value = str(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        raise InvalidInputError(f"{field_name} must be a number")
    if not result.is_finite():
        raise InvalidInputError(f"{field_name} must be a number")
    return result


def round2(value: Decimal) -> Decimal:
    """Round half up to 2 decimal places."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(value: Decimal) -> str:
    return str(round2(value))
