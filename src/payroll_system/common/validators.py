from __future__ import annotations

from decimal import Decimal
from typing import Any, Mapping, Optional

from ..core.exceptions import InvalidInputError
from .money import ZERO, to_decimal

_HUNDRED = Decimal(100)


def require_non_empty(value: Any, field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError(f"{field_name} is required")
    return value.strip()


def optional_text(value: Any, field_name: str) -> Optional[str]:
    """Free-text field (notes, reason): stripped, blank becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidInputError(f"{field_name} must be text")
    return value.strip() or None


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < ZERO:
        raise InvalidInputError(f"{field_name} must not be negative")
    return amount


def require_percent(value: Any, field_name: str) -> Decimal:
    pct = require_non_negative(value, field_name)
    if pct > _HUNDRED:
        raise InvalidInputError(f"{field_name} must be between 0 and 100")
    return pct


def require_amount_map(values: Mapping[str, Any] | None, field_name: str) -> dict[str, Decimal]:
    """Validate a name -> amount mapping (allowances, deductions).

    Missing values count as zero, the way an unset allowance column reads.
    """
    if values is not None and not isinstance(values, Mapping):
        raise InvalidInputError(f"{field_name} must be an object of name -> amount")
    out: dict[str, Decimal] = {}
    for name, raw in (values or {}).items():
        out[str(name)] = ZERO if raw is None else require_non_negative(raw, f"{field_name}.{name}")
    return out
