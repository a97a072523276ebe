from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Mapping, Optional

from ..common.money import money_str


@dataclass(frozen=True)
class Employee:
    """Compensation snapshot of an employee, read-only for payroll."""

    employee_id: int
    name: str
    basic_salary: Decimal
    allowances: Mapping[str, Decimal] = field(default_factory=dict)
    deductions: Mapping[str, Decimal] = field(default_factory=dict)
    hold_percent: Optional[Decimal] = None
    is_active: bool = True

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "basic_salary": money_str(Decimal(self.basic_salary)),
            "allowances": {k: money_str(Decimal(v)) for k, v in self.allowances.items()},
            "deductions": {k: money_str(Decimal(v)) for k, v in self.deductions.items()},
            "hold_percent": str(self.hold_percent) if self.hold_percent is not None else None,
            "is_active": self.is_active,
        }
