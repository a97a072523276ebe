from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        name: str,
        basic_salary: Decimal,
        allowances: Mapping[str, Decimal],
        deductions: Mapping[str, Decimal],
        hold_percent: Optional[Decimal],
    ) -> int:
        raise NotImplementedError

    def update(self, employee: Employee) -> None:
        raise NotImplementedError
