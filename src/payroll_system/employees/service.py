from __future__ import annotations

import logging
from dataclasses import replace
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..common.validators import require_amount_map, require_non_empty, require_non_negative, require_percent
from ..core.exceptions import InvalidInputError, NotFoundError
from .model import Employee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "basic_salary", "allowances", "deductions", "hold_percent")


def _hold_percent(value: Any) -> Optional[Decimal]:
    # None means "use the default retention"
    return None if value is None else require_percent(value, "hold_percent")


class EmployeeService:
    """Maintain the compensation snapshot payroll reads."""

    def __init__(self, employees: EmployeeRepository):
        self._employees = employees

    def get(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def create(
        self,
        *,
        name: str,
        basic_salary: Any,
        allowances: Optional[Mapping[str, Any]] = None,
        deductions: Optional[Mapping[str, Any]] = None,
        hold_percent: Any = None,
    ) -> Employee:
        name = require_non_empty(name, "name")
        basic = require_non_negative(basic_salary, "basic_salary")
        allowance_map = require_amount_map(allowances, "allowances")
        deduction_map = require_amount_map(deductions, "deductions")
        pct = _hold_percent(hold_percent)

        employee_id = self._employees.create(
            name=name,
            basic_salary=basic,
            allowances=allowance_map,
            deductions=deduction_map,
            hold_percent=pct,
        )
        logger.info("employee %s created basic=%s", employee_id, basic)
        return Employee(
            employee_id=employee_id,
            name=name,
            basic_salary=basic,
            allowances=allowance_map,
            deductions=deduction_map,
            hold_percent=pct,
        )

    def update(self, *, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        """Apply a partial edit; keys outside EDITABLE_FIELDS are rejected."""
        unknown = sorted(set(changes) - set(EDITABLE_FIELDS))
        if unknown:
            raise InvalidInputError(f"Unknown employee field(s): {', '.join(unknown)}")

        current = self.get(employee_id)
        updated = current
        if "name" in changes:
            updated = replace(updated, name=require_non_empty(changes["name"], "name"))
        if "basic_salary" in changes:
            updated = replace(updated, basic_salary=require_non_negative(changes["basic_salary"], "basic_salary"))
        if "allowances" in changes:
            updated = replace(updated, allowances=require_amount_map(changes["allowances"], "allowances"))
        if "deductions" in changes:
            updated = replace(updated, deductions=require_amount_map(changes["deductions"], "deductions"))
        if "hold_percent" in changes:
            updated = replace(updated, hold_percent=_hold_percent(changes["hold_percent"]))

        self._employees.update(updated)
        logger.info("employee %s updated fields=%s", updated.employee_id, ",".join(sorted(changes)))
        return updated

    def deactivate(self, *, employee_id: int) -> Employee:
        current = self.get(employee_id)
        updated = replace(current, is_active=False)
        self._employees.update(updated)
        logger.info("employee %s deactivated", updated.employee_id)
        return updated
