from __future__ import annotations

import json
from decimal import Decimal
from typing import Any, Mapping, Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository


def _amounts(raw: Any) -> dict[str, Decimal]:
    # JSON columns come back as str (pure connector) or bytes (C extension)
    if raw is None:
        return {}
    if isinstance(raw, (bytes, bytearray)):
        raw = raw.decode("utf-8")
    data = json.loads(raw) if isinstance(raw, str) else dict(raw)
    return {str(k): Decimal(str(v or 0)) for k, v in data.items()}


def _amounts_json(values: Mapping[str, Decimal]) -> str:
    return json.dumps({k: str(v) for k, v in values.items()})


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, name, basic_salary, allowances, deductions, hold_percent, is_active
                FROM employees
                WHERE employee_id=%s
                """,
                (int(employee_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Employee(
                employee_id=int(r["employee_id"]),
                name=r["name"],
                basic_salary=Decimal(r["basic_salary"]),
                allowances=_amounts(r.get("allowances")),
                deductions=_amounts(r.get("deductions")),
                hold_percent=Decimal(r["hold_percent"]) if r.get("hold_percent") is not None else None,
                is_active=bool(r.get("is_active", 1)),
            )

    def create(
        self,
        *,
        name: str,
        basic_salary: Decimal,
        allowances: Mapping[str, Decimal],
        deductions: Mapping[str, Decimal],
        hold_percent: Optional[Decimal],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO employees(name, basic_salary, allowances, deductions, hold_percent, is_active)
                VALUES(%s,%s,%s,%s,%s,1)
                """,
                (name, basic_salary, _amounts_json(allowances), _amounts_json(deductions), hold_percent),
            )
            return int(cur.lastrowid)

    def update(self, employee: Employee) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE employees
                SET name=%s, basic_salary=%s, allowances=%s, deductions=%s, hold_percent=%s, is_active=%s
                WHERE employee_id=%s
                """,
                (
                    employee.name,
                    employee.basic_salary,
                    _amounts_json(employee.allowances),
                    _amounts_json(employee.deductions),
                    employee.hold_percent,
                    1 if employee.is_active else 0,
                    int(employee.employee_id),
                ),
            )
