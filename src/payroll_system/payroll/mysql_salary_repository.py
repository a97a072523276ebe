from __future__ import annotations

import logging
from decimal import Decimal
from typing import Any, Dict, Sequence

import mysql.connector

from ..core.enums import PaymentMode, SalaryStatus
from ..core.exceptions import AlreadyProcessedError, NotFoundError, PersistenceFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, is_duplicate_key
from .model import HoldLedgerEntry, SalaryHistoryEntry
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


def _to_entry(r: Dict[str, Any]) -> SalaryHistoryEntry:
    return SalaryHistoryEntry(
        entry_id=int(r["entry_id"]),
        employee_id=int(r["employee_id"]),
        month=r["month"],
        basic_salary=Decimal(r["basic_salary"]),
        total_allowances=Decimal(r["total_allowances"]),
        total_deductions=Decimal(r["total_deductions"]),
        net_salary=Decimal(r["net_salary"]),
        paid_date=r["paid_date"],
        payment_mode=PaymentMode(r["payment_mode"]) if r.get("payment_mode") else None,
        status=SalaryStatus(r["status"]),
        notes=r.get("notes"),
    )


class MySQLSalaryRepository(SalaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def exists(self, employee_id: int, month: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT entry_id FROM salary_history WHERE employee_id=%s AND month=%s",
                (int(employee_id), month),
            )
            return fetchone(cur) is not None

    def commit(self, *, entry: SalaryHistoryEntry, hold_event: HoldLedgerEntry) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                # Row lock serializes concurrent commits for the same employee.
                cur.execute("SELECT employee_id FROM employees WHERE employee_id=%s FOR UPDATE", (entry.employee_id,))
                if not fetchone(cur):
                    raise NotFoundError("Employee not found")

                cur.execute(
                    "SELECT entry_id FROM salary_history WHERE employee_id=%s AND month=%s",
                    (entry.employee_id, entry.month),
                )
                if fetchone(cur):
                    raise AlreadyProcessedError(entry.employee_id, entry.month)

                cur.execute(
                    """
                    INSERT INTO salary_history(
                        employee_id, month, basic_salary, total_allowances, total_deductions,
                        net_salary, paid_date, payment_mode, status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        entry.employee_id,
                        entry.month,
                        entry.basic_salary,
                        entry.total_allowances,
                        entry.total_deductions,
                        entry.net_salary,
                        entry.paid_date,
                        entry.payment_mode.value if entry.payment_mode else None,
                        entry.status.value,
                        entry.notes,
                    ),
                )
                entry_id = int(cur.lastrowid)

                cur.execute(
                    """
                    INSERT INTO hold_ledger(employee_id, month, amount, created_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (hold_event.employee_id, hold_event.month, hold_event.amount, hold_event.created_at),
                )
                return entry_id
        except mysql.connector.Error as e:
            if is_duplicate_key(e):
                raise AlreadyProcessedError(entry.employee_id, entry.month) from e
            logger.error("salary commit failed employee=%s month=%s: %s", entry.employee_id, entry.month, e)
            raise PersistenceFailure("Could not save salary; nothing was recorded") from e

    def list_history(self, employee_id: int) -> Sequence[SalaryHistoryEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT entry_id, employee_id, month, basic_salary, total_allowances, total_deductions,
                       net_salary, paid_date, payment_mode, status, notes
                FROM salary_history
                WHERE employee_id=%s
                ORDER BY paid_date DESC
                """,
                (int(employee_id),),
            )
            return [_to_entry(r) for r in fetchall(cur)]

    def list_hold_events(self, employee_id: int) -> Sequence[HoldLedgerEntry]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT hold_id, employee_id, month, amount, created_at
                FROM hold_ledger
                WHERE employee_id=%s
                ORDER BY month ASC
                """,
                (int(employee_id),),
            )
            return [
                HoldLedgerEntry(
                    hold_id=int(r["hold_id"]),
                    employee_id=int(r["employee_id"]),
                    month=r["month"],
                    amount=Decimal(r["amount"]),
                    created_at=r["created_at"],
                )
                for r in fetchall(cur)
            ]
