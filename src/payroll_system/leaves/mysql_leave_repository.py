from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRecord
from .repository import LeaveRepository

_COLUMNS = "leave_id, employee_id, leave_type, start_date, end_date, status, reason, created_at, decided_at"


def _to_record(r: Dict[str, Any]) -> LeaveRecord:
    return LeaveRecord(
        leave_id=int(r["leave_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        created_at=r.get("created_at"),
        decided_at=r.get("decided_at"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_employee(self, employee_id: int, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRecord]:
        clauses = ["employee_id=%s"]
        params: list[object] = [int(employee_id)]
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE {' AND '.join(clauses)} ORDER BY start_date DESC",
                tuple(params),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def list_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE employee_id=%s AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC
                """,
                (int(employee_id), end_date, start_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(employee_id, leave_type, start_date, end_date, status, reason)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(employee_id), leave_type.value, start_date, end_date, LeaveStatus.PENDING.value, reason),
            )
            return int(cur.lastrowid)

    def decide(self, *, leave_id: int, status: LeaveStatus, decided_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, decided_at=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, decided_at, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
