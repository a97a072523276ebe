from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import optional_text
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import InvalidInputError, NotFoundError
from ..employees.repository import EmployeeRepository
from .model import LeaveRecord
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def apply(
        self,
        *,
        employee_id: int,
        leave_type: str,
        start_date: date,
        end_date: date,
        reason: str = "",
    ) -> LeaveRecord:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")
        try:
            kind = LeaveType(leave_type)
        except ValueError:
            raise InvalidInputError(f"Invalid leave type {leave_type!r}")
        if end_date < start_date:
            raise InvalidInputError("End date must be on or after start date")

        reason = optional_text(reason, "reason")
        leave_id = self._leaves.create(
            employee_id=int(employee_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
        )
        logger.info("leave %s applied employee=%s %s..%s", leave_id, employee_id, start_date, end_date)
        return LeaveRecord(
            leave_id=leave_id,
            employee_id=int(employee_id),
            leave_type=kind,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            reason=reason,
        )

    def approve(self, *, leave_id: int, now: Optional[datetime] = None) -> LeaveRecord:
        return self._decide(int(leave_id), LeaveStatus.APPROVED, now or now_local())

    def reject(self, *, leave_id: int, now: Optional[datetime] = None) -> LeaveRecord:
        return self._decide(int(leave_id), LeaveStatus.REJECTED, now or now_local())

    def _decide(self, leave_id: int, status: LeaveStatus, now: datetime) -> LeaveRecord:
        req = self._leaves.get_by_id(leave_id)
        if not req:
            raise NotFoundError("Leave request not found")
        if req.status != LeaveStatus.PENDING:
            raise InvalidInputError("Leave request has already been decided")

        if not self._leaves.decide(leave_id=leave_id, status=status, decided_at=now):
            raise InvalidInputError("Leave request has already been decided")

        logger.info("leave %s %s", leave_id, status.value)
        return LeaveRecord(
            leave_id=req.leave_id,
            employee_id=req.employee_id,
            leave_type=req.leave_type,
            start_date=req.start_date,
            end_date=req.end_date,
            status=status,
            reason=req.reason,
            created_at=req.created_at,
            decided_at=now,
        )

    def list_for_employee(self, employee_id: int, *, status: Optional[str] = None) -> Sequence[LeaveRecord]:
        wanted = None
        if status:
            try:
                wanted = LeaveStatus(status)
            except ValueError:
                raise InvalidInputError(f"Invalid leave status {status!r}")
        return self._leaves.list_for_employee(int(employee_id), status=wanted)
