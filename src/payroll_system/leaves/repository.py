from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRecord


class LeaveRepository(Protocol):
    def get_by_id(self, leave_id: int) -> Optional[LeaveRecord]:
        raise NotImplementedError

    def list_for_employee(self, employee_id: int, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRecord]:
        raise NotImplementedError

    def list_overlapping(self, employee_id: int, *, start_date: date, end_date: date) -> Sequence[LeaveRecord]:
        """Leaves of any status whose [start_date, end_date] intersects the range."""

        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def decide(self, *, leave_id: int, status: LeaveStatus, decided_at: datetime) -> bool:
        """Move a pending leave to approved/rejected. False if it was not pending."""

        raise NotImplementedError
