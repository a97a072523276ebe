from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..common.datetime_utils import month_window
from ..common.money import round2
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HISTORY_LIMIT, FULL_DAY_HOURS, HALF_DAY_HOURS
from ..core.enums import AttendanceStatus
from ..core.exceptions import InvalidInputError, NotFoundError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


def worked_hours(check_in_time: datetime, check_out_time: datetime) -> Decimal:
    if check_out_time < check_in_time:
        raise InvalidInputError("Check-out time cannot be earlier than check-in time")
    seconds = Decimal(int((check_out_time - check_in_time).total_seconds()))
    return round2(seconds / Decimal(3600))


def status_for_hours(hours: Decimal) -> AttendanceStatus:
    if hours >= Decimal(str(FULL_DAY_HOURS)):
        return AttendanceStatus.PRESENT
    if hours >= Decimal(str(HALF_DAY_HOURS)):
        return AttendanceStatus.HALF_DAY
    return AttendanceStatus.ABSENT


def _parse_status(value) -> Optional[AttendanceStatus]:
    if value is None or value == "":
        return None
    try:
        return AttendanceStatus(value)
    except ValueError:
        raise InvalidInputError(f"Invalid attendance status {value!r}")


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(int(employee_id)):
            raise NotFoundError("Employee not found")

    def mark(
        self,
        *,
        employee_id: int,
        work_date: date,
        status=None,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        self._require_employee(employee_id)
        notes = optional_text(notes, "notes")

        if self._attendance.get_for_employee_and_date(int(employee_id), work_date):
            raise InvalidInputError(f"Attendance already marked for {work_date.isoformat()}")

        final_status = _parse_status(status)
        hours = None
        if check_in_time and check_out_time:
            hours = worked_hours(check_in_time, check_out_time)
            if final_status is None:
                final_status = status_for_hours(hours)
        if final_status is None:
            raise InvalidInputError("Status is required when check-in/check-out times are incomplete")

        attendance_id = self._attendance.create(
            employee_id=int(employee_id),
            work_date=work_date,
            status=final_status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            work_hours=hours,
            notes=notes,
        )
        logger.info("attendance marked employee=%s date=%s status=%s", employee_id, work_date, final_status.value)
        return AttendanceRecord(
            attendance_id=attendance_id,
            employee_id=int(employee_id),
            work_date=work_date,
            status=final_status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            work_hours=hours,
            notes=notes,
        )

    def update(
        self,
        *,
        employee_id: int,
        attendance_id: int,
        status=None,
        check_in_time: Optional[datetime] = None,
        check_out_time: Optional[datetime] = None,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        rec = self._attendance.get_by_id(int(attendance_id))
        if not rec or rec.employee_id != int(employee_id):
            raise NotFoundError("Attendance entry not found")

        new_in = check_in_time or rec.check_in_time
        new_out = check_out_time or rec.check_out_time
        new_status = rec.status
        hours = rec.work_hours
        if new_in and new_out:
            hours = worked_hours(new_in, new_out)
            new_status = status_for_hours(hours)
        explicit = _parse_status(status)
        if explicit is not None:
            new_status = explicit
        new_notes = rec.notes if notes is None else optional_text(notes, "notes")

        ok = self._attendance.update(
            attendance_id=rec.attendance_id,
            status=new_status,
            check_in_time=new_in,
            check_out_time=new_out,
            work_hours=hours,
            notes=new_notes,
        )
        if not ok:
            raise InvalidInputError("Attendance update failed")

        return AttendanceRecord(
            attendance_id=rec.attendance_id,
            employee_id=rec.employee_id,
            work_date=rec.work_date,
            status=new_status,
            check_in_time=new_in,
            check_out_time=new_out,
            work_hours=hours,
            notes=new_notes,
        )

    def list_for_month(self, employee_id: int, month: str) -> Sequence[AttendanceRecord]:
        window = month_window(month)
        return self._attendance.list_between(int(employee_id), start_date=window.start, end_date=window.end)

    def list_recent(self, employee_id: int, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.list_recent(int(employee_id), limit)
