from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal
from types import SimpleNamespace
from typing import Optional

import pytest

from payroll_system.attendance.model import AttendanceRecord
from payroll_system.container import wire
from payroll_system.core.enums import AttendanceStatus, LeaveStatus
from payroll_system.core.exceptions import AlreadyProcessedError, PersistenceFailure
from payroll_system.employees.model import Employee
from payroll_system.leaves.model import LeaveRecord


class InMemoryEmployees:
    def __init__(self, *employees: Employee):
        self._by_id = {e.employee_id: e for e in employees}

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self._by_id.get(int(employee_id))

    def create(self, *, name, basic_salary, allowances, deductions, hold_percent) -> int:
        employee_id = max(self._by_id, default=0) + 1
        self._by_id[employee_id] = Employee(
            employee_id=employee_id,
            name=name,
            basic_salary=basic_salary,
            allowances=dict(allowances),
            deductions=dict(deductions),
            hold_percent=hold_percent,
        )
        return employee_id

    def update(self, employee: Employee) -> None:
        self._by_id[employee.employee_id] = employee


class InMemoryAttendance:
    def __init__(self):
        self._rows: dict[int, AttendanceRecord] = {}
        self._id = 0

    def add(self, employee_id: int, work_date: date, status: AttendanceStatus) -> AttendanceRecord:
        self.create(employee_id=employee_id, work_date=work_date, status=status)
        return self._rows[self._id]

    def get_by_id(self, attendance_id: int):
        return self._rows.get(int(attendance_id))

    def get_for_employee_and_date(self, employee_id: int, work_date: date):
        for r in self._rows.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def list_between(self, employee_id: int, *, start_date: date, end_date: date):
        rows = [r for r in self._rows.values() if r.employee_id == employee_id and start_date <= r.work_date <= end_date]
        return sorted(rows, key=lambda r: r.work_date)

    def list_recent(self, employee_id: int, limit: int):
        rows = [r for r in self._rows.values() if r.employee_id == employee_id]
        return sorted(rows, key=lambda r: r.work_date, reverse=True)[:limit]

    def create(self, *, employee_id, work_date, status, check_in_time=None, check_out_time=None, work_hours=None, notes=None) -> int:
        self._id += 1
        self._rows[self._id] = AttendanceRecord(
            attendance_id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            work_hours=work_hours,
            notes=notes,
        )
        return self._id

    def update(self, *, attendance_id, status, check_in_time, check_out_time, work_hours, notes=None) -> bool:
        rec = self._rows.get(int(attendance_id))
        if not rec:
            return False
        self._rows[rec.attendance_id] = replace(
            rec,
            status=status,
            check_in_time=check_in_time,
            check_out_time=check_out_time,
            work_hours=work_hours,
            notes=notes,
        )
        return True


class InMemoryLeaves:
    def __init__(self):
        self._rows: dict[int, LeaveRecord] = {}
        self._id = 0

    def add(self, employee_id, leave_type, start_date, end_date, status=LeaveStatus.APPROVED) -> LeaveRecord:
        leave_id = self.create(
            employee_id=employee_id, leave_type=leave_type, start_date=start_date, end_date=end_date, reason=None
        )
        self._rows[leave_id] = replace(self._rows[leave_id], status=status)
        return self._rows[leave_id]

    def get_by_id(self, leave_id: int):
        return self._rows.get(int(leave_id))

    def list_for_employee(self, employee_id: int, *, status=None):
        return [r for r in self._rows.values() if r.employee_id == employee_id and (status is None or r.status == status)]

    def list_overlapping(self, employee_id: int, *, start_date: date, end_date: date):
        return [
            r
            for r in self._rows.values()
            if r.employee_id == employee_id and r.start_date <= end_date and r.end_date >= start_date
        ]

    def create(self, *, employee_id, leave_type, start_date, end_date, reason) -> int:
        self._id += 1
        self._rows[self._id] = LeaveRecord(
            leave_id=self._id,
            employee_id=employee_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            status=LeaveStatus.PENDING,
            reason=reason,
            created_at=datetime(2024, 3, 1, 9, 0),
        )
        return self._id

    def decide(self, *, leave_id, status, decided_at) -> bool:
        rec = self._rows.get(int(leave_id))
        if not rec or rec.status != LeaveStatus.PENDING:
            return False
        self._rows[rec.leave_id] = replace(rec, status=status, decided_at=decided_at)
        return True


class InMemorySalaries:
    """Salary store whose commit is atomic under a lock, like a DB transaction."""

    def __init__(self):
        self.entries = []
        self.hold_events = []
        self.fail_next_commit = False
        self._lock = threading.Lock()

    def exists(self, employee_id: int, month: str) -> bool:
        return any(e.employee_id == employee_id and e.month == month for e in self.entries)

    def commit(self, *, entry, hold_event) -> int:
        with self._lock:
            if self.fail_next_commit:
                self.fail_next_commit = False
                raise PersistenceFailure("storage unavailable")
            if self.exists(entry.employee_id, entry.month):
                raise AlreadyProcessedError(entry.employee_id, entry.month)
            entry_id = len(self.entries) + 1
            self.entries.append(replace(entry, entry_id=entry_id))
            self.hold_events.append(replace(hold_event, hold_id=len(self.hold_events) + 1))
            return entry_id

    def list_history(self, employee_id: int):
        return [e for e in self.entries if e.employee_id == employee_id]

    def list_hold_events(self, employee_id: int):
        return [e for e in self.hold_events if e.employee_id == employee_id]


@pytest.fixture
def employee() -> Employee:
    return Employee(
        employee_id=1,
        name="Ravi Kumar",
        basic_salary=Decimal("20000"),
        allowances={"hra": Decimal("2000")},
        deductions={"pf": Decimal("500")},
    )


@pytest.fixture
def repos(employee):
    return SimpleNamespace(
        employees=InMemoryEmployees(employee),
        attendance=InMemoryAttendance(),
        leaves=InMemoryLeaves(),
        salaries=InMemorySalaries(),
    )


@pytest.fixture
def container(repos):
    return wire(
        employees=repos.employees,
        attendance=repos.attendance,
        leaves=repos.leaves,
        salaries=repos.salaries,
    )


@pytest.fixture
def client(container, monkeypatch):
    from payroll_system.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container=container)
    return app.test_client()
