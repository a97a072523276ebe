from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_window, now_local
from ..common.money import ZERO, round2, to_decimal
from ..common.validators import optional_text
from ..core.constants import DEFAULT_HOLD_PERCENT
from ..core.enums import PaymentMode, SalaryStatus
from ..core.exceptions import AlreadyProcessedError, InvalidInputError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import (
    HoldLedgerEntry,
    HoldSummary,
    PayrollBreakdown,
    PayrollSubject,
    ProcessedSalary,
    SalaryHistoryEntry,
)
from .repository import SalaryRepository

logger = logging.getLogger(__name__)


class PayrollService:
    """Preview and commit monthly salary for one employee.

    Preview and commit share one calculator. Commit adds the duplicate-month
    guard and hands the history entry and hold event to the repository as a
    single atomic write.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        attendance: AttendanceRepository,
        leaves: LeaveRepository,
        salaries: SalaryRepository,
        *,
        calculator: Optional[PayrollCalculator] = None,
    ):
        self._employees = employees
        self._attendance = attendance
        self._leaves = leaves
        self._salaries = salaries
        self._calculator = calculator or StandardPayrollCalculator()

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            raise NotFoundError("Employee not found")
        return employee

    def _compute(self, employee: Employee, month: str) -> PayrollBreakdown:
        window = month_window(month)
        subject = PayrollSubject(
            employee=employee,
            attendance=tuple(
                self._attendance.list_between(employee.employee_id, start_date=window.start, end_date=window.end)
            ),
            leaves=tuple(
                self._leaves.list_overlapping(employee.employee_id, start_date=window.start, end_date=window.end)
            ),
        )
        return self._calculator.compute(subject, month)

    def preview(self, *, employee_id: int, month: str) -> PayrollBreakdown:
        month_window(month)
        employee = self._require_employee(employee_id)
        return self._compute(employee, month)

    def process(
        self,
        *,
        employee_id: int,
        month: str,
        payment_mode: Optional[str] = None,
        notes: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> ProcessedSalary:
        month_window(month)
        mode = None
        if payment_mode:
            try:
                mode = PaymentMode(payment_mode)
            except ValueError:
                raise InvalidInputError(f"Invalid payment mode {payment_mode!r}")
        notes = optional_text(notes, "notes")

        employee = self._require_employee(employee_id)
        if not employee.is_active:
            raise InvalidInputError(f"Employee {employee.employee_id} is inactive; salary cannot be processed")
        if self._salaries.exists(employee.employee_id, month):
            logger.warning("duplicate salary run rejected employee=%s month=%s", employee.employee_id, month)
            raise AlreadyProcessedError(employee.employee_id, month)

        breakdown = self._compute(employee, month)
        paid_at = now or now_local()

        entry = SalaryHistoryEntry(
            entry_id=None,
            employee_id=employee.employee_id,
            month=month,
            basic_salary=round2(to_decimal(employee.basic_salary, "basic_salary")),
            total_allowances=breakdown.total_allowances,
            total_deductions=round2(breakdown.total_deductions),
            net_salary=breakdown.payable_net,
            paid_date=paid_at,
            payment_mode=mode,
            status=SalaryStatus.PAID,
            notes=notes,
        )
        hold_event = HoldLedgerEntry(
            hold_id=None,
            employee_id=employee.employee_id,
            month=month,
            amount=breakdown.hold_amount,
            created_at=paid_at,
        )

        try:
            entry_id = self._salaries.commit(entry=entry, hold_event=hold_event)
        except AlreadyProcessedError:
            logger.warning("concurrent salary run lost employee=%s month=%s", employee.employee_id, month)
            raise

        logger.info(
            "salary processed employee=%s month=%s payable=%s hold=%s",
            employee.employee_id,
            month,
            breakdown.payable_net,
            breakdown.hold_amount,
        )
        return ProcessedSalary(breakdown=breakdown, entry=replace(entry, entry_id=entry_id))

    def history(self, *, employee_id: int) -> Sequence[SalaryHistoryEntry]:
        employee = self._require_employee(employee_id)
        rows = list(self._salaries.list_history(employee.employee_id))
        rows.sort(key=lambda e: e.paid_date, reverse=True)
        return rows

    def hold_summary(self, *, employee_id: int) -> HoldSummary:
        employee = self._require_employee(employee_id)
        events = list(self._salaries.list_hold_events(employee.employee_id))
        hold_percent = employee.hold_percent
        if hold_percent is None:
            hold_percent = Decimal(DEFAULT_HOLD_PERCENT)
        return HoldSummary(
            employee_id=employee.employee_id,
            hold_percent=hold_percent,
            hold_balance=round2(sum((e.amount for e in events), ZERO)),
            events=events,
        )
