from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from ...common.datetime_utils import MonthWindow, month_window
from ...common.money import ZERO, round2
from ...common.validators import require_amount_map, require_non_negative
from ...core.constants import DEFAULT_HOLD_PERCENT, PAID_SICK_DAYS_PER_MONTH, WORKING_DAYS_PER_MONTH
from ...core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ...leaves.model import LeaveRecord
from ..model import PayrollBreakdown, PayrollSubject
from .base import PayrollCalculator

_RATE_DISPLAY = Decimal("0.0001")


def _as_date(value) -> date:
    return value.date() if isinstance(value, datetime) else value


def approved_leave_days(leaves: Iterable[LeaveRecord], window: MonthWindow) -> tuple[int, int]:
    """Return (sick_days, other_days) of approved leave inside the window.

    Each leave is clipped to the window; the day count is inclusive.
    """
    sick = other = 0
    for leave in leaves:
        if leave.status != LeaveStatus.APPROVED:
            continue
        start = max(_as_date(leave.start_date), window.start)
        end = min(_as_date(leave.end_date), window.end)
        if start > end:
            continue
        days = (end - start).days + 1
        if leave.leave_type == LeaveType.SICK:
            sick += days
        else:
            other += days
    return sick, other


class StandardPayrollCalculator(PayrollCalculator):
    """Attendance and leave aware monthly proration.

    Deductions are priced at a daily rate of net compensation over a fixed
    working month. The first approved sick day(s) of the month are free,
    half days cost half a day, and a retention percentage of what remains is
    held back from the payout.
    """

    def __init__(
        self,
        *,
        working_days: int = WORKING_DAYS_PER_MONTH,
        paid_sick_days: int = PAID_SICK_DAYS_PER_MONTH,
        default_hold_percent: int = DEFAULT_HOLD_PERCENT,
    ):
        if working_days <= 0:
            raise ValueError("working_days must be positive")
        self._working_days = Decimal(working_days)
        self._paid_sick_days = int(paid_sick_days)
        self._default_hold_percent = Decimal(default_hold_percent)

    def compute(self, subject: PayrollSubject, month: str) -> PayrollBreakdown:
        window = month_window(month)
        employee = subject.employee

        basic = require_non_negative(employee.basic_salary, "basic_salary")
        total_allowances = sum(require_amount_map(employee.allowances, "allowances").values(), ZERO)
        fixed_deductions = sum(require_amount_map(employee.deductions, "deductions").values(), ZERO)
        gross = basic + total_allowances

        in_month = [a for a in subject.attendance if window.contains(_as_date(a.work_date))]
        half_days = sum(1 for a in in_month if a.status == AttendanceStatus.HALF_DAY)
        absents = sum(1 for a in in_month if a.status == AttendanceStatus.ABSENT)
        sick_days, other_days = approved_leave_days(subject.leaves, window)

        daily_rate = (basic + total_allowances - fixed_deductions) / self._working_days
        unpaid_sick_days = max(0, sick_days - self._paid_sick_days)
        charged_days = unpaid_sick_days + other_days + absents
        leave_deductions = round2(max(ZERO, charged_days * daily_rate + half_days * (daily_rate / 2)))

        if employee.hold_percent is None:
            hold_percent = self._default_hold_percent
        else:
            hold_percent = require_non_negative(employee.hold_percent, "hold_percent")

        prelim_net = gross - fixed_deductions - leave_deductions
        hold_amount = round2(max(ZERO, prelim_net * hold_percent / 100))
        payable_net = round2(max(ZERO, prelim_net - hold_amount))

        return PayrollBreakdown(
            month=window.month,
            gross_salary=round2(gross),
            total_allowances=round2(total_allowances),
            fixed_deductions=round2(fixed_deductions),
            leave_deductions=leave_deductions,
            hold_percent=hold_percent,
            hold_amount=hold_amount,
            payable_net=payable_net,
            daily_rate=daily_rate.quantize(_RATE_DISPLAY),
            absent_days=absents,
            half_days=half_days,
            sick_approved_days=sick_days,
            unpaid_sick_days=unpaid_sick_days,
            other_approved_leave_days=other_days,
        )
