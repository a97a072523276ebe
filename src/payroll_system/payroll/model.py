from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..common.money import money_str
from ..core.enums import PaymentMode, SalaryStatus
from ..employees.model import Employee
from ..leaves.model import LeaveRecord


@dataclass(frozen=True)
class PayrollSubject:
    """Everything the calculator reads: compensation, attendance and leaves."""

    employee: Employee
    attendance: Sequence[AttendanceRecord] = field(default_factory=tuple)
    leaves: Sequence[LeaveRecord] = field(default_factory=tuple)


@dataclass(frozen=True)
class PayrollBreakdown:
    month: str
    gross_salary: Decimal
    total_allowances: Decimal
    fixed_deductions: Decimal
    leave_deductions: Decimal
    hold_percent: Decimal
    hold_amount: Decimal
    payable_net: Decimal

    # Inputs to leave_deductions, kept for display.
    daily_rate: Decimal = Decimal("0")
    absent_days: int = 0
    half_days: int = 0
    sick_approved_days: int = 0
    unpaid_sick_days: int = 0
    other_approved_leave_days: int = 0

    @property
    def total_deductions(self) -> Decimal:
        return self.fixed_deductions + self.leave_deductions + self.hold_amount

    def to_dict(self) -> dict:
        return {
            "month": self.month,
            "gross_salary": money_str(self.gross_salary),
            "total_allowances": money_str(self.total_allowances),
            "fixed_deductions": money_str(self.fixed_deductions),
            "leave_deductions": money_str(self.leave_deductions),
            "hold_percent": str(self.hold_percent),
            "hold_amount": money_str(self.hold_amount),
            "payable_net": money_str(self.payable_net),
            "daily_rate": str(self.daily_rate),
            "absent_days": self.absent_days,
            "half_days": self.half_days,
            "sick_approved_days": self.sick_approved_days,
            "unpaid_sick_days": self.unpaid_sick_days,
            "other_approved_leave_days": self.other_approved_leave_days,
        }


@dataclass(frozen=True)
class SalaryHistoryEntry:
    """Append-only record of one committed payroll run; values frozen at commit."""

    entry_id: Optional[int]
    employee_id: int
    month: str
    basic_salary: Decimal
    total_allowances: Decimal
    total_deductions: Decimal
    net_salary: Decimal
    paid_date: datetime
    payment_mode: Optional[PaymentMode] = None
    status: SalaryStatus = SalaryStatus.PENDING
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "entry_id": self.entry_id,
            "employee_id": self.employee_id,
            "month": self.month,
            "basic_salary": money_str(self.basic_salary),
            "total_allowances": money_str(self.total_allowances),
            "total_deductions": money_str(self.total_deductions),
            "net_salary": money_str(self.net_salary),
            "paid_date": self.paid_date.isoformat(),
            "payment_mode": self.payment_mode.value if self.payment_mode else None,
            "status": self.status.value,
            "notes": self.notes,
        }


@dataclass(frozen=True)
class HoldLedgerEntry:
    """One retention event; the hold balance is the sum of these."""

    hold_id: Optional[int]
    employee_id: int
    month: str
    amount: Decimal
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "hold_id": self.hold_id,
            "month": self.month,
            "amount": money_str(self.amount),
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class HoldSummary:
    employee_id: int
    hold_percent: Decimal
    hold_balance: Decimal
    events: Sequence[HoldLedgerEntry]

    def to_dict(self) -> dict:
        return {
            "employee_id": self.employee_id,
            "hold_percent": str(self.hold_percent),
            "hold_balance": money_str(self.hold_balance),
            "events": [e.to_dict() for e in self.events],
        }


@dataclass(frozen=True)
class ProcessedSalary:
    breakdown: PayrollBreakdown
    entry: SalaryHistoryEntry
