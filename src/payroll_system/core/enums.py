from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Daily attendance status stored per employee and date."""

    PRESENT = "present"
    ABSENT = "absent"
    HALF_DAY = "half_day"
    LEAVE = "leave"
    HOLIDAY = "holiday"


class LeaveType(str, Enum):
    CASUAL = "casual"
    SICK = "sick"
    EARNED = "earned"
    UNPAID = "unpaid"


class LeaveStatus(str, Enum):
    """Approval state of a leave request. Only approved leaves affect payroll."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class SalaryStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


class PaymentMode(str, Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    CHEQUE = "cheque"
