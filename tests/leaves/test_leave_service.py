from __future__ import annotations

from datetime import date, datetime

import pytest

from payroll_system.core.enums import LeaveStatus, LeaveType
from payroll_system.core.exceptions import InvalidInputError, NotFoundError


def test_apply_creates_pending_request(container):
    leave = container.leave_service.apply(
        employee_id=1,
        leave_type="sick",
        start_date=date(2024, 3, 11),
        end_date=date(2024, 3, 12),
        reason="  fever ",
    )

    assert leave.status == LeaveStatus.PENDING
    assert leave.leave_type == LeaveType.SICK
    assert leave.reason == "fever"


def test_apply_validates_input(container):
    svc = container.leave_service
    with pytest.raises(InvalidInputError):
        svc.apply(employee_id=1, leave_type="vacation", start_date=date(2024, 3, 1), end_date=date(2024, 3, 2))
    with pytest.raises(InvalidInputError):
        svc.apply(employee_id=1, leave_type="casual", start_date=date(2024, 3, 5), end_date=date(2024, 3, 2))
    with pytest.raises(NotFoundError):
        svc.apply(employee_id=9, leave_type="casual", start_date=date(2024, 3, 1), end_date=date(2024, 3, 2))


def test_approve_and_reject_only_pending(container):
    svc = container.leave_service
    leave = svc.apply(employee_id=1, leave_type="casual", start_date=date(2024, 3, 4), end_date=date(2024, 3, 4))

    decided_at = datetime(2024, 3, 2, 12, 0)
    approved = svc.approve(leave_id=leave.leave_id, now=decided_at)
    assert approved.status == LeaveStatus.APPROVED
    assert approved.decided_at == decided_at

    with pytest.raises(InvalidInputError):
        svc.reject(leave_id=leave.leave_id)
    with pytest.raises(NotFoundError):
        svc.approve(leave_id=404)


def test_only_approved_leave_reaches_payroll(container):
    svc = container.leave_service
    kept = svc.apply(employee_id=1, leave_type="casual", start_date=date(2024, 3, 4), end_date=date(2024, 3, 5))
    dropped = svc.apply(employee_id=1, leave_type="casual", start_date=date(2024, 3, 6), end_date=date(2024, 3, 8))

    before = container.payroll_service.preview(employee_id=1, month="2024-03")
    svc.approve(leave_id=kept.leave_id)
    svc.reject(leave_id=dropped.leave_id)
    after = container.payroll_service.preview(employee_id=1, month="2024-03")

    assert before.other_approved_leave_days == 0
    assert after.other_approved_leave_days == 2


def test_list_filters_by_status(container):
    svc = container.leave_service
    a = svc.apply(employee_id=1, leave_type="earned", start_date=date(2024, 3, 4), end_date=date(2024, 3, 4))
    svc.apply(employee_id=1, leave_type="earned", start_date=date(2024, 3, 5), end_date=date(2024, 3, 5))
    svc.approve(leave_id=a.leave_id)

    assert [r.leave_id for r in svc.list_for_employee(1, status="approved")] == [a.leave_id]
    assert len(svc.list_for_employee(1)) == 2
    with pytest.raises(InvalidInputError):
        svc.list_for_employee(1, status="maybe")


def test_leave_endpoints(client):
    created = client.post(
        "/employees/1/leaves",
        json={"leave_type": "sick", "start_date": "2024-03-11", "end_date": "2024-03-13"},
    )
    assert created.status_code == 201
    leave_id = created.get_json()["data"]["leave_id"]

    approved = client.put(f"/leaves/{leave_id}/approve")
    assert approved.status_code == 200
    assert approved.get_json()["data"]["status"] == "approved"

    assert client.put(f"/leaves/{leave_id}/reject").status_code == 400
    assert client.put("/leaves/999/approve").status_code == 404

    preview = client.get("/employees/1/salary-preview?month=2024-03").get_json()["data"]
    assert preview["unpaid_sick_days"] == 2
    assert preview["leave_deductions"] == "1653.85"


def test_leave_reason_must_be_text(client, container):
    res = client.post(
        "/employees/1/leaves",
        json={"leave_type": "casual", "start_date": "2024-03-04", "end_date": "2024-03-04", "reason": 5},
    )

    assert res.status_code == 400
    assert container.leave_service.list_for_employee(1) == []
