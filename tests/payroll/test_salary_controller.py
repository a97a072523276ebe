from __future__ import annotations

from datetime import date

from payroll_system.core.enums import AttendanceStatus


def test_salary_preview_returns_breakdown(client, repos):
    repos.attendance.add(1, date(2024, 3, 4), AttendanceStatus.ABSENT)
    repos.attendance.add(1, date(2024, 3, 5), AttendanceStatus.ABSENT)
    repos.attendance.add(1, date(2024, 3, 6), AttendanceStatus.HALF_DAY)

    res = client.get("/employees/1/salary-preview?month=2024-03")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["gross_salary"] == "22000.00"
    assert data["leave_deductions"] == "2067.31"
    assert data["hold_amount"] == "971.63"
    assert data["payable_net"] == "18461.06"
    assert repos.salaries.entries == []


def test_salary_preview_requires_valid_month(client):
    assert client.get("/employees/1/salary-preview").status_code == 400

    res = client.get("/employees/1/salary-preview?month=2024-3")
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_salary_preview_unknown_employee(client):
    assert client.get("/employees/42/salary-preview?month=2024-03").status_code == 404


def test_process_salary_then_duplicate(client, repos):
    body = {"month": "2024-03", "payment_mode": "cash", "notes": "March"}

    first = client.post("/employees/1/salary", json=body)
    assert first.status_code == 200
    payload = first.get_json()["data"]
    assert payload["breakdown"]["payable_net"] == "20425.00"
    assert payload["entry"]["status"] == "paid"
    assert payload["entry"]["net_salary"] == "20425.00"

    second = client.post("/employees/1/salary", json=body)
    assert second.status_code == 400
    assert "already processed" in second.get_json()["message"]
    assert len(repos.salaries.entries) == 1


def test_process_salary_storage_failure_is_server_error(client, repos):
    repos.salaries.fail_next_commit = True

    res = client.post("/employees/1/salary", json={"month": "2024-03"})

    assert res.status_code == 500
    assert repos.salaries.entries == []


def test_history_and_hold(client):
    client.post("/employees/1/salary", json={"month": "2024-03"})

    history = client.get("/employees/1/salary-history").get_json()["data"]
    assert [h["month"] for h in history] == ["2024-03"]

    hold = client.get("/employees/1/hold").get_json()["data"]
    assert hold["hold_balance"] == "1075.00"
    assert len(hold["events"]) == 1


def test_process_salary_rejects_malformed_body(client, repos):
    assert client.post("/employees/1/salary", json={"month": "2024-03", "notes": 5}).status_code == 400
    assert client.post("/employees/1/salary", json={"month": "2024-03\n"}).status_code == 400
    assert client.post("/employees/1/salary", json=["2024-03"]).status_code == 400
    assert repos.salaries.entries == []


def test_salary_preview_december_9999(client):
    assert client.get("/employees/1/salary-preview?month=9999-12").status_code == 200
