from __future__ import annotations

from decimal import Decimal

import pytest

from payroll_system.core.exceptions import InvalidInputError, NotFoundError


def test_create_validates_and_stores_snapshot(container):
    emp = container.employee_service.create(
        name="  Meena ",
        basic_salary="15000",
        allowances={"hra": 1500, "transport": None},
        deductions={"pf": "300.50"},
    )

    assert emp.employee_id == 2
    assert emp.name == "Meena"
    assert emp.basic_salary == Decimal("15000")
    assert emp.allowances == {"hra": Decimal("1500"), "transport": Decimal("0")}
    assert emp.hold_percent is None
    assert container.employee_service.get(emp.employee_id) == emp


@pytest.mark.parametrize(
    "fields",
    [
        {"name": "", "basic_salary": 100},
        {"name": 7, "basic_salary": 100},
        {"name": "A", "basic_salary": -1},
        {"name": "A", "basic_salary": None},
        {"name": "A", "basic_salary": 100, "allowances": [100]},
        {"name": "A", "basic_salary": 100, "deductions": {"loan": -5}},
        {"name": "A", "basic_salary": 100, "hold_percent": 101},
    ],
)
def test_create_rejects_bad_input(container, fields):
    with pytest.raises(InvalidInputError):
        container.employee_service.create(**fields)


def test_created_employee_can_be_paid(container):
    emp = container.employee_service.create(
        name="Arjun", basic_salary=20000, allowances={"hra": 2000}, deductions={"pf": 500}, hold_percent=10
    )

    result = container.payroll_service.process(employee_id=emp.employee_id, month="2024-03")

    assert result.breakdown.hold_amount == Decimal("2150.00")
    assert result.entry.net_salary == Decimal("19350.00")


def test_update_is_partial(container):
    svc = container.employee_service

    updated = svc.update(employee_id=1, changes={"basic_salary": "25000", "hold_percent": 0})

    assert updated.basic_salary == Decimal("25000")
    assert updated.hold_percent == Decimal("0")
    assert updated.allowances == {"hra": Decimal("2000")}
    assert svc.get(1) == updated

    cleared = svc.update(employee_id=1, changes={"hold_percent": None})
    assert cleared.hold_percent is None


def test_update_rejects_unknown_fields_and_employees(container):
    with pytest.raises(InvalidInputError):
        container.employee_service.update(employee_id=1, changes={"is_active": False})
    with pytest.raises(NotFoundError):
        container.employee_service.update(employee_id=99, changes={"name": "X"})


def test_update_does_not_rewrite_committed_history(container):
    container.payroll_service.process(employee_id=1, month="2024-03")

    container.employee_service.update(employee_id=1, changes={"basic_salary": 30000})

    assert container.payroll_service.history(employee_id=1)[0].net_salary == Decimal("20425.00")


def test_inactive_employee_cannot_be_paid(container, repos):
    container.employee_service.deactivate(employee_id=1)

    assert container.payroll_service.preview(employee_id=1, month="2024-03").payable_net == Decimal("20425.00")
    with pytest.raises(InvalidInputError):
        container.payroll_service.process(employee_id=1, month="2024-03")
    assert repos.salaries.entries == []


def test_employee_endpoints(client):
    created = client.post(
        "/employees",
        json={"name": "Kavya", "basic_salary": "18000", "allowances": {"da": "1200"}, "hold_percent": "2.5"},
    )
    assert created.status_code == 201
    data = created.get_json()["data"]
    assert data["basic_salary"] == "18000.00"
    assert data["allowances"] == {"da": "1200.00"}
    assert data["hold_percent"] == "2.5"

    emp_id = data["employee_id"]
    res = client.put(f"/employees/{emp_id}", json={"deductions": {"pf": 400}})
    assert res.status_code == 200
    assert res.get_json()["data"]["deductions"] == {"pf": "400.00"}

    preview = client.get(f"/employees/{emp_id}/salary-preview?month=2024-03").get_json()["data"]
    assert preview["gross_salary"] == "19200.00"

    assert client.delete(f"/employees/{emp_id}").get_json()["data"]["is_active"] is False
    assert client.post(f"/employees/{emp_id}/salary", json={"month": "2024-03"}).status_code == 400


def test_employee_endpoint_errors(client):
    assert client.post("/employees", json={"name": "X", "basic_salary": "lots"}).status_code == 400
    assert client.post("/employees", json=["not", "an", "object"]).status_code == 400
    assert client.put("/employees/1", json={"hold_percent": -1}).status_code == 400
    assert client.get("/employees/404").status_code == 404
    assert client.delete("/employees/404").status_code == 404
