from __future__ import annotations

from flask import Flask

from ..common.responses import domain_error, json_object, ok
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        body = json_object()
        try:
            employee = container.employee_service.create(
                name=body.get("name"),
                basic_salary=body.get("basic_salary"),
                allowances=body.get("allowances"),
                deductions=body.get("deductions"),
                hold_percent=body.get("hold_percent"),
            )
            return ok(employee.to_dict(), message="Employee created", status=201)
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        try:
            return ok(container.employee_service.get(employee_id).to_dict())
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>", methods=["PUT"], endpoint="update_employee")
    def update_employee(employee_id: int):
        body = json_object()
        try:
            employee = container.employee_service.update(employee_id=employee_id, changes=body)
            return ok(employee.to_dict(), message="Employee updated")
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="deactivate_employee")
    def deactivate_employee(employee_id: int):
        try:
            employee = container.employee_service.deactivate(employee_id=employee_id)
            return ok(employee.to_dict(), message="Employee deactivated successfully")
        except DomainError as e:
            return domain_error(e)
