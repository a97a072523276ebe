from __future__ import annotations

import logging

from flask import Flask, request

from ..common.responses import domain_error, fail, json_object, ok
from ..core.exceptions import DomainError
from ..container import Container

logger = logging.getLogger(__name__)


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<int:employee_id>/salary-preview", methods=["GET"], endpoint="salary_preview")
    def salary_preview(employee_id: int):
        month = request.args.get("month", "")
        if not month:
            return fail("Month (YYYY-MM) is required", 400)
        try:
            breakdown = container.payroll_service.preview(employee_id=employee_id, month=month)
            return ok(breakdown.to_dict())
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>/salary", methods=["POST"], endpoint="process_salary")
    def process_salary(employee_id: int):
        body = json_object()
        month = str(body.get("month") or "")
        if not month:
            return fail("Month (YYYY-MM) is required", 400)
        try:
            result = container.payroll_service.process(
                employee_id=employee_id,
                month=month,
                payment_mode=body.get("payment_mode"),
                notes=body.get("notes"),
            )
        except DomainError as e:
            return domain_error(e)

        return ok(
            {"breakdown": result.breakdown.to_dict(), "entry": result.entry.to_dict()},
            message="Salary processed successfully",
        )

    @app.route("/employees/<int:employee_id>/salary-history", methods=["GET"], endpoint="salary_history")
    def salary_history(employee_id: int):
        try:
            rows = container.payroll_service.history(employee_id=employee_id)
            return ok([r.to_dict() for r in rows])
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>/hold", methods=["GET"], endpoint="hold_summary")
    def hold_summary(employee_id: int):
        try:
            return ok(container.payroll_service.hold_summary(employee_id=employee_id).to_dict())
        except DomainError as e:
            return domain_error(e)
