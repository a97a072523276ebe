from __future__ import annotations

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error, json_object, ok
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<int:employee_id>/leaves", methods=["POST"], endpoint="apply_leave")
    def apply_leave(employee_id: int):
        body = json_object()
        try:
            leave = container.leave_service.apply(
                employee_id=employee_id,
                leave_type=str(body.get("leave_type") or ""),
                start_date=parse_iso_date(body.get("start_date") or ""),
                end_date=parse_iso_date(body.get("end_date") or ""),
                reason=body.get("reason") or "",
            )
            return ok(leave.to_dict(), message="Leave application submitted successfully", status=201)
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>/leaves", methods=["GET"], endpoint="list_leaves")
    def list_leaves(employee_id: int):
        try:
            rows = container.leave_service.list_for_employee(employee_id, status=request.args.get("status"))
            return ok([r.to_dict() for r in rows])
        except DomainError as e:
            return domain_error(e)

    @app.route("/leaves/<int:leave_id>/approve", methods=["PUT"], endpoint="approve_leave")
    def approve_leave(leave_id: int):
        try:
            return ok(container.leave_service.approve(leave_id=leave_id).to_dict(), message="Leave approved")
        except DomainError as e:
            return domain_error(e)

    @app.route("/leaves/<int:leave_id>/reject", methods=["PUT"], endpoint="reject_leave")
    def reject_leave(leave_id: int):
        try:
            return ok(container.leave_service.reject(leave_id=leave_id).to_dict(), message="Leave rejected")
        except DomainError as e:
            return domain_error(e)
