from __future__ import annotations

from datetime import datetime

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.responses import domain_error, json_object, ok
from ..core.exceptions import DomainError, InvalidInputError
from ..container import Container


def _parse_datetime(value):
    if not value:
        return None
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        raise InvalidInputError(f"Invalid timestamp {value!r} (expected ISO 8601)")


def register(app: Flask, container: Container) -> None:
    @app.route("/employees/<int:employee_id>/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(employee_id: int):
        body = json_object()
        try:
            rec = container.attendance_service.mark(
                employee_id=employee_id,
                work_date=parse_iso_date(body.get("date") or ""),
                status=body.get("status"),
                check_in_time=_parse_datetime(body.get("check_in_time")),
                check_out_time=_parse_datetime(body.get("check_out_time")),
                notes=body.get("notes"),
            )
            return ok(rec.to_dict(), message="Attendance marked successfully", status=201)
        except DomainError as e:
            return domain_error(e)

    @app.route("/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="attendance_history")
    def attendance_history(employee_id: int):
        month = request.args.get("month")
        try:
            if month:
                rows = container.attendance_service.list_for_month(employee_id, month)
            else:
                rows = container.attendance_service.list_recent(employee_id)
            return ok([r.to_dict() for r in rows])
        except DomainError as e:
            return domain_error(e)

    @app.route(
        "/employees/<int:employee_id>/attendance/<int:attendance_id>",
        methods=["PUT"],
        endpoint="update_attendance",
    )
    def update_attendance(employee_id: int, attendance_id: int):
        body = json_object()
        try:
            rec = container.attendance_service.update(
                employee_id=employee_id,
                attendance_id=attendance_id,
                status=body.get("status"),
                check_in_time=_parse_datetime(body.get("check_in_time")),
                check_out_time=_parse_datetime(body.get("check_out_time")),
                notes=body.get("notes"),
            )
            return ok(rec.to_dict(), message="Attendance entry updated")
        except DomainError as e:
            return domain_error(e)
