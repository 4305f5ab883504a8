from __future__ import annotations

from datetime import datetime, time, timezone

from flask import Flask

from ..common.http import arg_date, body_datetime, json_body, to_response
from ..container import Container


def _patch_from(data: dict) -> dict:
    patch = dict(data)
    for key in ("check_in", "check_out"):
        if key in patch:
            patch[key] = body_datetime(data, key)
    return patch


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    @app.route("/employees/<int:employee_id>/check-in", methods=["POST"], endpoint="check_in")
    def check_in(employee_id: int):
        return to_response(service.check_in(employee_id), status=201)

    @app.route("/employees/<int:employee_id>/check-out", methods=["POST"], endpoint="check_out")
    def check_out(employee_id: int):
        return to_response(service.check_out(employee_id))

    @app.route("/employees/<int:employee_id>/attendance", methods=["POST"], endpoint="create_attendance")
    def create_attendance(employee_id: int):
        data = json_body()
        result = service.create_attendance_record(
            employee_id,
            body_datetime(data, "check_in"),
            body_datetime(data, "check_out"),
        )
        return to_response(result, status=201)

    @app.route("/employees/<int:employee_id>/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance(employee_id: int):
        start = arg_date("start")
        end = arg_date("end")
        result = service.get_by_employee_id_and_period(
            employee_id,
            datetime.combine(start, time.min, tzinfo=timezone.utc),
            datetime.combine(end, time.max, tzinfo=timezone.utc),
        )
        return to_response(result)

    @app.route("/employees/<int:employee_id>/attendance/last30", methods=["GET"], endpoint="last_attendance")
    def last_attendance(employee_id: int):
        return to_response(service.get_last_30(employee_id))

    @app.route("/attendance/<int:record_id>", methods=["GET"], endpoint="get_attendance")
    def get_attendance(record_id: int):
        return to_response(service.get_attendance_record_by_id(record_id))

    @app.route("/attendance/<int:record_id>", methods=["PATCH"], endpoint="update_attendance")
    def update_attendance(record_id: int):
        return to_response(service.update_attendance_record(record_id, _patch_from(json_body())))

    @app.route("/attendance/<int:record_id>", methods=["DELETE"], endpoint="delete_attendance")
    def delete_attendance(record_id: int):
        return to_response(service.delete_attendance_record(record_id), status=204)

    @app.route("/companies/<int:company_id>/attendance/daily", methods=["GET"], endpoint="daily_overview")
    def daily_overview(company_id: int):
        return to_response(service.get_daily_overview(company_id, arg_date("date")))
