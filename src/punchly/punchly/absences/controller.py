from __future__ import annotations

from flask import Flask

from ..common.datetime_utils import parse_iso_date
from ..common.http import arg_date, body_int, json_body, to_response
from ..container import Container


def _patch_from(data: dict) -> dict:
    patch = dict(data)
    for key in ("start_date", "end_date"):
        if patch.get(key):
            patch[key] = parse_iso_date(patch[key])
    return patch


def register(app: Flask, container: Container) -> None:
    service = container.absence_service

    @app.route("/employees/<int:employee_id>/absences", methods=["POST"], endpoint="create_absence")
    def create_absence(employee_id: int):
        data = json_body()
        result = service.create_absence(
            employee_id,
            parse_iso_date(data.get("start_date")),
            parse_iso_date(data.get("end_date")),
            body_int(data, "absence_type_id"),
        )
        return to_response(result, status=201)

    @app.route("/employees/<int:employee_id>/absences", methods=["GET"], endpoint="list_absences")
    def list_absences(employee_id: int):
        start = arg_date("start", required=False)
        end = arg_date("end", required=False)
        if start and end:
            return to_response(service.get_by_employee_id_and_range(employee_id, start, end))
        return to_response(service.get_by_employee_id(employee_id))

    @app.route("/absences/<int:absence_id>", methods=["GET"], endpoint="get_absence")
    def get_absence(absence_id: int):
        return to_response(service.get_absence_by_id(absence_id))

    @app.route("/absences/<int:absence_id>", methods=["PATCH"], endpoint="update_absence")
    def update_absence(absence_id: int):
        return to_response(service.update_absence(absence_id, _patch_from(json_body())))

    @app.route("/absences/<int:absence_id>", methods=["DELETE"], endpoint="delete_absence")
    def delete_absence(absence_id: int):
        return to_response(service.delete_absence(absence_id), status=204)
