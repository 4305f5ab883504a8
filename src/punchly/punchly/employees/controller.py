from __future__ import annotations

from decimal import Decimal, InvalidOperation

from flask import Flask, request

from ..common.datetime_utils import parse_iso_date
from ..common.http import body_int, json_body, to_response
from ..container import Container
from ..core.exceptions import ValidationError
from .model import NewEmployee

DECIMAL_FIELDS = ("monthly_salary", "hourly_salary", "monthly_hours")


def _decimal(value, field_name: str):
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValidationError(f"{field_name} must be a number", field_name)


def _patch_from(data: dict) -> dict:
    patch = dict(data)
    for key in ("company_id", "department_id", "employee_type_id"):
        if key in patch:
            patch[key] = body_int(patch, key, required=False)
    for key in DECIMAL_FIELDS:
        if key in patch:
            patch[key] = _decimal(patch[key], key)
    if "birthdate" in patch:
        patch["birthdate"] = parse_iso_date(patch["birthdate"])
    return patch


def register(app: Flask, container: Container) -> None:
    service = container.employee_service

    @app.route("/companies/<int:company_id>/employees", methods=["POST"], endpoint="create_employee")
    def create_employee(company_id: int):
        data = json_body()
        new_employee = NewEmployee(
            name=data.get("name") or "",
            company_id=company_id,
            department_id=body_int(data, "department_id"),
            employee_type_id=body_int(data, "employee_type_id"),
            birthdate=parse_iso_date(data.get("birthdate")),
            address=data.get("address") or "",
            city=data.get("city") or "",
            monthly_salary=_decimal(data.get("monthly_salary"), "monthly_salary"),
            hourly_salary=_decimal(data.get("hourly_salary"), "hourly_salary"),
            monthly_hours=_decimal(data.get("monthly_hours"), "monthly_hours"),
        )
        return to_response(service.create_employee(new_employee), status=201)

    @app.route("/companies/<int:company_id>/employees", methods=["GET"], endpoint="list_employees")
    def list_employees(company_id: int):
        department_id = request.args.get("department_id", type=int)
        return to_response(service.list_employees(company_id, department_id=department_id))

    @app.route("/employees/<int:employee_id>", methods=["GET"], endpoint="get_employee")
    def get_employee(employee_id: int):
        return to_response(service.get_employee_by_id(employee_id))

    @app.route("/employees/<int:employee_id>", methods=["PATCH"], endpoint="update_employee")
    def update_employee(employee_id: int):
        return to_response(service.update_employee(employee_id, _patch_from(json_body())))

    @app.route("/employees/<int:employee_id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(employee_id: int):
        return to_response(service.delete_employee(employee_id), status=204)
