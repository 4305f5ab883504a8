from __future__ import annotations

import dataclasses
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Callable, Optional

from flask import jsonify, request

from ..core.exceptions import DatabaseError, DomainError, EntityNotFoundError, ValidationError
from ..core.result import Err, Ok, Result
from .datetime_utils import parse_iso_date, parse_iso_datetime

GENERIC_SERVER_ERROR = "Internal server error"


def to_json(value: Any) -> Any:
    """Make service values (dataclasses, dates, decimals) JSON friendly."""
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: to_json(getattr(value, f.name)) for f in dataclasses.fields(value)}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    if isinstance(value, dict):
        return {k: to_json(v) for k, v in value.items()}
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return str(value)
    return value


def status_for(error: DomainError) -> int:
    match error:
        case ValidationError():
            return 400
        case EntityNotFoundError():
            return 404
        case _:
            return 500


def error_response(error: DomainError):
    status = status_for(error)
    if isinstance(error, DatabaseError) or status == 500:
        return jsonify({"message": GENERIC_SERVER_ERROR}), 500
    body = {"message": error.message}
    if error.field:
        body["field"] = error.field
    return jsonify(body), status


def to_response(result: Result, *, status: int = 200, render: Optional[Callable[[Any], Any]] = None):
    match result:
        case Ok(value):
            if status == 204:
                return "", 204
            return jsonify(render(value) if render else to_json(value)), status
        case Err(error):
            return error_response(error)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("A JSON object body is required.")
    return data


def arg_date(name: str, *, required: bool = True) -> Optional[date]:
    value = request.args.get(name)
    if not value:
        if required:
            raise ValidationError(f"{name} is required (YYYY-MM-DD)", name)
        return None
    return parse_iso_date(value)


def body_datetime(data: dict, name: str) -> Optional[datetime]:
    value = data.get(name)
    return parse_iso_datetime(value) if value else None


def body_int(data: dict, name: str, *, required: bool = True) -> Optional[int]:
    value = data.get(name)
    if value is None or value == "":
        if required:
            raise ValidationError(f"{name} is required", name)
        return None
    if isinstance(value, bool):
        raise ValidationError(f"{name} must be an integer", name)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be an integer", name)
