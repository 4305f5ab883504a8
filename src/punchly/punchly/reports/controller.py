from __future__ import annotations

import io
from datetime import datetime, time, timezone

from flask import Flask, request, send_file

from ..common.http import arg_date, error_response
from ..container import Container
from ..core.constants import DEFAULT_TIMEZONE, REPORT_FILENAME, XLSX_MIMETYPE
from ..core.result import Err, Ok


def register(app: Flask, container: Container) -> None:
    service = container.report_service

    @app.route("/companies/<int:company_id>/reports/attendance", methods=["GET"], endpoint="attendance_report")
    def attendance_report(company_id: int):
        start = arg_date("start_date")
        end = arg_date("end_date")
        timezone_name = request.args.get("timezone") or app.config.get("DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)
        department_id = request.args.get("department_id", type=int)

        result = service.generate_report(
            datetime.combine(start, time.min, tzinfo=timezone.utc),
            datetime.combine(end, time(23, 59, 59, 999000), tzinfo=timezone.utc),
            company_id,
            timezone_name,
            department_id,
        )
        match result:
            case Ok(content):
                return send_file(
                    io.BytesIO(content),
                    mimetype=XLSX_MIMETYPE,
                    as_attachment=True,
                    download_name=REPORT_FILENAME,
                )
            case Err(error):
                return error_response(error)
