from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, tzinfo
from itertools import groupby
from typing import Any, Dict, List, Optional, Sequence

from ..absences.model import AbsenceRecord
from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import ensure_utc, format_hours_minutes, iter_days
from ..common.validators import require_timezone
from ..core.exceptions import ValidationError
from ..core.result import Result, require, returns_result
from ..employees.model import EmployeeWithRecords
from ..employees.repository import EmployeeRepository
from .calculator.base import ReportCalculator
from .calculator.standard_calculator import StandardReportCalculator, minutes_to_hours
from .model import AttendanceReport, SheetDefinition, SheetSection, SpreadsheetWriter
from .workbook import ExcelReportWriter

logger = logging.getLogger(__name__)

OVERVIEW_COLUMNS = ("Department", "Name", "Birthdate", "Address", "Hourly salary", "Monthly salary", "Monthly hours")
SALARY_COLUMNS = ("Department", "Name", "Worked time", "Worked hours", "Hourly salary", "Monthly salary", "Earnings")

CHECK_IN_LABEL = "Check-in"
CHECK_OUT_LABEL = "Check-out"
DAILY_TOTAL_LABEL = "Daily total"


def _number(value) -> Optional[float]:
    return float(value) if value is not None else None


def _address(employee) -> str:
    return ", ".join(part for part in (employee.address, employee.city) if part)


def _absence_label(absence: AbsenceRecord) -> str:
    if absence.absence_type is not None:
        return absence.absence_type.name
    return "Absence"


class AttendanceReportService:
    """Builds the payroll attendance workbook for a company and date range.

    Three sheets: employee overview and salary summary (both grouped by
    employee type) and a per-day check-in/check-out grid.
    """

    def __init__(
        self,
        employees: EmployeeRepository,
        *,
        writer: Optional[SpreadsheetWriter] = None,
        calculator: Optional[ReportCalculator] = None,
    ):
        self._employees = require(employees, "employees")
        self._writer = writer or ExcelReportWriter()
        self._calculator = calculator or StandardReportCalculator()

    @returns_result("generating the attendance report")
    def generate_report(
        self,
        start: datetime,
        end: datetime,
        company_id: int,
        timezone: str,
        department_id: Optional[int] = None,
    ) -> Result[bytes]:
        report = self._build(start, end, company_id, timezone, department_id)
        content = self._writer.render(report.sheets)
        logger.info("Attendance report for company %s rendered (%d bytes)", company_id, len(content))
        return content

    @returns_result("building the attendance report")
    def build_report(
        self,
        start: datetime,
        end: datetime,
        company_id: int,
        timezone: str,
        department_id: Optional[int] = None,
    ) -> Result[AttendanceReport]:
        return self._build(start, end, company_id, timezone, department_id)

    def _build(
        self,
        start: datetime,
        end: datetime,
        company_id: int,
        timezone: str,
        department_id: Optional[int],
    ) -> AttendanceReport:
        zone = require_timezone(timezone)
        start, end = ensure_utc(start), ensure_utc(end)
        if end < start:
            raise ValidationError("End date cannot be before start date.", "end_date")

        rows = self._employees.get_employees_with_attendance_and_absences(
            start=start,
            end=end,
            company_id=company_id,
            department_id=department_id,
        )
        employees = sorted(rows, key=lambda e: (e.employee_type.name, e.employee.name, e.employee.id))
        logger.info(
            "Building attendance report for company %s (%s..%s, %d employees)",
            company_id,
            start.date(),
            end.date(),
            len(employees),
        )

        return AttendanceReport(
            overview=self._overview_sheet(employees),
            daily_records=self._daily_records_sheet(employees, zone),
            salaries=self._salary_sheet(employees),
        )

    @staticmethod
    def _by_type(employees: Sequence[EmployeeWithRecords]):
        return groupby(employees, key=lambda e: e.employee_type.name)

    def _overview_sheet(self, employees: Sequence[EmployeeWithRecords]) -> SheetDefinition:
        sections = []
        for type_name, group in self._by_type(employees):
            rows = []
            for item in group:
                e = item.employee
                rows.append(
                    [
                        item.department.name,
                        e.name,
                        e.birthdate.isoformat() if e.birthdate else None,
                        _address(e),
                        _number(e.hourly_salary),
                        _number(e.monthly_salary),
                        _number(e.monthly_hours),
                    ]
                )
            sections.append(SheetSection(title=type_name, rows=rows))
        return SheetDefinition(title="Employees", columns=OVERVIEW_COLUMNS, sections=sections)

    def _daily_records_sheet(self, employees: Sequence[EmployeeWithRecords], zone: tzinfo) -> SheetDefinition:
        records_by_day: List[Dict[date, List[AttendanceRecord]]] = []
        absence_by_day: List[Dict[date, str]] = []
        dates: set[date] = set()

        for item in employees:
            per_day: Dict[date, List[AttendanceRecord]] = defaultdict(list)
            for record in item.attendance_records:
                per_day[self._local(record.check_in, zone).date()].append(record)
            absent: Dict[date, str] = {}
            for absence in item.absence_records:
                for day in iter_days(absence.start_date, absence.end_date):
                    absent[day] = _absence_label(absence)
            records_by_day.append(per_day)
            absence_by_day.append(absent)
            dates.update(per_day)
            dates.update(absent)

        sections = []
        for day in sorted(dates):
            check_in_row: List[Any] = [day.isoformat(), CHECK_IN_LABEL]
            check_out_row: List[Any] = [None, CHECK_OUT_LABEL]
            total_row: List[Any] = [None, DAILY_TOTAL_LABEL]
            highlights = set()

            for idx in range(len(employees)):
                column = idx + 2
                label = absence_by_day[idx].get(day)
                records = sorted(records_by_day[idx].get(day, ()), key=lambda r: ensure_utc(r.check_in))
                if label is not None:
                    # Absence wins over any attendance on the same day.
                    check_in_row.append(label)
                    check_out_row.append(label)
                    total_row.append(None)
                elif records:
                    last = records[-1]
                    check_in_row.append(self._local(records[0].check_in, zone).strftime("%H:%M"))
                    if last.check_out is not None:
                        check_out_row.append(self._local(last.check_out, zone).strftime("%H:%M"))
                        if last.auto_closed:
                            highlights.add((1, column))
                    else:
                        check_out_row.append(None)
                    minutes = sum(self._calculator.worked_minutes(r) for r in records)
                    total_row.append(format_hours_minutes(minutes))
                else:
                    check_in_row.append(None)
                    check_out_row.append(None)
                    total_row.append(None)

            sections.append(
                SheetSection(
                    rows=[check_in_row, check_out_row, total_row],
                    highlights=frozenset(highlights),
                    merge_first_column=True,
                )
            )

        columns = ["Date", ""] + [item.employee.name for item in employees]
        return SheetDefinition(title="Daily records", columns=columns, sections=sections)

    def _salary_sheet(self, employees: Sequence[EmployeeWithRecords]) -> SheetDefinition:
        sections = []
        for type_name, group in self._by_type(employees):
            rows = []
            for item in group:
                e = item.employee
                minutes = sum(self._calculator.worked_minutes(r) for r in item.attendance_records)
                earnings = self._calculator.earnings(e, minutes)
                rows.append(
                    [
                        item.department.name,
                        e.name,
                        format_hours_minutes(minutes),
                        f"{minutes_to_hours(minutes):.2f}",
                        _number(e.hourly_salary),
                        _number(e.monthly_salary),
                        f"{earnings:.2f}",
                    ]
                )
            sections.append(SheetSection(title=type_name, rows=rows))
        return SheetDefinition(title="Salaries", columns=SALARY_COLUMNS, sections=sections)

    @staticmethod
    def _local(value: datetime, zone: tzinfo) -> datetime:
        return ensure_utc(value).astimezone(zone)
