from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..absences.repository import AbsenceRecordRepository
from ..common.datetime_utils import day_bounds, ensure_utc, now_utc, utc_date
from ..common.validators import require_known_fields
from ..core.exceptions import EntityNotFoundError, ValidationError
from ..core.result import Result, require, returns_result
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, NewAttendanceRecord
from .repository import AttendanceRecordRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("employee_id", "check_in", "check_out")


class AttendanceService:
    """Check-in / check-out state machine and manual record maintenance.

    Per employee the state is either checked out (no open record) or checked
    in (exactly one open record). ``Employee.checked_in`` mirrors that state
    and is only touched by the live check-in/check-out path.
    """

    def __init__(
        self,
        attendance: AttendanceRecordRepository,
        employees: EmployeeRepository,
        absences: AbsenceRecordRepository,
    ):
        self._attendance = require(attendance, "attendance")
        self._employees = require(employees, "employees")
        self._absences = require(absences, "absences")

    def _require_employee(self, employee_id: int) -> None:
        if not self._employees.get_by_id(employee_id):
            raise EntityNotFoundError(f"Employee with ID {employee_id} not found.")

    def _reject_if_absent(self, employee_id: int, day: date) -> None:
        if self._absences.get_by_employee_id_and_range(employee_id, day, day):
            raise ValidationError(f"Employee has a registered absence on {day.isoformat()}.")

    @returns_result("checking in the employee")
    def check_in(self, employee_id: int, *, now: Optional[datetime] = None) -> Result[AttendanceRecord]:
        now = ensure_utc(now or now_utc())

        self._require_employee(employee_id)
        self._reject_if_absent(employee_id, utc_date(now))

        ongoing = self._attendance.get_open_record(employee_id)
        if ongoing:
            # A forgotten check-out is superseded, never a reason to refuse.
            self._attendance.update(ongoing.id, {"check_out": now, "auto_closed": True})
            logger.info("Auto-closed attendance record %s of employee %s", ongoing.id, employee_id)

        record = self._attendance.create(NewAttendanceRecord(employee_id=employee_id, check_in=now))
        self._employees.update_employee(employee_id, {"checked_in": True})
        return record

    @returns_result("checking out the employee")
    def check_out(self, employee_id: int, *, now: Optional[datetime] = None) -> Result[AttendanceRecord]:
        now = ensure_utc(now or now_utc())

        self._require_employee(employee_id)
        self._reject_if_absent(employee_id, utc_date(now))

        ongoing = self._attendance.get_open_record(employee_id)
        if not ongoing:
            raise EntityNotFoundError("No ongoing attendance record found for this employee.")

        record = self._attendance.update(ongoing.id, {"check_out": now})
        self._employees.update_employee(employee_id, {"checked_in": False})
        return record

    @returns_result("creating the attendance record")
    def create_attendance_record(
        self,
        employee_id: int,
        check_in: Optional[datetime],
        check_out: Optional[datetime],
    ) -> Result[AttendanceRecord]:
        if check_in is None:
            raise ValidationError("A valid check-in time is required.", "check_in")
        if check_out is None:
            raise ValidationError("A valid check-out time is required.", "check_out")
        check_in, check_out = ensure_utc(check_in), ensure_utc(check_out)
        if check_out < check_in:
            raise ValidationError("Check-out cannot be before check-in.", "check_out")

        self._require_employee(employee_id)
        self._reject_if_absent(employee_id, utc_date(check_in))

        return self._attendance.create(
            NewAttendanceRecord(employee_id=employee_id, check_in=check_in, check_out=check_out)
        )

    @returns_result("updating the attendance record")
    def update_attendance_record(self, record_id: int, patch: Mapping[str, Any]) -> Result[AttendanceRecord]:
        require_known_fields(patch, UPDATABLE_FIELDS)
        for key in ("check_in", "check_out"):
            if key in patch and patch[key] is None:
                raise ValidationError(f"{key} cannot be cleared.", key)

        existing = self._attendance.get_by_id(record_id)
        if not existing:
            raise EntityNotFoundError(f"Attendance record with ID {record_id} not found.")

        if "employee_id" in patch and patch["employee_id"] != existing.employee_id:
            raise ValidationError("Employee of an attendance record cannot be changed.", "employee_id")

        changes: dict[str, Any] = {}
        check_in = existing.check_in
        check_out = existing.check_out
        if "check_in" in patch:
            check_in = changes["check_in"] = ensure_utc(patch["check_in"])
        if "check_out" in patch:
            check_out = changes["check_out"] = ensure_utc(patch["check_out"])
            # A manual edit confirms the record.
            changes["auto_closed"] = False

        self._reject_if_absent(existing.employee_id, utc_date(check_in))
        if check_out is not None:
            self._reject_if_absent(existing.employee_id, utc_date(check_out))
            if not ensure_utc(check_in) < ensure_utc(check_out):
                raise ValidationError("Check-in must be before check-out.", "check_out")

        if not changes:
            return existing
        record = self._attendance.update(record_id, changes)
        if existing.is_open and not record.is_open:
            self._employees.update_employee(existing.employee_id, {"checked_in": False})
        return record

    @returns_result("deleting the attendance record")
    def delete_attendance_record(self, record_id: int) -> Result[AttendanceRecord]:
        record = self._attendance.delete(record_id)
        if record.is_open:
            self._employees.update_employee(record.employee_id, {"checked_in": False})
        return record

    @returns_result("fetching the attendance record")
    def get_attendance_record_by_id(self, record_id: int) -> Result[AttendanceRecord]:
        record = self._attendance.get_by_id(record_id)
        if not record:
            raise EntityNotFoundError(f"Attendance record with ID {record_id} not found.")
        return record

    @returns_result("fetching attendance records")
    def get_last_30(self, employee_id: int) -> Result[Sequence[AttendanceRecord]]:
        return list(self._attendance.get_last_30(employee_id))

    @returns_result("fetching attendance records")
    def get_by_employee_id_and_period(
        self,
        employee_id: int,
        start: datetime,
        end: datetime,
    ) -> Result[Sequence[AttendanceRecord]]:
        start, end = ensure_utc(start), ensure_utc(end)
        if end < start:
            raise ValidationError("A valid date range is required.", "end_date")
        return list(self._attendance.get_by_employee_id_and_period(employee_id, start, end))

    @returns_result("fetching the daily overview")
    def get_daily_overview(self, company_id: int, day: date) -> Result[Sequence[AttendanceRecord]]:
        start, end = day_bounds(day)
        return list(self._attendance.get_by_company_and_period(company_id, start, end))
