from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Optional

import pytest

from punchly.absences.model import AbsenceRecord
from punchly.attendance.model import AttendanceRecord
from punchly.common.datetime_utils import ensure_utc, overlaps
from punchly.core.exceptions import ValidationError
from punchly.employees.model import Employee, EmployeeWithRecords
from punchly.organization.model import AbsenceType, Company, Department, EmployeeType


class InMemoryEmployees:
    def __init__(self, employees=(), *, departments=None, employee_types=None, attendance=None, absences=None):
        self.by_id: dict[int, Employee] = {e.id: e for e in employees}
        self._departments = departments
        self._employee_types = employee_types
        self._attendance = attendance
        self._absences = absences
        self._id = max(self.by_id, default=0)

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        employee = self.by_id.get(employee_id)
        if employee is None or employee.deleted_at is not None:
            return None
        return employee

    def create(self, data) -> Employee:
        self._id += 1
        employee = Employee(id=self._id, **vars(data))
        self.by_id[employee.id] = employee
        return employee

    def update_employee(self, employee_id: int, changes) -> Employee:
        employee = replace(self.by_id[employee_id], **dict(changes))
        self.by_id[employee_id] = employee
        return employee

    def soft_delete(self, employee_id: int, *, deleted_at: datetime) -> Employee:
        return self.update_employee(employee_id, {"deleted_at": deleted_at})

    def list_by_company(self, company_id: int, *, department_id: Optional[int] = None):
        return [
            e
            for e in self.by_id.values()
            if e.company_id == company_id
            and e.deleted_at is None
            and (department_id is None or e.department_id == department_id)
        ]

    def get_employees_with_attendance_and_absences(self, *, start, end, company_id, department_id=None):
        rows = []
        for e in self.list_by_company(company_id, department_id=department_id):
            attendance = [
                r
                for r in self._attendance.records.values()
                if r.employee_id == e.id and start <= ensure_utc(r.check_in) <= end
            ]
            absences = [
                a
                for a in self._absences.records.values()
                if a.employee_id == e.id and overlaps(a.start_date, a.end_date, start.date(), end.date())
            ]
            rows.append(
                EmployeeWithRecords(
                    employee=e,
                    department=self._departments.get_by_id(e.department_id),
                    employee_type=self._employee_types.get_by_id(e.employee_type_id),
                    attendance_records=tuple(sorted(attendance, key=lambda r: r.check_in)),
                    absence_records=tuple(absences),
                )
            )
        return rows


class InMemoryAttendance:
    def __init__(self, employees_company: Optional[dict[int, int]] = None):
        self.records: dict[int, AttendanceRecord] = {}
        self._employees_company = employees_company or {}
        self._id = 0

    def add(self, employee_id: int, check_in: datetime, check_out: Optional[datetime] = None, auto_closed=False):
        self._id += 1
        record = AttendanceRecord(self._id, employee_id, check_in, check_out, auto_closed)
        self.records[record.id] = record
        return record

    def create(self, data) -> AttendanceRecord:
        if data.check_out is None and any(
            r.employee_id == data.employee_id and r.is_open for r in self.records.values()
        ):
            raise ValidationError("Employee already has an open attendance record.", "check_in")
        return self.add(data.employee_id, data.check_in, data.check_out, data.auto_closed)

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        return self.records.get(record_id)

    def get_open_record(self, employee_id: int) -> Optional[AttendanceRecord]:
        return next((r for r in self.records.values() if r.employee_id == employee_id and r.is_open), None)

    def update(self, record_id: int, changes) -> AttendanceRecord:
        record = replace(self.records[record_id], **dict(changes))
        self.records[record_id] = record
        return record

    def delete(self, record_id: int) -> AttendanceRecord:
        return self.records.pop(record_id)

    def get_by_employee_id_and_period(self, employee_id: int, start: datetime, end: datetime):
        return sorted(
            (r for r in self.records.values() if r.employee_id == employee_id and start <= r.check_in <= end),
            key=lambda r: r.check_in,
        )

    def get_last_30(self, employee_id: int):
        items = [r for r in self.records.values() if r.employee_id == employee_id]
        return sorted(items, key=lambda r: r.check_in, reverse=True)[:30]

    def get_by_company_and_period(self, company_id: int, start: datetime, end: datetime):
        return [
            r
            for r in self.records.values()
            if self._employees_company.get(r.employee_id) == company_id and start <= r.check_in <= end
        ]


class InMemoryAbsences:
    def __init__(self, absence_types: Optional[dict[int, AbsenceType]] = None):
        self.records: dict[int, AbsenceRecord] = {}
        self._types = absence_types or {}
        self._id = 0

    def add(self, employee_id: int, start_date: date, end_date: date, absence_type_id: int = 1) -> AbsenceRecord:
        self._id += 1
        record = AbsenceRecord(
            self._id, employee_id, start_date, end_date, absence_type_id, self._types.get(absence_type_id)
        )
        self.records[record.id] = record
        return record

    def create(self, data) -> AbsenceRecord:
        return self.add(data.employee_id, data.start_date, data.end_date, data.absence_type_id)

    def get_by_id(self, absence_id: int) -> Optional[AbsenceRecord]:
        return self.records.get(absence_id)

    def get_by_employee_id(self, employee_id: int):
        return sorted((a for a in self.records.values() if a.employee_id == employee_id), key=lambda a: a.start_date)

    def get_by_employee_id_and_range(self, employee_id: int, start: date, end: date):
        return [a for a in self.get_by_employee_id(employee_id) if a.start_date <= end and a.end_date >= start]

    def update(self, absence_id: int, changes) -> AbsenceRecord:
        record = replace(self.records[absence_id], **dict(changes))
        self.records[absence_id] = record
        return record

    def delete(self, absence_id: int) -> AbsenceRecord:
        return self.records.pop(absence_id)


class InMemoryLookup:
    def __init__(self, items=()):
        self.items = {i.id: i for i in items}

    def get_by_id(self, item_id: int):
        return self.items.get(item_id)


class FailingRepository:
    """Every call raises, like a repository whose database is down."""

    def __init__(self):
        self.calls: list[str] = []

    def __getattr__(self, name):
        def fail(*args, **kwargs):
            self.calls.append(name)
            raise RuntimeError(f"connection lost during {name}")

        return fail


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2024, 3, 12, 8, 0, tzinfo=timezone.utc)


@pytest.fixture
def company() -> Company:
    return Company(id=1, name="Acme")


@pytest.fixture
def departments():
    return InMemoryLookup([Department(id=1, name="Sales", company_id=1), Department(id=2, name="Ops", company_id=1)])


@pytest.fixture
def employee_types():
    return InMemoryLookup([EmployeeType(id=1, name="Full-time", company_id=1), EmployeeType(id=2, name="Student", company_id=1)])


@pytest.fixture
def companies(company):
    return InMemoryLookup([company])


@pytest.fixture
def absence_types() -> dict[int, AbsenceType]:
    return {1: AbsenceType(id=1, name="Vacation", company_id=1), 2: AbsenceType(id=2, name="Sick leave", company_id=1)}


@pytest.fixture
def ana() -> Employee:
    return Employee(
        id=1,
        name="Ana",
        company_id=1,
        department_id=1,
        employee_type_id=1,
        birthdate=date(1990, 5, 1),
        address="Ilica 1",
        city="Zagreb",
        hourly_salary=Decimal("12.50"),
    )


@pytest.fixture
def ivo() -> Employee:
    return Employee(
        id=2,
        name="Ivo",
        company_id=1,
        department_id=2,
        employee_type_id=2,
        birthdate=date(2004, 1, 20),
        monthly_salary=Decimal("2000"),
        monthly_hours=Decimal("160"),
    )


@pytest.fixture
def attendance_repo(ana, ivo):
    return InMemoryAttendance({ana.id: ana.company_id, ivo.id: ivo.company_id})


@pytest.fixture
def absences_repo(absence_types):
    return InMemoryAbsences(absence_types)


@pytest.fixture
def employees_repo(ana, ivo, departments, employee_types, attendance_repo, absences_repo):
    return InMemoryEmployees(
        [ana, ivo],
        departments=departments,
        employee_types=employee_types,
        attendance=attendance_repo,
        absences=absences_repo,
    )


@pytest.fixture
def failing_repo() -> FailingRepository:
    return FailingRepository()
