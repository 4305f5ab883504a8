from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional, Sequence

from ..absences.model import AbsenceRecord
from ..attendance.model import AttendanceRecord
from ..organization.model import Department, EmployeeType


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``checked_in`` caches whether an open attendance record exists. At most one
    of ``monthly_salary`` / ``hourly_salary`` is set.
    """

    id: int
    name: str
    company_id: int
    department_id: int
    employee_type_id: int
    birthdate: date
    checked_in: bool = False
    address: str = ""
    city: str = ""
    monthly_salary: Optional[Decimal] = None
    hourly_salary: Optional[Decimal] = None
    monthly_hours: Optional[Decimal] = None
    profile_picture_path: str = ""
    deleted_at: Optional[datetime] = None


@dataclass(frozen=True)
class NewEmployee:
    name: str
    company_id: int
    department_id: int
    employee_type_id: int
    birthdate: date
    address: str = ""
    city: str = ""
    monthly_salary: Optional[Decimal] = None
    hourly_salary: Optional[Decimal] = None
    monthly_hours: Optional[Decimal] = None
    checked_in: bool = False


@dataclass(frozen=True)
class EmployeeWithRecords:
    """Read-model for report generation: employee joined with its records in range."""

    employee: Employee
    department: Department
    employee_type: EmployeeType
    attendance_records: Sequence[AttendanceRecord] = field(default_factory=tuple)
    absence_records: Sequence[AbsenceRecord] = field(default_factory=tuple)
