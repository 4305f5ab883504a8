from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .absences.repository import AbsenceRecordRepository
from .absences.service import AbsenceService
from .attendance.repository import AttendanceRecordRepository
from .attendance.service import AttendanceService
from .employees.repository import EmployeeRepository
from .employees.service import EmployeeService
from .organization.repository import CompanyRepository, DepartmentRepository, EmployeeTypeRepository
from .reports.model import SpreadsheetWriter
from .reports.service import AttendanceReportService


@dataclass(frozen=True)
class Container:
    employee_service: EmployeeService
    absence_service: AbsenceService
    attendance_service: AttendanceService
    report_service: AttendanceReportService


def build_container(
    *,
    employees: EmployeeRepository,
    attendance: AttendanceRecordRepository,
    absences: AbsenceRecordRepository,
    companies: CompanyRepository,
    departments: DepartmentRepository,
    employee_types: EmployeeTypeRepository,
    report_writer: Optional[SpreadsheetWriter] = None,
) -> Container:
    """Wire services onto the storage adapters supplied by the host application."""
    employee_service = EmployeeService(employees, companies, departments, employee_types)
    absence_service = AbsenceService(absences)
    attendance_service = AttendanceService(attendance, employees, absences)
    report_service = AttendanceReportService(employees, writer=report_writer)

    return Container(
        employee_service=employee_service,
        absence_service=absence_service,
        attendance_service=attendance_service,
        report_service=report_service,
    )
