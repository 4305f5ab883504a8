from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence

from ..common.datetime_utils import now_utc
from ..common.validators import require_known_fields, require_non_empty, require_non_negative, require_present
from ..core.constants import MIN_EMPLOYEE_AGE
from ..core.exceptions import EntityNotFoundError, ValidationError
from ..core.result import Result, require, returns_result
from ..organization.repository import CompanyRepository, DepartmentRepository, EmployeeTypeRepository
from .model import Employee, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = (
    "name",
    "company_id",
    "department_id",
    "employee_type_id",
    "birthdate",
    "address",
    "city",
    "monthly_salary",
    "hourly_salary",
    "monthly_hours",
    "profile_picture_path",
)

REQUIRED_FIELDS = ("company_id", "department_id", "employee_type_id", "birthdate")


def age_on(birthdate: date, today: date) -> int:
    """Completed years; the birthday itself counts."""
    had_birthday = (today.month, today.day) >= (birthdate.month, birthdate.day)
    return today.year - birthdate.year - (0 if had_birthday else 1)


class EmployeeService:
    def __init__(
        self,
        employees: EmployeeRepository,
        companies: CompanyRepository,
        departments: DepartmentRepository,
        employee_types: EmployeeTypeRepository,
    ):
        self._employees = require(employees, "employees")
        self._companies = require(companies, "companies")
        self._departments = require(departments, "departments")
        self._employee_types = require(employee_types, "employee_types")

    def _validate_salary(self, monthly_salary, hourly_salary) -> None:
        if monthly_salary is not None and hourly_salary is not None:
            raise ValidationError("Both monthly and hourly salary cannot be filled at the same time.", "salary")
        require_non_negative(monthly_salary, "monthly_salary")
        require_non_negative(hourly_salary, "hourly_salary")

    def _validate_age(self, birthdate: date, today: date) -> None:
        if age_on(birthdate, today) < MIN_EMPLOYEE_AGE:
            raise ValidationError(f"Employee must be over {MIN_EMPLOYEE_AGE} years old.", "birthdate")

    def _validate_references(
        self,
        *,
        company_id: Optional[int] = None,
        department_id: Optional[int] = None,
        employee_type_id: Optional[int] = None,
    ) -> None:
        if company_id is not None and not self._companies.get_by_id(company_id):
            raise ValidationError("Invalid company ID", "company_id")
        if department_id is not None and not self._departments.get_by_id(department_id):
            raise ValidationError("Invalid department ID", "department_id")
        if employee_type_id is not None and not self._employee_types.get_by_id(employee_type_id):
            raise ValidationError("Invalid employee type ID", "employee_type_id")

    @returns_result("creating the employee")
    def create_employee(self, data: NewEmployee, *, today: Optional[date] = None) -> Result[Employee]:
        today = today or now_utc().date()

        name = require_non_empty(data.name, "name")
        self._validate_salary(data.monthly_salary, data.hourly_salary)
        self._validate_age(require_present(data.birthdate, "birthdate"), today)
        self._validate_references(
            company_id=data.company_id,
            department_id=data.department_id,
            employee_type_id=data.employee_type_id,
        )

        employee = self._employees.create(replace(data, name=name, checked_in=False))
        logger.info("Employee %s created in company %s", employee.id, employee.company_id)
        return employee

    @returns_result("updating the employee")
    def update_employee(
        self,
        employee_id: int,
        patch: Mapping[str, Any],
        *,
        today: Optional[date] = None,
    ) -> Result[Employee]:
        require_known_fields(patch, UPDATABLE_FIELDS)
        today = today or now_utc().date()

        existing = self._employees.get_by_id(employee_id)
        if not existing:
            raise EntityNotFoundError(f"Employee with ID {employee_id} not found.")

        changes = dict(patch)
        for key in REQUIRED_FIELDS:
            if key in changes:
                require_present(changes[key], key)
        if "name" in changes:
            changes["name"] = require_non_empty(changes["name"], "name")

        monthly = changes.get("monthly_salary", existing.monthly_salary)
        hourly = changes.get("hourly_salary", existing.hourly_salary)
        self._validate_salary(monthly, hourly)

        if changes.get("birthdate") is not None:
            self._validate_age(changes["birthdate"], today)

        self._validate_references(
            company_id=changes.get("company_id"),
            department_id=changes.get("department_id"),
            employee_type_id=changes.get("employee_type_id"),
        )
        return self._employees.update_employee(employee_id, changes)

    @returns_result("deleting the employee")
    def delete_employee(self, employee_id: int, *, now: Optional[datetime] = None) -> Result[Employee]:
        existing = self._employees.get_by_id(employee_id)
        if not existing:
            raise EntityNotFoundError(f"Employee with ID {employee_id} not found.")
        return self._employees.soft_delete(employee_id, deleted_at=now or now_utc())

    @returns_result("fetching the employee")
    def get_employee_by_id(self, employee_id: int) -> Result[Employee]:
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise EntityNotFoundError(f"Employee with ID {employee_id} not found.")
        return employee

    @returns_result("fetching employees")
    def list_employees(self, company_id: int, *, department_id: Optional[int] = None) -> Result[Sequence[Employee]]:
        return list(self._employees.list_by_company(company_id, department_id=department_id))
