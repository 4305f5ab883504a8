from __future__ import annotations

from typing import Optional, Protocol

from .model import Company, Department, EmployeeType


class CompanyRepository(Protocol):
    def get_by_id(self, company_id: int) -> Optional[Company]:
        raise NotImplementedError


class DepartmentRepository(Protocol):
    def get_by_id(self, department_id: int) -> Optional[Department]:
        raise NotImplementedError


class EmployeeTypeRepository(Protocol):
    def get_by_id(self, employee_type_id: int) -> Optional[EmployeeType]:
        raise NotImplementedError
