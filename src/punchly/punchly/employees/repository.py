from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Employee, EmployeeWithRecords, NewEmployee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note (DIP): services depend on this interface, never on a concrete database.
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def create(self, data: NewEmployee) -> Employee:
        raise NotImplementedError

    def update_employee(self, employee_id: int, changes: Mapping[str, Any]) -> Employee:
        """Persist only the supplied fields (e.g. ``{"checked_in": True}``)."""

        raise NotImplementedError

    def soft_delete(self, employee_id: int, *, deleted_at: datetime) -> Employee:
        raise NotImplementedError

    def list_by_company(self, company_id: int, *, department_id: Optional[int] = None) -> Sequence[Employee]:
        """Active (not soft-deleted) employees of a company."""

        raise NotImplementedError

    def get_employees_with_attendance_and_absences(
        self,
        *,
        start: datetime,
        end: datetime,
        company_id: int,
        department_id: Optional[int] = None,
    ) -> Sequence[EmployeeWithRecords]:
        """Employees in scope with attendance records checked in within
        [start, end] and absences intersecting the same days."""

        raise NotImplementedError
