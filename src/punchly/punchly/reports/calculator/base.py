from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal

from ...attendance.model import AttendanceRecord
from ...employees.model import Employee


class ReportCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll figures)."""

    @abstractmethod
    def worked_minutes(self, record: AttendanceRecord) -> int:
        raise NotImplementedError

    @abstractmethod
    def earnings(self, employee: Employee, total_minutes: int) -> Decimal:
        raise NotImplementedError
