from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AttendanceRecord, NewAttendanceRecord


class AttendanceRecordRepository(Protocol):
    """Repository interface for attendance records.

    Storage is expected to enforce "at most one record with check_out IS NULL
    per employee"; concurrent check-ins rely on it. A write that violates it
    must raise ``ValidationError`` so callers get a conflict, not a storage
    failure.
    """

    def create(self, data: NewAttendanceRecord) -> AttendanceRecord:
        raise NotImplementedError

    def get_by_id(self, record_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_open_record(self, employee_id: int) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def update(self, record_id: int, changes: Mapping[str, Any]) -> AttendanceRecord:
        raise NotImplementedError

    def delete(self, record_id: int) -> AttendanceRecord:
        raise NotImplementedError

    def get_by_employee_id_and_period(self, employee_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        """Records whose check-in falls within [start, end]."""

        raise NotImplementedError

    def get_last_30(self, employee_id: int) -> Sequence[AttendanceRecord]:
        """Latest 30 records by check-in, newest first."""

        raise NotImplementedError

    def get_by_company_and_period(self, company_id: int, start: datetime, end: datetime) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
