from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import AbsenceRecord, NewAbsenceRecord


class AbsenceRecordRepository(Protocol):
    """Repository interface for absence records.

    Storage is expected to exclude overlapping (employee_id, date range) pairs.
    A write that violates it must raise ``ValidationError``.
    """

    def create(self, data: NewAbsenceRecord) -> AbsenceRecord:
        raise NotImplementedError

    def get_by_id(self, absence_id: int) -> Optional[AbsenceRecord]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: int) -> Sequence[AbsenceRecord]:
        raise NotImplementedError

    def get_by_employee_id_and_range(self, employee_id: int, start: date, end: date) -> Sequence[AbsenceRecord]:
        """Absences with ``start_date <= end`` and ``end_date >= start``, ordered by start."""

        raise NotImplementedError

    def update(self, absence_id: int, changes: Mapping[str, Any]) -> AbsenceRecord:
        raise NotImplementedError

    def delete(self, absence_id: int) -> AbsenceRecord:
        raise NotImplementedError
