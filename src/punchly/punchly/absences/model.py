from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..organization.model import AbsenceType


@dataclass(frozen=True)
class AbsenceRecord:
    """Domain entity: absence period, calendar days, both ends inclusive."""

    id: int
    employee_id: int
    start_date: date
    end_date: date
    absence_type_id: int
    absence_type: Optional[AbsenceType] = None

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date


@dataclass(frozen=True)
class NewAbsenceRecord:
    employee_id: int
    start_date: date
    end_date: date
    absence_type_id: int
