from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one work session.

    ``check_out is None`` means the session is still open. ``auto_closed`` is
    True when the system closed it because a new check-in superseded it.
    """

    id: int
    employee_id: int
    check_in: datetime
    check_out: Optional[datetime] = None
    auto_closed: bool = False

    @property
    def is_open(self) -> bool:
        return self.check_out is None


@dataclass(frozen=True)
class NewAttendanceRecord:
    employee_id: int
    check_in: datetime
    check_out: Optional[datetime] = None
    auto_closed: bool = False
