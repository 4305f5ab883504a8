from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from ...attendance.model import AttendanceRecord
from ...common.datetime_utils import worked_minutes
from ...core.constants import MINUTES_PER_HOUR
from ...employees.model import Employee
from .base import ReportCalculator

CENTS = Decimal("0.01")


def minutes_to_hours(minutes: int) -> Decimal:
    return Decimal(minutes) / Decimal(MINUTES_PER_HOUR)


class StandardReportCalculator(ReportCalculator):
    """Standard rule: closed sessions only, floored to whole minutes.

    Earnings are hourly salary times worked hours, else the flat monthly
    salary (not prorated), else zero.
    """

    def worked_minutes(self, record: AttendanceRecord) -> int:
        return worked_minutes(record.check_in, record.check_out)

    def earnings(self, employee: Employee, total_minutes: int) -> Decimal:
        if employee.hourly_salary is not None:
            amount = Decimal(str(employee.hourly_salary)) * minutes_to_hours(total_minutes)
        elif employee.monthly_salary is not None:
            amount = Decimal(str(employee.monthly_salary))
        else:
            amount = Decimal(0)
        return amount.quantize(CENTS, rounding=ROUND_HALF_UP)
