from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Sequence

from ..common.datetime_utils import overlaps
from ..common.validators import require_date_order, require_known_fields, require_present
from ..core.exceptions import EntityNotFoundError, ValidationError
from ..core.result import Result, require, returns_result
from .model import AbsenceRecord, NewAbsenceRecord
from .repository import AbsenceRecordRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ("employee_id", "start_date", "end_date", "absence_type_id")


class AbsenceService:
    """Keeps absence periods of an employee free of overlaps.

    Overlap is checked on closed intervals: an absence ending on day X and
    another one starting on day X conflict. Existing attendance records are
    not consulted here.
    """

    def __init__(self, absences: AbsenceRecordRepository):
        self._absences = require(absences, "absences")

    @returns_result("creating the absence record")
    def create_absence(
        self,
        employee_id: int,
        start_date: date,
        end_date: date,
        absence_type_id: int,
    ) -> Result[AbsenceRecord]:
        require_present(start_date, "start_date")
        require_present(end_date, "end_date")
        require_present(absence_type_id, "absence_type_id")
        require_date_order(start_date, end_date, "End date is before start date.")

        existing = self._absences.get_by_employee_id_and_range(employee_id, start_date, end_date)
        if existing:
            raise ValidationError("Absence overlaps an existing absence period.", "start_date")

        absence = self._absences.create(
            NewAbsenceRecord(
                employee_id=employee_id,
                start_date=start_date,
                end_date=end_date,
                absence_type_id=absence_type_id,
            )
        )
        logger.info("Absence %s created for employee %s (%s..%s)", absence.id, employee_id, start_date, end_date)
        return absence

    @returns_result("updating the absence record")
    def update_absence(self, absence_id: int, patch: Mapping[str, Any]) -> Result[AbsenceRecord]:
        require_known_fields(patch, UPDATABLE_FIELDS)

        existing = self._absences.get_by_id(absence_id)
        if not existing:
            raise EntityNotFoundError(f"Absence record with ID {absence_id} not found.")

        if "employee_id" in patch and patch["employee_id"] != existing.employee_id:
            raise ValidationError("Employee of an absence record cannot be changed.", "employee_id")

        start_date = patch.get("start_date") or existing.start_date
        end_date = patch.get("end_date") or existing.end_date
        require_date_order(start_date, end_date)

        candidates = self._absences.get_by_employee_id_and_range(existing.employee_id, start_date, end_date)
        for other in candidates:
            if other.id == existing.id:
                continue
            if overlaps(start_date, end_date, other.start_date, other.end_date):
                raise ValidationError("Absence overlaps an existing absence period.", "start_date")

        changes = {k: v for k, v in patch.items() if k != "employee_id"}
        changes["start_date"] = start_date
        changes["end_date"] = end_date
        return self._absences.update(absence_id, changes)

    @returns_result("deleting the absence record")
    def delete_absence(self, absence_id: int) -> Result[AbsenceRecord]:
        return self._absences.delete(absence_id)

    @returns_result("fetching the absence record")
    def get_absence_by_id(self, absence_id: int) -> Result[AbsenceRecord]:
        absence = self._absences.get_by_id(absence_id)
        if not absence:
            raise EntityNotFoundError(f"Absence record with ID {absence_id} not found.")
        return absence

    @returns_result("fetching absence records")
    def get_by_employee_id(self, employee_id: int) -> Result[Sequence[AbsenceRecord]]:
        return list(self._absences.get_by_employee_id(employee_id))

    @returns_result("fetching absence records")
    def get_by_employee_id_and_range(self, employee_id: int, start: date, end: date) -> Result[Sequence[AbsenceRecord]]:
        require_date_order(start, end)
        return list(self._absences.get_by_employee_id_and_range(employee_id, start, end))
