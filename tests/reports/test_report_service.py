from datetime import date, datetime, timezone

import pytest

from punchly.core.exceptions import ValidationError
from punchly.core.result import Err, Ok
from punchly.reports.service import AttendanceReportService

START = datetime(2024, 3, 1, tzinfo=timezone.utc)
END = datetime(2024, 3, 31, 23, 59, 59, 999000, tzinfo=timezone.utc)


def _utc(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 3, day, hour, minute, tzinfo=timezone.utc)


class RecordingWriter:
    def __init__(self):
        self.sheets = None

    def render(self, sheets) -> bytes:
        self.sheets = list(sheets)
        return b"xlsx"


@pytest.fixture
def svc(employees_repo):
    return AttendanceReportService(employees_repo, writer=RecordingWriter())


def _build(svc, timezone_name="UTC"):
    result = svc.build_report(START, END, 1, timezone_name)
    assert isinstance(result, Ok)
    return result.value


def _section_for(sheet, day: date):
    return next(s for s in sheet.sections if s.rows[0][0] == day.isoformat())


def test_overview_grouped_by_employee_type(svc):
    report = _build(svc)

    assert [s.title for s in report.overview.sections] == ["Full-time", "Student"]
    ana_row = report.overview.sections[0].rows[0]
    assert ana_row == ["Sales", "Ana", "1990-05-01", "Ilica 1, Zagreb", 12.5, None, None]


def test_daily_total_sums_sessions(svc, attendance_repo):
    attendance_repo.add(1, _utc(12, 8), _utc(12, 10, 5))
    attendance_repo.add(1, _utc(12, 13), _utc(12, 13, 35))

    report = _build(svc)

    check_in, check_out, total = _section_for(report.daily_records, date(2024, 3, 12)).rows
    assert report.daily_records.columns == ["Date", "", "Ana", "Ivo"]
    assert check_in[:3] == ["2024-03-12", "Check-in", "08:00"]
    assert check_out[2] == "13:35"
    assert total[2] == "2,40"
    assert total[3] is None


def test_absence_wins_over_attendance(svc, attendance_repo, absences_repo):
    attendance_repo.add(1, _utc(14, 8), _utc(14, 16))
    absences_repo.add(1, date(2024, 3, 14), date(2024, 3, 15), absence_type_id=2)

    report = _build(svc)

    for day in (date(2024, 3, 14), date(2024, 3, 15)):
        check_in, check_out, total = _section_for(report.daily_records, day).rows
        assert check_in[2] == "Sick leave"
        assert check_out[2] == "Sick leave"
        assert total[2] is None


def test_times_are_shown_in_report_timezone(svc, attendance_repo):
    # 23:30 UTC is 00:30 next day in Zagreb (UTC+1 in winter)
    attendance_repo.add(1, _utc(4, 23, 30), _utc(5, 1, 0))

    report = _build(svc, "Europe/Zagreb")

    assert [s.rows[0][0] for s in report.daily_records.sections] == ["2024-03-05"]
    check_in, check_out, total = report.daily_records.sections[0].rows
    assert check_in[2] == "00:30"
    assert check_out[2] == "02:00"
    assert total[2] == "1,30"


def test_auto_closed_check_out_is_highlighted(svc, attendance_repo):
    attendance_repo.add(1, _utc(12, 8), _utc(12, 20), auto_closed=True)

    report = _build(svc)

    section = _section_for(report.daily_records, date(2024, 3, 12))
    assert section.highlights == frozenset({(1, 2)})
    assert section.merge_first_column is True


def test_salary_sheet(svc, attendance_repo):
    attendance_repo.add(1, _utc(12, 8), _utc(12, 10, 5))
    attendance_repo.add(1, _utc(12, 13), _utc(12, 13, 35))
    attendance_repo.add(2, _utc(12, 8), None)

    report = _build(svc)

    full_time, student = report.salaries.sections
    assert full_time.rows[0] == ["Sales", "Ana", "2,40", "2.67", 12.5, None, "33.33"]
    assert student.rows[0] == ["Ops", "Ivo", "0,00", "0.00", None, 2000.0, "2000.00"]


def test_invalid_timezone_is_rejected_before_loading(failing_repo):
    svc = AttendanceReportService(failing_repo, writer=RecordingWriter())

    result = svc.generate_report(START, END, 1, "Not/AZone")

    assert isinstance(result, Err)
    assert isinstance(result.error, ValidationError)
    assert failing_repo.calls == []


def test_reversed_range_is_rejected(svc):
    result = svc.build_report(END, START, 1, "UTC")

    assert isinstance(result, Err)
    assert isinstance(result.error, ValidationError)


def test_generate_report_renders_three_sheets(employees_repo):
    writer = RecordingWriter()
    svc = AttendanceReportService(employees_repo, writer=writer)

    result = svc.generate_report(START, END, 1, "UTC")

    assert result == Ok(b"xlsx")
    assert [s.title for s in writer.sheets] == ["Employees", "Daily records", "Salaries"]
    assert all(s.protected for s in writer.sheets)


def test_department_filter(svc):
    result = svc.build_report(START, END, 1, "UTC", department_id=2)

    assert isinstance(result, Ok)
    assert [s.title for s in result.value.overview.sections] == ["Student"]
