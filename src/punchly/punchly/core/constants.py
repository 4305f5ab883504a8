"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_EMPLOYEE_AGE = 13
LAST_RECORDS_LIMIT = 30
MINUTES_PER_HOUR = 60
DEFAULT_TIMEZONE = "UTC"

REPORT_FILENAME = "employee-attendance-report.xlsx"
XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
