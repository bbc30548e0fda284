"""
Attendance Module (``nomina_modules.attendance``).

Clock-in/clock-out logs, the daily presence board and monthly reports.
"""

from nomina_modules.attendance.models import (
    AttendanceDayLog,
    DailyAttendance,
    DailyStatus,
    DayStatus,
    MonthlyAttendanceDay,
    MonthlyAttendanceReport,
)

__all__ = [
    "AttendanceDayLog",
    "DailyAttendance",
    "DailyStatus",
    "DayStatus",
    "MonthlyAttendanceDay",
    "MonthlyAttendanceReport",
]
