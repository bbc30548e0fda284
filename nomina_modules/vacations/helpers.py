"""
Vacation Helpers (``nomina_modules.vacations.helpers``).

Pure service-years arithmetic and the statutory vacation table (Ley
Federal del Trabajo art. 76, as amended in 2023).
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from nomina_modules.vacations.models import VacationRequest, VacationRequestStatus

_FIRST_FIVE_YEARS = {1: 12, 2: 14, 3: 16, 4: 18, 5: 20}
# (first completed year, last completed year, days)
_FIVE_YEAR_BANDS = (
    (6, 10, 22),
    (11, 15, 24),
    (16, 20, 26),
    (21, 25, 28),
    (26, 30, 30),
)
_MAX_DAYS = 32


def years_of_service(hire_date: date, on: date) -> int:
    """Completed years between ``hire_date`` and ``on``; never negative."""
    years = on.year - hire_date.year
    if (on.month, on.day) < (hire_date.month, hire_date.day):
        years -= 1
    return max(0, years)


def vacation_days_accrued(completed_years: int) -> int:
    """Annual vacation days for ``completed_years`` of service."""
    if completed_years < 1:
        return 0
    if completed_years in _FIRST_FIVE_YEARS:
        return _FIRST_FIVE_YEARS[completed_years]
    for first, last, days in _FIVE_YEAR_BANDS:
        if first <= completed_years <= last:
            return days
    return _MAX_DAYS


def days_taken(requests: Iterable[VacationRequest], employee_id: int) -> int:
    return sum(
        r.days_requested for r in requests
        if r.employee_id == employee_id and r.status is VacationRequestStatus.APPROVED
    )


def count_weekdays(start: date, end: date) -> int:
    """Monday-to-Friday days in ``[start, end]``."""
    days = 0
    current = start
    while current <= end:
        if current.weekday() < 5:
            days += 1
        current += timedelta(days=1)
    return days
