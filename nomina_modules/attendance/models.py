"""
Attendance Domain Models (``nomina_modules.attendance.models``).

Responsibility
--------------
Frozen value objects for clock-in/clock-out logs and the daily and monthly
views derived from them.

Invariants enforced
-------------------
* Punch times are timezone-aware.
* A clock-out never exists without a clock-in and never precedes it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum

from nomina_kernel.domain.amounts import quantize_cents
from nomina_kernel.exceptions import InvalidInputError


class DailyStatus(Enum):
    """Where an employee stands today."""
    PRESENT = "Presente"
    FINISHED = "Jornada Finalizada"
    ABSENT = "Ausente"


class DayStatus(Enum):
    """How a past day is classified in the monthly report."""
    WEEKEND = "Fin de Semana"
    ATTENDED = "Asistencia"
    INCOMPLETE = "Incompleto"
    ABSENT = "Falta"


@dataclass(frozen=True)
class AttendanceDayLog:
    """One employee's punches for one civil day."""
    id: int
    employee_id: int
    work_date: date
    clock_in: datetime | None = None
    clock_out: datetime | None = None

    def __post_init__(self):
        for name in ("clock_in", "clock_out"):
            value = getattr(self, name)
            if value is not None and value.tzinfo is None:
                raise InvalidInputError(name, value, "must be timezone-aware")
        if self.clock_out is not None:
            if self.clock_in is None:
                raise InvalidInputError("clock_out", self.clock_out, "no clock-in")
            if self.clock_out < self.clock_in:
                raise InvalidInputError("clock_out", self.clock_out, "before clock-in")

    @property
    def is_complete(self) -> bool:
        return self.clock_in is not None and self.clock_out is not None

    @property
    def hours_worked(self) -> Decimal:
        """Hours between the punches, to two decimals; zero unless complete."""
        if not self.is_complete:
            return Decimal("0.00")
        seconds = Decimal((self.clock_out - self.clock_in).total_seconds())
        return quantize_cents(seconds / 3600)


@dataclass(frozen=True)
class DailyAttendance:
    employee_id: int
    employee_name: str
    clock_in: datetime | None
    clock_out: datetime | None
    status: DailyStatus


@dataclass(frozen=True)
class MonthlyAttendanceDay:
    day: date
    day_name: str
    clock_in: datetime | None
    clock_out: datetime | None
    hours_worked: Decimal
    status: DayStatus


@dataclass(frozen=True)
class MonthlyAttendanceReport:
    """
    Day-by-day attendance for one employee and month.

    ``worked_days`` counts attended and incomplete days; ``absences`` counts
    weekdays with no punch.
    """
    employee_id: int
    year: int
    month: int
    days: tuple[MonthlyAttendanceDay, ...]
    worked_days: int
    absences: int
    total_hours: Decimal
