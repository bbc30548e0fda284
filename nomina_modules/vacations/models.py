"""
Vacation Domain Models (``nomina_modules.vacations.models``).

Frozen value objects for vacation requests and the statutory balance.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum

from nomina_kernel.exceptions import InvalidInputError


class VacationRequestStatus(Enum):
    APPROVED = "Aprobada"
    PENDING = "Pendiente"
    REJECTED = "Rechazada"


@dataclass(frozen=True)
class VacationRequest:
    """
    A request for consecutive days off.

    ``reviewed_by`` and ``reviewed_at`` are set together, when the request
    leaves PENDING.
    """
    id: int
    employee_id: int
    start_date: date
    end_date: date
    days_requested: int
    status: VacationRequestStatus
    requested_at: datetime
    reviewed_by: str | None = None
    reviewed_at: datetime | None = None

    def __post_init__(self):
        if not isinstance(self.status, VacationRequestStatus):
            object.__setattr__(self, "status", VacationRequestStatus(self.status))
        if self.end_date < self.start_date:
            raise InvalidInputError("end_date", self.end_date, "before start_date")
        if self.days_requested < 1:
            raise InvalidInputError("days_requested", self.days_requested, "must be positive")


@dataclass(frozen=True)
class VacationBalance:
    """Entitlement for the current service year against approved days taken."""
    employee_id: int
    years_of_service: int
    accrued_days: int
    days_taken: int
    available_days: int
