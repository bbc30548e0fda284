"""
Vacations Module (``nomina_modules.vacations``).

Statutory vacation entitlement, balances and the request/review flow.
"""

from nomina_modules.vacations.helpers import vacation_days_accrued, years_of_service
from nomina_modules.vacations.models import (
    VacationBalance,
    VacationRequest,
    VacationRequestStatus,
)

__all__ = [
    "VacationBalance",
    "VacationRequest",
    "VacationRequestStatus",
    "vacation_days_accrued",
    "years_of_service",
]
