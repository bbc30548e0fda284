"""
Vacation Module Service (``nomina_modules.vacations.service``).

Responsibility
--------------
Vacation balances and the request/review flow.

Invariants enforced
-------------------
* Only PENDING requests can be reviewed; a review is final.
* The employee role can request (for itself) but never review.
* Balances count APPROVED days only.

Failure modes
-------------
* ``VacationRequestNotFoundError`` -- unknown or out-of-scope request.
* ``VacationRequestAlreadyReviewedError`` -- reviewing twice.
* ``PermissionDeniedError`` -- employee role reviewing.
* ``InvalidInputError`` -- inverted dates or more days than available.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date

from nomina_kernel.domain.access import Role, User, filter_visible, is_visible, require_role
from nomina_kernel.domain.clock import Clock, SimulatedClock
from nomina_kernel.domain.periods import CIVIL_TZ, to_civil_date
from nomina_kernel.exceptions import (
    InvalidInputError,
    VacationRequestAlreadyReviewedError,
    VacationRequestNotFoundError,
)
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules._service_helpers import acting_as, require_eligible, visible_employee
from nomina_modules.vacations.helpers import (
    count_weekdays,
    days_taken,
    vacation_days_accrued,
    years_of_service,
)
from nomina_modules.vacations.models import (
    VacationBalance,
    VacationRequest,
    VacationRequestStatus,
)

logger = get_logger("modules.vacations.service")


class VacationService:
    """Balances, requests and reviews."""

    def __init__(self, store: PayrollStore, clock: Clock | None = None):
        self._store = store
        self._clock = clock or SimulatedClock()

    def _today(self) -> date:
        return to_civil_date(self._clock.now(), CIVIL_TZ)

    def vacation_balance(self, user: User, employee_id: int) -> VacationBalance:
        employee = visible_employee(self._store, user, employee_id)
        years = years_of_service(employee.hire_date, self._today())
        accrued = vacation_days_accrued(years)
        taken = days_taken(self._store.vacation_requests.list(), employee.id)
        return VacationBalance(
            employee_id=employee.id,
            years_of_service=years,
            accrued_days=accrued,
            days_taken=taken,
            available_days=accrued - taken,
        )

    def list_requests(
        self,
        user: User,
        employee_id: int | None = None,
        status: VacationRequestStatus | None = None,
    ) -> list[VacationRequest]:
        visible_ids = {e.id for e in filter_visible(user, self._store.employees.list())}
        return [
            r for r in self._store.vacation_requests.list()
            if r.employee_id in visible_ids
            and (employee_id is None or r.employee_id == employee_id)
            and (status is None or r.status is status)
        ]

    def request_vacation(
        self,
        user: User,
        employee_id: int,
        start_date: date,
        end_date: date,
        days_requested: int | None = None,
    ) -> VacationRequest:
        """
        File a pending request.

        ``days_requested`` defaults to the weekdays in the range and may not
        exceed the available balance.
        """
        with acting_as(user, employee_id=employee_id), self._store.transaction():
            employee = visible_employee(self._store, user, employee_id)
            require_eligible(employee, "request_vacation")
            if end_date < start_date:
                raise InvalidInputError("end_date", end_date, "before start_date")
            days = days_requested if days_requested is not None else count_weekdays(
                start_date, end_date
            )
            balance = self.vacation_balance(user, employee_id)
            if days > balance.available_days:
                raise InvalidInputError(
                    "days_requested", days, f"only {balance.available_days} available"
                )
            request = VacationRequest(
                id=self._store.vacation_requests.next_id(),
                employee_id=employee.id,
                start_date=start_date,
                end_date=end_date,
                days_requested=days,
                status=VacationRequestStatus.PENDING,
                requested_at=self._clock.now(),
            )
            self._store.vacation_requests.add(request)
            logger.info("vacation_requested", extra={
                "request_id": request.id,
                "employee_id": employee.id,
                "days_requested": days,
            })
            return request

    def review_request(
        self,
        user: User,
        request_id: int,
        approve: bool,
    ) -> VacationRequest:
        """Approve or reject a pending request, stamping the reviewer's name."""
        require_role(user, Role.SUPER_ADMIN, Role.BRANCH_MANAGER, action="review_vacation")
        with acting_as(user), self._store.transaction():
            request = self._store.vacation_requests.get(request_id)
            employee = self._store.employees.get(request.employee_id) if request else None
            if request is None or employee is None or not is_visible(user, employee):
                raise VacationRequestNotFoundError(request_id)
            if request.status is not VacationRequestStatus.PENDING:
                raise VacationRequestAlreadyReviewedError(request_id, request.status.value)

            reviewed = replace(
                request,
                status=(
                    VacationRequestStatus.APPROVED if approve
                    else VacationRequestStatus.REJECTED
                ),
                reviewed_by=user.name,
                reviewed_at=self._clock.now(),
            )
            self._store.vacation_requests.put(reviewed)
            logger.info("vacation_reviewed", extra={
                "request_id": request_id,
                "employee_id": request.employee_id,
                "status": reviewed.status.value,
            })
            return reviewed
