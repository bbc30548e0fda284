"""Tests for vacation balances, requests and reviews (nomina_modules/vacations)."""

from datetime import date

import pytest

from nomina_kernel.exceptions import (
    EmployeeNotEligibleError,
    InvalidInputError,
    PermissionDeniedError,
    VacationRequestAlreadyReviewedError,
    VacationRequestNotFoundError,
)
from nomina_modules.vacations.helpers import (
    count_weekdays,
    vacation_days_accrued,
    years_of_service,
)
from nomina_modules.vacations.models import VacationRequestStatus
from nomina_modules.vacations.service import VacationService


@pytest.fixture
def vacations(store, clock):
    return VacationService(store, clock)


class TestHelpers:

    @pytest.mark.parametrize(
        "hired, on, years",
        [
            (date(2021, 7, 20), date(2024, 7, 20), 3),
            (date(2021, 7, 21), date(2024, 7, 20), 2),
            (date(2024, 8, 1), date(2024, 7, 20), 0),
        ],
    )
    def test_years_of_service(self, hired, on, years):
        assert years_of_service(hired, on) == years

    @pytest.mark.parametrize(
        "years, days",
        [(0, 0), (1, 12), (2, 14), (5, 20), (6, 22), (10, 22), (11, 24), (26, 30), (31, 32)],
    )
    def test_statutory_table(self, years, days):
        assert vacation_days_accrued(years) == days

    def test_count_weekdays(self):
        assert count_weekdays(date(2024, 8, 19), date(2024, 8, 25)) == 5
        assert count_weekdays(date(2024, 7, 20), date(2024, 7, 21)) == 0


class TestBalance:

    def test_approved_days_are_taken(self, vacations, admin):
        balance = vacations.vacation_balance(admin, 2)
        assert balance.years_of_service == 3
        assert balance.accrued_days == 16
        assert balance.days_taken == 3
        assert balance.available_days == 13

    def test_pending_not_taken(self, vacations, admin):
        assert vacations.vacation_balance(admin, 5).available_days == 12


class TestRequests:

    def test_list_scoped(self, vacations, manager):
        assert [r.id for r in vacations.list_requests(manager)] == [1, 3, 4]
        pending = vacations.list_requests(manager, status=VacationRequestStatus.PENDING)
        assert [r.id for r in pending] == [3, 4]

    def test_employee_requests_weekdays_by_default(self, vacations, employee_user, clock):
        request = vacations.request_vacation(
            employee_user, 3, date(2024, 8, 5), date(2024, 8, 11)
        )
        assert request.id == 5
        assert request.days_requested == 5
        assert request.status is VacationRequestStatus.PENDING
        assert request.requested_at == clock.now()

    def test_cannot_exceed_balance(self, vacations, employee_user):
        with pytest.raises(InvalidInputError):
            vacations.request_vacation(
                employee_user, 3, date(2024, 8, 5), date(2024, 8, 20), days_requested=10
            )

    def test_end_before_start(self, vacations, admin):
        with pytest.raises(InvalidInputError):
            vacations.request_vacation(admin, 2, date(2024, 8, 9), date(2024, 8, 5))

    def test_archived_employee_cannot_request(self, vacations, admin):
        with pytest.raises(EmployeeNotEligibleError):
            vacations.request_vacation(admin, 6, date(2024, 8, 5), date(2024, 8, 6))


class TestReview:

    def test_manager_approves(self, vacations, manager):
        reviewed = vacations.review_request(manager, 3, approve=True)
        assert reviewed.status is VacationRequestStatus.APPROVED
        assert reviewed.reviewed_by == "Gerente Sucursal"
        assert reviewed.reviewed_at is not None
        assert vacations.vacation_balance(manager, 2).available_days == 8

    def test_reject(self, vacations, admin):
        assert vacations.review_request(admin, 4, approve=False).status is VacationRequestStatus.REJECTED

    def test_already_reviewed(self, vacations, admin):
        with pytest.raises(VacationRequestAlreadyReviewedError):
            vacations.review_request(admin, 1, approve=False)

    def test_out_of_scope_is_not_found(self, vacations, manager):
        with pytest.raises(VacationRequestNotFoundError):
            vacations.review_request(manager, 2, approve=True)

    def test_missing(self, vacations, admin):
        with pytest.raises(VacationRequestNotFoundError):
            vacations.review_request(admin, 99, approve=True)

    def test_employee_cannot_review(self, vacations, employee_user):
        with pytest.raises(PermissionDeniedError):
            vacations.review_request(employee_user, 3, approve=True)
