"""
Employee Module Service (``nomina_modules.employees.service``).

Responsibility
--------------
Employee records: hiring, demographic edits, salary changes, archiving,
scoped lookups, searchable paginated listings and incident counts.

Architecture position
---------------------
**Modules layer**.  ``EmployeeService`` is the sole public entry point for
employee mutations.  Every read goes through the access scope filter.

Invariants enforced
-------------------
* Each mutating method owns the transaction boundary
  (``store.transaction()``: all-or-nothing).
* Only ``super_admin`` hires or archives.
* Lifecycle moves only through ``EMPLOYEE_LIFECYCLE_WORKFLOW``.
* An employee outside the caller's scope is reported as not found.

Failure modes
-------------
* ``PermissionDeniedError`` -- role may not perform the action.
* ``EmployeeNotFoundError`` -- missing or out of scope.
* ``EmployeeNotEligibleError`` -- editing an archived employee.
* ``InvalidTransitionError`` -- archiving twice.
* ``InvalidInputError`` -- unknown field, unknown branch, bad status filter.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal

from nomina_kernel.domain.access import Role, User, filter_visible, require_role
from nomina_kernel.exceptions import InvalidInputError, PermissionDeniedError
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_kernel.utils.pagination import (
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Paginated,
    normalize_pagination_params,
    paginate,
)
from nomina_modules._service_helpers import acting_as, require_eligible, visible_employee
from nomina_modules.employees.helpers import filter_employees
from nomina_modules.employees.models import Employee, EmployeeStatus
from nomina_modules.employees.workflows import EMPLOYEE_LIFECYCLE_WORKFLOW

logger = get_logger("modules.employees.service")

EDITABLE_FIELDS = frozenset({
    "external_id",
    "name",
    "email",
    "rfc",
    "curp",
    "nss",
    "clabe",
    "branch_id",
    "position",
    "rank",
    "gross_salary",
    "hire_date",
    "avatar_url",
})


class EmployeeService:
    """
    Employee records behind the access scope filter.

    Contract
    --------
    * Every method takes the acting ``User`` first.
    * Returned ``Employee`` values are frozen snapshots.
    """

    def __init__(
        self,
        store: PayrollStore,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ):
        self._store = store
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    # =========================================================================
    # Queries
    # =========================================================================

    def get_employee(self, user: User, employee_id: int) -> Employee:
        return visible_employee(self._store, user, employee_id)

    def visible_employees(self, user: User) -> list[Employee]:
        return filter_visible(user, self._store.employees.list())

    def list_employees(
        self,
        user: User,
        search: str | None = None,
        status: EmployeeStatus | str | None = None,
        page: int | None = None,
        page_size: int | None = None,
    ) -> Paginated[Employee]:
        """Visible employees matching ``search`` and ``status``, one page at a time."""
        try:
            matches = filter_employees(self.visible_employees(user), search, status)
        except ValueError:
            raise InvalidInputError("status", status, "unknown status") from None
        params = normalize_pagination_params(
            page,
            page_size,
            max_page_size=self._max_page_size,
            default_page_size=self._default_page_size,
        )
        return paginate(matches, params.page, params.page_size)

    def count_incidents(
        self,
        user: User,
        employee_id: int,
        period_id: str | None = None,
    ) -> int:
        """Incidents recorded for one visible employee, optionally in one period."""
        employee = visible_employee(self._store, user, employee_id)
        return sum(
            1 for i in self._store.incidents.list()
            if i.employee_id == employee.id and (period_id is None or i.period == period_id)
        )

    # =========================================================================
    # Mutations
    # =========================================================================

    def add_employee(
        self,
        user: User,
        *,
        name: str,
        email: str,
        rfc: str,
        curp: str,
        nss: str,
        clabe: str,
        branch_id: int,
        position: str,
        rank: str,
        gross_salary: Decimal | int | str,
        hire_date: date | str,
        external_id: str | None = None,
        avatar_url: str | None = None,
    ) -> Employee:
        """Hire an employee; id is one past the highest existing id."""
        require_role(user, Role.SUPER_ADMIN, action="add_employee")
        with acting_as(user), self._store.transaction():
            self._require_branch(branch_id)
            employee_id = self._store.employees.next_id()
            employee = Employee(
                id=employee_id,
                external_id=external_id or f"EMP-{employee_id:03d}",
                name=name,
                email=email,
                rfc=rfc,
                curp=curp,
                nss=nss,
                clabe=clabe,
                branch_id=branch_id,
                position=position,
                rank=rank,
                gross_salary=gross_salary,
                hire_date=hire_date,
                status=EmployeeStatus.ACTIVE,
                avatar_url=avatar_url,
            )
            self._store.employees.add(employee)
            logger.info("employee_added", extra={
                "employee_id": employee.id,
                "branch_id": branch_id,
                "gross_salary": str(employee.gross_salary),
            })
            return employee

    def update_employee(self, user: User, employee_id: int, **changes) -> Employee:
        """
        Edit demographic and salary fields of an active employee.

        Branch managers may edit employees of their branches but cannot
        move one to a branch they do not manage.
        """
        require_role(user, Role.SUPER_ADMIN, Role.BRANCH_MANAGER, action="update_employee")
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidInputError("changes", sorted(unknown), "not editable")

        with acting_as(user, employee_id=employee_id), self._store.transaction():
            current = visible_employee(self._store, user, employee_id)
            require_eligible(current, "update")
            if "branch_id" in changes and changes["branch_id"] != current.branch_id:
                self._require_branch(changes["branch_id"])
                if (
                    user.role is Role.BRANCH_MANAGER
                    and changes["branch_id"] not in user.assigned_branch_ids
                ):
                    raise PermissionDeniedError(user.id, user.role.value, "move_employee")
            updated = replace(current, **changes)
            self._store.employees.put(updated)
            logger.info("employee_updated", extra={
                "employee_id": employee_id,
                "fields": sorted(changes),
            })
            if updated.gross_salary != current.gross_salary:
                logger.info("employee_salary_changed", extra={
                    "employee_id": employee_id,
                    "previous_gross_salary": str(current.gross_salary),
                    "gross_salary": str(updated.gross_salary),
                    "daily_salary": str(updated.daily_salary),
                })
            return updated

    def change_salary(
        self,
        user: User,
        employee_id: int,
        gross_salary: Decimal | int | str,
    ) -> Employee:
        return self.update_employee(user, employee_id, gross_salary=gross_salary)

    def archive_employee(self, user: User, employee_id: int) -> Employee:
        """Move an employee from Active to Archived (one way)."""
        require_role(user, Role.SUPER_ADMIN, action="archive_employee")
        with acting_as(user, employee_id=employee_id), self._store.transaction():
            current = visible_employee(self._store, user, employee_id)
            new_state = EMPLOYEE_LIFECYCLE_WORKFLOW.apply(current.status.value, "archive")
            archived = replace(current, status=EmployeeStatus(new_state))
            self._store.employees.put(archived)
            logger.info("employee_archived", extra={"employee_id": employee_id})
            return archived

    def _require_branch(self, branch_id: int) -> None:
        if self._store.branches.get(branch_id) is None:
            raise InvalidInputError("branch_id", branch_id, "unknown branch")
