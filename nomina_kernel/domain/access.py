"""
Access -- Row-level scoping of employee records by role.

Responsibility:
    Decides which employee records a user may see or act on, and which
    pages of the application a role may open.  Every collection that lists
    or counts employees (employee lists, dashboards, bonus targets, payroll
    targets, attendance, reports) goes through ``filter_visible``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.  Works on any record
    exposing ``id`` and ``branch_id`` so the kernel never imports the
    employee module.

Invariants enforced:
    - ``super_admin`` sees every record.
    - ``gerente_sucursal`` sees exactly the records whose ``branch_id`` is in
      ``assigned_branch_ids``; no assignment means an empty scope, never
      universal access.
    - ``empleado`` sees exactly one record, its own (``employee_id``).
    - A selected id that fails the predicate resolves to ``None``.

Failure modes:
    - InvalidInputError when a User is built with an unknown role.
    - PermissionDeniedError from ``require_role``.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol, TypeVar

from nomina_kernel.exceptions import InvalidInputError, PermissionDeniedError
from nomina_kernel.logging_config import get_logger

logger = get_logger("domain.access")


class Role(str, Enum):
    """Closed set of user roles."""
    SUPER_ADMIN = "super_admin"
    BRANCH_MANAGER = "gerente_sucursal"
    EMPLOYEE = "empleado"


class Page(Enum):
    """Top-level application areas."""
    DASHBOARD = "dashboard"
    EMPLOYEES = "employees"
    PAYROLL = "payroll"
    ATTENDANCE = "attendance"
    BONUSES = "bonuses"
    REPORTS = "reports"
    SETTINGS = "settings"
    SELF_SERVICE = "self_service"


DEFAULT_PAGE_ACCESS: dict[Role, frozenset[Page]] = {
    Role.SUPER_ADMIN: frozenset(p for p in Page if p is not Page.SELF_SERVICE),
    Role.BRANCH_MANAGER: frozenset({
        Page.DASHBOARD,
        Page.EMPLOYEES,
        Page.PAYROLL,
        Page.ATTENDANCE,
        Page.BONUSES,
        Page.REPORTS,
    }),
    Role.EMPLOYEE: frozenset({Page.SELF_SERVICE}),
}


class ScopedRecord(Protocol):
    """Anything that belongs to one employee at one branch."""

    @property
    def id(self) -> int: ...

    @property
    def branch_id(self) -> int: ...


R = TypeVar("R", bound=ScopedRecord)


@dataclass(frozen=True)
class User:
    """
    An authenticated actor.

    Contract:
        ``assigned_branch_ids`` matters only for branch managers and
        ``employee_id`` only for the employee role; both are ignored for
        the other roles.
    """
    id: int
    name: str
    email: str
    role: Role
    assigned_branch_ids: frozenset[int] = field(default_factory=frozenset)
    employee_id: int | None = None
    avatar_url: str | None = None

    def __post_init__(self):
        if not isinstance(self.role, Role):
            try:
                object.__setattr__(self, "role", Role(self.role))
            except ValueError:
                raise InvalidInputError("role", self.role, "unknown role") from None
        if not isinstance(self.assigned_branch_ids, frozenset):
            object.__setattr__(
                self,
                "assigned_branch_ids",
                frozenset(self.assigned_branch_ids or ()),
            )


# ---------------------------------------------------------------------------
# Visibility predicate
# ---------------------------------------------------------------------------


def _admin_sees(user: User, record: ScopedRecord) -> bool:
    return True


def _manager_sees(user: User, record: ScopedRecord) -> bool:
    return record.branch_id in user.assigned_branch_ids


def _employee_sees(user: User, record: ScopedRecord) -> bool:
    return user.employee_id is not None and record.id == user.employee_id


_VISIBILITY_RULES: Mapping[Role, Callable[[User, ScopedRecord], bool]] = {
    Role.SUPER_ADMIN: _admin_sees,
    Role.BRANCH_MANAGER: _manager_sees,
    Role.EMPLOYEE: _employee_sees,
}

if set(_VISIBILITY_RULES) != set(Role):
    raise RuntimeError("Every Role needs a visibility rule")


def is_visible(user: User, record: ScopedRecord) -> bool:
    """True when ``user`` may see ``record``."""
    return _VISIBILITY_RULES[user.role](user, record)


def filter_visible(user: User, records: Iterable[R]) -> list[R]:
    """Records visible to ``user``, in input order."""
    return [r for r in records if is_visible(user, r)]


def resolve_selection(
    user: User,
    records: Iterable[R],
    record_id: int | None,
) -> R | None:
    """
    The selected record, or ``None`` when it is absent or out of scope.

    A deep-linked id that fails the predicate is treated exactly like a
    missing one.
    """
    if record_id is None:
        return None
    for record in records:
        if record.id == record_id:
            if is_visible(user, record):
                return record
            logger.debug(
                "selection_out_of_scope",
                extra={"user_id": user.id, "role": user.role.value, "record_id": record_id},
            )
            return None
    return None


# ---------------------------------------------------------------------------
# Page and action access
# ---------------------------------------------------------------------------


def visible_pages(
    user: User,
    access: Mapping[Role, frozenset[Page]] = DEFAULT_PAGE_ACCESS,
) -> frozenset[Page]:
    return access.get(user.role, frozenset())


def can_access_page(
    user: User,
    page: Page,
    access: Mapping[Role, frozenset[Page]] = DEFAULT_PAGE_ACCESS,
) -> bool:
    return page in visible_pages(user, access)


def require_role(user: User, *roles: Role, action: str) -> None:
    """
    Raises:
        PermissionDeniedError: if ``user.role`` is not one of ``roles``.
    """
    if user.role not in roles:
        logger.warning(
            "permission_denied",
            extra={"user_id": user.id, "role": user.role.value, "action": action},
        )
        raise PermissionDeniedError(user.id, user.role.value, action)
