"""
User Helpers (``nomina_modules.users.helpers``).

Role-consistency rules for user accounts.  Pure; the caller supplies the
known branch and employee ids.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from nomina_kernel.domain.access import Role, User
from nomina_kernel.exceptions import InvalidUserError


def normalize_user(user: User) -> User:
    """Drop the scope fields that do not apply to ``user.role``."""
    if user.role is not Role.BRANCH_MANAGER and user.assigned_branch_ids:
        user = replace(user, assigned_branch_ids=frozenset())
    if user.role is not Role.EMPLOYEE and user.employee_id is not None:
        user = replace(user, employee_id=None)
    return user


def validate_user(
    user: User,
    branch_ids: Iterable[int],
    employee_ids: Iterable[int],
    taken_emails: Iterable[str] = (),
) -> None:
    """
    Raises:
        InvalidUserError: missing name/email, duplicate email, a manager
            without known branches, or an employee user without a known
            employee record.
    """
    if not user.name or not user.name.strip():
        raise InvalidUserError("name is required")
    if not user.email or "@" not in user.email:
        raise InvalidUserError(f"invalid email {user.email!r}")
    if user.email.casefold() in {e.casefold() for e in taken_emails}:
        raise InvalidUserError(f"email already in use: {user.email}")

    if user.role is Role.BRANCH_MANAGER:
        if not user.assigned_branch_ids:
            raise InvalidUserError("branch managers need at least one branch")
        unknown = user.assigned_branch_ids - set(branch_ids)
        if unknown:
            raise InvalidUserError(f"unknown branches {sorted(unknown)}")

    if user.role is Role.EMPLOYEE:
        if user.employee_id is None or user.employee_id not in set(employee_ids):
            raise InvalidUserError(f"unknown employee {user.employee_id!r}")
