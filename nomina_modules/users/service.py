"""
User Module Service (``nomina_modules.users.service``).

Responsibility
--------------
Account administration for the settings area: create, edit, delete and
list users, and list branches.  Every operation requires ``super_admin``.

Invariants enforced
-------------------
* A user's scope fields always match its role (``normalize_user``).
* Branch managers manage at least one existing branch; employee users
  point at an existing employee.
* Nobody deletes their own account.
"""

from __future__ import annotations

from dataclasses import replace

from nomina_kernel.domain.access import Role, User, require_role
from nomina_kernel.exceptions import InvalidUserError, UserNotFoundError
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules._service_helpers import acting_as
from nomina_modules.employees.models import Branch
from nomina_modules.users.helpers import normalize_user, validate_user

logger = get_logger("modules.users.service")

EDITABLE_FIELDS = frozenset({
    "name", "email", "role", "assigned_branch_ids", "employee_id", "avatar_url",
})


class UserService:
    """Super-admin account management."""

    def __init__(self, store: PayrollStore):
        self._store = store

    def get_user(self, user_id: int) -> User:
        user = self._store.users.get(user_id)
        if user is None:
            raise UserNotFoundError(user_id)
        return user

    def list_users(self, actor: User) -> list[User]:
        require_role(actor, Role.SUPER_ADMIN, action="list_users")
        return self._store.users.list()

    def list_branches(self, actor: User) -> list[Branch]:
        require_role(actor, Role.SUPER_ADMIN, action="list_branches")
        return self._store.branches.list()

    def _validate(self, user: User) -> User:
        user = normalize_user(user)
        validate_user(
            user,
            branch_ids=(b.id for b in self._store.branches.list()),
            employee_ids=(e.id for e in self._store.employees.list()),
            taken_emails=(u.email for u in self._store.users.list() if u.id != user.id),
        )
        return user

    def add_user(
        self,
        actor: User,
        name: str,
        email: str,
        role: Role | str,
        assigned_branch_ids=(),
        employee_id: int | None = None,
        avatar_url: str | None = None,
    ) -> User:
        require_role(actor, Role.SUPER_ADMIN, action="add_user")
        with acting_as(actor), self._store.transaction():
            user = self._validate(User(
                id=self._store.users.next_id(),
                name=name,
                email=email,
                role=role,
                assigned_branch_ids=frozenset(assigned_branch_ids or ()),
                employee_id=employee_id,
                avatar_url=avatar_url,
            ))
            self._store.users.add(user)
            logger.info("user_added", extra={"user_id": user.id, "role": user.role.value})
            return user

    def update_user(self, actor: User, user_id: int, **changes) -> User:
        require_role(actor, Role.SUPER_ADMIN, action="update_user")
        unknown = set(changes) - EDITABLE_FIELDS
        if unknown:
            raise InvalidUserError(f"fields not editable: {sorted(unknown)}")
        with acting_as(actor), self._store.transaction():
            current = self.get_user(user_id)
            if "assigned_branch_ids" in changes:
                changes["assigned_branch_ids"] = frozenset(changes["assigned_branch_ids"] or ())
            user = self._validate(replace(current, **changes))
            self._store.users.put(user)
            logger.info("user_updated", extra={"user_id": user_id, "fields": sorted(changes)})
            return user

    def delete_user(self, actor: User, user_id: int) -> User:
        require_role(actor, Role.SUPER_ADMIN, action="delete_user")
        if actor.id == user_id:
            raise InvalidUserError("users cannot delete their own account")
        with acting_as(actor), self._store.transaction():
            self.get_user(user_id)
            user = self._store.users.delete(user_id)
            logger.info("user_deleted", extra={"user_id": user_id})
            return user
