"""
Tests for the access scope filter (nomina_kernel/domain/access.py).

Every listing in the application is filtered through ``filter_visible``;
these tests pin the three role rules and the page map.
"""

from dataclasses import dataclass

import pytest

from nomina_kernel.domain.access import (
    DEFAULT_PAGE_ACCESS,
    Page,
    Role,
    User,
    can_access_page,
    filter_visible,
    is_visible,
    require_role,
    resolve_selection,
    visible_pages,
)
from nomina_kernel.exceptions import InvalidInputError, PermissionDeniedError


@dataclass(frozen=True)
class Record:
    id: int
    branch_id: int


RECORDS = [Record(1, 1), Record(2, 2), Record(3, 1), Record(4, 3), Record(5, 2)]

ADMIN = User(id=101, name="Admin", email="admin@example.com", role=Role.SUPER_ADMIN)
MANAGER = User(
    id=102, name="Gerente", email="m@example.com",
    role=Role.BRANCH_MANAGER, assigned_branch_ids=frozenset({2, 3}),
)
EMPLOYEE = User(id=103, name="Sofía", email="s@example.com", role=Role.EMPLOYEE, employee_id=3)


class TestFilterVisible:

    def test_super_admin_sees_everything(self):
        assert filter_visible(ADMIN, RECORDS) == RECORDS

    def test_manager_sees_assigned_branches_in_order(self):
        assert [r.id for r in filter_visible(MANAGER, RECORDS)] == [2, 4, 5]

    def test_employee_sees_only_self(self):
        assert filter_visible(EMPLOYEE, RECORDS) == [Record(3, 1)]

    def test_manager_without_branches_sees_nothing(self):
        lonely = User(id=9, name="X", email="x@example.com", role=Role.BRANCH_MANAGER)
        assert filter_visible(lonely, RECORDS) == []

    def test_employee_without_link_sees_nothing(self):
        ghost = User(id=9, name="X", email="x@example.com", role=Role.EMPLOYEE)
        assert filter_visible(ghost, RECORDS) == []

    def test_is_visible_matches_filter(self):
        for user in (ADMIN, MANAGER, EMPLOYEE):
            visible = filter_visible(user, RECORDS)
            assert all(is_visible(user, r) == (r in visible) for r in RECORDS)


class TestResolveSelection:

    def test_visible_selection_returned(self):
        assert resolve_selection(MANAGER, RECORDS, 4) == Record(4, 3)

    def test_out_of_scope_selection_is_none(self):
        assert resolve_selection(MANAGER, RECORDS, 1) is None

    def test_missing_selection_is_none(self):
        assert resolve_selection(ADMIN, RECORDS, 99) is None

    def test_no_selection_is_none(self):
        assert resolve_selection(ADMIN, RECORDS, None) is None


class TestUser:

    def test_role_coerced_from_string(self):
        user = User(id=1, name="A", email="a@example.com", role="gerente_sucursal",
                    assigned_branch_ids=[2])
        assert user.role is Role.BRANCH_MANAGER
        assert user.assigned_branch_ids == frozenset({2})

    def test_unknown_role_rejected(self):
        with pytest.raises(InvalidInputError):
            User(id=1, name="A", email="a@example.com", role="root")


class TestPageAccess:

    def test_admin_has_settings_not_self_service(self):
        assert can_access_page(ADMIN, Page.SETTINGS)
        assert not can_access_page(ADMIN, Page.SELF_SERVICE)

    def test_manager_has_no_settings(self):
        assert can_access_page(MANAGER, Page.PAYROLL)
        assert not can_access_page(MANAGER, Page.SETTINGS)

    def test_employee_only_self_service(self):
        assert visible_pages(EMPLOYEE) == frozenset({Page.SELF_SERVICE})

    def test_every_role_has_an_entry(self):
        assert set(DEFAULT_PAGE_ACCESS) == set(Role)

    def test_custom_access_map(self):
        access = {Role.EMPLOYEE: frozenset({Page.ATTENDANCE})}
        assert can_access_page(EMPLOYEE, Page.ATTENDANCE, access)
        assert visible_pages(ADMIN, access) == frozenset()


class TestRequireRole:

    def test_allowed_role_passes(self):
        require_role(MANAGER, Role.SUPER_ADMIN, Role.BRANCH_MANAGER, action="pay")

    def test_other_role_denied(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            require_role(EMPLOYEE, Role.SUPER_ADMIN, action="archive_employee")
        assert exc_info.value.action == "archive_employee"
        assert exc_info.value.role == "empleado"
