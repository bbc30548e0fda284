"""
Bonus Module Service (``nomina_modules.bonuses.service``).

Responsibility
--------------
Bonus templates and their bulk assignment: each selected employee gets one
``Bono`` incident in the current period, commented with the template name.

Architecture position
---------------------
**Modules layer**.  Incidents are written through ``PayrollService`` so that
the closed-period, eligibility and sign rules apply unchanged; the whole
assignment runs in one store transaction.

Failure modes
-------------
* ``BonusTemplateNotFoundError`` -- unknown template.
* ``InvalidBonusTemplateError`` -- missing name or non-positive value.
* ``EmployeeNotFoundError`` / ``EmployeeNotEligibleError`` -- a selected
  employee is out of scope or archived; nothing is assigned.
* ``InvalidInputError`` -- empty selection.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from decimal import Decimal

from nomina_kernel.domain.access import Role, User, require_role
from nomina_kernel.domain.amounts import quantize_cents, to_decimal
from nomina_kernel.exceptions import BonusTemplateNotFoundError, InvalidInputError
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules._service_helpers import acting_as, require_eligible, visible_employee
from nomina_modules.bonuses.helpers import (
    calculate_bonus_amount,
    propose_amounts,
    summarize_assignment,
)
from nomina_modules.bonuses.models import (
    BonusAssignmentSummary,
    BonusCalculationType,
    BonusTemplate,
)
from nomina_modules.employees.models import Employee
from nomina_modules.payroll.models import Incident, IncidentType
from nomina_modules.payroll.service import PayrollService

logger = get_logger("modules.bonuses.service")

_OPERATORS = (Role.SUPER_ADMIN, Role.BRANCH_MANAGER)


class BonusService:
    """Bonus templates and assignment over the payroll service."""

    def __init__(self, store: PayrollStore, payroll: PayrollService):
        self._store = store
        self._payroll = payroll

    def list_templates(self) -> list[BonusTemplate]:
        return self._store.bonus_templates.list()

    def get_template(self, template_id: int) -> BonusTemplate:
        template = self._store.bonus_templates.get(template_id)
        if template is None:
            raise BonusTemplateNotFoundError(template_id)
        return template

    def create_template(
        self,
        user: User,
        name: str,
        calculation_type: BonusCalculationType | str,
        value: Decimal | int | str,
        description: str = "",
    ) -> BonusTemplate:
        require_role(user, *_OPERATORS, action="create_bonus_template")
        with acting_as(user), self._store.transaction():
            template = BonusTemplate(
                id=self._store.bonus_templates.next_id(),
                name=name.strip() if name else name,
                calculation_type=calculation_type,
                value=value,
                description=description,
            )
            self._store.bonus_templates.add(template)
            logger.info("bonus_template_created", extra={
                "template_id": template.id,
                "calculation_type": template.calculation_type.value,
                "value": str(template.value),
            })
            return template

    def eligible_employees(self, user: User) -> list[Employee]:
        """Employees a bonus can go to: visible and active."""
        return self._payroll.payroll_targets(user)

    def propose_amounts(self, user: User, template_id: int) -> dict[int, Decimal]:
        """Default amount per eligible employee for ``template_id``."""
        return propose_amounts(self.eligible_employees(user), self.get_template(template_id))

    def _resolve_amounts(
        self,
        user: User,
        template: BonusTemplate,
        employee_ids: Iterable[int],
        amounts: Mapping[int, Decimal | int | str] | None,
    ) -> dict[int, Decimal]:
        selected = list(dict.fromkeys(employee_ids))
        if not selected:
            raise InvalidInputError("employee_ids", selected, "select at least one employee")
        overrides = amounts or {}
        resolved: dict[int, Decimal] = {}
        for employee_id in selected:
            employee = visible_employee(self._store, user, employee_id)
            require_eligible(employee, "assign_bonus")
            if employee_id in overrides:
                resolved[employee_id] = quantize_cents(
                    to_decimal(overrides[employee_id], "amount")
                )
            else:
                resolved[employee_id] = calculate_bonus_amount(employee, template)
        return resolved

    def assignment_summary(
        self,
        user: User,
        template_id: int,
        employee_ids: Iterable[int],
        amounts: Mapping[int, Decimal | int | str] | None = None,
    ) -> BonusAssignmentSummary:
        template = self.get_template(template_id)
        return summarize_assignment(
            template, self._resolve_amounts(user, template, employee_ids, amounts)
        )

    def assign_bonuses(
        self,
        user: User,
        template_id: int,
        employee_ids: Iterable[int],
        amounts: Mapping[int, Decimal | int | str] | None = None,
    ) -> list[Incident]:
        """
        One bonus incident per selected employee, all or none.

        ``amounts`` overrides the template's proposed amount per employee.
        """
        require_role(user, *_OPERATORS, action="assign_bonuses")
        template = self.get_template(template_id)
        with acting_as(user), self._store.transaction():
            resolved = self._resolve_amounts(user, template, employee_ids, amounts)
            incidents = [
                self._payroll.record_incident(
                    user, employee_id, IncidentType.BONUS, amount, comment=template.name
                )
                for employee_id, amount in resolved.items()
            ]
            summary = summarize_assignment(template, resolved)
            logger.info("bonuses_assigned", extra={
                "template_id": template.id,
                "count": summary.count,
                "total_amount": str(summary.total_amount),
            })
            return incidents
