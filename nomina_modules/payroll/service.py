"""
Payroll Module Service (``nomina_modules.payroll.service``).

Responsibility
--------------
Runs a semi-monthly payroll period end to end: incident capture, per
employee gross-to-net, payment progress, payslip signatures and period
close, which moves the simulated clock to the next period.

Architecture position
---------------------
**Modules layer**.  ``PayrollService`` is the sole public entry point for
payroll operations.  Pure computation is delegated to ``helpers.py``;
visibility to ``nomina_kernel.domain.access``; period math to
``nomina_kernel.domain.periods``.

Invariants enforced
-------------------
* Each mutating method owns the transaction boundary.
* Payroll targets are exactly the visible, active employees.
* A closed period accepts no incidents, payments or signatures.
* A period closes only when the closing user has at least one target and
  every target is paid; the run records the closing totals and earlier
  incidents are kept for history.

Failure modes
-------------
* ``PermissionDeniedError``, ``EmployeeNotFoundError``,
  ``EmployeeNotEligibleError`` -- scope and eligibility.
* ``InvalidIncidentError`` -- zero amount or wrong sign for the type.
* ``InvalidSignatureError`` -- signature does not match the name.
* ``ClosedPeriodError`` / ``PayrollIncompleteError`` / ``EmptyPayrollError``
  -- period state.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import tzinfo
from decimal import Decimal

from nomina_kernel.domain.access import Role, User, filter_visible, require_role
from nomina_kernel.domain.amounts import quantize_cents, to_decimal
from nomina_kernel.domain.clock import SimulatedClock
from nomina_kernel.domain.periods import (
    PeriodInfo,
    PeriodStatus,
    advance_to_next_period,
    civil_timezone,
    period_identifier,
    resolve_period,
)
from nomina_kernel.exceptions import (
    ClosedPeriodError,
    EmptyPayrollError,
    InvalidIncidentError,
    InvalidSignatureError,
    PayrollIncompleteError,
)
from nomina_kernel.logging_config import get_logger
from nomina_kernel.store import PayrollStore
from nomina_modules._service_helpers import acting_as, require_eligible, visible_employee
from nomina_modules.employees.helpers import active_only
from nomina_modules.employees.models import Employee
from nomina_modules.payroll.config import PayrollConfig
from nomina_modules.payroll.helpers import (
    absence_amount,
    calculate_payroll,
    run_totals,
    sign_is_valid,
    signature_matches,
)
from nomina_modules.payroll.models import (
    Incident,
    IncidentType,
    PayrollProgress,
    PayrollResult,
    PayrollRun,
    PeriodCloseResult,
)
from nomina_modules.payroll.workflows import PAYROLL_PERIOD_WORKFLOW

logger = get_logger("modules.payroll.service")

_OPERATORS = (Role.SUPER_ADMIN, Role.BRANCH_MANAGER)


class PayrollService:
    """
    Orchestrates a payroll period over the store.

    Contract
    --------
    * The current period is the one containing ``clock.now()``.
    * Every method takes the acting ``User`` first and sees only the
      employees that user may see.

    Guarantees
    ----------
    * ``close_period`` is all-or-nothing: if anything fails, neither the
      run nor the clock moves.
    """

    def __init__(
        self,
        store: PayrollStore,
        clock: SimulatedClock | None = None,
        config: PayrollConfig | None = None,
    ):
        self._store = store
        self._clock = clock or SimulatedClock()
        self._config = config or PayrollConfig.with_defaults()
        self._tz = civil_timezone(self._config.civil_utc_offset_hours)

    @property
    def clock(self) -> SimulatedClock:
        return self._clock

    @property
    def config(self) -> PayrollConfig:
        return self._config

    @property
    def tz(self) -> tzinfo:
        return self._tz

    # =========================================================================
    # Period state
    # =========================================================================

    def current_period_id(self) -> str:
        return period_identifier(self._clock.now(), self._tz)

    def current_period(self) -> PeriodInfo:
        """Period containing the clock's time, with its run status."""
        period = resolve_period(self._clock.now(), self._tz)
        return replace(period, status=self.run_for(period.identifier).status)

    def run_for(self, period_id: str) -> PayrollRun:
        """Stored run for ``period_id``, or a fresh open one (not persisted)."""
        for run in self._store.payroll_runs.list():
            if run.period_id == period_id:
                return run
        return PayrollRun(id=0, period_id=period_id)

    def _save_run(self, run: PayrollRun) -> PayrollRun:
        if run.id == 0:
            run = replace(run, id=self._store.payroll_runs.next_id())
            self._store.payroll_runs.add(run)
        else:
            self._store.payroll_runs.put(run)
        return run

    def _open_run(self, operation: str) -> PayrollRun:
        run = self.run_for(self.current_period_id())
        if run.is_closed:
            raise ClosedPeriodError(run.period_id, operation)
        return run

    # =========================================================================
    # Targets and calculation
    # =========================================================================

    def payroll_targets(self, user: User) -> list[Employee]:
        """Active employees ``user`` may see."""
        return active_only(filter_visible(user, self._store.employees.list()))

    def calculate_for(self, user: User, employee_id: int) -> PayrollResult:
        """Gross-to-net for one visible employee in the current period."""
        employee = visible_employee(self._store, user, employee_id)
        result = calculate_payroll(
            employee,
            self._store.incidents.list(),
            self._clock.now(),
            self._config.withholding,
            self._tz,
        )
        with acting_as(user, employee_id=employee_id, period_id=result.period_id):
            logger.info("payroll_calculated", extra={"payroll": result})
            if result.is_negative:
                logger.warning("payroll_negative_net_pay", extra={"net_pay": result.net_pay})
        return result

    def list_incidents(
        self,
        user: User,
        employee_id: int | None = None,
        period_id: str | None = None,
    ) -> list[Incident]:
        """Incidents of visible employees, optionally narrowed."""
        visible_ids = {e.id for e in filter_visible(user, self._store.employees.list())}
        return [
            i for i in self._store.incidents.list()
            if i.employee_id in visible_ids
            and (employee_id is None or i.employee_id == employee_id)
            and (period_id is None or i.period == period_id)
        ]

    # =========================================================================
    # Incidents
    # =========================================================================

    def record_incident(
        self,
        user: User,
        employee_id: int,
        incident_type: IncidentType | str,
        amount: Decimal | int | str | None = None,
        comment: str = "",
    ) -> Incident:
        """
        Add an incident to the current period.

        Absences are always one day of pay; any ``amount`` given for an
        absence is ignored.
        """
        require_role(user, *_OPERATORS, action="record_incident")
        if not isinstance(incident_type, IncidentType):
            try:
                incident_type = IncidentType(incident_type)
            except ValueError:
                raise InvalidIncidentError(
                    f"unknown incident type {incident_type!r}", employee_id
                ) from None

        with acting_as(user, employee_id=employee_id), self._store.transaction():
            employee = visible_employee(self._store, user, employee_id)
            require_eligible(employee, "record_incident")
            run = self._open_run("record_incident")

            if incident_type is IncidentType.ABSENCE:
                value = absence_amount(employee, self._config.daily_salary_divisor)
            else:
                if amount is None:
                    raise InvalidIncidentError("amount is required", employee_id)
                value = quantize_cents(to_decimal(amount))
                if value == 0:
                    raise InvalidIncidentError("amount cannot be zero", employee_id)
                if not sign_is_valid(incident_type, value):
                    raise InvalidIncidentError(
                        f"{incident_type.value} amount has the wrong sign: {value}",
                        employee_id,
                    )

            incident = Incident(
                id=self._store.incidents.next_id(),
                employee_id=employee.id,
                period=run.period_id,
                type=incident_type,
                amount=value,
                comment=comment,
            )
            self._store.incidents.add(incident)
            logger.info("incident_recorded", extra={
                "incident_id": incident.id,
                "employee_id": employee.id,
                "period_id": incident.period,
                "incident_type": incident_type.value,
                "amount": str(value),
            })
            return incident

    def record_absence(self, user: User, employee_id: int, comment: str = "") -> Incident:
        return self.record_incident(user, employee_id, IncidentType.ABSENCE, comment=comment)

    # =========================================================================
    # Payment and signatures
    # =========================================================================

    def pay_employee(self, user: User, employee_id: int) -> PayrollRun:
        """Mark one target paid; the first payment starts the run."""
        require_role(user, *_OPERATORS, action="pay_employee")
        with acting_as(user, employee_id=employee_id), self._store.transaction():
            employee = visible_employee(self._store, user, employee_id)
            require_eligible(employee, "pay_employee")
            run = self._open_run("pay_employee")
            if employee.id in run.paid_employee_ids:
                logger.info("employee_already_paid", extra={
                    "employee_id": employee.id,
                    "period_id": run.period_id,
                })
                return run

            status = PAYROLL_PERIOD_WORKFLOW.apply(run.status.value, "pay")
            run = self._save_run(replace(
                run,
                status=PeriodStatus(status),
                paid_employee_ids=run.paid_employee_ids | {employee.id},
            ))
            logger.info("employee_paid", extra={
                "employee_id": employee.id,
                "period_id": run.period_id,
                "paid_count": len(run.paid_employee_ids),
            })
            return run

    def progress(self, user: User) -> PayrollProgress:
        run = self.run_for(self.current_period_id())
        targets = self.payroll_targets(user)
        paid = [e.id for e in targets if e.id in run.paid_employee_ids]
        pending = tuple(e.id for e in targets if e.id not in run.paid_employee_ids)
        percent = (
            quantize_cents(Decimal(len(paid)) * 100 / Decimal(len(targets)))
            if targets else Decimal("0.00")
        )
        return PayrollProgress(
            period_id=run.period_id,
            status=run.status,
            total_count=len(targets),
            paid_count=len(paid),
            pending_employee_ids=pending,
            percent_complete=percent,
        )

    def sign_payslip(self, user: User, employee_id: int, signature: str) -> PayrollRun:
        """
        Record that the employee acknowledged this period's payslip.

        The signature must be the employee's full name; accents, case and
        surrounding whitespace are ignored.
        """
        with acting_as(user, employee_id=employee_id), self._store.transaction():
            employee = visible_employee(self._store, user, employee_id)
            run = self._open_run("sign_payslip")
            if not signature_matches(signature or "", employee.name):
                raise InvalidSignatureError(employee.id, run.period_id)
            if employee.id not in run.signed_employee_ids:
                run = self._save_run(replace(
                    run, signed_employee_ids=run.signed_employee_ids | {employee.id}
                ))
            logger.info("payslip_signed", extra={
                "employee_id": employee.id,
                "period_id": run.period_id,
            })
            return run

    def has_signed(self, user: User, employee_id: int, period_id: str | None = None) -> bool:
        employee = visible_employee(self._store, user, employee_id)
        run = self.run_for(period_id or self.current_period_id())
        return employee.id in run.signed_employee_ids

    # =========================================================================
    # Period close
    # =========================================================================

    def close_period(self, user: User) -> PeriodCloseResult:
        """
        Close the current period and advance the clock to the next one.

        Raises:
            PayrollIncompleteError: if any of the user's targets is unpaid.
            EmptyPayrollError: if the user has no payroll targets at all.
            ClosedPeriodError: if the period is already closed.
        """
        require_role(user, *_OPERATORS, action="close_period")
        period_id = self.current_period_id()
        with acting_as(user, period_id=period_id), self._store.transaction():
            run = self._open_run("close_period")
            targets = self.payroll_targets(user)
            if not targets:
                raise EmptyPayrollError(period_id, user.id)
            pending = [e.id for e in targets if e.id not in run.paid_employee_ids]
            if pending:
                raise PayrollIncompleteError(period_id, pending)

            now = self._clock.now()
            incidents = self._store.incidents.list()
            results = [
                calculate_payroll(e, incidents, now, self._config.withholding, self._tz)
                for e in targets
            ]
            gross, deductions, net, count = run_totals(results)
            status = PAYROLL_PERIOD_WORKFLOW.apply(run.status.value, "close")
            run = self._save_run(replace(
                run,
                status=PeriodStatus(status),
                total_gross=gross,
                total_deductions=deductions,
                total_net=net,
                employee_count=count,
                closed_at=now,
            ))
            next_reference = advance_to_next_period(now, self._tz)

        self._clock.set_time(next_reference)
        next_period_id = self.current_period_id()
        logger.info("payroll_period_closed", extra={
            "run": run,
            "next_period_id": next_period_id,
        })
        return PeriodCloseResult(
            run=run,
            next_period_id=next_period_id,
            next_reference=next_reference,
        )
