"""Payroll Workflows.

State machine for a period's payroll run: open, in progress once the first
employee is paid, closed when everyone is paid and the period is closed.
"""

from nomina_kernel.domain.periods import PeriodStatus
from nomina_kernel.domain.workflow import Guard, Transition, Workflow
from nomina_kernel.logging_config import get_logger

logger = get_logger("modules.payroll.workflows")


# -----------------------------------------------------------------------------
# Guards
# -----------------------------------------------------------------------------

ALL_EMPLOYEES_PAID = Guard(
    name="all_employees_paid",
    description="Every active, visible employee of the period has been paid",
)


# -----------------------------------------------------------------------------
# Payroll Period Workflow
# -----------------------------------------------------------------------------

_OPEN = PeriodStatus.OPEN.value
_IN_PROGRESS = PeriodStatus.IN_PROGRESS.value
_CLOSED = PeriodStatus.CLOSED.value

PAYROLL_PERIOD_WORKFLOW = Workflow(
    name="payroll_period",
    description="Semi-monthly payroll run lifecycle",
    initial_state=_OPEN,
    states=(_OPEN, _IN_PROGRESS, _CLOSED),
    transitions=(
        Transition(_OPEN, _IN_PROGRESS, action="pay"),
        Transition(_IN_PROGRESS, _IN_PROGRESS, action="pay"),
        Transition(_IN_PROGRESS, _CLOSED, action="close", guard=ALL_EMPLOYEES_PAID),
        Transition(_OPEN, _CLOSED, action="close", guard=ALL_EMPLOYEES_PAID),
    ),
    terminal_states=(_CLOSED,),
)

logger.info(
    "payroll_workflow_defined",
    extra={
        "workflow": PAYROLL_PERIOD_WORKFLOW.name,
        "guards": [ALL_EMPLOYEES_PAID.name],
    },
)
