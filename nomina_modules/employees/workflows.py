"""Employee Workflows.

One-way lifecycle: an active employee can be archived, never restored.
"""

from nomina_kernel.domain.workflow import Transition, Workflow
from nomina_kernel.logging_config import get_logger
from nomina_modules.employees.models import EmployeeStatus

logger = get_logger("modules.employees.workflows")


EMPLOYEE_LIFECYCLE_WORKFLOW = Workflow(
    name="employee_lifecycle",
    description="Active employees may be archived; archived is final",
    initial_state=EmployeeStatus.ACTIVE.value,
    states=(EmployeeStatus.ACTIVE.value, EmployeeStatus.ARCHIVED.value),
    transitions=(
        Transition(
            EmployeeStatus.ACTIVE.value,
            EmployeeStatus.ARCHIVED.value,
            action="archive",
        ),
    ),
    terminal_states=(EmployeeStatus.ARCHIVED.value,),
)

logger.info(
    "employee_workflow_defined",
    extra={"workflow": EMPLOYEE_LIFECYCLE_WORKFLOW.name},
)
