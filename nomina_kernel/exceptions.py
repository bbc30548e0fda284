"""
Typed Exception Hierarchy for the Nómina Kernel.

Every error raised by the kernel, the modules and the configuration layer
is a subclass of ``NominaError``.  Each class carries:

  1. A TYPED exception class (catch by type, not by message text)
  2. A ``code`` class attribute (machine-readable, API-safe)
  3. Structured DATA stored as instance attributes

Example::

    try:
        service.archive_employee(user, employee_id)
    except PermissionDeniedError as e:
        api_response(code=e.code, role=e.role, action=e.action)

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    NominaError (base)
    |
    +-- InvalidInputError
    |   +-- InvalidReferenceDateError
    |   +-- InvalidPeriodIdentifierError
    |   +-- InvalidAmountError
    |
    +-- EmployeeError
    |   +-- EmployeeNotFoundError
    |   +-- EmployeeNotEligibleError
    |
    +-- AccessError
    |   +-- PermissionDeniedError
    |
    +-- WorkflowError
    |   +-- InvalidTransitionError
    |
    +-- PeriodError
    |   +-- ClosedPeriodError
    |   +-- PayrollIncompleteError
    |   +-- EmptyPayrollError
    |
    +-- IncidentError
    |   +-- InvalidIncidentError
    |   +-- InvalidSignatureError
    |
    +-- BonusError
    |   +-- BonusTemplateNotFoundError
    |   +-- InvalidBonusTemplateError
    |
    +-- VacationError
    |   +-- VacationRequestNotFoundError
    |   +-- VacationRequestAlreadyReviewedError
    |
    +-- UserError
    |   +-- UserNotFoundError
    |   +-- InvalidUserError
    |
    +-- StoreError
        +-- RecordNotFoundError
        +-- DuplicateRecordError

A selected employee that fails the access predicate is reported as
``EmployeeNotFoundError``, never as an access error: callers must not be
able to tell "does not exist" from "not yours".
"""


class NominaError(Exception):
    """
    Base exception for all nómina errors.

    All subclasses must have a ``code`` class attribute for
    machine-readable error identification.
    """

    code: str = "NOMINA_ERROR"


# Input validation


class InvalidInputError(NominaError):
    """A value supplied by a caller cannot be interpreted."""

    code: str = "INVALID_INPUT"

    def __init__(self, field: str, value: object, reason: str):
        self.field = field
        self.value = repr(value)
        self.reason = reason
        super().__init__(f"Invalid {field}: {value!r} ({reason})")


class InvalidReferenceDateError(InvalidInputError):
    """Reference date is missing, of the wrong type, or unparseable."""

    code: str = "INVALID_REFERENCE_DATE"

    def __init__(self, value: object, reason: str = "not a date"):
        super().__init__("reference_date", value, reason)


class InvalidPeriodIdentifierError(InvalidInputError):
    """Period identifier does not match ``YYYY-MM-Q1`` / ``YYYY-MM-Q2``."""

    code: str = "INVALID_PERIOD_IDENTIFIER"

    def __init__(self, value: object):
        super().__init__("period", value, "expected YYYY-MM-Q1 or YYYY-MM-Q2")


class InvalidAmountError(InvalidInputError):
    """Monetary amount is not a finite number."""

    code: str = "INVALID_AMOUNT"

    def __init__(self, field: str, value: object, reason: str = "not a finite number"):
        super().__init__(field, value, reason)


# Employee-related exceptions


class EmployeeError(NominaError):
    """Base exception for employee-related errors."""

    code: str = "EMPLOYEE_ERROR"


class EmployeeNotFoundError(EmployeeError):
    """Employee does not exist or is outside the caller's scope."""

    code: str = "EMPLOYEE_NOT_FOUND"

    def __init__(self, employee_id: int):
        self.employee_id = employee_id
        super().__init__(f"Employee not found: {employee_id}")


class EmployeeNotEligibleError(EmployeeError):
    """Archived employee used as a payroll, bonus or attendance target."""

    code: str = "EMPLOYEE_NOT_ELIGIBLE"

    def __init__(self, employee_id: int, operation: str):
        self.employee_id = employee_id
        self.operation = operation
        super().__init__(
            f"Employee {employee_id} is not eligible for {operation}"
        )


# Access-related exceptions


class AccessError(NominaError):
    """Base exception for access-scope errors."""

    code: str = "ACCESS_ERROR"


class PermissionDeniedError(AccessError):
    """The acting user's role may not perform the action."""

    code: str = "PERMISSION_DENIED"

    def __init__(self, user_id: int, role: str, action: str):
        self.user_id = user_id
        self.role = role
        self.action = action
        super().__init__(f"Role {role} (user {user_id}) may not {action}")


# Workflow exceptions


class WorkflowError(NominaError):
    """Base exception for lifecycle errors."""

    code: str = "WORKFLOW_ERROR"


class InvalidTransitionError(WorkflowError):
    """No transition for ``action`` leaves ``from_state``."""

    code: str = "INVALID_TRANSITION"

    def __init__(self, workflow: str, from_state: str, action: str):
        self.workflow = workflow
        self.from_state = from_state
        self.action = action
        super().__init__(
            f"Workflow {workflow}: action '{action}' not allowed from '{from_state}'"
        )


# Period-related exceptions


class PeriodError(NominaError):
    """Base exception for payroll-period errors."""

    code: str = "PERIOD_ERROR"


class ClosedPeriodError(PeriodError):
    """Attempted to change a payroll period that is already closed."""

    code: str = "CLOSED_PERIOD"

    def __init__(self, period_id: str, operation: str):
        self.period_id = period_id
        self.operation = operation
        super().__init__(f"Cannot {operation}: period {period_id} is closed")


class PayrollIncompleteError(PeriodError):
    """Period close requested while employees are still unpaid."""

    code: str = "PAYROLL_INCOMPLETE"

    def __init__(self, period_id: str, pending_employee_ids: list[int]):
        self.period_id = period_id
        self.pending_employee_ids = pending_employee_ids
        super().__init__(
            f"Period {period_id} has {len(pending_employee_ids)} unpaid employee(s)"
        )


class EmptyPayrollError(PeriodError):
    """Period close requested by a user with no payroll targets in scope."""

    code: str = "EMPTY_PAYROLL"

    def __init__(self, period_id: str, user_id: int):
        self.period_id = period_id
        self.user_id = user_id
        super().__init__(
            f"Cannot close period {period_id}: user {user_id} has no payroll targets"
        )


# Incident-related exceptions


class IncidentError(NominaError):
    """Base exception for incident errors."""

    code: str = "INCIDENT_ERROR"


class InvalidIncidentError(IncidentError):
    """Incident data violates the sign or amount conventions."""

    code: str = "INVALID_INCIDENT"

    def __init__(self, reason: str, employee_id: int | None = None):
        self.reason = reason
        self.employee_id = employee_id
        super().__init__(f"Invalid incident: {reason}")


class InvalidSignatureError(IncidentError):
    """Payslip signature does not match the employee's name."""

    code: str = "INVALID_SIGNATURE"

    def __init__(self, employee_id: int, period_id: str):
        self.employee_id = employee_id
        self.period_id = period_id
        super().__init__(
            f"Signature does not match employee {employee_id} for {period_id}"
        )


# Bonus-related exceptions


class BonusError(NominaError):
    """Base exception for bonus errors."""

    code: str = "BONUS_ERROR"


class BonusTemplateNotFoundError(BonusError):
    """Bonus template does not exist."""

    code: str = "BONUS_TEMPLATE_NOT_FOUND"

    def __init__(self, template_id: int):
        self.template_id = template_id
        super().__init__(f"Bonus template not found: {template_id}")


class InvalidBonusTemplateError(BonusError):
    """Bonus template is missing a name or has a non-positive value."""

    code: str = "INVALID_BONUS_TEMPLATE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid bonus template: {reason}")


# Vacation-related exceptions


class VacationError(NominaError):
    """Base exception for vacation errors."""

    code: str = "VACATION_ERROR"


class VacationRequestNotFoundError(VacationError):
    """Vacation request does not exist."""

    code: str = "VACATION_REQUEST_NOT_FOUND"

    def __init__(self, request_id: int):
        self.request_id = request_id
        super().__init__(f"Vacation request not found: {request_id}")


class VacationRequestAlreadyReviewedError(VacationError):
    """Only pending requests can be approved or rejected."""

    code: str = "VACATION_REQUEST_ALREADY_REVIEWED"

    def __init__(self, request_id: int, status: str):
        self.request_id = request_id
        self.status = status
        super().__init__(f"Vacation request {request_id} is already {status}")


# User-related exceptions


class UserError(NominaError):
    """Base exception for user-management errors."""

    code: str = "USER_ERROR"


class UserNotFoundError(UserError):
    """User does not exist."""

    code: str = "USER_NOT_FOUND"

    def __init__(self, user_id: int):
        self.user_id = user_id
        super().__init__(f"User not found: {user_id}")


class InvalidUserError(UserError):
    """User data is inconsistent with its role."""

    code: str = "INVALID_USER"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid user: {reason}")


# Store exceptions


class StoreError(NominaError):
    """Base exception for repository errors."""

    code: str = "STORE_ERROR"


class RecordNotFoundError(StoreError):
    """No record with this id in the repository."""

    code: str = "RECORD_NOT_FOUND"

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} not found: {record_id}")


class DuplicateRecordError(StoreError):
    """Insert of an id that already exists."""

    code: str = "DUPLICATE_RECORD"

    def __init__(self, entity: str, record_id: int):
        self.entity = entity
        self.record_id = record_id
        super().__init__(f"{entity} already exists: {record_id}")
