"""
Store factories (``nomina_modules.stores``).

Binds each ``PayrollStore`` repository to its entity: dictionaries for the
in-memory store, ORM models for the SQL store.
"""

from __future__ import annotations

from sqlalchemy.orm import Session

from nomina_kernel.store import InMemoryRepository, PayrollStore, SqlRepository

# repository attribute -> entity name used in errors and logs;
# referenced tables come before the tables that point at them
ENTITIES = {
    "branches": "Branch",
    "employees": "Employee",
    "incidents": "Incident",
    "users": "User",
    "bonus_templates": "BonusTemplate",
    "vacation_requests": "VacationRequest",
    "attendance_logs": "AttendanceDayLog",
    "payroll_runs": "PayrollRun",
}


def build_memory_store(**records) -> PayrollStore:
    """
    In-memory store, optionally pre-loaded.

    Usage:
        store = build_memory_store(employees=[...], branches=[...])
    """
    unknown = set(records) - set(ENTITIES)
    if unknown:
        raise ValueError(f"Unknown repositories: {sorted(unknown)}")
    return PayrollStore(**{
        name: InMemoryRepository(entity, records.get(name, ()))
        for name, entity in ENTITIES.items()
    })


def build_sql_store(session: Session) -> PayrollStore:
    """SQL store over ``session``; tables must exist (``create_all_tables``)."""
    from nomina_modules.attendance.orm import AttendanceDayLogModel
    from nomina_modules.bonuses.orm import BonusTemplateModel
    from nomina_modules.employees.orm import BranchModel, EmployeeModel
    from nomina_modules.payroll.orm import IncidentModel, PayrollRunModel
    from nomina_modules.users.orm import UserModel
    from nomina_modules.vacations.orm import VacationRequestModel

    models = {
        "employees": EmployeeModel,
        "branches": BranchModel,
        "incidents": IncidentModel,
        "users": UserModel,
        "bonus_templates": BonusTemplateModel,
        "vacation_requests": VacationRequestModel,
        "attendance_logs": AttendanceDayLogModel,
        "payroll_runs": PayrollRunModel,
    }
    return PayrollStore(
        **{
            name: SqlRepository(ENTITIES[name], session, model)
            for name, model in models.items()
        },
        session=session,
    )


def copy_store(source: PayrollStore, target: PayrollStore) -> PayrollStore:
    """Load every record of ``source`` into ``target`` in one transaction."""
    sources = source.repositories()
    destinations = target.repositories()
    with target.transaction():
        for name in ENTITIES:
            for record in sources[name].list():
                destinations[name].add(record)
    return target
