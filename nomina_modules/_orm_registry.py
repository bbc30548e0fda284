"""
Module ORM Registry (``nomina_modules._orm_registry``).

Responsibility
--------------
Import every ``nomina_modules.*.orm`` module so that ``Base.metadata``
contains their tables, and create the full schema in one call.

Architecture position
---------------------
**Modules layer** -- utility.  Imports sibling ORM modules and
``nomina_kernel.db.engine`` (allowed: modules -> kernel).  MUST NOT be
imported by ``nomina_kernel``.
"""


def import_all_orm_models() -> None:
    """Register every module ORM model (idempotent)."""
    # Employees first: other tables hold foreign keys to employees.id
    import nomina_modules.employees.orm  # noqa: F401
    import nomina_modules.attendance.orm  # noqa: F401
    import nomina_modules.bonuses.orm  # noqa: F401
    import nomina_modules.payroll.orm  # noqa: F401
    import nomina_modules.users.orm  # noqa: F401
    import nomina_modules.vacations.orm  # noqa: F401


def create_all_tables() -> None:
    """Register all module models, then create every table."""
    from nomina_kernel.db.engine import create_tables

    import_all_orm_models()
    create_tables()
