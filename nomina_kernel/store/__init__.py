"""Store abstraction: repositories and the payroll snapshot."""

from nomina_kernel.store.payroll_store import PayrollStore
from nomina_kernel.store.repository import InMemoryRepository, Repository
from nomina_kernel.store.sql import SqlRepository

__all__ = [
    "InMemoryRepository",
    "PayrollStore",
    "Repository",
    "SqlRepository",
]
