"""
Module: nomina_kernel.store.payroll_store
Responsibility: The snapshot of every entity the payroll core works on,
    grouped behind one all-or-nothing ``transaction()``.
Architecture position: Kernel > Store.  Entity-agnostic: the modules layer
    decides which DTO and ORM class back each repository
    (``nomina_modules.stores``).

Invariants enforced:
    - A failing operation inside ``transaction()`` leaves every repository
      exactly as it was before the transaction began.
    - Nested ``transaction()`` calls join the outermost one.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field, fields
from typing import Any

from sqlalchemy.orm import Session

from nomina_kernel.logging_config import get_logger
from nomina_kernel.store.repository import Repository

logger = get_logger("store")


@dataclass
class PayrollStore:
    """
    Repositories for every entity, plus the transaction boundary.

    ``session`` is set for SQL-backed stores; the session is committed when
    the outermost transaction succeeds and rolled back when it fails.
    """

    employees: Repository[Any]
    branches: Repository[Any]
    incidents: Repository[Any]
    users: Repository[Any]
    bonus_templates: Repository[Any]
    vacation_requests: Repository[Any]
    attendance_logs: Repository[Any]
    payroll_runs: Repository[Any]
    session: Session | None = None
    _depth: int = field(default=0, init=False, repr=False)

    def repositories(self) -> dict[str, Repository[Any]]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if f.init and f.name != "session"
        }

    @contextmanager
    def transaction(self) -> Iterator[PayrollStore]:
        """
        All-or-nothing scope for a mutating operation.

        Usage:
            with store.transaction():
                store.incidents.add(incident)
        """
        if self._depth:
            self._depth += 1
            try:
                yield self
            finally:
                self._depth -= 1
            return

        self._depth = 1
        snapshots = {name: repo.snapshot() for name, repo in self.repositories().items()}
        try:
            yield self
            if self.session is not None:
                self.session.commit()
        except Exception:
            if self.session is not None:
                self.session.rollback()
            for name, repo in self.repositories().items():
                repo.restore(snapshots[name])
            logger.warning("store_transaction_rolled_back", exc_info=True)
            raise
        finally:
            self._depth = 0
