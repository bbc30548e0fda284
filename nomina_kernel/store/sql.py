"""
Module: nomina_kernel.store.sql
Responsibility: Repository backed by a SQLAlchemy ORM model.
Architecture position: Kernel > Store.  The ORM class supplies the
    DTO conversion through ``to_dto()`` and ``from_dto(dto)``; the caller
    owns the Session and its transaction.

Invariants enforced:
    - Only DTOs cross the repository boundary; ORM instances stay inside.
    - Every write is flushed immediately so constraint violations surface
      at the call site, inside the caller's transaction.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from nomina_kernel.store.repository import Repository, T


class SqlRepository(Repository[T]):
    """Repository over one ORM model class."""

    def __init__(self, entity: str, session: Session, model):
        self.entity = entity
        self.session = session
        self.model = model

    def get(self, record_id: int) -> T | None:
        row = self.session.get(self.model, record_id)
        return row.to_dto() if row is not None else None

    def list(self) -> list[T]:
        rows = self.session.scalars(select(self.model).order_by(self.model.id))
        return [row.to_dto() for row in rows]

    def _insert(self, record: T) -> None:
        self.session.add(self.model.from_dto(record))
        self.session.flush()

    def _replace(self, record: T) -> None:
        self.session.merge(self.model.from_dto(record))
        self.session.flush()

    def _remove(self, record_id: int) -> None:
        self.session.delete(self.session.get(self.model, record_id))
        self.session.flush()

    def next_id(self) -> int:
        current = self.session.scalar(select(func.max(self.model.id)))
        return (current or 0) + 1
