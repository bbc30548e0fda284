"""
Module: nomina_kernel.store.repository
Responsibility: Repository contract over frozen dataclass records, plus the
    dictionary-backed implementation used by tests and the CLI.
Architecture position: Kernel > Store.  Knows nothing about employees or
    incidents: a repository holds any frozen dataclass with an integer
    ``id``.

Invariants enforced:
    - Records are frozen dataclasses; callers get the stored value itself,
      never a mutable handle into repository state.
    - ``add`` never overwrites (DuplicateRecordError); ``put`` never inserts
      (RecordNotFoundError).
    - ``next_id`` is ``max(id) + 1``, starting at 1.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, Protocol, TypeVar

from nomina_kernel.exceptions import DuplicateRecordError, RecordNotFoundError


class Identified(Protocol):
    @property
    def id(self) -> int: ...


T = TypeVar("T", bound=Identified)


class Repository(ABC, Generic[T]):
    """
    Abstract keyed collection of records of one entity type.

    Contract:
        ``entity`` names the record type in errors and logs.  ``list()``
        returns records ordered by id.
    """

    entity: str = "record"

    @abstractmethod
    def get(self, record_id: int) -> T | None:
        """Record with ``record_id`` or ``None``."""

    @abstractmethod
    def list(self) -> list[T]:
        """Every record, ordered by id."""

    @abstractmethod
    def _insert(self, record: T) -> None: ...

    @abstractmethod
    def _replace(self, record: T) -> None: ...

    @abstractmethod
    def _remove(self, record_id: int) -> None: ...

    def require(self, record_id: int) -> T:
        """
        Raises:
            RecordNotFoundError: if no record has ``record_id``.
        """
        record = self.get(record_id)
        if record is None:
            raise RecordNotFoundError(self.entity, record_id)
        return record

    def add(self, record: T) -> T:
        """
        Insert a new record.

        Raises:
            DuplicateRecordError: if ``record.id`` already exists.
        """
        if self.get(record.id) is not None:
            raise DuplicateRecordError(self.entity, record.id)
        self._insert(record)
        return record

    def put(self, record: T) -> T:
        """
        Replace an existing record.

        Raises:
            RecordNotFoundError: if ``record.id`` does not exist.
        """
        self.require(record.id)
        self._replace(record)
        return record

    def delete(self, record_id: int) -> T:
        """Remove and return a record (RecordNotFoundError if missing)."""
        record = self.require(record_id)
        self._remove(record_id)
        return record

    def next_id(self) -> int:
        return max((r.id for r in self.list()), default=0) + 1

    def snapshot(self) -> Any:
        """State to restore on rollback; ``None`` when the backend rolls back itself."""
        return None

    def restore(self, snapshot: Any) -> None:
        return None


class InMemoryRepository(Repository[T]):
    """Dictionary-backed repository."""

    def __init__(self, entity: str, records=()):
        self.entity = entity
        self._records: dict[int, T] = {}
        for record in records:
            self.add(record)

    def get(self, record_id: int) -> T | None:
        return self._records.get(record_id)

    def list(self) -> list[T]:
        return [self._records[k] for k in sorted(self._records)]

    def _insert(self, record: T) -> None:
        self._records[record.id] = record

    def _replace(self, record: T) -> None:
        self._records[record.id] = record

    def _remove(self, record_id: int) -> None:
        del self._records[record_id]

    def next_id(self) -> int:
        return max(self._records, default=0) + 1

    def snapshot(self) -> dict[int, T]:
        return dict(self._records)

    def restore(self, snapshot: dict[int, T]) -> None:
        self._records = dict(snapshot)

    def __len__(self) -> int:
        return len(self._records)
