"""
Module: nomina_kernel.db.base
Responsibility: Declarative base classes for all SQLAlchemy ORM models.
    Provides the integer primary key convention, portable column types for
    money and aware timestamps, and the TrackedBase mixin for row timestamps.
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel.  ALL ``orm.py`` files import from here.  MUST NOT import from
    domain/, store/ or any outer layer.

Invariants enforced:
    - Integer primary keys assigned by the caller (``Repository.next_id``),
      never by the database, so in-memory and SQL stores agree on ids.
    - Money is stored as its exact decimal string (DecimalString) so SQLite
      round-trips ``Decimal("19875.00")`` without passing through float.
    - Timestamps are stored as ISO-8601 text with their UTC offset
      (AwareDateTime) so a UTC-06:00 clock-in reads back UTC-06:00.
"""

from datetime import datetime
from decimal import Decimal
from typing import ClassVar

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator


class DecimalString(TypeDecorator):
    """
    Decimal stored as String(40).

    Guarantees:
        - process_bind_param: Decimal -> str on INSERT/UPDATE.
        - process_result_value: str -> Decimal on SELECT.
    """

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None:
            return str(Decimal(value))
        return None

    def process_result_value(self, value, dialect):
        if value is not None:
            return Decimal(value)
        return None


class AwareDateTime(TypeDecorator):
    """Timezone-aware datetime stored as ISO-8601 text."""

    impl = String(40)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if value.tzinfo is None:
            raise ValueError(f"naive datetime cannot be stored: {value!r}")
        return value.isoformat()

    def process_result_value(self, value, dialect):
        if value is not None:
            return datetime.fromisoformat(value)
        return None


class Base(DeclarativeBase):
    """
    Declarative base for all SQLAlchemy models.

    Contract:
        Every ORM model inherits from Base (or TrackedBase).  ``id`` is a
        plain integer primary key without autoincrement.
    """

    type_annotation_map: ClassVar[dict] = {
        Decimal: DecimalString(),
        datetime: AwareDateTime(),
    }

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)


class TrackedBase(Base):
    """
    Abstract base with row timestamps.

    ``created_at`` and ``updated_at`` are storage metadata only; they are not
    part of any DTO and never feed a calculation.
    """

    __abstract__ = True

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
