"""
Employee ORM Persistence Models (``nomina_modules.employees.orm``).

Responsibility:
    SQLAlchemy models persisting the ``Employee`` and ``Branch`` DTOs, each
    with ``to_dto()`` / ``from_dto()`` round-trip conversion.

Invariants enforced:
    - ``gross_salary`` is stored as an exact decimal string; ``daily_salary``
      has no column because it is always derived.
    - ``status`` stores the enum ``.value`` string.
"""

from datetime import date
from decimal import Decimal

from sqlalchemy import Date, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class BranchModel(TrackedBase):
    """ORM model for ``Branch``."""

    __tablename__ = "branches"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    code: Mapped[str] = mapped_column(String(50), nullable=False)

    __table_args__ = (UniqueConstraint("code", name="uq_branch_code"),)

    def to_dto(self):
        from nomina_modules.employees.models import Branch
        return Branch(id=self.id, name=self.name, code=self.code)

    @classmethod
    def from_dto(cls, dto) -> "BranchModel":
        return cls(id=dto.id, name=dto.name, code=dto.code)


class EmployeeModel(TrackedBase):
    """
    ORM model for ``Employee``.

    Guarantees:
        - ``external_id`` is unique (uq_employee_external_id).
    """

    __tablename__ = "employees"

    external_id: Mapped[str] = mapped_column(String(50), nullable=False)
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    rfc: Mapped[str] = mapped_column(String(13), nullable=False)
    curp: Mapped[str] = mapped_column(String(18), nullable=False)
    nss: Mapped[str] = mapped_column(String(11), nullable=False)
    clabe: Mapped[str] = mapped_column(String(18), nullable=False)
    branch_id: Mapped[int] = mapped_column(ForeignKey("branches.id"), nullable=False)
    position: Mapped[str] = mapped_column(String(200), nullable=False)
    rank: Mapped[str] = mapped_column(String(100), nullable=False)
    gross_salary: Mapped[Decimal] = mapped_column(nullable=False)
    hire_date: Mapped[date] = mapped_column(Date, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (
        UniqueConstraint("external_id", name="uq_employee_external_id"),
        Index("idx_employee_branch", "branch_id"),
        Index("idx_employee_status", "status"),
    )

    def to_dto(self):
        from nomina_modules.employees.models import Employee, EmployeeStatus
        return Employee(
            id=self.id,
            external_id=self.external_id,
            name=self.name,
            email=self.email,
            rfc=self.rfc,
            curp=self.curp,
            nss=self.nss,
            clabe=self.clabe,
            branch_id=self.branch_id,
            position=self.position,
            rank=self.rank,
            gross_salary=self.gross_salary,
            hire_date=self.hire_date,
            status=EmployeeStatus(self.status),
            avatar_url=self.avatar_url,
        )

    @classmethod
    def from_dto(cls, dto) -> "EmployeeModel":
        return cls(
            id=dto.id,
            external_id=dto.external_id,
            name=dto.name,
            email=dto.email,
            rfc=dto.rfc,
            curp=dto.curp,
            nss=dto.nss,
            clabe=dto.clabe,
            branch_id=dto.branch_id,
            position=dto.position,
            rank=dto.rank,
            gross_salary=dto.gross_salary,
            hire_date=dto.hire_date,
            status=dto.status.value,
            avatar_url=dto.avatar_url,
        )

    def __repr__(self) -> str:
        return f"<EmployeeModel {self.external_id}: {self.name} ({self.status})>"
