"""
Payroll ORM Persistence Models (``nomina_modules.payroll.orm``).

Responsibility:
    SQLAlchemy models persisting ``Incident`` and ``PayrollRun`` DTOs with
    ``to_dto()`` / ``from_dto()`` round-trip conversion.

Invariants enforced:
    - Monetary fields are exact decimal strings -- NEVER float.
    - Enum fields store the enum ``.value`` string.
    - One payroll run per period (uq_payroll_run_period).
    - Paid and signed employee sets are stored as sorted JSON id lists.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import JSON, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class IncidentModel(TrackedBase):
    """ORM model for ``Incident``."""

    __tablename__ = "payroll_incidents"

    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"), nullable=False)
    period: Mapped[str] = mapped_column(String(10), nullable=False)
    type: Mapped[str] = mapped_column(String(50), nullable=False)
    amount: Mapped[Decimal] = mapped_column(nullable=False)
    comment: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    __table_args__ = (
        Index("idx_incident_employee_period", "employee_id", "period"),
    )

    def to_dto(self):
        from nomina_modules.payroll.models import Incident, IncidentType
        return Incident(
            id=self.id,
            employee_id=self.employee_id,
            period=self.period,
            type=IncidentType(self.type),
            amount=self.amount,
            comment=self.comment,
        )

    @classmethod
    def from_dto(cls, dto) -> "IncidentModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            period=dto.period,
            type=dto.type.value,
            amount=dto.amount,
            comment=dto.comment,
        )


class PayrollRunModel(TrackedBase):
    """ORM model for ``PayrollRun``."""

    __tablename__ = "payroll_runs"

    period_id: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    paid_employee_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    signed_employee_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    total_gross: Mapped[Decimal] = mapped_column(nullable=False)
    total_deductions: Mapped[Decimal] = mapped_column(nullable=False)
    total_net: Mapped[Decimal] = mapped_column(nullable=False)
    employee_count: Mapped[int] = mapped_column(nullable=False, default=0)
    closed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        UniqueConstraint("period_id", name="uq_payroll_run_period"),
    )

    def to_dto(self):
        from nomina_kernel.domain.periods import PeriodStatus
        from nomina_modules.payroll.models import PayrollRun
        return PayrollRun(
            id=self.id,
            period_id=self.period_id,
            status=PeriodStatus(self.status),
            paid_employee_ids=frozenset(self.paid_employee_ids or ()),
            signed_employee_ids=frozenset(self.signed_employee_ids or ()),
            total_gross=self.total_gross,
            total_deductions=self.total_deductions,
            total_net=self.total_net,
            employee_count=self.employee_count,
            closed_at=self.closed_at,
        )

    @classmethod
    def from_dto(cls, dto) -> "PayrollRunModel":
        return cls(
            id=dto.id,
            period_id=dto.period_id,
            status=dto.status.value,
            paid_employee_ids=sorted(dto.paid_employee_ids),
            signed_employee_ids=sorted(dto.signed_employee_ids),
            total_gross=dto.total_gross,
            total_deductions=dto.total_deductions,
            total_net=dto.total_net,
            employee_count=dto.employee_count,
            closed_at=dto.closed_at,
        )

    def __repr__(self) -> str:
        return f"<PayrollRunModel {self.period_id} ({self.status})>"
