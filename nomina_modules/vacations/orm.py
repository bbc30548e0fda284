"""
Vacation ORM Persistence Models (``nomina_modules.vacations.orm``).
"""

from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class VacationRequestModel(TrackedBase):
    """ORM model for ``VacationRequest``; ``status`` stores the enum value."""

    __tablename__ = "vacation_requests"

    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"), nullable=False)
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date] = mapped_column(Date, nullable=False)
    days_requested: Mapped[int] = mapped_column(nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False)
    requested_at: Mapped[datetime] = mapped_column(nullable=False)
    reviewed_by: Mapped[str | None] = mapped_column(String(200), nullable=True)
    reviewed_at: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        Index("idx_vacation_employee_status", "employee_id", "status"),
    )

    def to_dto(self):
        from nomina_modules.vacations.models import VacationRequest, VacationRequestStatus
        return VacationRequest(
            id=self.id,
            employee_id=self.employee_id,
            start_date=self.start_date,
            end_date=self.end_date,
            days_requested=self.days_requested,
            status=VacationRequestStatus(self.status),
            requested_at=self.requested_at,
            reviewed_by=self.reviewed_by,
            reviewed_at=self.reviewed_at,
        )

    @classmethod
    def from_dto(cls, dto) -> "VacationRequestModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            start_date=dto.start_date,
            end_date=dto.end_date,
            days_requested=dto.days_requested,
            status=dto.status.value,
            requested_at=dto.requested_at,
            reviewed_by=dto.reviewed_by,
            reviewed_at=dto.reviewed_at,
        )
