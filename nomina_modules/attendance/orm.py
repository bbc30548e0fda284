"""
Attendance ORM Persistence Models (``nomina_modules.attendance.orm``).

One row per employee and civil day (uq_attendance_employee_day).  Punch
times keep their UTC offset.
"""

from datetime import date, datetime

from sqlalchemy import Date, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class AttendanceDayLogModel(TrackedBase):
    """ORM model for ``AttendanceDayLog``."""

    __tablename__ = "attendance_day_logs"

    employee_id: Mapped[int] = mapped_column(ForeignKey("employees.id"), nullable=False)
    work_date: Mapped[date] = mapped_column(Date, nullable=False)
    clock_in: Mapped[datetime | None] = mapped_column(nullable=True)
    clock_out: Mapped[datetime | None] = mapped_column(nullable=True)

    __table_args__ = (
        UniqueConstraint("employee_id", "work_date", name="uq_attendance_employee_day"),
    )

    def to_dto(self):
        from nomina_modules.attendance.models import AttendanceDayLog
        return AttendanceDayLog(
            id=self.id,
            employee_id=self.employee_id,
            work_date=self.work_date,
            clock_in=self.clock_in,
            clock_out=self.clock_out,
        )

    @classmethod
    def from_dto(cls, dto) -> "AttendanceDayLogModel":
        return cls(
            id=dto.id,
            employee_id=dto.employee_id,
            work_date=dto.work_date,
            clock_in=dto.clock_in,
            clock_out=dto.clock_out,
        )
