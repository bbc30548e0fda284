"""
User ORM Persistence Models (``nomina_modules.users.orm``).

Persists the kernel ``User`` value object.  Assigned branches are a sorted
JSON id list; ``role`` stores the enum value.
"""

from sqlalchemy import JSON, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class UserModel(TrackedBase):
    """ORM model for ``nomina_kernel.domain.access.User``."""

    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(200), nullable=False)
    role: Mapped[str] = mapped_column(String(30), nullable=False)
    assigned_branch_ids: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    employee_id: Mapped[int | None] = mapped_column(ForeignKey("employees.id"), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(500), nullable=True)

    __table_args__ = (UniqueConstraint("email", name="uq_user_email"),)

    def to_dto(self):
        from nomina_kernel.domain.access import Role, User
        return User(
            id=self.id,
            name=self.name,
            email=self.email,
            role=Role(self.role),
            assigned_branch_ids=frozenset(self.assigned_branch_ids or ()),
            employee_id=self.employee_id,
            avatar_url=self.avatar_url,
        )

    @classmethod
    def from_dto(cls, dto) -> "UserModel":
        return cls(
            id=dto.id,
            name=dto.name,
            email=dto.email,
            role=dto.role.value,
            assigned_branch_ids=sorted(dto.assigned_branch_ids),
            employee_id=dto.employee_id,
            avatar_url=dto.avatar_url,
        )
