"""
Bonus ORM Persistence Models (``nomina_modules.bonuses.orm``).

SQLAlchemy model persisting ``BonusTemplate`` with ``to_dto()`` /
``from_dto()`` round-trip conversion.
"""

from decimal import Decimal

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from nomina_kernel.db.base import TrackedBase


class BonusTemplateModel(TrackedBase):
    """ORM model for ``BonusTemplate``; ``calculation_type`` stores the enum value."""

    __tablename__ = "bonus_templates"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    calculation_type: Mapped[str] = mapped_column(String(50), nullable=False)
    value: Mapped[Decimal] = mapped_column(nullable=False)
    description: Mapped[str] = mapped_column(String(500), nullable=False, default="")

    def to_dto(self):
        from nomina_modules.bonuses.models import BonusCalculationType, BonusTemplate
        return BonusTemplate(
            id=self.id,
            name=self.name,
            calculation_type=BonusCalculationType(self.calculation_type),
            value=self.value,
            description=self.description,
        )

    @classmethod
    def from_dto(cls, dto) -> "BonusTemplateModel":
        return cls(
            id=dto.id,
            name=dto.name,
            calculation_type=dto.calculation_type.value,
            value=dto.value,
            description=dto.description,
        )
