"""
Bonuses Module (``nomina_modules.bonuses``).

Reusable bonus templates (fixed amount or percentage of salary) and their
bulk assignment as bonus incidents.
"""

from nomina_modules.bonuses.helpers import calculate_bonus_amount
from nomina_modules.bonuses.models import (
    BonusAssignmentSummary,
    BonusCalculationType,
    BonusTemplate,
)

__all__ = [
    "BonusAssignmentSummary",
    "BonusCalculationType",
    "BonusTemplate",
    "calculate_bonus_amount",
]
