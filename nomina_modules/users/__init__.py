"""
Users Module (``nomina_modules.users``).

Account administration; the ``User`` value object itself lives in
``nomina_kernel.domain.access``.
"""

from nomina_modules.users.helpers import normalize_user, validate_user

__all__ = ["normalize_user", "validate_user"]
