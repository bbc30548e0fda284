"""
Amounts -- Decimal coercion and rounding for MXN payroll figures.

Responsibility:
    Single place where caller-supplied numbers (int, str, float, Decimal)
    become ``Decimal``.  Every monetary computation in the kernel and the
    modules works on ``Decimal`` -- NEVER ``float``.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Failure modes:
    - InvalidAmountError for booleans, unparseable strings, NaN and infinity.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from nomina_kernel.exceptions import InvalidAmountError

CENTS = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: object, field: str = "amount") -> Decimal:
    """
    Coerce a number into a finite ``Decimal``.

    Floats go through ``str()`` so that ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises:
        InvalidAmountError: if ``value`` is not a finite number.
    """
    if isinstance(value, bool):
        raise InvalidAmountError(field, value, "booleans are not amounts")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidAmountError(field, value) from None
    else:
        raise InvalidAmountError(field, value, f"unsupported type {type(value).__name__}")

    if not result.is_finite():
        raise InvalidAmountError(field, value)
    return result


def quantize_cents(amount: Decimal) -> Decimal:
    """Round to 2 decimal places, half-up (peso cents)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def sum_amounts(amounts) -> Decimal:
    """Sum an iterable of Decimals; empty iterable sums to ``Decimal("0")``."""
    return sum(amounts, ZERO)
