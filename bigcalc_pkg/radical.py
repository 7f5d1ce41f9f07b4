"""Square, cubic and n-th roots of real numbers."""

from __future__ import annotations

from . import primitives
from .basic import divide
from .context import PrecisionContext
from .number import EXACT, Numeric, PrecisionNumber
from .types import DomainError, ValidationError


def nth_root(radicand: Numeric, index: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Real n-th root of a number.

    A negative index gives the reciprocal of the root, an odd index of a
    negative radicand gives the negated root of its magnitude.

    Raises:
        DomainError: For index 0 or an even root of a negative number
        ValidationError: For a fractional index
    """
    radicand, index = PrecisionNumber.of(radicand), PrecisionNumber.of(index)
    ctx = PrecisionContext.coerce(context)
    if index.is_zero():
        raise DomainError("The zeroth root is undefined", "ARGUMENT_OUT_OF_RANGE")
    if not index.is_integer():
        raise ValidationError(f"Root index must be an integer, got {index}", "NOT_INTEGER")
    if index.is_negative():
        return divide(1, nth_root(radicand, -index, ctx.with_extra_digits(2)), ctx)

    n = index.to_integer()
    if radicand.is_negative() and n % 2 == 0:
        raise DomainError(
            f"No real {n}-th root of negative number {radicand}", "NO_REAL_ROOT"
        )
    if radicand.is_zero() or n == 1:
        return radicand.trim()
    if n == 2:
        value = ctx.decimal_context().sqrt(EXACT.abs(radicand.value))
    else:
        value = primitives.root(EXACT.abs(radicand.value), n, ctx)
    if radicand.is_negative():
        value = EXACT.minus(value)
    return PrecisionNumber(value, profile=radicand.profile).trim()


def square_root(radicand: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    return nth_root(radicand, 2, context)


def cubic_root(radicand: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    return nth_root(radicand, 3, context)
