"""Greatest common divisor and least common multiple."""

from __future__ import annotations

from .basic import modulo
from .number import Numeric, PrecisionNumber
from .types import ValidationError


def _require_integer(value: PrecisionNumber, operation: str) -> None:
    if value.has_decimals():
        raise ValidationError(f"{operation} requires integers, got {value}", "NOT_INTEGER")


def gcd(a: Numeric, b: Numeric) -> PrecisionNumber:
    """Greatest common divisor by the Euclidean algorithm on absolute values.

    Example:
        >>> gcd(12, -18)
        PrecisionNumber('6')
    """
    a, b = PrecisionNumber.of(a), PrecisionNumber.of(b)
    _require_integer(a, "gcd")
    _require_integer(b, "gcd")
    a, b = abs(a), abs(b)
    while not b.is_zero():
        a, b = b, modulo(a, b)
    return a.trim()


def lcm(a: Numeric, b: Numeric) -> PrecisionNumber:
    """Least common multiple, |a*b| / gcd(a, b); zero if either input is zero."""
    a, b = PrecisionNumber.of(a), PrecisionNumber.of(b)
    divisor = gcd(a, b)
    if divisor.is_zero():
        return PrecisionNumber(0, profile=a.profile)
    return PrecisionNumber(abs(a * b).to_integer() // divisor.to_integer(), profile=a.profile)
