"""Gamma and Beta functions."""

from __future__ import annotations

from decimal import Decimal

from . import primitives
from .basic import divide, exp, factorial, power
from .config import GUARD_DIGITS, LANCZOS_DIGITS
from .context import PrecisionContext
from .number import EXACT, Numeric, PrecisionNumber
from .types import DomainError

LANCZOS_G = Decimal(7)
LANCZOS_COEFFICIENTS = tuple(
    Decimal(c)
    for c in (
        "0.99999999999980993",
        "676.5203681218851",
        "-1259.1392167224028",
        "771.32342877765313",
        "-176.61502916214059",
        "12.507343278686905",
        "-0.13857109526572012",
        "9.9843695780195716e-6",
        "1.5056327351493116e-7",
    )
)
REFLECTION_THRESHOLD = Decimal("0.5")


def _lanczos(x: Decimal, wide: PrecisionContext) -> Decimal:
    dctx = wide.decimal_context()
    shifted = dctx.subtract(x, 1)
    series = LANCZOS_COEFFICIENTS[0]
    for i, coefficient in enumerate(LANCZOS_COEFFICIENTS[1:], start=1):
        series = dctx.add(series, dctx.divide(coefficient, dctx.add(shifted, i)))
    t = dctx.add(dctx.add(shifted, LANCZOS_G), Decimal("0.5"))
    root_two_pi = dctx.sqrt(dctx.multiply(2, primitives.pi(wide)))
    growth = power(t, PrecisionNumber(shifted) + Decimal("0.5"), wide).value
    decay = exp(PrecisionNumber(EXACT.minus(t)), wide).value
    return dctx.multiply(dctx.multiply(root_two_pi, growth), dctx.multiply(decay, series))


def _gamma_value(x: Decimal, wide: PrecisionContext) -> Decimal:
    if x >= REFLECTION_THRESHOLD:
        return _lanczos(x, wide)
    dctx = wide.decimal_context()
    pi = primitives.pi(wide)
    sine = primitives.sin(dctx.multiply(pi, x), wide)
    return dctx.divide(pi, dctx.multiply(sine, _lanczos(dctx.subtract(1, x), wide)))


def gamma(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Gamma function.

    Positive integers return (n-1)! exactly. Other arguments use the Lanczos
    approximation (g = 7, 9 coefficients), with the reflection formula for
    x < 0.5; those results carry at most LANCZOS_DIGITS significant digits.

    Raises:
        DomainError: At the poles x = 0, -1, -2, ...
    """
    x = PrecisionNumber.of(x)
    ctx = PrecisionContext.coerce(context)
    if x.is_integer():
        if not x.is_positive():
            raise DomainError(f"Gamma is undefined at non-positive integer {x}", "POLE")
        return factorial(x - 1).with_profile(x.profile)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    value = _gamma_value(x.value, wide)
    digits = PrecisionContext(min(ctx.precision, LANCZOS_DIGITS), ctx.rounding)
    return PrecisionNumber(digits.decimal_context().plus(value), profile=x.profile).trim()


def beta(x: Numeric, y: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Beta function B(x, y) = Gamma(x) Gamma(y) / Gamma(x + y)."""
    x, y = PrecisionNumber.of(x), PrecisionNumber.of(y)
    ctx = PrecisionContext.coerce(context)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    numerator = gamma(x, wide) * gamma(y, wide)
    result = divide(numerator, gamma(x + y, wide), wide)
    digits = ctx if (x.is_integer() and y.is_integer()) else PrecisionContext(
        min(ctx.precision, LANCZOS_DIGITS), ctx.rounding
    )
    return result.round(digits).trim().with_profile(x.profile)
