"""Hyperbolic functions and their inverses."""

from __future__ import annotations

from decimal import Decimal

from . import primitives
from .config import GUARD_DIGITS
from .context import PrecisionContext
from .number import EXACT, Numeric, PrecisionNumber
from .types import DomainError


def _finish(value: Decimal, like: PrecisionNumber, ctx: PrecisionContext) -> PrecisionNumber:
    return PrecisionNumber(ctx.decimal_context().plus(value), profile=like.profile).trim()


def sinh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    return _finish(primitives.sinh(x.value, ctx), x, ctx)


def cosh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    return _finish(primitives.cosh(x.value, ctx), x, ctx)


def tanh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    return _finish(primitives.tanh(x.value, ctx), x, ctx)


def coth(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    if x.is_zero():
        raise DomainError("coth(0) is undefined", "POLE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    tangent = primitives.tanh(x.value, wide)
    return _finish(wide.decimal_context().divide(1, tangent), x, ctx)


def asinh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """ln(|x| + sqrt(x^2 + 1)), carrying the sign of x."""
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    magnitude = EXACT.abs(x.value)
    radical = dctx.sqrt(dctx.add(dctx.multiply(magnitude, magnitude), 1))
    value = primitives.ln(dctx.add(magnitude, radical), wide)
    return _finish(EXACT.minus(value) if x.is_negative() else value, x, ctx)


def acosh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """ln(x + sqrt(x^2 - 1)) for x >= 1."""
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    if x.value < 1:
        raise DomainError(f"acosh({x}) is undefined: argument must be >= 1", "ARGUMENT_OUT_OF_RANGE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    radical = dctx.sqrt(dctx.subtract(dctx.multiply(x.value, x.value), 1))
    return _finish(primitives.ln(dctx.add(x.value, radical), wide), x, ctx)


def atanh(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """0.5 * ln((1 + x) / (1 - x)) for |x| < 1."""
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    if EXACT.abs(x.value) >= 1:
        raise DomainError(f"atanh({x}) is undefined: |x| must be < 1", "ARGUMENT_OUT_OF_RANGE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    ratio = dctx.divide(dctx.add(1, x.value), dctx.subtract(1, x.value))
    return _finish(dctx.divide(primitives.ln(ratio, wide), 2), x, ctx)


def acoth(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """0.5 * ln((x + 1) / (x - 1)) for |x| > 1."""
    x, ctx = PrecisionNumber.of(x), PrecisionContext.coerce(context)
    if EXACT.abs(x.value) <= 1:
        raise DomainError(f"acoth({x}) is undefined: |x| must be > 1", "ARGUMENT_OUT_OF_RANGE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    ratio = dctx.divide(dctx.add(x.value, 1), dctx.subtract(x.value, 1))
    return _finish(dctx.divide(primitives.ln(ratio, wide), 2), x, ctx)
