"""Trigonometric functions and their inverses, honouring the angle mode."""

from __future__ import annotations

from decimal import Decimal

from . import primitives
from .config import (
    ATAN_EXTRA_DIGITS,
    ATAN_MAX_TERMS,
    ATAN_REDUCTION_THRESHOLD,
    GUARD_DIGITS,
)
from .context import AngleMode, PrecisionContext
from .logging_config import get_logger
from .number import EXACT, Numeric, PrecisionNumber
from .types import DomainError

logger = get_logger("trigonometry")

FULL_TURN_DEGREES = Decimal(360)
HALF_TURN_DEGREES = Decimal(180)


def _prepare(x: Numeric, context, angle_mode):
    return (
        PrecisionNumber.of(x),
        PrecisionContext.coerce(context),
        AngleMode.coerce(angle_mode),
    )


def _fractional_round(value: Decimal, ctx: PrecisionContext) -> Decimal:
    """Round to `precision` digits after the decimal point."""
    return value.quantize(Decimal(1).scaleb(-ctx.precision), rounding=ctx.rounding, context=EXACT)


def _finish(value: Decimal, like: PrecisionNumber) -> PrecisionNumber:
    return PrecisionNumber(value, profile=like.profile).trim()


def to_radians(degrees: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    degrees = PrecisionNumber.of(degrees)
    ctx = PrecisionContext.coerce(context)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    radians = dctx.divide(dctx.multiply(degrees.value, primitives.pi(wide)), HALF_TURN_DEGREES)
    return _finish(ctx.decimal_context().plus(radians), degrees)


def to_degrees(radians: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    radians = PrecisionNumber.of(radians)
    ctx = PrecisionContext.coerce(context)
    return _finish(_radians_to_degrees(radians.value, ctx), radians)


def _radians_to_degrees(radians: Decimal, ctx: PrecisionContext) -> Decimal:
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    degrees = dctx.divide(dctx.multiply(radians, HALF_TURN_DEGREES), primitives.pi(wide))
    return ctx.decimal_context().plus(degrees)


def _argument_radians(x: PrecisionNumber, wide: PrecisionContext, mode: AngleMode) -> Decimal:
    if mode is AngleMode.RADIANS:
        return x.value
    # Reduce whole turns exactly before converting
    degrees = EXACT.remainder(x.value, FULL_TURN_DEGREES)
    dctx = wide.decimal_context()
    return dctx.divide(dctx.multiply(degrees, primitives.pi(wide)), HALF_TURN_DEGREES)


def _sin_cos(x: PrecisionNumber, ctx: PrecisionContext, mode: AngleMode) -> tuple[Decimal, Decimal]:
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    radians = _argument_radians(x, wide, mode)
    return primitives.sin(radians, wide), primitives.cos(radians, wide)


def sin(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    """Sine, rounded to `precision` fractional digits so sin(30°) is exactly 0.5."""
    x, ctx, mode = _prepare(x, context, angle_mode)
    sine, _ = _sin_cos(x, ctx, mode)
    return _finish(_fractional_round(sine, ctx), x)


def cos(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    x, ctx, mode = _prepare(x, context, angle_mode)
    _, cosine = _sin_cos(x, ctx, mode)
    return _finish(_fractional_round(cosine, ctx), x)


def tan(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    """Tangent; raises DomainError where the cosine vanishes."""
    x, ctx, mode = _prepare(x, context, angle_mode)
    sine, cosine = _sin_cos(x, ctx, mode)
    if _fractional_round(cosine, ctx).is_zero():
        raise DomainError(f"tan({x}) is undefined", "POLE")
    quotient = ctx.with_extra_digits(GUARD_DIGITS).decimal_context().divide(sine, cosine)
    return _finish(ctx.decimal_context().plus(quotient), x)


def cot(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    """Cotangent; raises DomainError where the sine vanishes."""
    x, ctx, mode = _prepare(x, context, angle_mode)
    sine, cosine = _sin_cos(x, ctx, mode)
    if _fractional_round(sine, ctx).is_zero():
        raise DomainError(f"cot({x}) is undefined", "POLE")
    quotient = ctx.with_extra_digits(GUARD_DIGITS).decimal_context().divide(cosine, sine)
    return _finish(ctx.decimal_context().plus(quotient), x)


def _angle_result(radians: Decimal, like: PrecisionNumber, ctx: PrecisionContext, mode: AngleMode) -> PrecisionNumber:
    if mode is AngleMode.DEGREES:
        return _finish(_radians_to_degrees(radians, ctx), like)
    return _finish(ctx.decimal_context().plus(radians), like)


def _check_unit_interval(x: PrecisionNumber, name: str) -> None:
    if EXACT.abs(x.value) > 1:
        raise DomainError(
            f"{name}({x}) is undefined: argument must lie in [-1, 1]", "ARGUMENT_OUT_OF_RANGE"
        )


def asin(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    x, ctx, mode = _prepare(x, context, angle_mode)
    _check_unit_interval(x, "asin")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    return _angle_result(primitives.asin(x.value, wide), x, ctx, mode)


def acos(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    x, ctx, mode = _prepare(x, context, angle_mode)
    _check_unit_interval(x, "acos")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    return _angle_result(primitives.acos(x.value, wide), x, ctx, mode)


def _atan_series(x: Decimal, wide: PrecisionContext) -> Decimal:
    """Sum x - x^3/3 + x^5/5 - ... for |x| <= 1.

    Arguments above ATAN_REDUCTION_THRESHOLD are first halved with
    atan(x) = 2 atan(x / (1 + sqrt(1 + x^2))).
    """
    dctx = wide.decimal_context()
    threshold = Decimal(ATAN_REDUCTION_THRESHOLD)
    doublings = 0
    while EXACT.abs(x) > threshold:
        x = dctx.divide(x, dctx.add(1, dctx.sqrt(dctx.add(1, dctx.multiply(x, x)))))
        doublings += 1

    cutoff = wide.epsilon(ATAN_EXTRA_DIGITS - GUARD_DIGITS)
    square = dctx.multiply(x, x)
    power = x
    total = x
    for k in range(1, ATAN_MAX_TERMS):
        power = dctx.minus(dctx.multiply(power, square))
        term = dctx.divide(power, 2 * k + 1)
        total = dctx.add(total, term)
        if EXACT.abs(term) < cutoff:
            break
    else:
        logger.warning("atan series hit the %d term cap for x=%s", ATAN_MAX_TERMS, x)
    return dctx.multiply(total, 2**doublings)


def _atan_radians(x: Decimal, wide: PrecisionContext) -> Decimal:
    if EXACT.abs(x) <= 1:
        return _atan_series(x, wide)
    dctx = wide.decimal_context()
    half_pi = dctx.divide(primitives.pi(wide), 2)
    if x < 0:
        half_pi = EXACT.minus(half_pi)
    return dctx.subtract(half_pi, _atan_series(dctx.divide(1, x), wide))


def atan(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    """Arctangent summed from its Maclaurin series.

    For |x| > 1 the identity atan(x) = sign(x)*pi/2 - atan(1/x) is used.
    """
    x, ctx, mode = _prepare(x, context, angle_mode)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    return _angle_result(_atan_radians(x.value, wide), x, ctx, mode)


def acot(x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    x, ctx, mode = _prepare(x, context, angle_mode)
    if x.is_zero():
        raise DomainError("acot(0) is undefined", "ARGUMENT_OUT_OF_RANGE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    reciprocal = wide.decimal_context().divide(1, x.value)
    return _angle_result(_atan_radians(reciprocal, wide), x, ctx, mode)


def atan2(y: Numeric, x: Numeric, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
    """Angle of the point (x, y) measured from the positive x axis."""
    y, ctx, mode = _prepare(y, context, angle_mode)
    x = PrecisionNumber.of(x)
    if x.is_zero() and y.is_zero():
        raise DomainError("atan2(0, 0) is undefined", "ARGUMENT_OUT_OF_RANGE")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    return _angle_result(primitives.atan2(y.value, x.value, wide), y, ctx, mode)
