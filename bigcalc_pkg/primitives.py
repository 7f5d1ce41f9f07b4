"""Arbitrary-precision primitives backed by mpmath and sympy.

Every function takes and returns ``Decimal`` values. The work is done with
``GUARD_DIGITS`` extra digits and the result is rounded to the requested
context.
"""

from __future__ import annotations

from decimal import Decimal
from functools import lru_cache

import mpmath
import sympy as sp

from .config import CACHE_SIZE_CONSTANTS, GUARD_DIGITS
from .context import PrecisionContext


def _working_digits(context: PrecisionContext) -> int:
    return context.precision + GUARD_DIGITS


def _to_mpf(value: Decimal):
    return mpmath.mpf(str(value))


def _from_mpf(value, context: PrecisionContext) -> Decimal:
    digits = mpmath.nstr(value, _working_digits(context), strip_zeros=False)
    return context.decimal_context().plus(Decimal(digits))


@lru_cache(maxsize=CACHE_SIZE_CONSTANTS)
def _pi_digits(digits: int) -> Decimal:
    return Decimal(str(sp.pi.evalf(digits)))


@lru_cache(maxsize=CACHE_SIZE_CONSTANTS)
def _e_digits(digits: int) -> Decimal:
    return Decimal(str(sp.E.evalf(digits)))


def pi(context: PrecisionContext) -> Decimal:
    return context.decimal_context().plus(_pi_digits(_working_digits(context)))


def e(context: PrecisionContext) -> Decimal:
    return context.decimal_context().plus(_e_digits(_working_digits(context)))


def _apply(func, context: PrecisionContext, *args: Decimal) -> Decimal:
    with mpmath.workdps(_working_digits(context)):
        return _from_mpf(func(*(_to_mpf(a) for a in args)), context)


def ln(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.log, context, value)


def sin(radians: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.sin, context, radians)


def cos(radians: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.cos, context, radians)


def asin(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.asin, context, value)


def acos(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.acos, context, value)


def atan2(y: Decimal, x: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.atan2, context, y, x)


def sinh(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.sinh, context, value)


def cosh(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.cosh, context, value)


def tanh(value: Decimal, context: PrecisionContext) -> Decimal:
    return _apply(mpmath.tanh, context, value)


def root(value: Decimal, index: int, context: PrecisionContext) -> Decimal:
    """Real principal root of a non-negative value."""
    with mpmath.workdps(_working_digits(context)):
        return _from_mpf(mpmath.root(_to_mpf(value), index), context)
