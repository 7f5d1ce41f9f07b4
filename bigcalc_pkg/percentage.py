"""Percentage helpers."""

from __future__ import annotations

from .basic import divide
from .context import PrecisionContext
from .number import HUNDRED, Numeric, PrecisionNumber


def percent_of(n: Numeric, m: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """n percent of m, i.e. m * n / 100."""
    n, m = PrecisionNumber.of(n), PrecisionNumber.of(m)
    return divide(m * n, HUNDRED, context).with_profile(n.profile)


def what_percent(n: Numeric, m: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """How many percent n is of m, i.e. n / m * 100."""
    n = PrecisionNumber.of(n)
    ctx = PrecisionContext.coerce(context)
    ratio = divide(n, m, ctx.with_extra_digits(2))
    return (ratio * HUNDRED).round(ctx).trim().with_profile(n.profile)
