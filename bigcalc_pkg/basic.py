"""Elementary operations: arithmetic, powers, factorial, exponential and logarithms."""

from __future__ import annotations

import decimal
import math
import random
from decimal import Decimal

from . import primitives
from .config import GUARD_DIGITS
from .context import PrecisionContext
from .number import EXACT, Numeric, PrecisionNumber
from .types import DomainError, ValidationError


def _result(value: Decimal, like: PrecisionNumber) -> PrecisionNumber:
    return PrecisionNumber(value, profile=like.profile).trim()


def add(a: Numeric, b: Numeric) -> PrecisionNumber:
    return PrecisionNumber.of(a) + b


def subtract(a: Numeric, b: Numeric) -> PrecisionNumber:
    return PrecisionNumber.of(a) - b


def multiply(a: Numeric, b: Numeric) -> PrecisionNumber:
    return PrecisionNumber.of(a) * b


def divide(a: Numeric, b: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Divide a by b, rounding the quotient to the context.

    Raises:
        DomainError: If b is zero (code DIVISION_BY_ZERO)
    """
    a, b = PrecisionNumber.of(a), PrecisionNumber.of(b)
    if b.is_zero():
        raise DomainError("Division by zero", "DIVISION_BY_ZERO")
    ctx = PrecisionContext.coerce(context)
    return _result(ctx.decimal_context().divide(a.value, b.value), a)


def modulo(a: Numeric, b: Numeric) -> PrecisionNumber:
    """Non-negative remainder of a modulo b.

    The remainder of |a| by |b| is taken; a negative dividend yields |b| minus
    that remainder, so the result always lies in [0, |b|).

    Example:
        >>> modulo(-7, 3)
        PrecisionNumber('2')
    """
    a, b = PrecisionNumber.of(a), PrecisionNumber.of(b)
    if b.is_zero():
        raise DomainError("Modulo by zero", "DIVISION_BY_ZERO")
    divisor = EXACT.abs(b.value)
    remainder = EXACT.remainder(EXACT.abs(a.value), divisor)
    if a.is_negative() and not remainder.is_zero():
        remainder = EXACT.subtract(divisor, remainder)
    return _result(remainder, a)


def power(base: Numeric, exponent: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Raise base to exponent.

    Integral exponents are computed exactly and rounded once. Other exponents
    use sign(base) * exp(exponent * ln|base|), so a negative base with a
    fractional exponent returns the negated power of its magnitude instead of
    a complex number.

    Raises:
        DomainError: For zero raised to a zero or negative exponent
    """
    base, exponent = PrecisionNumber.of(base), PrecisionNumber.of(exponent)
    ctx = PrecisionContext.coerce(context)
    if base.is_zero():
        if not exponent.is_positive():
            raise DomainError(f"0^{exponent} is undefined", "LOG_OF_ZERO")
        return PrecisionNumber(0, profile=base.profile)
    if exponent.is_zero():
        return PrecisionNumber(1, profile=base.profile)
    if exponent == 1:
        return base.trim()
    if exponent == -1:
        return divide(1, base, ctx)
    if exponent.is_integer():
        try:
            value = ctx.decimal_context().power(base.value, int(exponent.value))
        except decimal.Overflow as e:
            raise DomainError(f"{base}^{exponent} is too large", "OVERFLOW") from e
        return _result(value, base)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    logarithm = ln(abs(base), wide)
    magnitude = exp(exponent * logarithm, wide)
    value = ctx.decimal_context().plus(magnitude.value)
    if base.is_negative():
        value = EXACT.minus(value)
    return _result(value, base)


def factorial(n: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Exact factorial of a non-negative integer."""
    n = PrecisionNumber.of(n)
    if not n.is_integer():
        raise ValidationError(f"Factorial requires an integer, got {n}", "NOT_INTEGER")
    if n.is_negative():
        raise ValidationError(
            f"Factorial requires a non-negative integer, got {n}", "NEGATIVE_ARGUMENT"
        )
    return PrecisionNumber(math.factorial(n.to_integer()), profile=n.profile)


def exp(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """e raised to x, summed as a Maclaurin series.

    Negative arguments are evaluated as 1 / exp(|x|).
    """
    x = PrecisionNumber.of(x)
    ctx = PrecisionContext.coerce(context)
    if x.is_zero():
        return PrecisionNumber(1, profile=x.profile)
    if x.is_negative():
        return divide(1, exp(-x, ctx.with_extra_digits(GUARD_DIGITS)), ctx).with_profile(x.profile)

    wide = ctx.with_extra_digits(GUARD_DIGITS)
    dctx = wide.decimal_context()
    threshold = ctx.epsilon()
    term = Decimal(1)
    total = Decimal(1)
    n = 0
    try:
        while True:
            n += 1
            term = dctx.divide(dctx.multiply(term, x.value), n)
            total = dctx.add(total, term)
            if term < threshold:
                break
    except decimal.Overflow as e:
        raise DomainError(f"exp({x}) is too large", "OVERFLOW") from e
    return _result(ctx.decimal_context().plus(total), x)


def ln(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Natural logarithm.

    Raises:
        DomainError: LOG_OF_ZERO for zero, LOG_DOMAIN for negative arguments
    """
    x = PrecisionNumber.of(x)
    _check_log_argument(x)
    ctx = PrecisionContext.coerce(context)
    return _result(primitives.ln(x.value, ctx), x)


def log10(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    x = PrecisionNumber.of(x)
    _check_log_argument(x)
    ctx = PrecisionContext.coerce(context)
    return _result(ctx.decimal_context().log10(x.value), x)


def log2(x: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    return log_base(x, 2, context)


def log_base(x: Numeric, base: Numeric, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Logarithm of x to an arbitrary positive base other than 1."""
    x, base = PrecisionNumber.of(x), PrecisionNumber.of(base)
    _check_log_argument(x)
    if not base.is_positive() or base == 1:
        raise DomainError(
            f"Logarithm base must be positive and not 1, got {base}", "INVALID_LOG_BASE"
        )
    ctx = PrecisionContext.coerce(context)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    quotient = wide.decimal_context().divide(
        primitives.ln(x.value, wide), primitives.ln(base.value, wide)
    )
    return _result(ctx.decimal_context().plus(quotient), x)


def _check_log_argument(x: PrecisionNumber) -> None:
    if x.is_zero():
        raise DomainError("Logarithm of zero is undefined", "LOG_OF_ZERO")
    if x.is_negative():
        raise DomainError(f"Logarithm of negative number {x} is undefined", "LOG_DOMAIN")


def _counting_arguments(n: Numeric, k: Numeric) -> tuple[int, int]:
    n_int = PrecisionNumber.of(n).to_integer()
    k_int = PrecisionNumber.of(k).to_integer()
    if n_int < 0 or k_int < 0:
        raise ValidationError("Counting arguments must be non-negative", "NEGATIVE_ARGUMENT")
    if k_int > n_int:
        raise ValidationError(f"Cannot choose {k_int} items out of {n_int}", "INVALID_ARGUMENT")
    return n_int, k_int


def permutation(n: Numeric, k: Numeric) -> PrecisionNumber:
    """Number of ordered selections of k items from n, n! / (n-k)!."""
    return PrecisionNumber(math.perm(*_counting_arguments(n, k)))


def combination(n: Numeric, k: Numeric) -> PrecisionNumber:
    """Number of unordered selections of k items from n."""
    return PrecisionNumber(math.comb(*_counting_arguments(n, k)))


def random_integer(low: Numeric, high: Numeric) -> PrecisionNumber:
    """Uniformly distributed integer in the inclusive range [low, high]."""
    low_int = PrecisionNumber.of(low).to_integer()
    high_int = PrecisionNumber.of(high).to_integer()
    if low_int > high_int:
        raise ValidationError(
            f"Lower bound {low_int} is greater than upper bound {high_int}", "INVALID_RANGE"
        )
    return PrecisionNumber(random.randint(low_int, high_int))


def remainder(a: Numeric, b: Numeric) -> PrecisionNumber:
    """Truncated remainder of a divided by b, carrying the sign of a.

    Example:
        >>> remainder(-15, 4)
        PrecisionNumber('-3')
    """
    a, b = PrecisionNumber.of(a), PrecisionNumber.of(b)
    if b.is_zero():
        raise DomainError("Remainder by zero", "DIVISION_BY_ZERO")
    return _result(EXACT.remainder(a.value, b.value), a)
