"""Immutable arbitrary-precision decimal value type."""

from __future__ import annotations

import decimal
from decimal import Decimal
from functools import total_ordering
from typing import Union

from .context import AngleMode, PrecisionContext
from .formatting import DEFAULT_PROFILE, FormatProfile, parse_decimal, render
from .types import ValidationError

EXACT = decimal.Context(
    prec=decimal.MAX_PREC,
    Emax=decimal.MAX_EMAX,
    Emin=decimal.MIN_EMIN,
    traps=[decimal.InvalidOperation, decimal.Overflow, decimal.DivisionByZero],
)

Numeric = Union["PrecisionNumber", Decimal, int, float, str]


def strip_zeros(value: Decimal) -> Decimal:
    """Drop trailing fractional zeros without switching to exponent notation."""
    if value.is_zero():
        return Decimal(0)
    if value.as_tuple().exponent >= 0:
        return value
    stripped = value.normalize(EXACT)
    if stripped.as_tuple().exponent > 0:
        stripped = stripped.quantize(Decimal(1), context=EXACT)
    return stripped


def to_decimal(value: Numeric, profile: FormatProfile | None = None) -> Decimal:
    """Convert any supported operand into an exact finite Decimal."""
    if isinstance(value, PrecisionNumber):
        return value.value
    if isinstance(value, bool):
        raise ValidationError("Booleans are not numbers", "INVALID_NUMBER")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, float):
        result = Decimal(repr(value)) if value == value else Decimal("NaN")
    elif isinstance(value, str):
        result = parse_decimal(value, profile)
    else:
        raise ValidationError(
            f"Cannot convert {type(value).__name__} to a number", "INVALID_NUMBER"
        )
    if not result.is_finite():
        raise ValidationError(f"{value!r} is not a finite number", "INVALID_NUMBER")
    return result


@total_ordering
class PrecisionNumber:
    """An exact decimal number with a regional format and a default precision.

    Addition, subtraction and multiplication are exact. Operations that cannot
    be exact (division, roots, transcendental functions) round to a
    PrecisionContext, which defaults to the number's own context.

    Example:
        >>> PrecisionNumber("1.10") + PrecisionNumber("2.2")
        PrecisionNumber('3.3')
        >>> from bigcalc_pkg.formatting import GERMAN
        >>> str(PrecisionNumber("1234,5", profile=GERMAN))
        '1234,5'
    """

    __slots__ = ("_value", "_profile", "_context")

    def __init__(
        self,
        value: Numeric = 0,
        profile: FormatProfile | None = None,
        context: PrecisionContext | int | None = None,
    ):
        if profile is None and isinstance(value, PrecisionNumber):
            profile = value.profile
        self._value = to_decimal(value, profile)
        self._profile = profile or DEFAULT_PROFILE
        if context is None and isinstance(value, PrecisionNumber):
            context = value._context
        self._context = None if context is None else PrecisionContext.coerce(context)

    @classmethod
    def of(cls, value: Numeric) -> PrecisionNumber:
        """Return value unchanged if it already is a PrecisionNumber."""
        if isinstance(value, cls):
            return value
        return cls(value)

    def _derive(self, value: Decimal) -> PrecisionNumber:
        result = PrecisionNumber.__new__(PrecisionNumber)
        result._value = value
        result._profile = self._profile
        result._context = self._context
        return result

    @property
    def value(self) -> Decimal:
        return self._value

    @property
    def profile(self) -> FormatProfile:
        return self._profile

    @property
    def context(self) -> PrecisionContext:
        return self._context or PrecisionContext.default()

    def with_profile(self, profile: FormatProfile) -> PrecisionNumber:
        return PrecisionNumber(self._value, profile=profile, context=self._context)

    def with_context(self, context: PrecisionContext | int) -> PrecisionNumber:
        return PrecisionNumber(self._value, profile=self._profile, context=context)

    # Predicates

    def is_integer(self) -> bool:
        return self._value == self._value.to_integral_value()

    def has_decimals(self) -> bool:
        return not self.is_integer()

    def is_zero(self) -> bool:
        return self._value.is_zero()

    def is_negative(self) -> bool:
        return self._value < 0

    def is_positive(self) -> bool:
        return self._value > 0

    def sign(self) -> int:
        if self._value.is_zero():
            return 0
        return -1 if self._value < 0 else 1

    # Conversion and rendering

    def trim(self) -> PrecisionNumber:
        """Return the same value without redundant trailing fractional zeros."""
        return self._derive(strip_zeros(self._value))

    def to_integer(self) -> int:
        if not self.is_integer():
            raise ValidationError(f"{self} is not an integer", "NOT_INTEGER")
        return int(self._value)

    def to_float(self) -> float:
        return float(self._value)

    def to_plain_string(self) -> str:
        """Render with '.' as decimal separator, never in exponent notation."""
        return render(self._value)

    def format(self, grouping: bool = False) -> str:
        return render(self._value, self._profile, grouping)

    def __str__(self) -> str:
        return render(self._value, self._profile)

    def __repr__(self) -> str:
        return f"PrecisionNumber({self.to_plain_string()!r})"

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return int(self._value)

    def __bool__(self) -> bool:
        return not self._value.is_zero()

    # Comparison

    def __eq__(self, other) -> bool:
        try:
            return self._value == to_decimal(other)
        except ValidationError:
            return NotImplemented

    def __lt__(self, other) -> bool:
        try:
            return self._value < to_decimal(other)
        except ValidationError:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)

    # Exact arithmetic

    def __add__(self, other: Numeric) -> PrecisionNumber:
        return self._derive(strip_zeros(EXACT.add(self._value, to_decimal(other))))

    def __radd__(self, other: Numeric) -> PrecisionNumber:
        return self.__add__(other)

    def __sub__(self, other: Numeric) -> PrecisionNumber:
        return self._derive(strip_zeros(EXACT.subtract(self._value, to_decimal(other))))

    def __rsub__(self, other: Numeric) -> PrecisionNumber:
        return self._derive(strip_zeros(EXACT.subtract(to_decimal(other), self._value)))

    def __mul__(self, other: Numeric) -> PrecisionNumber:
        return self._derive(strip_zeros(EXACT.multiply(self._value, to_decimal(other))))

    def __rmul__(self, other: Numeric) -> PrecisionNumber:
        return self.__mul__(other)

    def __neg__(self) -> PrecisionNumber:
        return self._derive(strip_zeros(EXACT.minus(self._value)))

    def __pos__(self) -> PrecisionNumber:
        return self

    def __abs__(self) -> PrecisionNumber:
        return self._derive(EXACT.abs(self._value))

    def negate(self) -> PrecisionNumber:
        return -self

    def abs(self) -> PrecisionNumber:
        return abs(self)

    # Rounded arithmetic, delegated to the operation modules

    def __truediv__(self, other: Numeric) -> PrecisionNumber:
        from .basic import divide

        return divide(self, other, self.context)

    def __rtruediv__(self, other: Numeric) -> PrecisionNumber:
        from .basic import divide

        return divide(other, self, self.context)

    def __mod__(self, other: Numeric) -> PrecisionNumber:
        from .basic import modulo

        return modulo(self, other)

    def __pow__(self, other: Numeric) -> PrecisionNumber:
        from .basic import power

        return power(self, other, self.context)

    def __rpow__(self, other: Numeric) -> PrecisionNumber:
        from .basic import power

        return power(other, self, self.context)

    def round(self, context: PrecisionContext | int | None = None) -> PrecisionNumber:
        """Round to the significant digits of a context."""
        ctx = PrecisionContext.coerce(context) if context is not None else self.context
        return self._derive(ctx.decimal_context().plus(self._value))

    def round_after_decimals(
        self, places: int, rounding: str = decimal.ROUND_HALF_UP
    ) -> PrecisionNumber:
        """Round to a fixed number of fractional digits."""
        quantum = Decimal(1).scaleb(-places)
        return self._derive(self._value.quantize(quantum, rounding=rounding, context=EXACT))

    # Function facade

    def sqrt(self, context: PrecisionContext | int | None = None) -> PrecisionNumber:
        from .radical import square_root

        return square_root(self, context or self.context)

    def cbrt(self, context: PrecisionContext | int | None = None) -> PrecisionNumber:
        from .radical import cubic_root

        return cubic_root(self, context or self.context)

    def nth_root(self, index: Numeric, context=None) -> PrecisionNumber:
        from .radical import nth_root

        return nth_root(self, index, context or self.context)

    def power(self, exponent: Numeric, context=None) -> PrecisionNumber:
        from .basic import power

        return power(self, exponent, context or self.context)

    def exp(self, context=None) -> PrecisionNumber:
        from .basic import exp

        return exp(self, context or self.context)

    def ln(self, context=None) -> PrecisionNumber:
        from .basic import ln

        return ln(self, context or self.context)

    def log_base(self, base: Numeric, context=None) -> PrecisionNumber:
        from .basic import log_base

        return log_base(self, base, context or self.context)

    def factorial(self) -> PrecisionNumber:
        from .basic import factorial

        return factorial(self)

    def gamma(self, context=None) -> PrecisionNumber:
        from .special import gamma

        return gamma(self, context or self.context)

    def sin(self, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
        from .trigonometry import sin

        return sin(self, context or self.context, angle_mode)

    def cos(self, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
        from .trigonometry import cos

        return cos(self, context or self.context, angle_mode)

    def tan(self, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
        from .trigonometry import tan

        return tan(self, context or self.context, angle_mode)

    def atan(self, context=None, angle_mode: AngleMode | str | None = None) -> PrecisionNumber:
        from .trigonometry import atan

        return atan(self, context or self.context, angle_mode)


ZERO = PrecisionNumber(0)
ONE = PrecisionNumber(1)
TWO = PrecisionNumber(2)
HUNDRED = PrecisionNumber(100)
