"""Precision contexts and angle modes shared by every operation."""

from __future__ import annotations

import decimal
from dataclasses import dataclass
from enum import Enum

from . import config
from .types import ValidationError

ROUNDING_MODES = (
    decimal.ROUND_UP,
    decimal.ROUND_DOWN,
    decimal.ROUND_CEILING,
    decimal.ROUND_FLOOR,
    decimal.ROUND_HALF_UP,
    decimal.ROUND_HALF_DOWN,
    decimal.ROUND_HALF_EVEN,
    decimal.ROUND_05UP,
)


class AngleMode(Enum):
    """Unit in which trigonometric arguments and results are expressed."""

    DEGREES = "DEG"
    RADIANS = "RAD"

    @classmethod
    def coerce(cls, value: AngleMode | str | None) -> AngleMode:
        if value is None:
            value = config.DEFAULT_ANGLE_MODE
        if isinstance(value, cls):
            return value
        text = str(value).strip().upper()
        for mode in cls:
            if text in (mode.name, mode.value):
                return mode
        raise ValidationError(f"Unknown angle mode: {value!r}", "INVALID_ANGLE_MODE")


@dataclass(frozen=True)
class PrecisionContext:
    """Number of significant digits and rounding mode for inexact results."""

    precision: int
    rounding: str = decimal.ROUND_HALF_UP

    def __post_init__(self):
        if isinstance(self.precision, bool) or not isinstance(self.precision, int):
            raise ValidationError(
                f"Precision must be an integer, got {self.precision!r}",
                "INVALID_CONTEXT",
            )
        if self.precision <= 0:
            raise ValidationError(
                f"Precision must be positive, got {self.precision}", "INVALID_CONTEXT"
            )
        if self.rounding not in ROUNDING_MODES:
            raise ValidationError(
                f"Unknown rounding mode: {self.rounding!r}", "INVALID_CONTEXT"
            )

    @classmethod
    def default(cls) -> PrecisionContext:
        return cls(config.DEFAULT_PRECISION, getattr(decimal, config.DEFAULT_ROUNDING))

    @classmethod
    def coerce(cls, value: PrecisionContext | int | None) -> PrecisionContext:
        """Accept a context, a bare precision or None (the configured default)."""
        if value is None:
            return cls.default()
        if isinstance(value, cls):
            return value
        return cls(value, getattr(decimal, config.DEFAULT_ROUNDING))

    def with_extra_digits(self, digits: int) -> PrecisionContext:
        return PrecisionContext(self.precision + digits, self.rounding)

    def decimal_context(self) -> decimal.Context:
        return decimal.Context(
            prec=self.precision,
            rounding=self.rounding,
            Emax=decimal.MAX_EMAX,
            Emin=decimal.MIN_EMIN,
            traps=[decimal.DivisionByZero, decimal.InvalidOperation, decimal.Overflow],
        )

    def epsilon(self, extra: int = 0) -> decimal.Decimal:
        """Return 10^-(precision + extra)."""
        return decimal.Decimal(1).scaleb(-(self.precision + extra))
