"""Conversion between Cartesian and polar coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from . import trigonometry
from .context import AngleMode, PrecisionContext
from .config import GUARD_DIGITS
from .number import Numeric, PrecisionNumber
from .radical import square_root
from .types import DomainError


class CoordinateKind(Enum):
    CARTESIAN = "cartesian"
    POLAR = "polar"


@dataclass(frozen=True)
class Coordinate:
    """A pair of numbers tagged as Cartesian (x, y) or polar (r, theta)."""

    kind: CoordinateKind
    first: PrecisionNumber
    second: PrecisionNumber

    def __str__(self) -> str:
        if self.kind is CoordinateKind.CARTESIAN:
            return f"x={self.first}; y={self.second}"
        return f"r={self.first}; θ={self.second}"


def polar_to_cartesian(
    r: Numeric,
    theta: Numeric,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
) -> Coordinate:
    """Convert (r, theta) to (x, y); theta is read in the given angle mode.

    Raises:
        DomainError: If r is negative
    """
    r, theta = PrecisionNumber.of(r), PrecisionNumber.of(theta)
    ctx = PrecisionContext.coerce(context)
    if r.is_negative():
        raise DomainError(f"Radius must not be negative, got {r}", "NEGATIVE_RADIUS")
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    x = (r * trigonometry.cos(theta, wide, angle_mode)).round(ctx).trim()
    y = (r * trigonometry.sin(theta, wide, angle_mode)).round(ctx).trim()
    return Coordinate(CoordinateKind.CARTESIAN, x, y)


def cartesian_to_polar(
    x: Numeric, y: Numeric, context: PrecisionContext | int | None = None
) -> Coordinate:
    """Convert (x, y) to (r, theta) with theta in degrees.

    Raises:
        DomainError: If the point lies on an axis (x == 0 or y == 0)
    """
    x, y = PrecisionNumber.of(x), PrecisionNumber.of(y)
    ctx = PrecisionContext.coerce(context)
    if x.is_zero() or y.is_zero():
        raise DomainError(
            "Polar conversion is undefined for points on an axis", "AMBIGUOUS_ORIGIN"
        )
    r = square_root(x * x + y * y, ctx)
    theta = trigonometry.atan2(y, x, ctx, AngleMode.DEGREES)
    return Coordinate(CoordinateKind.POLAR, r, theta)
