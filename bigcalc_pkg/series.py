"""Finite sums and products over an integer iteration variable."""

from __future__ import annotations

from typing import Mapping

from .config import SUMMATION_VARIABLE
from .context import AngleMode, PrecisionContext
from .engine import ExpressionEngine, VariableEnvironment, VariableValue
from .logging_config import get_logger
from .number import Numeric, PrecisionNumber
from .parser import referenced_names
from .types import ValidationError

logger = get_logger("series")


def _iterate(start, end, body, context, angle_mode, external_variables):
    start, end = PrecisionNumber.of(start), PrecisionNumber.of(end)
    if start.has_decimals() or end.has_decimals():
        raise ValidationError("Series bounds must be integers", "NOT_INTEGER")
    if start > end:
        raise ValidationError(
            f"Series start {start} is greater than end {end}", "INVALID_RANGE"
        )
    if SUMMATION_VARIABLE not in referenced_names(body):
        raise ValidationError(
            f"Series expression must use the variable '{SUMMATION_VARIABLE}'",
            "MISSING_VARIABLE",
        )
    environment = VariableEnvironment.coerce(external_variables)
    if SUMMATION_VARIABLE in environment:
        raise ValidationError(
            f"'{SUMMATION_VARIABLE}' is reserved for the series index", "RESERVED_NAME"
        )
    engine = ExpressionEngine(context, angle_mode)
    logger.debug("Series over %r for k=%s..%s", body, start, end)
    for k in range(start.to_integer(), end.to_integer() + 1):
        scope = environment.with_overrides({SUMMATION_VARIABLE: PrecisionNumber(k)})
        yield engine.evaluate(body, scope)


def summation(
    start: Numeric,
    end: Numeric,
    body: str,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    external_variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> PrecisionNumber:
    """Sum body for k = start..end inclusive.

    Example:
        >>> summation(1, 3, "2*k+1")
        PrecisionNumber('15')
    """
    total = PrecisionNumber(0)
    for term in _iterate(start, end, body, context, angle_mode, external_variables):
        total = total + term
    return total


def product(
    start: Numeric,
    end: Numeric,
    body: str,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    external_variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> PrecisionNumber:
    """Multiply body for k = start..end inclusive.

    Example:
        >>> product(1, 4, "k")
        PrecisionNumber('24')
    """
    result = PrecisionNumber(1)
    for factor in _iterate(start, end, body, context, angle_mode, external_variables):
        result = result * factor
    return result
