"""Numerical analysis of single-variable expressions: bisection and root search.

Sampling is fail-soft: a sample that raises a CalculationError (a pole, a
domain violation) is treated as "no value" for that point only.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional

from .basic import divide
from .config import (
    ANALYSIS_PRECISION,
    BISECTION_INTERVAL_TOLERANCE,
    BISECTION_MAX_ITERATIONS,
    INTEGRATION_VARIABLE,
    ROOT_DISTINCT_TOLERANCE,
    ROOT_SEARCH_STEPS,
    ZERO_TOLERANCE,
)
from .context import AngleMode, PrecisionContext
from .engine import ExpressionEngine, VariableEnvironment, VariableValue
from .logging_config import get_logger
from .number import Numeric, PrecisionNumber
from .parser import parse
from .types import CalculationError, ValidationError

logger = get_logger("analysis")


def analysis_context(context: PrecisionContext | int | None) -> PrecisionContext:
    if context is None:
        return PrecisionContext(ANALYSIS_PRECISION)
    return PrecisionContext.coerce(context)


def is_near_zero(value: PrecisionNumber) -> bool:
    return abs(value).value <= Decimal(ZERO_TOLERANCE)


class Sampler:
    """Evaluates an expression at points of one variable, returning None on failure."""

    def __init__(
        self,
        body: str,
        variable: str = INTEGRATION_VARIABLE,
        context: PrecisionContext | int | None = None,
        angle_mode: AngleMode | str | None = None,
        variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
    ):
        # Malformed text is an error of the caller, not of a sample
        parse(body)
        self.body = body
        self.variable = variable
        self.context = analysis_context(context)
        self.engine = ExpressionEngine(self.context, angle_mode)
        self.environment = VariableEnvironment.coerce(variables)
        if variable in self.environment:
            raise ValidationError(
                f"'{variable}' is reserved for the function argument", "RESERVED_NAME"
            )

    def __call__(self, point: Numeric) -> Optional[PrecisionNumber]:
        scope = self.environment.with_overrides({self.variable: PrecisionNumber.of(point)})
        try:
            return self.engine.evaluate(self.body, scope)
        except CalculationError as e:
            logger.debug("No value for %r at %s=%s: %s", self.body, self.variable, point, e)
            return None


def _bisect(sampler: Sampler, left: PrecisionNumber, right: PrecisionNumber) -> Optional[PrecisionNumber]:
    f_left, f_right = sampler(left), sampler(right)
    if f_left is None or f_right is None:
        return None
    if is_near_zero(f_left):
        return left
    if is_near_zero(f_right):
        return right
    if f_left.sign() == f_right.sign():
        return None

    ctx = sampler.context
    width_tolerance = Decimal(BISECTION_INTERVAL_TOLERANCE)
    for _ in range(BISECTION_MAX_ITERATIONS):
        middle = divide(left + right, 2, ctx)
        if (right - left).value < width_tolerance:
            return middle
        f_middle = sampler(middle)
        if f_middle is None:
            return None
        if is_near_zero(f_middle):
            return middle
        if f_middle.sign() == f_left.sign():
            left, f_left = middle, f_middle
        else:
            right = middle
    logger.warning(
        "Bisection of %r stopped after %d iterations", sampler.body, BISECTION_MAX_ITERATIONS
    )
    return divide(left + right, 2, ctx)


def bisection(
    body: str,
    left: Numeric,
    right: Numeric,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> Optional[PrecisionNumber]:
    """Find a root of body (a function of x) inside [left, right].

    Returns None unless both endpoints evaluate and either one of them is
    (nearly) zero or their signs are strictly opposite.

    Example:
        >>> bisection("x^2 - 2", 0, 2)  # doctest: +ELLIPSIS
        PrecisionNumber('1.41421356237...')
    """
    left, right = PrecisionNumber.of(left), PrecisionNumber.of(right)
    if left > right:
        left, right = right, left
    sampler = Sampler(body, context=context, angle_mode=angle_mode, variables=variables)
    return _bisect(sampler, left, right)


def _distinct(roots: list[PrecisionNumber]) -> list[PrecisionNumber]:
    tolerance = Decimal(ROOT_DISTINCT_TOLERANCE)
    distinct: list[PrecisionNumber] = []
    for root in sorted(roots):
        if not distinct or (root - distinct[-1]).value > tolerance:
            distinct.append(root.trim())
    return distinct


def roots_in_range(
    body: str,
    x_min: Numeric,
    x_max: Numeric,
    steps: int | None = None,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> list[PrecisionNumber]:
    """All roots of body found by sampling [x_min, x_max] and refining sign changes.

    Args:
        body: Expression in x, e.g. ``"x^2 - 4"``
        x_min: Lower end of the search interval
        x_max: Upper end of the search interval
        steps: Number of sub-intervals sampled (at least 2)

    Returns:
        Sorted roots, with roots closer than ROOT_DISTINCT_TOLERANCE merged
    """
    x_min, x_max = PrecisionNumber.of(x_min), PrecisionNumber.of(x_max)
    if x_min > x_max:
        raise ValidationError(f"Range start {x_min} is greater than end {x_max}", "INVALID_RANGE")
    steps = max(2, ROOT_SEARCH_STEPS if steps is None else int(steps))
    sampler = Sampler(body, context=context, angle_mode=angle_mode, variables=variables)
    ctx = sampler.context
    width = divide(x_max - x_min, steps, ctx)

    roots: list[PrecisionNumber] = []
    previous_x = previous_y = None
    for i in range(steps + 1):
        x = x_max if i == steps else x_min + width * i
        y = sampler(x)
        if y is not None and is_near_zero(y):
            roots.append(x)
        elif y is not None and previous_y is not None and not is_near_zero(previous_y):
            if y.sign() != previous_y.sign():
                root = _bisect(sampler, previous_x, x)
                if root is not None:
                    roots.append(root)
        previous_x, previous_y = x, y

    result = _distinct(roots)
    logger.debug("Found %d root(s) of %r in [%s, %s]", len(result), body, x_min, x_max)
    return result


def intersections_in_range(
    first: str,
    second: str,
    x_min: Numeric,
    x_max: Numeric,
    steps: int | None = None,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> list[PrecisionNumber]:
    """x values in [x_min, x_max] where the two expressions are equal."""
    return roots_in_range(
        f"({first})-({second})", x_min, x_max, steps, context, angle_mode, variables
    )
