"""Numerical integration and differentiation of expressions in x."""

from __future__ import annotations

from decimal import Decimal
from typing import Mapping, Optional

from .analysis import Sampler, is_near_zero
from .basic import divide
from .config import (
    DERIVATIVE_STEP_BASE,
    DERIVATIVE_STEP_SCALE,
    GUARD_DIGITS,
    INTEGRATION_STEPS,
    INTEGRATION_VARIABLE,
)
from .context import AngleMode, PrecisionContext
from .engine import ExpressionEngine, VariableEnvironment, VariableValue
from .logging_config import get_logger
from .number import Numeric, PrecisionNumber
from .parser import referenced_names
from .types import ValidationError

logger = get_logger("calculus")

SIMPSON = "simpson"
TRAPEZOID = "trapezoid"


def simpson_weights(steps: int) -> list[int]:
    """1, 4, 2, 4, ..., 2, 4, 1 for an even number of steps."""
    return [1 if i in (0, steps) else (4 if i % 2 else 2) for i in range(steps + 1)]


def integrate(
    lower: Numeric,
    upper: Numeric,
    body: str,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    steps: int | None = None,
    method: str = SIMPSON,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> PrecisionNumber:
    """Definite integral of body over [lower, upper].

    Simpson's rule normalizes steps to an even count of at least 2; the
    trapezoid rule uses the count as given.

    Args:
        lower: Lower bound, must not exceed upper
        upper: Upper bound
        body: Integrand in x, e.g. ``"x^2"``
        steps: Number of sub-intervals (INTEGRATION_STEPS when None)
        method: ``"simpson"`` or ``"trapezoid"``

    Raises:
        ValidationError: For reversed bounds, an integrand without x, or bad steps
    """
    lower, upper = PrecisionNumber.of(lower), PrecisionNumber.of(upper)
    ctx = PrecisionContext.coerce(context)
    if lower > upper:
        raise ValidationError(
            f"Lower bound {lower} is greater than upper bound {upper}", "INVALID_RANGE"
        )
    if INTEGRATION_VARIABLE not in referenced_names(body):
        raise ValidationError(
            f"Integrand must use the variable '{INTEGRATION_VARIABLE}'", "MISSING_VARIABLE"
        )
    environment = VariableEnvironment.coerce(variables)
    if INTEGRATION_VARIABLE in environment:
        raise ValidationError(
            f"'{INTEGRATION_VARIABLE}' is reserved for the integration variable",
            "RESERVED_NAME",
        )
    steps = INTEGRATION_STEPS if steps is None else int(steps)
    if steps < 1:
        raise ValidationError("Integration needs at least one step", "INVALID_ARGUMENT")
    if method == SIMPSON:
        steps = max(2, steps + steps % 2)
        weights = simpson_weights(steps)
    elif method == TRAPEZOID:
        weights = [1 if i in (0, steps) else 2 for i in range(steps + 1)]
    else:
        raise ValidationError(f"Unknown integration method: {method!r}", "INVALID_ARGUMENT")

    wide = ctx.with_extra_digits(GUARD_DIGITS)
    engine = ExpressionEngine(wide, angle_mode)
    width = divide(upper - lower, steps, wide)
    logger.debug("Integrating %r over [%s, %s] with %d %s steps", body, lower, upper, steps, method)

    weighted = PrecisionNumber(0)
    for i, weight in enumerate(weights):
        x = upper if i == steps else lower + width * i
        value = engine.evaluate(body, environment.with_overrides({INTEGRATION_VARIABLE: x}))
        weighted = (weighted + value * weight).round(wide)
    divisor = 3 if method == SIMPSON else 2
    return divide(weighted * width, divisor, ctx)


def derivative(
    body: str,
    x: Numeric,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
) -> Optional[PrecisionNumber]:
    """Symmetric difference quotient (f(x+h) - f(x-h)) / 2h.

    The step is h = max(1e-6, |x| * 1e-6). Returns None when a sample cannot
    be evaluated or the denominator is (nearly) zero.
    """
    x = PrecisionNumber.of(x)
    sampler = Sampler(body, context=context, angle_mode=angle_mode, variables=variables)
    step = max(PrecisionNumber(Decimal(DERIVATIVE_STEP_BASE)), abs(x) * Decimal(DERIVATIVE_STEP_SCALE))
    ahead, behind = sampler(x + step), sampler(x - step)
    if ahead is None or behind is None:
        return None
    denominator = step * 2
    if is_near_zero(denominator):
        return None
    return divide(ahead - behind, denominator, sampler.context)
