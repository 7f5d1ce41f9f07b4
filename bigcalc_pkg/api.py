"""Public API for bigcalc - returns structured result objects instead of raising."""

from __future__ import annotations

from typing import Any, Callable, Mapping, Sequence, Union

from . import analysis, calculus, coordinates, series
from .context import AngleMode, PrecisionContext
from .coordinates import Coordinate
from .engine import ExpressionEngine, VariableEnvironment
from .logging_config import get_logger
from .matrix import Matrix
from .matrix import determinant as matrix_determinant
from .number import PrecisionNumber
from .types import CalculationError, EvalResult, RootsResult

logger = get_logger("api")

Variables = Union[VariableEnvironment, Mapping[str, Any], None]


def _value_result(value: Any) -> EvalResult:
    if value is None:
        return EvalResult(ok=False, error="Value is undefined at this point", error_code="UNDEFINED", error_kind="domain")
    if isinstance(value, Coordinate):
        return EvalResult(ok=True, value=value, result=str(value), approx=value.first.to_float())
    return EvalResult(ok=True, value=value, result=str(value), approx=value.to_float())


def _run(operation: Callable[[], Any], describe: str) -> EvalResult:
    try:
        return _value_result(operation())
    except CalculationError as e:
        logger.debug("%s failed: %s (%s)", describe, e.message, e.code)
        return EvalResult.failure(e)
    except Exception as e:
        logger.error("Unexpected error in %s: %s", describe, e, exc_info=True)
        return EvalResult(ok=False, error=str(e), error_code="INTERNAL_ERROR", error_kind="internal")


def evaluate(
    expression: str,
    variables: Variables = None,
    precision: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
) -> EvalResult:
    """Evaluate a mathematical expression.

    Args:
        expression: Expression string (e.g., "2+2", "sin(30)", "5 nCr 2")
        variables: Mapping of names to numbers or expression text
        precision: Significant digits or a PrecisionContext
        angle_mode: "DEG" or "RAD"

    Returns:
        EvalResult with the value, its text and a float approximation

    Example:
        >>> from bigcalc_pkg.api import evaluate
        >>> evaluate("2*x+1", {"x": "3"}).result
        '7'
        >>> evaluate("1/0").error_code
        'DIVISION_BY_ZERO'
    """

    def run():
        engine = ExpressionEngine(precision, angle_mode)
        value = engine.evaluate_value(expression, variables)
        if isinstance(value, Coordinate):
            return value
        return engine.finish(value)

    return _run(run, f"evaluate({expression!r})")


def summation(start, end, expression: str, variables: Variables = None, precision=None, angle_mode=None) -> EvalResult:
    """Sum an expression in k for k = start..end."""
    return _run(
        lambda: series.summation(start, end, expression, precision, angle_mode, variables),
        f"summation({expression!r})",
    )


def product(start, end, expression: str, variables: Variables = None, precision=None, angle_mode=None) -> EvalResult:
    """Multiply an expression in k for k = start..end."""
    return _run(
        lambda: series.product(start, end, expression, precision, angle_mode, variables),
        f"product({expression!r})",
    )


def integrate_expr(
    expression: str,
    lower,
    upper,
    steps: int | None = None,
    method: str = calculus.SIMPSON,
    variables: Variables = None,
    precision=None,
    angle_mode=None,
) -> EvalResult:
    """Definite integral of an expression in x.

    Example:
        >>> integrate_expr("x^2", 0, 3, steps=10).result
        '9'
    """
    return _run(
        lambda: calculus.integrate(
            lower, upper, expression, precision, angle_mode, steps, method, variables
        ),
        f"integrate({expression!r})",
    )


def differentiate(expression: str, x, variables: Variables = None, precision=None, angle_mode=None) -> EvalResult:
    """Numerical derivative of an expression in x at a point."""
    return _run(
        lambda: calculus.derivative(expression, x, precision, angle_mode, variables),
        f"derivative({expression!r})",
    )


def _roots_result(search: Callable[[], list[PrecisionNumber]], describe: str) -> RootsResult:
    try:
        roots = search()
    except CalculationError as e:
        logger.debug("%s failed: %s (%s)", describe, e.message, e.code)
        return RootsResult.failure(e)
    except Exception as e:
        logger.error("Unexpected error in %s: %s", describe, e, exc_info=True)
        return RootsResult(ok=False, error=str(e), error_code="INTERNAL_ERROR", error_kind="internal")
    return RootsResult(
        ok=True, roots=[str(root) for root in roots], approx=[root.to_float() for root in roots]
    )


def find_roots(expression: str, x_min, x_max, steps: int | None = None, variables: Variables = None, precision=None, angle_mode=None) -> RootsResult:
    """Roots of an expression in x inside [x_min, x_max].

    Example:
        >>> find_roots("x^2 - 4", -5, 5).approx
        [-2.0, 2.0]
    """
    return _roots_result(
        lambda: analysis.roots_in_range(
            expression, x_min, x_max, steps, precision, angle_mode, variables
        ),
        f"roots({expression!r})",
    )


def find_intersections(first: str, second: str, x_min, x_max, steps: int | None = None, variables: Variables = None, precision=None, angle_mode=None) -> RootsResult:
    """x values in [x_min, x_max] where two expressions in x meet."""
    return _roots_result(
        lambda: analysis.intersections_in_range(
            first, second, x_min, x_max, steps, precision, angle_mode, variables
        ),
        f"intersections({first!r}, {second!r})",
    )


def det(rows: Sequence[Sequence[Any]], precision=None) -> EvalResult:
    """Determinant of a square matrix given as rows."""
    return _run(lambda: matrix_determinant(Matrix(rows), precision), "determinant")


def to_cartesian(r, theta, precision=None, angle_mode=None) -> EvalResult:
    return _run(
        lambda: coordinates.polar_to_cartesian(r, theta, precision, angle_mode), "to_cartesian"
    )


def to_polar(x, y, precision=None) -> EvalResult:
    return _run(lambda: coordinates.cartesian_to_polar(x, y, precision), "to_polar")
