"""Registry of the functions callable from expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from . import (
    basic,
    coordinates,
    hyperbolic,
    number_theory,
    percentage,
    radical,
    special,
    stats,
    trigonometry,
)
from .config import INVERSE_SUFFIX


@dataclass(frozen=True)
class FunctionSpec:
    """A callable function: its arity and a handler taking (scope, *arguments).

    ``arity`` of None accepts one or more arguments. Raw functions receive
    their last argument as unevaluated expression text.
    """

    name: str
    arity: Optional[int]
    handler: Callable
    raw: bool = False


def _angle(func):
    return lambda scope, x: func(x, scope.context, scope.angle_mode)


def _precise(func):
    return lambda scope, *args: func(*args, scope.context)


def _exact(func):
    return lambda scope, *args: func(*args)


def _summation(scope, start, end, body):
    from .series import summation

    return summation(start, end, body, scope.context, scope.angle_mode, scope.environment)


def _product(scope, start, end, body):
    from .series import product

    return product(start, end, body, scope.context, scope.angle_mode, scope.environment)


def _integral(scope, lower, upper, body):
    from .calculus import integrate

    return integrate(
        lower, upper, body, scope.context, scope.angle_mode, variables=scope.environment
    )


_SPECS = (
    FunctionSpec("sqrt", 1, _precise(radical.square_root)),
    FunctionSpec("cbrt", 1, _precise(radical.cubic_root)),
    FunctionSpec("rootn", 2, _precise(radical.nth_root)),
    FunctionSpec("sin", 1, _angle(trigonometry.sin)),
    FunctionSpec("cos", 1, _angle(trigonometry.cos)),
    FunctionSpec("tan", 1, _angle(trigonometry.tan)),
    FunctionSpec("cot", 1, _angle(trigonometry.cot)),
    FunctionSpec("asin", 1, _angle(trigonometry.asin)),
    FunctionSpec("acos", 1, _angle(trigonometry.acos)),
    FunctionSpec("atan", 1, _angle(trigonometry.atan)),
    FunctionSpec("acot", 1, _angle(trigonometry.acot)),
    FunctionSpec(
        "atan2", 2, lambda scope, y, x: trigonometry.atan2(y, x, scope.context, scope.angle_mode)
    ),
    FunctionSpec("sinh", 1, _precise(hyperbolic.sinh)),
    FunctionSpec("cosh", 1, _precise(hyperbolic.cosh)),
    FunctionSpec("tanh", 1, _precise(hyperbolic.tanh)),
    FunctionSpec("coth", 1, _precise(hyperbolic.coth)),
    FunctionSpec("asinh", 1, _precise(hyperbolic.asinh)),
    FunctionSpec("acosh", 1, _precise(hyperbolic.acosh)),
    FunctionSpec("atanh", 1, _precise(hyperbolic.atanh)),
    FunctionSpec("acoth", 1, _precise(hyperbolic.acoth)),
    FunctionSpec("ln", 1, _precise(basic.ln)),
    FunctionSpec("log2", 1, _precise(basic.log2)),
    FunctionSpec("log10", 1, _precise(basic.log10)),
    FunctionSpec("logbase", 2, _precise(basic.log_base)),
    FunctionSpec("exp", 1, _precise(basic.exp)),
    FunctionSpec("rem", 2, _exact(basic.remainder)),
    FunctionSpec("perm", 2, _exact(basic.permutation)),
    FunctionSpec("comb", 2, _exact(basic.combination)),
    FunctionSpec("RandInt", 2, _exact(basic.random_integer)),
    FunctionSpec("gcd", 2, _exact(number_theory.gcd)),
    FunctionSpec("lcm", 2, _exact(number_theory.lcm)),
    FunctionSpec("percentof", 2, _precise(percentage.percent_of)),
    FunctionSpec("whatpercent", 2, _precise(percentage.what_percent)),
    FunctionSpec("gamma", 1, _precise(special.gamma)),
    FunctionSpec("beta", 2, _precise(special.beta)),
    FunctionSpec("abs", 1, _exact(abs)),
    FunctionSpec("avg", None, lambda scope, *values: stats.average(values, scope.context)),
    FunctionSpec("median", None, lambda scope, *values: stats.median(values, scope.context)),
    FunctionSpec(
        "Rec",
        2,
        lambda scope, r, theta: coordinates.polar_to_cartesian(
            r, theta, scope.context, scope.angle_mode
        ),
    ),
    FunctionSpec("Pol", 2, _precise(coordinates.cartesian_to_polar)),
    FunctionSpec("sum", 3, _summation, raw=True),
    FunctionSpec("prod", 3, _product, raw=True),
    FunctionSpec("integral", 3, _integral, raw=True),
)

FUNCTIONS = {spec.name: spec for spec in _SPECS}

ALIASES = {
    "LCM": "lcm",
    "GCD": "gcd",
    "B": "beta",
    "log": "log10",
}
for _name in ("sin", "cos", "tan", "cot", "sinh", "cosh", "tanh", "coth"):
    ALIASES[_name + INVERSE_SUFFIX] = "a" + _name


def lookup(name: str) -> Optional[FunctionSpec]:
    """Return the function registered under a name or alias, if any."""
    return FUNCTIONS.get(ALIASES.get(name, name))


def is_function(name: str) -> bool:
    return lookup(name) is not None
