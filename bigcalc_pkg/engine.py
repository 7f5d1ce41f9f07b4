"""Expression evaluation against an explicit variable environment."""

from __future__ import annotations

from typing import Mapping, Union

from . import primitives
from .config import CONSTANT_NAMES, GUARD_DIGITS, VAR_NAME_RE
from .context import AngleMode, PrecisionContext
from .logging_config import get_logger
from .number import Numeric, PrecisionNumber
from .parser import Operand, as_number, parse, validate_text
from .types import UndefinedVariableError, ValidationError

logger = get_logger("engine")

VariableValue = Union[PrecisionNumber, str, Numeric]


class VariableEnvironment:
    """Caller-owned mapping of variable names to numbers or expression text.

    Text values are evaluated on demand in the same environment, so one
    variable may be defined in terms of others. Resolved values are memoized
    per precision and angle mode.

    Example:
        >>> env = VariableEnvironment({"a": "2*b", "b": "3"})
        >>> evaluate("a + 1", env)
        PrecisionNumber('7')
    """

    def __init__(self, variables: Mapping[str, VariableValue] | None = None):
        self._variables = dict(variables or {})
        for name in self._variables:
            if not isinstance(name, str) or not VAR_NAME_RE.match(name):
                raise ValidationError(f"Invalid variable name: {name!r}", "INVALID_VARIABLE")
        self._resolved: dict = {}
        self._resolving: list[str] = []

    @classmethod
    def coerce(cls, variables) -> VariableEnvironment:
        if isinstance(variables, cls):
            return variables
        return cls(variables)

    def __contains__(self, name: str) -> bool:
        return name in self._variables

    def __len__(self) -> int:
        return len(self._variables)

    def names(self) -> frozenset:
        return frozenset(self._variables)

    def raw(self, name: str) -> VariableValue:
        return self._variables[name]

    def with_overrides(self, overrides: Mapping[str, VariableValue]) -> VariableEnvironment:
        """Return a new environment with some names rebound."""
        merged = dict(self._variables)
        merged.update(overrides)
        return VariableEnvironment(merged)

    def resolve(self, name: str, engine: ExpressionEngine, context: PrecisionContext, angle_mode: AngleMode) -> Operand:
        key = (name, context, angle_mode)
        if key in self._resolved:
            return self._resolved[key]
        value = self._variables[name]
        if isinstance(value, str):
            if name in self._resolving:
                chain = " -> ".join(self._resolving + [name])
                raise ValidationError(f"Cyclic variable reference: {chain}", "CYCLIC_VARIABLE")
            self._resolving.append(name)
            try:
                resolved = engine.evaluate_value(value, self, context, angle_mode)
            finally:
                self._resolving.pop()
        else:
            resolved = PrecisionNumber.of(value)
        self._resolved[key] = resolved
        return resolved


class EvaluationScope:
    """Everything an expression tree needs while it is being evaluated."""

    def __init__(self, engine: ExpressionEngine, environment: VariableEnvironment, context: PrecisionContext, angle_mode: AngleMode):
        self.engine = engine
        self.environment = environment
        self.context = context
        self.angle_mode = angle_mode

    def lookup(self, name: str) -> Operand:
        if name in CONSTANT_NAMES:
            constant = primitives.e if name == "e" else primitives.pi
            return PrecisionNumber(constant(self.context.with_extra_digits(GUARD_DIGITS)))
        if name in self.environment:
            return self.environment.resolve(name, self.engine, self.context, self.angle_mode)
        raise UndefinedVariableError(name)


class ExpressionEngine:
    """Evaluates expression text with a default precision and angle mode.

    Example:
        >>> engine = ExpressionEngine(context=20, angle_mode="DEG")
        >>> engine.evaluate("2 sin(30) + 3!")
        PrecisionNumber('7')
    """

    def __init__(self, context: PrecisionContext | int | None = None, angle_mode: AngleMode | str | None = None):
        self.context = PrecisionContext.coerce(context)
        self.angle_mode = AngleMode.coerce(angle_mode)

    def evaluate_value(
        self,
        text: str,
        variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
        context: PrecisionContext | int | None = None,
        angle_mode: AngleMode | str | None = None,
    ) -> Operand:
        """Evaluate text and return the raw result, which may be a Coordinate."""
        validate_text(text)
        environment = VariableEnvironment.coerce(variables)
        ctx = PrecisionContext.coerce(context) if context is not None else self.context
        mode = AngleMode.coerce(angle_mode) if angle_mode is not None else self.angle_mode
        tree = parse(text)
        logger.debug("Evaluating %r (precision=%d, mode=%s)", text, ctx.precision, mode.name)
        return tree.evaluate(EvaluationScope(self, environment, ctx, mode))

    def evaluate(
        self,
        text: str,
        variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
        context: PrecisionContext | int | None = None,
        angle_mode: AngleMode | str | None = None,
    ) -> PrecisionNumber:
        """Evaluate expression text to a number.

        Args:
            text: Expression, e.g. ``"2*x+1"``
            variables: Environment or mapping of names to numbers or expression text
            context: Precision for inexact operations (engine default if None)
            angle_mode: DEGREES or RADIANS (engine default if None)

        Returns:
            The result, rounded to the context unless it is an integer;
            coordinate results yield their first component

        Raises:
            ValidationError: Blank or oversized input, cyclic variables
            ParseError: Malformed input or undefined names
            DomainError: Raised by a called function
        """
        result = self.evaluate_value(text, variables, context, angle_mode)
        return self.finish(as_number(result), context)

    def finish(self, result: PrecisionNumber, context: PrecisionContext | int | None = None) -> PrecisionNumber:
        """Round a non-integer result to the context and drop trailing zeros."""
        if result.is_integer():
            return result.trim()
        ctx = PrecisionContext.coerce(context) if context is not None else self.context
        return result.round(ctx).trim()


def evaluate(
    text: str,
    variables: VariableEnvironment | Mapping[str, VariableValue] | None = None,
    context: PrecisionContext | int | None = None,
    angle_mode: AngleMode | str | None = None,
) -> PrecisionNumber:
    """Evaluate expression text with a fresh engine.

    Example:
        >>> evaluate("2*x+1", {"x": "3"})
        PrecisionNumber('7')
    """
    return ExpressionEngine(context, angle_mode).evaluate(text, variables)
