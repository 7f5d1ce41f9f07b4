"""bigcalc package: arbitrary-precision numbers and an expression engine built on them."""

from .context import AngleMode, PrecisionContext
from .engine import ExpressionEngine, VariableEnvironment, evaluate
from .number import PrecisionNumber
from .percentage import percent_of, what_percent
from .types import (
    CalculationError,
    DomainError,
    EvalResult,
    ParseError,
    RootsResult,
    UndefinedVariableError,
    ValidationError,
)

__all__ = [
    "config",
    "context",
    "formatting",
    "number",
    "basic",
    "trigonometry",
    "hyperbolic",
    "radical",
    "special",
    "number_theory",
    "percentage",
    "stats",
    "coordinates",
    "matrix",
    "tokenizer",
    "parser",
    "functions",
    "engine",
    "series",
    "calculus",
    "analysis",
    "types",
    "api",
    "logging_config",
]

# Public API exports

__api_exports__ = [
    "AngleMode",
    "PrecisionContext",
    "PrecisionNumber",
    "ExpressionEngine",
    "VariableEnvironment",
    "evaluate",
    "percent_of",
    "what_percent",
    "CalculationError",
    "DomainError",
    "ParseError",
    "UndefinedVariableError",
    "ValidationError",
    "EvalResult",
    "RootsResult",
]
