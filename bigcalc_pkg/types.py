"""Error taxonomy and result dataclasses for consistent API responses."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


class CalculationError(Exception):
    """Base class for every error raised by the calculator."""

    kind = "calculation"

    def __init__(self, message: str, code: str = "CALCULATION_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


class ValidationError(CalculationError):
    """Raised when an argument or configuration is invalid."""

    kind = "validation"

    def __init__(self, message: str, code: str = "VALIDATION_ERROR"):
        super().__init__(message, code)


class DomainError(CalculationError):
    """Raised when a value lies outside the mathematical domain of an operation."""

    kind = "domain"

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        super().__init__(message, code)


class ParseError(CalculationError):
    """Raised when an expression cannot be tokenized or parsed."""

    kind = "parse"

    def __init__(self, message: str, code: str = "SYNTAX_ERROR"):
        super().__init__(message, code)


class UndefinedVariableError(ParseError):
    """Raised when an expression references a name with no binding."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Undefined variable or function: {name}", "UNDEFINED_VARIABLE")


@dataclass
class EvalResult:
    """Result of evaluating an expression or calling a numeric operation."""

    ok: bool
    value: Any = None
    result: str | None = None
    approx: float | None = None
    error: str | None = None
    error_code: str | None = None
    error_kind: str | None = None

    @classmethod
    def failure(cls, exc: CalculationError) -> EvalResult:
        return cls(ok=False, error=exc.message, error_code=exc.code, error_kind=exc.kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.result is not None:
            result_dict["result"] = self.result
        if self.approx is not None:
            result_dict["approx"] = self.approx
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.error_kind is not None:
            result_dict["error_kind"] = self.error_kind
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return (
                f"EvalResult(ok=False, error={self.error!r}, "
                f"error_code={self.error_code!r})"
            )
        parts = [f"ok={self.ok}"]
        if self.result is not None:
            parts.append(f"result={self.result!r}")
        if self.approx is not None:
            parts.append(f"approx={self.approx!r}")
        return f"EvalResult({', '.join(parts)})"


@dataclass
class RootsResult:
    """Result of a root or intersection search over an interval."""

    ok: bool
    roots: list[str] | None = None
    approx: list[float] | None = None
    error: str | None = None
    error_code: str | None = None
    error_kind: str | None = None

    @classmethod
    def failure(cls, exc: CalculationError) -> RootsResult:
        return cls(ok=False, error=exc.message, error_code=exc.code, error_kind=exc.kind)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result_dict: dict[str, Any] = {"ok": self.ok}
        if self.roots is not None:
            result_dict["roots"] = self.roots
        if self.approx is not None:
            result_dict["approx"] = self.approx
        if self.error is not None:
            result_dict["error"] = self.error
        if self.error_code is not None:
            result_dict["error_code"] = self.error_code
        if self.error_kind is not None:
            result_dict["error_kind"] = self.error_kind
        return result_dict

    def __repr__(self) -> str:
        if not self.ok:
            return f"RootsResult(ok=False, error={self.error!r})"
        return f"RootsResult(ok=True, roots={self.roots!r})"
