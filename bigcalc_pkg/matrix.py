"""Matrices of PrecisionNumber values and their arithmetic."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .basic import divide as divide_numbers
from .config import GUARD_DIGITS
from .context import PrecisionContext
from .formatting import DEFAULT_PROFILE, FormatProfile
from .number import Numeric, PrecisionNumber
from .types import ValidationError


class Matrix:
    """Immutable rectangular grid of PrecisionNumber values.

    Example:
        >>> m = Matrix([[1, 2], [3, 4]])
        >>> transpose(m).to_lists()
        [['1', '3'], ['2', '4']]
    """

    __slots__ = ("_data", "_profile")

    def __init__(self, rows: Sequence[Sequence[Numeric]], profile: FormatProfile | None = None):
        rows = [list(row) for row in rows]
        if not rows or not rows[0]:
            raise ValidationError("A matrix needs at least one row and one column", "INVALID_MATRIX")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValidationError("All matrix rows must have the same length", "INVALID_MATRIX")
        data = np.empty((len(rows), width), dtype=object)
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                data[i, j] = PrecisionNumber.of(value)
        self._data = _freeze(data)
        self._profile = profile or DEFAULT_PROFILE

    @classmethod
    def _wrap(cls, data: np.ndarray, profile: FormatProfile) -> Matrix:
        matrix = cls.__new__(cls)
        matrix._data = _freeze(data.astype(object))
        matrix._profile = profile
        return matrix

    @property
    def rows(self) -> PrecisionNumber:
        return PrecisionNumber(self._data.shape[0])

    @property
    def columns(self) -> PrecisionNumber:
        return PrecisionNumber(self._data.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self._data.shape

    @property
    def profile(self) -> FormatProfile:
        return self._profile

    def __getitem__(self, index: tuple[int, int]) -> PrecisionNumber:
        return self._data[index]

    def to_lists(self) -> list[list[str]]:
        return [[str(value.with_profile(self._profile)) for value in row] for row in self._data]

    def __eq__(self, other) -> bool:
        if not isinstance(other, Matrix):
            return NotImplemented
        return self.shape == other.shape and bool((self._data == other._data).all())

    def __hash__(self) -> int:
        return hash((self.shape, tuple(self._data.flat)))

    def __repr__(self) -> str:
        return f"Matrix({self.to_lists()!r})"

    def __add__(self, other: Matrix) -> Matrix:
        return add(self, other)

    def __sub__(self, other: Matrix) -> Matrix:
        return subtract(self, other)

    def __matmul__(self, other: Matrix) -> Matrix:
        return multiply(self, other)

    def __mul__(self, scalar: Numeric) -> Matrix:
        return scalar_multiply(self, scalar)

    def __rmul__(self, scalar: Numeric) -> Matrix:
        return scalar_multiply(self, scalar)


def _freeze(data: np.ndarray) -> np.ndarray:
    data.setflags(write=False)
    return data


def _require_same_shape(a: Matrix, b: Matrix, operation: str) -> None:
    if a.shape != b.shape:
        raise ValidationError(
            f"Cannot {operation} a {a.shape[0]}x{a.shape[1]} matrix and a "
            f"{b.shape[0]}x{b.shape[1]} matrix",
            "DIMENSION_MISMATCH",
        )


def add(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "add")
    return Matrix._wrap(a._data + b._data, a.profile)


def subtract(a: Matrix, b: Matrix) -> Matrix:
    _require_same_shape(a, b, "subtract")
    return Matrix._wrap(a._data - b._data, a.profile)


def multiply(a: Matrix, b: Matrix) -> Matrix:
    """Matrix product; the left column count must equal the right row count."""
    if a.shape[1] != b.shape[0]:
        raise ValidationError(
            f"Cannot multiply a {a.shape[0]}x{a.shape[1]} matrix by a "
            f"{b.shape[0]}x{b.shape[1]} matrix",
            "DIMENSION_MISMATCH",
        )
    return Matrix._wrap(np.dot(a._data, b._data), a.profile)


def divide(a: Matrix, b: Matrix, context: PrecisionContext | int | None = None) -> Matrix:
    """Element-wise quotient of two matrices of equal shape."""
    _require_same_shape(a, b, "divide")
    ctx = PrecisionContext.coerce(context)
    quotient = np.vectorize(lambda x, y: divide_numbers(x, y, ctx), otypes=[object])
    return Matrix._wrap(quotient(a._data, b._data), a.profile)


def scalar_multiply(matrix: Matrix, scalar: Numeric) -> Matrix:
    scalar = PrecisionNumber.of(scalar)
    scale = np.vectorize(lambda x: x * scalar, otypes=[object])
    return Matrix._wrap(scale(matrix._data), matrix.profile)


def transpose(matrix: Matrix) -> Matrix:
    return Matrix._wrap(matrix._data.T.copy(), matrix.profile)


def determinant(matrix: Matrix, context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Determinant by Gaussian elimination with partial pivoting."""
    size = matrix.shape[0]
    if matrix.shape[1] != size:
        raise ValidationError("Determinant requires a square matrix", "DIMENSION_MISMATCH")
    ctx = PrecisionContext.coerce(context)
    wide = ctx.with_extra_digits(GUARD_DIGITS)
    work = [list(row) for row in matrix._data]
    result = PrecisionNumber(1)
    for col in range(size):
        pivot = max(range(col, size), key=lambda r: abs(work[r][col]))
        if work[pivot][col].is_zero():
            return PrecisionNumber(0, profile=matrix.profile)
        if pivot != col:
            work[col], work[pivot] = work[pivot], work[col]
            result = -result
        result = (result * work[col][col]).round(wide)
        for row in range(col + 1, size):
            factor = divide_numbers(work[row][col], work[col][col], wide)
            work[row] = [
                (work[row][k] - factor * work[col][k]).round(wide) for k in range(size)
            ]
    return result.round(ctx).trim().with_profile(matrix.profile)
