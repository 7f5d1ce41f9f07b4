"""Descriptive statistics over sequences of numbers."""

from __future__ import annotations

from typing import Iterable

from .basic import divide
from .context import PrecisionContext
from .number import Numeric, PrecisionNumber
from .types import ValidationError


def _numbers(values: Iterable[Numeric]) -> list[PrecisionNumber]:
    numbers = [PrecisionNumber.of(v) for v in values]
    if not numbers:
        raise ValidationError("At least one value is required", "EMPTY_INPUT")
    return numbers


def total(values: Iterable[Numeric]) -> PrecisionNumber:
    """Exact sum of the values."""
    result = PrecisionNumber(0)
    for number in _numbers(values):
        result = result + number
    return result


def average(values: Iterable[Numeric], context: PrecisionContext | int | None = None) -> PrecisionNumber:
    numbers = _numbers(values)
    return divide(total(numbers), len(numbers), context)


def median(values: Iterable[Numeric], context: PrecisionContext | int | None = None) -> PrecisionNumber:
    """Middle value, or the mean of the two middle values for even counts."""
    numbers = sorted(_numbers(values))
    middle = len(numbers) // 2
    if len(numbers) % 2:
        return numbers[middle].trim()
    return divide(numbers[middle - 1] + numbers[middle], 2, context)
