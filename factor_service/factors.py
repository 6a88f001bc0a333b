"""Divisibility filter behind the findFactors operation."""

from collections.abc import Iterable


class ZeroDivisorError(ZeroDivisionError):
    """Raised when a filter is requested with a divisor of zero."""


def filter_factors(numbers: Iterable[int], divisor: int) -> list[int]:
    """Return the numbers evenly divisible by ``divisor``, in their original order."""
    if divisor == 0:
        raise ZeroDivisorError("Divisor must be a non-zero integer.")
    return [number for number in numbers if number % divisor == 0]
