# signed_distance_field/errors.py
"""Exceptions raised by the distance field computation.

Each error also derives from the builtin a caller would expect
(ValueError / TypeError), so generic handlers keep working.
"""


class DistanceFieldError(Exception):
    """Base class for all distance field errors."""


class EmptyGrid(DistanceFieldError, ValueError):
    """Grid has zero width or zero height."""


class DimensionMismatch(DistanceFieldError, ValueError):
    """A supplied buffer or grid does not have the expected number of elements."""

    def __init__(self, name: str, expected: object, actual: object) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"{name} size mismatch: expected {expected}, got {actual}"
        )


class PrecisionMismatch(DistanceFieldError, TypeError):
    """A supplied buffer has a dtype other than the one required."""


class InvalidRange(DistanceFieldError, ValueError):
    """Clamping range with low >= high."""

    def __init__(self, low: float, high: float) -> None:
        self.low = low
        self.high = high
        super().__init__(f"Invalid clamping range: low={low} must be less than high={high}")
