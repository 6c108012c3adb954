"""Exceptions raised when a duration operation cannot be represented.

The ``checked_*`` methods never raise these; they return ``None`` instead.
Operators, ``Duration.new``, the float path and sequence sums raise them.
"""


class DurationError(ArithmeticError):
    """Base class for all duration arithmetic failures."""


class DurationOverflowError(DurationError, OverflowError):
    """Result exceeds the largest representable duration."""


class DurationUnderflowError(DurationError):
    """Result would be a negative duration."""


class DurationDivisionByZeroError(DurationError, ZeroDivisionError):
    """Duration divided by zero (an integer zero or a zero duration)."""


class NonFiniteDurationError(DurationError, ValueError):
    """Float arithmetic produced NaN or infinity."""
