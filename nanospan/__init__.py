from .duration import Duration
from .errors import (
    DurationDivisionByZeroError,
    DurationError,
    DurationOverflowError,
    DurationUnderflowError,
    NonFiniteDurationError,
)
from .fmt import format_duration
from .interop import from_relativedelta, from_timedelta, to_relativedelta, to_timedelta
from .metrics import total_duration

__all__ = [
    "Duration",
    "DurationError",
    "DurationOverflowError",
    "DurationUnderflowError",
    "DurationDivisionByZeroError",
    "NonFiniteDurationError",
    "format_duration",
    "total_duration",
    "to_timedelta",
    "from_timedelta",
    "to_relativedelta",
    "from_relativedelta",
]
