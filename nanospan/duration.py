"""The Duration value type.

A Duration is a non-negative span of time stored as whole seconds plus a
sub-second nanosecond remainder. Every live value is canonical:
``0 <= nanos < 1_000_000_000`` and ``secs`` fits in an unsigned 64-bit
integer, so equality, ordering and hashing can compare the two fields
directly.

Arithmetic comes in two tiers. The ``checked_*`` methods return ``None``
when the result is not representable. The operators (``+``, ``-``, ``*``,
``/``) call the checked variant and raise a ``DurationError`` subclass on
failure. Multiplying or dividing by a float goes through ``mul_f64`` and
``div_f64``, which trade exactness for range.
"""

import math
from dataclasses import dataclass
from typing import ClassVar

from typing_extensions import override

from nanospan.checked import (
    checked_add,
    checked_mul,
    checked_sub,
    is_int,
    require_float,
    require_uint,
)
from nanospan.errors import (
    DurationDivisionByZeroError,
    DurationOverflowError,
    DurationUnderflowError,
    NonFiniteDurationError,
)
from nanospan.fmt import format_duration, format_with_spec
from nanospan.util import (
    MAX_NANOS_F64,
    MICROS_PER_SEC,
    MILLIS_PER_SEC,
    NANOS_PER_MICRO,
    NANOS_PER_MILLI,
    NANOS_PER_SEC,
    U32_MAX,
    U64_MAX,
)


@dataclass(frozen=True, order=True, kw_only=True)
class Duration:
    """A span of time with nanosecond resolution.

    Build values with ``Duration.new`` or the ``from_*`` constructors.
    Constructing the dataclass directly requires canonical fields.
    """

    secs: int = 0
    nanos: int = 0

    ZERO: ClassVar["Duration"]
    MAX: ClassVar["Duration"]

    def __post_init__(self) -> None:
        require_uint(self.secs, "secs")
        require_uint(self.nanos, "nanos")
        if self.nanos >= NANOS_PER_SEC:
            raise ValueError(
                f"Duration nanos ({self.nanos}) must be < {NANOS_PER_SEC}\n"
                f"Hint: Use Duration.new(secs, nanos) to carry excess "
                f"nanoseconds into seconds"
            )

    @classmethod
    def new(cls, secs: int, nanos: int) -> "Duration":
        """Create a duration, carrying whole seconds out of ``nanos``.

        Args:
            secs: Whole seconds (unsigned 64-bit)
            nanos: Nanoseconds (unsigned 32-bit), may exceed one second

        Raises:
            DurationOverflowError: If the carry pushes secs past the u64 range
        """
        require_uint(secs, "secs")
        require_uint(nanos, "nanos", U32_MAX)
        total_secs = checked_add(secs, nanos // NANOS_PER_SEC)
        if total_secs is None:
            raise DurationOverflowError("overflow in Duration.new")
        return cls(secs=total_secs, nanos=nanos % NANOS_PER_SEC)

    @classmethod
    def from_secs(cls, secs: int) -> "Duration":
        require_uint(secs, "secs")
        return cls(secs=secs)

    @classmethod
    def from_millis(cls, millis: int) -> "Duration":
        require_uint(millis, "millis")
        return cls(
            secs=millis // MILLIS_PER_SEC,
            nanos=(millis % MILLIS_PER_SEC) * NANOS_PER_MILLI,
        )

    @classmethod
    def from_micros(cls, micros: int) -> "Duration":
        require_uint(micros, "micros")
        return cls(
            secs=micros // MICROS_PER_SEC,
            nanos=(micros % MICROS_PER_SEC) * NANOS_PER_MICRO,
        )

    @classmethod
    def from_nanos(cls, nanos: int) -> "Duration":
        require_uint(nanos, "nanos")
        return cls(secs=nanos // NANOS_PER_SEC, nanos=nanos % NANOS_PER_SEC)

    def as_secs(self) -> int:
        """Whole seconds, discarding the fractional part."""
        return self.secs

    def subsec_millis(self) -> int:
        """Fractional part in whole milliseconds (always < 1000)."""
        return self.nanos // NANOS_PER_MILLI

    def subsec_micros(self) -> int:
        """Fractional part in whole microseconds (always < 1_000_000)."""
        return self.nanos // NANOS_PER_MICRO

    def subsec_nanos(self) -> int:
        """Fractional part in nanoseconds (always < 1_000_000_000)."""
        return self.nanos

    def as_millis(self) -> int:
        """Total duration in whole milliseconds."""
        return self.secs * MILLIS_PER_SEC + self.nanos // NANOS_PER_MILLI

    def as_micros(self) -> int:
        """Total duration in whole microseconds."""
        return self.secs * MICROS_PER_SEC + self.nanos // NANOS_PER_MICRO

    def as_nanos(self) -> int:
        """Total duration in nanoseconds."""
        return self.secs * NANOS_PER_SEC + self.nanos

    def as_secs_f64(self) -> float:
        """Total duration in seconds as a float. Lossy for large values."""
        return self.secs + self.nanos / NANOS_PER_SEC

    def is_zero(self) -> bool:
        return self.secs == 0 and self.nanos == 0

    def __bool__(self) -> bool:
        return not self.is_zero()

    def checked_add(self, rhs: "Duration") -> "Duration | None":
        """Add two durations, returning None on overflow."""
        secs = checked_add(self.secs, rhs.secs)
        if secs is None:
            return None
        nanos = self.nanos + rhs.nanos
        if nanos >= NANOS_PER_SEC:
            nanos -= NANOS_PER_SEC
            secs = checked_add(secs, 1)
            if secs is None:
                return None
        return Duration(secs=secs, nanos=nanos)

    def checked_sub(self, rhs: "Duration") -> "Duration | None":
        """Subtract ``rhs``, returning None if the result would be negative."""
        secs = checked_sub(self.secs, rhs.secs)
        if secs is None:
            return None
        if self.nanos >= rhs.nanos:
            nanos = self.nanos - rhs.nanos
        else:
            # Borrow one second for the nanosecond difference
            secs = checked_sub(secs, 1)
            if secs is None:
                return None
            nanos = self.nanos + NANOS_PER_SEC - rhs.nanos
        return Duration(secs=secs, nanos=nanos)

    def checked_mul(self, rhs: int) -> "Duration | None":
        """Multiply by an unsigned 32-bit integer, returning None on overflow.

        Raises:
            TypeError: If rhs is not an int
            ValueError: If rhs is outside the u32 range
        """
        require_uint(rhs, "rhs", U32_MAX)
        # nanos * rhs < 1e9 * 2**32, well inside 64 bits
        total_nanos = self.nanos * rhs
        extra_secs = total_nanos // NANOS_PER_SEC
        nanos = total_nanos % NANOS_PER_SEC
        secs = checked_mul(self.secs, rhs)
        if secs is None:
            return None
        secs = checked_add(secs, extra_secs)
        if secs is None:
            return None
        return Duration(secs=secs, nanos=nanos)

    def checked_div(self, rhs: int) -> "Duration | None":
        """Divide by an unsigned 32-bit integer, returning None if rhs is 0.

        Raises:
            TypeError: If rhs is not an int
            ValueError: If rhs is outside the u32 range
        """
        require_uint(rhs, "rhs", U32_MAX)
        if rhs == 0:
            return None
        secs = self.secs // rhs
        carry = self.secs - secs * rhs
        extra_nanos = carry * NANOS_PER_SEC // rhs
        nanos = self.nanos // rhs + extra_nanos
        return Duration(secs=secs, nanos=nanos)

    def _nanos_f64(self) -> float:
        return float(NANOS_PER_SEC) * float(self.secs) + float(self.nanos)

    @classmethod
    def _from_nanos_f64(cls, nanos: float, operation: str) -> "Duration":
        if not math.isfinite(nanos):
            raise NonFiniteDurationError(f"got non-finite value when {operation}")
        if nanos > MAX_NANOS_F64:
            raise DurationOverflowError(f"overflow when {operation}")
        if nanos < 0.0:
            raise DurationUnderflowError(f"underflow when {operation}")
        secs, subsec = divmod(int(nanos), NANOS_PER_SEC)
        # MAX_NANOS_F64 rounds up from the exact limit
        if secs > U64_MAX:
            raise DurationOverflowError(f"overflow when {operation}")
        return cls(secs=secs, nanos=subsec)

    def mul_f64(self, rhs: float) -> "Duration":
        """Multiply by a float scalar.

        The duration is converted to a float nanosecond count, so results
        lose precision once the total exceeds 2**53 nanoseconds (about 104
        days). Use ``checked_mul`` when exactness matters.

        Raises:
            NonFiniteDurationError: If the product is NaN or infinite
            DurationOverflowError: If the product exceeds Duration.MAX
            DurationUnderflowError: If the product is negative
            TypeError: If rhs is not a float or int
        """
        nanos = require_float(rhs, "rhs") * self._nanos_f64()
        return self._from_nanos_f64(nanos, "multiplying duration by float")

    def div_f64(self, rhs: float) -> "Duration":
        """Divide by a float scalar. Same precision caveats as ``mul_f64``."""
        rhs = require_float(rhs, "rhs")
        operation = "dividing duration by float"
        if rhs == 0.0:
            # IEEE division by zero yields inf or nan
            raise NonFiniteDurationError(f"got non-finite value when {operation}")
        return self._from_nanos_f64(self._nanos_f64() / rhs, operation)

    def div_duration(self, rhs: "Duration") -> float:
        """Ratio of two durations as a float.

        Raises:
            DurationDivisionByZeroError: If rhs is the zero duration
        """
        if rhs.is_zero():
            raise DurationDivisionByZeroError(
                "divide by zero error when dividing duration by zero duration"
            )
        return self._nanos_f64() / rhs._nanos_f64()

    def __add__(self, rhs: object) -> "Duration":
        if not isinstance(rhs, Duration):
            return NotImplemented
        result = self.checked_add(rhs)
        if result is None:
            raise DurationOverflowError("overflow when adding durations")
        return result

    def __radd__(self, lhs: object) -> "Duration":
        # Lets the builtin sum() start from its default of 0
        if is_int(lhs) and lhs == 0:
            return self
        return NotImplemented

    def __sub__(self, rhs: object) -> "Duration":
        if not isinstance(rhs, Duration):
            return NotImplemented
        result = self.checked_sub(rhs)
        if result is None:
            raise DurationUnderflowError("underflow when subtracting durations")
        return result

    def __mul__(self, rhs: object) -> "Duration":
        if isinstance(rhs, float):
            return self.mul_f64(rhs)
        if is_int(rhs):
            result = self.checked_mul(rhs)  # type: ignore[arg-type]
            if result is None:
                raise DurationOverflowError(
                    "overflow when multiplying duration by scalar"
                )
            return result
        return NotImplemented

    def __rmul__(self, lhs: object) -> "Duration":
        if isinstance(lhs, float):
            return self._from_nanos_f64(
                lhs * self._nanos_f64(), "multiplying float by duration"
            )
        if is_int(lhs):
            result = self.checked_mul(lhs)  # type: ignore[arg-type]
            if result is None:
                raise DurationOverflowError(
                    "overflow when multiplying scalar by duration"
                )
            return result
        return NotImplemented

    def __truediv__(self, rhs: object) -> "Duration | float":
        if isinstance(rhs, Duration):
            return self.div_duration(rhs)
        if isinstance(rhs, float):
            return self.div_f64(rhs)
        if is_int(rhs):
            result = self.checked_div(rhs)  # type: ignore[arg-type]
            if result is None:
                raise DurationDivisionByZeroError(
                    "divide by zero error when dividing duration by scalar"
                )
            return result
        return NotImplemented

    @override
    def __str__(self) -> str:
        """Human-friendly rendering with an adaptive unit, e.g. ``1.5ms``."""
        return format_duration(self)

    @override
    def __format__(self, format_spec: str) -> str:
        return format_with_spec(self, format_spec)


Duration.ZERO = Duration()
Duration.MAX = Duration(secs=U64_MAX, nanos=NANOS_PER_SEC - 1)
