"""Human-readable rendering of durations.

The unit adapts to the magnitude of the value: seconds when there is at
least one whole second, otherwise milliseconds, microseconds or
nanoseconds. The fractional part is expanded digit by digit with integer
arithmetic and rounded half up, so no float formatting error can leak into
the output.

Precision counts digits of the chosen unit's remainder. For a value
rendered in ``ms``, ``precision=2`` keeps two sub-millisecond digits.
"""

import re
from typing import TYPE_CHECKING

from nanospan.util import NANOS_PER_MICRO, NANOS_PER_MILLI

if TYPE_CHECKING:
    from nanospan.duration import Duration

# Most fractional digits any unit can need (seconds, down to nanoseconds)
_MAX_DIGITS = 9

_SPEC_RE = re.compile(r"(?P<sign>\+)?(?:\.(?P<precision>\d+))?")


def _fmt_decimal(
    integer_part: int,
    fractional_part: int,
    divisor: int,
    precision: int | None,
) -> str:
    """Render ``integer_part.fractional_part`` with round-half-up.

    ``divisor`` is the place value of the first fractional digit, e.g.
    100_000_000 when ``fractional_part`` is a nanosecond count below one
    second.
    """
    digits = [0] * _MAX_DIGITS
    limit = _MAX_DIGITS if precision is None else min(precision, _MAX_DIGITS)
    pos = 0
    while fractional_part > 0 and pos < limit:
        digits[pos] = fractional_part // divisor
        fractional_part %= divisor
        divisor //= 10
        pos += 1

    # Round on the first digit that did not fit
    if fractional_part > 0 and fractional_part >= divisor * 5:
        carry = True
        rev_pos = pos
        while carry and rev_pos > 0:
            rev_pos -= 1
            if digits[rev_pos] < 9:
                digits[rev_pos] += 1
                carry = False
            else:
                digits[rev_pos] = 0
        if carry:
            integer_part += 1

    end = pos if precision is None else min(precision, _MAX_DIGITS)
    if end == 0:
        return str(integer_part)

    width = pos if precision is None else precision
    fraction = "".join(str(digit) for digit in digits[:end])
    return f"{integer_part}.{fraction:0<{width}}"


def format_duration(
    duration: "Duration",
    precision: int | None = None,
    sign_plus: bool = False,
) -> str:
    """Render a duration with an adaptive unit suffix.

    Args:
        duration: Value to render
        precision: Number of fractional digits in the chosen unit. None keeps
            every significant digit and drops trailing zeros; larger values
            are zero-padded.
        sign_plus: Prefix the output with ``+``

    Returns:
        String such as ``"5.73s"``, ``"1.234µs"`` or ``"+0ns"``

    Examples:
        >>> from nanospan import Duration
        >>> format_duration(Duration.new(5, 730_023_852), precision=2)
        '5.73s'
        >>> format_duration(Duration.new(0, 1_500_000))
        '1.5ms'
    """
    if precision is not None and precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    secs, nanos = duration.secs, duration.nanos
    if secs > 0:
        body = _fmt_decimal(secs, nanos, 100_000_000, precision) + "s"
    elif nanos >= NANOS_PER_MILLI:
        body = (
            _fmt_decimal(
                nanos // NANOS_PER_MILLI, nanos % NANOS_PER_MILLI, 100_000, precision
            )
            + "ms"
        )
    elif nanos >= NANOS_PER_MICRO:
        body = (
            _fmt_decimal(
                nanos // NANOS_PER_MICRO, nanos % NANOS_PER_MICRO, 100, precision
            )
            + "µs"
        )
    else:
        body = _fmt_decimal(nanos, 0, 1, precision) + "ns"

    return f"+{body}" if sign_plus else body


def format_with_spec(duration: "Duration", format_spec: str) -> str:
    """Render a duration from a ``format()`` spec of the form ``[+][.N]``.

    Raises:
        ValueError: If the spec has any other shape
    """
    match = _SPEC_RE.fullmatch(format_spec)
    if match is None:
        raise ValueError(
            f"Invalid format specifier {format_spec!r} for Duration\n"
            f"Expected: [+][.precision]\n"
            f"Examples:\n"
            f"  f'{{d}}'      # adaptive unit, all significant digits\n"
            f"  f'{{d:.2}}'   # two fractional digits\n"
            f"  f'{{d:+.3}}'  # leading '+', three fractional digits"
        )
    precision = match.group("precision")
    return format_duration(
        duration,
        precision=None if precision is None else int(precision),
        sign_plus=match.group("sign") is not None,
    )
