"""Reductions over sequences of durations."""

from collections.abc import Iterable

from nanospan.checked import checked_add
from nanospan.duration import Duration
from nanospan.errors import DurationOverflowError
from nanospan.util import NANOS_PER_SEC, U64_MAX

# Width of the running nanosecond counter
_NANOS_ACCUMULATOR_MAX = U64_MAX


def total_duration(durations: Iterable[Duration]) -> Duration:
    """Sum every duration in ``durations``.

    Nanoseconds accumulate in their own unsigned 64-bit counter and are only
    carried into seconds when that counter would overflow, and once at the
    end. Works with any finite iterable, including generators.

    Raises:
        DurationOverflowError: If the total exceeds Duration.MAX
    """
    total_secs = 0
    total_nanos = 0
    for entry in durations:
        secs = checked_add(total_secs, entry.secs)
        if secs is None:
            raise DurationOverflowError("overflow in sum over durations")
        total_secs = secs

        nanos = checked_add(total_nanos, entry.nanos, _NANOS_ACCUMULATOR_MAX)
        if nanos is None:
            secs = checked_add(total_secs, total_nanos // NANOS_PER_SEC)
            if secs is None:
                raise DurationOverflowError("overflow in sum over durations")
            total_secs = secs
            nanos = total_nanos % NANOS_PER_SEC + entry.nanos
        total_nanos = nanos

    secs = checked_add(total_secs, total_nanos // NANOS_PER_SEC)
    if secs is None:
        raise DurationOverflowError("overflow in sum over durations")
    return Duration(secs=secs, nanos=total_nanos % NANOS_PER_SEC)
