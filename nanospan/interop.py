"""Conversions between Duration and the standard time-span types.

``datetime.timedelta`` and ``dateutil.relativedelta.relativedelta`` both stop
at microsecond resolution, so converting a Duration to either truncates the
sub-microsecond nanoseconds.
"""

import logging
from datetime import timedelta

from dateutil.relativedelta import relativedelta

from nanospan.duration import Duration
from nanospan.errors import DurationOverflowError
from nanospan.util import MICROS_PER_SEC, NANOS_PER_MICRO

logger = logging.getLogger(__name__)


def _timedelta_to_duration(delta: timedelta) -> Duration:
    return Duration.new(
        delta.days * 86400 + delta.seconds, delta.microseconds * NANOS_PER_MICRO
    )


_MAX_TIMEDELTA = _timedelta_to_duration(timedelta.max)

# relativedelta fields that do not have a fixed length in seconds
_RELATIVE_CALENDAR_FIELDS = ("years", "months", "leapdays")
# Absolute fields replace a component of a datetime instead of adding to it
_ABSOLUTE_FIELDS = (
    "year",
    "month",
    "day",
    "weekday",
    "hour",
    "minute",
    "second",
    "microsecond",
)


def _truncated_micros(duration: Duration, target: str) -> int:
    dropped = duration.nanos % NANOS_PER_MICRO
    if dropped:
        logger.debug(
            "Truncating %dns converting %s to %s", dropped, duration, target
        )
    return duration.as_micros()


def to_timedelta(duration: Duration) -> timedelta:
    """Convert to a ``timedelta``, truncating to whole microseconds.

    Raises:
        DurationOverflowError: If the duration exceeds ``timedelta.max``
    """
    if duration > _MAX_TIMEDELTA:
        raise DurationOverflowError(
            f"Duration {duration} exceeds timedelta.max ({timedelta.max})"
        )
    return timedelta(microseconds=_truncated_micros(duration, "timedelta"))


def from_timedelta(delta: timedelta) -> Duration:
    """Convert a non-negative ``timedelta`` exactly.

    Raises:
        ValueError: If delta is negative
    """
    if delta < timedelta(0):
        raise ValueError(
            f"Cannot convert negative timedelta to Duration: {delta!r}\n"
            f"Hint: Use abs(delta) if only the magnitude matters"
        )
    return _timedelta_to_duration(delta)


def to_relativedelta(duration: Duration) -> relativedelta:
    """Convert to a ``relativedelta`` normalized into days/hours/minutes.

    Sub-microsecond nanoseconds are truncated.
    """
    micros = _truncated_micros(duration, "relativedelta")
    secs, micros = divmod(micros, MICROS_PER_SEC)
    return relativedelta(seconds=secs, microseconds=micros)


def from_relativedelta(delta: relativedelta) -> Duration:
    """Convert a fixed-length ``relativedelta`` exactly.

    Only weeks, days, hours, minutes, seconds and microseconds have a fixed
    length. Years, months and leap days depend on the date they are applied
    to, and absolute fields (``year=``, ``hour=`` ...) are not spans at all.

    Raises:
        ValueError: If delta uses calendar-relative or absolute fields, or
            its total is negative
    """
    for name in _RELATIVE_CALENDAR_FIELDS:
        if getattr(delta, name):
            raise ValueError(
                f"Cannot convert relativedelta with {name}={getattr(delta, name)} "
                f"to Duration: {name} has no fixed length\n"
                f"Hint: Apply it to a datetime first and subtract, or express "
                f"the span in days"
            )
    for name in _ABSOLUTE_FIELDS:
        if getattr(delta, name) is not None:
            raise ValueError(
                f"Cannot convert relativedelta with absolute field "
                f"{name}={getattr(delta, name)!r} to Duration"
            )

    normalized = delta.normalized()
    total_secs = (
        (normalized.days * 24 + normalized.hours) * 60 + normalized.minutes
    ) * 60 + normalized.seconds
    micros = int(total_secs * MICROS_PER_SEC + normalized.microseconds)
    if micros < 0:
        raise ValueError(
            f"Cannot convert negative relativedelta to Duration: {delta!r}"
        )
    return Duration.from_micros(micros)
