"""Utility constants for nanospan.

Unit factors describe how many of the smaller unit fit in the larger one.
Range limits mirror the fixed-width fields of a Duration: seconds are an
unsigned 64-bit count, the raw nanosecond argument to ``Duration.new`` and
integer scalars are unsigned 32-bit.
"""

from typing import Final

# Unit factors
NANOS_PER_SEC: Final = 1_000_000_000
NANOS_PER_MILLI: Final = 1_000_000
NANOS_PER_MICRO: Final = 1_000
MILLIS_PER_SEC: Final = 1_000
MICROS_PER_SEC: Final = 1_000_000

# Field ranges
U32_MAX: Final = 2**32 - 1
U64_MAX: Final = 2**64 - 1

# Largest nanosecond count the float path accepts, as a float
MAX_NANOS_F64: Final = float(U64_MAX * NANOS_PER_SEC)
