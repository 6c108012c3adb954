"""Tests for Duration construction, accessors and ordering."""

import pytest

from nanospan import Duration, DurationOverflowError
from nanospan.util import U32_MAX, U64_MAX


def test_new_keeps_canonical_input():
    d = Duration.new(5, 730_023_852)
    assert d.secs == 5
    assert d.nanos == 730_023_852


def test_new_carries_excess_nanos():
    """Nanos beyond one second roll into the seconds field."""
    d = Duration.new(1, 2_500_000_000)
    assert d == Duration(secs=3, nanos=500_000_000)


def test_new_accepts_largest_u32_nanos():
    d = Duration.new(0, U32_MAX)
    assert d.as_secs() == 4
    assert d.subsec_nanos() == 294_967_295
    assert d.as_nanos() == U32_MAX


def test_new_overflows_when_carry_exceeds_seconds_range():
    with pytest.raises(DurationOverflowError, match="overflow in Duration.new"):
        Duration.new(U64_MAX, 1_000_000_000)


def test_new_without_carry_at_max_seconds():
    d = Duration.new(U64_MAX, 999_999_999)
    assert d == Duration.MAX


@pytest.mark.parametrize(
    "secs, nanos",
    [(-1, 0), (0, -1), (U64_MAX + 1, 0), (0, U32_MAX + 1)],
)
def test_new_rejects_out_of_range_fields(secs: int, nanos: int):
    with pytest.raises(ValueError):
        Duration.new(secs, nanos)


@pytest.mark.parametrize("value", [1.5, "1", None, True])
def test_new_rejects_non_int(value: object):
    with pytest.raises(TypeError):
        Duration.new(value, 0)  # type: ignore[arg-type]


def test_direct_construction_requires_canonical_nanos():
    with pytest.raises(ValueError, match="Duration.new"):
        Duration(secs=0, nanos=1_000_000_000)


def test_default_is_zero():
    assert Duration() == Duration.ZERO
    assert Duration().is_zero()
    assert not Duration()
    assert Duration.from_nanos(1)


def test_from_secs():
    assert Duration.from_secs(7) == Duration(secs=7, nanos=0)


def test_from_millis():
    d = Duration.from_millis(2569)
    assert d.as_secs() == 2
    assert d.subsec_nanos() == 569_000_000


def test_from_micros():
    d = Duration.from_micros(1_000_002)
    assert d.as_secs() == 1
    assert d.subsec_nanos() == 2000


def test_from_nanos():
    d = Duration.from_nanos(1_000_000_123)
    assert d.as_secs() == 1
    assert d.subsec_nanos() == 123


def test_from_constructors_at_u64_max():
    """Coarse units bound the remainder, so the largest input never overflows."""
    assert Duration.from_millis(U64_MAX).as_millis() == U64_MAX
    assert Duration.from_micros(U64_MAX).as_micros() == U64_MAX
    assert Duration.from_nanos(U64_MAX).as_nanos() == U64_MAX


def test_from_constructors_reject_negative():
    with pytest.raises(ValueError, match="non-negative"):
        Duration.from_millis(-5)


def test_subsec_accessors_are_fractional_only():
    d = Duration.new(5, 730_023_852)
    assert d.subsec_millis() == 730
    assert d.subsec_micros() == 730_023
    assert d.subsec_nanos() == 730_023_852


def test_total_accessors():
    d = Duration.new(5, 730_023_852)
    assert d.as_secs() == 5
    assert d.as_millis() == 5730
    assert d.as_micros() == 5_730_023
    assert d.as_nanos() == 5_730_023_852


def test_total_accessors_do_not_overflow_at_max():
    assert Duration.MAX.as_nanos() == U64_MAX * 1_000_000_000 + 999_999_999
    assert Duration.MAX.as_millis() == U64_MAX * 1000 + 999


def test_accessors_reconstruct_original_total():
    secs, nanos = 123_456, 3_999_999_999
    d = Duration.new(secs, nanos)
    assert d.subsec_nanos() < 1_000_000_000
    assert d.as_secs() * 1_000_000_000 + d.subsec_nanos() == secs * 1_000_000_000 + nanos


@pytest.mark.parametrize(
    "d",
    [
        Duration.ZERO,
        Duration.new(5, 730_023_852),
        Duration.from_millis(2569),
        Duration.new(U64_MAX // 1_000_000_000, 0),
    ],
)
def test_from_nanos_round_trip(d: Duration):
    assert Duration.from_nanos(d.as_nanos()) == d


def test_as_secs_f64():
    assert Duration.from_millis(2500).as_secs_f64() == 2.5


def test_ordering_is_structural():
    assert Duration.new(1, 0) > Duration.new(0, 999_999_999)
    assert Duration.new(1, 1) > Duration.new(1, 0)
    assert sorted([Duration.from_secs(3), Duration.from_millis(1), Duration.ZERO]) == [
        Duration.ZERO,
        Duration.from_millis(1),
        Duration.from_secs(3),
    ]


def test_equal_values_hash_equal():
    assert hash(Duration.from_millis(1500)) == hash(Duration.new(1, 500_000_000))
    assert len({Duration.from_secs(1), Duration.from_millis(1000)}) == 1


def test_durations_are_immutable():
    d = Duration.from_secs(1)
    with pytest.raises(AttributeError):
        d.secs = 2  # type: ignore[misc]


def test_compound_assignment_rebinds():
    d = Duration.from_secs(1)
    original = d
    d += Duration.from_secs(1)
    assert d == Duration.from_secs(2)
    assert original == Duration.from_secs(1)
