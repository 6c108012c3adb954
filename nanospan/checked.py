"""Checked unsigned integer primitives.

Python integers never wrap, so the fixed-width behaviour of the duration
fields has to be enforced by hand. Each helper returns ``None`` where the
fixed-width operation would overflow or go below zero.
"""

from nanospan.util import U32_MAX, U64_MAX


def is_int(value: object) -> bool:
    """True for ints, excluding bool."""
    return isinstance(value, int) and not isinstance(value, bool)


def checked_add(a: int, b: int, limit: int = U64_MAX) -> int | None:
    result = a + b
    if result > limit:
        return None
    return result


def checked_sub(a: int, b: int) -> int | None:
    if b > a:
        return None
    return a - b


def checked_mul(a: int, b: int, limit: int = U64_MAX) -> int | None:
    result = a * b
    if result > limit:
        return None
    return result


def require_uint(value: object, name: str, limit: int = U64_MAX) -> int:
    """Validate that ``value`` is an int in ``0..=limit`` and return it.

    Raises:
        TypeError: If value is not an int (bool is rejected too)
        ValueError: If value is negative or above limit
    """
    if not is_int(value):
        raise TypeError(
            f"{name} must be an int.\n"
            f"Got {type(value).__name__!r}: {value!r}\n"
            f"Hint: Convert explicitly, e.g. int({name}), or use the float "
            f"methods (mul_f64/div_f64) for fractional scalars"
        )
    if value < 0:
        raise ValueError(
            f"{name} must be non-negative, got {value}\n"
            f"Durations cannot represent negative spans"
        )
    if value > limit:
        width = "32" if limit == U32_MAX else "64"
        raise ValueError(
            f"{name} must fit in an unsigned {width}-bit integer "
            f"(<= {limit}), got {value}"
        )
    return value


def require_float(value: object, name: str) -> float:
    """Validate that ``value`` is a float or int and return it as a float.

    Raises:
        TypeError: If value is any other type (bool and str included)
    """
    if isinstance(value, float) or is_int(value):
        return float(value)  # type: ignore[arg-type]
    raise TypeError(
        f"{name} must be a float or int.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )
