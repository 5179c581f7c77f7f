from __future__ import annotations

import re

from hashup.errors import InvalidParametersError, MalformedHashError

_DIGITS = re.compile(r"[0-9]+")


def validate_range(name: str, value: int, min: int, max: int | None = None) -> None:
    if value < min or (max is not None and value > max):
        bounds = f"between {min} - {max}" if max is not None else f">= {min}"
        msg = f"{name} must be {bounds}, got {value}"
        raise InvalidParametersError(msg)


def is_power_of_two(value: int) -> bool:
    return value > 1 and value & (value - 1) == 0


def parse_int(value: str, field: str) -> int:
    """parse a numeric field of a hash string, rejecting signs and whitespace"""
    if not _DIGITS.fullmatch(value):
        msg = f"{field} field must be numeric, got {value!r}"
        raise MalformedHashError(msg)
    try:
        return int(value)
    except ValueError:
        # longer than sys.get_int_max_str_digits()
        msg = f"{field} field is too long"
        raise MalformedHashError(msg) from None
