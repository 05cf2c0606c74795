"""
ABOUTME: Parsers that turn raw environment variable text into typed values
ABOUTME: Covers boolean literals, base-10 integers, floats, and compound durations like "1h30m"
"""

import re
from datetime import timedelta

from .exceptions import ParseError

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})

_INT_RE = re.compile(r"[+-]?[0-9]+")

# Nanoseconds per duration unit
DURATION_UNITS = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # U+00B5 micro sign
    "μs": 1_000,  # U+03BC greek small letter mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

MAX_DURATION_NS = 2**63 - 1

INT_MIN = -(2**63)
INT_MAX = 2**63 - 1

# More digits than this cannot fit in a signed 64-bit value
_MAX_DIGITS = 19


def parse_bool(value: str) -> bool:
    """Parse a boolean literal such as "true", "F" or "1"."""
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ParseError("bool", value)


def parse_int(value: str) -> int:
    """
    Parse a base-10 signed integer in the signed 64-bit range.

    Whitespace, underscores and decimals are rejected. Values outside the range raise a
    ParseError with reason "out of range".
    """
    if not _INT_RE.fullmatch(value):
        raise ParseError("int", value)

    digits = value.lstrip("+-").lstrip("0") or "0"
    if len(digits) > _MAX_DIGITS:
        raise ParseError("int", value, reason="out of range")
    result = int(digits, 10)
    if value.startswith("-"):
        result = -result
    if not INT_MIN <= result <= INT_MAX:
        raise ParseError("int", value, reason="out of range")
    return result


def parse_float(value: str) -> float:
    """Parse a decimal floating point number."""
    if not value or value != value.strip() or "_" in value:
        raise ParseError("float", value)
    try:
        return float(value)
    except ValueError as e:
        raise ParseError("float", value) from e


def _leading_digits(s: str) -> tuple[str, str]:
    i = 0
    while i < len(s) and "0" <= s[i] <= "9":
        i += 1
    return s[:i], s[i:]


def parse_duration_ns(value: str) -> int:
    """
    Parse a compound duration string into a signed number of nanoseconds.

    A duration is an optional sign followed by one or more decimal numbers,
    each with an optional fraction and a mandatory unit suffix, e.g. "300ms",
    "-1.5h" or "2h45m". Valid units are "ns", "us" (or "µs"), "ms", "s", "m"
    and "h". The bare string "0" is also accepted.

    Parameters:
        value (str): Raw duration text.

    Returns:
        int: Total nanoseconds, negative if the string carried a minus sign.

    Raises:
        ParseError: If the text is not a valid duration or exceeds the representable range.
    """
    s = value
    negative = False
    if s and s[0] in "+-":
        negative = s[0] == "-"
        s = s[1:]
    if s == "0":
        return 0
    if not s:
        raise ParseError("duration", value)

    total = 0
    while s:
        if not (s[0] == "." or "0" <= s[0] <= "9"):
            raise ParseError("duration", value)

        whole, s = _leading_digits(s)
        fraction = ""
        if s.startswith("."):
            fraction, s = _leading_digits(s[1:])
            if not whole and not fraction:
                raise ParseError("duration", value)
        elif not whole:
            raise ParseError("duration", value)

        i = 0
        while i < len(s) and s[i] != "." and not ("0" <= s[i] <= "9"):
            i += 1
        unit, s = s[:i], s[i:]
        if not unit:
            raise ParseError("duration", value, reason="missing unit")
        if unit not in DURATION_UNITS:
            raise ParseError("duration", value, reason=f'unknown unit "{unit}"')

        whole = whole.lstrip("0") or "0"
        if len(whole) > _MAX_DIGITS:
            raise ParseError("duration", value, reason="out of range")
        # fraction digits past nanosecond precision are dropped
        fraction = fraction[:_MAX_DIGITS]

        scale = DURATION_UNITS[unit]
        total += int(whole) * scale
        if fraction:
            total += int(fraction) * scale // 10 ** len(fraction)
        if total > MAX_DURATION_NS + (1 if negative else 0):
            raise ParseError("duration", value, reason="out of range")

    return -total if negative else total


def parse_duration(value: str) -> timedelta:
    """Parse a compound duration string into a timedelta, rounded to the nearest microsecond."""
    ns = parse_duration_ns(value)
    micros = (abs(ns) + 500) // 1000
    return timedelta(microseconds=-micros if ns < 0 else micros)
