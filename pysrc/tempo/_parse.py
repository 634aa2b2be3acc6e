"""Parsing of the textual representations of dates, times and offsets.

These functions only check the *structure* of their input, raising
:class:`InvalidFormat`. Range checks are left to the constructors,
which raise :class:`OutOfBounds`.
"""

import re
from typing import Optional

from ._common import MissingComponent, Nanos, parse_err

# Tried in this order. The first delimiter splitting the string into
# exactly three parts wins, even if those parts turn out to be invalid.
_DATE_DELIMITERS = "-/._ "

_is_digits = re.compile(r"[0-9]+", re.ASCII).fullmatch
_match_serialized = re.compile(
    r"([0-9]{8})T([0-9]{6})\.([0-9]{9})((?:[Zz]|[+-][0-9]{2}(?::[0-9]{2})?)?)",
    re.ASCII,
).fullmatch


def date_from_str(s: str) -> tuple[int, int, int]:
    for sep in _DATE_DELIMITERS:
        parts = s.split(sep)
        if len(parts) == 3:
            year, month, day = parts
            break
    else:
        # fixed width fallback: YYYYMMDD
        if len(s) != 8:
            parse_err(s)
        year, month, day = s[:4], s[4:6], s[6:]

    if not (
        len(year) == 4
        and 1 <= len(month) <= 2
        and 1 <= len(day) <= 2
        and _is_digits(year + month + day)
    ):
        parse_err(s)
    return int(year), int(month), int(day)


def _split_fraction(s: str) -> tuple[str, str]:
    for sep in ".,":
        if sep in s:
            main, _, frac = s.partition(sep)
            return main, frac
    return s, ""


def time_from_str(s: str) -> tuple[int, int, int, Nanos, int]:
    """Parse a time, returning the fields and the number of
    fractional digits present (0 if none)"""
    main, frac = _split_fraction(s)
    if ":" in main:
        parts = main.split(":")
        if not 2 <= len(parts) <= 3 or any(len(p) != 2 for p in parts):
            parse_err(s)
    elif len(main) in (4, 6):
        parts = [main[i : i + 2] for i in range(0, len(main), 2)]
    else:
        parse_err(s)

    if not _is_digits("".join(parts)):
        parse_err(s)

    hour, minute, *rest = map(int, parts)
    second = rest[0] if rest else 0
    if frac:
        # a fraction only makes sense after the seconds
        if not rest or len(frac) > 9 or not _is_digits(frac):
            parse_err(s)
        return hour, minute, second, int(frac.ljust(9, "0")), len(frac)
    elif main != s:  # a dangling separator
        parse_err(s)
    return hour, minute, second, 0, 0


def offset_from_str(s: str) -> int:
    """Parse an offset to its total (signed) minutes"""
    if s in ("Z", "z"):
        return 0
    if len(s) == 6 and s[3] == ":":  # ±HH:MM
        hours, minutes = s[1:3], s[4:]
    elif len(s) == 5:  # ±HHMM
        hours, minutes = s[1:3], s[3:]
    elif len(s) == 3:  # ±HH
        hours, minutes = s[1:], "00"
    else:
        parse_err(s)
    if s[0] not in "+-" or not _is_digits(hours + minutes):
        parse_err(s)
    total = int(hours) * 60 + int(minutes)
    return -total if s[0] == "-" else total


def split_datetime(s: str) -> tuple[str, str]:
    """Split a datetime string into its date and the remaining part"""
    for sep in "Tt":
        if sep in s:
            date, _, rest = s.partition(sep)
            return date, rest
    if len(s) > 10 and s[10] in " _":
        return s[:10], s[11:]
    elif len(s) > 8 and s[8] in " _":
        return s[:8], s[9:]

    # No time. Distinguish a lone (valid) date from garbage.
    date_from_str(s)
    raise MissingComponent(f"Missing time in {s!r}")


def split_offset(s: str, full: str) -> tuple[str, str]:
    """Split the time and offset parts of a string"""
    if s.endswith(("Z", "z")):
        return s[:-1], s[-1]
    for sign in "+-":
        if sign in s:
            time, _, offset = s.partition(sign)
            return time, sign + offset
    time_from_str(s)  # raises if the time itself is also garbage
    raise MissingComponent(f"Missing offset in {full!r}")


def from_serialized(
    s: str,
) -> tuple[tuple[int, int, int], tuple[int, int, int, Nanos], Optional[int]]:
    """Parse the compact form ``YYYYMMDDTHHMMSS.NNNNNNNNN[offset]``"""
    if (match := _match_serialized(s)) is None:
        parse_err(s)
    date_raw, time_raw, nanos_raw, offset_raw = match.groups()
    return (
        date_from_str(date_raw),
        (
            int(time_raw[:2]),
            int(time_raw[2:4]),
            int(time_raw[4:]),
            int(nanos_raw),
        ),
        offset_from_str(offset_raw) if offset_raw else None,
    )
