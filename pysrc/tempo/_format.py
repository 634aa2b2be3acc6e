"""Interpreter for the (day.js-like) format directive language.

A format string is scanned into tokens: directives like ``YYYY`` or ``h``,
bracketed literals like ``[at]``, and any other single character,
which is also a literal.

When formatting, each directive is replaced by the corresponding field.
When parsing, each directive consumes part of the input and emits a typed
date part. The parts are then resolved into date, time, and offset fields.
"""

from __future__ import annotations

import enum
import re
from typing import Callable, NamedTuple, Optional

from ._common import (
    MONTH_NAMES,
    WEEKDAY_NAMES,
    MissingComponent,
    Nanos,
    OutOfBounds,
    UnknownDirective,
    parse_err,
)
from ._math import weekday_code

__all__ = [
    "ISO8601_DATE",
    "ISO8601_TIME",
    "ISO8601_TIME_MILLI",
    "ISO8601_DATETIME",
    "HTTP",
    "EMAIL",
    "READABLE",
]

ISO8601_DATE = "YYYY-MM-DD"
ISO8601_TIME = "HH:mm:ss"
ISO8601_TIME_MILLI = "HH:mm:ss.SSS"
ISO8601_DATETIME = "YYYY-MM-DDTHH:mm:ssZ"
HTTP = "ddd, DD MMM YYYY HH:mm:ss [GMT]"
EMAIL = "ddd, DD MMM YYYY HH:mm:ss ZZ"
READABLE = "ddd, MMM D, YYYY h:mm A"

# Repeated characters are matched greedily, so longer directives always
# win over their prefixes (`YYYY` over `YY`, `SSSSS` over `SSS`).
_scan = re.compile(
    r"\[([^\]]*)\]|Y{1,4}|M{1,4}|D{1,2}|d{1,4}|H{1,2}|h{1,2}|m{1,2}|s{1,2}"
    r"|S{3,5}|Z{1,2}|z|A|a|.",
    re.DOTALL,
).finditer

# Runs matched by the scanner which aren't actual directives
_UNKNOWN_DIRECTIVES = frozenset(["Y", "YYY"])


class Token(NamedTuple):
    text: str
    is_directive: bool


def tokenize(fmt: str) -> list[Token]:
    tokens = []
    for match in _scan(fmt):
        if (literal := match.group(1)) is not None:
            tokens.append(Token(literal, False))
        else:
            text = match.group()
            tokens.append(
                Token(
                    text,
                    text in _FORMATTERS or text in _UNKNOWN_DIRECTIVES,
                )
            )
    return tokens


# --------------------------------------------------------------------------
# Formatting
# --------------------------------------------------------------------------


class Fields:
    """The fields available for formatting. Accessing an absent
    component raises :class:`MissingComponent`"""

    __slots__ = ("_date", "_time", "_offset")

    def __init__(
        self,
        date: Optional[tuple[int, int, int]],
        time: Optional[tuple[int, int, int, Nanos]],
        offset: Optional[int],
    ) -> None:
        self._date = date
        self._time = time
        self._offset = offset

    @property
    def date(self) -> tuple[int, int, int]:
        if self._date is None:
            raise MissingComponent("Format requires a date")
        return self._date

    @property
    def time(self) -> tuple[int, int, int, Nanos]:
        if self._time is None:
            raise MissingComponent("Format requires a time")
        return self._time

    @property
    def offset(self) -> int:
        if self._offset is None:
            raise MissingComponent("Format requires an offset")
        return self._offset

    def weekday(self) -> int:
        return weekday_code(*self.date)

    def twelve_hour(self) -> int:
        return self.time[0] % 12 or 12


def _format_offset(minutes: int, sep: str, short: bool) -> str:
    sign = "-" if minutes < 0 else "+"
    hrs, mins = divmod(abs(minutes), 60)
    if short and not mins:
        return f"{sign}{hrs:02}"
    return f"{sign}{hrs:02}{sep}{mins:02}"


_FORMATTERS: dict[str, Callable[[Fields], str]] = {
    "YYYY": lambda f: f"{f.date[0]:04}",
    "YY": lambda f: f"{f.date[0] % 100:02}",
    "M": lambda f: str(f.date[1]),
    "MM": lambda f: f"{f.date[1]:02}",
    "MMM": lambda f: MONTH_NAMES[f.date[1] - 1][:3],
    "MMMM": lambda f: MONTH_NAMES[f.date[1] - 1],
    "D": lambda f: str(f.date[2]),
    "DD": lambda f: f"{f.date[2]:02}",
    "d": lambda f: str(f.weekday()),
    "dd": lambda f: WEEKDAY_NAMES[f.weekday()][:2],
    "ddd": lambda f: WEEKDAY_NAMES[f.weekday()][:3],
    "dddd": lambda f: WEEKDAY_NAMES[f.weekday()],
    "H": lambda f: str(f.time[0]),
    "HH": lambda f: f"{f.time[0]:02}",
    "h": lambda f: str(f.twelve_hour()),
    "hh": lambda f: f"{f.twelve_hour():02}",
    "m": lambda f: str(f.time[1]),
    "mm": lambda f: f"{f.time[1]:02}",
    "s": lambda f: str(f.time[2]),
    "ss": lambda f: f"{f.time[2]:02}",
    "SSS": lambda f: f"{f.time[3] // 1_000_000:03}",
    "SSSS": lambda f: f"{f.time[3] // 1_000:06}",
    "SSSSS": lambda f: f"{f.time[3]:09}",
    "Z": lambda f: _format_offset(f.offset, ":", short=False),
    "ZZ": lambda f: _format_offset(f.offset, "", short=False),
    "z": lambda f: _format_offset(f.offset, ":", short=True),
    "A": lambda f: "AM" if f.time[0] < 12 else "PM",
    "a": lambda f: "am" if f.time[0] < 12 else "pm",
}


def format_fields(fmt: str, fields: Fields) -> str:
    # Unknown directives are simply passed through
    return "".join(
        _FORMATTERS[text](fields)
        if is_directive and text in _FORMATTERS
        else text
        for text, is_directive in tokenize(fmt)
    )


# --------------------------------------------------------------------------
# Parsing
# --------------------------------------------------------------------------


class Part(enum.Enum):
    YEAR = "year"
    MONTH = "month"
    DAY = "day"
    HOUR = "hour"
    TWELVE_HOUR = "twelve_hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    NANOSECOND = "nanosecond"
    OFFSET_STR = "offset_str"
    AM_PERIOD = "am_period"
    PM_PERIOD = "pm_period"
    PASSTHROUGH = "passthrough"


DatePart = tuple[Part, object]

_digits_1_2 = re.compile(r"[0-9]{1,2}", re.ASCII).match
_digits_2 = re.compile(r"[0-9]{2}", re.ASCII).match
_digits_3 = re.compile(r"[0-9]{3}", re.ASCII).match
_digits_4 = re.compile(r"[0-9]{4}", re.ASCII).match
_digits_6 = re.compile(r"[0-9]{6}", re.ASCII).match
_digits_9 = re.compile(r"[0-9]{9}", re.ASCII).match
_weekday_digit = re.compile(r"[0-6]", re.ASCII).match

# Longest first, so a short pattern never matches the prefix of a longer one
_OFFSET_PATTERNS = [
    re.compile(r"[+-][0-9]{2}:[0-9]{2}", re.ASCII).match,
    re.compile(r"[+-][0-9]{4}", re.ASCII).match,
    re.compile(r"[+-][0-9]{2}", re.ASCII).match,
    re.compile(r"[Zz]", re.ASCII).match,
]

_Consumer = Callable[[str, int], Optional[tuple[DatePart, int]]]


def _number(
    match: Callable[[str, int], Optional[re.Match[str]]], part: Part
) -> _Consumer:
    def consume(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
        if (m := match(s, pos)) is None:
            return None
        return (part, int(m.group())), m.end()

    return consume


def _name(
    names: list[str], part: Part, offset: int = 0
) -> _Consumer:
    lowered = [n.lower() for n in names]

    def consume(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
        for i, name in enumerate(lowered):
            if s[pos : pos + len(name)].lower() == name:
                value = i + offset if part is not Part.PASSTHROUGH else name
                return (part, value), pos + len(name)
        return None

    return consume


def _two_digit_year(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
    if (m := _digits_2(s, pos)) is None:
        return None
    # Marked as negative. The century is resolved later.
    return (Part.YEAR, -1 - int(m.group())), m.end()


def _offset(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
    for match in _OFFSET_PATTERNS:
        if (m := match(s, pos)) is not None:
            return (Part.OFFSET_STR, m.group()), m.end()
    return None


def _meridiem(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
    period = s[pos : pos + 2].upper()
    if period == "AM":
        return (Part.AM_PERIOD, None), pos + 2
    elif period == "PM":
        return (Part.PM_PERIOD, None), pos + 2
    return None


def _weekday_number(s: str, pos: int) -> Optional[tuple[DatePart, int]]:
    if (m := _weekday_digit(s, pos)) is None:
        return None
    return (Part.PASSTHROUGH, m.group()), m.end()


_PARSERS: dict[str, _Consumer] = {
    "YYYY": _number(_digits_4, Part.YEAR),
    "YY": _two_digit_year,
    "M": _number(_digits_1_2, Part.MONTH),
    "MM": _number(_digits_2, Part.MONTH),
    "MMM": _name([n[:3] for n in MONTH_NAMES], Part.MONTH, offset=1),
    "MMMM": _name(MONTH_NAMES, Part.MONTH, offset=1),
    "D": _number(_digits_1_2, Part.DAY),
    "DD": _number(_digits_2, Part.DAY),
    "d": _weekday_number,
    "dd": _name([n[:2] for n in WEEKDAY_NAMES], Part.PASSTHROUGH),
    "ddd": _name([n[:3] for n in WEEKDAY_NAMES], Part.PASSTHROUGH),
    "dddd": _name(WEEKDAY_NAMES, Part.PASSTHROUGH),
    "H": _number(_digits_1_2, Part.HOUR),
    "HH": _number(_digits_2, Part.HOUR),
    "h": _number(_digits_1_2, Part.TWELVE_HOUR),
    "hh": _number(_digits_2, Part.TWELVE_HOUR),
    "m": _number(_digits_1_2, Part.MINUTE),
    "mm": _number(_digits_2, Part.MINUTE),
    "s": _number(_digits_1_2, Part.SECOND),
    "ss": _number(_digits_2, Part.SECOND),
    "SSS": _number(_digits_3, Part.MILLISECOND),
    "SSSS": _number(_digits_6, Part.MICROSECOND),
    "SSSSS": _number(_digits_9, Part.NANOSECOND),
    "Z": _offset,
    "ZZ": _offset,
    "z": _offset,
    "A": _meridiem,
    "a": _meridiem,
}


def parse_parts(s: str, fmt: str) -> list[DatePart]:
    """Consume the input according to the format, returning the date parts"""
    pos = 0
    parts: list[DatePart] = []
    for text, is_directive in tokenize(fmt):
        if not is_directive:
            if not s.startswith(text, pos):
                parse_err(s)
            parts.append((Part.PASSTHROUGH, text))
            pos += len(text)
            continue

        try:
            consume = _PARSERS[text]
        except KeyError:
            raise UnknownDirective(
                f"Unable to parse directive {text!r} in format {fmt!r}"
            ) from None

        if (result := consume(s, pos)) is None:
            parse_err(s)
        part, pos = result
        parts.append(part)

    if pos != len(s):
        parse_err(s)
    return parts


class Resolved(NamedTuple):
    date: Optional[tuple[int, int, int]]
    time: Optional[tuple[int, int, int, Nanos]]
    # number of fractional second digits parsed: 0, 3, 6, or 9
    digits: int
    offset: Optional[str]


def resolve_two_digit_year(yy: int, current_year: int) -> int:
    """Two-digit years after the current one are in the previous century"""
    century = current_year - current_year % 100
    return century + yy if yy <= current_year % 100 else century - 100 + yy


def resolve(parts: list[DatePart], current_year: Callable[[], int]) -> Resolved:
    found: dict[Part, object] = {}
    for part, value in parts:
        if part is not Part.PASSTHROUGH:
            found[part] = value

    year = found.get(Part.YEAR)
    month = found.get(Part.MONTH)
    day = found.get(Part.DAY)
    date = None
    if year is not None and month is not None and day is not None:
        assert isinstance(year, int)
        if year < 0:
            year = resolve_two_digit_year(-1 - year, current_year())
        date = (year, month, day)
    elif year is not None or month is not None or day is not None:
        raise MissingComponent("Incomplete date: need year, month and day")

    hour = found.get(Part.HOUR)
    if hour is None and (twelve := found.get(Part.TWELVE_HOUR)) is not None:
        assert isinstance(twelve, int)
        if not 1 <= twelve <= 12:
            raise OutOfBounds(f"12-hour clock hour out of range: {twelve}")
        if Part.PM_PERIOD in found:
            hour = twelve % 12 + 12
        elif Part.AM_PERIOD in found:
            hour = twelve % 12
        else:
            hour = twelve

    nanos, digits = 0, 0
    for part, unit, n in (
        (Part.NANOSECOND, 1, 9),
        (Part.MICROSECOND, 1_000, 6),
        (Part.MILLISECOND, 1_000_000, 3),
    ):
        if (value := found.get(part)) is not None:
            assert isinstance(value, int)
            nanos, digits = value * unit, n
            break

    time = None
    if hour is not None:
        time = (
            hour,
            found.get(Part.MINUTE, 0),
            found.get(Part.SECOND, 0),
            nanos,
        )
    elif Part.MINUTE in found or Part.SECOND in found or digits:
        raise MissingComponent("Incomplete time: need an hour")

    offset = found.get(Part.OFFSET_STR)
    assert offset is None or isinstance(offset, str)
    return Resolved(date, time, digits, offset)  # type: ignore[arg-type]
