# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - All value classes live in this one module. They refer to each other
#   constantly, and splitting them up would only buy circular imports.
#   Algorithms on plain integers live in `_math`, string handling in
#   `_parse` and `_format`.
# - Each class stores plain integer fields. Nothing here wraps the
#   standard library's datetime types, since those can't represent
#   24:00, leap seconds, or nanoseconds.
from __future__ import annotations

__version__ = "0.1.0"

import enum
import re
from abc import ABC, abstractmethod
from datetime import (
    date as _date,
    datetime as _datetime,
    time as _time,
    timedelta as _timedelta,
    timezone as _timezone,
)
from struct import pack, unpack
from typing import (
    TYPE_CHECKING,
    Any,
    ClassVar,
    Iterator,
    Optional,
    Sequence,
    TypeVar,
    no_type_check,
    overload,
)

from . import _format, _math, _parse
from ._clock import get_clock
from ._common import (
    MAX_OFFSET_MINUTES,
    MAX_YEAR,
    MIN_OFFSET_MINUTES,
    MIN_YEAR,
    MONTH_NAMES,
    NS_PER_DAY,
    NS_PER_HOUR,
    NS_PER_IMPRECISE_MONTH,
    NS_PER_IMPRECISE_YEAR,
    NS_PER_MICRO,
    NS_PER_MILLI,
    NS_PER_MINUTE,
    NS_PER_SECOND,
    NS_PER_WEEK,
    WEEKDAY_NAMES,
    InvalidFormat,
    InvalidLiteral,
    MissingComponent,
    OutOfBounds,
    UnknownDirective,
    parse_err,
)
from ._tz import TimeZoneProvider, get_tz_provider

__all__ = [
    # Calendar
    "Month",
    "Weekday",
    "MonthYear",
    "is_leap_year",
    "days_in_month",
    "days_in_year",
    # Date and time
    "Date",
    "Time",
    "Precision",
    "Offset",
    "NaiveDateTime",
    "DateTime",
    "Instant",
    # Spans of time
    "Duration",
    "Unit",
    "NaivePeriod",
    "Period",
    "years",
    "months",
    "weeks",
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
    # Exceptions
    "InvalidFormat",
    "OutOfBounds",
    "UnknownDirective",
    "MissingComponent",
    "InvalidLiteral",
]

_object_new = object.__new__
_T = TypeVar("_T")


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


if TYPE_CHECKING:
    from typing import final
else:

    def final(cls):

        def init_subclass_not_allowed(cls, **kwargs):  # pragma: no cover
            raise TypeError("Subclassing not allowed")

        cls.__init_subclass__ = init_subclass_not_allowed
        return cls


class _OrderedBase(_ImmutableBase):
    """Equality, hashing, and ordering by a single sort key.
    Only instances of the exact same class are comparable."""

    __slots__ = ()

    def _key(self) -> Any:
        raise NotImplementedError()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() == other._key()  # type: ignore[attr-defined]

    def __hash__(self) -> int:
        return hash(self._key())

    def __lt__(self: _T, other: _T) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() < other._key()  # type: ignore[attr-defined]

    def __le__(self: _T, other: _T) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() <= other._key()  # type: ignore[attr-defined]

    def __gt__(self: _T, other: _T) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() > other._key()  # type: ignore[attr-defined]

    def __ge__(self: _T, other: _T) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key() >= other._key()  # type: ignore[attr-defined]

    def compare(self: _T, other: _T, /) -> int:
        """-1, 0, or 1 if this value is less than, equal to,
        or greater than the other"""
        if type(other) is not type(self):
            raise TypeError(
                f"Cannot compare {type(self).__name__} "
                f"with {type(other).__name__}"
            )
        a, b = self._key(), other._key()  # type: ignore[attr-defined]
        return (a > b) - (a < b)


class _TemporalOrder(_OrderedBase):
    """Named comparisons for points on the timeline"""

    __slots__ = ()

    def is_earlier(self: _T, other: _T, /) -> bool:
        return self < other  # type: ignore[operator]

    def is_earlier_or_equal(self: _T, other: _T, /) -> bool:
        return self <= other  # type: ignore[operator]

    def is_equal(self: _T, other: _T, /) -> bool:
        return self == other

    def is_later(self: _T, other: _T, /) -> bool:
        return self > other  # type: ignore[operator]

    def is_later_or_equal(self: _T, other: _T, /) -> bool:
        return self >= other  # type: ignore[operator]


# --------------------------------------------------------------------------
# Calendar primitives
# --------------------------------------------------------------------------


class Month(enum.IntEnum):
    """The months of the year; ``.value`` is the month number"""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12

    def days(self, year: int, /) -> int:
        """The number of days in this month in the given year

        Example
        -------
        >>> Month.FEBRUARY.days(2024)
        29
        """
        return _math.days_in_month(year, self.value)

    def next(self) -> Month:
        """The following month. December wraps around to January."""
        return Month(self.value % 12 + 1)

    def prev(self) -> Month:
        """The preceding month. January wraps around to December."""
        return Month((self.value - 2) % 12 + 1)

    @property
    def long_name(self) -> str:
        return MONTH_NAMES[self.value - 1]

    @property
    def short_name(self) -> str:
        return MONTH_NAMES[self.value - 1][:3]

    @classmethod
    def from_name(cls, s: str, /) -> Month:
        """Look up a month by its English long or short name,
        ignoring case"""
        lowered = s.lower()
        for i, name in enumerate(MONTH_NAMES, start=1):
            if lowered in (name.lower(), name[:3].lower()):
                return cls(i)
        parse_err(s)


class Weekday(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7

    @property
    def long_name(self) -> str:
        return WEEKDAY_NAMES[self.value % 7]

    @property
    def short_name(self) -> str:
        return WEEKDAY_NAMES[self.value % 7][:3]

    @property
    def min_name(self) -> str:
        return WEEKDAY_NAMES[self.value % 7][:2]


def is_leap_year(year: int, /) -> bool:
    """Whether the year has a February 29th

    Example
    -------
    >>> is_leap_year(2024)
    True
    >>> is_leap_year(1900)
    False
    """
    return _math.is_leap(year)


def days_in_month(month: int, year: int, /) -> int:
    """The number of days in the month of the given year"""
    if not 1 <= month <= 12:
        raise OutOfBounds(f"Month out of range: {month}")
    return _math.days_in_month(year, month)


def days_in_year(year: int, /) -> int:
    return _math.days_in_year(year)


def _check_date(year: int, month: int, day: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise OutOfBounds(f"Year out of range: {year}")
    if not 1 <= month <= 12:
        raise OutOfBounds(f"Month out of range: {month}")
    if not 1 <= day <= _math.days_in_month(year, month):
        raise OutOfBounds(f"Day out of range: {day}")


def _current_year() -> int:
    return DateTime.now_local().year


# --------------------------------------------------------------------------
# Date
# --------------------------------------------------------------------------


@final
class Date(_TemporalOrder):
    """A date in the proleptic Gregorian calendar, without a time component.

    Years are limited to 1000-9999. This catches the common mistake of
    passing a two-digit year.

    Example
    -------
    >>> d = Date(2024, 6, 21)
    Date(2024-06-21)
    >>> d.weekday()
    Weekday.FRIDAY
    """

    __slots__ = ("_year", "_month", "_day")

    MIN: ClassVar[Date]
    """The earliest possible date"""
    MAX: ClassVar[Date]
    """The latest possible date"""

    def __init__(self, year: int, month: int, day: int) -> None:
        _check_date(year, month, day)
        self._year = year
        self._month = Month(month)
        self._day = day

    @classmethod
    def literal(cls, s: str, /) -> Date:
        """Create a date from a string known to be valid.

        Unlike :meth:`parse_common_iso`, failure raises
        :class:`InvalidLiteral`, which isn't meant to be caught.
        """
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid date literal: {s!r}") from e

    @classmethod
    def today_local(cls) -> Date:
        """The current date in the system timezone"""
        return DateTime.now_local().date

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> Month:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    def month_year(self) -> MonthYear:
        """The year and month (without a day component)

        Example
        -------
        >>> Date(2021, 1, 2).month_year()
        MonthYear(2021-01)
        """
        return MonthYear._new_unchecked(self._year, self._month)

    def weekday(self) -> Weekday:
        """The day of the week.

        Warning
        -------
        This uses a closed-form formula which is only accurate
        for the years 1753 through 2299.

        Example
        -------
        >>> Date(2024, 6, 21).weekday()
        Weekday.FRIDAY
        """
        return Weekday(
            _math.weekday_code(self._year, self._month, self._day) or 7
        )

    def is_weekend(self) -> bool:
        return self.weekday() in (Weekday.SATURDAY, Weekday.SUNDAY)

    def first_of_month(self) -> Date:
        return Date._new_unchecked(self._year, self._month, 1)

    def last_of_month(self) -> Date:
        return Date._new_unchecked(
            self._year,
            self._month,
            _math.days_in_month(self._year, self._month),
        )

    def at(self, t: Time, /) -> NaiveDateTime:
        """Combine a date with a time to create a datetime

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d.at(Time(12, 30))
        NaiveDateTime(2021-01-02T12:30:00)

        Use :meth:`~NaiveDateTime.assume_offset` to make the result aware.
        """
        return NaiveDateTime(self, t)

    def replace(self, **kwargs: Any) -> Date:
        """Create a new instance with the given fields replaced

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d.replace(day=4)
        Date(2021-01-04)
        """
        if not kwargs.keys() <= {"year", "month", "day"}:
            raise TypeError(f"Invalid fields: {kwargs.keys()}")
        return Date(
            kwargs.get("year", self._year),
            kwargs.get("month", self._month),
            kwargs.get("day", self._day),
        )

    def to_unix_days(self) -> int:
        """The number of days since 1970-01-01

        Example
        -------
        >>> Date(1970, 1, 2).to_unix_days()
        1
        >>> Date(1969, 12, 31).to_unix_days()
        -1
        """
        return _math.days_from_civil(self._year, self._month, self._day)

    @classmethod
    def from_unix_days(cls, n: int, /) -> Date:
        """Inverse of :meth:`to_unix_days`"""
        return cls(*_math.civil_from_days(n))

    def to_unix_seconds(self) -> int:
        """The UNIX timestamp of midnight UTC on this date"""
        return self.to_unix_days() * 86_400

    @classmethod
    def from_unix_seconds(cls, s: int, /) -> Date:
        """The UTC date on which the given UNIX timestamp falls"""
        return cls.from_unix_days(s // 86_400)

    def add_days(self, days: int, /) -> Date:
        """Add a number of days, rolling over months and years.

        Example
        -------
        >>> Date(2024, 2, 28).add_days(2)
        Date(2024-03-01)
        >>> Date(2024, 12, 31).add_days(1)
        Date(2025-01-01)
        """
        if days < 0:
            return self.subtract_days(-days)
        year, month, day = self._year, int(self._month), self._day
        while True:
            left_in_month = _math.days_in_month(year, month) - day
            if days <= left_in_month:
                return Date(year, month, day + days)
            # move to the first day of the next month
            days -= left_in_month + 1
            day = 1
            if month == 12:
                year, month = year + 1, 1
                if year > MAX_YEAR:
                    raise OutOfBounds("Resulting date out of range")
            else:
                month += 1

    def subtract_days(self, days: int, /) -> Date:
        """Subtract a number of days, rolling back months and years.

        Example
        -------
        >>> Date(2024, 3, 1).subtract_days(1)
        Date(2024-02-29)
        """
        if days < 0:
            return self.add_days(-days)
        year, month, day = self._year, int(self._month), self._day
        while True:
            if days < day:
                return Date(year, month, day - days)
            # move to the last day of the previous month
            days -= day
            if month == 1:
                year, month = year - 1, 12
                if year < MIN_YEAR:
                    raise OutOfBounds("Resulting date out of range")
            else:
                month -= 1
            day = _math.days_in_month(year, month)

    def days_until(self, other: Date, /) -> int:
        """The number of days from this date to another date.
        If the other date is before this date, the result is negative.

        Example
        -------
        >>> Date(2021, 1, 2).days_until(Date(2021, 1, 5))
        3
        """
        return other.to_unix_days() - self.to_unix_days()

    def days_since(self, other: Date, /) -> int:
        """The number of days this date is after another date.
        If the other date is after this date, the result is negative.
        """
        return self.to_unix_days() - other.to_unix_days()

    def full_years_apart(self, other: Date, /) -> int:
        """The number of complete years from the other date to this one.
        Negative if the other date is later.

        Example
        -------
        >>> Date(2024, 6, 20).full_years_apart(Date(2020, 6, 21))
        3
        >>> Date(2020, 6, 21).full_years_apart(Date(2024, 6, 20))
        -3
        """
        if self >= other:
            return _math.full_years_apart_ordered(other._ymd(), self._ymd())
        return -_math.full_years_apart_ordered(self._ymd(), other._ymd())

    def full_months_apart(self, other: Date, /) -> int:
        """The number of complete months from the other date to this one.
        Negative if the other date is later.

        Example
        -------
        >>> Date(2024, 3, 14).full_months_apart(Date(2024, 1, 15))
        1
        """
        if self >= other:
            return _math.full_months_apart_ordered(other._ymd(), self._ymd())
        return -_math.full_months_apart_ordered(self._ymd(), other._ymd())

    def calendar_months_apart(self, other: Date, /) -> int:
        """The number of month boundaries between the dates,
        ignoring the days. Negative if the other date is later.

        Example
        -------
        >>> Date(2024, 3, 1).calendar_months_apart(Date(2024, 1, 31))
        2
        """
        if self >= other:
            return _math.calendar_months_apart_ordered(
                other._ymd(), self._ymd()
            )
        return -_math.calendar_months_apart_ordered(self._ymd(), other._ymd())

    def as_period(self, end: Date, /) -> NaivePeriod:
        """A period covering both dates entirely,
        from the start of the earliest to the end of the latest.

        Example
        -------
        >>> Date(2024, 6, 3).as_period(Date(2024, 6, 1)).as_days()
        3
        """
        start, end = (self, end) if self <= end else (end, self)
        return NaivePeriod(
            NaiveDateTime(start, Time.MIDNIGHT),
            NaiveDateTime(end, Time.END_OF_DAY),
        )

    def py_date(self) -> _date:
        """Convert to a standard library :class:`~datetime.date`"""
        return _date(self._year, self._month, self._day)

    @classmethod
    def from_py_date(cls, d: _date, /) -> Date:
        """Create from a :class:`~datetime.date`

        Example
        -------
        >>> Date.from_py_date(date(2021, 1, 2))
        Date(2021-01-02)
        """
        if not isinstance(d, _date):
            raise TypeError(f"Expected date, got {type(d)!r}")
        return cls(d.year, d.month, d.day)

    def format_common_iso(self) -> str:
        """Format as ``YYYY-MM-DD``.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Date(2021, 1, 2).format_common_iso()
        '2021-01-02'
        """
        return f"{self._year:04}-{self._month:02}-{self._day:02}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Date:
        """Parse a date in the form ``YYYY-MM-DD``.

        The delimiter may also be ``/``, ``.``, ``_``, or a space,
        or it may be omitted entirely (``YYYYMMDD``).

        Example
        -------
        >>> Date.parse_common_iso("2021-01-02")
        Date(2021-01-02)
        >>> Date.parse_common_iso("2021/1/2")
        Date(2021-01-02)
        """
        return cls(*_parse.date_from_str(s))

    def format(self, fmt: str, /) -> str:
        """Format using directives like ``YYYY``, ``MMM``, or ``ddd``.

        Example
        -------
        >>> Date(2024, 6, 21).format("dddd, MMMM D")
        'Friday, June 21'
        """
        return _format.format_fields(
            fmt, _format.Fields(self._ymd(), None, None)
        )

    @classmethod
    def parse(cls, s: str, /, fmt: str) -> Date:
        """Parse a string according to a format of directives.
        Inverse of :meth:`format`.

        Example
        -------
        >>> Date.parse("21 Jun 2024", "D MMM YYYY")
        Date(2024-06-21)
        """
        resolved = _format.resolve(_format.parse_parts(s, fmt), _current_year)
        if resolved.date is None:
            raise MissingComponent(f"No date in format {fmt!r}")
        return cls(*resolved.date)

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Date({self})"

    def _ymd(self) -> tuple[int, int, int]:
        return (self._year, int(self._month), self._day)

    _key = _ymd

    @classmethod
    def _new_unchecked(cls, year: int, month: int, day: int) -> Date:
        self = _object_new(cls)
        self._year = year
        self._month = Month(month)
        self._day = day
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_date, (pack("<HBB", self._year, self._month, self._day),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_date(data: bytes) -> Date:
    return Date(*unpack("<HBB", data))


Date.MIN = Date(MIN_YEAR, 1, 1)
Date.MAX = Date(MAX_YEAR, 12, 31)


# --------------------------------------------------------------------------
# MonthYear
# --------------------------------------------------------------------------


@final
class MonthYear(_TemporalOrder):
    """A month in a specific year, without a day component

    Example
    -------
    >>> MonthYear(2021, 1)
    MonthYear(2021-01)
    """

    __slots__ = ("_year", "_month")

    def __init__(self, year: int, month: int) -> None:
        _check_date(year, month, 1)
        self._year = year
        self._month = Month(month)

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> Month:
        return self._month

    @classmethod
    def literal(cls, s: str, /) -> MonthYear:
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid month literal: {s!r}") from e

    def days(self) -> int:
        """The number of days in this month"""
        return _math.days_in_month(self._year, self._month)

    def next(self) -> MonthYear:
        """The following month, rolling over into the next year"""
        if self._month == 12:
            return MonthYear(self._year + 1, 1)
        return MonthYear._new_unchecked(self._year, self._month + 1)

    def prev(self) -> MonthYear:
        """The preceding month, rolling back into the previous year"""
        if self._month == 1:
            return MonthYear(self._year - 1, 12)
        return MonthYear._new_unchecked(self._year, self._month - 1)

    def on_day(self, day: int, /) -> Date:
        """Create a date from this month and a given day

        Example
        -------
        >>> MonthYear(2021, 1).on_day(2)
        Date(2021-01-02)
        """
        return Date(self._year, self._month, day)

    def first_day(self) -> Date:
        return Date._new_unchecked(self._year, self._month, 1)

    def last_day(self) -> Date:
        return Date._new_unchecked(self._year, self._month, self.days())

    def format_common_iso(self) -> str:
        """Format as ``YYYY-MM``

        Example
        -------
        >>> MonthYear(2021, 1).format_common_iso()
        '2021-01'
        """
        return f"{self._year:04}-{self._month:02}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> MonthYear:
        """Parse ``YYYY-MM`` or ``YYYYMM``

        Example
        -------
        >>> MonthYear.parse_common_iso("2021-01")
        MonthYear(2021-01)
        """
        if len(s) == 7 and s[4] == "-":
            year, month = s[:4], s[5:]
        elif len(s) == 6:
            year, month = s[:4], s[4:]
        else:
            parse_err(s)
        if not (year + month).isdigit() or not s.isascii():
            parse_err(s)
        return cls(int(year), int(month))

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"MonthYear({self})"

    def _key(self) -> tuple[int, int]:
        return (self._year, int(self._month))

    @classmethod
    def _new_unchecked(cls, year: int, month: int) -> MonthYear:
        self = _object_new(cls)
        self._year = year
        self._month = Month(month)
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_my, (pack("<HB", self._year, self._month),)


@no_type_check
def _unpkl_my(data: bytes) -> MonthYear:
    return MonthYear(*unpack("<HB", data))


# --------------------------------------------------------------------------
# Time
# --------------------------------------------------------------------------


class Precision(enum.Enum):
    """How many fractional second digits a time renders.
    ``.value`` is the number of digits."""

    SECOND = 0
    MILLI = 3
    MICRO = 6
    NANO = 9


def _precision_for_digits(digits: int) -> Precision:
    if digits == 0:
        return Precision.SECOND
    elif digits <= 3:
        return Precision.MILLI
    elif digits <= 6:
        return Precision.MICRO
    return Precision.NANO


def _check_time(hour: int, minute: int, second: int, nanos: int) -> None:
    if not 0 <= nanos < 1_000_000_000:
        raise OutOfBounds(f"Subsecond out of range: {nanos}")
    if hour == 24:
        # the end of the day
        if minute or second or nanos:
            raise OutOfBounds("Only 24:00:00 is allowed as end of day")
    elif second == 60:
        # a leap second
        if hour != 23 or minute != 59:
            raise OutOfBounds("Leap second only allowed at 23:59:60")
    elif not (0 <= hour < 24 and 0 <= minute < 60 and 0 <= second < 60):
        raise OutOfBounds(f"Time out of range: {hour}:{minute}:{second}")


@final
class Time(_TemporalOrder):
    """Time of day without a date component.

    Besides the regular times of day, the end of the day (``24:00:00``)
    and a leap second (``23:59:60``) are valid.

    The precision only determines how many fractional digits are shown.
    Comparisons always use the full nanosecond value.

    Example
    -------
    >>> Time(12, 30)
    Time(12:30:00)
    >>> Time.milli(12, 30, 0, 5)
    Time(12:30:00.005)
    """

    __slots__ = ("_hour", "_minute", "_second", "_nanos", "_precision")

    MIDNIGHT: ClassVar[Time]
    """The time at midnight, the start of the day"""
    NOON: ClassVar[Time]
    """The time at noon"""
    END_OF_DAY: ClassVar[Time]
    """24:00:00, the end of the day"""

    def __init__(self, hour: int = 0, minute: int = 0, second: int = 0) -> None:
        _check_time(hour, minute, second, 0)
        self._hour = hour
        self._minute = minute
        self._second = second
        self._nanos = 0
        self._precision = Precision.SECOND

    @classmethod
    def milli(
        cls, hour: int, minute: int, second: int, millisecond: int
    ) -> Time:
        """Create a time with millisecond precision"""
        if not 0 <= millisecond <= 999:
            raise OutOfBounds(f"Millisecond out of range: {millisecond}")
        return cls._new(
            hour, minute, second, millisecond * NS_PER_MILLI, Precision.MILLI
        )

    @classmethod
    def micro(
        cls, hour: int, minute: int, second: int, microsecond: int
    ) -> Time:
        """Create a time with microsecond precision"""
        if not 0 <= microsecond <= 999_999:
            raise OutOfBounds(f"Microsecond out of range: {microsecond}")
        return cls._new(
            hour, minute, second, microsecond * NS_PER_MICRO, Precision.MICRO
        )

    @classmethod
    def nano(
        cls, hour: int, minute: int, second: int, nanosecond: int
    ) -> Time:
        """Create a time with nanosecond precision"""
        return cls._new(hour, minute, second, nanosecond, Precision.NANO)

    @classmethod
    def literal(cls, s: str, /) -> Time:
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid time literal: {s!r}") from e

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    @property
    def nanosecond(self) -> int:
        return self._nanos

    @property
    def precision(self) -> Precision:
        return self._precision

    def with_precision(self, precision: Precision, /) -> Time:
        """The same time with a different precision.
        Digits beyond the new precision are truncated.

        Example
        -------
        >>> Time.nano(1, 2, 3, 123_456_789).with_precision(Precision.MILLI)
        Time(01:02:03.123)
        """
        unit = 10 ** (9 - precision.value)
        return Time._new_unchecked(
            self._hour,
            self._minute,
            self._second,
            self._nanos // unit * unit,
            precision,
        )

    def to_nanoseconds(self) -> int:
        """The nanoseconds since midnight"""
        return (
            self._hour * NS_PER_HOUR
            + self._minute * NS_PER_MINUTE
            + self._second * NS_PER_SECOND
            + self._nanos
        )

    @classmethod
    def from_nanoseconds(cls, ns: int, /) -> Time:
        """Create a time (with nanosecond precision) from the nanoseconds
        since midnight. Values outside of one day wrap around.

        Example
        -------
        >>> Time.from_nanoseconds(-1)
        Time(23:59:59.999999999)
        """
        return cls._from_nanos(ns, Precision.NANO)

    def to_duration(self) -> Duration:
        """The time elapsed since midnight"""
        return Duration._from_nanos_unchecked(self.to_nanoseconds())

    @classmethod
    def from_duration(cls, d: Duration, /) -> Time:
        """Inverse of :meth:`to_duration`, wrapping around at midnight"""
        return cls._from_nanos(d._ns, Precision.NANO)

    def add(self, d: Duration, /) -> Time:
        """Add a duration, wrapping around at midnight.
        The precision is kept.

        Example
        -------
        >>> Time(23, 30).add(hours(1))
        Time(00:30:00)
        """
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d)!r}")
        return Time._from_nanos(self.to_nanoseconds() + d._ns, self._precision)

    def subtract(self, d: Duration, /) -> Time:
        """Subtract a duration, wrapping around at midnight.
        The precision is kept."""
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d)!r}")
        return Time._from_nanos(self.to_nanoseconds() - d._ns, self._precision)

    def difference(self, other: Time, /) -> Duration:
        """The duration from the other time to this one"""
        return Duration._from_nanos_unchecked(
            self.to_nanoseconds() - other.to_nanoseconds()
        )

    def left_in_day(self) -> Time:
        """The time remaining until the end of the day

        Example
        -------
        >>> Time(18, 30).left_in_day()
        Time(05:30:00)
        >>> Time.MIDNIGHT.left_in_day()
        Time(24:00:00)
        """
        remaining = NS_PER_DAY - self.to_nanoseconds()
        if remaining == NS_PER_DAY:
            return Time._new_unchecked(24, 0, 0, 0, self._precision)
        return Time._from_nanos(remaining, self._precision)

    def on(self, d: Date, /) -> NaiveDateTime:
        """Combine a time with a date to create a datetime"""
        return NaiveDateTime(d, self)

    def py_time(self) -> _time:
        """Convert to a standard library :class:`~datetime.time`.
        Nanoseconds are truncated to microseconds.

        Raises :class:`OutOfBounds` for 24:00:00 and leap seconds,
        which the standard library can't represent.
        """
        if self._hour == 24 or self._second == 60:
            raise OutOfBounds(f"Time {self} not representable as datetime.time")
        return _time(
            self._hour, self._minute, self._second, self._nanos // 1_000
        )

    @classmethod
    def from_py_time(cls, t: _time, /) -> Time:
        """Create from a :class:`~datetime.time`, with microsecond precision
        if it has any microseconds. The tzinfo and fold are ignored.
        """
        if not isinstance(t, _time):
            raise TypeError(f"Expected datetime.time, got {type(t)!r}")
        if t.microsecond:
            return cls.micro(t.hour, t.minute, t.second, t.microsecond)
        return cls(t.hour, t.minute, t.second)

    def format_common_iso(self) -> str:
        """Format as ``HH:MM:SS``, with as many fractional digits
        as the precision requires.

        Example
        -------
        >>> Time.micro(12, 30, 0, 4_000).format_common_iso()
        '12:30:00.004000'
        """
        base = f"{self._hour:02}:{self._minute:02}:{self._second:02}"
        if digits := self._precision.value:
            return base + "." + f"{self._nanos:09}"[:digits]
        return base

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Time:
        """Parse ``HH:MM:SS``, ``HH:MM``, or their compact forms
        ``HHMMSS`` and ``HHMM``, optionally with a fraction.

        The precision follows from the number of fractional digits.

        Example
        -------
        >>> Time.parse_common_iso("12:30:00.25")
        Time(12:30:00.250)
        """
        hour, minute, second, nanos, digits = _parse.time_from_str(s)
        return cls._new(
            hour, minute, second, nanos, _precision_for_digits(digits)
        )

    def format(self, fmt: str, /) -> str:
        """Format using directives like ``HH``, ``h``, ``mm``, or ``A``.

        Example
        -------
        >>> Time(18, 0).format("h:mm A")
        '6:00 PM'
        """
        return _format.format_fields(
            fmt, _format.Fields(None, self._fields(), None)
        )

    @classmethod
    def parse(cls, s: str, /, fmt: str) -> Time:
        """Parse a string according to a format of directives."""
        resolved = _format.resolve(_format.parse_parts(s, fmt), _current_year)
        if resolved.time is None:
            raise MissingComponent(f"No time in format {fmt!r}")
        return cls._new(*resolved.time, _precision_for_digits(resolved.digits))

    def __add__(self, d: Duration) -> Time:
        if not isinstance(d, Duration):
            return NotImplemented
        return self.add(d)

    @overload
    def __sub__(self, other: Duration) -> Time: ...

    @overload
    def __sub__(self, other: Time) -> Duration: ...

    def __sub__(self, other: Duration | Time) -> Time | Duration:
        if isinstance(other, Duration):
            return self.subtract(other)
        elif isinstance(other, Time):
            return self.difference(other)
        return NotImplemented

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Time({self})"

    _key = to_nanoseconds

    def _fields(self) -> tuple[int, int, int, int]:
        return (self._hour, self._minute, self._second, self._nanos)

    @classmethod
    def _new(
        cls,
        hour: int,
        minute: int,
        second: int,
        nanos: int,
        precision: Precision,
    ) -> Time:
        _check_time(hour, minute, second, nanos)
        return cls._new_unchecked(hour, minute, second, nanos, precision)

    @classmethod
    def _new_unchecked(
        cls,
        hour: int,
        minute: int,
        second: int,
        nanos: int,
        precision: Precision,
    ) -> Time:
        self = _object_new(cls)
        self._hour = hour
        self._minute = minute
        self._second = second
        self._nanos = nanos
        self._precision = precision
        return self

    @classmethod
    def _from_nanos(cls, ns: int, precision: Precision) -> Time:
        # floor modulo: negative values count back from midnight
        hour, rem = divmod(ns % NS_PER_DAY, NS_PER_HOUR)
        minute, rem = divmod(rem, NS_PER_MINUTE)
        second, nanos = divmod(rem, NS_PER_SECOND)
        return cls._new_unchecked(hour, minute, second, nanos, precision)

    @no_type_check
    def __reduce__(self):
        return (
            _unpkl_time,
            (
                pack(
                    "<BBBIB",
                    self._hour,
                    self._minute,
                    self._second,
                    self._nanos,
                    self._precision.value,
                ),
            ),
        )


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_time(data: bytes) -> Time:
    *args, digits = unpack("<BBBIB", data)
    return Time._new(*args, Precision(digits))


Time.MIDNIGHT = Time()
Time.NOON = Time(12)
Time.END_OF_DAY = Time(24)


# --------------------------------------------------------------------------
# Offset
# --------------------------------------------------------------------------


@final
class Offset(_OrderedBase):
    """A fixed offset from UTC, in whole minutes.
    Ranges from -12:00 to +14:00.

    Example
    -------
    >>> Offset(-240)
    Offset(-04:00)
    >>> Offset.of(5, 30)
    Offset(+05:30)
    """

    __slots__ = ("_minutes",)

    UTC: ClassVar[Offset]
    """The zero offset"""

    def __init__(self, minutes: int) -> None:
        if not MIN_OFFSET_MINUTES <= minutes <= MAX_OFFSET_MINUTES:
            raise OutOfBounds(f"Offset out of range: {minutes} minutes")
        self._minutes = minutes

    @classmethod
    def of(cls, hours: int, minutes: int = 0) -> Offset:
        """Create from hours and minutes. A negative offset
        needs both parts negative, e.g. ``Offset.of(-3, -30)``."""
        if hours * minutes < 0:
            raise ValueError("Hours and minutes must have the same sign")
        return cls(hours * 60 + minutes)

    @classmethod
    def literal(cls, s: str, /) -> Offset:
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid offset literal: {s!r}") from e

    @property
    def minutes(self) -> int:
        """The total offset in minutes"""
        return self._minutes

    def to_duration(self) -> Duration:
        return Duration._from_nanos_unchecked(self._minutes * NS_PER_MINUTE)

    @classmethod
    def from_duration(cls, d: Duration, /) -> Offset:
        minutes, rem = divmod(d._ns, NS_PER_MINUTE)
        if rem:
            raise ValueError("Offset must be a whole number of minutes")
        return cls(minutes)

    def format_common_iso(self) -> str:
        """Format as ``±HH:MM``.

        Note
        ----
        Zero is formatted as ``-00:00``, never ``Z``.
        Datetimes format a zero offset as ``Z`` themselves.
        """
        sign = "+" if self._minutes > 0 else "-"
        hrs, mins = divmod(abs(self._minutes), 60)
        return f"{sign}{hrs:02}:{mins:02}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Offset:
        """Parse ``Z``, ``±HH:MM``, ``±HHMM``, or ``±HH``

        Example
        -------
        >>> Offset.parse_common_iso("+0530")
        Offset(+05:30)
        """
        return cls(_parse.offset_from_str(s))

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Offset({self})"

    def _key(self) -> int:
        return self._minutes

    @no_type_check
    def __reduce__(self):
        return Offset, (self._minutes,)


Offset.UTC = Offset(0)


# --------------------------------------------------------------------------
# Duration
# --------------------------------------------------------------------------


class Unit(enum.Enum):
    """Units of duration. Years and months are *imprecise*:
    they have a fixed nominal length of 365 and 30 days."""

    YEAR = "year"
    MONTH = "month"
    WEEK = "week"
    DAY = "day"
    HOUR = "hour"
    MINUTE = "minute"
    SECOND = "second"
    MILLISECOND = "millisecond"
    MICROSECOND = "microsecond"
    NANOSECOND = "nanosecond"

    @property
    def nanos(self) -> int:
        """The length of the unit in nanoseconds"""
        return _UNIT_NANOS[self]

    @property
    def imprecise(self) -> bool:
        return self in (Unit.YEAR, Unit.MONTH)


_UNIT_NANOS = {
    Unit.YEAR: NS_PER_IMPRECISE_YEAR,
    Unit.MONTH: NS_PER_IMPRECISE_MONTH,
    Unit.WEEK: NS_PER_WEEK,
    Unit.DAY: NS_PER_DAY,
    Unit.HOUR: NS_PER_HOUR,
    Unit.MINUTE: NS_PER_MINUTE,
    Unit.SECOND: NS_PER_SECOND,
    Unit.MILLISECOND: NS_PER_MILLI,
    Unit.MICROSECOND: NS_PER_MICRO,
    Unit.NANOSECOND: 1,
}

# Thresholds for Duration.format(): the first unit the duration
# reaches determines the units shown, and the decimals of the last one.
_FORMAT_LADDER: list[tuple[int, list[Unit], int]] = [
    (
        NS_PER_IMPRECISE_YEAR,
        [Unit.YEAR, Unit.WEEK, Unit.DAY, Unit.HOUR, Unit.MINUTE],
        0,
    ),
    (NS_PER_WEEK, [Unit.WEEK, Unit.DAY, Unit.HOUR, Unit.MINUTE], 0),
    (NS_PER_DAY, [Unit.DAY, Unit.HOUR, Unit.MINUTE], 0),
    (NS_PER_HOUR, [Unit.HOUR, Unit.MINUTE, Unit.SECOND], 2),
    (NS_PER_MINUTE, [Unit.MINUTE, Unit.SECOND], 3),
    (NS_PER_SECOND, [Unit.SECOND], 3),
    (NS_PER_MILLI, [Unit.MILLISECOND], 0),
]


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // b
    return q if a >= 0 else -q


def _format_amount(ns: int, unit: Unit, decimals: int) -> str:
    # Digits are truncated, not rounded. This way a value just short of
    # a whole unit never renders as a full unit.
    scale = 10**decimals
    whole, frac = divmod(abs(ns) * scale // unit.nanos, scale)
    number = f"{whole}.{frac:0{decimals}}" if decimals else str(whole)
    if ns < 0:
        number = "-" + number
    if unit.imprecise:
        number = "~" + number
    singular = whole == 1 and abs(ns) % unit.nanos == 0
    return f"{number} {unit.value}{'' if singular else 's'}"


@final
class Duration(_OrderedBase):
    """An exact span of elapsed time, with nanosecond precision.

    It has no calendar context: a day is always 24 hours.
    For calendar-aware spans, see :class:`Period`.

    Example
    -------
    >>> d = Duration(hours=1, minutes=30)
    Duration(01:30:00)
    >>> d.as_unit(Unit.MINUTE)
    90

    Note
    ----
    A shorter way to create durations is with the helper functions
    :func:`~tempo.hours`, :func:`~tempo.minutes`, etc.
    """

    __slots__ = ("_ns",)

    ZERO: ClassVar[Duration]
    """A duration of zero"""

    def __init__(
        self,
        *,
        weeks: float = 0,
        days: float = 0,
        hours: float = 0,
        minutes: float = 0,
        seconds: float = 0,
        milliseconds: float = 0,
        microseconds: float = 0,
        nanoseconds: int = 0,
    ) -> None:
        assert type(nanoseconds) is int  # catch this common mistake
        self._ns = (
            # Cast individual components to int to avoid floating point errors
            int(weeks * NS_PER_WEEK)
            + int(days * NS_PER_DAY)
            + int(hours * NS_PER_HOUR)
            + int(minutes * NS_PER_MINUTE)
            + int(seconds * NS_PER_SECOND)
            + int(milliseconds * NS_PER_MILLI)
            + int(microseconds * NS_PER_MICRO)
            + nanoseconds
        )

    def in_nanoseconds(self) -> int:
        """The total size in nanoseconds"""
        return self._ns

    def as_unit(self, unit: Unit, /) -> int:
        """The number of whole units, truncated toward zero

        Example
        -------
        >>> Duration(minutes=-90).as_unit(Unit.HOUR)
        -1
        >>> days(375).as_unit(Unit.YEAR)
        1
        """
        return _trunc_div(self._ns, unit.nanos)

    def as_unit_fractional(self, unit: Unit, /) -> float:
        """The total size in the given unit

        Example
        -------
        >>> Duration(minutes=90).as_unit_fractional(Unit.HOUR)
        1.5
        """
        return self._ns / unit.nanos

    def format_as(self, unit: Unit, /, decimals: int = 0) -> str:
        """Format in a single unit

        Example
        -------
        >>> Duration(minutes=90).format_as(Unit.HOUR, decimals=2)
        '1.50 hours'
        """
        return self.format_as_many([unit], decimals)

    def format_as_many(self, units: Sequence[Unit], /, decimals: int = 0) -> str:
        """Format as a combination of units. Whole units are taken off
        in the given order, and only the last unit shows decimals.

        Example
        -------
        >>> Duration(hours=25, minutes=3).format_as_many(
        ...     [Unit.DAY, Unit.HOUR, Unit.MINUTE]
        ... )
        '1 day, 1 hour, and 3 minutes'
        """
        if not units:
            raise ValueError("At least one unit is required")
        *leading, last = units
        remaining = self._ns
        segments = []
        for unit in leading:
            whole = _trunc_div(remaining, unit.nanos)
            remaining -= whole * unit.nanos
            segments.append(_format_amount(whole * unit.nanos, unit, 0))
        segments.append(_format_amount(remaining, last, decimals))
        if len(segments) > 1:
            segments[-1] = "and " + segments[-1]
        return (", " if len(segments) > 2 else " ").join(segments)

    def format(self) -> str:
        """Format in a human-readable way. The coarsest unit the
        duration reaches determines which units are shown.

        Example
        -------
        >>> minutes(1).format()
        '1 minute and 0.000 seconds'
        >>> hours(13).format()
        '13 hours, 0 minutes, and 0.00 seconds'
        """
        size = abs(self._ns)
        for threshold, units, decimals in _FORMAT_LADDER:
            if size >= threshold:
                return self.format_as_many(units, decimals)
        return self.format_as(Unit.NANOSECOND)

    def absolute(self) -> Duration:
        return Duration._from_nanos_unchecked(abs(self._ns))

    def inverse(self) -> Duration:
        """The duration with the opposite sign"""
        return Duration._from_nanos_unchecked(-self._ns)

    def is_negative(self) -> bool:
        return self._ns < 0

    def is_less(self, other: Duration, /) -> bool:
        return self < other

    def is_less_or_equal(self, other: Duration, /) -> bool:
        return self <= other

    def is_equal(self, other: Duration, /) -> bool:
        return self == other

    def is_greater(self, other: Duration, /) -> bool:
        return self > other

    def is_greater_or_equal(self, other: Duration, /) -> bool:
        return self >= other

    def py_timedelta(self) -> _timedelta:
        """Convert to a :class:`~datetime.timedelta`

        Note
        ----
        Nanoseconds are rounded to the nearest even microsecond.
        """
        return _timedelta(microseconds=round(self._ns / 1_000))

    @classmethod
    def from_py_timedelta(cls, td: _timedelta, /) -> Duration:
        """Create from a :class:`~datetime.timedelta`

        Example
        -------
        >>> Duration.from_py_timedelta(timedelta(seconds=5400))
        Duration(01:30:00)
        """
        return cls(
            microseconds=td.microseconds,
            seconds=td.seconds,
            days=td.days,
        )

    def format_common_iso(self) -> str:
        """Format as the *popular interpretation* of the ISO 8601 duration
        format, only using hours, minutes, and seconds.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Duration(hours=1, minutes=30).format_common_iso()
        'PT1H30M'
        """
        hrs, rem = divmod(abs(self._ns), NS_PER_HOUR)
        mins, rem = divmod(rem, NS_PER_MINUTE)
        secs, ns = divmod(rem, NS_PER_SECOND)
        seconds = f"{secs}.{ns:09}".rstrip("0") if ns else str(secs)
        return f"{(self._ns < 0) * '-'}PT" + (
            (
                f"{hrs}H" * bool(hrs)
                + f"{mins}M" * bool(mins)
                + f"{seconds}S" * bool(secs or ns)
            )
            or "0S"
        )

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Duration:
        """Parse the *popular interpretation* of the ISO 8601 duration
        format, e.g. ``PT1H30M``. Only hours, minutes, and seconds are
        accepted, in that order.

        Inverse of :meth:`format_common_iso`
        """
        if (match := _match_iso_duration(s)) is None or s.endswith("T"):
            parse_err(s)
        sign, hrs, mins, secs = match.groups()
        if hrs is None and mins is None and secs is None:
            parse_err(s)

        nanos = int(hrs or 0) * NS_PER_HOUR + int(mins or 0) * NS_PER_MINUTE
        if secs:
            whole, _, frac = secs.replace(",", ".").partition(".")
            nanos += int(whole) * NS_PER_SECOND + int(frac.ljust(9, "0"))
        return cls._from_nanos_unchecked(-nanos if sign == "-" else nanos)

    def __add__(self, other: Duration) -> Duration:
        """Add two durations together

        Example
        -------
        >>> d = Duration(hours=1, minutes=30)
        >>> d + Duration(minutes=30)
        Duration(02:00:00)
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos_unchecked(self._ns + other._ns)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos_unchecked(self._ns - other._ns)

    def __bool__(self) -> bool:
        """True if the value is non-zero"""
        return bool(self._ns)

    def __mul__(self, other: float) -> Duration:
        """Multiply by a number

        Example
        -------
        >>> Duration(hours=1, minutes=30) * 2.5
        Duration(03:45:00)
        """
        if not isinstance(other, (int, float)):
            return NotImplemented
        return Duration._from_nanos_unchecked(int(self._ns * other))

    def __rmul__(self, other: float) -> Duration:
        return self * other

    def __neg__(self) -> Duration:
        return self.inverse()

    def __pos__(self) -> Duration:
        return self

    def __abs__(self) -> Duration:
        return self.absolute()

    @overload
    def __truediv__(self, other: float) -> Duration: ...

    @overload
    def __truediv__(self, other: Duration) -> float: ...

    def __truediv__(self, other: float | Duration) -> Duration | float:
        """Divide by a number or another duration

        Example
        -------
        >>> d = Duration(hours=1, minutes=30)
        >>> d / 2.5
        Duration(00:36:00)
        >>> d / Duration(minutes=30)
        3.0
        """
        if isinstance(other, Duration):
            return self._ns / other._ns
        elif isinstance(other, (int, float)):
            return Duration._from_nanos_unchecked(int(self._ns / other))
        return NotImplemented

    __str__ = format_common_iso

    def __repr__(self) -> str:
        hrs, rem = divmod(abs(self._ns), NS_PER_HOUR)
        mins, rem = divmod(rem, NS_PER_MINUTE)
        secs, ns = divmod(rem, NS_PER_SECOND)
        return (
            f"Duration({'-'*(self._ns < 0)}{hrs:02}:{mins:02}:{secs:02}"
            + f".{ns:0>9}".rstrip("0") * bool(ns)
            + ")"
        )

    def _key(self) -> int:
        return self._ns

    @no_type_check
    def __reduce__(self):
        return _unpkl_duration, (pack("<qI", *divmod(self._ns, NS_PER_SECOND)),)

    @classmethod
    def _from_nanos_unchecked(cls, ns: int) -> Duration:
        new = _object_new(cls)
        new._ns = ns
        return new


@no_type_check
def _unpkl_duration(data: bytes) -> Duration:
    s, ns = unpack("<qI", data)
    return Duration._from_nanos_unchecked(s * NS_PER_SECOND + ns)


Duration.ZERO = Duration()

_match_iso_duration = re.compile(
    r"([-+]?)PT(?:([0-9]{1,35})H)?(?:([0-9]{1,35})M)?"
    r"(?:([0-9]{1,35}(?:[.,][0-9]{1,9})?)S)?",
    re.ASCII,
).fullmatch


def years(i: int, /) -> Duration:
    """A duration of imprecise years of 365 days each.
    ``years(1) == Duration(days=365)``
    """
    return Duration._from_nanos_unchecked(i * NS_PER_IMPRECISE_YEAR)


def months(i: int, /) -> Duration:
    """A duration of imprecise months of 30 days each.
    ``months(1) == Duration(days=30)``
    """
    return Duration._from_nanos_unchecked(i * NS_PER_IMPRECISE_MONTH)


def weeks(i: float, /) -> Duration:
    """``weeks(1) == Duration(weeks=1)``"""
    return Duration(weeks=i)


def days(i: float, /) -> Duration:
    """``days(1) == Duration(days=1)``"""
    return Duration(days=i)


def hours(i: float, /) -> Duration:
    """``hours(1) == Duration(hours=1)``"""
    return Duration(hours=i)


def minutes(i: float, /) -> Duration:
    """``minutes(1) == Duration(minutes=1)``"""
    return Duration(minutes=i)


def seconds(i: float, /) -> Duration:
    """``seconds(1) == Duration(seconds=1)``"""
    return Duration(seconds=i)


def milliseconds(i: float, /) -> Duration:
    """``milliseconds(1) == Duration(milliseconds=1)``"""
    return Duration(milliseconds=i)


def microseconds(i: float, /) -> Duration:
    """``microseconds(1) == Duration(microseconds=1)``"""
    return Duration(microseconds=i)


def nanoseconds(i: int, /) -> Duration:
    """``nanoseconds(1) == Duration(nanoseconds=1)``"""
    return Duration(nanoseconds=i)


# --------------------------------------------------------------------------
# Datetimes
# --------------------------------------------------------------------------


def _serialize_offset(minutes: int) -> str:
    if minutes == 0:
        return "Z"
    sign = "-" if minutes < 0 else "+"
    hrs, mins = divmod(abs(minutes), 60)
    return f"{sign}{hrs:02}" + (f":{mins:02}" if mins else "")


@final
class NaiveDateTime(_TemporalOrder):
    """A date and time without an offset, i.e. as it would appear
    on a wall clock, with no known relation to UTC.

    Example
    -------
    >>> NaiveDateTime(Date(2024, 6, 21), Time(13, 42))
    NaiveDateTime(2024-06-21T13:42:00)
    >>> NaiveDateTime.of(2024, 6, 21, 13, 42)
    NaiveDateTime(2024-06-21T13:42:00)

    Note
    ----
    The time 24:00:00 is equal to 00:00:00 on the next day.
    """

    __slots__ = ("_date", "_time")

    def __init__(self, date: Date, time: Time) -> None:
        if not isinstance(date, Date) or not isinstance(time, Time):
            raise TypeError("Expected a Date and a Time")
        self._date = date
        self._time = time

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> NaiveDateTime:
        """Create from the individual fields. The time has nanosecond
        precision if a nanosecond is given, second precision otherwise."""
        return cls(
            Date(year, month, day),
            (
                Time.nano(hour, minute, second, nanosecond)
                if nanosecond
                else Time(hour, minute, second)
            ),
        )

    @classmethod
    def literal(cls, s: str, /) -> NaiveDateTime:
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid datetime literal: {s!r}") from e

    @classmethod
    def now_utc(cls) -> NaiveDateTime:
        """The current date and time in UTC, without the offset"""
        return DateTime.now_utc().naive

    @classmethod
    def now_local(cls) -> NaiveDateTime:
        """The current date and time in the system timezone,
        without the offset"""
        return DateTime.now_local().naive

    @property
    def date(self) -> Date:
        return self._date

    @property
    def time(self) -> Time:
        return self._time

    @property
    def year(self) -> int:
        return self._date._year

    @property
    def month(self) -> Month:
        return self._date._month

    @property
    def day(self) -> int:
        return self._date._day

    @property
    def hour(self) -> int:
        return self._time._hour

    @property
    def minute(self) -> int:
        return self._time._minute

    @property
    def second(self) -> int:
        return self._time._second

    @property
    def nanosecond(self) -> int:
        return self._time._nanos

    def to_unix_nanoseconds(self) -> int:
        """Nanoseconds since 1970-01-01T00:00:00, as if this were UTC"""
        return self._date.to_unix_days() * NS_PER_DAY + self._time.to_nanoseconds()

    def assume_offset(self, offset: Offset, /) -> DateTime:
        """Attach an offset, without any conversion

        Example
        -------
        >>> NaiveDateTime.of(2024, 6, 21, 13, 42).assume_offset(Offset(-240))
        DateTime(2024-06-21T13:42:00-04:00)
        """
        return DateTime(self, offset)

    def assume_utc(self) -> DateTime:
        return DateTime(self, Offset.UTC)

    def add(self, d: Duration, /) -> NaiveDateTime:
        """Add a duration, carrying over into the date

        Example
        -------
        >>> NaiveDateTime.of(2024, 6, 21, 23, 30).add(hours(1))
        NaiveDateTime(2024-06-22T00:30:00)
        """
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d)!r}")
        return NaiveDateTime._from_unix_nanos(
            self.to_unix_nanoseconds() + d._ns, self._time._precision
        )

    def subtract(self, d: Duration, /) -> NaiveDateTime:
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d)!r}")
        return NaiveDateTime._from_unix_nanos(
            self.to_unix_nanoseconds() - d._ns, self._time._precision
        )

    def difference(self, other: NaiveDateTime, /) -> Duration:
        """The duration from the other datetime to this one"""
        return Duration._from_nanos_unchecked(
            self.to_unix_nanoseconds() - other.to_unix_nanoseconds()
        )

    def as_period(self, end: NaiveDateTime, /) -> NaivePeriod:
        """A period between the two datetimes. Unlike the
        :class:`NaivePeriod` constructor, the endpoints are put in order."""
        start, end = (self, end) if self <= end else (end, self)
        return NaivePeriod(start, end)

    def format_common_iso(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS[.fff]``"""
        return f"{self._date}T{self._time}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> NaiveDateTime:
        """Parse a date and time separated by ``T`` or a space.
        Both parts accept the forms of :meth:`Date.parse_common_iso`
        and :meth:`Time.parse_common_iso`.

        Example
        -------
        >>> NaiveDateTime.parse_common_iso("2024-06-21T13:42:11.314")
        NaiveDateTime(2024-06-21T13:42:11.314)
        """
        date, time = _parse.split_datetime(s)
        try:
            return cls(Date.parse_common_iso(date), Time.parse_common_iso(time))
        except InvalidFormat:
            parse_err(s)

    def serialize(self) -> str:
        """Format in the compact form ``YYYYMMDDTHHMMSS.NNNNNNNNN``"""
        (y, mo, d), (h, mi, s, ns) = self._date._ymd(), self._time._fields()
        return f"{y:04}{mo:02}{d:02}T{h:02}{mi:02}{s:02}.{ns:09}"

    @classmethod
    def deserialize(cls, s: str, /) -> NaiveDateTime:
        """Inverse of :meth:`serialize`"""
        date, time, offset = _parse.from_serialized(s)
        if offset is not None:
            parse_err(s)
        return cls(Date(*date), Time.nano(*time))

    def format(self, fmt: str, /) -> str:
        """Format using date and time directives

        Example
        -------
        >>> NaiveDateTime.of(2024, 6, 21, 18).format("ddd @ h:mm A")
        'Fri @ 6:00 PM'
        """
        return _format.format_fields(
            fmt, _format.Fields(self._date._ymd(), self._time._fields(), None)
        )

    @classmethod
    def parse(cls, s: str, /, fmt: str) -> NaiveDateTime:
        """Parse a string according to a format of directives.
        Both date and time directives are required."""
        resolved = _format.resolve(_format.parse_parts(s, fmt), _current_year)
        if resolved.date is None or resolved.time is None:
            raise MissingComponent(f"Need a date and time in format {fmt!r}")
        return cls(
            Date(*resolved.date),
            Time._new(*resolved.time, _precision_for_digits(resolved.digits)),
        )

    def py_datetime(self) -> _datetime:
        """Convert to a naive :class:`~datetime.datetime`.
        Nanoseconds are truncated to microseconds."""
        return _datetime.combine(self._date.py_date(), self._time.py_time())

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> NaiveDateTime:
        """Create from a naive :class:`~datetime.datetime`"""
        if d.tzinfo is not None:
            raise ValueError(
                "Can only create NaiveDateTime from a naive datetime, "
                f"got datetime with tzinfo={d.tzinfo!r}"
            )
        return cls(Date.from_py_date(d.date()), Time.from_py_time(d.time()))

    def __add__(self, d: Duration) -> NaiveDateTime:
        if not isinstance(d, Duration):
            return NotImplemented
        return self.add(d)

    @overload
    def __sub__(self, other: Duration) -> NaiveDateTime: ...

    @overload
    def __sub__(self, other: NaiveDateTime) -> Duration: ...

    def __sub__(
        self, other: Duration | NaiveDateTime
    ) -> NaiveDateTime | Duration:
        if isinstance(other, Duration):
            return self.subtract(other)
        elif isinstance(other, NaiveDateTime):
            return self.difference(other)
        return NotImplemented

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"NaiveDateTime({self})"

    _key = to_unix_nanoseconds

    @classmethod
    def _from_unix_nanos(cls, ns: int, precision: Precision) -> NaiveDateTime:
        days, rem = divmod(ns, NS_PER_DAY)
        return cls(Date.from_unix_days(days), Time._from_nanos(rem, precision))

    @no_type_check
    def __reduce__(self):
        return _unpkl_naive, (self._date, self._time)


@no_type_check
def _unpkl_naive(date: Date, time: Time) -> NaiveDateTime:
    return NaiveDateTime(date, time)


@final
class DateTime(_TemporalOrder):
    """A date and time with a fixed offset from UTC.

    Comparison and equality are by the moment in time,
    so the same moment at different offsets is equal.
    Use :meth:`exact_eq` to also compare the offsets.

    Example
    -------
    >>> dt = DateTime.parse_common_iso("2024-06-21T13:42:11-04:00")
    DateTime(2024-06-21T13:42:11-04:00)
    >>> dt == dt.to_utc()
    True
    """

    __slots__ = ("_naive", "_offset")

    def __init__(self, naive: NaiveDateTime, offset: Offset) -> None:
        if not isinstance(naive, NaiveDateTime) or not isinstance(
            offset, Offset
        ):
            raise TypeError("Expected a NaiveDateTime and an Offset")
        self._naive = naive
        self._offset = offset

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
        offset: Offset,
    ) -> DateTime:
        return cls(
            NaiveDateTime.of(
                year, month, day, hour, minute, second, nanosecond=nanosecond
            ),
            offset,
        )

    @classmethod
    def literal(cls, s: str, /) -> DateTime:
        try:
            return cls.parse_common_iso(s)
        except ValueError as e:
            raise InvalidLiteral(f"Invalid datetime literal: {s!r}") from e

    @classmethod
    def now_utc(cls) -> DateTime:
        """The current time, at offset zero"""
        return cls.from_unix_nanoseconds(get_clock().now_ns())

    @classmethod
    def now_local(cls, provider: Optional[TimeZoneProvider] = None) -> DateTime:
        """The current time, at the offset of the system timezone"""
        return cls.now_utc().to_local(provider)

    @property
    def naive(self) -> NaiveDateTime:
        return self._naive

    @property
    def offset(self) -> Offset:
        return self._offset

    @property
    def date(self) -> Date:
        return self._naive._date

    @property
    def time(self) -> Time:
        return self._naive._time

    @property
    def year(self) -> int:
        return self._naive._date._year

    @property
    def month(self) -> Month:
        return self._naive._date._month

    @property
    def day(self) -> int:
        return self._naive._date._day

    @property
    def hour(self) -> int:
        return self._naive._time._hour

    @property
    def minute(self) -> int:
        return self._naive._time._minute

    @property
    def second(self) -> int:
        return self._naive._time._second

    @property
    def nanosecond(self) -> int:
        return self._naive._time._nanos

    def drop_offset(self) -> NaiveDateTime:
        return self._naive

    def exact_eq(self, other: DateTime, /) -> bool:
        """Compare objects by their values, instead of whether they
        represent the same moment in time

        Example
        -------
        >>> a = DateTime.literal("2020-08-15T23:00:00+02:00")
        >>> b = DateTime.literal("2020-08-15T21:00:00Z")
        >>> a == b
        True
        >>> a.exact_eq(b)
        False
        """
        return (
            self._naive._date == other._naive._date
            and self._naive._time == other._naive._time
            and self._naive._time._precision is other._naive._time._precision
            and self._offset == other._offset
        )

    def to_unix_nanoseconds(self) -> int:
        return (
            self._naive.to_unix_nanoseconds()
            - self._offset._minutes * NS_PER_MINUTE
        )

    def to_unix_microseconds(self) -> int:
        return self.to_unix_nanoseconds() // 1_000

    def to_unix_milliseconds(self) -> int:
        return self.to_unix_nanoseconds() // 1_000_000

    def to_unix_seconds(self) -> int:
        """The UNIX timestamp, rounded down to whole seconds

        Example
        -------
        >>> DateTime.literal("1970-01-01T01:00:00+01:00").to_unix_seconds()
        0
        """
        return self.to_unix_nanoseconds() // NS_PER_SECOND

    @classmethod
    def from_unix_nanoseconds(
        cls, ns: int, /, offset: Offset = Offset.UTC
    ) -> DateTime:
        return cls._from_unix_nanos(ns, offset, Precision.NANO)

    @classmethod
    def from_unix_microseconds(
        cls, us: int, /, offset: Offset = Offset.UTC
    ) -> DateTime:
        return cls._from_unix_nanos(us * 1_000, offset, Precision.MICRO)

    @classmethod
    def from_unix_milliseconds(
        cls, ms: int, /, offset: Offset = Offset.UTC
    ) -> DateTime:
        return cls._from_unix_nanos(ms * 1_000_000, offset, Precision.MILLI)

    @classmethod
    def from_unix_seconds(
        cls, s: int, /, offset: Offset = Offset.UTC
    ) -> DateTime:
        """Create from a UNIX timestamp, at the given offset

        Example
        -------
        >>> DateTime.from_unix_seconds(0)
        DateTime(1970-01-01T00:00:00Z)
        """
        return cls._from_unix_nanos(s * NS_PER_SECOND, offset, Precision.SECOND)

    def to_utc(self) -> DateTime:
        return self.to_offset(Offset.UTC)

    def to_offset(self, offset: Offset, /) -> DateTime:
        """The same moment in time, at a different offset

        Example
        -------
        >>> DateTime.literal("2024-06-21T13:42:00-04:00").to_offset(Offset(120))
        DateTime(2024-06-21T19:42:00+02:00)
        """
        return DateTime._from_unix_nanos(
            self.to_unix_nanoseconds(), offset, self._naive._time._precision
        )

    def to_timezone(
        self, tz: str, /, provider: Optional[TimeZoneProvider] = None
    ) -> DateTime:
        """The same moment in time, at the offset the given timezone
        has at that moment.

        The offset is looked up with the given provider, or the default one
        (see :func:`~tempo.set_tz_provider`).
        """
        provider = provider or get_tz_provider()
        minutes = provider.offset_at(tz, self.to_unix_nanoseconds())
        return self.to_offset(Offset(minutes))

    def to_local(self, provider: Optional[TimeZoneProvider] = None) -> DateTime:
        """The same moment in time, in the system timezone"""
        provider = provider or get_tz_provider()
        return self.to_timezone(provider.local_tz(), provider)

    def add(self, d: Duration, /) -> DateTime:
        """Add a duration, keeping the offset"""
        return DateTime(self._naive.add(d), self._offset)

    def subtract(self, d: Duration, /) -> DateTime:
        return DateTime(self._naive.subtract(d), self._offset)

    def difference(self, other: DateTime, /) -> Duration:
        """The exact duration from the other datetime to this one

        Example
        -------
        >>> a = DateTime.literal("2024-06-21T12:00:00Z")
        >>> b = DateTime.literal("2024-06-21T12:00:00+02:00")
        >>> a.difference(b)
        Duration(02:00:00)
        """
        return Duration._from_nanos_unchecked(
            self.to_unix_nanoseconds() - other.to_unix_nanoseconds()
        )

    def as_period(self, end: DateTime, /) -> Period:
        """A period between the two datetimes. Unlike the
        :class:`Period` constructor, the endpoints are put in order."""
        start, end = (self, end) if self <= end else (end, self)
        return Period(start, end)

    def format_common_iso(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS±HH:MM``, or with ``Z``
        if the offset is zero"""
        return f"{self._naive}{_offset_or_z(self._offset)}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> DateTime:
        """Parse a datetime with an offset, e.g.
        ``2024-06-21T13:42:11-04:00`` or ``2024-06-21 13:42:11Z``.
        A missing offset raises :class:`MissingComponent`.
        """
        date, rest = _parse.split_datetime(s)
        time, offset = _parse.split_offset(rest, s)
        try:
            return cls(
                NaiveDateTime(
                    Date.parse_common_iso(date), Time.parse_common_iso(time)
                ),
                Offset.parse_common_iso(offset),
            )
        except InvalidFormat:
            parse_err(s)

    def serialize(self) -> str:
        """Format in the compact form
        ``YYYYMMDDTHHMMSS.NNNNNNNNN[Z|±HH[:MM]]``

        Example
        -------
        >>> DateTime.literal("2024-06-21T13:42:11-04:00").serialize()
        '20240621T134211.000000000-04'
        """
        return self._naive.serialize() + _serialize_offset(self._offset._minutes)

    @classmethod
    def deserialize(cls, s: str, /) -> DateTime:
        """Inverse of :meth:`serialize`"""
        date, time, offset = _parse.from_serialized(s)
        if offset is None:
            raise MissingComponent(f"Missing offset in {s!r}")
        return cls(NaiveDateTime(Date(*date), Time.nano(*time)), Offset(offset))

    def format(self, fmt: str, /) -> str:
        """Format using date, time, and offset directives

        Example
        -------
        >>> DateTime.literal("2024-06-21T13:42:11.314-04:00").format(
        ...     "ddd @ h:mm A (z)"
        ... )
        'Fri @ 1:42 PM (-04)'
        """
        return _format.format_fields(
            fmt,
            _format.Fields(
                self._naive._date._ymd(),
                self._naive._time._fields(),
                self._offset._minutes,
            ),
        )

    @classmethod
    def parse(cls, s: str, /, fmt: str) -> DateTime:
        """Parse a string according to a format of directives.
        Date, time, and offset directives are all required."""
        resolved = _format.resolve(_format.parse_parts(s, fmt), _current_year)
        if resolved.date is None or resolved.time is None:
            raise MissingComponent(f"Need a date and time in format {fmt!r}")
        if resolved.offset is None:
            raise MissingComponent(f"Need an offset in format {fmt!r}")
        return cls(
            NaiveDateTime(
                Date(*resolved.date),
                Time._new(
                    *resolved.time, _precision_for_digits(resolved.digits)
                ),
            ),
            Offset.parse_common_iso(resolved.offset),
        )

    def py_datetime(self) -> _datetime:
        """Convert to an aware :class:`~datetime.datetime` with a
        fixed-offset tzinfo. Nanoseconds are truncated to microseconds."""
        return self._naive.py_datetime().replace(
            tzinfo=_timezone(_timedelta(minutes=self._offset._minutes))
        )

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> DateTime:
        """Create from an aware :class:`~datetime.datetime`"""
        if (offset := d.utcoffset()) is None:
            raise ValueError("Datetime must be aware")
        return cls(
            NaiveDateTime.from_py_datetime(d.replace(tzinfo=None)),
            Offset.from_duration(Duration.from_py_timedelta(offset)),
        )

    def __add__(self, d: Duration) -> DateTime:
        if not isinstance(d, Duration):
            return NotImplemented
        return self.add(d)

    @overload
    def __sub__(self, other: Duration) -> DateTime: ...

    @overload
    def __sub__(self, other: DateTime) -> Duration: ...

    def __sub__(self, other: Duration | DateTime) -> DateTime | Duration:
        if isinstance(other, Duration):
            return self.subtract(other)
        elif isinstance(other, DateTime):
            return self.difference(other)
        return NotImplemented

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"DateTime({self})"

    _key = to_unix_nanoseconds

    @classmethod
    def _from_unix_nanos(
        cls, ns: int, offset: Offset, precision: Precision
    ) -> DateTime:
        return cls(
            NaiveDateTime._from_unix_nanos(
                ns + offset._minutes * NS_PER_MINUTE, precision
            ),
            offset,
        )

    @no_type_check
    def __reduce__(self):
        return _unpkl_datetime, (self._naive, self._offset._minutes)


@no_type_check
def _unpkl_datetime(naive: NaiveDateTime, offset: int) -> DateTime:
    return DateTime(naive, Offset(offset))


def _offset_or_z(offset: Offset) -> str:
    return "Z" if offset._minutes == 0 else offset.format_common_iso()


# --------------------------------------------------------------------------
# Periods
# --------------------------------------------------------------------------

class _PeriodBase(_ImmutableBase, ABC):
    """Calendar-aware spans between two points in time:

    - :class:`NaivePeriod`
    - :class:`Period`

    The constructors keep the endpoints in the order given.
    The counting methods work regardless of the order.

    (This base class itself is not for public use.)
    """

    __slots__ = ("_start", "_end")
    _start: Any
    _end: Any

    @abstractmethod
    def _calendar(self, x: Any, /) -> tuple[_math.Ymd, int]:
        """The (year, month, day) and nanoseconds into the day
        used for calendar counting"""

    @property
    def start(self) -> Any:
        return self._start

    @property
    def end(self) -> Any:
        return self._end

    def _ordered(self) -> tuple[Any, Any]:
        if self._start <= self._end:
            return self._start, self._end
        return self._end, self._start

    def as_duration(self) -> Duration:
        """The exact time elapsed between the endpoints.
        Never negative."""
        return Duration._from_nanos_unchecked(
            abs(
                self._end.to_unix_nanoseconds()
                - self._start.to_unix_nanoseconds()
            )
        )

    def as_unit(self, unit: Unit, /) -> int:
        return self.as_duration().as_unit(unit)

    def as_seconds(self) -> int:
        """The whole seconds elapsed between the endpoints

        Example
        -------
        >>> NaivePeriod(
        ...     NaiveDateTime.literal("2024-06-13T07:16:32"),
        ...     NaiveDateTime.literal("2024-06-13T07:16:12"),
        ... ).as_seconds()
        20
        """
        return self.as_duration().as_unit(Unit.SECOND)

    def as_days(self) -> int:
        """The number of calendar days between the endpoints.

        A day only counts once its time of day has been reached again.
        As a special case, a period from ``00:00`` to ``24:00``
        counts that final day as well.

        Example
        -------
        >>> NaivePeriod(
        ...     NaiveDateTime.literal("2024-06-13T15:47:00"),
        ...     NaiveDateTime.literal("2024-06-21T07:16:12"),
        ... ).as_days()
        7
        """
        (start, start_ns), (end, end_ns) = map(
            self._calendar, self._ordered()
        )
        days = _math.days_between_table(start, end)
        if start_ns > end_ns:
            days -= 1
        elif start_ns == 0 and end_ns == NS_PER_DAY:
            days += 1
        return days

    def as_days_fractional(self) -> float:
        """The number of calendar days between the endpoints,
        including the part of an incomplete day"""
        (_, start_ns), (_, end_ns) = map(self._calendar, self._ordered())
        whole = self.as_days()
        if start_ns == 0 and end_ns == NS_PER_DAY:
            # the whole extra day is already counted
            return float(whole)
        elif start_ns > end_ns:
            return (
                whole
                + (NS_PER_DAY - start_ns) / NS_PER_DAY
                + end_ns / NS_PER_DAY
            )
        return whole + (end_ns - start_ns) / NS_PER_DAY

    def comprising_dates(self) -> Iterator[Date]:
        """Every date in the period, from the first through the last.
        Offsets are ignored: the dates are those on the wall clock.

        Example
        -------
        >>> list(Date(2024, 6, 30).as_period(Date(2024, 7, 1)).comprising_dates())
        [Date(2024-06-30), Date(2024-07-01)]
        """
        first, last = sorted((self._start.date, self._end.date))
        current = first
        while current <= last:
            yield current
            if current == last:
                return
            current = current.add_days(1)

    def comprising_months(self) -> Iterator[MonthYear]:
        """Every month in the period, from the first through the last.
        Offsets are ignored."""
        first, last = sorted(
            (self._start.date.month_year(), self._end.date.month_year())
        )
        current = first
        while current <= last:
            yield current
            if current == last:
                return
            current = current.next()

    def contains_date(self, d: Date, /) -> bool:
        """Whether the date is within the period, endpoints included"""
        first, last = sorted((self._start.date, self._end.date))
        return first <= d <= last

    def contains_datetime(self, dt: Any, /) -> bool:
        """Whether the datetime is within the period, endpoints included"""
        first, last = self._ordered()
        return first <= dt <= last

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return (self._start, self._end) == (
            other._start,  # type: ignore[attr-defined]
            other._end,  # type: ignore[attr-defined]
        )

    def __hash__(self) -> int:
        return hash((self._start, self._end))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._start} -> {self._end})"

    @no_type_check
    def __reduce__(self):
        return type(self), (self._start, self._end)


@final
class NaivePeriod(_PeriodBase):
    """A calendar-aware span between two naive datetimes

    Example
    -------
    >>> p = NaivePeriod(
    ...     NaiveDateTime.of(2024, 1, 31),
    ...     NaiveDateTime.of(2024, 3, 1, 12),
    ... )
    >>> p.as_days_fractional()
    30.5
    """

    __slots__ = ()
    _start: NaiveDateTime
    _end: NaiveDateTime

    def __init__(self, start: NaiveDateTime, end: NaiveDateTime) -> None:
        if not isinstance(start, NaiveDateTime) or not isinstance(
            end, NaiveDateTime
        ):
            raise TypeError("Expected two NaiveDateTimes")
        self._start = start
        self._end = end

    @property
    def start(self) -> NaiveDateTime:
        return self._start

    @property
    def end(self) -> NaiveDateTime:
        return self._end

    def _calendar(self, x: NaiveDateTime, /) -> tuple[_math.Ymd, int]:
        return x._date._ymd(), x._time.to_nanoseconds()


@final
class Period(_PeriodBase):
    """A calendar-aware span between two datetimes with offsets.

    Calendar days are counted in UTC, so endpoints at different offsets
    are comparable. Date enumeration uses the dates on the wall clock.
    """

    __slots__ = ()
    _start: DateTime
    _end: DateTime

    def __init__(self, start: DateTime, end: DateTime) -> None:
        if not isinstance(start, DateTime) or not isinstance(end, DateTime):
            raise TypeError("Expected two DateTimes")
        self._start = start
        self._end = end

    @property
    def start(self) -> DateTime:
        return self._start

    @property
    def end(self) -> DateTime:
        return self._end

    def _calendar(self, x: DateTime, /) -> tuple[_math.Ymd, int]:
        # the UTC date may lie just outside the supported range of Date
        days, ns = divmod(x.to_unix_nanoseconds(), NS_PER_DAY)
        return _math.civil_from_days(days), ns


# --------------------------------------------------------------------------
# Instant
# --------------------------------------------------------------------------


@final
class Instant(_TemporalOrder):
    """A moment captured from the clock, for measuring elapsed time.

    It combines a monotonic reading (for differences), a wall clock reading
    (for display), and a counter which orders instants taken at the same
    monotonic reading.

    Example
    -------
    >>> start = Instant.now()
    >>> ...
    >>> start.elapsed() < seconds(2)
    True
    """

    __slots__ = ("_wall_ns", "_mono_ns", "_unique")

    def __init__(self) -> None:
        raise TypeError(
            "Instant instances cannot be created through the constructor. "
            "Use `Instant.now` instead."
        )

    @classmethod
    def now(cls) -> Instant:
        clock = get_clock()
        self = _object_new(cls)
        self._wall_ns = clock.now_ns()
        self._mono_ns = clock.monotonic_ns()
        self._unique = clock.unique()
        return self

    def difference(self, other: Instant, /) -> Duration:
        """The elapsed time from the other instant to this one,
        using the monotonic readings"""
        return Duration._from_nanos_unchecked(self._mono_ns - other._mono_ns)

    def elapsed(self) -> Duration:
        """The time elapsed since this instant"""
        return Instant.now().difference(self)

    def as_utc_datetime(self) -> DateTime:
        """The wall clock reading, for display"""
        return DateTime.from_unix_nanoseconds(self._wall_ns)

    def as_local_datetime(
        self, provider: Optional[TimeZoneProvider] = None
    ) -> DateTime:
        return self.as_utc_datetime().to_local(provider)

    def format_common_iso(self) -> str:
        return self.as_utc_datetime().format_common_iso()

    def __sub__(self, other: Instant) -> Duration:
        if not isinstance(other, Instant):
            return NotImplemented
        return self.difference(other)

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Instant({self})"

    def _key(self) -> tuple[int, int]:
        return (self._mono_ns, self._unique)

    def __reduce__(self) -> Any:
        raise TypeError("Instants are only meaningful within one process")


# We expose the public members in the root of the module.
# For clarity, we remove the private module part from the names,
# since this is an implementation detail.
for name in __all__:
    member = locals()[name]
    if getattr(member, "__module__", None) in (__name__, "tempo._common"):
        member.__module__ = "tempo"

# clear up loop variables so they don't leak into the namespace
del name
del member

for _unpkl in (
    _unpkl_date,
    _unpkl_my,
    _unpkl_time,
    _unpkl_duration,
    _unpkl_naive,
    _unpkl_datetime,
):
    _unpkl.__module__ = "tempo"

# disable further subclassing
final(_ImmutableBase)
final(_OrderedBase)
final(_TemporalOrder)
final(_PeriodBase)
