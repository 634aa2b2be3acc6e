from typing import NoReturn

Nanos = int  # 0-999_999_999

NS_PER_MICRO = 1_000
NS_PER_MILLI = 1_000_000
NS_PER_SECOND = 1_000_000_000
NS_PER_MINUTE = 60 * NS_PER_SECOND
NS_PER_HOUR = 60 * NS_PER_MINUTE
NS_PER_DAY = 24 * NS_PER_HOUR
NS_PER_WEEK = 7 * NS_PER_DAY
# Imprecise units: a nominal month and year, not calendar-exact
NS_PER_IMPRECISE_MONTH = 30 * NS_PER_DAY
NS_PER_IMPRECISE_YEAR = 365 * NS_PER_DAY

MIN_YEAR = 1000
MAX_YEAR = 9999

MIN_OFFSET_MINUTES = -12 * 60
MAX_OFFSET_MINUTES = 14 * 60


class InvalidFormat(ValueError):
    """A string doesn't have the structure expected by the parser"""


class OutOfBounds(ValueError):
    """A value is structurally valid, but outside its allowed range"""


class UnknownDirective(ValueError):
    """A format string contains a directive the interpreter doesn't know"""


class MissingComponent(ValueError):
    """A composite value was parsed, but one of its parts is absent"""


class InvalidLiteral(Exception):
    """A value passed to a ``literal()`` constructor is invalid.

    This deliberately isn't a :class:`ValueError`: literals are meant for
    values known to be valid when the code is written, so a failure here is
    a bug in the calling code, not bad input.
    """


class TimeZoneNotFoundError(ValueError):
    """A timezone with the given ID was not found"""


def parse_err(s: str) -> NoReturn:
    raise InvalidFormat(f"Invalid format: {s!r}") from None


MONTH_NAMES = [
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]
# Sunday first, matching the weekday formula's numbering
WEEKDAY_NAMES = [
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
]
