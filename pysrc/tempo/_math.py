"""Calendar and day-count helpers operating on plain integers."""

# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

# Days between 0000-03-01 and 1970-01-01 in the proleptic Gregorian calendar
_UNIX_EPOCH_OFFSET = 719_468
_DAYS_PER_ERA = 146_097


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 2 and is_leap(year))


def days_in_year(year: int) -> int:
    return 366 if is_leap(year) else 365


def _trunc_div(a: int, b: int) -> int:
    # C-style division, rounding toward zero
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def days_from_civil(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a proleptic Gregorian date.

    Howard Hinnant's algorithm. Internally the year starts in March,
    so that the leap day is the last day of the year.
    """
    y = year - 1 if month <= 2 else year
    era = _trunc_div(y if y >= 0 else y - 399, 400)
    yoe = y - era * 400  # [0, 399]
    mp = month - 3 if month > 2 else month + 9  # March == 0
    doy = (153 * mp + 2) // 5 + day - 1  # [0, 365]
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy  # [0, 146096]
    return era * _DAYS_PER_ERA + doe - _UNIX_EPOCH_OFFSET


def civil_from_days(n: int) -> tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`: (year, month, day) of a unix day"""
    z = n + _UNIX_EPOCH_OFFSET
    era = _trunc_div(z if z >= 0 else z - (_DAYS_PER_ERA - 1), _DAYS_PER_ERA)
    doe = z - era * _DAYS_PER_ERA  # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    y = yoe + era * 400
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)  # [0, 365]
    mp = (5 * doy + 2) // 153  # [0, 11], March == 0
    d = doy - (153 * mp + 2) // 5 + 1
    m = mp + 3 if mp < 10 else mp - 9
    return (y + (m <= 2), m, d)


# Month codes of the "doomsday"-style weekday formula, January first
_WEEKDAY_MONTH_CODES = [0, 0, 3, 3, 6, 1, 4, 6, 2, 5, 0, 3, 5]

# Century codes. Only these centuries are covered by the formula,
# others fall back to zero and give wrong results.
_WEEKDAY_CENTURY_CODES = {17: 4, 18: 2, 19: 0, 20: 6, 21: 4, 22: 2}


def weekday_code(year: int, month: int, day: int) -> int:
    """Day of the week with Sunday as 0, by a closed-form formula.

    Accurate for the years 1753 through 2299 only.
    """
    short_year = year % 100
    year_code = (short_year + short_year // 4) % 7
    century_code = _WEEKDAY_CENTURY_CODES.get(year // 100, 0)
    leap_code = 1 if month <= 2 and is_leap(year) else 0
    return (
        year_code
        + _WEEKDAY_MONTH_CODES[month]
        + century_code
        + day
        - leap_code
    ) % 7


# The "ordered" helpers below assume `later >= earlier`.
# They are not symmetric, so callers negate the result
# instead of swapping the arguments around.
Ymd = tuple[int, int, int]


def full_years_apart_ordered(earlier: Ymd, later: Ymd) -> int:
    years = later[0] - earlier[0]
    if (later[1], later[2]) < (earlier[1], earlier[2]):
        years -= 1
    return years


def full_months_apart_ordered(earlier: Ymd, later: Ymd) -> int:
    months = calendar_months_apart_ordered(earlier, later)
    if later[2] < earlier[2]:
        months -= 1
    return months


def calendar_months_apart_ordered(earlier: Ymd, later: Ymd) -> int:
    return (later[0] - earlier[0]) * 12 + later[1] - earlier[1]


def days_between_table(earlier: Ymd, later: Ymd) -> int:
    """Calendar days from `earlier` to `later` (`later >= earlier`),
    summed from the month and year tables"""
    (y1, m1, d1), (y2, m2, d2) = earlier, later
    if (y1, m1) == (y2, m2):
        return d2 - d1

    # whole years strictly in between
    days = sum(days_in_year(y) for y in range(y1 + 1, y2))
    # whole months strictly in between
    if y1 == y2:
        days += sum(days_in_month(y1, m) for m in range(m1 + 1, m2))
    else:
        days += sum(days_in_month(y1, m) for m in range(m1 + 1, 13))
        days += sum(days_in_month(y2, m) for m in range(1, m2))
    # the remainder of the first month, and the start of the last one
    return days + days_in_month(y1, m1) - d1 + d2
