import pickle
import re
from copy import copy, deepcopy
from datetime import time as py_time

import pytest
from hypothesis import given
from hypothesis.strategies import integers, text

from tempo import (
    ISO8601_TIME_MILLI,
    Date,
    Duration,
    InvalidFormat,
    InvalidLiteral,
    MissingComponent,
    NaiveDateTime,
    OutOfBounds,
    Precision,
    Time,
    hours,
    minutes,
    nanoseconds,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual

NS_PER_DAY = 86_400_000_000_000


class TestInit:

    def test_all_args(self):
        t = Time(1, 2, 3)
        assert t.hour == 1
        assert t.minute == 2
        assert t.second == 3
        assert t.nanosecond == 0
        assert t.precision is Precision.SECOND

    def test_defaults(self):
        assert Time() == Time(0, 0, 0)

    @pytest.mark.parametrize(
        "args",
        [
            (25,),
            (-1,),
            (0, 60),
            (0, 0, 61),
            (24, 0, 1),
            (24, 1),
            (12, 0, 60),
            (23, 58, 60),
        ],
    )
    def test_out_of_range(self, args):
        with pytest.raises(OutOfBounds):
            Time(*args)

    def test_end_of_day(self):
        t = Time(24)
        assert t.hour == 24
        assert t.to_nanoseconds() == NS_PER_DAY

    def test_leap_second(self):
        t = Time(23, 59, 60)
        assert t.second == 60
        assert Time.nano(23, 59, 60, 500_000_000).nanosecond == 500_000_000

    def test_precisions(self):
        assert Time.milli(1, 2, 3, 4).nanosecond == 4_000_000
        assert Time.milli(1, 2, 3, 4).precision is Precision.MILLI
        assert Time.micro(1, 2, 3, 4).nanosecond == 4_000
        assert Time.micro(1, 2, 3, 4).precision is Precision.MICRO
        assert Time.nano(1, 2, 3, 4).nanosecond == 4
        assert Time.nano(1, 2, 3, 4).precision is Precision.NANO

    @pytest.mark.parametrize(
        "factory, value",
        [
            (Time.milli, 1_000),
            (Time.milli, -1),
            (Time.micro, 1_000_000),
            (Time.nano, 1_000_000_000),
            (Time.nano, -1),
        ],
    )
    def test_subsecond_out_of_range(self, factory, value):
        with pytest.raises(OutOfBounds):
            factory(1, 2, 3, value)

    def test_end_of_day_with_fraction(self):
        with pytest.raises(OutOfBounds):
            Time.milli(24, 0, 0, 1)


def test_constants():
    assert Time.MIDNIGHT == Time()
    assert Time.NOON == Time(12)
    assert Time.END_OF_DAY == Time(24)
    assert str(Time.END_OF_DAY) == "24:00:00"


@pytest.mark.parametrize(
    "t, expect",
    [
        (Time(1, 2, 3), "01:02:03"),
        (Time.milli(1, 2, 3, 4), "01:02:03.004"),
        (Time.micro(1, 2, 3, 4), "01:02:03.000004"),
        (Time.nano(1, 2, 3, 5), "01:02:03.000000005"),
        (Time.nano(1, 2, 3, 0), "01:02:03.000000000"),
        (Time(24), "24:00:00"),
        (Time(23, 59, 60), "23:59:60"),
    ],
)
def test_format_common_iso(t, expect):
    assert t.format_common_iso() == expect
    assert str(t) == expect


def test_repr():
    assert repr(Time(1, 2, 3)) == "Time(01:02:03)"
    assert repr(Time.milli(1, 2, 3, 40)) == "Time(01:02:03.040)"


class TestParseCommonIso:

    @pytest.mark.parametrize(
        "s, expect, precision",
        [
            ("12:30", Time(12, 30), Precision.SECOND),
            ("12:30:15", Time(12, 30, 15), Precision.SECOND),
            ("1230", Time(12, 30), Precision.SECOND),
            ("123015", Time(12, 30, 15), Precision.SECOND),
            ("12:30:15.25", Time.milli(12, 30, 15, 250), Precision.MILLI),
            ("12:30:15,5", Time.milli(12, 30, 15, 500), Precision.MILLI),
            ("12:30:15.1234", Time.micro(12, 30, 15, 123_400), Precision.MICRO),
            (
                "12:30:15.123456789",
                Time.nano(12, 30, 15, 123_456_789),
                Precision.NANO,
            ),
            ("123015.5", Time.milli(12, 30, 15, 500), Precision.MILLI),
            ("24:00:00", Time(24), Precision.SECOND),
            ("23:59:60", Time(23, 59, 60), Precision.SECOND),
            (
                "23:59:60.5",
                Time.milli(23, 59, 60, 500),
                Precision.MILLI,
            ),
        ],
    )
    def test_valid(self, s, expect, precision):
        t = Time.parse_common_iso(s)
        assert t == expect
        assert t.precision is precision

    @pytest.mark.parametrize(
        "s",
        [
            "",
            "12",
            "12:3",
            "1:30",
            "12:30:",
            "12.30",
            "12:30.5",
            "12:30:15.",
            "12:30:15.1234567890",
            "12:30:15Z",
            "12:30:15+02:00",
            "12:30:1a",
            "12:30:15:00",
            "12345",
            "１２:30",
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(
            InvalidFormat,
            match=r"Invalid format.*" + re.escape(repr(s)),
        ):
            Time.parse_common_iso(s)

    @pytest.mark.parametrize(
        "s", ["24:00:01", "25:00", "12:60", "12:30:60", "24:00:00.1"]
    )
    def test_out_of_range(self, s):
        with pytest.raises(OutOfBounds):
            Time.parse_common_iso(s)

    @given(text())
    def test_fuzzing(self, s):
        try:
            Time.parse_common_iso(s)
        except ValueError:
            pass


def test_literal():
    assert Time.literal("12:30") == Time(12, 30)
    with pytest.raises(InvalidLiteral):
        Time.literal("12:60")


def test_eq():
    t = Time.milli(1, 2, 3, 4)
    same = Time.milli(1, 2, 3, 4)
    different = Time.milli(1, 2, 3, 5)

    assert t == same
    assert not t == different
    assert not t == NeverEqual()
    assert t == AlwaysEqual()

    assert not t != same
    assert t != different
    assert t != NeverEqual()
    assert not t != AlwaysEqual()

    assert hash(t) == hash(same)
    assert hash(t) != hash(different)


def test_eq_ignores_precision():
    assert Time.milli(12, 0, 0, 0) == Time(12)
    assert hash(Time.nano(12, 0, 0, 0)) == hash(Time(12))
    assert Time.nano(1, 0, 0, 1) != Time(1)


def test_comparison():
    t = Time.milli(1, 2, 3, 4)
    same = Time.micro(1, 2, 3, 4_000)
    bigger = Time(2, 2, 3)
    smaller = Time.nano(1, 2, 3, 3_999_999)

    assert t <= same
    assert t <= bigger
    assert not t <= smaller
    assert t <= AlwaysLarger()
    assert not t <= AlwaysSmaller()

    assert not t < same
    assert t < bigger
    assert not t < smaller
    assert t < AlwaysLarger()
    assert not t < AlwaysSmaller()

    assert t >= same
    assert not t >= bigger
    assert t >= smaller
    assert not t >= AlwaysLarger()
    assert t >= AlwaysSmaller()

    assert not t > same
    assert not t > bigger
    assert t > smaller
    assert not t > AlwaysLarger()
    assert t > AlwaysSmaller()

    assert Time(23, 59, 59) < Time(24)


class TestNanoseconds:

    def test_to(self):
        assert Time().to_nanoseconds() == 0
        assert Time(1).to_nanoseconds() == 3_600_000_000_000
        assert Time.nano(0, 0, 1, 5).to_nanoseconds() == 1_000_000_005

    def test_from(self):
        assert Time.from_nanoseconds(0) == Time.MIDNIGHT
        assert Time.from_nanoseconds(-1) == Time.nano(23, 59, 59, 999_999_999)
        assert Time.from_nanoseconds(NS_PER_DAY) == Time.MIDNIGHT
        assert Time.from_nanoseconds(1).precision is Precision.NANO

    @given(integers(0, NS_PER_DAY - 1))
    def test_roundtrip(self, ns):
        assert Time.from_nanoseconds(ns).to_nanoseconds() == ns

    def test_duration(self):
        assert Time(1, 30).to_duration() == Duration(minutes=90)
        assert Time.from_duration(Duration(hours=25)) == Time(1)
        assert Time.from_duration(Duration(minutes=-30)) == Time(23, 30)


class TestArithmetic:

    def test_add_wraps(self):
        assert Time(23, 30).add(hours(1)) == Time(0, 30)
        assert Time(23, 30) + hours(1) == Time(0, 30)
        assert Time(1).add(hours(48)) == Time(1)

    def test_subtract_wraps(self):
        assert Time(0, 30).subtract(hours(1)) == Time(23, 30)
        assert Time(0, 30) - hours(1) == Time(23, 30)

    def test_precision_kept(self):
        t = Time.milli(12, 0, 0, 1).add(nanoseconds(5))
        assert t.precision is Precision.MILLI
        # full resolution is kept, only the rendering is truncated
        assert t.nanosecond == 1_000_005
        assert str(t) == "12:00:00.001"

    def test_difference(self):
        assert Time(12).difference(Time(10, 30)) == Duration(minutes=90)
        assert Time(12) - Time(10, 30) == Duration(minutes=90)
        assert Time(10, 30) - Time(12) == Duration(minutes=-90)

    def test_invalid(self):
        with pytest.raises(TypeError):
            Time(12).add(5)  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            Time(12) + 5  # type: ignore[operator]
        with pytest.raises(TypeError):
            Time(12) - 5  # type: ignore[operator]


@pytest.mark.parametrize(
    "t, expect",
    [
        (Time(18, 30), Time(5, 30)),
        (Time.MIDNIGHT, Time(24)),
        (Time(24), Time.MIDNIGHT),
        (Time(12), Time(12)),
        (Time.milli(23, 59, 59, 999), Time.milli(0, 0, 0, 1)),
    ],
)
def test_left_in_day(t, expect):
    assert t.left_in_day() == expect


def test_left_in_day_of_midnight_is_end_of_day():
    assert str(Time.MIDNIGHT.left_in_day()) == "24:00:00"


def test_with_precision():
    t = Time.nano(1, 2, 3, 123_456_789)
    assert str(t.with_precision(Precision.MILLI)) == "01:02:03.123"
    assert t.with_precision(Precision.MILLI).nanosecond == 123_000_000
    assert t.with_precision(Precision.SECOND) == Time(1, 2, 3)
    assert t.with_precision(Precision.NANO) == t


def test_on():
    assert Time(12, 30).on(Date(2021, 1, 2)) == NaiveDateTime(
        Date(2021, 1, 2), Time(12, 30)
    )


class TestPyTime:

    def test_to(self):
        assert Time.micro(1, 2, 3, 4).py_time() == py_time(1, 2, 3, 4)
        assert Time.nano(1, 2, 3, 4_999).py_time() == py_time(1, 2, 3, 4)

    def test_unrepresentable(self):
        with pytest.raises(OutOfBounds):
            Time(24).py_time()
        with pytest.raises(OutOfBounds):
            Time(23, 59, 60).py_time()

    def test_from(self):
        assert Time.from_py_time(py_time(1, 2, 3)) == Time(1, 2, 3)
        assert Time.from_py_time(py_time(1, 2, 3)).precision is Precision.SECOND
        t = Time.from_py_time(py_time(1, 2, 3, 4))
        assert t == Time.micro(1, 2, 3, 4)
        assert t.precision is Precision.MICRO

    def test_from_invalid(self):
        with pytest.raises(TypeError):
            Time.from_py_time(234)  # type: ignore[arg-type]


class TestFormat:

    @pytest.mark.parametrize(
        "t, fmt, expect",
        [
            (Time(18), "h:mm A", "6:00 PM"),
            (Time(6), "h:mm A", "6:00 AM"),
            (Time(0, 5), "hh:mm a", "12:05 am"),
            (Time(12, 5), "h:mm a", "12:05 pm"),
            (Time.milli(13, 42, 11, 314), ISO8601_TIME_MILLI, "13:42:11.314"),
            (Time.nano(1, 2, 3, 4), "H:m:s SSSSS", "1:2:3 000000004"),
            (Time.micro(1, 2, 3, 4), "SSSS", "000004"),
            (Time(9), "HH [o'clock]", "09 o'clock"),
        ],
    )
    def test_format(self, t, fmt, expect):
        assert t.format(fmt) == expect

    def test_date_directive_missing(self):
        with pytest.raises(MissingComponent):
            Time(12).format("YYYY")

    @pytest.mark.parametrize(
        "s, fmt, expect",
        [
            ("6:00 PM", "h:mm A", Time(18)),
            ("6:00 am", "h:mm a", Time(6)),
            ("12:00 AM", "h:mm A", Time(0)),
            ("12:00 PM", "h:mm A", Time(12)),
            ("13:42:11", "HH:mm:ss", Time(13, 42, 11)),
            ("7", "H", Time(7)),
        ],
    )
    def test_parse(self, s, fmt, expect):
        assert Time.parse(s, fmt) == expect

    def test_parse_precision(self):
        t = Time.parse("13:42:11.314", ISO8601_TIME_MILLI)
        assert t == Time.milli(13, 42, 11, 314)
        assert t.precision is Precision.MILLI

    def test_parse_missing_hour(self):
        with pytest.raises(MissingComponent):
            Time.parse("30", "mm")
        with pytest.raises(MissingComponent):
            Time.parse("2024", "YYYY")


def test_copy():
    t = Time(1, 2, 3)
    assert copy(t) is t
    assert deepcopy(t) is t


def test_pickling():
    t = Time.micro(1, 2, 3, 4)
    dumped = pickle.dumps(t)
    assert len(dumped) < len(pickle.dumps(t.py_time())) + 10
    loaded = pickle.loads(dumped)
    assert loaded == t
    assert loaded.precision is Precision.MICRO


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class SubclassTime(Time):  # type: ignore[misc]
            pass


def test_minutes_helper_is_duration():
    assert Time(0).add(minutes(90)) == Time(1, 30)
