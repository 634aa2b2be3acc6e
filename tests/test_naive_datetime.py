import pickle
import re
from datetime import datetime as py_datetime, timezone as py_timezone

import pytest
from hypothesis import given
from hypothesis.strategies import text

from tempo import (
    Date,
    DateTime,
    Duration,
    InvalidFormat,
    InvalidLiteral,
    MissingComponent,
    NaiveDateTime,
    NaivePeriod,
    Offset,
    OutOfBounds,
    Precision,
    Time,
    hours,
    minutes,
    nanoseconds,
)

from .common import (
    AlwaysEqual,
    AlwaysLarger,
    AlwaysSmaller,
    NeverEqual,
    frozen,
)


class TestInit:

    def test_date_and_time(self):
        d = NaiveDateTime(Date(2024, 6, 21), Time(13, 42))
        assert d.date == Date(2024, 6, 21)
        assert d.time == Time(13, 42)
        assert d.year == 2024
        assert d.month == 6
        assert d.day == 21
        assert d.hour == 13
        assert d.minute == 42
        assert d.second == 0
        assert d.nanosecond == 0

    def test_of(self):
        assert NaiveDateTime.of(2024, 6, 21, 13, 42) == NaiveDateTime(
            Date(2024, 6, 21), Time(13, 42)
        )
        d = NaiveDateTime.of(2024, 6, 21, nanosecond=5)
        assert d.time.precision is Precision.NANO
        assert NaiveDateTime.of(2024, 6, 21).time.precision is (
            Precision.SECOND
        )

    def test_invalid(self):
        with pytest.raises(TypeError):
            NaiveDateTime("2024-06-21", Time())  # type: ignore[arg-type]
        with pytest.raises(OutOfBounds):
            NaiveDateTime.of(2024, 2, 30)


def test_str_and_repr():
    d = NaiveDateTime.of(2024, 6, 21, 13, 42, 11)
    assert str(d) == "2024-06-21T13:42:11"
    assert d.format_common_iso() == "2024-06-21T13:42:11"
    assert repr(d) == "NaiveDateTime(2024-06-21T13:42:11)"
    assert str(Date(2024, 6, 21).at(Time.milli(1, 2, 3, 4))) == (
        "2024-06-21T01:02:03.004"
    )


class TestParseCommonIso:

    @pytest.mark.parametrize(
        "s, expect",
        [
            (
                "2024-06-21T13:42:11",
                NaiveDateTime.of(2024, 6, 21, 13, 42, 11),
            ),
            ("2024-06-21t13:42", NaiveDateTime.of(2024, 6, 21, 13, 42)),
            ("2024-06-21 13:42", NaiveDateTime.of(2024, 6, 21, 13, 42)),
            ("2024-06-21_13:42", NaiveDateTime.of(2024, 6, 21, 13, 42)),
            ("20240621T134211", NaiveDateTime.of(2024, 6, 21, 13, 42, 11)),
            ("20240621 1342", NaiveDateTime.of(2024, 6, 21, 13, 42)),
            ("2024/6/21T13:42", NaiveDateTime.of(2024, 6, 21, 13, 42)),
            (
                "2024-06-21T13:42:11.314",
                Date(2024, 6, 21).at(Time.milli(13, 42, 11, 314)),
            ),
            ("2024-06-21T24:00:00", NaiveDateTime.of(2024, 6, 22)),
        ],
    )
    def test_valid(self, s, expect):
        assert NaiveDateTime.parse_common_iso(s) == expect

    @pytest.mark.parametrize(
        "s",
        [
            "2024-06-21T",
            "2024-06-21T13",
            "2024-06-21T13:42Z",
            "2024-06-21T13:42+02:00",
            "2024-06-2113:42",
            "T13:42",
            "garbage",
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(
            InvalidFormat,
            match=r"Invalid format.*" + re.escape(repr(s)),
        ):
            NaiveDateTime.parse_common_iso(s)

    @pytest.mark.parametrize("s", ["2024-06-21", "20240621"])
    def test_missing_time(self, s):
        with pytest.raises(MissingComponent):
            NaiveDateTime.parse_common_iso(s)

    def test_out_of_range(self):
        with pytest.raises(OutOfBounds):
            NaiveDateTime.parse_common_iso("2024-06-21T25:00")

    @given(text())
    def test_fuzzing(self, s):
        try:
            NaiveDateTime.parse_common_iso(s)
        except ValueError:
            pass


def test_literal():
    assert NaiveDateTime.literal("2024-06-21T13:42") == NaiveDateTime.of(
        2024, 6, 21, 13, 42
    )
    with pytest.raises(InvalidLiteral):
        NaiveDateTime.literal("2024-06-21")


def test_end_of_day_equals_next_midnight():
    end = Date(2024, 6, 21).at(Time.END_OF_DAY)
    start = Date(2024, 6, 22).at(Time.MIDNIGHT)
    assert end == start
    assert hash(end) == hash(start)
    assert not end < start
    # they're still distinct values
    assert str(end) != str(start)


def test_eq():
    d = NaiveDateTime.of(2024, 6, 21, 13, 42)
    same = NaiveDateTime.of(2024, 6, 21, 13, 42)
    different = NaiveDateTime.of(2024, 6, 21, 13, 43)

    assert d == same
    assert not d == different
    assert not d == NeverEqual()
    assert d == AlwaysEqual()
    assert hash(d) == hash(same)
    assert hash(d) != hash(different)


def test_comparison():
    d = NaiveDateTime.of(2024, 6, 21, 13, 42)
    later = NaiveDateTime.of(2024, 6, 22, 1)
    earlier = NaiveDateTime.of(2024, 6, 21, 13, 41)

    assert d < later
    assert d > earlier
    assert d <= NaiveDateTime.of(2024, 6, 21, 13, 42)
    assert d < AlwaysLarger()
    assert d > AlwaysSmaller()
    assert d.is_earlier(later)
    assert d.is_later(earlier)
    assert d.compare(later) == -1

    with pytest.raises(TypeError):
        d < d.assume_utc()  # type: ignore[operator]


class TestArithmetic:

    def test_add_carries(self):
        d = NaiveDateTime.of(2024, 12, 31, 23, 30)
        assert d.add(hours(1)) == NaiveDateTime.of(2025, 1, 1, 0, 30)
        assert d + hours(1) == NaiveDateTime.of(2025, 1, 1, 0, 30)

    def test_subtract_borrows(self):
        d = NaiveDateTime.of(2024, 3, 1, 0, 30)
        assert d.subtract(hours(1)) == NaiveDateTime.of(2024, 2, 29, 23, 30)
        assert d - hours(1) == NaiveDateTime.of(2024, 2, 29, 23, 30)

    def test_keeps_precision(self):
        d = Date(2024, 6, 21).at(Time.milli(1, 2, 3, 4))
        assert d.add(nanoseconds(1)).time.precision is Precision.MILLI

    def test_difference(self):
        a = NaiveDateTime.of(2024, 6, 22, 1)
        b = NaiveDateTime.of(2024, 6, 21, 23, 30)
        assert a.difference(b) == minutes(90)
        assert a - b == minutes(90)
        assert b - a == minutes(-90)

    def test_out_of_range(self):
        with pytest.raises(OutOfBounds):
            NaiveDateTime.of(9999, 12, 31, 23).add(hours(1))

    def test_invalid(self):
        with pytest.raises(TypeError):
            NaiveDateTime.of(2024, 1, 1) + 1  # type: ignore[operator]


def test_unix_nanoseconds():
    assert NaiveDateTime.of(1970, 1, 1).to_unix_nanoseconds() == 0
    d = NaiveDateTime.of(1970, 1, 2, nanosecond=1)
    assert d.to_unix_nanoseconds() == 86_400_000_000_001
    assert NaiveDateTime.of(1969, 12, 31, 23).to_unix_nanoseconds() == (
        -3_600_000_000_000
    )


def test_assume():
    d = NaiveDateTime.of(2024, 6, 21, 13, 42)
    assert d.assume_offset(Offset(-240)) == DateTime(d, Offset(-240))
    assert d.assume_utc().exact_eq(DateTime(d, Offset.UTC))


def test_as_period():
    a = NaiveDateTime.of(2024, 6, 21, 13)
    b = NaiveDateTime.of(2024, 6, 23, 11)
    assert a.as_period(b) == NaivePeriod(a, b)
    assert b.as_period(a) == NaivePeriod(a, b)


class TestSerialize:

    def test_serialize(self):
        d = NaiveDateTime.of(2024, 6, 21, 13, 42, 11, nanosecond=314)
        assert d.serialize() == "20240621T134211.000000314"
        assert NaiveDateTime.of(2024, 6, 21).serialize() == (
            "20240621T000000.000000000"
        )

    def test_deserialize(self):
        d = NaiveDateTime.deserialize("20240621T134211.000000314")
        assert d == NaiveDateTime.of(2024, 6, 21, 13, 42, 11, nanosecond=314)
        assert d.time.precision is Precision.NANO

    @pytest.mark.parametrize(
        "s",
        [
            "20240621T134211",
            "20240621T134211.000000314Z",
            "2024-06-21T13:42:11.000000000",
            "20240621T134211.00000031",
        ],
    )
    def test_deserialize_invalid(self, s):
        with pytest.raises(InvalidFormat):
            NaiveDateTime.deserialize(s)


class TestFormat:

    def test_format(self):
        d = NaiveDateTime.of(2024, 6, 21, 18)
        assert d.format("ddd @ h:mm A") == "Fri @ 6:00 PM"
        assert d.format("YYYY-MM-DD HH:mm") == "2024-06-21 18:00"

    def test_format_without_offset(self):
        with pytest.raises(MissingComponent):
            NaiveDateTime.of(2024, 6, 21).format("HH:mm Z")

    def test_parse(self):
        assert NaiveDateTime.parse(
            "Fri, 21 Jun 2024 18:00:05", "ddd, DD MMM YYYY HH:mm:ss"
        ) == NaiveDateTime.of(2024, 6, 21, 18, 0, 5)

    def test_parse_missing_time(self):
        with pytest.raises(MissingComponent):
            NaiveDateTime.parse("2024-06-21", "YYYY-MM-DD")

    def test_parse_literal_mismatch(self):
        with pytest.raises(InvalidFormat):
            NaiveDateTime.parse("2024-06-21 at 18:00", "YYYY-MM-DD [on] HH:mm")

    def test_parse_two_digit_year(self):
        with frozen(DateTime.literal("2024-06-21T12:00:00Z")):
            assert NaiveDateTime.parse(
                "21/06/24 10:00", "DD/MM/YY HH:mm"
            ) == NaiveDateTime.of(2024, 6, 21, 10)
            assert NaiveDateTime.parse(
                "21/06/25 10:00", "DD/MM/YY HH:mm"
            ) == NaiveDateTime.of(1925, 6, 21, 10)


class TestPyDatetime:

    def test_to(self):
        d = Date(2024, 6, 21).at(Time.micro(13, 42, 11, 5))
        assert d.py_datetime() == py_datetime(2024, 6, 21, 13, 42, 11, 5)

    def test_from(self):
        assert NaiveDateTime.from_py_datetime(
            py_datetime(2024, 6, 21, 13, 42)
        ) == NaiveDateTime.of(2024, 6, 21, 13, 42)

    def test_from_aware(self):
        with pytest.raises(ValueError, match="naive"):
            NaiveDateTime.from_py_datetime(
                py_datetime(2024, 6, 21, tzinfo=py_timezone.utc)
            )


def test_now():
    with frozen(DateTime.literal("2024-06-21T12:00:00Z")):
        assert NaiveDateTime.now_utc() == NaiveDateTime.of(2024, 6, 21, 12)


def test_pickling():
    d = Date(2024, 6, 21).at(Time.milli(13, 42, 11, 314))
    loaded = pickle.loads(pickle.dumps(d))
    assert loaded == d
    assert loaded.time.precision is Precision.MILLI


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class SubclassNaiveDateTime(NaiveDateTime):  # type: ignore[misc]
            pass


def test_duration_roundtrip():
    d = NaiveDateTime.of(2024, 6, 21)
    assert d.add(Duration(days=1)).subtract(Duration(days=1)) == d
