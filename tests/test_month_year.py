import pickle
import re

import pytest
from hypothesis import given
from hypothesis.strategies import text

from tempo import (
    Date,
    InvalidFormat,
    InvalidLiteral,
    Month,
    MonthYear,
    OutOfBounds,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual


class TestInit:

    def test_valid(self):
        my = MonthYear(2021, 1)
        assert my.year == 2021
        assert my.month is Month.JANUARY

    @pytest.mark.parametrize(
        "year, month", [(999, 1), (10_000, 1), (2021, 0), (2021, 13)]
    )
    def test_out_of_range(self, year, month):
        with pytest.raises(OutOfBounds):
            MonthYear(year, month)


def test_format_common_iso():
    assert MonthYear(2021, 1).format_common_iso() == "2021-01"
    assert str(MonthYear(2021, 11)) == "2021-11"
    assert repr(MonthYear(2021, 1)) == "MonthYear(2021-01)"


class TestParseCommonIso:

    @pytest.mark.parametrize(
        "s, expect",
        [
            ("2021-01", MonthYear(2021, 1)),
            ("202112", MonthYear(2021, 12)),
        ],
    )
    def test_valid(self, s, expect):
        assert MonthYear.parse_common_iso(s) == expect

    @pytest.mark.parametrize(
        "s", ["", "2021-1", "2021/01", "21-01", "2021-011", "20210", "٢٠٢١-01"]
    )
    def test_invalid(self, s):
        with pytest.raises(
            InvalidFormat,
            match=r"Invalid format.*" + re.escape(repr(s)),
        ):
            MonthYear.parse_common_iso(s)

    def test_out_of_range(self):
        with pytest.raises(OutOfBounds):
            MonthYear.parse_common_iso("2021-13")

    @given(text())
    def test_fuzzing(self, s):
        try:
            MonthYear.parse_common_iso(s)
        except ValueError:
            pass


def test_literal():
    assert MonthYear.literal("2021-01") == MonthYear(2021, 1)
    with pytest.raises(InvalidLiteral):
        MonthYear.literal("2021-00")


def test_next_prev():
    assert MonthYear(2021, 1).next() == MonthYear(2021, 2)
    assert MonthYear(2021, 12).next() == MonthYear(2022, 1)
    assert MonthYear(2021, 1).prev() == MonthYear(2020, 12)
    assert MonthYear(2021, 7).prev() == MonthYear(2021, 6)
    with pytest.raises(OutOfBounds):
        MonthYear(9999, 12).next()
    with pytest.raises(OutOfBounds):
        MonthYear(1000, 1).prev()


def test_days():
    assert MonthYear(2024, 2).days() == 29
    assert MonthYear(2023, 2).days() == 28
    assert MonthYear(2023, 4).days() == 30


def test_dates():
    my = MonthYear(2024, 2)
    assert my.first_day() == Date(2024, 2, 1)
    assert my.last_day() == Date(2024, 2, 29)
    assert my.on_day(14) == Date(2024, 2, 14)
    with pytest.raises(OutOfBounds):
        my.on_day(30)


def test_eq_and_comparison():
    my = MonthYear(2021, 5)
    assert my == MonthYear(2021, 5)
    assert my != MonthYear(2021, 6)
    assert my == AlwaysEqual()
    assert my != NeverEqual()
    assert hash(my) == hash(MonthYear(2021, 5))

    assert my < MonthYear(2021, 6)
    assert my < MonthYear(2022, 1)
    assert my > MonthYear(2020, 12)
    assert my < AlwaysLarger()
    assert my > AlwaysSmaller()
    assert my.is_earlier(MonthYear(2021, 6))


def test_pickling():
    my = MonthYear(2021, 5)
    assert pickle.loads(pickle.dumps(my)) == my


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class SubclassMonthYear(MonthYear):  # type: ignore[misc]
            pass
