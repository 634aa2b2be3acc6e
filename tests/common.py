import os
from contextlib import contextmanager
from unittest.mock import patch
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from tempo import (
    DateTime,
    TimeZoneNotFoundError,
    TimeZoneProvider,
    mock,
)


class AlwaysEqual:
    def __eq__(self, _):
        return True


class NeverEqual:
    def __eq__(self, _):
        return False


class AlwaysLarger:
    def __lt__(self, _):
        return False

    def __le__(self, _):
        return False

    def __gt__(self, _):
        return True

    def __ge__(self, _):
        return True


class AlwaysSmaller:
    def __lt__(self, _):
        return True

    def __le__(self, _):
        return True

    def __gt__(self, _):
        return False

    def __ge__(self, _):
        return False


class FixedProvider(TimeZoneProvider):
    """A provider with a handful of fixed-offset zones, so tests
    don't depend on the host's timezone data"""

    ZONES = {
        "Test/Plus2": 120,
        "Test/Minus4": -240,
        "Test/Kolkata": 330,
        "UTC": 0,
    }

    def __init__(self, local: str = "Test/Plus2") -> None:
        self.local = local
        self.calls: list[tuple[str, int]] = []

    def offset_at(self, tz, unix_ns, /):
        self.calls.append((tz, unix_ns))
        try:
            return self.ZONES[tz]
        except KeyError:
            raise TimeZoneNotFoundError(tz) from None

    def local_tz(self):
        return self.local


def has_tzdata(key: str = "Europe/Amsterdam") -> bool:
    try:
        ZoneInfo(key)
    except ZoneInfoNotFoundError:
        return False
    return True


@contextmanager
def frozen(dt: DateTime):
    try:
        mock.freeze_time(dt)
        yield
    finally:
        mock.reset()  # don't forget to restore the clock after the patch!


@contextmanager
def system_tz(name: str):
    with patch.dict(os.environ, {"TZ": name}):
        yield
