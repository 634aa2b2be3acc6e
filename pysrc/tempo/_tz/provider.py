"""Timezone offset lookups.

The library itself contains no timezone data. Conversions to named
timezones go through a provider, which can be swapped out.
The default provider uses the standard library's :mod:`zoneinfo`.
"""

from __future__ import annotations

import threading
from abc import ABC, abstractmethod
from datetime import datetime as _datetime, timezone as _timezone
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from .._common import TimeZoneNotFoundError
from . import system

__all__ = [
    "TimeZoneProvider",
    "ZoneInfoProvider",
    "get_tz_provider",
    "set_tz_provider",
]


class TimeZoneProvider(ABC):
    """Looks up UTC offsets for timezone IDs"""

    __slots__ = ()

    @abstractmethod
    def offset_at(self, tz: str, unix_ns: int, /) -> int:
        """The offset (in minutes east of UTC) in effect in the given
        timezone at the given instant (nanoseconds since the UNIX epoch).

        Raises :class:`TimeZoneNotFoundError` for unknown timezones.
        """

    @abstractmethod
    def local_tz(self) -> str:
        """The ID of the host's timezone"""


class ZoneInfoProvider(TimeZoneProvider):
    """Provider backed by :class:`zoneinfo.ZoneInfo`"""

    __slots__ = ()

    def offset_at(self, tz: str, unix_ns: int, /) -> int:
        utc = _datetime.fromtimestamp(unix_ns // 1_000_000_000, _timezone.utc)
        if tz == system.UNKNOWN_KEY:
            local = utc.astimezone()
        else:
            try:
                local = utc.astimezone(ZoneInfo(tz))
            except (ZoneInfoNotFoundError, ValueError, OSError):
                raise TimeZoneNotFoundError(
                    f"No time zone found with key {tz!r}"
                ) from None
        offset = local.utcoffset()
        assert offset is not None
        return int(offset.total_seconds()) // 60

    def local_tz(self) -> str:
        return system.local_tz_key()

    def __repr__(self) -> str:
        return "ZoneInfoProvider()"


_provider_lock = threading.Lock()
_provider: TimeZoneProvider = ZoneInfoProvider()


def get_tz_provider() -> TimeZoneProvider:
    """The provider used when none is passed explicitly"""
    return _provider


def set_tz_provider(provider: TimeZoneProvider, /) -> TimeZoneProvider:
    """Replace the default provider, returning the previous one"""
    global _provider
    if not isinstance(provider, TimeZoneProvider):
        raise TypeError(f"Expected TimeZoneProvider, got {type(provider)!r}")
    with _provider_lock:
        previous, _provider = _provider, provider
    return previous
