from __future__ import annotations

from ._pytempo import *
from ._pytempo import (  # for the docs and unpickling
    __all__ as _core_all,
    __version__,
    _PeriodBase,
    _unpkl_date,
    _unpkl_datetime,
    _unpkl_duration,
    _unpkl_my,
    _unpkl_naive,
    _unpkl_time,
)
from ._clock import Clock, SystemClock, VirtualClock, get_clock, set_clock
from ._format import (
    EMAIL,
    HTTP,
    ISO8601_DATE,
    ISO8601_DATETIME,
    ISO8601_TIME,
    ISO8601_TIME_MILLI,
    READABLE,
)
from ._common import TimeZoneNotFoundError
from ._tz import (
    TimeZoneProvider,
    ZoneInfoProvider,
    get_tz_provider,
    set_tz_provider,
)

from contextlib import contextmanager as _contextmanager
from dataclasses import dataclass as _dataclass
from typing import Iterator as _Iterator

__all__ = [
    *_core_all,
    "Clock",
    "SystemClock",
    "VirtualClock",
    "get_clock",
    "set_clock",
    "TimeZoneProvider",
    "ZoneInfoProvider",
    "TimeZoneNotFoundError",
    "get_tz_provider",
    "set_tz_provider",
    "ISO8601_DATE",
    "ISO8601_TIME",
    "ISO8601_TIME_MILLI",
    "ISO8601_DATETIME",
    "HTTP",
    "EMAIL",
    "READABLE",
    "patch_current_time",
    "sleep",
]


def sleep(duration: Duration, /) -> None:
    """Block for the given duration, using the active clock.

    Under :func:`tempo.mock.enable_sleep_warp`, this returns immediately
    and advances the virtual clock instead.
    """
    get_clock().sleep(duration.in_nanoseconds())


@_dataclass
class _TimePatch:
    _clock: VirtualClock

    def shift(self, d: Duration, /) -> None:
        """Move the patched time by the given duration"""
        self._clock.warp(d.in_nanoseconds())


@_contextmanager
def patch_current_time(
    dt: DateTime,
    /,
    *,
    keep_ticking: bool,
) -> _Iterator[_TimePatch]:
    """Patch the current time to a fixed value (for testing purposes).
    Behaves as a context manager or decorator, with similar semantics to
    ``unittest.mock.patch``.

    Important
    ---------

    * This function should be used only for testing purposes.
    * This function only affects tempo's ``now`` functions. It does not
      affect the standard library's time functions or any other libraries.
    * It doesn't affect the system timezone.
      If you need to patch the system timezone, set the ``TZ`` environment
      variable, or inject a provider with :func:`set_tz_provider`.

    Example
    -------

    >>> from tempo import DateTime, hours, patch_current_time
    >>> dt = DateTime.literal("1980-03-02T02:00:00Z")
    >>> with patch_current_time(dt, keep_ticking=False) as p:
    ...     assert DateTime.now_utc() == dt
    ...     p.shift(hours(4))
    ...     assert DateTime.now_utc() == dt + hours(4)
    ...
    >>> assert DateTime.now_utc() != dt
    """
    clock = VirtualClock(get_clock())
    if keep_ticking:
        clock.set_reference(dt.to_unix_nanoseconds())
    else:
        clock.freeze(dt.to_unix_nanoseconds())

    previous = set_clock(clock)
    try:
        yield _TimePatch(clock)
    finally:
        set_clock(previous)
