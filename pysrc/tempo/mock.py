"""Process-wide control over the current time, for tests.

The first call to any of these functions installs a :class:`VirtualClock`
wrapping the active clock. :func:`reset` removes it again.

Example
-------
>>> from tempo import DateTime, mock, seconds
>>> mock.freeze_time(DateTime.literal("2024-06-21T13:42:00Z"))
>>> mock.warp_time(seconds(5))
>>> DateTime.now_utc() == DateTime.literal("2024-06-21T13:42:05Z")
True
>>> mock.reset()
"""

from __future__ import annotations

import threading

from ._clock import VirtualClock, get_clock, set_clock
from ._pytempo import DateTime, Duration

__all__ = [
    "freeze_time",
    "unfreeze_time",
    "set_reference_time",
    "unset_reference_time",
    "warp_time",
    "reset_warp_time",
    "enable_sleep_warp",
    "disable_sleep_warp",
    "reset",
]

_install_lock = threading.Lock()


def _virtual() -> VirtualClock:
    with _install_lock:
        clock = get_clock()
        if not isinstance(clock, VirtualClock):
            clock = VirtualClock(clock)
            set_clock(clock)
        return clock


def freeze_time(dt: DateTime, /) -> None:
    """Stop the clock at the given moment. Both the wall clock and
    the monotonic clock stand still until :func:`unfreeze_time`."""
    _virtual().freeze(dt.to_unix_nanoseconds())


def unfreeze_time() -> None:
    _virtual().unfreeze()


def set_reference_time(dt: DateTime, /, speedup: float = 1.0) -> None:
    """Let the clock run from the given moment, optionally faster
    (or slower) than real time"""
    _virtual().set_reference(dt.to_unix_nanoseconds(), speedup)


def unset_reference_time() -> None:
    _virtual().unset_reference()


def warp_time(d: Duration, /) -> None:
    """Move the clock by the given duration. Warps accumulate."""
    _virtual().warp(d.in_nanoseconds())


def reset_warp_time() -> None:
    _virtual().reset_warp()


def enable_sleep_warp() -> None:
    """Make :func:`tempo.sleep` advance the clock and return immediately"""
    _virtual().enable_sleep_warp()


def disable_sleep_warp() -> None:
    _virtual().disable_sleep_warp()


def reset() -> None:
    """Remove all overrides, restoring the clock that was active
    before the first override"""
    with _install_lock:
        clock = get_clock()
        if isinstance(clock, VirtualClock):
            set_clock(clock.base)
