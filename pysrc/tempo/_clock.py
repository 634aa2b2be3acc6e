"""Access to the current time.

All reads of "now" in the library go through the clock in a single
process-wide cell. By default it reads the host clocks directly.
For testing, a :class:`VirtualClock` can be swapped in.
"""

from __future__ import annotations

import threading
import time
from abc import ABC, abstractmethod
from itertools import count
from typing import Optional

__all__ = ["Clock", "SystemClock", "VirtualClock", "get_clock", "set_clock"]

# next() on itertools.count isn't guaranteed atomic without the GIL
_unique_lock = threading.Lock()
_unique = count(1)


class Clock(ABC):
    """Source of the current wall clock and monotonic readings"""

    __slots__ = ()

    @abstractmethod
    def now_ns(self) -> int:
        """Wall clock time in nanoseconds since the UNIX epoch"""

    @abstractmethod
    def monotonic_ns(self) -> int:
        """A reading which never decreases within the process"""

    def unique(self) -> int:
        """A positive integer, unique and increasing within the process"""
        with _unique_lock:
            return next(_unique)

    def sleep(self, ns: int, /) -> None:
        """Block the calling thread for the given number of nanoseconds"""
        if ns > 0:
            time.sleep(ns / 1_000_000_000)


class SystemClock(Clock):
    """The host's clocks"""

    __slots__ = ()

    def now_ns(self) -> int:
        return time.time_ns()

    def monotonic_ns(self) -> int:
        return time.monotonic_ns()

    def __repr__(self) -> str:
        return "SystemClock()"


class VirtualClock(Clock):
    """A clock for testing, which can be frozen, run from a reference time
    (optionally sped up), or warped forward.

    All state is guarded by a lock, so the clock may be read and adjusted
    from multiple threads.
    """

    __slots__ = (
        "_base",
        "_lock",
        "_frozen",
        "_reference",
        "_warp",
        "_sleep_warp",
    )

    def __init__(self, base: Optional[Clock] = None) -> None:
        self._base = SystemClock() if base is None else base
        self._lock = threading.Lock()
        # (wall ns, monotonic ns) at the moment of freezing
        self._frozen: Optional[tuple[int, int]] = None
        # (reference ns, real wall start, real monotonic start, speedup)
        self._reference: Optional[tuple[int, int, int, float]] = None
        self._warp = 0
        self._sleep_warp = False

    @property
    def base(self) -> Clock:
        return self._base

    def freeze(self, unix_ns: int, /) -> None:
        with self._lock:
            self._frozen = (unix_ns, unix_ns)

    def unfreeze(self) -> None:
        with self._lock:
            self._frozen = None

    def set_reference(self, unix_ns: int, /, speedup: float = 1.0) -> None:
        if speedup <= 0:
            raise ValueError("Speedup must be positive")
        with self._lock:
            self._reference = (
                unix_ns,
                self._base.now_ns(),
                self._base.monotonic_ns(),
                speedup,
            )

    def unset_reference(self) -> None:
        with self._lock:
            self._reference = None

    def warp(self, ns: int, /) -> None:
        with self._lock:
            self._warp += ns

    def reset_warp(self) -> None:
        with self._lock:
            self._warp = 0

    def enable_sleep_warp(self) -> None:
        with self._lock:
            self._sleep_warp = True

    def disable_sleep_warp(self) -> None:
        with self._lock:
            self._sleep_warp = False

    def now_ns(self) -> int:
        with self._lock:
            if self._frozen is not None:
                return self._frozen[0] + self._warp
            elif self._reference is not None:
                ref, wall_start, _, speedup = self._reference
                elapsed = self._base.now_ns() - wall_start
                return ref + int(elapsed * speedup) + self._warp
            return self._base.now_ns() + self._warp

    def monotonic_ns(self) -> int:
        with self._lock:
            if self._frozen is not None:
                return self._frozen[1] + self._warp
            elif self._reference is not None:
                ref, _, mono_start, speedup = self._reference
                elapsed = self._base.monotonic_ns() - mono_start
                return ref + int(elapsed * speedup) + self._warp
            return self._base.monotonic_ns() + self._warp

    def sleep(self, ns: int, /) -> None:
        with self._lock:
            if self._sleep_warp:
                if ns > 0:
                    self._warp += ns
                return
        self._base.sleep(ns)

    def __repr__(self) -> str:
        return f"VirtualClock({self._base!r})"


_clock_lock = threading.Lock()
_clock: Clock = SystemClock()


def get_clock() -> Clock:
    """The clock currently used by the library"""
    return _clock


def set_clock(clock: Clock, /) -> Clock:
    """Replace the process-wide clock, returning the previous one"""
    global _clock
    if not isinstance(clock, Clock):
        raise TypeError(f"Expected Clock, got {type(clock)!r}")
    with _clock_lock:
        previous, _clock = _clock, clock
    return previous
