"""
Stress tests for thread-safety of the clock, the virtual clock controls,
and timezone lookups.

Note this isn't a unit test, because it replaces the process-wide clock
"""

import sys
import time
from threading import Thread

from tempo import (
    DateTime,
    Instant,
    VirtualClock,
    get_clock,
    set_clock,
)

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


NOW = DateTime.literal("2024-06-15T12:00:00Z")
NUM_THREADS = 16
NUM_ITERATIONS = 5_000
TIMEZONE_SAMPLE = [
    "UTC",
    "America/Guyana",
    "Etc/GMT-11",
    "Europe/Vienna",
    "Asia/Ulaanbaatar",
    "US/Alaska",
    "Pacific/Bougainville",
    "Africa/Monrovia",
    "Europe/Copenhagen",
    "America/Hermosillo",
    "Asia/Tashkent",
    "Pacific/Saipan",
    "Europe/Tallinn",
    "Africa/Nairobi",
    "America/Argentina/Ushuaia",
    "Brazil/Acre",
    "Asia/Kolkata",
]
assert (
    len(TIMEZONE_SAMPLE) % NUM_THREADS
), "Timezone sample should not be evenly divisible by number of threads"
TZS = TIMEZONE_SAMPLE * NUM_ITERATIONS


def take_instants(_):
    """Instants from one thread must be strictly increasing"""
    previous = Instant.now()
    for _ in range(NUM_ITERATIONS):
        current = Instant.now()
        assert current > previous
        previous = current


def warp_clock(_):
    """Concurrent warps must all be accounted for"""
    clock = get_clock()
    assert isinstance(clock, VirtualClock)
    for _ in range(NUM_ITERATIONS):
        clock.warp(1)


def convert_timezones(tzs):
    """A minimal function that triggers a timezone lookup"""
    for tz in tzs:
        dt = NOW.to_timezone(tz)
        del dt


def main(func, args):
    print(f"Starting test: {func.__name__}")
    threads = []

    start_time = time.time()

    for n in range(NUM_THREADS):
        thread = Thread(target=func, args=(args[n::NUM_THREADS],))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(take_instants, [None] * NUM_THREADS)
    main(convert_timezones, TZS)

    clock = VirtualClock()
    clock.freeze(NOW.to_unix_nanoseconds())
    previous = set_clock(clock)
    try:
        main(warp_clock, [None] * NUM_THREADS)
        expected = NOW.to_unix_nanoseconds() + NUM_THREADS * NUM_ITERATIONS
        assert clock.now_ns() == expected, "Lost warps"
        main(take_instants, [None] * NUM_THREADS)
    finally:
        set_clock(previous)
