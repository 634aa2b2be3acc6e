from .provider import (
    TimeZoneProvider,
    ZoneInfoProvider,
    get_tz_provider,
    set_tz_provider,
)

__all__ = [
    "TimeZoneProvider",
    "ZoneInfoProvider",
    "get_tz_provider",
    "set_tz_provider",
]
