import os
import os.path
import platform
from typing import Optional

SYSTEM = platform.system()
LOCALTIME = "/etc/localtime"
# The name used when the host's zone can't be identified by an IANA key.
# Providers resolve it with whatever the host reports.
UNKNOWN_KEY = "localtime"

# Getting the system timezone key depends on the platform.
# On unix-like systems it's relatively straightforward.
# On other platforms, we use the tzlocal package.
if SYSTEM in ("Linux", "Darwin"):  # pragma: no cover

    def _key_from_host() -> str:
        tzif_path = os.path.realpath(LOCALTIME)
        if tzif_path == LOCALTIME:
            # not a symlink, so there's no way to tell the key
            return UNKNOWN_KEY
        return _tzid_from_path(tzif_path) or UNKNOWN_KEY

else:  # pragma: no cover
    import tzlocal

    def _key_from_host() -> str:
        return tzlocal.get_localzone_name() or UNKNOWN_KEY


def _tzid_from_path(path: str) -> Optional[str]:
    """Find the IANA timezone ID from a path to a zoneinfo file.
    Returns None if the path is not in a zoneinfo directory.
    """
    # Find the path segment containing 'zoneinfo',
    # e.g. `zoneinfo/` or `zoneinfo.default/`
    if (index := path.find("/", path.rfind("zoneinfo"))) == -1:
        return None
    return path[index + 1 :]


def local_tz_key() -> str:
    """The IANA key of the system timezone, or :data:`UNKNOWN_KEY`.

    The ``TZ`` environment variable takes precedence over the host settings.
    Absolute paths and POSIX TZ strings in ``TZ`` can't be mapped to a key.
    """
    try:
        tz_env = os.environ["TZ"]
    except KeyError:  # pragma: no cover
        return _key_from_host()

    if tz_env.startswith(":"):
        tz_env = tz_env[1:]  # strip leading colon

    if not tz_env:
        return "UTC"
    elif os.path.isabs(tz_env):
        return _tzid_from_path(tz_env) or UNKNOWN_KEY
    # If there's a digit, it may be a posix TZ string. Theoretically
    # a zoneinfo key could contain a digit too, e.g. "Etc/GMT+5".
    elif any(c.isdigit() for c in tz_env) and not tz_env.startswith("Etc/"):
        return UNKNOWN_KEY
    return tz_env
