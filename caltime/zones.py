"""Timezone name resolution with a process-wide cache."""

import logging
import threading
from datetime import timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from caltime.errors import ParseError, UnknownZoneError

logger = logging.getLogger(__name__)

UTC = timezone.utc

# tzdata names whose offset is zero at every point in time
UTC_NAMES = frozenset(
    {
        "UTC",
        "UCT",
        "Universal",
        "Zulu",
        "GMT",
        "GMT0",
        "GMT+0",
        "GMT-0",
        "Greenwich",
        "Etc/UTC",
        "Etc/UCT",
        "Etc/Universal",
        "Etc/Zulu",
        "Etc/GMT",
        "Etc/GMT0",
        "Etc/GMT+0",
        "Etc/GMT-0",
        "Etc/Greenwich",
    }
)

_cache: dict[str, tzinfo] = {}
_cache_lock = threading.Lock()


def load_zone(name: str) -> tzinfo:
    """Resolve an IANA zone name, caching the result.

    Names in UTC_NAMES resolve to the shared UTC object, so they format as
    ``Z`` like any other UTC value.

    Args:
        name: IANA timezone name (e.g., "UTC", "Europe/Berlin", "US/Pacific")

    Raises:
        UnknownZoneError: If no zone definition exists for name
    """
    if name in UTC_NAMES:
        return UTC
    with _cache_lock:
        zone = _cache.get(name)
        if zone is not None:
            return zone
        try:
            zone = ZoneInfo(name)
        except (ZoneInfoNotFoundError, ValueError, OSError) as err:
            raise UnknownZoneError(name) from err
        logger.debug("loaded timezone %s", name)
        _cache[name] = zone
        return zone


def parse_zone(value: Any) -> tzinfo:
    """Coerce value to a zone name and resolve it via load_zone."""
    if isinstance(value, tzinfo):
        return value
    if not isinstance(value, str):
        raise ParseError(
            f"Timezone must be a name string, got {type(value).__name__!r}: {value!r}"
        )
    return load_zone(value.strip())


def resolve_zone(tz: tzinfo | str) -> tzinfo:
    """Accept either a tzinfo or a zone name, as the tz= keywords do."""
    if isinstance(tz, tzinfo):
        return tz
    return load_zone(tz)


def clear_cache() -> None:
    with _cache_lock:
        _cache.clear()
