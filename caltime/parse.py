"""Flexible time parsing.

parse_time is the single entry point used by the Date, DateTime and UnixTime
constructors. It accepts ``NOW``, ``NOW-14d`` style relative offsets and the
RFC 3339 / date-only layouts.
"""

import logging
import re
from typing import Any

from caltime.clock import SYSTEM_CLOCK, Clock
from caltime.duration import parse_duration
from caltime.errors import ParseError
from caltime.instant import Instant
from caltime.layout import DEFAULT_LAYOUTS

logger = logging.getLogger(__name__)

NOW = "NOW"

_RELATIVE = re.compile(r"NOW([+-])(.+)")


def as_text(value: Any) -> str:
    """Coerce a primitive scalar to text.

    Raises:
        ParseError: If value is not a str, int or float
    """
    if isinstance(value, str):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return str(value)
    raise ParseError(
        f"Cannot parse {type(value).__name__!r} as time: {value!r}\n"
        f"Expected a string like 'NOW', 'NOW-14d' or '2023-06-19T07:56:34Z'"
    )


def parse_time(value: Any, clock: Clock | None = None) -> Instant:
    """Resolve a textual or numeric value to an Instant.

    Tried in order, first match wins:
        - ``NOW``: the clock's current reading
        - ``NOW+<duration>`` / ``NOW-<duration>``: e.g. ``NOW-14d``, ``NOW+1h``
        - RFC 3339 with fraction, RFC 3339, RFC 3339 without seconds
          (``2023-06-19T07:56Z``), date only (``2023-06-19``)

    Args:
        value: String or number to parse
        clock: Source of the current time (default: the system clock)

    Raises:
        ParseError: If value matches none of the supported forms
    """
    text = as_text(value)
    clock = clock or SYSTEM_CLOCK

    if text == NOW:
        return clock.now()

    match = _RELATIVE.fullmatch(text)
    if match is not None:
        sign, expression = match.groups()
        try:
            offset = parse_duration(expression)
        except ParseError as err:
            raise ParseError(f"Invalid relative time '{text}': {err}") from err
        if sign == "-":
            offset = -offset
        try:
            return clock.now().add(offset)
        except (OverflowError, ValueError) as err:
            raise ParseError(
                f"Invalid relative time '{text}': result is outside the "
                f"representable range (years 1-9999)"
            ) from err

    try:
        return DEFAULT_LAYOUTS.parse(text)
    except ParseError as err:
        logger.debug("no layout matched %r", text)
        raise ParseError(
            f"Cannot parse '{text}' as time.\n"
            f"Supported: NOW, NOW-14d, NOW+1h, 2023-06-19T07:56:34.123Z, "
            f"2023-06-19T07:56:34Z, 2023-06-19T07:56Z, 2023-06-19"
        ) from err
