"""Named formats for converting between instants and text or numbers.

Textual layouts follow RFC 3339; numeric layouts read and write Unix time at
second, milli, micro or nanosecond resolution.
"""

import logging
import re
from collections.abc import Iterable
from datetime import timedelta, timezone, tzinfo
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

from caltime.errors import ParseError
from caltime.instant import Instant, format_offset
from caltime.util import INT64_MAX, INT64_MIN
from caltime.zones import UTC

logger = logging.getLogger(__name__)

_OFFSET = r"(Z|[+-]\d{2}:\d{2})"
_RFC3339 = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?" + _OFFSET
)
_RFC3339_SHORT = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})" + _OFFSET)
_DATE = re.compile(r"(\d{4})-(\d{2})-(\d{2})")
_INTEGER = re.compile(r"-?\d+")


def parse_offset(text: str) -> tzinfo:
    """Turn ``Z`` or ``+HH:MM`` / ``-HH:MM`` into a tzinfo."""
    if text == "Z":
        return UTC
    sign = -1 if text[0] == "-" else 1
    hours, minutes = int(text[1:3]), int(text[4:6])
    if hours > 23 or minutes > 59:
        raise ParseError(f"Invalid UTC offset '{text}'")
    offset = timedelta(hours=hours, minutes=minutes)
    if not offset:
        return UTC
    return timezone(sign * offset)


def parse_fraction(digits: str | None) -> int:
    """Convert up to nine fraction digits into nanoseconds."""
    if not digits:
        return 0
    return int(digits.ljust(9, "0"))


class Layout(str, Enum):
    """Closed set of supported instant formats."""

    RFC3339 = "rfc3339"
    RFC3339_NANO = "rfc3339nano"
    RFC3339_SHORT = "rfc3339short"
    DATE = "date"
    SECOND = "second"
    MILLI = "milli"
    MICRO = "micro"
    NANO = "nano"

    def __str__(self) -> str:
        return self.value

    @property
    def is_numeric(self) -> bool:
        return self in _NUMERIC

    def format(self, instant: Instant) -> str:
        match self:
            case Layout.SECOND:
                return str(instant.unix())
            case Layout.MILLI:
                return str(instant.unix_milli())
            case Layout.MICRO:
                return str(instant.unix_micro())
            case Layout.NANO:
                return str(instant.unix_nano())
            case Layout.DATE:
                return f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
            case Layout.RFC3339:
                return instant.isoformat(nano=False)
            case Layout.RFC3339_SHORT:
                return (
                    f"{instant.year:04d}-{instant.month:02d}-{instant.day:02d}"
                    f"T{instant.hour:02d}:{instant.minute:02d}"
                    + format_offset(instant.utcoffset())
                )
            case _:
                return instant.isoformat(nano=True)

    def parse(self, value: Any) -> Instant:
        """Parse value with this layout.

        Raises:
            ParseError: If value has the wrong type, does not match the
                layout, overflows 64 bits or is outside the calendar range
        """
        if self.is_numeric:
            return self._parse_numeric(value)
        if not isinstance(value, str):
            raise ParseError(
                f"Cannot parse {type(value).__name__!r} with layout '{self}'.\n"
                f"Textual layouts only accept strings, got {value!r}"
            )
        try:
            return self._parse_text(value)
        except ValueError as err:
            if isinstance(err, ParseError):
                raise
            raise ParseError(f"Parse '{value}' with layout '{self}' failed: {err}") from err

    def _parse_text(self, value: str) -> Instant:
        if self is Layout.DATE:
            match = _DATE.fullmatch(value)
            if match is None:
                raise ParseError(f"'{value}' does not match layout 'date' (YYYY-MM-DD)")
            year, month, day = (int(g) for g in match.groups())
            return Instant.of(year, month, day)

        if self is Layout.RFC3339_SHORT:
            match = _RFC3339_SHORT.fullmatch(value)
            if match is None:
                raise ParseError(
                    f"'{value}' does not match layout '{self}' (YYYY-MM-DDTHH:MMZ)"
                )
            *fields, offset = match.groups()
            year, month, day, hour, minute = (int(g) for g in fields)
            return Instant.of(year, month, day, hour, minute, tz=parse_offset(offset))

        match = _RFC3339.fullmatch(value)
        if match is None:
            raise ParseError(
                f"'{value}' does not match layout '{self}' "
                f"(YYYY-MM-DDTHH:MM:SS[.fraction]Z)"
            )
        *fields, fraction, offset = match.groups()
        year, month, day, hour, minute, second = (int(g) for g in fields)
        return Instant.of(
            year,
            month,
            day,
            hour,
            minute,
            second,
            parse_fraction(fraction),
            tz=parse_offset(offset),
        )

    def _parse_numeric(self, value: Any) -> Instant:
        number = parse_int64(value)
        try:
            match self:
                case Layout.SECOND:
                    return Instant.from_unix(number)
                case Layout.MILLI:
                    return Instant.from_unix_milli(number)
                case Layout.MICRO:
                    return Instant.from_unix_micro(number)
                case _:
                    return Instant.from_unix_nano(number)
        except (OverflowError, ValueError) as err:
            raise ParseError(
                f"{value!r} is outside the representable range for layout '{self}'"
            ) from err


_NUMERIC = frozenset({Layout.SECOND, Layout.MILLI, Layout.MICRO, Layout.NANO})


def parse_int64(value: Any) -> int:
    """Coerce an int, float or digit string to a signed 64-bit integer.

    Floats round half away from zero (1.5 -> 2, -1.5 -> -2).
    """
    if isinstance(value, bool):
        raise ParseError(f"Cannot convert bool {value!r} to an integer")
    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        try:
            number = int(Decimal(value).to_integral_value(rounding=ROUND_HALF_UP))
        except (InvalidOperation, ValueError, OverflowError) as err:
            raise ParseError(f"Cannot convert {value!r} to an integer") from err
    elif isinstance(value, str):
        if not _INTEGER.fullmatch(value.strip()):
            raise ParseError(f"'{value}' is not an integer")
        number = int(value.strip())
    else:
        raise ParseError(
            f"Cannot convert {type(value).__name__!r} to an integer: {value!r}"
        )
    if not INT64_MIN <= number <= INT64_MAX:
        raise ParseError(f"{value!r} overflows a signed 64-bit integer")
    return number


class Layouts(tuple[Layout, ...]):
    """Ordered candidate layouts; parse returns the first that succeeds."""

    def __new__(cls, layouts: Iterable[Layout] = ()) -> "Layouts":
        return super().__new__(cls, (Layout(layout) for layout in layouts))

    def parse(self, value: Any) -> Instant:
        for layout in self:
            try:
                return layout.parse(value)
            except ParseError as err:
                logger.debug("layout %s rejected %r: %s", layout, value, err)
        raise ParseError(
            f"Parse '{value}' with any layout failed.\n"
            f"Tried: {', '.join(str(layout) for layout in self) or 'no layouts'}"
        )


DEFAULT_LAYOUTS = Layouts(
    (Layout.RFC3339_NANO, Layout.RFC3339, Layout.RFC3339_SHORT, Layout.DATE)
)
