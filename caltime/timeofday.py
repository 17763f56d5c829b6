import re
from dataclasses import dataclass
from datetime import timezone, tzinfo
from typing import Any
from zoneinfo import ZoneInfo

from caltime.clock import SYSTEM_CLOCK, Clock
from caltime.dates import Date, DateTime
from caltime.errors import ParseError, ValidationError
from caltime.instant import HasTime, Instant, format_offset
from caltime.layout import parse_fraction, parse_offset
from caltime.parse import NOW, as_text, parse_time
from caltime.zones import UTC, load_zone, resolve_zone

# 13:37, 13:37:42, 13:37:42.123Z, 13:37:42+02:00, 13:37:42 Europe/Berlin
_TIME_OF_DAY = re.compile(
    r"(\d{1,2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?"
    r"(?:(Z|[+-]\d{2}:\d{2})|\s+(\S+))?"
)


@dataclass(frozen=True)
class TimeOfDay:
    """A wall-clock time with a zone but without a calendar date.

    The zone's UTC offset is only fixed once the time is placed on a date, so
    "15:37:59 Europe/Berlin" is +01:00 in January and +02:00 in July.
    """

    hour: int = 0
    minute: int = 0
    second: int = 0
    nanosecond: int = 0
    zone: tzinfo = UTC

    def __post_init__(self) -> None:
        object.__setattr__(self, "zone", resolve_zone(self.zone))
        if not 0 <= self.hour < 24:
            raise ValidationError(f"hour must be in range [0, 24), got {self.hour}")
        if not 0 <= self.minute < 60:
            raise ValidationError(f"minute must be in range [0, 60), got {self.minute}")
        if not 0 <= self.second < 60:
            raise ValidationError(f"second must be in range [0, 60), got {self.second}")
        if not 0 <= self.nanosecond < 1_000_000_000:
            raise ValidationError(
                f"nanosecond must be in range [0, 1000000000), got {self.nanosecond}"
            )

    @classmethod
    def from_instant(cls, value: HasTime) -> "TimeOfDay":
        instant = value.as_instant()
        return cls(
            instant.hour,
            instant.minute,
            instant.second,
            instant.nanosecond,
            instant.tzinfo,
        )

    def date(self, year: int, month: int, day: int) -> DateTime:
        """Place this time on a calendar date in its own zone.

        The UTC offset is resolved for the target date, so DST rules in effect
        on that day apply.

        Raises:
            ValueError: If year/month/day is not a valid date
        """
        return DateTime(
            Instant.of(
                year,
                month,
                day,
                self.hour,
                self.minute,
                self.second,
                self.nanosecond,
                self.zone,
            )
        )

    def on(self, date: Date) -> DateTime:
        return self.date(date.year, date.month, date.day)

    def __str__(self) -> str:
        text = f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        if self.nanosecond:
            text += f".{self.nanosecond:09d}".rstrip("0")
        if self.zone is UTC:
            return text + "Z"
        if isinstance(self.zone, ZoneInfo):
            return f"{text} {self.zone.key}"
        if isinstance(self.zone, timezone):
            return text + format_offset(self.zone.utcoffset(None))
        return f"{text} {self.zone}"

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any, clock: Clock | None = None) -> "TimeOfDay":
        if value is None or value in ("", "null"):
            return cls()
        return parse_time_of_day(value, clock)


def parse_time_of_day(value: Any, clock: Clock | None = None) -> TimeOfDay:
    """Parse a time of day.

    Accepts:
    - ``NOW``: the time of day of the clock's current reading
    - ``HH:MM[:SS[.fraction]]`` optionally followed by ``Z``, ``+HH:MM`` or a
      space and an IANA zone name (``"15:37:59 Europe/Berlin"``)
    - any full datetime parse_time accepts; its date part is discarded

    Raises:
        ParseError: If value matches none of the forms
        UnknownZoneError: If the zone name cannot be resolved
    """
    text = as_text(value).strip()
    if text == NOW:
        return TimeOfDay.from_instant((clock or SYSTEM_CLOCK).now())

    match = _TIME_OF_DAY.fullmatch(text)
    if match is None:
        return TimeOfDay.from_instant(parse_time(text, clock))

    hour, minute, second, fraction, offset, name = match.groups()
    if name is not None:
        zone = load_zone(name)
    elif offset is not None:
        zone = parse_offset(offset)
    else:
        zone = UTC
    try:
        return TimeOfDay(
            int(hour),
            int(minute),
            int(second or 0),
            parse_fraction(fraction),
            zone,
        )
    except ValidationError as err:
        raise ParseError(f"Invalid time of day '{text}': {err}") from err
