"""Nanosecond-resolution, timezone-aware instants.

An Instant pairs an aware ``datetime`` (microsecond precision) with the
sub-microsecond remainder, so every value keeps the full nanosecond reading
while date math, zones and DST rules stay with the standard library.
"""

import struct
import time
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from datetime import tzinfo as TzInfo
from functools import total_ordering
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from dateutil.relativedelta import relativedelta

from caltime.duration import Duration, HasDuration
from caltime.errors import ParseError
from caltime.util import MICROSECOND, SECOND
from caltime.weekday import Weekday
from caltime.zones import UTC, resolve_zone

if TYPE_CHECKING:
    from caltime.layout import Layout

_ZERO_DATETIME = datetime(1, 1, 1, tzinfo=UTC)
_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)

# version, seconds since 0001-01-01 UTC, nanoseconds, offset minutes (-1 = UTC)
_BINARY = struct.Struct(">bqih")
_BINARY_VERSION = 1


@runtime_checkable
class HasTime(Protocol):
    def as_instant(self) -> "Instant": ...


def _nanoseconds(duration: HasDuration | int) -> int:
    if isinstance(duration, HasDuration):
        return duration.as_duration().nanoseconds
    if isinstance(duration, int) and not isinstance(duration, bool):
        return duration
    raise TypeError(
        f"Expected a Duration or integer nanoseconds, "
        f"got {type(duration).__name__!r}: {duration!r}"
    )


def _delta_nanoseconds(delta: timedelta) -> int:
    return (delta.days * 86400 + delta.seconds) * SECOND + delta.microseconds * MICROSECOND


@total_ordering
@dataclass(frozen=True, eq=False, slots=True)
class Instant:
    moment: datetime
    nanos: int = 0

    def __post_init__(self) -> None:
        if self.moment.tzinfo is None or self.moment.utcoffset() is None:
            raise TypeError(
                f"Instant requires a timezone-aware datetime.\n"
                f"Got naive datetime: {self.moment!r}\n"
                f"Hint: Add timezone info:\n"
                f"  from zoneinfo import ZoneInfo\n"
                f"  dt = datetime(..., tzinfo=ZoneInfo('UTC'))"
            )
        if not 0 <= self.nanos < 1000:
            raise ValueError(f"nanos must be in range [0, 1000), got {self.nanos}")

    # Construction

    @classmethod
    def of(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        nanosecond: int = 0,
        tz: TzInfo | str = UTC,
    ) -> "Instant":
        """Build an instant from wall-clock fields in the given zone."""
        if not 0 <= nanosecond < SECOND:
            raise ValueError(f"nanosecond must be in range [0, {SECOND}), got {nanosecond}")
        micro, nanos = divmod(nanosecond, 1000)
        moment = datetime(
            year, month, day, hour, minute, second, micro, tzinfo=resolve_zone(tz)
        )
        return cls(moment, nanos)

    @classmethod
    def from_datetime(cls, value: datetime, nanos: int = 0) -> "Instant":
        return cls(value, nanos)

    @classmethod
    def from_unix_nano(cls, value: int, tz: TzInfo | str = UTC) -> "Instant":
        seconds, rest = divmod(value, SECOND)
        micro, nanos = divmod(rest, 1000)
        moment = _EPOCH + timedelta(seconds=seconds, microseconds=micro)
        zone = resolve_zone(tz)
        if zone is not UTC:
            moment = moment.astimezone(zone)
        return cls(moment, nanos)

    @classmethod
    def from_unix(cls, seconds: int, nanoseconds: int = 0, tz: TzInfo | str = UTC) -> "Instant":
        return cls.from_unix_nano(seconds * SECOND + nanoseconds, tz)

    @classmethod
    def from_unix_milli(cls, value: int, tz: TzInfo | str = UTC) -> "Instant":
        return cls.from_unix_nano(value * 1_000_000, tz)

    @classmethod
    def from_unix_micro(cls, value: int, tz: TzInfo | str = UTC) -> "Instant":
        return cls.from_unix_nano(value * 1000, tz)

    @classmethod
    def now(cls, tz: TzInfo | str = UTC) -> "Instant":
        """Read the system wall clock. Prefer an injected Clock in library code."""
        return cls.from_unix_nano(time.time_ns(), tz)

    def as_instant(self) -> "Instant":
        return self

    def to_datetime(self) -> datetime:
        """Return the aware datetime, dropping sub-microsecond precision."""
        return self.moment

    # Fields

    @property
    def year(self) -> int:
        return self.moment.year

    @property
    def month(self) -> int:
        return self.moment.month

    @property
    def day(self) -> int:
        return self.moment.day

    @property
    def hour(self) -> int:
        return self.moment.hour

    @property
    def minute(self) -> int:
        return self.moment.minute

    @property
    def second(self) -> int:
        return self.moment.second

    @property
    def nanosecond(self) -> int:
        return self.moment.microsecond * 1000 + self.nanos

    @property
    def tzinfo(self) -> TzInfo:
        return self.moment.tzinfo  # pyright: ignore[reportReturnType]

    def utcoffset(self) -> timedelta:
        return self.moment.utcoffset()  # pyright: ignore[reportReturnType]

    def weekday(self) -> Weekday:
        return Weekday.from_python(self.moment.weekday())

    def is_zero(self) -> bool:
        return self == ZERO

    # Unix readings (floored like integer division)

    def unix_nano(self) -> int:
        return _delta_nanoseconds(self.moment - _EPOCH) + self.nanos

    def unix_micro(self) -> int:
        return self.unix_nano() // 1000

    def unix_milli(self) -> int:
        return self.unix_nano() // 1_000_000

    def unix(self) -> int:
        return self.unix_nano() // SECOND

    # Arithmetic

    def add(self, duration: HasDuration | int) -> "Instant":
        """Add elapsed time; wall-clock fields follow the zone's rules."""
        micros, nanos = divmod(self.nanos + _nanoseconds(duration), 1000)
        shifted = self.moment.astimezone(UTC) + timedelta(microseconds=micros)
        return Instant(shifted.astimezone(self.tzinfo), nanos)

    def sub(self, other: HasTime) -> Duration:
        return Duration(self.unix_nano() - other.as_instant().unix_nano())

    def add_date(self, years: int = 0, months: int = 0, days: int = 0) -> "Instant":
        """Add calendar units to the wall-clock date in the instant's own zone.

        Month overflow clamps to the last day of the month (Jan 31 + 1 month
        is Feb 28/29).
        """
        shifted = self.moment + relativedelta(years=years, months=months, days=days)
        return Instant(shifted, self.nanos)

    def truncate(self, duration: HasDuration | int) -> "Instant":
        """Round down to a multiple of duration since the zero instant."""
        size = _nanoseconds(duration)
        if size <= 0:
            return self
        return self.add(-(self.sub(ZERO).nanoseconds % size))

    def utc(self) -> "Instant":
        return self.in_zone(UTC)

    def in_zone(self, tz: TzInfo | str) -> "Instant":
        return Instant(self.moment.astimezone(resolve_zone(tz)), self.nanos)

    # Comparison

    def _key(self) -> tuple[datetime, int]:
        return self.moment.astimezone(UTC), self.nanos

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other: "Instant") -> bool:
        if not isinstance(other, Instant):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def before(self, other: HasTime) -> bool:
        return self < other.as_instant()

    def after(self, other: HasTime) -> bool:
        return self > other.as_instant()

    def equal(self, other: HasTime) -> bool:
        return self == other.as_instant()

    def compare(self, other: HasTime) -> int:
        return compare(self, other)

    # Text and binary forms

    def isoformat(self, nano: bool = True) -> str:
        """Render RFC 3339, with up to nine fraction digits when nano is set."""
        m = self.moment
        text = (
            f"{m.year:04d}-{m.month:02d}-{m.day:02d}"
            f"T{m.hour:02d}:{m.minute:02d}:{m.second:02d}"
        )
        if nano and self.nanosecond:
            text += f".{self.nanosecond:09d}".rstrip("0")
        return text + format_offset(self.utcoffset())

    def format(self, layout: "Layout") -> str:
        return layout.format(self)

    def __str__(self) -> str:
        return self.isoformat()

    def __repr__(self) -> str:
        return f"Instant({self.isoformat()})"

    def to_bytes(self) -> bytes:
        offset = self.utcoffset()
        minutes = -1 if not offset else int(offset.total_seconds()) // 60
        seconds = _delta_nanoseconds(self.moment.replace(microsecond=0) - _ZERO_DATETIME) // SECOND
        return _BINARY.pack(_BINARY_VERSION, seconds, self.nanosecond, minutes)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Instant":
        if len(data) != _BINARY.size:
            raise ParseError(
                f"Binary instant must be {_BINARY.size} bytes, got {len(data)}"
            )
        version, seconds, nanosecond, minutes = _BINARY.unpack(data)
        if version != _BINARY_VERSION:
            raise ParseError(f"Unsupported binary instant version {version}")
        zone = UTC if minutes == -1 else timezone(timedelta(minutes=minutes))
        micro, nanos = divmod(nanosecond, 1000)
        moment = _ZERO_DATETIME + timedelta(seconds=seconds, microseconds=micro)
        return cls(moment.astimezone(zone), nanos)


def format_offset(offset: timedelta) -> str:
    total = int(offset.total_seconds())
    if total == 0:
        return "Z"
    sign = "-" if total < 0 else "+"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{sign}{hours:02d}:{minutes:02d}"


ZERO = Instant(_ZERO_DATETIME)


def as_instant(value: Any) -> Instant:
    """Accept any HasTime or an aware datetime and return an Instant."""
    if isinstance(value, HasTime):
        return value.as_instant()
    if isinstance(value, datetime):
        return Instant.from_datetime(value)
    raise TypeError(
        f"Expected an Instant, Date, DateTime, UnixTime or aware datetime.\n"
        f"Got {type(value).__name__!r}: {value!r}"
    )


def compare(a: HasTime, b: HasTime) -> int:
    """Return -1, 0 or 1 as a is before, equal to or after b."""
    left, right = a.as_instant(), b.as_instant()
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def earliest(a: HasTime, b: HasTime) -> HasTime:
    """Return the earlier of two times, the first on ties."""
    return b if b.as_instant() < a.as_instant() else a


def latest(a: HasTime, b: HasTime) -> HasTime:
    """Return the later of two times, the first on ties."""
    return b if b.as_instant() > a.as_instant() else a


def has_equal_date(a: HasTime, b: HasTime) -> bool:
    """True if both fall on the same calendar date, each read in its own zone."""
    left, right = a.as_instant(), b.as_instant()
    return (left.year, left.month, left.day) == (right.year, right.month, right.day)
