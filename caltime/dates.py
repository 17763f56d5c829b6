"""Semantic wrappers around Instant: Date, DateTime and UnixTime.

All three share the same operations and differ in how they normalise and
serialise their instant:

- Date truncates to midnight UTC of its calendar date and renders ``YYYY-MM-DD``
- DateTime keeps full precision and renders RFC 3339 with nanoseconds
- UnixTime keeps full precision but its JSON form is integer Unix seconds
"""

from dataclasses import dataclass
from datetime import datetime, tzinfo
from functools import total_ordering
from typing import Any, ClassVar

from typing_extensions import Self, override

from caltime.clock import SYSTEM_CLOCK, Clock
from caltime.duration import Duration, HasDuration
from caltime.errors import ParseError, ValidationError
from caltime.instant import ZERO, HasTime, Instant, as_instant, compare
from caltime.layout import Layout
from caltime.parse import parse_time
from caltime.weekday import Weekday
from caltime.zones import UTC


def _is_empty(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value in ("", "null"))


@total_ordering
@dataclass(frozen=True, eq=False)
class _Stamp:
    instant: Instant = ZERO

    layout: ClassVar[Layout] = Layout.RFC3339_NANO

    def __post_init__(self) -> None:
        object.__setattr__(self, "instant", as_instant(self.instant))

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
        tz: tzinfo | str = UTC,
    ) -> Self:
        return cls(Instant.of(year, month, day, hour, minute, second, nanosecond, tz))

    @classmethod
    def from_datetime(cls, value: datetime) -> Self:
        return cls(Instant.from_datetime(value))

    @classmethod
    def now(cls, clock: Clock | None = None) -> Self:
        return cls((clock or SYSTEM_CLOCK).now())

    @classmethod
    def parse(cls, value: Any, clock: Clock | None = None) -> Self:
        """Parse anything parse_time accepts (``NOW-1d``, RFC 3339, dates)."""
        return cls(parse_time(value, clock))

    # Fields

    def as_instant(self) -> Instant:
        return self.instant

    def to_datetime(self) -> datetime:
        return self.instant.to_datetime()

    @property
    def year(self) -> int:
        return self.instant.year

    @property
    def month(self) -> int:
        return self.instant.month

    @property
    def day(self) -> int:
        return self.instant.day

    @property
    def hour(self) -> int:
        return self.instant.hour

    @property
    def minute(self) -> int:
        return self.instant.minute

    @property
    def second(self) -> int:
        return self.instant.second

    @property
    def nanosecond(self) -> int:
        return self.instant.nanosecond

    def weekday(self) -> Weekday:
        return self.instant.weekday()

    def unix(self) -> int:
        return self.instant.unix()

    def unix_milli(self) -> int:
        return self.instant.unix_milli()

    def unix_micro(self) -> int:
        return self.instant.unix_micro()

    def is_zero(self) -> bool:
        return self.instant.is_zero()

    def validate(self) -> None:
        if self.is_zero():
            raise ValidationError(f"{type(self).__name__} is zero")

    # Arithmetic

    def add(self, duration: HasDuration | int) -> Self:
        return type(self)(self.instant.add(duration))

    def sub(self, other: HasTime) -> Duration:
        return self.instant.sub(other)

    def add_date(self, years: int = 0, months: int = 0, days: int = 0) -> Self:
        return type(self)(self.instant.add_date(years, months, days))

    def truncate(self, duration: HasDuration | int) -> Self:
        return type(self)(self.instant.truncate(duration))

    def utc(self) -> Self:
        return type(self)(self.instant.utc())

    # Comparison

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.instant == other.instant  # pyright: ignore[reportAttributeAccessIssue]

    def __lt__(self, other: Self) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.instant < other.instant

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.instant))

    def before(self, other: HasTime) -> bool:
        return self.instant.before(other)

    def after(self, other: HasTime) -> bool:
        return self.instant.after(other)

    def compare(self, other: HasTime) -> int:
        return compare(self, other)

    # Text, JSON and binary forms

    def format(self, layout: Layout) -> str:
        return layout.format(self.instant)

    def __str__(self) -> str:
        return self.format(self.layout)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self})"

    def to_json(self) -> Any:
        """JSON-compatible value; the zero value serialises to None."""
        if self.is_zero():
            return None
        return str(self)

    @classmethod
    def from_json(cls, value: Any, clock: Clock | None = None) -> Self:
        """Decode a JSON value; None, "" and "null" give the zero value."""
        if _is_empty(value):
            return cls()
        return cls.parse(value, clock)

    def to_bytes(self) -> bytes:
        return self.instant.to_bytes()

    @classmethod
    def from_bytes(cls, data: bytes) -> Self:
        return cls(Instant.from_bytes(data))


class Date(_Stamp):
    """A calendar date, stored as midnight UTC."""

    layout: ClassVar[Layout] = Layout.DATE

    @override
    def __post_init__(self) -> None:
        instant = as_instant(self.instant)
        if not instant.is_zero():
            instant = Instant.of(instant.year, instant.month, instant.day)
        object.__setattr__(self, "instant", instant)


class DateTime(_Stamp):
    """A full-precision timestamp rendered as RFC 3339 with nanoseconds."""

    @classmethod
    def from_unix_micro(cls, value: int) -> "DateTime":
        return cls(Instant.from_unix_micro(value))


class UnixTime(_Stamp):
    """A full-precision timestamp whose JSON form is integer Unix seconds."""

    @override
    @classmethod
    def parse(cls, value: Any, clock: Clock | None = None) -> Self:
        """Numbers and digit strings are Unix seconds; the rest goes to parse_time."""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return cls(Layout.SECOND.parse(value))
        if isinstance(value, str) and value.strip().lstrip("-").isdigit():
            return cls(Layout.SECOND.parse(value.strip()))
        return cls(parse_time(value, clock))

    @override
    def to_json(self) -> Any:
        if self.is_zero():
            return None
        return self.unix()


def parse_date(value: Any, clock: Clock | None = None) -> Date:
    return Date.parse(value, clock)


def parse_datetime(value: Any, clock: Clock | None = None) -> DateTime:
    return DateTime.parse(value, clock)


def parse_datetime_default(
    value: Any, default: DateTime, clock: Clock | None = None
) -> DateTime:
    """Like parse_datetime, but return default when value does not parse."""
    try:
        return DateTime.parse(value, clock)
    except ParseError:
        return default


def parse_unix_time(value: Any, clock: Clock | None = None) -> UnixTime:
    return UnixTime.parse(value, clock)
