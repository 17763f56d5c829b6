"""Closed time ranges and their union/intersection.

A range covers ``from_`` through ``until`` inclusive. Period constructors such
as ``DateTimeRange.month(t)`` span the first through the last nanosecond of
the period containing t.
"""

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass, replace
from functools import reduce
from typing import Any, ClassVar, Generic, TypeVar, overload

from typing_extensions import Self, override

from caltime.boundaries import (
    beginning_of_day,
    beginning_of_month,
    beginning_of_quarter,
    beginning_of_week,
    beginning_of_year,
    end_of_day,
    end_of_month,
    end_of_quarter,
    end_of_week,
    end_of_year,
)
from caltime.clock import Clock
from caltime.dates import Date, DateTime, UnixTime, _Stamp
from caltime.duration import Duration
from caltime.errors import ParseError, ValidationError
from caltime.instant import ZERO, HasTime, Instant, as_instant, earliest, latest
from caltime.parse import parse_time

T = TypeVar("T", Instant, Date, DateTime, UnixTime)


@dataclass(frozen=True, kw_only=True)
class Range(Generic[T]):
    from_: T
    until: T

    element: ClassVar[type] = Instant

    def __post_init__(self) -> None:
        object.__setattr__(self, "from_", self._coerce(self.from_))
        object.__setattr__(self, "until", self._coerce(self.until))
        if self.from_.as_instant() > self.until.as_instant():
            raise ValidationError(
                f"Range from ({self.from_}) must be <= until ({self.until})"
            )

    @classmethod
    def _coerce(cls, value: Any) -> Any:
        if isinstance(value, cls.element):
            return value
        instant = as_instant(value)
        return instant if cls.element is Instant else cls.element(instant)

    def __str__(self) -> str:
        return f"{type(self).__name__}({self.from_}→{self.until})"

    @classmethod
    def from_times(cls, from_: Any, until: Any) -> Self:
        return cls(from_=from_, until=until)

    # Period constructors

    @classmethod
    def day(cls, t: HasTime) -> Self:
        """The whole day containing t, 00:00:00 through 23:59:59.999999999."""
        return cls.from_times(beginning_of_day(t), end_of_day(t))

    @classmethod
    def week(cls, t: HasTime) -> Self:
        """The ISO week containing t, Monday 00:00 through Sunday 23:59:59.999999999."""
        return cls.from_times(beginning_of_week(t), end_of_week(t))

    @classmethod
    def month(cls, t: HasTime) -> Self:
        return cls.from_times(beginning_of_month(t), end_of_month(t))

    @classmethod
    def quarter(cls, t: HasTime) -> Self:
        """The quarter containing t (Q1=Jan-Mar, Q2=Apr-Jun, Q3=Jul-Sep, Q4=Oct-Dec)."""
        return cls.from_times(beginning_of_quarter(t), end_of_quarter(t))

    @classmethod
    def year(cls, t: HasTime) -> Self:
        return cls.from_times(beginning_of_year(t), end_of_year(t))

    # Queries

    def validate(self) -> None:
        """Raise ValidationError for zero endpoints or from_ after until."""
        for name, value in (("from", self.from_), ("until", self.until)):
            if isinstance(value, _Stamp):
                try:
                    value.validate()
                except ValidationError as err:
                    raise ValidationError(f"{name}: {err}") from err
        if self.from_.as_instant() > self.until.as_instant():
            raise ValidationError("from must be less than or equal to until")

    def contains(self, t: HasTime) -> bool:
        instant = t.as_instant()
        return self.from_.as_instant() <= instant <= self.until.as_instant()

    def duration(self) -> Duration:
        return self.until.as_instant().sub(self.from_)

    # Conversions

    def to_time_range(self) -> "TimeRange":
        return TimeRange.from_times(self.from_, self.until)

    def to_date_range(self) -> "DateRange":
        return DateRange.from_times(self.from_, self.until)

    def to_datetime_range(self) -> "DateTimeRange":
        return DateTimeRange.from_times(self.from_, self.until)

    def to_unix_time_range(self) -> "UnixTimeRange":
        return UnixTimeRange.from_times(self.from_, self.until)

    # JSON

    def to_json(self) -> dict[str, Any]:
        return {"from": _to_json(self.from_), "until": _to_json(self.until)}

    @classmethod
    def from_json(cls, value: Any, clock: Clock | None = None) -> Self:
        if not isinstance(value, dict):
            raise ParseError(
                f"{cls.__name__} JSON must be an object with 'from' and 'until', "
                f"got {type(value).__name__!r}: {value!r}"
            )
        return cls(
            from_=cls._from_json_value(value.get("from"), clock),
            until=cls._from_json_value(value.get("until"), clock),
        )

    @classmethod
    def _from_json_value(cls, value: Any, clock: Clock | None) -> Any:
        if issubclass(cls.element, _Stamp):
            return cls.element.from_json(value, clock)
        if value is None or value in ("", "null"):
            return ZERO
        return parse_time(value, clock)


def _to_json(value: Any) -> Any:
    if isinstance(value, _Stamp):
        return value.to_json()
    return None if value.is_zero() else str(value)


class TimeRange(Range[Instant]):
    element: ClassVar[type] = Instant


class DateRange(Range[Date]):
    element: ClassVar[type] = Date


class DateTimeRange(Range[DateTime]):
    element: ClassVar[type] = DateTime


class UnixTimeRange(Range[UnixTime]):
    element: ClassVar[type] = UnixTime


R = TypeVar("R", bound=Range[Any])


class Ranges(Sequence[R], Generic[R]):
    """Immutable list of ranges supporting union (max) and intersection (min)."""

    def __init__(self, ranges: Iterable[R] = ()):
        self._ranges: tuple[R, ...] = tuple(ranges)

    @overload
    def __getitem__(self, index: int) -> R: ...

    @overload
    def __getitem__(self, index: slice) -> "Ranges[R]": ...

    @override
    def __getitem__(self, index: int | slice) -> "R | Ranges[R]":
        if isinstance(index, slice):
            return Ranges(self._ranges[index])
        return self._ranges[index]

    @override
    def __len__(self) -> int:
        return len(self._ranges)

    @override
    def __iter__(self) -> Iterator[R]:
        return iter(self._ranges)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ranges):
            return NotImplemented
        return self._ranges == other._ranges

    def __repr__(self) -> str:
        return f"Ranges({list(self._ranges)!r})"

    def max(self) -> R | None:
        """Smallest range enclosing every range: earliest from_, latest until.

        Returns None for an empty collection.
        """
        if not self._ranges:
            return None

        def widen(acc: R, nxt: R) -> R:
            return replace(
                acc,
                from_=earliest(acc.from_, nxt.from_),
                until=latest(acc.until, nxt.until),
            )

        return reduce(widen, self._ranges)

    def min(self) -> R | None:
        """Largest range common to every range: latest from_, earliest until.

        Returns None for an empty collection and when the ranges do not all
        overlap.
        """
        if not self._ranges:
            return None

        first = self._ranges[0]

        def narrow(acc: tuple[Any, Any], nxt: R) -> tuple[Any, Any]:
            return latest(acc[0], nxt.from_), earliest(acc[1], nxt.until)

        from_, until = reduce(narrow, self._ranges[1:], (first.from_, first.until))
        if from_.as_instant() > until.as_instant():
            return None
        return replace(first, from_=from_, until=until)


def union(*ranges: R) -> R | None:
    """Function form of Ranges(ranges).max()."""
    return Ranges(ranges).max()


def intersection(*ranges: R) -> R | None:
    """Function form of Ranges(ranges).min()."""
    return Ranges(ranges).min()
