from collections.abc import Iterable
from enum import IntEnum
from typing import Any

from caltime.errors import ParseError, ValidationError


class Weekday(IntEnum):
    """Day of the week, Sunday first (Sunday=0 ... Saturday=6)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    def __str__(self) -> str:
        return self.name.capitalize()

    @classmethod
    def validate(cls, value: int) -> "Weekday":
        """Return the Weekday for value or raise ValidationError."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise ValidationError(
                f"Weekday must be an integer 0-6, got {type(value).__name__!r}"
            )
        try:
            return cls(value)
        except ValueError as err:
            raise ValidationError(
                f"Weekday must be in range 0 (Sunday) to 6 (Saturday), got {value}"
            ) from err

    @classmethod
    def from_python(cls, weekday: int) -> "Weekday":
        """Convert datetime.weekday() numbering (Monday=0) to Weekday."""
        return cls((weekday + 1) % 7)


class Weekdays(tuple[Weekday, ...]):
    """Immutable collection of weekdays."""

    def __new__(cls, values: Iterable[int] = ()) -> "Weekdays":
        return super().__new__(cls, (Weekday.validate(v) for v in values))

    def contains(self, value: int) -> bool:
        return value in self

    def validate(self) -> None:
        for weekday in self:
            Weekday.validate(weekday)


AVAILABLE_WEEKDAYS = Weekdays(Weekday)


def parse_weekday(value: Any) -> Weekday:
    """Parse an integer or numeric string into a validated Weekday."""
    if isinstance(value, Weekday):
        return value
    if isinstance(value, str):
        try:
            value = int(value.strip())
        except ValueError as err:
            raise ParseError(f"Weekday '{value}' is not an integer") from err
    return Weekday.validate(value)


def parse_weekdays(values: Any) -> Weekdays:
    """Parse a list of integers or numeric strings into Weekdays."""
    if isinstance(values, (str, bytes)) or not isinstance(values, Iterable):
        raise ParseError(
            f"Weekdays must be a list, got {type(values).__name__!r}: {values!r}"
        )
    return Weekdays(parse_weekday(v) for v in values)
