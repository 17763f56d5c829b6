"""Signed nanosecond durations with a compact textual form.

Durations parse from and render to concatenated ``<number><unit>`` tokens
such as ``1h30m``, ``-1h30m`` or ``1.5h``.
"""

import re
from dataclasses import dataclass
from datetime import timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Protocol, runtime_checkable

from caltime.errors import ParseError, UnknownUnitError
from caltime.util import (
    DAY,
    HOUR,
    MICROSECOND,
    MILLISECOND,
    MINUTE,
    NANOSECOND,
    SECOND,
    WEEK,
)

# Mapping from textual unit suffix to its size in nanoseconds
UNITS: dict[str, int] = {
    "ns": NANOSECOND,
    "us": MICROSECOND,
    "µs": MICROSECOND,  # U+00B5 micro sign
    "μs": MICROSECOND,  # U+03BC greek mu
    "ms": MILLISECOND,
    "s": SECOND,
    "m": MINUTE,
    "h": HOUR,
    "d": DAY,
    "w": WEEK,
}

# Rendering order, largest unit first
_FORMAT_UNITS: tuple[tuple[str, int], ...] = (
    ("w", WEEK),
    ("d", DAY),
    ("h", HOUR),
    ("m", MINUTE),
    ("s", SECOND),
    ("ms", MILLISECOND),
    ("µs", MICROSECOND),
    ("ns", NANOSECOND),
)

_TOKEN = re.compile(r"(\d*\.?\d+)([a-zµμ]+)")
_TOKENS = re.compile(r"(?:\d*\.?\d+[a-zµμ]+)+")


@runtime_checkable
class HasDuration(Protocol):
    def as_duration(self) -> "Duration": ...


@dataclass(frozen=True, order=True, slots=True)
class Duration:
    nanoseconds: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.nanoseconds, bool) or not isinstance(self.nanoseconds, int):
            raise TypeError(
                f"Duration expects integer nanoseconds, "
                f"got {type(self.nanoseconds).__name__!r}: {self.nanoseconds!r}\n"
                f"Hint: Use unit constants: Duration(90 * MINUTE)"
            )

    @classmethod
    def from_timedelta(cls, delta: timedelta) -> "Duration":
        seconds = delta.days * 86400 + delta.seconds
        return cls(seconds * SECOND + delta.microseconds * MICROSECOND)

    def as_duration(self) -> "Duration":
        return self

    def to_timedelta(self) -> timedelta:
        """Convert to a timedelta, dropping sub-microsecond precision."""
        return timedelta(microseconds=self.nanoseconds // MICROSECOND)

    def seconds(self) -> float:
        return self.nanoseconds / SECOND

    def minutes(self) -> float:
        return self.nanoseconds / MINUTE

    def hours(self) -> float:
        return self.nanoseconds / HOUR

    def __add__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanoseconds + other.nanoseconds)

    def __sub__(self, other: "Duration") -> "Duration":
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration(self.nanoseconds - other.nanoseconds)

    def __mul__(self, factor: int | float) -> "Duration":
        if isinstance(factor, bool) or not isinstance(factor, (int, float)):
            return NotImplemented
        if isinstance(factor, int):
            return Duration(self.nanoseconds * factor)
        # Scale the shortest decimal form of the float; truncates toward zero
        return Duration(int(Decimal(self.nanoseconds) * Decimal(str(factor))))

    __rmul__ = __mul__

    def __neg__(self) -> "Duration":
        return Duration(-self.nanoseconds)

    def __abs__(self) -> "Duration":
        return Duration(abs(self.nanoseconds))

    def __bool__(self) -> bool:
        return self.nanoseconds != 0

    def __str__(self) -> str:
        """Render largest unit first, e.g. ``1h30m0s`` or ``1s500ms``."""
        if self.nanoseconds == 0:
            return "0s"
        sign = "-" if self.nanoseconds < 0 else ""
        remaining = abs(self.nanoseconds)
        parts: list[str] = []
        for name, size in _FORMAT_UNITS:
            count, remaining = divmod(remaining, size)
            # Once a unit was written, keep writing down to seconds
            if count or (parts and size >= SECOND):
                parts.append(f"{count}{name}")
        return sign + "".join(parts)

    def to_json(self) -> str:
        return str(self)

    @classmethod
    def from_json(cls, value: Any) -> "Duration":
        if value is None or value in ("", "null"):
            return cls()
        if not isinstance(value, str):
            raise ParseError(
                f"Duration JSON value must be a string like '1h30m', "
                f"got {type(value).__name__!r}: {value!r}"
            )
        return parse_duration(value)


def parse_duration(text: str) -> Duration:
    """Parse a compound duration expression.

    Args:
        text: Optional leading ``-`` followed by one or more ``<number><unit>``
            tokens, e.g. ``"1h30m"``, ``"-1h30m"``, ``"1.5h"``, ``"2w3d"``

    Returns:
        The summed Duration; the sign applies to the total

    Raises:
        UnknownUnitError: If a token uses a unit not listed in UNITS
        ParseError: If the text is not entirely made of tokens

    Example:
        >>> parse_duration("1h30m") == Duration(90 * MINUTE)
        True
    """
    if not isinstance(text, str):
        raise ParseError(
            f"Duration must be a string, got {type(text).__name__!r}: {text!r}"
        )
    negative = text.startswith("-")
    body = text[1:] if negative else text
    if not _TOKENS.fullmatch(body):
        raise ParseError(
            f"Invalid duration '{text}'.\n"
            f"Expected tokens like '1h30m', '-15m', '1.5h' or '2w3d'"
        )

    total = 0
    for number, unit in _TOKEN.findall(body):
        factor = UNITS.get(unit)
        if factor is None:
            raise UnknownUnitError(unit)
        try:
            total += int(Decimal(number) * factor)
        except InvalidOperation as err:
            raise ParseError(f"Invalid number '{number}' in duration '{text}'") from err

    return Duration(-total if negative else total)
