"""Exception types raised by caltime.

All exceptions derive from ValueError so callers that only care about
"bad input" can keep catching the builtin.
"""


class CaltimeError(Exception):
    """Base class for all caltime errors."""


class ParseError(CaltimeError, ValueError):
    """Input did not match any recognised grammar."""


class UnknownUnitError(ParseError):
    def __init__(self, unit: str):
        self.unit: str = unit
        super().__init__(
            f"Unknown duration unit '{unit}'.\n"
            f"Valid units: ns, us, µs, ms, s, m, h, d, w"
        )


class UnknownZoneError(ParseError):
    def __init__(self, name: str):
        self.name: str = name
        super().__init__(
            f"Unknown timezone '{name}'.\n"
            f"Hint: Use an IANA name like 'UTC', 'Europe/Berlin' or 'US/Pacific'"
        )


class ValidationError(CaltimeError, ValueError):
    """A value violates an invariant (range order, zero value, weekday)."""
