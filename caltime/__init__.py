from .boundaries import (
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
from .clock import SYSTEM_CLOCK, Clock, ClockFunc, CurrentTime, SystemClock
from .codec import TimeJSONEncoder, dumps
from .dates import (
    Date,
    DateTime,
    UnixTime,
    parse_date,
    parse_datetime,
    parse_datetime_default,
    parse_unix_time,
)
from .duration import Duration, HasDuration, parse_duration
from .errors import (
    CaltimeError,
    ParseError,
    UnknownUnitError,
    UnknownZoneError,
    ValidationError,
)
from .instant import (
    ZERO,
    HasTime,
    Instant,
    compare,
    earliest,
    has_equal_date,
    latest,
)
from .layout import DEFAULT_LAYOUTS, Layout, Layouts
from .parse import parse_time
from .ranges import (
    DateRange,
    DateTimeRange,
    Range,
    Ranges,
    TimeRange,
    UnixTimeRange,
    intersection,
    union,
)
from .timeofday import TimeOfDay, parse_time_of_day
from .util import DAY, HOUR, MICROSECOND, MILLISECOND, MINUTE, NANOSECOND, SECOND, WEEK
from .waiter import wait_for, wait_until
from .weekday import Weekday, Weekdays, parse_weekday, parse_weekdays
from .zones import load_zone, parse_zone

__all__ = [
    "Instant",
    "ZERO",
    "HasTime",
    "compare",
    "earliest",
    "latest",
    "has_equal_date",
    "Duration",
    "HasDuration",
    "parse_duration",
    "NANOSECOND",
    "MICROSECOND",
    "MILLISECOND",
    "SECOND",
    "MINUTE",
    "HOUR",
    "DAY",
    "WEEK",
    "Layout",
    "Layouts",
    "DEFAULT_LAYOUTS",
    "parse_time",
    "Clock",
    "ClockFunc",
    "SystemClock",
    "CurrentTime",
    "SYSTEM_CLOCK",
    "Date",
    "DateTime",
    "UnixTime",
    "parse_date",
    "parse_datetime",
    "parse_datetime_default",
    "parse_unix_time",
    "TimeOfDay",
    "parse_time_of_day",
    "Weekday",
    "Weekdays",
    "parse_weekday",
    "parse_weekdays",
    "beginning_of_day",
    "end_of_day",
    "beginning_of_week",
    "end_of_week",
    "beginning_of_month",
    "end_of_month",
    "beginning_of_quarter",
    "end_of_quarter",
    "beginning_of_year",
    "end_of_year",
    "Range",
    "TimeRange",
    "DateRange",
    "DateTimeRange",
    "UnixTimeRange",
    "Ranges",
    "union",
    "intersection",
    "TimeJSONEncoder",
    "dumps",
    "wait_for",
    "wait_until",
    "load_zone",
    "parse_zone",
    "CaltimeError",
    "ParseError",
    "UnknownUnitError",
    "UnknownZoneError",
    "ValidationError",
]
