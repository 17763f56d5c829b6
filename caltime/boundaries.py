"""Calendar period boundaries.

Every function takes an Instant, Date, DateTime, UnixTime or aware datetime
and returns an Instant in the same zone as its input. Beginnings are midnight
of the first day of the period; ends are the next period's beginning minus one
nanosecond, so ``end_of_day(t).add(1) == beginning_of_day(t.add_date(days=1))``.
Weeks follow ISO 8601 and start on Monday. Quarters start in January, April,
July and October.
"""

from datetime import datetime, timedelta
from typing import Any

from dateutil.relativedelta import relativedelta

from caltime.instant import Instant, as_instant
from caltime.util import NANOSECOND


def _midnight(instant: Instant, **fields: int) -> Instant:
    moment = instant.moment.replace(
        hour=0, minute=0, second=0, microsecond=0, fold=0, **fields
    )
    return Instant(moment)


def _before(instant: Instant, delta: relativedelta | timedelta) -> Instant:
    # Wall-clock step to the next period, then back one nanosecond
    try:
        return Instant(instant.moment + delta).add(-NANOSECOND)
    except (OverflowError, ValueError):
        # Next period starts after year 9999
        return Instant(datetime.max.replace(tzinfo=instant.tzinfo), 999)


def beginning_of_day(t: Any) -> Instant:
    return _midnight(as_instant(t))


def end_of_day(t: Any) -> Instant:
    return _before(beginning_of_day(t), timedelta(days=1))


def beginning_of_week(t: Any) -> Instant:
    """Monday 00:00 of the ISO week containing t (Sunday maps back six days)."""
    instant = as_instant(t)
    monday = instant.moment - timedelta(days=instant.moment.isoweekday() - 1)
    return _midnight(Instant(monday))


def end_of_week(t: Any) -> Instant:
    return _before(beginning_of_week(t), timedelta(days=7))


def beginning_of_month(t: Any) -> Instant:
    return _midnight(as_instant(t), day=1)


def end_of_month(t: Any) -> Instant:
    return _before(beginning_of_month(t), relativedelta(months=1))


def beginning_of_quarter(t: Any) -> Instant:
    instant = as_instant(t)
    first_month = (instant.month - 1) // 3 * 3 + 1
    return _midnight(instant, month=first_month, day=1)


def end_of_quarter(t: Any) -> Instant:
    return _before(beginning_of_quarter(t), relativedelta(months=3))


def beginning_of_year(t: Any) -> Instant:
    return _midnight(as_instant(t), month=1, day=1)


def end_of_year(t: Any) -> Instant:
    return _before(beginning_of_year(t), relativedelta(years=1))
