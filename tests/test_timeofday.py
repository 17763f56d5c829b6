"""Tests for TimeOfDay."""

from datetime import timedelta, timezone

import pytest

from caltime import (
    CurrentTime,
    Date,
    Layout,
    ParseError,
    TimeOfDay,
    UnknownZoneError,
    ValidationError,
    parse_time,
    parse_time_of_day,
)


@pytest.fixture
def clock():
    return CurrentTime(parse_time("2023-05-02T12:45:59.123456Z"))


def test_now_keeps_fraction(clock):
    """Test that NOW takes the clock's time of day."""
    t = parse_time_of_day("NOW", clock)
    assert str(t.date(2024, 1, 1)) == "2024-01-01T12:45:59.123456Z"


def test_fraction_with_utc():
    """Test placing a fractional UTC time on a date."""
    t = parse_time_of_day("13:37:59.123456Z")
    assert str(t.date(2024, 7, 1)) == "2024-07-01T13:37:59.123456Z"


def test_utc_zone_name():
    """Test that the UTC zone name renders as Z, placed or not."""
    t = parse_time_of_day("14:37:59 UTC")
    assert str(t.date(2024, 1, 1)) == "2024-01-01T14:37:59Z"
    assert str(t) == "14:37:59Z"
    assert t == parse_time_of_day("14:37:59Z")


@pytest.mark.parametrize("name", ["Etc/UTC", "GMT", "Etc/GMT", "Zulu"])
def test_zero_offset_zone_names_render_as_z(name):
    """Test that every fixed zero-offset zone name formats like UTC."""
    assert str(parse_time_of_day(f"09:30 {name}")) == "09:30:00Z"


@pytest.mark.parametrize(
    "month,local,utc",
    [
        (1, "2024-01-01T15:37:59+01:00", "2024-01-01T14:37:59Z"),
        (7, "2024-07-01T15:37:59+02:00", "2024-07-01T13:37:59Z"),
    ],
)
def test_named_zone_follows_dst(month, local, utc):
    """Test that the offset is resolved for the date the time is placed on."""
    t = parse_time_of_day("15:37:59 Europe/Berlin")
    placed = t.date(2024, month, 1)
    assert str(placed) == local
    assert str(placed.utc()) == utc


@pytest.mark.parametrize(
    "value,expected",
    [
        ("NOW", "2024-12-24T12:45:59Z"),
        ("13:37", "2024-12-24T13:37:00Z"),
        ("13:37:42", "2024-12-24T13:37:42Z"),
        ("13:37:42Z", "2024-12-24T13:37:42Z"),
        ("13:37:42+02:00", "2024-12-24T11:37:42Z"),
        ("13:37:42 Europe/Berlin", "2024-12-24T12:37:42Z"),
        ("2023-10-02T13:37:42Z", "2024-12-24T13:37:42Z"),
    ],
)
def test_date_in_utc(clock, value, expected):
    """Test that each accepted form lands on the right instant."""
    placed = parse_time_of_day(value, clock).date(2024, 12, 24)
    assert placed.utc().format(Layout.RFC3339) == expected


def test_on_date():
    """Test placing a time on a Date value."""
    t = TimeOfDay(9, 30)
    assert str(t.on(Date.of(2024, 7, 1))) == "2024-07-01T09:30:00Z"


def test_invalid_date():
    """Test that impossible dates raise ValueError."""
    with pytest.raises(ValueError):
        TimeOfDay(9).date(2023, 2, 30)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("13:45:59Z", "13:45:59Z"),
        ("13:45:59.123456Z", "13:45:59.123456Z"),
        ("13:45Z", "13:45:00Z"),
        ("13:45", "13:45:00Z"),
        ("13:45:59", "13:45:59Z"),
        ("13:45:59.123456", "13:45:59.123456Z"),
        ("13:45:59+02:00", "13:45:59+02:00"),
        ("15:37:59 Europe/Berlin", "15:37:59 Europe/Berlin"),
        ("2023-10-02T13:45:59Z", "13:45:59Z"),
        ("2023-10-02T13:45:59.123456Z", "13:45:59.123456Z"),
        ("2023-10-02T13:45:59+02:00", "13:45:59+02:00"),
    ],
)
def test_from_json(value, expected):
    """Test the accepted textual forms and their canonical rendering."""
    t = TimeOfDay.from_json(value)
    assert t.to_json() == expected
    assert TimeOfDay.from_json(t.to_json()) == t


def test_from_json_null():
    """Test that null-like values give midnight UTC."""
    assert TimeOfDay.from_json(None) == TimeOfDay()
    assert str(TimeOfDay()) == "00:00:00Z"


def test_from_instant():
    """Test extracting the time of day from an instant."""
    t = TimeOfDay.from_instant(parse_time("2023-05-02T13:45:59.123456Z"))
    assert str(t) == "13:45:59.123456Z"
    assert str(TimeOfDay.from_instant(parse_time("2023-05-02T13:45:59Z"))) == "13:45:59Z"


def test_zone_by_name():
    """Test that the zone may be given as a name."""
    t = TimeOfDay(9, zone="Europe/Berlin")  # type: ignore[arg-type]
    assert t.date(2024, 7, 1).utc().hour == 7


@pytest.mark.parametrize("value", ["banana", "25:00", "13:61", ""])
def test_invalid(value):
    """Test that malformed times raise ParseError."""
    with pytest.raises(ParseError):
        parse_time_of_day(value)


def test_unknown_zone():
    """Test that unknown zone names are reported."""
    with pytest.raises(UnknownZoneError, match="Mars/Olympus"):
        parse_time_of_day("13:45 Mars/Olympus")


@pytest.mark.parametrize("name", ["Europe", "America"])
def test_zone_directory_is_unknown(name):
    """Test that a tzdata region directory is not mistaken for a zone."""
    with pytest.raises(UnknownZoneError, match=name):
        parse_time_of_day(f"13:45 {name}")


def test_field_ranges():
    """Test direct construction bounds."""
    with pytest.raises(ValidationError, match="hour"):
        TimeOfDay(24)
    with pytest.raises(ValidationError, match="nanosecond"):
        TimeOfDay(1, nanosecond=1_000_000_000)
    assert TimeOfDay(23, 59, 59, 999_999_999, timezone(timedelta(hours=-3))).minute == 59
