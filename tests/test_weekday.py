"""Tests for Weekday and Weekdays."""

import pytest

from caltime import ParseError, ValidationError, Weekday, Weekdays, parse_weekday, parse_weekdays
from caltime.weekday import AVAILABLE_WEEKDAYS


@pytest.mark.parametrize("value", range(7))
def test_valid(value):
    """Test that 0 through 6 are weekdays."""
    assert Weekday.validate(value) == value


@pytest.mark.parametrize("value", [7, -1, 1337])
def test_out_of_range(value):
    """Test that values outside 0-6 are rejected."""
    with pytest.raises(ValidationError, match="0 \\(Sunday\\) to 6 \\(Saturday\\)"):
        Weekday.validate(value)


def test_rejects_bool():
    """Test that booleans are not accepted as integers."""
    with pytest.raises(ValidationError):
        Weekday.validate(True)


def test_names():
    """Test the capitalised English names."""
    assert str(Weekday.SUNDAY) == "Sunday"
    assert str(Weekday.MONDAY) == "Monday"
    assert [str(d) for d in AVAILABLE_WEEKDAYS][-1] == "Saturday"


@pytest.mark.parametrize(
    "python_weekday,expected",
    [(0, Weekday.MONDAY), (5, Weekday.SATURDAY), (6, Weekday.SUNDAY)],
)
def test_from_python(python_weekday, expected):
    """Test conversion from datetime.weekday() numbering."""
    assert Weekday.from_python(python_weekday) is expected


def test_parse_weekday():
    """Test parsing integers and numeric strings."""
    assert parse_weekday("3") is Weekday.WEDNESDAY
    assert parse_weekday(0) is Weekday.SUNDAY
    with pytest.raises(ParseError, match="not an integer"):
        parse_weekday("Monday")
    with pytest.raises(ValidationError):
        parse_weekday("9")


def test_weekdays():
    """Test the weekday collection."""
    days = parse_weekdays([1, "5"])
    assert days == (Weekday.MONDAY, Weekday.FRIDAY)
    assert days.contains(Weekday.FRIDAY)
    assert not days.contains(Weekday.SUNDAY)
    days.validate()
    assert len(AVAILABLE_WEEKDAYS) == 7


def test_weekdays_invalid():
    """Test that invalid members and non-lists are rejected."""
    with pytest.raises(ValidationError):
        Weekdays([1, 7])
    with pytest.raises(ParseError, match="must be a list"):
        parse_weekdays("1,2")
