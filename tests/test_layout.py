"""Tests for Layout formatting and parsing."""

from datetime import timedelta, timezone

import pytest

from caltime import DEFAULT_LAYOUTS, Instant, Layout, Layouts, ParseError

INSTANT = Instant.of(2022, 6, 3, 9, 32, 52, 123456789)


@pytest.mark.parametrize(
    "layout,expected",
    [
        (Layout.RFC3339_NANO, "2022-06-03T09:32:52.123456789Z"),
        (Layout.RFC3339, "2022-06-03T09:32:52Z"),
        (Layout.RFC3339_SHORT, "2022-06-03T09:32Z"),
        (Layout.DATE, "2022-06-03"),
        (Layout.SECOND, "1654248772"),
        (Layout.MILLI, "1654248772123"),
        (Layout.MICRO, "1654248772123456"),
        (Layout.NANO, "1654248772123456789"),
    ],
)
def test_format(layout, expected):
    """Test that each layout renders the expected text."""
    assert layout.format(INSTANT) == expected


def test_format_keeps_offset():
    """Test that non-UTC offsets are written as +HH:MM."""
    instant = Instant.of(2022, 6, 3, 11, 32, 52, tz=timezone(timedelta(hours=2)))
    assert Layout.RFC3339.format(instant) == "2022-06-03T11:32:52+02:00"


def test_format_trims_fraction():
    """Test that RFC3339_NANO drops trailing zeros and empty fractions."""
    assert Layout.RFC3339_NANO.format(Instant.of(2022, 6, 3, nanosecond=500_000_000)) == (
        "2022-06-03T00:00:00.5Z"
    )
    assert Layout.RFC3339_NANO.format(Instant.of(2022, 6, 3)) == "2022-06-03T00:00:00Z"


class TestTextualParse:
    def test_rfc3339_nano(self):
        """Test that nanoseconds survive parsing."""
        result = Layout.RFC3339_NANO.parse("2022-06-03T09:32:52.123456789Z")
        assert result.unix() == 1654248772
        assert result.nanosecond == 123456789

    def test_rfc3339(self):
        """Test parsing without a fraction."""
        assert Layout.RFC3339.parse("2022-06-03T09:32:52Z").unix() == 1654248772

    def test_rfc3339_with_offset(self):
        """Test that offsets are kept and the instant is absolute."""
        result = Layout.RFC3339.parse("2022-06-03T11:32:52+02:00")
        assert result == Instant.from_unix(1654248772)
        assert result.utcoffset() == timedelta(hours=2)
        assert result.hour == 11

    def test_rfc3339_short(self):
        """Test the variant without seconds."""
        assert Layout.RFC3339_SHORT.parse("2022-06-03T09:32Z") == Instant.of(2022, 6, 3, 9, 32)

    def test_date(self):
        """Test that date-only input parses to midnight UTC."""
        result = Layout.DATE.parse("2022-06-03")
        assert (result.year, result.month, result.day) == (2022, 6, 3)
        assert result.hour == 0
        assert result.utcoffset() == timedelta(0)

    @pytest.mark.parametrize(
        "layout,value",
        [
            (Layout.RFC3339, ""),
            (Layout.RFC3339, "2022-06-03"),
            (Layout.RFC3339, "2022-06-03T09:32:52"),
            (Layout.DATE, "2023-02-30"),
            (Layout.DATE, "2022-06-03T09:32:52Z"),
            (Layout.RFC3339_SHORT, "2022-06-03T09:32:52Z"),
        ],
    )
    def test_rejects_non_matching_text(self, layout, value):
        """Test that text outside the grammar raises ParseError."""
        with pytest.raises(ParseError):
            layout.parse(value)

    def test_rejects_non_string(self):
        """Test that textual layouts name the unsupported type."""
        with pytest.raises(ParseError, match="'int'"):
            Layout.RFC3339.parse(1654248772)


class TestNumericParse:
    @pytest.mark.parametrize(
        "layout,value,expected_nano",
        [
            (Layout.SECOND, "1654248772", 1654248772 * 10**9),
            (Layout.SECOND, 1654248772, 1654248772 * 10**9),
            (Layout.MILLI, "1654248772123", 1654248772123 * 10**6),
            (Layout.MICRO, 1654248772123456, 1654248772123456 * 10**3),
            (Layout.NANO, "1654248772123456789", 1654248772123456789),
            (Layout.NANO, "-1654248772123456789", -1654248772123456789),
            (Layout.SECOND, "0", 0),
            (Layout.MILLI, "-1", -(10**6)),
        ],
    )
    def test_parse(self, layout, value, expected_nano):
        """Test Unix time at each resolution, from ints and digit strings."""
        assert layout.parse(value).unix_nano() == expected_nano

    def test_float_rounds_half_away_from_zero(self):
        """Test that floats are rounded to the nearest integer."""
        assert Layout.SECOND.parse(1654248772.5).unix() == 1654248773
        assert Layout.SECOND.parse(-1.5).unix() == -2
        assert Layout.SECOND.parse(1654248772.4).unix() == 1654248772

    @pytest.mark.parametrize("layout", [Layout.SECOND, Layout.MILLI, Layout.MICRO, Layout.NANO])
    def test_overflow(self, layout):
        """Test that values beyond 64 bits are errors, not truncated."""
        with pytest.raises(ParseError, match="64-bit"):
            layout.parse("92233720368547758070")

    def test_outside_calendar_range(self):
        """Test that int64 seconds beyond year 9999 are errors."""
        with pytest.raises(ParseError, match="representable range"):
            Layout.SECOND.parse(2**62)

    @pytest.mark.parametrize("value", ["", "abc", "12.5", True, None, [1]])
    def test_rejects_non_numeric(self, value):
        """Test that non-numeric input raises ParseError."""
        with pytest.raises(ParseError):
            Layout.SECOND.parse(value)


class TestLayouts:
    def test_first_match_wins(self):
        """Test that the first successful layout is used."""
        layouts = Layouts([Layout.RFC3339, Layout.DATE])
        assert layouts.parse("2022-06-03T09:32:52Z").unix() == 1654248772

    def test_falls_through_to_later_layout(self):
        """Test that failures move on to the next layout."""
        layouts = Layouts([Layout.RFC3339, Layout.DATE])
        assert layouts.parse("2022-06-03") == Instant.of(2022, 6, 3)

    def test_no_match(self):
        """Test that exhausting all layouts names the value."""
        with pytest.raises(ParseError, match="'banana' with any layout"):
            Layouts([Layout.RFC3339, Layout.DATE]).parse("banana")

    def test_empty(self):
        """Test that an empty layout list always fails."""
        with pytest.raises(ParseError):
            Layouts().parse("2022-06-03")

    def test_default_order(self):
        """Test the default candidates used by parse_time."""
        assert DEFAULT_LAYOUTS == (
            Layout.RFC3339_NANO,
            Layout.RFC3339,
            Layout.RFC3339_SHORT,
            Layout.DATE,
        )


@pytest.mark.parametrize(
    "instant",
    [
        Instant.of(2022, 6, 3, 9, 32, 52, 123456789),
        Instant.of(1969, 12, 31, 23, 59, 59, 1),
        Instant.of(2024, 2, 29, 12, 0, 0, 999999999, tz=timezone(timedelta(hours=-5, minutes=-30))),
        Instant.of(2024, 7, 1, 15, 37, 59, tz="Europe/Berlin"),
    ],
)
def test_rfc3339_nano_round_trip(instant):
    """Test that formatting then parsing RFC3339_NANO is lossless."""
    parsed = Layout.RFC3339_NANO.parse(Layout.RFC3339_NANO.format(instant))
    assert parsed == instant
    assert parsed.nanosecond == instant.nanosecond
    assert parsed.utcoffset() == instant.utcoffset()
