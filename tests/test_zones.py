"""Tests for timezone resolution."""

from concurrent.futures import ThreadPoolExecutor
from datetime import timezone

import pytest

from caltime import ParseError, UnknownZoneError, load_zone, parse_zone
from caltime.zones import UTC, UTC_NAMES, clear_cache


def test_load_zone_is_cached():
    """Test that repeated lookups return the same object."""
    clear_cache()
    assert load_zone("Europe/Berlin") is load_zone("Europe/Berlin")


@pytest.mark.parametrize(
    "name", ["Mars/Olympus", "", "../etc/passwd", "Europe", "America"]
)
def test_unknown_zone(name):
    """Test that unresolvable names raise UnknownZoneError."""
    with pytest.raises(UnknownZoneError) as info:
        load_zone(name)
    assert info.value.name == name


def test_unknown_zone_is_parse_error():
    """Test that UnknownZoneError is also a ParseError and ValueError."""
    with pytest.raises(ValueError):
        parse_zone("Nowhere/Special")


def test_parse_zone():
    """Test coercion of names and tzinfo objects."""
    assert parse_zone(" UTC ") is load_zone("UTC")
    assert parse_zone(timezone.utc) is timezone.utc
    with pytest.raises(ParseError, match="name string"):
        parse_zone(5)


def test_concurrent_loads():
    """Test that concurrent lookups agree on one cached zone."""
    clear_cache()
    with ThreadPoolExecutor(max_workers=8) as pool:
        zones = list(pool.map(lambda _: load_zone("America/New_York"), range(32)))
    assert len({id(zone) for zone in zones}) == 1


@pytest.mark.parametrize("name", sorted(UTC_NAMES))
def test_zero_offset_names_resolve_to_utc(name):
    """Test that fixed zero-offset names share the UTC object."""
    assert load_zone(name) is UTC
