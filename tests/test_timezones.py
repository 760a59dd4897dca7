from datetime import datetime, timedelta, timezone

from event_connect.calendar.timezones import (
    DEFAULT_TIMEZONE,
    KNOWN_TIMEZONES,
    KnownTimeZone,
    find_timezone,
    matching_timezones,
    resolve_timezone_name,
    to_wall_time,
)


def _at(year, month, day, hour, offset_hours, offset_minutes=0):
    return datetime(year, month, day, hour, 0, tzinfo=timezone(timedelta(hours=offset_hours, minutes=offset_minutes)))


class TestResolveTimezoneName:
    def test_prefers_us_zone_among_matches(self):
        """-07:00 in July matches Baja California, Pacific (US & Canada) and Arizona."""
        value = _at(2021, 7, 1, 10, -7)
        names = [z.name for z in matching_timezones(value)]
        assert "Pacific Standard Time (Mexico)" in names
        assert names.index("Pacific Standard Time (Mexico)") < names.index("Pacific Standard Time")

        assert resolve_timezone_name(value) == "Pacific Standard Time"

    def test_offset_is_evaluated_at_the_local_date(self):
        """-05:00 is Eastern in January but Central in July."""
        assert resolve_timezone_name(_at(2021, 1, 15, 9, -5)) == "Eastern Standard Time"
        assert resolve_timezone_name(_at(2021, 7, 15, 9, -5)) == "Central Standard Time"

    def test_first_match_when_no_us_zone(self):
        value = _at(2021, 1, 15, 9, 5, 30)
        assert resolve_timezone_name(value) == "India Standard Time"

    def test_unknown_offset_falls_back_to_default(self):
        value = _at(2021, 1, 15, 9, 5, 17)
        assert resolve_timezone_name(value) == DEFAULT_TIMEZONE
        assert resolve_timezone_name(value, default="UTC") == "UTC"

    def test_naive_timestamp_falls_back_to_default(self):
        assert resolve_timezone_name(datetime(2021, 1, 15, 9, 0)) == DEFAULT_TIMEZONE

    def test_custom_registry_prefers_us_display_name(self):
        zones = [
            KnownTimeZone("Alpha Standard Time", "(UTC+01:00) Alpha", "Africa/Lagos"),
            KnownTimeZone("Beta Standard Time", "(UTC+01:00) Beta (US Territory)", "Africa/Lagos"),
        ]
        value = _at(2021, 1, 15, 9, 1)
        assert resolve_timezone_name(value, zones=zones) == "Beta Standard Time"
        assert resolve_timezone_name(value, zones=zones[:1]) == "Alpha Standard Time"


def test_registry_names_are_unique():
    names = [z.name for z in KNOWN_TIMEZONES]
    assert len(names) == len(set(names))


def test_find_timezone():
    assert find_timezone("Eastern Standard Time").iana == "America/New_York"
    assert find_timezone("Nowhere Standard Time") is None


def test_to_wall_time_converts_into_named_zone():
    value = datetime(2021, 7, 1, 17, 0, tzinfo=timezone.utc)
    wall = to_wall_time(value, "Pacific Standard Time")
    assert (wall.hour, wall.utcoffset()) == (10, timedelta(hours=-7))


def test_to_wall_time_leaves_naive_and_unknown_values():
    naive = datetime(2021, 7, 1, 17, 0)
    assert to_wall_time(naive, "Pacific Standard Time") == naive
    aware = _at(2021, 7, 1, 17, 2)
    assert to_wall_time(aware, "Nowhere Standard Time") is aware
