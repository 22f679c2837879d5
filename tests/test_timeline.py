from datetime import datetime, timezone

from zonegrid.zones.daylight import DaylightOracle
from zonegrid.zones.models import Coordinates, SunTimes, TimeZone
from zonegrid.zones.timeline import TimelineBuilder

JANUARY = datetime(2024, 1, 15, 10, 20, tzinfo=timezone.utc)
LONDON = Coordinates(51.5074, -0.1278)


class FixedOracle(DaylightOracle):
    """Sunrise 06:30 and sunset 18:30 UTC every day."""

    def sun_times(self, coordinates, day, offset_hours=0.0):
        if coordinates is None:
            return None
        return SunTimes(
            sunrise=datetime(day.year, day.month, day.day, 6, 30, tzinfo=timezone.utc),
            sunset=datetime(day.year, day.month, day.day, 18, 30, tzinfo=timezone.utc),
        )


def test_timeline_is_centered_on_reference_hour(zone_factory):
    reference = zone_factory("America/New_York", -5)
    tokyo = zone_factory("Asia/Tokyo", 9)

    hours = TimelineBuilder().build(48, tokyo, reference, JANUARY)

    assert len(hours) == 48
    assert hours[24].instant == datetime(2024, 1, 15, 10, tzinfo=timezone.utc)
    assert hours[24].hour == 19
    assert hours[0].instant == datetime(2024, 1, 14, 10, tzinfo=timezone.utc)


def test_date_transitions_at_local_midnight(zone_factory):
    london = zone_factory("Europe/London", 0)
    hours = TimelineBuilder().build(48, london, london, JANUARY)

    assert [index for index, hour in enumerate(hours) if hour.is_date_transition] == [14, 38]


def test_zone_without_coordinates_is_always_night(zone_factory):
    london = zone_factory("Europe/London", 0)
    hours = TimelineBuilder().build(48, london, london, JANUARY)

    assert not any(hour.is_daylight for hour in hours)
    assert not any(hour.is_sunrise_hour or hour.is_sunset_hour for hour in hours)


def test_sunrise_and_sunset_hours_are_annotated(zone_factory):
    london = zone_factory("Europe/London", 0, coordinates=LONDON)
    hours = TimelineBuilder(FixedOracle()).build(24, london, london, datetime(2024, 3, 20, 12, tzinfo=timezone.utc))

    sunrise = [hour for hour in hours if hour.is_sunrise_hour]
    sunset = [hour for hour in hours if hour.is_sunset_hour]

    assert [hour.hour for hour in sunrise] == [7]
    assert sunrise[0].annotation == "Sunrise 6:30 AM"
    assert [hour.hour for hour in sunset] == [19]
    assert sunset[0].annotation == "Sunset 6:30 PM"
    assert all(hour.is_daylight == (7 <= hour.hour <= 18) for hour in hours)


def test_real_sunrise_flags_once_per_day(zone_factory):
    london = zone_factory("Europe/London", 0, coordinates=LONDON)
    hours = TimelineBuilder().build(48, london, london, datetime(2024, 3, 20, 12, tzinfo=timezone.utc))

    sunrise_days = [hour.local_time.day for hour in hours if hour.is_sunrise_hour]
    assert sorted(sunrise_days) == [20, 21]
    assert all(hour.annotation.startswith("Sunrise") for hour in hours if hour.is_sunrise_hour)


def test_fractional_zone_labels_keep_minutes(zone_factory):
    utc = zone_factory("UTC", 0)
    kolkata = zone_factory("Asia/Kolkata", 5.5)

    hours = TimelineBuilder().build(48, kolkata, utc, JANUARY)

    assert hours[24].label("12h") == "3:30 PM"
    assert hours[24].label("24h") == "15:30"


def test_build_rows_marks_reference(zone_factory):
    reference = zone_factory("America/New_York", -5)
    rows = TimelineBuilder().build_rows(
        8, [reference, zone_factory("Asia/Tokyo", 9)], reference, JANUARY
    )

    assert [row.is_reference_zone for row in rows] == [True, False]
    assert all(len(row.hours) == 8 for row in rows)


def test_high_latitude_summer_has_daylight_and_one_sunrise_per_day():
    reykjavik = TimeZone.custom(0, name="Reykjavik Camp", coordinates=Coordinates(64.1466, -21.9426))
    hours = TimelineBuilder().build(48, reykjavik, reykjavik, datetime(2024, 6, 21, 12, tzinfo=timezone.utc))

    assert sum(hour.is_daylight for hour in hours) > 30
    sunrise_days = [hour.local_time.day for hour in hours if hour.is_sunrise_hour]
    assert len(sunrise_days) == len(set(sunrise_days)) >= 1
    assert all(hour.annotation.startswith("Sunrise") for hour in hours if hour.is_sunrise_hour)
