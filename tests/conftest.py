from datetime import datetime, timezone

import pytest

from zonegrid.zones.cache import MemoryKeyValueStore, ZoneCatalogCache
from zonegrid.zones.catalog import ZoneCatalog
from zonegrid.zones.models import StandardZone, TimeZone
from zonegrid.zones.resolver import FormatHint, OffsetResolver, TimeAuthority, UnknownZoneError
from zonegrid.utils.names import extract_city_name
from zonegrid.utils.time_utils import format_gmt_offset

# zone id -> ((Apr-Oct offset, long name, short), (Nov-Mar offset, long name, short))
FAKE_ZONES = {
    "America/New_York": ((-4, "Eastern Daylight Time", "EDT"), (-5, "Eastern Standard Time", "EST")),
    "America/Detroit": ((-4, "Eastern Daylight Time", "EDT"), (-5, "Eastern Standard Time", "EST")),
    "America/Toronto": ((-4, "Eastern Daylight Time", "EDT"), (-5, "Eastern Standard Time", "EST")),
    "America/Indianapolis": ((-4, "Eastern Daylight Time", "EDT"), (-5, "Eastern Standard Time", "EST")),
    "America/Indiana/Indianapolis": ((-4, "Eastern Daylight Time", "EDT"), (-5, "Eastern Standard Time", "EST")),
    "America/Los_Angeles": ((-7, "Pacific Daylight Time", "PDT"), (-8, "Pacific Standard Time", "PST")),
    "Europe/London": ((1, "British Summer Time", "BST"), (0, "Greenwich Mean Time", "GMT")),
    "Europe/Paris": ((2, "Central European Summer Time", "CEST"), (1, "Central European Standard Time", "CET")),
    "Asia/Kolkata": ((5.5, "India Standard Time", "IST"), (5.5, "India Standard Time", "IST")),
    "Asia/Tokyo": ((9, "Japan Standard Time", "JST"), (9, "Japan Standard Time", "JST")),
    "Australia/Sydney": (
        (10, "Australian Eastern Standard Time", "AEST"),
        (11, "Australian Eastern Daylight Time", "AEDT"),
    ),
    "Pacific/Kiritimati": ((14, "Line Islands Time", ""), (14, "Line Islands Time", "")),
    "Pacific/Pago_Pago": ((-11, "Samoa Standard Time", "SST"), (-11, "Samoa Standard Time", "SST")),
}

JANUARY = datetime(2024, 1, 15, 10, 20, tzinfo=timezone.utc)
JULY = datetime(2024, 7, 15, 10, 20, tzinfo=timezone.utc)


class FakeTimeAuthority(TimeAuthority):
    """Northern-hemisphere seasons by month; records every query."""

    def __init__(self, zones=None):
        self.zones = dict(FAKE_ZONES if zones is None else zones)
        self.calls = []

    def resolve(self, zone_id, instant, hint):
        self.calls.append((zone_id, hint))
        if zone_id not in self.zones:
            raise UnknownZoneError(zone_id, "unknown to fake authority")
        summer, winter = self.zones[zone_id]
        offset, long_name, short = summer if 4 <= instant.month <= 10 else winter
        if hint is FormatHint.LONG_OFFSET:
            return format_gmt_offset(offset)
        if hint is FormatHint.LONG:
            return long_name
        return short


def make_zone(zone_id, offset, coordinates=None, display_name=None, abbreviation="", off_cycle=False):
    return TimeZone(
        ref=StandardZone(zone_id),
        offset_hours=offset,
        display_name=display_name or zone_id,
        city_name=extract_city_name(zone_id),
        abbreviation=abbreviation,
        is_off_cycle=off_cycle,
        coordinates=coordinates,
    )


@pytest.fixture
def authority():
    return FakeTimeAuthority()


@pytest.fixture
def store():
    return MemoryKeyValueStore()


@pytest.fixture
def catalog(authority, store):
    return ZoneCatalog(
        OffsetResolver(authority),
        ZoneCatalogCache(store),
        reference_zone_id="America/New_York",
        zone_ids=list(FAKE_ZONES),
        coordinates={},
    )


@pytest.fixture
def zone_factory():
    return make_zone
