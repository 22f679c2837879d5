from datetime import datetime, timezone

from zonegrid.zones.grouping import ZoneVariantGrouper

JANUARY = datetime(2024, 1, 15, 10, 20, tzinfo=timezone.utc)
JULY = datetime(2024, 7, 15, 10, 20, tzinfo=timezone.utc)


def _group(groups, location):
    return next(group for group in groups if group.location == location)


def test_winter_group_offers_daylight_variant_as_alternate(catalog):
    new_york = _group(ZoneVariantGrouper(catalog).grouped_zones(JANUARY), "New York")

    assert new_york.current.offset_hours == -5
    assert new_york.alternate.offset_hours == -4
    assert new_york.alternate.is_off_cycle
    assert not new_york.current.is_off_cycle
    assert [zone.offset_hours for zone in new_york.variants] == [-4, -5]


def test_summer_group_offers_standard_variant_as_alternate(catalog):
    new_york = _group(ZoneVariantGrouper(catalog).grouped_zones(JULY), "New York")

    assert new_york.current.offset_hours == -4
    assert new_york.alternate.offset_hours == -5
    assert new_york.alternate.is_off_cycle


def test_zone_without_dst_has_single_variant(catalog):
    tokyo = _group(ZoneVariantGrouper(catalog).grouped_zones(JANUARY), "Tokyo")
    assert tokyo.alternate is None
    assert len(tokyo.variants) == 1


def test_shallowest_identifier_represents_location(catalog):
    groups = ZoneVariantGrouper(catalog).grouped_zones(JANUARY)
    indianapolis = [group for group in groups if group.location == "Indianapolis"]

    assert len(indianapolis) == 1
    assert indianapolis[0].current.id == "America/Indianapolis"
    assert indianapolis[0].region == "America"


def test_groups_sorted_by_distance_then_location(catalog):
    groups = ZoneVariantGrouper(catalog).grouped_zones(JANUARY)

    assert [group.location for group in groups[:4]] == ["Detroit", "Indianapolis", "New York", "Toronto"]
    assert len(groups) == len(catalog.zone_ids) - 1
