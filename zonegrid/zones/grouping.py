"""Grouping of identifiers by location with their DST/standard variants."""
from __future__ import annotations

import logging
from dataclasses import replace
from datetime import datetime
from typing import Dict, List, Tuple

from zonegrid.zones.catalog import ANCHOR_TOLERANCE_HOURS, ZoneCatalog
from zonegrid.zones.models import GroupedZone, TimeZone
from zonegrid.utils.names import path_depth
from zonegrid.utils.time_utils import circular_distance, ensure_utc

logger = logging.getLogger("zonegrid.grouping")


class ZoneVariantGrouper:
    def __init__(self, catalog: ZoneCatalog) -> None:
        self.catalog = catalog

    def grouped_zones(self, instant: datetime) -> List[GroupedZone]:
        instant = ensure_utc(instant)
        reference = self.catalog.reference_zone(instant)
        current_by_id = {zone.id: zone for zone in self.catalog.zones_at(instant, reference)}
        summer, winter = self.catalog.anchor_sets(instant.year)
        winter_by_id = {zone.id: zone for zone in winter}

        representatives: Dict[Tuple[str, str], TimeZone] = {}
        for zone in summer:
            key = (zone.region, zone.city_name)
            existing = representatives.get(key)
            if existing is None or _preference(zone) < _preference(existing):
                representatives[key] = zone

        groups: List[GroupedZone] = []
        for (region, location), summer_zone in representatives.items():
            winter_zone = winter_by_id.get(summer_zone.id, summer_zone)
            current_zone = current_by_id.get(summer_zone.id, summer_zone)
            groups.append(_build_group(region, location, summer_zone, winter_zone, current_zone))

        groups.sort(
            key=lambda group: (
                abs(circular_distance(group.current.offset_hours, reference.offset_hours)),
                group.location,
            )
        )
        logger.debug("Grouped %d identifiers into %d locations", len(summer), len(groups))
        return groups


def _preference(zone: TimeZone) -> Tuple[int, str]:
    # Shallower identifiers win: "Europe/Paris" over "Europe/Paris/District"
    return path_depth(zone.id), zone.id


def _build_group(
    region: str,
    location: str,
    summer_zone: TimeZone,
    winter_zone: TimeZone,
    current_zone: TimeZone,
) -> GroupedZone:
    variants = [summer_zone]
    if abs(winter_zone.offset_hours - summer_zone.offset_hours) > ANCHOR_TOLERANCE_HOURS:
        variants.append(winter_zone)

    alternate = None
    if len(variants) == 2:
        in_winter = abs(current_zone.offset_hours - winter_zone.offset_hours) <= ANCHOR_TOLERANCE_HOURS
        other = summer_zone if in_winter else winter_zone
        alternate = replace(other, is_off_cycle=True)

    return GroupedZone(
        location=location,
        region=region,
        current=current_zone,
        alternate=alternate,
        variants=variants,
    )
