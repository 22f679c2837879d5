"""Yearly zone catalog: anchor-date resolution, caching and globe ordering."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Iterable, List, Mapping, Sequence, Tuple
from zoneinfo import available_timezones

from zonegrid.config.coordinates import ZONE_COORDINATES
from zonegrid.zones.cache import ZoneCatalogCache
from zonegrid.zones.models import Coordinates, StandardZone, TimeZone
from zonegrid.zones.resolver import OffsetResolver, UnknownZoneError
from zonegrid.zones.schemas import CachedZone, YearlyCacheEntry
from zonegrid.utils.names import extract_city_name
from zonegrid.utils.time_utils import circular_distance, ensure_utc

logger = logging.getLogger("zonegrid.catalog")

# Prefixes of identifiers that are aliases or administrative rather than places.
_EXCLUDED_PREFIXES: tuple[str, ...] = (
    "Etc/",
    "SystemV/",
    "posix/",
    "right/",
    "US/",
    "Canada/",
    "Brazil/",
    "Chile/",
    "Mexico/",
)

# Offsets this close are considered the same anchor sample.
ANCHOR_TOLERANCE_HOURS = 0.1

UTC_ZONE = TimeZone(
    ref=StandardZone("UTC"),
    offset_hours=0.0,
    display_name="Coordinated Universal Time",
    city_name="UTC",
    abbreviation="UTC",
)


def default_zone_ids() -> List[str]:
    """Region/City identifiers known to the local zone database."""
    return sorted(
        zone_id
        for zone_id in available_timezones()
        if "/" in zone_id and not zone_id.startswith(_EXCLUDED_PREFIXES)
    )


def anchor_instants(year: int) -> Tuple[datetime, datetime]:
    """Return the (summer, winter) sample instants for ``year``."""
    return (
        datetime(year, 6, 1, 12, tzinfo=timezone.utc),
        datetime(year, 12, 31, 12, tzinfo=timezone.utc),
    )


class ZoneCatalog:
    """Every known zone resolved at two anchor dates per calendar year."""

    def __init__(
        self,
        resolver: OffsetResolver,
        cache: ZoneCatalogCache | None = None,
        *,
        reference_zone_id: str = "UTC",
        zone_ids: Iterable[str] | None = None,
        coordinates: Mapping[str, Coordinates] | None = None,
    ) -> None:
        self.resolver = resolver
        self.cache = cache or ZoneCatalogCache()
        self.reference_zone_id = reference_zone_id
        self.coordinates = ZONE_COORDINATES if coordinates is None else coordinates
        self._zone_ids: List[str] | None = list(zone_ids) if zone_ids is not None else None
        self.rejected_zone_ids: set[str] = set()

    @property
    def zone_ids(self) -> List[str]:
        if self._zone_ids is None:
            self._zone_ids = default_zone_ids()
        if self.reference_zone_id not in self._zone_ids:
            self._zone_ids.insert(0, self.reference_zone_id)
        return self._zone_ids

    def build_zone(self, zone_id: str, instant: datetime) -> TimeZone | None:
        """Resolve one identifier; rejected identifiers are logged and yield ``None``."""
        try:
            resolved = self.resolver.resolve(zone_id, instant)
        except UnknownZoneError as exc:
            # Skipped rather than given a synthesized UTC± entry: an identifier
            # the authority cannot resolve has no offset to synthesize from.
            if zone_id not in self.rejected_zone_ids:
                logger.warning("Time authority rejected zone %s: %s", zone_id, exc)
            self.rejected_zone_ids.add(zone_id)
            return None
        return TimeZone(
            ref=StandardZone(zone_id),
            offset_hours=resolved.offset_hours,
            display_name=resolved.display_name,
            city_name=extract_city_name(zone_id),
            abbreviation=resolved.abbreviation,
            coordinates=self.coordinates.get(zone_id),
        )

    def yearly_entry(self, year: int) -> YearlyCacheEntry:
        entry = self.cache.get(year)
        if entry is not None:
            return entry

        summer_at, winter_at = anchor_instants(year)
        summer_zones: List[CachedZone] = []
        winter_zones: List[CachedZone] = []
        for zone_id in self.zone_ids:
            summer = self.build_zone(zone_id, summer_at)
            winter = self.build_zone(zone_id, winter_at)
            if summer is None or winter is None:
                continue
            summer_zones.append(CachedZone.from_zone(summer))
            winter_zones.append(CachedZone.from_zone(winter))

        if not summer_zones:
            logger.error("No zone could be resolved for %s; catalog left empty", year)
            return YearlyCacheEntry.model_construct(
                summer_zones=[],
                winter_zones=[],
                reference_zone_id=self.reference_zone_id,
                year=year,
            )

        entry = YearlyCacheEntry(
            summer_zones=summer_zones,
            winter_zones=winter_zones,
            reference_zone_id=self.reference_zone_id,
            year=year,
        )
        logger.info("Resolved %d zones for %s", len(summer_zones), year)
        self.cache.put(entry)
        return entry

    def reference_zone(self, instant: datetime) -> TimeZone:
        """The reference zone as it actually resolves at ``instant``."""
        zone = self.build_zone(self.reference_zone_id, instant)
        if zone is not None:
            return zone
        logger.warning("Reference zone %s unavailable, falling back to UTC", self.reference_zone_id)
        return self.build_zone("UTC", instant) or UTC_ZONE

    def anchor_sets(self, year: int) -> Tuple[List[TimeZone], List[TimeZone]]:
        entry = self.yearly_entry(year)
        return (
            [cached.to_zone() for cached in entry.summer_zones],
            [cached.to_zone() for cached in entry.winter_zones],
        )

    def zones_at(self, instant: datetime, reference: TimeZone | None = None) -> List[TimeZone]:
        """The anchor set matching ``instant``, with the reference resolved exactly.

        The reference zone's actual offset is compared against its two anchor
        offsets; summer wins ties and is the default when neither matches.
        """
        instant = ensure_utc(instant)
        reference = reference or self.reference_zone(instant)
        summer, winter = self.anchor_sets(instant.year)
        chosen = summer
        if not _matches_anchor(reference, summer) and _matches_anchor(reference, winter):
            chosen = winter

        zones = [reference if zone.id == reference.id else zone for zone in chosen]
        if not any(zone.id == reference.id for zone in zones):
            zones.insert(0, reference)
        return zones

    def ordered_zones(self, instant: datetime) -> List[TimeZone]:
        """All zones sorted by signed circular distance from the reference zone."""
        reference = self.reference_zone(ensure_utc(instant))
        return order_by_distance(self.zones_at(instant, reference), reference)


def order_by_distance(zones: Sequence[TimeZone], reference: TimeZone) -> List[TimeZone]:
    return sorted(
        zones,
        key=lambda zone: (
            circular_distance(zone.offset_hours, reference.offset_hours),
            zone.id != reference.id,
            zone.city_name,
            zone.id,
        ),
    )


def _matches_anchor(reference: TimeZone, anchor_zones: Sequence[TimeZone]) -> bool:
    for zone in anchor_zones:
        if zone.id == reference.id:
            return abs(zone.offset_hours - reference.offset_hours) <= ANCHOR_TOLERANCE_HOURS
    return False
