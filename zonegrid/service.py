"""Public operations over the zone engine."""
from __future__ import annotations

import logging
import random
from dataclasses import replace
from datetime import datetime, timezone
from typing import Iterable, List, Sequence

from zonegrid.config.settings import Settings, get_settings
from zonegrid.zones.cache import SqliteKeyValueStore, ZoneCatalogCache
from zonegrid.zones.catalog import ZoneCatalog
from zonegrid.zones.daylight import DaylightOracle
from zonegrid.zones.grouping import ZoneVariantGrouper
from zonegrid.zones.models import Coordinates, GroupedZone, TimelineHour, TimelineRow, TimeZone
from zonegrid.zones.resolver import BabelTimeAuthority, OffsetResolver
from zonegrid.zones.search import SearchIndex
from zonegrid.zones.selector import ZoneSelector
from zonegrid.zones.timeline import DEFAULT_WIDTH, TimelineBuilder
from zonegrid.utils.logging import setup_logging
from zonegrid.utils.time_utils import ensure_utc

logger = logging.getLogger("zonegrid.service")


class ZoneService:
    """Wires the catalog, selector, grouper, timeline builder and search together."""

    def __init__(
        self,
        catalog: ZoneCatalog,
        *,
        selector: ZoneSelector | None = None,
        timeline_builder: TimelineBuilder | None = None,
        search_index: SearchIndex | None = None,
        timeline_width: int = DEFAULT_WIDTH,
        default_zone_count: int = 5,
        time_format: str = "12h",
    ) -> None:
        self.catalog = catalog
        self.grouper = ZoneVariantGrouper(catalog)
        self.selector = selector or ZoneSelector()
        self.timeline_builder = timeline_builder or TimelineBuilder(DaylightOracle())
        self.search_index = search_index or SearchIndex()
        self.timeline_width = timeline_width
        self.default_zone_count = default_zone_count
        self.time_format = time_format

    @classmethod
    def from_settings(cls, settings: Settings | None = None, *, rng: random.Random | None = None) -> "ZoneService":
        settings = settings or get_settings()
        setup_logging(level=settings.log_level)
        resolver = OffsetResolver(BabelTimeAuthority(locale=settings.locale))
        cache = ZoneCatalogCache(SqliteKeyValueStore(settings.zone_cache_path()))
        catalog = ZoneCatalog(resolver, cache, reference_zone_id=settings.reference_timezone)
        return cls(
            catalog,
            selector=ZoneSelector(rng),
            timeline_width=settings.timeline_width,
            default_zone_count=settings.default_zone_count,
            time_format=settings.time_format,
        )

    def resolve_reference_zone(self, instant: datetime | None = None) -> TimeZone:
        return self.catalog.reference_zone(_instant(instant))

    def ordered_zones(self, instant: datetime | None = None) -> List[TimeZone]:
        return self.catalog.ordered_zones(_instant(instant))

    def select_zones_for_timeline(self, count: int | None = None, instant: datetime | None = None) -> List[TimeZone]:
        instant = _instant(instant)
        reference = self.catalog.reference_zone(instant)
        zones = self.catalog.zones_at(instant, reference)
        if count is None:
            count = self.default_zone_count
        selected = self.selector.select(reference, count, zones)
        logger.debug("Selected %s around %s", [zone.id for zone in selected], reference.id)
        return selected

    def build_timeline(self, width: int | None, zone: TimeZone, instant: datetime | None = None) -> List[TimelineHour]:
        instant = _instant(instant)
        reference = self.catalog.reference_zone(instant)
        if width is None:
            width = self.timeline_width
        return self.timeline_builder.build(width, zone, reference, instant)

    def build_timeline_rows(
        self,
        zones: Sequence[TimeZone],
        instant: datetime | None = None,
        width: int | None = None,
    ) -> List[TimelineRow]:
        instant = _instant(instant)
        reference = self.catalog.reference_zone(instant)
        if width is None:
            width = self.timeline_width
        return self.timeline_builder.build_rows(width, zones, reference, instant)

    def hour_labels(self, hours: Sequence[TimelineHour]) -> List[str]:
        return [hour.label(self.time_format) for hour in hours]

    def grouped_zones(self, instant: datetime | None = None) -> List[GroupedZone]:
        return self.grouper.grouped_zones(_instant(instant))

    def search(self, query: str, instant: datetime | None = None) -> List[TimeZone]:
        instant = _instant(instant)
        reference = self.catalog.reference_zone(instant)
        zones = self.catalog.ordered_zones(instant)
        grouped = self.grouper.grouped_zones(instant)
        return self.search_index.search(query, zones, grouped, reference_zone=reference)

    def create_custom_zone(
        self,
        offset_hours: float,
        name: str | None = None,
        coordinates: Coordinates | None = None,
    ) -> TimeZone:
        if not -12 <= offset_hours <= 14:
            raise ValueError(f"Offset {offset_hours} is outside -12..+14")
        if round(offset_hours * 4) != offset_hours * 4:
            raise ValueError("Offsets must be whole quarter hours")
        return TimeZone.custom(offset_hours, name=name, coordinates=coordinates)

    def refresh_zones(self, zones: Iterable[TimeZone], instant: datetime | None = None) -> List[TimeZone]:
        """Re-resolve zones for a new instant; custom and off-cycle zones stay as they are."""
        instant = _instant(instant)
        refreshed: List[TimeZone] = []
        for zone in zones:
            if zone.is_custom or zone.is_off_cycle:
                refreshed.append(zone)
                continue
            resolved = self.catalog.build_zone(zone.id, instant)
            if resolved is None:
                refreshed.append(zone)
                continue
            refreshed.append(replace(resolved, coordinates=resolved.coordinates or zone.coordinates))
        return refreshed

    def clear_cache(self) -> None:
        self.catalog.cache.clear()
        logger.info("Zone catalog cache cleared")


def _instant(instant: datetime | None) -> datetime:
    return ensure_utc(instant) if instant is not None else datetime.now(timezone.utc)
