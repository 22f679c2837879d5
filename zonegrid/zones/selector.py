"""Centering algorithm: a bounded, offset-unique zone set around a reference zone."""
from __future__ import annotations

import logging
import random
from typing import Dict, List, Sequence

from zonegrid.zones.models import TimeZone

logger = logging.getLogger("zonegrid.selector")

MIN_ZONES = 3
MIN_OFFSET_HOURS = -12
MAX_OFFSET_HOURS = 14


def target_count(count: int) -> int:
    """``count`` rounded up to odd, never below three."""
    if count % 2 == 0:
        count += 1
    return max(MIN_ZONES, count)


def _offset_key(offset_hours: float) -> int:
    return round(offset_hours * 60)


class ZoneSelector:
    """Picks zones for display around a reference zone.

    ``rng`` needs ``shuffle`` and ``sample``; the ``random`` module itself is
    used when none is given. Results vary between calls on purpose, but the
    returned list always has an odd length of at least three, unique
    offsets, the reference zone, and ascending offsets.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random

    def select(self, reference_zone: TimeZone, count: int, zones: Sequence[TimeZone]) -> List[TimeZone]:
        target = target_count(count)
        reference_offset = reference_zone.offset_hours
        reference_key = _offset_key(reference_offset)

        by_offset: Dict[int, TimeZone] = {}
        for zone in zones:
            key = _offset_key(zone.offset_hours)
            if zone.id == reference_zone.id or key == reference_key:
                continue
            existing = by_offset.get(key)
            # Prefer zones we can compute daylight for
            if existing is None or (existing.coordinates is None and zone.coordinates is not None):
                by_offset[key] = zone

        below = sorted((z for z in by_offset.values() if z.offset_hours < reference_offset), key=lambda z: z.offset_hours)
        above = sorted((z for z in by_offset.values() if z.offset_hours > reference_offset), key=lambda z: z.offset_hours)
        slots = target - 1

        if (not below or not above) and len(below) + len(above) < slots:
            chosen = self._fill_depleted(below, above, slots)
        else:
            chosen = self._fill_balanced(below, above, slots)

        if len(chosen) < slots:
            chosen.extend(_nearest_unused(below + above, chosen, reference_offset, slots - len(chosen)))
        if len(chosen) < slots:
            logger.info(
                "Only %d distinct offsets available for %d slots; adding fixed-offset zones",
                len(chosen),
                slots,
            )
            chosen.extend(_synthesized(reference_offset, chosen, slots - len(chosen)))

        result = sorted([reference_zone, *chosen[:slots]], key=lambda zone: zone.offset_hours)
        if len(result) % 2 == 0:
            # Offset space exhausted: drop the zone farthest from the reference
            farthest = max(
                (zone for zone in result if zone is not reference_zone),
                key=lambda zone: abs(zone.offset_hours - reference_offset),
            )
            result.remove(farthest)
        return result

    def _fill_depleted(self, below: List[TimeZone], above: List[TimeZone], slots: int) -> List[TimeZone]:
        depleted, abundant = (below, above) if len(below) <= len(above) else (above, below)
        chosen = list(depleted[:slots])
        remaining = slots - len(chosen)
        if len(abundant) >= remaining:
            chosen.extend(self.rng.sample(abundant, remaining))
            return chosen
        union = below + above
        return list(self.rng.sample(union, min(len(union), slots)))

    def _fill_balanced(self, below: List[TimeZone], above: List[TimeZone], slots: int) -> List[TimeZone]:
        below_count = slots // 2
        above_count = slots - below_count
        below_pool = list(below)
        above_pool = list(above)
        self.rng.shuffle(below_pool)
        self.rng.shuffle(above_pool)
        return below_pool[:below_count] + above_pool[:above_count]


def _nearest_unused(
    pool: Sequence[TimeZone],
    chosen: Sequence[TimeZone],
    reference_offset: float,
    needed: int,
) -> List[TimeZone]:
    used = {_offset_key(zone.offset_hours) for zone in chosen}
    candidates = [zone for zone in pool if _offset_key(zone.offset_hours) not in used]
    candidates.sort(key=lambda zone: (abs(zone.offset_hours - reference_offset), zone.offset_hours))
    return candidates[:needed]


def _synthesized(reference_offset: float, chosen: Sequence[TimeZone], needed: int) -> List[TimeZone]:
    used = {_offset_key(reference_offset)} | {_offset_key(zone.offset_hours) for zone in chosen}
    extra: List[TimeZone] = []
    step = 1
    while len(extra) < needed and step <= MAX_OFFSET_HOURS - MIN_OFFSET_HOURS:
        for candidate in (reference_offset + step, reference_offset - step):
            if len(extra) >= needed:
                break
            if not MIN_OFFSET_HOURS <= candidate <= MAX_OFFSET_HOURS:
                continue
            key = _offset_key(candidate)
            if key in used:
                continue
            used.add(key)
            extra.append(TimeZone.custom(float(candidate)))
        step += 1
    return extra
