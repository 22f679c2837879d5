"""Weighted zone search over names, abbreviations and UTC offsets."""
from __future__ import annotations

import re
from typing import Iterable, List, Sequence, Tuple

from zonegrid.zones.models import GroupedZone, TimeZone
from zonegrid.utils.names import fold, generic_name

OFFSET_MATCH_BONUS = 1000
SAME_REGION_BONUS = 50

_OFFSET = r"([+-])(\d{1,2})(?::?(\d{2}))?"
_OFFSET_PATTERNS: Tuple[re.Pattern[str], ...] = (
    re.compile(rf"(?:gmt|utc)\s*{_OFFSET}"),
    re.compile(rf"[a-z]{{2,5}}\s*{_OFFSET}"),
    re.compile(_OFFSET),
)

# (field accessor, weight); exact = 3x, prefix = 2x, substring = 1x
_FIELDS = (
    (lambda zone: zone.city_name, 100),
    (lambda zone: zone.display_name, 80),
    (lambda zone: zone.abbreviation, 60),
    (lambda zone: generic_name(zone.display_name), 40),
    (lambda zone: zone.id, 20),
)


def parse_offset_query(query: str) -> float | None:
    """``utc-12`` / ``EST-5`` / ``+5:30`` -> signed hours; ``None`` for plain text."""
    text = query.strip().lower()
    for pattern in _OFFSET_PATTERNS:
        match = pattern.fullmatch(text)
        if match:
            sign = 1 if match.group(1) == "+" else -1
            minutes = int(match.group(3) or 0)
            if minutes >= 60:
                return None
            return sign * (int(match.group(2)) + minutes / 60)
    return None


def text_score(query: str, zone: TimeZone) -> int:
    needle = fold(query)
    if not needle:
        return 0
    score = 0
    for accessor, weight in _FIELDS:
        value = fold(accessor(zone))
        if not value:
            continue
        if value == needle:
            score += 3 * weight
        elif value.startswith(needle):
            score += 2 * weight
        elif needle in value:
            score += weight
    return score


class SearchIndex:
    """Ranks zones against a free-text or offset query, best first."""

    def search(
        self,
        query: str,
        zones: Sequence[TimeZone],
        grouped: Iterable[GroupedZone] = (),
        reference_zone: TimeZone | None = None,
    ) -> List[TimeZone]:
        candidates = self.candidates(zones, grouped)
        if not query.strip():
            return candidates

        target_offset = parse_offset_query(query)
        scored: List[Tuple[int, TimeZone]] = []
        for zone in candidates:
            score = text_score(query, zone)
            if target_offset is not None and abs(zone.offset_hours - target_offset) < 1e-6:
                score += OFFSET_MATCH_BONUS
            if score > 0 and reference_zone is not None and zone.region and zone.region == reference_zone.region:
                score += SAME_REGION_BONUS
            if score > 0:
                scored.append((score, zone))

        scored.sort(key=lambda item: (-item[0], item[1].city_name, item[1].offset_hours))
        return [zone for _, zone in scored]

    @staticmethod
    def candidates(zones: Sequence[TimeZone], grouped: Iterable[GroupedZone] = ()) -> List[TimeZone]:
        """Primary zones plus off-cycle alternates not already among them."""
        result = list(zones)
        present = {(zone.id, round(zone.offset_hours * 60)) for zone in result}
        for group in grouped:
            alternate = group.alternate
            if alternate is None:
                continue
            key = (alternate.id, round(alternate.offset_hours * 60))
            if key not in present:
                present.add(key)
                result.append(alternate)
        return result
