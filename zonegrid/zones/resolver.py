"""Offset, display name and abbreviation resolution against a time authority."""
from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from babel.dates import get_timezone_name

from zonegrid.utils.names import is_utc_identifier, synthesize_abbreviation
from zonegrid.utils.time_utils import ensure_utc, format_gmt_offset, parse_gmt_offset, utc_label

logger = logging.getLogger("zonegrid.resolver")


class FormatHint(str, Enum):
    LONG_OFFSET = "longOffset"
    LONG = "long"
    SHORT = "short"


class TimeAuthorityError(RuntimeError):
    """Raised when the time authority cannot answer a query."""

    def __init__(self, zone_id: str, message: str, original: Exception | None = None) -> None:
        super().__init__(f"{zone_id}: {message}")
        self.zone_id = zone_id
        self.original = original


class UnknownZoneError(TimeAuthorityError):
    """Raised when the time authority does not recognise a zone identifier."""


class TimeAuthority(ABC):
    @abstractmethod
    def resolve(self, zone_id: str, instant: datetime, hint: FormatHint) -> str:
        """Return the formatted text for ``hint``; an empty string means absent."""
        raise NotImplementedError


class BabelTimeAuthority(TimeAuthority):
    """Time authority backed by the system zone database and CLDR names."""

    def __init__(self, locale: str = "en") -> None:
        self.locale = locale
        self._zones: dict[str, ZoneInfo] = {}

    def _zone(self, zone_id: str) -> ZoneInfo:
        zone = self._zones.get(zone_id)
        if zone is None:
            try:
                zone = ZoneInfo(zone_id)
            except (ZoneInfoNotFoundError, ValueError) as exc:
                raise UnknownZoneError(zone_id, "not in the zone database", exc) from exc
            self._zones[zone_id] = zone
        return zone

    def resolve(self, zone_id: str, instant: datetime, hint: FormatHint) -> str:
        local = ensure_utc(instant).astimezone(self._zone(zone_id))
        if hint is FormatHint.LONG_OFFSET:
            offset = local.utcoffset()
            if offset is None:
                return ""
            return format_gmt_offset(offset.total_seconds() / 3600)
        if hint is FormatHint.SHORT:
            abbreviation = local.tzname() or ""
            # tzdata uses numeric placeholders such as "+04" where no abbreviation exists
            if abbreviation[:1] in {"+", "-"} or abbreviation[:1].isdigit():
                return ""
            return abbreviation
        try:
            return get_timezone_name(local, width="long", locale=self.locale)
        except Exception as exc:
            raise TimeAuthorityError(zone_id, "no localized name", exc) from exc


@dataclass(frozen=True)
class ResolvedOffset:
    offset_hours: float
    display_name: str
    abbreviation: str


class OffsetResolver:
    """Turns time authority answers into numeric offsets and display strings."""

    def __init__(self, authority: TimeAuthority) -> None:
        self.authority = authority

    def resolve(self, zone_id: str, instant: datetime) -> ResolvedOffset:
        """Resolve ``zone_id`` at ``instant``.

        Raises ``UnknownZoneError`` when the authority rejects the identifier;
        every other failure degrades to a default.
        """
        offset_text = self.authority.resolve(zone_id, instant, FormatHint.LONG_OFFSET)
        offset_hours = parse_gmt_offset(offset_text)
        if offset_hours is None:
            logger.debug("Unparseable offset %r for %s, using 0", offset_text, zone_id)
            offset_hours = 0.0

        try:
            display_name = self.authority.resolve(zone_id, instant, FormatHint.LONG)
        except TimeAuthorityError as exc:
            logger.warning("No display name for %s: %s", zone_id, exc)
            display_name = ""
        display_name = display_name or utc_label(offset_hours)

        return ResolvedOffset(
            offset_hours=offset_hours,
            display_name=display_name,
            abbreviation=self._abbreviation(zone_id, instant, display_name),
        )

    def _abbreviation(self, zone_id: str, instant: datetime, display_name: str) -> str:
        try:
            short = self.authority.resolve(zone_id, instant, FormatHint.SHORT)
        except TimeAuthorityError:
            short = ""
        if short and len(short) <= 5:
            return short
        if is_utc_identifier(zone_id):
            return "UTC"
        return synthesize_abbreviation(display_name)
