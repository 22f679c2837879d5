"""Core data structures shared by the zone engine."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Sequence, Union

from zonegrid.utils.names import synthesize_abbreviation
from zonegrid.utils.time_utils import utc_label


@dataclass(frozen=True)
class Coordinates:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class StandardZone:
    """A zone backed by a time zone database identifier."""

    zone_id: str


@dataclass(frozen=True)
class CustomZone:
    """A user-defined zone pinned to a fixed offset."""

    offset_hours: float
    coordinates: Coordinates | None = None

    @property
    def zone_id(self) -> str:
        minutes = round(self.offset_hours * 60)
        sign = "-" if minutes < 0 else "+"
        hours, minutes = divmod(abs(minutes), 60)
        return f"custom-{sign}{hours:02d}{minutes:02d}"


ZoneRef = Union[StandardZone, CustomZone]


@dataclass(frozen=True)
class TimeZone:
    """One resolvable zone as seen at one instant."""

    ref: ZoneRef
    offset_hours: float
    display_name: str
    city_name: str
    abbreviation: str
    is_off_cycle: bool = False
    coordinates: Coordinates | None = None

    @property
    def id(self) -> str:
        return self.ref.zone_id

    @property
    def is_custom(self) -> bool:
        return isinstance(self.ref, CustomZone)

    @property
    def region(self) -> str:
        if self.is_custom:
            return ""
        return self.id.split("/", 1)[0]

    def pinned(self) -> "TimeZone":
        """Return a copy exempt from automatic re-resolution."""
        return replace(self, is_off_cycle=True)

    @classmethod
    def custom(
        cls,
        offset_hours: float,
        name: str | None = None,
        coordinates: Coordinates | None = None,
    ) -> "TimeZone":
        label = utc_label(offset_hours)
        return cls(
            ref=CustomZone(offset_hours, coordinates),
            offset_hours=offset_hours,
            display_name=name or label,
            city_name=name or label,
            abbreviation=synthesize_abbreviation(name) if name else "GMT",
            coordinates=coordinates,
        )


@dataclass(frozen=True)
class SunTimes:
    sunrise: datetime
    sunset: datetime


@dataclass(frozen=True)
class TimelineHour:
    instant: datetime
    local_time: datetime
    time12: str
    time24: str
    is_daylight: bool = False
    is_date_transition: bool = False
    is_sunrise_hour: bool = False
    is_sunset_hour: bool = False
    annotation: str | None = None

    @property
    def hour(self) -> int:
        return self.local_time.hour

    def label(self, time_format: str = "12h") -> str:
        return self.time24 if time_format == "24h" else self.time12


@dataclass
class TimelineRow:
    zone: TimeZone
    hours: Sequence[TimelineHour]
    is_reference_zone: bool = False


@dataclass
class GroupedZone:
    location: str
    region: str
    current: TimeZone
    alternate: TimeZone | None = None
    variants: Sequence[TimeZone] = field(default_factory=list)
