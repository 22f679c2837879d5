"""Pydantic models for the persisted yearly catalog cache."""
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from zonegrid.zones.models import Coordinates, StandardZone, TimeZone


class CachedZone(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    offset_hours: float = Field(..., ge=-12, le=14)
    display_name: str
    city_name: str
    abbreviation: str = Field(..., max_length=5)
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    @classmethod
    def from_zone(cls, zone: TimeZone) -> "CachedZone":
        coordinates = zone.coordinates
        return cls(
            id=zone.id,
            offset_hours=zone.offset_hours,
            display_name=zone.display_name,
            city_name=zone.city_name,
            abbreviation=zone.abbreviation,
            latitude=coordinates.latitude if coordinates else None,
            longitude=coordinates.longitude if coordinates else None,
        )

    def to_zone(self) -> TimeZone:
        coordinates = None
        if self.latitude is not None and self.longitude is not None:
            coordinates = Coordinates(self.latitude, self.longitude)
        return TimeZone(
            ref=StandardZone(self.id),
            offset_hours=self.offset_hours,
            display_name=self.display_name,
            city_name=self.city_name,
            abbreviation=self.abbreviation,
            coordinates=coordinates,
        )


class YearlyCacheEntry(BaseModel):
    model_config = ConfigDict(extra="forbid")

    summer_zones: List[CachedZone]
    winter_zones: List[CachedZone]
    reference_zone_id: str
    year: int = Field(..., ge=1, le=9999)

    @model_validator(mode="after")
    def _check_shape(self) -> "YearlyCacheEntry":
        if not self.summer_zones or not self.winter_zones:
            raise ValueError("Both anchor sets must be populated")
        if [zone.id for zone in self.summer_zones] != [zone.id for zone in self.winter_zones]:
            raise ValueError("Anchor sets must list the same identifiers")
        return self
