"""Sunrise/sunset lookup and daylight classification."""
from __future__ import annotations

import logging
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Callable, Iterable, List

from astral import Observer
from astral.sun import sunrise, sunset

from zonegrid.zones.models import Coordinates, SunTimes
from zonegrid.utils.time_utils import ensure_utc, offset_tzinfo, to_offset_time

logger = logging.getLogger("zonegrid.daylight")


class DaylightOracle:
    """Answers daylight questions for a coordinate pair.

    Missing coordinates mean night and no sun times. When the solar
    calculation fails (polar day or night, bad input) a latitude-based
    approximation is used instead.
    """

    def sun_times(self, coordinates: Coordinates | None, day: date, offset_hours: float = 0.0) -> SunTimes | None:
        """Sunrise and sunset (UTC) for the local calendar ``day`` at ``offset_hours``."""
        if coordinates is None:
            return None
        local_tz = offset_tzinfo(offset_hours)
        observer = Observer(latitude=coordinates.latitude, longitude=coordinates.longitude)
        try:
            rise = _sunrise_on_local_day(observer, day, local_tz)
            fall = _first_sunset_after(observer, rise)
        except Exception as exc:
            logger.warning(
                "Solar calculation failed at (%s, %s) on %s, using approximation: %s",
                coordinates.latitude,
                coordinates.longitude,
                day,
                exc,
            )
            return approximate_sun_times(coordinates, day, offset_hours)
        return SunTimes(sunrise=rise, sunset=fall)

    def is_daylight(self, coordinates: Coordinates | None, instant: datetime, offset_hours: float = 0.0) -> bool:
        if coordinates is None:
            return False
        local_day = to_offset_time(instant, offset_hours).date()
        return within(self.sun_times(coordinates, local_day, offset_hours), instant)


def within(sun_times: SunTimes | None, instant: datetime) -> bool:
    if sun_times is None:
        return False
    return sun_times.sunrise <= ensure_utc(instant) <= sun_times.sunset


def approximate_sun_times(coordinates: Coordinates, day: date, offset_hours: float = 0.0) -> SunTimes:
    """Rough sunrise/sunset widening with latitude; not astronomically accurate."""
    adjustment = abs(coordinates.latitude) * 0.05
    rise_hour = max(4.0, min(8.0, 6.0 - adjustment))
    set_hour = max(16.0, min(20.0, 18.0 + adjustment))
    midnight = datetime.combine(day, time(0), tzinfo=offset_tzinfo(offset_hours))
    return SunTimes(
        sunrise=(midnight + timedelta(hours=rise_hour)).astimezone(timezone.utc),
        sunset=(midnight + timedelta(hours=set_hour)).astimezone(timezone.utc),
    )


def _events_around(event: Callable[..., datetime], observer: Observer, days: Iterable[date]) -> List[datetime]:
    # Asked per UTC calendar date; dates without the event (polar day or night) are skipped.
    found: List[datetime] = []
    for candidate in days:
        try:
            found.append(event(observer, candidate, tzinfo=timezone.utc))
        except ValueError:
            continue
    return sorted(found)


def _sunrise_on_local_day(observer: Observer, day: date, local_tz: tzinfo) -> datetime:
    one_day = timedelta(days=1)
    for rise in _events_around(sunrise, observer, (day - one_day, day, day + one_day)):
        if rise.astimezone(local_tz).date() == day:
            return rise
    raise ValueError(f"No sunrise on local day {day}")


def _first_sunset_after(observer: Observer, rise: datetime) -> datetime:
    start = rise.date()
    days = [start + timedelta(days=shift) for shift in range(-1, 3)]
    for fall in _events_around(sunset, observer, days):
        if fall > rise:
            return fall
    raise ValueError(f"No sunset after {rise.isoformat()}")
