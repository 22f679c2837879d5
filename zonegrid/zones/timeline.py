"""Per-zone hourly timelines relative to a reference zone."""
from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Dict, List, Sequence, Tuple

from zonegrid.zones.daylight import DaylightOracle, within
from zonegrid.zones.models import SunTimes, TimelineHour, TimelineRow, TimeZone
from zonegrid.utils.time_utils import format_clock, to_offset_time, truncate_to_hour

DEFAULT_WIDTH = 48


class TimelineBuilder:
    def __init__(self, oracle: DaylightOracle | None = None) -> None:
        self.oracle = oracle or DaylightOracle()

    def build(self, width: int, zone: TimeZone, reference_zone: TimeZone, instant: datetime) -> List[TimelineHour]:
        """Hourly columns for ``zone``; index ``width // 2`` is the reference's current hour.

        Columns run from ``width // 2`` hours before the reference zone's
        truncated hour. Sunrise and sunset hours are the first daylight and
        first dark column of a day, found by comparing with the column before.
        """
        anchor = truncate_to_hour(instant, reference_zone.offset_hours)
        start = -(width // 2)
        sun_by_day: Dict[date, SunTimes | None] = {}

        def daylight_at(at: datetime) -> Tuple[bool, SunTimes | None]:
            if zone.coordinates is None:
                return False, None
            day = to_offset_time(at, zone.offset_hours).date()
            if day not in sun_by_day:
                sun_by_day[day] = self.oracle.sun_times(zone.coordinates, day, zone.offset_hours)
            times = sun_by_day[day]
            return within(times, at), times

        previous_daylight, previous_times = daylight_at(anchor + timedelta(hours=start - 1))
        hours: List[TimelineHour] = []
        for index in range(start, start + width):
            at = anchor + timedelta(hours=index)
            local_time = to_offset_time(at, zone.offset_hours)
            is_daylight, times = daylight_at(at)
            is_sunrise = is_daylight and not previous_daylight
            is_sunset = previous_daylight and not is_daylight

            annotation = None
            if is_sunrise and times is not None:
                annotation = f"Sunrise {self._event_label(times.sunrise, zone)}"
            elif is_sunset and previous_times is not None:
                annotation = f"Sunset {self._event_label(previous_times.sunset, zone)}"

            hours.append(
                TimelineHour(
                    instant=at,
                    local_time=local_time,
                    time12=format_clock(local_time, hour12=True),
                    time24=format_clock(local_time, hour12=False),
                    is_daylight=is_daylight,
                    is_date_transition=local_time.hour == 0,
                    is_sunrise_hour=is_sunrise,
                    is_sunset_hour=is_sunset,
                    annotation=annotation,
                )
            )
            previous_daylight, previous_times = is_daylight, times
        return hours

    def build_rows(
        self,
        width: int,
        zones: Sequence[TimeZone],
        reference_zone: TimeZone,
        instant: datetime,
    ) -> List[TimelineRow]:
        return [
            TimelineRow(
                zone=zone,
                hours=self.build(width, zone, reference_zone, instant),
                is_reference_zone=zone.id == reference_zone.id,
            )
            for zone in zones
        ]

    @staticmethod
    def _event_label(event: datetime, zone: TimeZone) -> str:
        return format_clock(to_offset_time(event, zone.offset_hours), hour12=True, minutes=True)
