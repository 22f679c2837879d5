"""Offset formatting and time arithmetic helpers."""
from __future__ import annotations

import re
from datetime import datetime, timedelta, timezone

_GMT_OFFSET_RE = re.compile(r"GMT([+-])(\d{2}):(\d{2})")


def parse_gmt_offset(text: str | None) -> float | None:
    """Parse ``GMT-05:00`` style text into signed hours, ``None`` if it does not match."""
    if not text:
        return None
    match = _GMT_OFFSET_RE.search(text)
    if not match:
        return None
    sign = 1 if match.group(1) == "+" else -1
    return sign * (int(match.group(2)) + int(match.group(3)) / 60)


def format_gmt_offset(offset_hours: float) -> str:
    """Format signed hours as ``GMT+05:30``."""
    minutes = round(offset_hours * 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    return f"GMT{sign}{hours:02d}:{minutes:02d}"


def format_offset(offset_hours: float) -> str:
    """Format signed hours for display: ``+5:30``, ``-7``, ``+0``."""
    minutes = round(offset_hours * 60)
    sign = "-" if minutes < 0 else "+"
    hours, minutes = divmod(abs(minutes), 60)
    if minutes == 0:
        return f"{sign}{hours}"
    return f"{sign}{hours}:{minutes:02d}"


def utc_label(offset_hours: float) -> str:
    return f"UTC{format_offset(offset_hours)}"


def ensure_utc(dt: datetime) -> datetime:
    """Return ``dt`` as an aware UTC datetime; naive values are taken as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def offset_tzinfo(offset_hours: float) -> timezone:
    return timezone(timedelta(minutes=round(offset_hours * 60)))


def to_offset_time(instant: datetime, offset_hours: float) -> datetime:
    """Wall-clock time at ``offset_hours`` for an absolute instant."""
    return ensure_utc(instant).astimezone(offset_tzinfo(offset_hours))


def truncate_to_hour(instant: datetime, offset_hours: float = 0.0) -> datetime:
    """Truncate to the local hour boundary at ``offset_hours``; result is UTC."""
    local = to_offset_time(instant, offset_hours)
    return local.replace(minute=0, second=0, microsecond=0).astimezone(timezone.utc)


def circular_distance(offset_hours: float, reference_offset: float) -> float:
    """Signed offset difference wrapped into ``[-12, 12]``."""
    distance = offset_hours - reference_offset
    if distance < -12:
        distance += 24
    if distance > 12:
        distance -= 24
    return distance


def format_clock(local_time: datetime, *, hour12: bool, minutes: bool = False) -> str:
    """``2 PM``/``2:30 PM`` or ``14``/``14:30``; minutes shown when non-zero or requested."""
    show_minutes = minutes or bool(local_time.minute)
    if hour12:
        hour = local_time.hour % 12 or 12
        suffix = "AM" if local_time.hour < 12 else "PM"
        if show_minutes:
            return f"{hour}:{local_time.minute:02d} {suffix}"
        return f"{hour} {suffix}"
    if show_minutes:
        return f"{local_time.hour:02d}:{local_time.minute:02d}"
    return f"{local_time.hour:02d}"
