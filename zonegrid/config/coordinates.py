"""Curated city coordinates used for daylight calculations."""
from __future__ import annotations

from typing import Mapping

from zonegrid.zones.models import Coordinates

# Zones missing from this table are treated as night all day.
ZONE_COORDINATES: Mapping[str, Coordinates] = {
    # Americas
    "America/New_York": Coordinates(40.7128, -74.006),
    "America/Chicago": Coordinates(41.8781, -87.6298),
    "America/Denver": Coordinates(39.7392, -104.9903),
    "America/Los_Angeles": Coordinates(34.0522, -118.2437),
    "America/Phoenix": Coordinates(33.4484, -112.074),
    "America/Anchorage": Coordinates(61.2181, -149.9003),
    "America/Toronto": Coordinates(43.6532, -79.3832),
    "America/Vancouver": Coordinates(49.2827, -123.1207),
    "America/Halifax": Coordinates(44.6488, -63.5752),
    "America/St_Johns": Coordinates(47.5615, -52.7126),
    "America/Mexico_City": Coordinates(19.4326, -99.1332),
    "America/Bogota": Coordinates(4.711, -74.0721),
    "America/Lima": Coordinates(-12.0464, -77.0428),
    "America/Santiago": Coordinates(-33.4489, -70.6693),
    "America/Sao_Paulo": Coordinates(-23.5505, -46.6333),
    "America/Argentina/Buenos_Aires": Coordinates(-34.6037, -58.3816),
    "America/Noronha": Coordinates(-3.8547, -32.4247),
    "Atlantic/Azores": Coordinates(37.7412, -25.6756),
    # Europe
    "Europe/London": Coordinates(51.5074, -0.1278),
    "Europe/Dublin": Coordinates(53.3498, -6.2603),
    "Europe/Lisbon": Coordinates(38.7223, -9.1393),
    "Europe/Paris": Coordinates(48.8566, 2.3522),
    "Europe/Berlin": Coordinates(52.52, 13.405),
    "Europe/Rome": Coordinates(41.9028, 12.4964),
    "Europe/Madrid": Coordinates(40.4168, -3.7038),
    "Europe/Athens": Coordinates(37.9838, 23.7275),
    "Europe/Helsinki": Coordinates(60.1699, 24.9384),
    "Europe/Istanbul": Coordinates(41.0082, 28.9784),
    "Europe/Moscow": Coordinates(55.7558, 37.6176),
    # Africa
    "Africa/Cairo": Coordinates(30.0444, 31.2357),
    "Africa/Lagos": Coordinates(6.5244, 3.3792),
    "Africa/Nairobi": Coordinates(-1.2921, 36.8219),
    "Africa/Johannesburg": Coordinates(-26.2041, 28.0473),
    # Asia
    "Asia/Dubai": Coordinates(25.2048, 55.2708),
    "Asia/Tehran": Coordinates(35.6892, 51.389),
    "Asia/Karachi": Coordinates(24.8607, 67.0011),
    "Asia/Kolkata": Coordinates(22.5726, 88.3639),
    "Asia/Kathmandu": Coordinates(27.7172, 85.324),
    "Asia/Dhaka": Coordinates(23.8103, 90.4125),
    "Asia/Bangkok": Coordinates(13.7563, 100.5018),
    "Asia/Singapore": Coordinates(1.3521, 103.8198),
    "Asia/Hong_Kong": Coordinates(22.3193, 114.1694),
    "Asia/Shanghai": Coordinates(31.2304, 121.4737),
    "Asia/Seoul": Coordinates(37.5665, 126.978),
    "Asia/Tokyo": Coordinates(35.6762, 139.6503),
    # Australia / Pacific
    "Australia/Perth": Coordinates(-31.9505, 115.8605),
    "Australia/Adelaide": Coordinates(-34.9285, 138.6007),
    "Australia/Sydney": Coordinates(-33.8688, 151.2093),
    "Australia/Melbourne": Coordinates(-37.8136, 144.9631),
    "Pacific/Auckland": Coordinates(-36.8485, 174.7633),
    "Pacific/Chatham": Coordinates(-43.9535, -176.5597),
    "Pacific/Tongatapu": Coordinates(-21.1394, -175.2049),
    "Pacific/Kiritimati": Coordinates(1.8721, -157.4278),
    "Pacific/Honolulu": Coordinates(21.3099, -157.8581),
    "Pacific/Pago_Pago": Coordinates(-14.2756, -170.702),
}


def coordinates_for(zone_id: str) -> Coordinates | None:
    """Return curated coordinates for ``zone_id`` if the table has them."""
    return ZONE_COORDINATES.get(zone_id)
