"""Name derivation for zone identifiers and display names."""
from __future__ import annotations

import re
import unicodedata

# Names that need characters or casing the identifier cannot carry.
_CITY_CORRECTIONS: dict[str, str] = {
    "Sao Paulo": "São Paulo",
    "Ho Chi Minh": "Ho Chi Minh City",
    "Port Of Spain": "Port of Spain",
    "Port-Au-Prince": "Port-au-Prince",
    "Dar Es Salaam": "Dar es Salaam",
    "DumontDUrville": "Dumont d'Urville",
    "Bogota": "Bogotá",
    "Asuncion": "Asunción",
    "Cordoba": "Córdoba",
    "Reunion": "Réunion",
    "Curacao": "Curaçao",
    "Merida": "Mérida",
    "Cancun": "Cancún",
    "St Johns": "St. John's",
    "St Barthelemy": "St. Barthélemy",
    "Lower Princes": "Lower Prince's Quarter",
}

_STOP_WORDS = frozenset({"of", "and", "the", "in"})
_SEASON_WORDS = re.compile(r"\b(?:standard|daylight|summer)\s+", re.IGNORECASE)
_UTC_IDS = frozenset({"UTC", "Etc/UTC", "Etc/GMT", "GMT", "Etc/Universal", "Etc/Zulu"})


def extract_city_name(zone_id: str) -> str:
    """``America/New_York`` -> ``New York``."""
    city_part = zone_id.split("/")[-1]
    if not city_part:
        return zone_id
    city_name = city_part.replace("_", " ")
    city_name = re.sub(r"\b\w", lambda match: match.group(0).upper(), city_name)
    return _CITY_CORRECTIONS.get(city_name, city_name)


def path_depth(zone_id: str) -> int:
    return len(zone_id.split("/"))


def is_utc_identifier(zone_id: str) -> bool:
    return zone_id in _UTC_IDS or zone_id.startswith("UTC")


def synthesize_abbreviation(display_name: str) -> str:
    """Initials of up to three significant words, ``GMT`` when there are fewer than two."""
    words = [word for word in display_name.split(" ") if word and word.lower() not in _STOP_WORDS]
    if len(words) >= 2:
        return "".join(word[0] for word in words[:3]).upper()
    return "GMT"


def generic_name(display_name: str) -> str:
    """``Eastern Daylight Time`` -> ``Eastern Time``."""
    return _SEASON_WORDS.sub("", display_name).strip()


def fold(text: str) -> str:
    """Lowercase, strip accents, treat underscores as spaces."""
    decomposed = unicodedata.normalize("NFKD", text.replace("_", " "))
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return stripped.lower().strip()
