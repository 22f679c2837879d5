"""Application configuration and environment management."""
from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator


load_dotenv()


def _detect_timezone() -> str:
    tz_env = (
        os.environ.get("TZ")
        or os.environ.get("LOCAL_TIMEZONE")
        or os.environ.get("APP_TIMEZONE")
    )
    if tz_env:
        return tz_env

    try:
        import tzlocal

        local_tz = tzlocal.get_localzone()
        return str(local_tz)
    except Exception:
        return "UTC"


class Settings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    data_dir: Path = Field(default=Path("data"), description="Directory for persistent data")
    cache_path: Optional[Path] = Field(
        default=None,
        description="SQLite file holding the yearly zone catalog cache; defaults to data_dir/zone_cache.db",
    )

    reference_timezone: str = Field(
        default_factory=_detect_timezone,
        description="Olson timezone identifier every timeline is centered on",
    )
    locale: str = Field(default="en", description="Locale used for zone display names")

    timeline_width: int = Field(default=48, description="Number of hourly columns per timeline")
    default_zone_count: int = Field(default=5, description="Rows shown when no count is requested")
    time_format: str = Field(default="12h", description="Hour label format (12h or 24h)")
    log_level: str = Field(default="INFO", description="Root log level for the zonegrid logger")

    @field_validator("reference_timezone")
    @classmethod
    def _validate_timezone(cls, value: str) -> str:
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone '{value}'") from exc
        return value

    @field_validator("timeline_width")
    @classmethod
    def _validate_width(cls, value: int) -> int:
        if value < 2 or value % 2:
            raise ValueError("Timeline width must be an even number of at least 2")
        return value

    @field_validator("default_zone_count")
    @classmethod
    def _validate_count(cls, value: int) -> int:
        if value < 3:
            raise ValueError("At least three zones are shown")
        return value

    @field_validator("time_format")
    @classmethod
    def _validate_time_format(cls, value: str) -> str:
        value_lower = value.lower()
        if value_lower not in {"12h", "24h"}:
            raise ValueError("Time format must be 12h or 24h")
        return value_lower

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        value_upper = value.upper()
        if value_upper not in allowed:
            raise ValueError(f"Unknown log level '{value}'")
        return value_upper

    def zone_cache_path(self) -> Path:
        if self.cache_path is not None:
            return self.cache_path
        return self.data_dir / "zone_cache.db"


_ENV_MAPPING = {
    "DATA_DIR": "data_dir",
    "ZONE_CACHE_PATH": "cache_path",
    "REFERENCE_TIMEZONE": "reference_timezone",
    "LOCALE": "locale",
    "TIMELINE_WIDTH": "timeline_width",
    "DEFAULT_ZONE_COUNT": "default_zone_count",
    "TIME_FORMAT": "time_format",
    "LOG_LEVEL": "log_level",
}


def _load_settings() -> Settings:
    data: dict[str, object] = {}
    for env_name, field_name in _ENV_MAPPING.items():
        if env_name not in os.environ:
            continue
        data[field_name] = os.environ[env_name]
    return Settings(**data)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    settings = _load_settings()
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    return settings
