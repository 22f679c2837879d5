import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from zonegrid.config.settings import Settings, _load_settings
from zonegrid.utils.logging import setup_logging


def test_environment_overrides_are_applied(monkeypatch, tmp_path):
    monkeypatch.setenv("REFERENCE_TIMEZONE", "Europe/Paris")
    monkeypatch.setenv("TIMELINE_WIDTH", "24")
    monkeypatch.setenv("DEFAULT_ZONE_COUNT", "7")
    monkeypatch.setenv("TIME_FORMAT", "24H")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ZONE_CACHE_PATH", str(tmp_path / "zones.db"))

    settings = _load_settings()

    assert settings.reference_timezone == "Europe/Paris"
    assert settings.timeline_width == 24
    assert settings.default_zone_count == 7
    assert settings.time_format == "24h"
    assert settings.log_level == "DEBUG"
    assert settings.zone_cache_path() == tmp_path / "zones.db"


def test_cache_follows_data_dir_unless_overridden(monkeypatch, tmp_path):
    monkeypatch.delenv("ZONE_CACHE_PATH", raising=False)
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "state"))
    monkeypatch.setenv("REFERENCE_TIMEZONE", "UTC")

    assert _load_settings().zone_cache_path() == tmp_path / "state" / "zone_cache.db"

    monkeypatch.setenv("ZONE_CACHE_PATH", str(tmp_path / "elsewhere.db"))
    assert _load_settings().zone_cache_path() == tmp_path / "elsewhere.db"


def test_defaults():
    settings = Settings(reference_timezone="UTC")
    assert settings.timeline_width == 48
    assert settings.default_zone_count == 5
    assert settings.cache_path is None
    assert settings.zone_cache_path() == Path("data/zone_cache.db")


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeline_width": 7},
        {"timeline_width": 0},
        {"default_zone_count": 2},
        {"time_format": "hex"},
        {"log_level": "chatty"},
        {"reference_timezone": "Mars/Olympus_Mons"},
    ],
)
def test_invalid_values_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)


def test_assignment_is_validated():
    settings = Settings(reference_timezone="UTC")
    with pytest.raises(ValidationError):
        settings.reference_timezone = "Nowhere/Atlantis"


def test_setup_logging_is_idempotent():
    logger = setup_logging("zonegrid.settings_test", level="warning")
    again = setup_logging("zonegrid.settings_test", level="DEBUG")

    assert logger is again
    assert len(logger.handlers) == 1
    assert logger.level == logging.WARNING
    assert logger.propagate is False
