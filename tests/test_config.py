"""
Tests for Scanner Configuration
===============================

Defaults, environment overrides, JSON round-trip and validation.
"""

import json

import pytest

from vin_scan import config as config_module
from vin_scan.config import (
    ScannerConfig,
    ValidatorConfig,
    get_config,
    reset_config,
)
from vin_scan.exceptions import ConfigurationError


@pytest.fixture(autouse=True)
def clean_config():
    """Reset the global config around each test."""
    reset_config()
    yield
    reset_config()


class TestDefaults:
    """Tests for default values."""

    def test_validator_defaults(self):
        config = ValidatorConfig()
        assert config.min_length == 17
        assert config.delimiter == ","
        assert config.strip_char == "I"

    def test_frame_defaults(self):
        assert ScannerConfig().frames.alternate_inversion is True

    def test_logging_defaults(self):
        assert ScannerConfig().logging.level == "INFO"


class TestEnvironmentOverrides:
    """Tests for VIN_SCAN_* environment variables."""

    def test_min_length(self, monkeypatch):
        monkeypatch.setenv("VIN_SCAN_MIN_LENGTH", "20")
        assert ScannerConfig().validator.min_length == 20

    def test_invalid_int_uses_default(self, monkeypatch):
        monkeypatch.setenv("VIN_SCAN_MIN_LENGTH", "seventeen")
        assert ScannerConfig().validator.min_length == 17

    def test_delimiter(self, monkeypatch):
        monkeypatch.setenv("VIN_SCAN_DELIMITER", ";")
        assert ScannerConfig().validator.delimiter == ";"

    @pytest.mark.parametrize("value,expected", [
        ("false", False), ("0", False), ("no", False), ("true", True), ("ON", True),
    ])
    def test_alternate_inversion(self, monkeypatch, value, expected):
        monkeypatch.setenv("VIN_SCAN_ALTERNATE_INVERSION", value)
        assert ScannerConfig().frames.alternate_inversion is expected

    def test_log_level(self, monkeypatch):
        monkeypatch.setenv("VIN_SCAN_LOG_LEVEL", "DEBUG")
        assert ScannerConfig().logging.level == "DEBUG"


class TestValidation:
    """Tests for rejected settings."""

    def test_zero_min_length(self):
        with pytest.raises(ConfigurationError) as exc_info:
            ScannerConfig(validator=ValidatorConfig(min_length=0))
        assert exc_info.value.config_key == "validator.min_length"

    def test_empty_delimiter(self):
        with pytest.raises(ConfigurationError):
            ScannerConfig(validator=ValidatorConfig(delimiter=""))


class TestPersistence:
    """Tests for JSON save/load."""

    def test_save_and_load(self, tmp_path):
        path = tmp_path / "config.json"
        config = ScannerConfig()
        config.validator.delimiter = "|"
        config.frames.alternate_inversion = False
        config.save(path)

        loaded = ScannerConfig.load(path)
        assert loaded.validator.delimiter == "|"
        assert loaded.frames.alternate_inversion is False

    def test_unknown_keys_ignored(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"validator": {"bogus": 1, "min_length": 18}}))
        loaded = ScannerConfig.load(path)
        assert loaded.validator.min_length == 18
        assert not hasattr(loaded.validator, "bogus")

    def test_load_invalid_values(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"validator": {"min_length": -1}}))
        with pytest.raises(ConfigurationError):
            ScannerConfig.load(path)

    def test_to_dict(self):
        data = ScannerConfig().to_dict()
        assert data["validator"]["min_length"] == 17
        assert "frames" in data and "logging" in data


class TestGlobalConfig:
    """Tests for the singleton accessor."""

    def test_singleton(self):
        assert get_config() is get_config()

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first
        assert config_module._config is not None
