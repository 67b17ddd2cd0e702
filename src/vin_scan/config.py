"""
Scanner Configuration - Centralized Settings
============================================

All configurable parameters in one place.
Supports environment variable overrides.

Usage:
    from vin_scan.config import get_config
    config = get_config()
    print(config.validator.min_length)

Environment Variables:
    VIN_SCAN_MIN_LENGTH=17
    VIN_SCAN_DELIMITER=,
    VIN_SCAN_ALTERNATE_INVERSION=true
    VIN_SCAN_LOG_LEVEL=DEBUG
    VIN_SCAN_LOG_FILE=/tmp/vin_scan.log

Author: VIN Scan Project
"""

import os
import json
import logging
from dataclasses import dataclass, field, asdict
from pathlib import Path
from typing import Optional, Dict, Any, Union

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def _get_env_int(key: str, default: int) -> int:
    """Get int from environment variable."""
    value = os.environ.get(key)
    if value is not None:
        try:
            return int(value)
        except ValueError:
            logger.warning(f"Invalid int for {key}: {value}, using default {default}")
    return default


def _get_env_bool(key: str, default: bool) -> bool:
    """Get bool from environment variable."""
    value = os.environ.get(key)
    if value is not None:
        return value.lower() in ('true', '1', 'yes', 'on')
    return default


def _get_env_str(key: str, default: str) -> str:
    """Get string from environment variable."""
    return os.environ.get(key, default)


@dataclass
class ValidatorConfig:
    """VIN candidate validation settings."""

    # Candidates shorter than this are rejected before sanitization
    min_length: int = field(
        default_factory=lambda: _get_env_int('VIN_SCAN_MIN_LENGTH', 17)
    )

    # Barcodes may carry the VIN alongside other fields
    delimiter: str = field(
        default_factory=lambda: _get_env_str('VIN_SCAN_DELIMITER', ',')
    )

    # Character removed from candidates by sanitization
    strip_char: str = 'I'


@dataclass
class FrameConfig:
    """Frame submission settings."""

    # Invert every odd frame before decoding
    alternate_inversion: bool = field(
        default_factory=lambda: _get_env_bool('VIN_SCAN_ALTERNATE_INVERSION', True)
    )


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = field(
        default_factory=lambda: _get_env_str('VIN_SCAN_LOG_LEVEL', 'INFO')
    )
    format: str = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    date_format: str = '%Y-%m-%d %H:%M:%S'

    # File logging (optional)
    log_file: Optional[str] = field(
        default_factory=lambda: os.environ.get('VIN_SCAN_LOG_FILE')
    )


@dataclass
class ScannerConfig:
    """Complete scanner configuration."""

    validator: ValidatorConfig = field(default_factory=ValidatorConfig)
    frames: FrameConfig = field(default_factory=FrameConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        self.validate()

    def validate(self):
        """Reject settings the scanner cannot work with."""
        if self.validator.min_length < 1:
            raise ConfigurationError(
                f"min_length must be positive, got {self.validator.min_length}",
                config_key='validator.min_length',
                expected='integer >= 1',
            )
        if not self.validator.delimiter:
            raise ConfigurationError(
                "delimiter must not be empty",
                config_key='validator.delimiter',
                expected='non-empty string',
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    def save(self, path: Union[str, Path]):
        """Save configuration to JSON file."""
        with open(path, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)

    @classmethod
    def load(cls, path: Union[str, Path]) -> 'ScannerConfig':
        """Load configuration from JSON file."""
        with open(path) as f:
            data = json.load(f)

        config = cls()

        sections = {
            'validator': config.validator,
            'frames': config.frames,
            'logging': config.logging,
        }
        for name, section in sections.items():
            for key, value in data.get(name, {}).items():
                if hasattr(section, key):
                    setattr(section, key, value)
                else:
                    logger.debug(f"Ignoring unknown config key {name}.{key}")

        config.validate()
        return config


# Global configuration instance (singleton pattern)
_config: Optional[ScannerConfig] = None


def get_config() -> ScannerConfig:
    """
    Get the global configuration instance.

    Creates a new instance on first call, returns cached instance thereafter.
    """
    global _config
    if _config is None:
        _config = ScannerConfig()
        _setup_logging(_config.logging)
    return _config


def reset_config():
    """Reset configuration to defaults (useful for testing)."""
    global _config
    _config = None


def _setup_logging(config: LoggingConfig):
    """Configure logging based on settings."""
    level = getattr(logging, config.level.upper(), logging.INFO)

    handlers = [logging.StreamHandler()]

    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file))

    logging.basicConfig(
        level=level,
        format=config.format,
        datefmt=config.date_format,
        handlers=handlers,
    )
