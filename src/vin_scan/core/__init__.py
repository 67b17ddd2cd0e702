"""
VIN Scan Core Module
====================

VIN constants, sanitization and validation.
Single Source of Truth for all VIN-related rules.
"""

from .vin_validator import (
    # Constants
    VINConstants,
    VIN_MIN_LENGTH,
    VIN_VALID_CHARS,
    VIN_INVALID_CHARS,
    # Sanitization
    sanitize_possible_vin,
    # Validation
    is_valid_vin,
)

__all__ = [
    # Constants
    "VINConstants",
    "VIN_MIN_LENGTH",
    "VIN_VALID_CHARS",
    "VIN_INVALID_CHARS",
    # Sanitization
    "sanitize_possible_vin",
    # Validation
    "is_valid_vin",
]
