"""
VIN Validator - Single Source of Truth
======================================

Decides whether a decoded barcode string is a usable VIN.

Two steps, always applied in this order by the scanner:

1. ``sanitize_possible_vin`` - rejects anything shorter than 17 characters,
   then strips every uppercase ``I`` (scanners misread other glyphs as ``I``,
   and a VIN never contains one).
2. ``is_valid_vin`` - length gate again, then a full-string character class
   check that excludes uppercase I, O and Q; lowercase letters all pass.

The length gate in step 1 runs *before* stripping, so an 18 character code
with one ``I`` still passes sanitization while a 17 character code with an
``I`` sanitizes to 16 characters and is rejected by step 2.

Author: VIN Scan Project
"""

import re
import logging
from typing import FrozenSet, Optional

logger = logging.getLogger(__name__)


# =============================================================================
# VIN CONSTANTS
# =============================================================================

class VINConstants:
    """Immutable VIN constants per ISO 3779 / NHTSA."""

    MIN_LENGTH: int = 17

    # Valid characters (I, O, Q excluded to avoid confusion with 1, 0)
    VALID_CHARS: FrozenSet[str] = frozenset("0123456789ABCDEFGHJKLMNPRSTUVWXYZ")
    INVALID_CHARS: FrozenSet[str] = frozenset("IOQ")

    # Only the uppercase letter is stripped; lowercase 'i' is left alone
    SANITIZE_CHAR: str = "I"

    # Barcodes may embed the VIN next to other comma separated fields
    DELIMITER: str = ","


VIN_MIN_LENGTH = VINConstants.MIN_LENGTH
VIN_VALID_CHARS = VINConstants.VALID_CHARS
VIN_INVALID_CHARS = VINConstants.INVALID_CHARS

# Full-string match; an empty string matches too, so the length gate is required
_VIN_PATTERN = re.compile(r'[A-HJ-NPR-Z0-9a-z]*')


# =============================================================================
# SANITIZATION
# =============================================================================

def sanitize_possible_vin(
    code: Optional[str],
    min_length: int = VIN_MIN_LENGTH,
    strip_char: str = VINConstants.SANITIZE_CHAR,
) -> Optional[str]:
    """
    Check that a potential VIN is long enough, then strip illegal ``I`` characters.

    Args:
        code: Raw candidate string (may be None)
        min_length: Minimum length required before stripping
        strip_char: Character removed from the candidate

    Returns:
        The candidate without ``strip_char``, or None if it is too short

    Examples:
        >>> sanitize_possible_vin("1HGCM82633AI23456")
        '1HGCM82633A23456'
        >>> sanitize_possible_vin("SHORT") is None
        True
    """
    if code is None or len(code) < min_length:
        return None

    if strip_char in code:
        logger.debug(f"Sanitizing code: {code}")
        return code.replace(strip_char, "")

    return code


# =============================================================================
# VALIDATION
# =============================================================================

def is_valid_vin(code: str, min_length: int = VIN_MIN_LENGTH) -> bool:
    """
    Determine whether the given string is a valid VIN.

    Any length at or above ``min_length`` is accepted. Case is not
    normalized; every lowercase letter is accepted, i, o and q included.

    Args:
        code: Candidate, normally the output of sanitize_possible_vin
        min_length: Minimum accepted length

    Returns:
        True if the code is long enough and made only of VIN characters
    """
    if code is None or len(code) < min_length:
        return False

    return _VIN_PATTERN.fullmatch(code) is not None
