"""
VIN Scan - Scanning Module
==========================

Arbitration of decoded barcodes and the scan session that drives it.
"""

from .arbitrator import (
    ArbitrationOutcome,
    Continue,
    Success,
    CONTINUE,
    ScanArbitrator,
)
from .session import (
    SessionState,
    PermissionStatus,
    VINScanDelegate,
    VINScanSession,
)

__all__ = [
    "ArbitrationOutcome",
    "Continue",
    "Success",
    "CONTINUE",
    "ScanArbitrator",
    "SessionState",
    "PermissionStatus",
    "VINScanDelegate",
    "VINScanSession",
]
