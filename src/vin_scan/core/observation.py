"""Decoded barcode observation shared by decoders and the arbitrator."""

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class BarcodeObservation:
    """
    One barcode detected in one frame.

    Attributes:
        payload: Decoded text, or None when a code was located but not read
        symbology: Barcode type reported by the decoder (e.g. "QR_CODE", "CODE_39")
    """
    payload: Optional[str]
    symbology: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "payload": self.payload,
            "symbology": self.symbology,
        }
