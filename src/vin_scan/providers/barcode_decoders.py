"""
Barcode Decoders - Decoder Abstraction Layer
============================================

Provides a unified interface for barcode decoding backends:
- OpenCV (QR codes and 1D barcodes, local)
- Future: ZXing, ZBar, etc.

A decoder turns one frame into a list of BarcodeObservation. Finding nothing
is not an error; only a failure of the decoder itself raises
BarcodeDecoderError.

Usage:
    from vin_scan.providers import OpenCVBarcodeDecoder

    decoder = OpenCVBarcodeDecoder()
    observations = decoder.decode(frame)

Author: VIN Scan Project
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import cv2
import numpy as np

from ..core.observation import BarcodeObservation
from ..exceptions import BarcodeDecoderError

logger = logging.getLogger(__name__)


# =============================================================================
# BASE CLASS
# =============================================================================

class BarcodeDecoder(ABC):
    """
    Abstract base class for barcode decoders.

    Subclasses implement ``decode`` and may override ``initialize`` for
    lazy setup of heavy backends.
    """

    def __init__(self):
        self._initialized = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable decoder name."""

    @property
    def is_available(self) -> bool:
        """Whether the backend can be used on this machine."""
        return True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> None:
        """Set up the backend. Called lazily before the first decode."""
        self._initialized = True

    @abstractmethod
    def decode(self, frame: np.ndarray) -> List[BarcodeObservation]:
        """
        Decode all barcodes visible in a frame.

        Args:
            frame: Image (grayscale or BGR)

        Returns:
            Observations in detection order (possibly empty)

        Raises:
            BarcodeDecoderError: If decoding itself fails
        """


# =============================================================================
# OPENCV
# =============================================================================

class OpenCVBarcodeDecoder(BarcodeDecoder):
    """
    Decoder backed by OpenCV's built-in QR and 1D barcode detectors.

    A region that is detected but not decoded is reported with
    ``payload=None`` so the arbitrator can tell "nothing readable" apart
    from "nothing there".
    """

    QR_SYMBOLOGY = "QR_CODE"
    LINEAR_SYMBOLOGY = "1D"

    def __init__(self, enable_qr: bool = True, enable_1d: bool = True):
        super().__init__()
        self.enable_qr = enable_qr
        self.enable_1d = enable_1d
        self._qr_detector = None
        self._barcode_detector = None

    @property
    def name(self) -> str:
        return "OpenCV"

    @property
    def is_available(self) -> bool:
        return hasattr(cv2, "QRCodeDetector") or _has_barcode_module()

    def initialize(self) -> None:
        if self._initialized:
            return

        try:
            if self.enable_qr and hasattr(cv2, "QRCodeDetector"):
                self._qr_detector = cv2.QRCodeDetector()
            if self.enable_1d and _has_barcode_module():
                self._barcode_detector = cv2.barcode.BarcodeDetector()
        except cv2.error as e:
            raise BarcodeDecoderError(f"Failed to initialize detectors: {e}", self.name) from e

        if self._qr_detector is None and self._barcode_detector is None:
            raise BarcodeDecoderError("No OpenCV barcode detector available", self.name)

        logger.debug(
            f"OpenCV decoder initialized (qr={self._qr_detector is not None}, "
            f"1d={self._barcode_detector is not None})"
        )
        self._initialized = True

    def decode(self, frame: np.ndarray) -> List[BarcodeObservation]:
        if frame is None or frame.size == 0:
            raise BarcodeDecoderError("Input frame is empty or None", self.name)

        if not self._initialized:
            self.initialize()

        observations: List[BarcodeObservation] = []
        symbology = self.QR_SYMBOLOGY
        try:
            if self._qr_detector is not None:
                observations.extend(self._decode_qr(frame))
            symbology = self.LINEAR_SYMBOLOGY
            if self._barcode_detector is not None:
                observations.extend(self._decode_1d(frame))
        except cv2.error as e:
            raise BarcodeDecoderError(
                "Decoding failed", self.name, details=str(e), symbology=symbology
            ) from e

        return observations

    def _decode_qr(self, frame: np.ndarray) -> List[BarcodeObservation]:
        found, decoded_info, _points, _straight = self._qr_detector.detectAndDecodeMulti(frame)
        if not found:
            return []
        return [
            BarcodeObservation(payload=_text_or_none(text), symbology=self.QR_SYMBOLOGY)
            for text in decoded_info
        ]

    def _decode_1d(self, frame: np.ndarray) -> List[BarcodeObservation]:
        found, decoded_info, decoded_types, _points = self._barcode_detector.detectAndDecodeWithType(frame)
        if not found or decoded_info is None:
            return []
        types: Sequence[str] = decoded_types if decoded_types is not None else ()
        return [
            BarcodeObservation(
                payload=_text_or_none(text),
                symbology=types[i] if i < len(types) else "",
            )
            for i, text in enumerate(decoded_info)
        ]


def _has_barcode_module() -> bool:
    return hasattr(cv2, "barcode") and hasattr(cv2.barcode, "BarcodeDetector")


def _text_or_none(text: Optional[str]) -> Optional[str]:
    # OpenCV reports located-but-unreadable codes as empty strings
    return text if text else None
