"""
Scanner Exceptions
==================

Structured errors with error codes for programmatic handling.
"""

from typing import Any, Dict, Optional


class ScanError(Exception):
    """
    Base exception for scanner errors.

    Provides structured error information with error codes for programmatic handling.
    """

    def __init__(self, message: str, error_code: str = "SCAN_ERROR", context: Optional[Dict[str, Any]] = None):
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON serialization."""
        return {
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
        }


class BarcodeDecoderError(ScanError):
    """
    Raised when the barcode decoder itself fails (not when it finds nothing).

    ``symbology`` names the detector that was running (e.g. "QR_CODE" or
    "1D"). ``frame_index`` is unknown to the decoder and is filled in by the
    session through ``at_frame``.
    """

    def __init__(
        self,
        message: str,
        decoder: str = "OpenCV",
        details: Optional[str] = None,
        symbology: Optional[str] = None,
        frame_index: Optional[int] = None,
    ):
        super().__init__(
            message=f"Barcode decoder error ({decoder}): {message}",
            error_code="DECODER_ERROR",
            context={
                "decoder": decoder,
                "symbology": symbology,
                "frame_index": frame_index,
                "details": details,
            }
        )
        self.decoder = decoder
        self.details = details
        self.symbology = symbology
        self.frame_index = frame_index

    def at_frame(self, index: int) -> "BarcodeDecoderError":
        """Record the frame the failure happened on, unless already set."""
        if self.frame_index is None:
            self.frame_index = index
            self.context["frame_index"] = index
        return self


class FrameLoadError(ScanError):
    """Raised when a frame image cannot be loaded."""

    def __init__(self, file_path: str, reason: str = "Unknown error"):
        super().__init__(
            message=f"Failed to load frame: {file_path}. Reason: {reason}",
            error_code="FRAME_LOAD_ERROR",
            context={"file_path": file_path, "reason": reason}
        )
        self.file_path = file_path
        self.reason = reason


class ConfigurationError(ScanError):
    """Raised when the scanner is misconfigured."""

    def __init__(self, message: str, config_key: Optional[str] = None, expected: Optional[str] = None):
        super().__init__(
            message=f"Configuration error: {message}",
            error_code="CONFIG_ERROR",
            context={"config_key": config_key, "expected": expected}
        )
        self.config_key = config_key
        self.expected = expected
