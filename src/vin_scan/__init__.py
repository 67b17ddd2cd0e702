"""
VIN Scan
========

Camera barcode VIN scanning: validates decoded barcode payloads and picks
exactly one VIN per scan session.

Package Structure:
    vin_scan/
    ├── core/           # VIN constants, sanitization, validation
    ├── scanning/       # Arbitration latch and scan session
    ├── preprocessing/  # Normal/inverted frame alternation
    ├── providers/      # Barcode decoder backends
    ├── config.py       # Centralized settings
    └── cli.py          # vin-scan command line

Quick Start:
    # Validation
    from vin_scan import sanitize_possible_vin, is_valid_vin
    code = sanitize_possible_vin("1HGCM82633AI23456")
    print(is_valid_vin(code))

    # Scanning
    from vin_scan import VINScanSession, OpenCVBarcodeDecoder
    session = VINScanSession(delegate, decoder=OpenCVBarcodeDecoder())
    session.start()
    session.process_frame(frame)

Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "VIN Scan Project"

# Core exports (lightweight, always available)
from .core import (
    VINConstants,
    VIN_MIN_LENGTH,
    VIN_VALID_CHARS,
    VIN_INVALID_CHARS,
    sanitize_possible_vin,
    is_valid_vin,
)
from .core.observation import BarcodeObservation
from .exceptions import (
    ScanError,
    BarcodeDecoderError,
    FrameLoadError,
    ConfigurationError,
)

__all__ = [
    "__version__",
    "__author__",
    # Core
    "VINConstants",
    "VIN_MIN_LENGTH",
    "VIN_VALID_CHARS",
    "VIN_INVALID_CHARS",
    "sanitize_possible_vin",
    "is_valid_vin",
    "BarcodeObservation",
    # Errors
    "ScanError",
    "BarcodeDecoderError",
    "FrameLoadError",
    "ConfigurationError",
]

_LAZY_IMPORTS = {
    "ScanArbitrator": ".scanning",
    "Success": ".scanning",
    "Continue": ".scanning",
    "CONTINUE": ".scanning",
    "VINScanSession": ".scanning",
    "VINScanDelegate": ".scanning",
    "SessionState": ".scanning",
    "PermissionStatus": ".scanning",
    "FrameAlternator": ".preprocessing",
    "BarcodeDecoder": ".providers",
    "OpenCVBarcodeDecoder": ".providers",
}


# Lazy imports for modules that pull in OpenCV
def __getattr__(name: str):
    """Lazy import for scanning and decoder modules."""
    if name in _LAZY_IMPORTS:
        import importlib
        module = importlib.import_module(_LAZY_IMPORTS[name], __name__)
        return getattr(module, name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
