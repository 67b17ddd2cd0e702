"""
Barcode Decoder Providers
=========================

Decoder backends that turn frames into barcode observations.
"""

from .barcode_decoders import BarcodeDecoder, OpenCVBarcodeDecoder

__all__ = ["BarcodeDecoder", "OpenCVBarcodeDecoder"]
