"""
Frame Preprocessing Module
==========================

Prepares captured frames for barcode decoding.

Classes:
    FrameAlternator: Even/odd frame inversion policy

Usage:
    from vin_scan.preprocessing import FrameAlternator

    alternator = FrameAlternator()
    frame, inverted = alternator.prepare(image)
"""

from .frame_alternator import FrameAlternator, invert_frame

__all__ = [
    'FrameAlternator',
    'invert_frame',
]
