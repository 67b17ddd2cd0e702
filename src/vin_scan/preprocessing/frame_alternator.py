"""
Frame Alternator
================

Alternates normal and color-inverted frames before barcode decoding.

Barcodes printed light-on-dark (or photographed under glare) often defeat a
decoder tuned for dark-on-light codes. Submitting every other frame inverted
lets the same capture stream cover both polarities:

    frame 0 -> as captured
    frame 1 -> inverted
    frame 2 -> as captured
    ...

If inversion fails for any reason the captured frame is submitted instead.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)


class FrameAlternator:
    """
    Frame counter plus even/odd inversion policy.

    Example:
        alternator = FrameAlternator()
        frame, inverted = alternator.prepare(image)   # inverted == False
        frame, inverted = alternator.prepare(image)   # inverted == True
    """

    def __init__(self, enabled: bool = True):
        """
        Args:
            enabled: When False every frame is submitted as captured
        """
        self.enabled = enabled
        self._frame_index = 0

    @property
    def frame_index(self) -> int:
        """Index the next prepared frame will get."""
        return self._frame_index

    @staticmethod
    def should_invert(index: int) -> bool:
        """Odd frame indices are inverted."""
        return index % 2 == 1

    def prepare(self, frame: np.ndarray) -> Tuple[np.ndarray, bool]:
        """
        Pick the variant of ``frame`` to submit to the decoder.

        Args:
            frame: Captured frame (grayscale or BGR)

        Returns:
            Tuple of (frame to decode, whether it was inverted)
        """
        index = self._frame_index
        self._frame_index += 1

        if not self.enabled or not self.should_invert(index):
            return frame, False

        try:
            return invert_frame(frame), True
        except (cv2.error, TypeError, ValueError) as e:
            logger.debug(f"Frame {index} inversion failed, using original: {e}")
            return frame, False

    def reset(self):
        """Restart counting at frame 0."""
        self._frame_index = 0


def invert_frame(frame: np.ndarray) -> np.ndarray:
    """
    Invert the colors of a frame.

    Raises:
        ValueError: If the frame is not a non-empty numpy array
    """
    if frame is None or not isinstance(frame, np.ndarray):
        raise ValueError(f"Expected a numpy array, got {type(frame).__name__}")
    if frame.size == 0:
        raise ValueError("Input frame is empty")

    return cv2.bitwise_not(frame)
