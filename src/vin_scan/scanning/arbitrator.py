"""
Scan Arbitrator
===============

Reduces a stream of per-frame barcode decode batches to at most one VIN.

The arbitrator latches on the first valid VIN. Every call after that returns
``CONTINUE`` without looking at its input, so a capture pipeline that keeps
delivering frames while it is being torn down can never report a second
result.

Usage:
    arbitrator = ScanArbitrator()
    outcome = arbitrator.on_frame_decoded(["noise123", "1HGCM82633A123456"])
    if outcome.is_success:
        print(outcome.vin)

Not thread-safe: callers must serialize ``on_frame_decoded`` per session
(VINScanSession does this with a lock).
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

from ..core.observation import BarcodeObservation
from ..core.vin_validator import VINConstants, is_valid_vin, sanitize_possible_vin

logger = logging.getLogger(__name__)

Payload = Union[BarcodeObservation, str, None]


# =============================================================================
# OUTCOMES
# =============================================================================

@dataclass(frozen=True)
class ArbitrationOutcome:
    """Base outcome of one frame's arbitration."""

    @property
    def is_success(self) -> bool:
        return False


@dataclass(frozen=True)
class Continue(ArbitrationOutcome):
    """No VIN accepted for this frame; keep scanning."""


@dataclass(frozen=True)
class Success(ArbitrationOutcome):
    """A valid VIN was accepted and the session is latched."""
    vin: str

    @property
    def is_success(self) -> bool:
        return True


CONTINUE = Continue()


# =============================================================================
# ARBITRATOR
# =============================================================================

class ScanArbitrator:
    """
    Single-result latch over decoded barcode candidates.

    Example:
        arbitrator = ScanArbitrator()
        arbitrator.on_frame_decoded(["1HGCM82633A123456,EXTRA"])
        # Success(vin='1HGCM82633A123456')
        arbitrator.on_frame_decoded(["2T1BURHE0JC123456"])
        # Continue()
    """

    def __init__(
        self,
        delimiter: str = VINConstants.DELIMITER,
        min_length: int = VINConstants.MIN_LENGTH,
        strip_char: str = VINConstants.SANITIZE_CHAR,
    ):
        self.delimiter = delimiter
        self.min_length = min_length
        self.strip_char = strip_char
        self._latched = False
        self._vin: Optional[str] = None

    @property
    def latched(self) -> bool:
        """True once a VIN has been accepted. Never reset."""
        return self._latched

    @property
    def vin(self) -> Optional[str]:
        """The accepted VIN, if any."""
        return self._vin

    def on_frame_decoded(
        self,
        observations: Sequence[Payload],
        session_active: bool = True,
    ) -> ArbitrationOutcome:
        """
        Arbitrate one frame's decoded barcodes.

        Args:
            observations: Observations (or raw payload strings) in decoder order
            session_active: Whether the capture session is still running

        Returns:
            Success(vin) for the first valid component, otherwise CONTINUE
        """
        if self._latched:
            return CONTINUE

        if not session_active:
            return CONTINUE

        for observation in observations:
            payload = _payload_of(observation)
            if payload is None:
                # A located but unreadable code discards the rest of the frame
                logger.debug("Observation without payload, skipping frame")
                return CONTINUE

            for component in payload.split(self.delimiter):
                sanitized = sanitize_possible_vin(
                    component, min_length=self.min_length, strip_char=self.strip_char
                )
                if sanitized is None:
                    continue

                if is_valid_vin(sanitized, min_length=self.min_length):
                    self._latched = True
                    self._vin = sanitized
                    logger.info(f"Successfully scanned VIN: {sanitized}")
                    return Success(sanitized)

            logger.debug(f"Scanned code is not a VIN: {payload!r}")

        return CONTINUE

    def reduce(self, batches: Iterable[Sequence[Payload]]) -> Optional[str]:
        """
        Feed batches until one yields a VIN.

        Args:
            batches: Iterable of per-frame observation batches

        Returns:
            The accepted VIN, or None if the stream ran out first
        """
        if self._latched:
            return self._vin

        for batch in batches:
            outcome = self.on_frame_decoded(batch)
            if outcome.is_success:
                return outcome.vin
        return self._vin


def _payload_of(observation: Payload) -> Optional[str]:
    if isinstance(observation, BarcodeObservation):
        return observation.payload
    return observation
