"""
VIN Scan Session
================

Owns everything one scan needs: the arbitrator latch, the frame counter, the
decoder and a non-owning reference to the delegate that receives results.

Lifecycle:

    IDLE --start()--> SCANNING --VIN found--> SUCCEEDED
      |                  |
      |                  +--stop()--> STOPPED
      +--no decoder--> UNAVAILABLE
      +--permission denied--> PERMISSION_DENIED

Every terminal notification is delivered at most once and the first terminal
outcome wins. A decoder failure is reported once through
``vin_scan_failed`` but does not end the session; the caller decides whether
to stop. Start a new session to scan again.

Usage:
    class Handler(VINScanDelegate):
        def vin_scan_succeeded(self, code):
            print(code)
        ...

    handler = Handler()
    with VINScanSession(handler, decoder=OpenCVBarcodeDecoder()) as session:
        for frame in frames:
            session.process_frame(frame)
            if not session.is_running:
                break
"""

import logging
import threading
import weakref
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Sequence

import numpy as np

from ..config import ScannerConfig, get_config
from ..exceptions import BarcodeDecoderError
from ..preprocessing import FrameAlternator
from ..providers.barcode_decoders import BarcodeDecoder
from .arbitrator import CONTINUE, ArbitrationOutcome, Payload, ScanArbitrator

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    """Scan session lifecycle states."""
    IDLE = 'idle'
    SCANNING = 'scanning'
    SUCCEEDED = 'succeeded'
    PERMISSION_DENIED = 'permission_denied'
    UNAVAILABLE = 'unavailable'
    STOPPED = 'stopped'

    @property
    def is_terminal(self) -> bool:
        return self not in (SessionState.IDLE, SessionState.SCANNING)


class PermissionStatus(str, Enum):
    """Camera authorization status reported by the capture layer."""
    NOT_DETERMINED = 'not_determined'
    AUTHORIZED = 'authorized'
    DENIED = 'denied'
    RESTRICTED = 'restricted'


class VINScanDelegate(ABC):
    """Receives the outcome of a scan session."""

    @abstractmethod
    def vin_scan_permission_denied(self) -> None:
        """Camera access has been denied or restricted."""

    @abstractmethod
    def vin_scan_succeeded(self, code: str) -> None:
        """A VIN was scanned."""

    @abstractmethod
    def vin_scan_failed(self, error: Exception) -> None:
        """The barcode decoder failed."""

    @abstractmethod
    def vin_scan_unavailable(self) -> None:
        """This device cannot scan (no camera or decoder)."""


class VINScanSession:
    """
    One scan, from start to a single terminal outcome.

    The delegate is held weakly; if it has been garbage collected the
    notification is dropped.
    """

    def __init__(
        self,
        delegate: Optional[VINScanDelegate],
        decoder: Optional[BarcodeDecoder] = None,
        config: Optional[ScannerConfig] = None,
        alternator: Optional[FrameAlternator] = None,
    ):
        """
        Args:
            delegate: Receiver of session notifications
            decoder: Barcode decoder; without one the session is unavailable
            config: Scanner configuration (global config if None)
            alternator: Frame inversion policy (built from config if None)
        """
        self.config = config or get_config()
        self.decoder = decoder

        self._delegate_ref = weakref.ref(delegate) if delegate is not None else None
        self._arbitrator = ScanArbitrator(
            delimiter=self.config.validator.delimiter,
            min_length=self.config.validator.min_length,
            strip_char=self.config.validator.strip_char,
        )
        self._alternator = alternator or FrameAlternator(
            enabled=self.config.frames.alternate_inversion
        )

        # Reentrant so a delegate may call stop() from inside a notification
        self._lock = threading.RLock()
        self._state = SessionState.IDLE
        self._failure_reported = False

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def delegate(self) -> Optional[VINScanDelegate]:
        return self._delegate_ref() if self._delegate_ref is not None else None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state == SessionState.SCANNING

    @property
    def vin(self) -> Optional[str]:
        return self._arbitrator.vin

    @property
    def frame_index(self) -> int:
        return self._alternator.frame_index

    @property
    def failure_reported(self) -> bool:
        return self._failure_reported

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def start(self) -> bool:
        """
        Begin scanning.

        Returns:
            True if the session is now scanning
        """
        with self._lock:
            if self._state.is_terminal:
                logger.warning(f"Cannot start a session in state {self._state.value}")
                return False
            if self._state == SessionState.SCANNING:
                return True

            if self.decoder is None or not self.decoder.is_available:
                logger.warning("No barcode decoder available, cannot scan")
                self._finish(SessionState.UNAVAILABLE, 'vin_scan_unavailable')
                return False

            self._state = SessionState.SCANNING
            logger.debug(f"Scan session started with decoder {self.decoder.name}")
            return True

    def stop(self) -> None:
        """Stop scanning. Frames delivered afterwards are ignored."""
        with self._lock:
            if not self._state.is_terminal:
                self._state = SessionState.STOPPED
                logger.debug("Scan session stopped")

    def __enter__(self) -> 'VINScanSession':
        self.start()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    # -------------------------------------------------------------------------
    # Capture layer callbacks
    # -------------------------------------------------------------------------

    def check_permissions(self, status: PermissionStatus) -> bool:
        """
        React to the camera authorization status.

        Denied or restricted access ends the session. An undetermined status
        is left to the caller's prompt, whose answer goes to request_result().

        Returns:
            True if access is authorized
        """
        status = PermissionStatus(status)
        if status in (PermissionStatus.DENIED, PermissionStatus.RESTRICTED):
            self._finish(SessionState.PERMISSION_DENIED, 'vin_scan_permission_denied')
            return False
        return status == PermissionStatus.AUTHORIZED

    def request_result(self, granted: bool) -> None:
        """Handle the answer to a camera access prompt."""
        if not granted:
            self._finish(SessionState.PERMISSION_DENIED, 'vin_scan_permission_denied')

    def mark_unavailable(self) -> None:
        """Report that the capture device cannot be used."""
        self._finish(SessionState.UNAVAILABLE, 'vin_scan_unavailable')

    def process_frame(self, frame: np.ndarray) -> ArbitrationOutcome:
        """
        Decode one captured frame and arbitrate its barcodes.

        Odd frames are inverted first (see FrameAlternator).

        Returns:
            The arbitration outcome for this frame
        """
        if not self.is_running:
            return CONTINUE

        with self._lock:
            index = self._alternator.frame_index
            prepared, inverted = self._alternator.prepare(frame)

        try:
            observations = self.decoder.decode(prepared)
        except BarcodeDecoderError as e:
            e.at_frame(index)
            logger.warning(f"Barcode decoding failed on frame {index}: {e}")
            self._report_failure(e)
            return CONTINUE

        if observations:
            logger.debug(
                f"Frame {index} ({'inverted' if inverted else 'normal'}): "
                f"{len(observations)} observation(s)"
            )
        return self.submit(observations)

    def submit(self, observations: Sequence[Payload]) -> ArbitrationOutcome:
        """
        Arbitrate an already decoded batch.

        Calls are serialized; a VIN is reported to the delegate exactly once.
        """
        with self._lock:
            outcome = self._arbitrator.on_frame_decoded(
                observations, session_active=self.is_running
            )
            if outcome.is_success:
                self._finish(SessionState.SUCCEEDED, 'vin_scan_succeeded', outcome.vin)
            return outcome

    # -------------------------------------------------------------------------
    # Notifications
    # -------------------------------------------------------------------------

    def _finish(self, state: SessionState, notification: str, *args) -> None:
        with self._lock:
            if self._state.is_terminal:
                logger.debug(f"Ignoring {state.value}, session already {self._state.value}")
                return
            self._state = state
            self._notify(notification, *args)

    def _report_failure(self, error: Exception) -> None:
        with self._lock:
            if self._failure_reported or self._state.is_terminal:
                return
            self._failure_reported = True
            self._notify('vin_scan_failed', error)

    def _notify(self, notification: str, *args) -> None:
        delegate = self.delegate
        if delegate is None:
            logger.debug(f"Delegate gone, dropping {notification}")
            return
        getattr(delegate, notification)(*args)
