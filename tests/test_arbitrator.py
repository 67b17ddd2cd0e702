"""
Tests for Scan Arbitrator
=========================

Covers the single-result latch over decoded barcode batches:
- First valid component wins
- Delimiter splitting
- Malformed observations discard the frame
- Inactive sessions are ignored
- Latch monotonicity

Run with: pytest tests/test_arbitrator.py -v
"""

import pytest

from vin_scan.core.observation import BarcodeObservation
from vin_scan.scanning.arbitrator import (
    CONTINUE,
    Continue,
    ScanArbitrator,
    Success,
)


VIN_A = "1HGCM82633A123456"
VIN_B = "2T1BURHE0JC123456"


@pytest.fixture
def arbitrator():
    """Create a default arbitrator."""
    return ScanArbitrator()


# =============================================================================
# OUTCOME TESTS
# =============================================================================

class TestOutcomes:
    """Tests for outcome value types."""

    def test_continue_is_not_success(self):
        assert CONTINUE.is_success is False
        assert CONTINUE == Continue()

    def test_success_carries_vin(self):
        outcome = Success(VIN_A)
        assert outcome.is_success is True
        assert outcome.vin == VIN_A
        assert outcome == Success(VIN_A)


# =============================================================================
# SINGLE FRAME TESTS
# =============================================================================

class TestOnFrameDecoded:
    """Tests for one frame's arbitration."""

    def test_empty_batch_continues(self, arbitrator):
        assert arbitrator.on_frame_decoded([]) == CONTINUE
        assert arbitrator.latched is False

    def test_valid_vin_succeeds(self, arbitrator):
        outcome = arbitrator.on_frame_decoded([VIN_A])
        assert outcome == Success(VIN_A)
        assert arbitrator.latched is True
        assert arbitrator.vin == VIN_A

    def test_noise_then_vin(self, arbitrator):
        """First payload fails validation, second succeeds."""
        outcome = arbitrator.on_frame_decoded(["noise123", VIN_A])
        assert outcome == Success(VIN_A)

    def test_only_noise_continues(self, arbitrator):
        outcome = arbitrator.on_frame_decoded(["noise123", "ANOTHER-NOISE-PAYLOAD"])
        assert outcome == CONTINUE
        assert arbitrator.latched is False

    def test_delimited_payload_suffix_ignored(self, arbitrator):
        outcome = arbitrator.on_frame_decoded([VIN_A + ",EXTRA"])
        assert outcome == Success(VIN_A)

    def test_delimited_payload_vin_in_middle(self, arbitrator):
        payload = "DEALER-STOCK-000042," + VIN_A + ",BLUE"
        assert arbitrator.on_frame_decoded([payload]) == Success(VIN_A)

    def test_first_valid_component_wins(self, arbitrator):
        outcome = arbitrator.on_frame_decoded([VIN_A + "," + VIN_B])
        assert outcome == Success(VIN_A)

    def test_first_valid_payload_wins(self, arbitrator):
        outcome = arbitrator.on_frame_decoded([VIN_B, VIN_A])
        assert outcome == Success(VIN_B)

    def test_sanitized_vin_reported(self, arbitrator):
        outcome = arbitrator.on_frame_decoded(["1HGCM82633AI123456"])
        assert outcome == Success(VIN_A)

    def test_vin_with_excluded_letter_rejected(self, arbitrator):
        assert arbitrator.on_frame_decoded(["1HGCM82633AO23456"]) == CONTINUE

    def test_accepts_observation_objects(self, arbitrator):
        observations = [
            BarcodeObservation(payload="noise", symbology="QR_CODE"),
            BarcodeObservation(payload=VIN_A, symbology="CODE_39"),
        ]
        assert arbitrator.on_frame_decoded(observations) == Success(VIN_A)

    def test_custom_delimiter(self):
        arbitrator = ScanArbitrator(delimiter=";")
        assert arbitrator.on_frame_decoded(["X;" + VIN_A]) == Success(VIN_A)

    def test_default_delimiter_not_semicolon(self, arbitrator):
        assert arbitrator.on_frame_decoded(["X;" + VIN_A]) == CONTINUE


# =============================================================================
# MALFORMED OBSERVATION TESTS
# =============================================================================

class TestMalformedObservations:
    """An observation without payload discards the rest of the frame."""

    def test_missing_payload_aborts_frame(self, arbitrator):
        observations = [BarcodeObservation(payload=None), BarcodeObservation(payload=VIN_A)]
        assert arbitrator.on_frame_decoded(observations) == CONTINUE
        assert arbitrator.latched is False

    def test_none_string_aborts_frame(self, arbitrator):
        assert arbitrator.on_frame_decoded(["noise", None, VIN_A]) == CONTINUE

    def test_vin_before_missing_payload_still_wins(self, arbitrator):
        assert arbitrator.on_frame_decoded([VIN_A, None]) == Success(VIN_A)

    def test_next_frame_processed_normally(self, arbitrator):
        arbitrator.on_frame_decoded([None, VIN_A])
        assert arbitrator.on_frame_decoded([VIN_A]) == Success(VIN_A)


# =============================================================================
# SESSION ACTIVITY AND LATCH TESTS
# =============================================================================

class TestLatch:
    """Tests for latch monotonicity and inactive sessions."""

    def test_inactive_session_ignored(self, arbitrator):
        assert arbitrator.on_frame_decoded([VIN_A], session_active=False) == CONTINUE
        assert arbitrator.latched is False

    def test_after_success_everything_continues(self, arbitrator):
        arbitrator.on_frame_decoded([VIN_A])
        assert arbitrator.on_frame_decoded([VIN_B]) == CONTINUE
        assert arbitrator.on_frame_decoded([VIN_A]) == CONTINUE
        assert arbitrator.on_frame_decoded([None]) == CONTINUE
        assert arbitrator.vin == VIN_A

    def test_latch_never_resets(self, arbitrator):
        arbitrator.on_frame_decoded([VIN_A])
        for _ in range(10):
            arbitrator.on_frame_decoded(["noise"])
        assert arbitrator.latched is True

    def test_independent_arbitrators(self):
        first = ScanArbitrator()
        second = ScanArbitrator()
        first.on_frame_decoded([VIN_A])
        assert second.latched is False
        assert second.on_frame_decoded([VIN_B]) == Success(VIN_B)


# =============================================================================
# REDUCE TESTS
# =============================================================================

class TestReduce:
    """Tests for stream reduction."""

    def test_first_vin_from_stream(self, arbitrator):
        batches = [[], ["noise"], [None, VIN_B], [VIN_A], [VIN_B]]
        assert arbitrator.reduce(batches) == VIN_A

    def test_stops_consuming_after_success(self, arbitrator):
        consumed = []

        def stream():
            for batch in ([VIN_A], [VIN_B], ["noise"]):
                consumed.append(batch)
                yield batch

        assert arbitrator.reduce(stream()) == VIN_A
        assert consumed == [[VIN_A]]

    def test_latched_before_reduce_consumes_nothing(self, arbitrator):
        """A latched arbitrator returns its VIN without pulling from the stream."""
        arbitrator.on_frame_decoded([VIN_A])
        consumed = []

        def stream():
            for batch in ([VIN_B], ["noise"]):
                consumed.append(batch)
                yield batch

        assert arbitrator.reduce(stream()) == VIN_A
        assert consumed == []

    def test_no_vin_in_stream(self, arbitrator):
        assert arbitrator.reduce([["noise"], []]) is None
