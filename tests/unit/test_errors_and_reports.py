"""
Error Taxonomy and Report Schema Tests
Tests for mmrproof/schemas/errors.py and mmrproof/schemas/report.py
"""
import pytest
from pydantic import ValidationError

from mmrproof.checkpoint.builder import Checkpoint
from mmrproof.crypto.hashing import EMPTY_ROOT, PositionedDigest, blake2b_256, encode_digest
from mmrproof.schemas.errors import (
    ErrorCodes,
    IndexerTimeoutError,
    InvalidHeightError,
    InvalidProofError,
    InvalidVerificationTargetError,
    MalformedDigestError,
    MissingNodeError,
    MMRProofError,
    MMRProofException,
    TransportError,
)
from mmrproof.schemas.report import (
    CheckpointReport,
    PeakEntry,
    report_json_schema,
)


class TestErrorTaxonomy:
    """Codes and retryability of each error."""

    @pytest.mark.parametrize("error, code, retryable", [
        (MalformedDigestError("bad"), ErrorCodes.MALFORMED_DIGEST, False),
        (MissingNodeError(3), ErrorCodes.MISSING_NODE, True),
        (InvalidHeightError("bad", height=-1), ErrorCodes.INVALID_HEIGHT, False),
        (InvalidVerificationTargetError("bad"), ErrorCodes.INVALID_VERIFICATION_TARGET, False),
        (IndexerTimeoutError("slow", timeout=1.0), ErrorCodes.INDEXER_TIMEOUT, True),
        (TransportError("down", status_code=500), ErrorCodes.TRANSPORT_FAILURE, True),
        (InvalidProofError("bad", mmr_size=7), ErrorCodes.INVALID_PROOF, False),
    ])
    def test_code_and_retryable(self, error, code, retryable):
        assert isinstance(error, MMRProofException)
        assert error.code == code
        assert error.retryable is retryable

    def test_missing_node_message(self):
        err = MissingNodeError(42)
        assert str(err) == "Indexer returned no node for position 42"
        assert err.details == {"position": 42}

    def test_long_value_truncated(self):
        err = MalformedDigestError("bad", value="0x" + "a" * 200)
        assert len(err.details["value"]) == 80

    def test_error_model(self):
        err = TransportError("down", status_code=502)

        model = err.to_error_model()
        assert isinstance(model, MMRProofError)
        assert model.code == ErrorCodes.TRANSPORT_FAILURE
        assert model.message == "down"
        assert model.details == {"status_code": 502}


class TestReports:
    """Tests for report models."""

    def test_checkpoint_report(self):
        peak = blake2b_256(b"peak")
        checkpoint = Checkpoint(
            block_height=1,
            leaf_position=1,
            peaks=(PositionedDigest(0, peak),),
            root=peak,
        )

        report = CheckpointReport.from_checkpoint(checkpoint)

        assert report.mmr_size == 1
        assert report.root == encode_digest(peak)
        assert report.peaks == [PeakEntry(position=0, hash=encode_digest(peak))]

    def test_empty_checkpoint_report(self):
        checkpoint = Checkpoint(block_height=0, leaf_position=0, peaks=(), root=EMPTY_ROOT)
        report = CheckpointReport.from_checkpoint(checkpoint)

        assert report.peaks == []
        assert report.root == encode_digest(EMPTY_ROOT)

    def test_hash_pattern_enforced(self):
        with pytest.raises(ValidationError):
            PeakEntry(position=0, hash="0x" + "ab" * 31)

    def test_json_schema_covers_both_reports(self):
        schema = report_json_schema()

        assert set(schema) == {"CheckpointReport", "ProofReport"}
        assert "root" in schema["CheckpointReport"]["properties"]
        assert "proof" in schema["ProofReport"]["properties"]
