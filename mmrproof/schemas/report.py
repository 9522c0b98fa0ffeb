"""
Schemas
File: report.py

Purpose: Documented JSON output of the checkpoint and proof commands.
`mmrproof schema` prints the JSON Schema generated from these models.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from mmrproof.crypto.hashing import encode_digest

if TYPE_CHECKING:
    from mmrproof.checkpoint.builder import Checkpoint
    from mmrproof.mmr.mmr_proofs import MMRProof


SCHEMA_VERSION = "1.0"

HEX_DIGEST_PATTERN = r"^0x[0-9a-f]{64}$"


class PeakEntry(BaseModel):
    """One peak of a checkpoint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    position: int = Field(..., ge=0, description="MMR position of the peak")
    hash: str = Field(..., pattern=HEX_DIGEST_PATTERN, description="Peak hash")


class CheckpointReport(BaseModel):
    """MMR root and peaks at a block height."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    block_height: int = Field(..., ge=0, description="Number of leaves covered")
    leaf_position: int = Field(..., ge=0, description="Position of leaf block_height")
    mmr_size: int = Field(..., ge=0, description="Node count of the MMR")
    root: str = Field(..., pattern=HEX_DIGEST_PATTERN, description="Bagged MMR root")
    peaks: list[PeakEntry] = Field(default_factory=list, description="Peaks, left to right")

    @classmethod
    def from_checkpoint(cls, checkpoint: "Checkpoint") -> "CheckpointReport":
        return cls(
            block_height=checkpoint.block_height,
            leaf_position=checkpoint.leaf_position,
            mmr_size=checkpoint.mmr_size,
            root=encode_digest(checkpoint.root),
            peaks=[
                PeakEntry(position=peak.position, hash=encode_digest(peak.digest))
                for peak in checkpoint.peaks
            ],
        )


class ProofSection(BaseModel):
    """Inclusion proof for one leaf and its verification outcome."""

    model_config = ConfigDict(extra="forbid")

    verify_height: int = Field(..., ge=0, description="Leaf index that was proven")
    leaf_position: int = Field(..., ge=0, description="MMR position of the leaf")
    leaf_hash: str = Field(..., pattern=HEX_DIGEST_PATTERN)
    mmr_size: int = Field(..., ge=0)
    items: list[str] = Field(default_factory=list, description="Proof items in verification order")
    verified: bool = Field(..., description="Whether the proof reproduces the checkpoint root")

    @classmethod
    def from_proof(
        cls,
        verify_height: int,
        leaf_position: int,
        leaf_digest: bytes,
        proof: "MMRProof",
        verified: bool,
    ) -> "ProofSection":
        return cls(
            verify_height=verify_height,
            leaf_position=leaf_position,
            leaf_hash=encode_digest(leaf_digest),
            mmr_size=proof.mmr_size,
            items=[encode_digest(item) for item in proof.items],
            verified=verified,
        )


class ProofReport(BaseModel):
    """Checkpoint plus an inclusion proof checked against its root."""

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(default=SCHEMA_VERSION)
    checkpoint: CheckpointReport
    proof: ProofSection


def report_json_schema() -> dict[str, Any]:
    """JSON Schema for the report formats, keyed by model name."""
    return {
        "CheckpointReport": CheckpointReport.model_json_schema(),
        "ProofReport": ProofReport.model_json_schema(),
    }


__all__ = [
    "SCHEMA_VERSION",
    "PeakEntry",
    "CheckpointReport",
    "ProofSection",
    "ProofReport",
    "report_json_schema",
]
