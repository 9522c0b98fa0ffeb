"""
Checkpoint & Proof Pipeline

Sequential runner composing checkpoint building, proof assembly and
verification against one indexer:

    build checkpoint -> derive proof positions -> resolve hashes
    -> assemble proof -> resolve target leaf -> verify

Any failure aborts the run; there are no partial results.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from mmrproof.checkpoint.builder import Checkpoint, CheckpointBuilder
from mmrproof.checkpoint.proofs import ProofAssembler, ProofVerifier
from mmrproof.config.runtime import RuntimeConfig
from mmrproof.crypto.hashing import Digest
from mmrproof.http.client import HttpClient
from mmrproof.indexer.resolver import PositionResolver
from mmrproof.mmr.mmr_math import leaf_index_to_pos
from mmrproof.mmr.mmr_proofs import MMRProof
from mmrproof.schemas.errors import InvalidVerificationTargetError
from mmrproof.schemas.report import CheckpointReport, ProofReport, ProofSection


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a full checkpoint + proof run."""
    checkpoint: Checkpoint
    verify_height: int
    leaf_position: int
    leaf_digest: Digest
    proof: MMRProof
    verified: bool

    def to_report(self) -> ProofReport:
        return ProofReport(
            checkpoint=CheckpointReport.from_checkpoint(self.checkpoint),
            proof=ProofSection.from_proof(
                verify_height=self.verify_height,
                leaf_position=self.leaf_position,
                leaf_digest=self.leaf_digest,
                proof=self.proof,
                verified=self.verified,
            ),
        )


class ProofPipeline:
    """
    Builds checkpoints and verifies leaf inclusion under them.

    Usage:
        with HttpClient(timeout=10.0) as client:
            pipeline = ProofPipeline(PositionResolver(client, url))
            result = pipeline.run(height=100, verify_height=42)
            assert result.verified
    """

    def __init__(
        self,
        resolver: PositionResolver,
        *,
        require_nonempty_checkpoint: bool = True,
    ) -> None:
        self.resolver = resolver
        self.require_nonempty_checkpoint = require_nonempty_checkpoint
        self.builder = CheckpointBuilder(resolver)
        self.assembler = ProofAssembler(resolver)
        self.verifier = ProofVerifier()

    @classmethod
    def from_config(cls, config: RuntimeConfig, client: HttpClient) -> "ProofPipeline":
        """Wire a pipeline to the configured indexer through client."""
        resolver = PositionResolver(
            client,
            config.indexer.url,
            timeout=config.indexer.timeout,
        )
        return cls(
            resolver,
            require_nonempty_checkpoint=config.pipeline.require_nonempty_checkpoint,
        )

    def checkpoint(self, height: int) -> Checkpoint:
        """Build the checkpoint at height."""
        return self.builder.build(
            height,
            require_nonempty=self.require_nonempty_checkpoint,
        )

    def run(self, height: int, verify_height: int) -> PipelineResult:
        """
        Build the checkpoint at height and verify leaf verify_height under it.

        Raises:
            InvalidVerificationTargetError: If verify_height is not in
                [0, height); raised before any remote lookup
        """
        if verify_height < 0 or verify_height >= height:
            raise InvalidVerificationTargetError(
                f"Verify height {verify_height} must be in [0, {height})",
                target_height=verify_height,
                block_height=height,
            )

        checkpoint = self.checkpoint(height)
        proof = self.assembler.assemble_for(checkpoint, verify_height)

        leaf_position = leaf_index_to_pos(verify_height)
        leaf = self.resolver.resolve([leaf_position])[0]

        verified = self.verifier.verify(
            checkpoint.root,
            checkpoint.mmr_size,
            proof,
            leaf_position,
            leaf.digest,
        )
        logger.info(
            "Leaf %d under checkpoint %d: %s (%d indexer request(s))",
            verify_height, height, "verified" if verified else "rejected",
            self.resolver.request_count,
        )
        return PipelineResult(
            checkpoint=checkpoint,
            verify_height=verify_height,
            leaf_position=leaf_position,
            leaf_digest=leaf.digest,
            proof=proof,
            verified=verified,
        )


__all__ = ["PipelineResult", "ProofPipeline"]
