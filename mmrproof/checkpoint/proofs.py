"""
Proof Assembly and Verification

ProofAssembler turns a target leaf and an MMR size into an inclusion
proof, resolving the needed hashes on the indexer. ProofVerifier checks
a proof against a root.
"""
from __future__ import annotations

import logging

from mmrproof.checkpoint.builder import Checkpoint
from mmrproof.crypto.hashing import Digest, encode_digest
from mmrproof.indexer.resolver import PositionResolver
from mmrproof.mmr.mmr_math import (
    gen_proof_positions,
    is_valid_mmr_size,
    leaf_index_to_pos,
)
from mmrproof.mmr.mmr_proofs import MMRProof, gen_proof, verify_proof
from mmrproof.schemas.errors import (
    InvalidProofError,
    InvalidVerificationTargetError,
    MalformedDigestError,
)


logger = logging.getLogger(__name__)


class ProofAssembler:
    """Assembles inclusion proofs from node hashes held by the indexer."""

    def __init__(self, resolver: PositionResolver) -> None:
        self.resolver = resolver

    def assemble(self, target_height: int, mmr_size: int) -> MMRProof:
        """
        Build the inclusion proof for leaf target_height.

        The size and range checks run before any remote lookup.

        Args:
            target_height: Leaf index to prove
            mmr_size: Size of the MMR the proof is against

        Returns:
            MMRProof for the leaf

        Raises:
            InvalidVerificationTargetError: If mmr_size is not a size an
                MMR can have, or the leaf is not inside it
        """
        if target_height < 0:
            raise InvalidVerificationTargetError(
                f"Target height must be non-negative, got {target_height}",
                target_height=target_height,
                mmr_size=mmr_size,
            )

        if not is_valid_mmr_size(mmr_size):
            raise InvalidVerificationTargetError(
                f"No number of leaves produces an MMR of size {mmr_size}",
                target_height=target_height,
                mmr_size=mmr_size,
            )

        target_position = leaf_index_to_pos(target_height)
        if target_position >= mmr_size:
            raise InvalidVerificationTargetError(
                f"Leaf {target_height} (position {target_position}) is not "
                f"included in an MMR of size {mmr_size}",
                target_height=target_height,
                mmr_size=mmr_size,
            )

        path_positions, peak_positions, target_peak_index = gen_proof_positions(
            target_position, mmr_size,
        )
        # separate lookups keep each list's index correspondence intact
        path_digests = self.resolver.resolve_digests(path_positions)
        peak_digests = self.resolver.resolve_digests(peak_positions)

        items = gen_proof(path_digests, peak_digests, target_peak_index)
        logger.info(
            "Proof for leaf %d against mmr_size %d: %d item(s)",
            target_height, mmr_size, len(items),
        )
        return MMRProof(mmr_size=mmr_size, items=tuple(items))

    def assemble_for(self, checkpoint: Checkpoint, target_height: int) -> MMRProof:
        """
        Build the proof for a leaf under an existing checkpoint.

        Raises:
            InvalidVerificationTargetError: If target_height is not below
                the checkpoint's block height
        """
        if target_height >= checkpoint.block_height:
            raise InvalidVerificationTargetError(
                f"Verify height {target_height} must be less than block "
                f"height {checkpoint.block_height}",
                target_height=target_height,
                block_height=checkpoint.block_height,
            )
        return self.assemble(target_height, checkpoint.mmr_size)


class ProofVerifier:
    """Checks inclusion proofs against a root."""

    @staticmethod
    def verify(
        root: bytes,
        mmr_size: int,
        proof: MMRProof,
        leaf_position: int,
        leaf_digest: bytes,
    ) -> bool:
        """
        Verify that (leaf_position, leaf_digest) is under root.

        Returns:
            True if the proof reproduces the root, False otherwise

        Raises:
            InvalidProofError: If the proof is structurally inconsistent
                with mmr_size
        """
        if proof.mmr_size != mmr_size:
            raise InvalidProofError(
                f"Proof was built for mmr_size {proof.mmr_size}, not {mmr_size}",
                mmr_size=mmr_size,
            )

        try:
            items = [Digest(item) for item in proof.items]
            rebuilt = MMRProof(mmr_size=mmr_size, items=tuple(items))
            ok = verify_proof(
                rebuilt.mmr_size,
                rebuilt.items,
                Digest(root),
                [(leaf_position, Digest(leaf_digest))],
            )
        except MalformedDigestError as e:
            raise InvalidProofError(
                f"Proof contains a malformed digest: {e.message}",
                mmr_size=mmr_size,
            ) from e

        if ok:
            logger.info("Proof accepted for position %d", leaf_position)
        else:
            logger.warning(
                "Proof rejected for position %d against root %s",
                leaf_position, encode_digest(root),
            )
        return ok


__all__ = ["ProofAssembler", "ProofVerifier"]
