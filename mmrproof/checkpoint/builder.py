"""
Checkpoint Builder

Computes the MMR root and peaks at a block height from node hashes held
by the indexer.

A checkpoint at height h covers leaves 0..h-1. Its leaf_position is the
position the next leaf (h) will take, which is also the MMR size.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass

from mmrproof.crypto.hashing import Digest, PositionedDigest, encode_digest
from mmrproof.indexer.resolver import PositionResolver
from mmrproof.mmr.mmr_math import get_peaks, leaf_index_to_pos
from mmrproof.mmr.mmr_proofs import bag_peaks
from mmrproof.schemas.errors import InvalidHeightError


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Checkpoint:
    """
    Snapshot of the MMR root and peaks at a block height.

    Attributes:
        block_height: Number of leaves covered
        leaf_position: Position of leaf block_height (= MMR size)
        peaks: Peak nodes, left to right
        root: Bagged root of the peaks
    """
    block_height: int
    leaf_position: int
    peaks: tuple[PositionedDigest, ...]
    root: Digest

    @property
    def mmr_size(self) -> int:
        """Node count of the MMR this checkpoint describes."""
        return self.leaf_position

    @property
    def peak_digests(self) -> list[Digest]:
        return [peak.digest for peak in self.peaks]


class CheckpointBuilder:
    """Builds checkpoints by resolving peak hashes on the indexer."""

    def __init__(self, resolver: PositionResolver) -> None:
        self.resolver = resolver

    def build(self, height: int, *, require_nonempty: bool = False) -> Checkpoint:
        """
        Build the checkpoint at a block height.

        Args:
            height: Block height (number of leaves covered)
            require_nonempty: Reject height 0 instead of returning the
                empty-root checkpoint

        Returns:
            Checkpoint with peaks in get_peaks order and their bagged root

        Raises:
            InvalidHeightError: If height is negative, or 0 when
                require_nonempty is set
            MissingNodeError, MalformedDigestError, IndexerTimeoutError,
            TransportError: Propagated from the resolver
        """
        if height < 0:
            raise InvalidHeightError(
                f"Block height must be non-negative, got {height}",
                height=height,
            )
        if height == 0 and require_nonempty:
            raise InvalidHeightError(
                "Block height 0 has an empty MMR; a non-empty tree is required",
                height=height,
            )

        leaf_position = leaf_index_to_pos(height)
        peak_positions = get_peaks(leaf_position)
        peaks = self.resolver.resolve(peak_positions)
        root = bag_peaks([peak.digest for peak in peaks])

        logger.info(
            "Checkpoint at height %d: mmr_size=%d, %d peak(s), root=%s",
            height, leaf_position, len(peaks), encode_digest(root)[:18],
        )
        return Checkpoint(
            block_height=height,
            leaf_position=leaf_position,
            peaks=tuple(peaks),
            root=root,
        )


__all__ = ["Checkpoint", "CheckpointBuilder"]
