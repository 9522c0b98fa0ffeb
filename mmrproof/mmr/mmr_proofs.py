"""
MMR Bagging, Proof Assembly and Verification

This module provides:
- MMRProof: mmr_size plus the ordered proof items
- bag_peaks: fold peak hashes into the MMR root
- gen_proof: order path and peak hashes into proof items
- calculate_root / verify_proof: recompute a root from a proof

Proof Item Order (Hard Contract):
1. Hashes of the peaks left of the leaf's peak, left to right
2. The Merkle path from the leaf up to its peak, bottom-up
3. One hash bagging every peak right of the leaf's peak (if any)

Bagging folds right to left: the two rightmost hashes are replaced by
merge(right, left) until one remains.
"""
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Iterator, Sequence

from mmrproof.crypto.hashing import EMPTY_ROOT, Digest, merge
from mmrproof.mmr.mmr_math import (
    get_peaks,
    is_valid_mmr_size,
    parent_offset,
    pos_height_in_tree,
    sibling_offset,
)
from mmrproof.schemas.errors import InvalidProofError


@dataclass(frozen=True)
class MMRProof:
    """
    An inclusion proof against an MMR of a known size.

    Attributes:
        mmr_size: Total node count of the MMR the proof is against
        items: Proof hashes in verification order
    """
    mmr_size: int
    items: tuple[Digest, ...]

    def __post_init__(self) -> None:
        """Validate proof structure."""
        if self.mmr_size < 0:
            raise ValueError(f"mmr_size must be non-negative, got {self.mmr_size}")
        object.__setattr__(self, "items", tuple(self.items))


def bag_peaks(peak_digests: Sequence[bytes]) -> Digest:
    """
    Fold peak hashes into a single root.

    Args:
        peak_digests: Peak hashes, left to right

    Returns:
        The MMR root; EMPTY_ROOT when there are no peaks
    """
    if len(peak_digests) == 0:
        return EMPTY_ROOT

    peaks = [Digest(p) for p in peak_digests]
    while len(peaks) > 1:
        right = peaks.pop()
        left = peaks.pop()
        peaks.append(merge(right, left))
    return peaks[0]


def gen_proof(
    path_digests: Sequence[bytes],
    peak_digests: Sequence[bytes],
    target_peak_index: int,
) -> list[Digest]:
    """
    Arrange path and peak hashes into proof items.

    Args:
        path_digests: Sibling hashes from the leaf to its peak (bottom-up)
        peak_digests: Every other peak hash, left to right
        target_peak_index: Index among peak_digests where the leaf's
            own peak belongs

    Returns:
        Proof items in verification order
    """
    if target_peak_index < 0 or target_peak_index > len(peak_digests):
        raise ValueError(
            f"Peak index {target_peak_index} out of range for "
            f"{len(peak_digests)} peaks"
        )

    items = [Digest(p) for p in peak_digests[:target_peak_index]]
    items.extend(Digest(p) for p in path_digests)

    rhs_peaks = peak_digests[target_peak_index:]
    if rhs_peaks:
        items.append(bag_peaks(rhs_peaks))
    return items


def _next_item(items: Iterator[Digest], mmr_size: int) -> Digest:
    try:
        return next(items)
    except StopIteration:
        raise InvalidProofError(
            "Proof has too few items for the MMR size",
            mmr_size=mmr_size,
        ) from None


def _calculate_peak_root(
    leaves: list[tuple[int, Digest]],
    peak_pos: int,
    items: Iterator[Digest],
    mmr_size: int,
) -> Digest:
    queue = deque((pos, digest, pos_height_in_tree(pos)) for pos, digest in leaves)

    while queue:
        pos, digest, height = queue.popleft()
        if pos == peak_pos:
            if queue:
                break
            return digest

        next_height = pos_height_in_tree(pos + 1)
        if next_height > height:
            # pos is a right child
            sib_pos = pos - sibling_offset(height)
            parent_pos = pos + 1
        else:
            sib_pos = pos + sibling_offset(height)
            parent_pos = pos + parent_offset(height)

        if queue and queue[0][0] == sib_pos:
            sibling = queue.popleft()[1]
        else:
            sibling = _next_item(items, mmr_size)

        if sib_pos < pos:
            parent = merge(sibling, digest)
        else:
            parent = merge(digest, sibling)

        if parent_pos > peak_pos:
            break
        queue.append((parent_pos, parent, height + 1))

    raise InvalidProofError(
        f"Proof path does not end at peak {peak_pos}",
        mmr_size=mmr_size,
        details={"peak_pos": peak_pos},
    )


def calculate_root(
    mmr_size: int,
    proof_items: Sequence[bytes],
    leaves: Sequence[tuple[int, bytes]],
) -> Digest:
    """
    Recompute the MMR root implied by a proof and the proven leaves.

    Args:
        mmr_size: Size of the MMR the proof is against
        proof_items: Proof hashes in verification order
        leaves: (position, digest) pairs being proven

    Returns:
        The recomputed root

    Raises:
        InvalidProofError: If the proof or leaves cannot fit an MMR of
            this size (wrong item count, leaf outside the tree, bad size)
    """
    if not leaves:
        raise InvalidProofError("No leaves to verify", mmr_size=mmr_size)
    if mmr_size <= 0 or not is_valid_mmr_size(mmr_size):
        raise InvalidProofError(f"Invalid MMR size {mmr_size}", mmr_size=mmr_size)

    pending = sorted({pos: Digest(digest) for pos, digest in leaves}.items())
    if pending[0][0] < 0 or pending[-1][0] >= mmr_size:
        raise InvalidProofError(
            "Leaf position outside the MMR",
            mmr_size=mmr_size,
            details={"positions": [pos for pos, _ in pending]},
        )

    items = iter([Digest(item) for item in proof_items])
    peak_hashes: list[Digest] = []

    for peak_pos in get_peaks(mmr_size):
        peak_leaves = [leaf for leaf in pending if leaf[0] <= peak_pos]
        pending = pending[len(peak_leaves):]

        if len(peak_leaves) == 1 and peak_leaves[0][0] == peak_pos:
            peak_hashes.append(peak_leaves[0][1])
        elif peak_leaves:
            peak_hashes.append(
                _calculate_peak_root(peak_leaves, peak_pos, items, mmr_size)
            )
        elif pending:
            # a peak left of a proven leaf
            peak_hashes.append(_next_item(items, mmr_size))
        else:
            # every peak from here on is bagged into one item
            peak_hashes.append(_next_item(items, mmr_size))
            break

    if next(items, None) is not None:
        raise InvalidProofError("Proof has unused items", mmr_size=mmr_size)

    return bag_peaks(peak_hashes)


def verify_proof(
    mmr_size: int,
    proof_items: Sequence[bytes],
    root: bytes,
    leaves: Sequence[tuple[int, bytes]],
) -> bool:
    """
    Check that the leaves are included in the MMR with the given root.

    Returns:
        True if the recomputed root matches, False otherwise

    Raises:
        InvalidProofError: If the proof is structurally inconsistent
    """
    return calculate_root(mmr_size, proof_items, leaves) == Digest(root)


__all__ = [
    "MMRProof",
    "bag_peaks",
    "gen_proof",
    "calculate_root",
    "verify_proof",
]
