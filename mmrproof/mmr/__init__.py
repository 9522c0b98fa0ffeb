"""
Merkle Mountain Range math.

Position arithmetic, peak bagging, proof assembly and verification
for an append-only MMR numbered in postorder.

Usage:
    from mmrproof.mmr import leaf_index_to_pos, get_peaks, bag_peaks

    size = leaf_index_to_pos(4)          # MMR holding leaves 0..3
    peak_positions = get_peaks(size)     # [6]
    root = bag_peaks(peak_hashes)
"""
from .mmr_math import (
    leaf_index_to_mmr_size,
    leaf_index_to_pos,
    pos_height_in_tree,
    sibling_offset,
    parent_offset,
    get_peaks,
    is_valid_mmr_size,
    gen_proof_positions,
)

from .mmr_proofs import (
    MMRProof,
    bag_peaks,
    gen_proof,
    calculate_root,
    verify_proof,
)


__all__ = [
    # Position arithmetic
    "leaf_index_to_mmr_size",
    "leaf_index_to_pos",
    "pos_height_in_tree",
    "sibling_offset",
    "parent_offset",
    "get_peaks",
    "is_valid_mmr_size",
    "gen_proof_positions",
    # Hashing over positions
    "MMRProof",
    "bag_peaks",
    "gen_proof",
    "calculate_root",
    "verify_proof",
]
