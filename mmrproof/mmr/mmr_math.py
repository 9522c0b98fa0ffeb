"""
MMR Position Arithmetic

Maps leaf indices to node positions and derives the node positions
needed for peaks and inclusion proofs.

Numbering Rules (Hard Contracts):
1. Nodes are numbered in a single postorder sequence starting at 0.
   Leaves and internal nodes share the numbering space.
2. A tree holding n leaves has 2n - popcount(n) nodes, so the position
   of leaf n equals the size of the tree holding leaves 0..n-1.
3. Peaks are listed left to right, from the tallest mountain down.

Example after 4 leaves (size 7)::

          6
        /   \\
       2     5
      / \\   / \\
     0   1 3   4

Determinism Notes:
- Pure integer arithmetic; no hashing happens in this module
"""
from __future__ import annotations


def _check_non_negative(name: str, value: int) -> None:
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


def leaf_index_to_mmr_size(leaf_index: int) -> int:
    """
    Size of the MMR once the leaf at leaf_index has been appended.

    Args:
        leaf_index: 0-based leaf index

    Returns:
        Total node count covering leaves 0..leaf_index
    """
    _check_non_negative("leaf_index", leaf_index)
    leaves_count = leaf_index + 1
    peak_count = bin(leaves_count).count("1")
    return 2 * leaves_count - peak_count


def leaf_index_to_pos(leaf_index: int) -> int:
    """
    Postorder position of the leaf at leaf_index.

    Also the MMR size covering leaves 0..leaf_index-1.

    Example:
        >>> [leaf_index_to_pos(i) for i in range(5)]
        [0, 1, 3, 4, 7]
    """
    _check_non_negative("leaf_index", leaf_index)
    trailing_zeros = ((leaf_index + 1) & -(leaf_index + 1)).bit_length() - 1
    return leaf_index_to_mmr_size(leaf_index) - trailing_zeros - 1


def pos_height_in_tree(pos: int) -> int:
    """
    Height of the node at pos (0 for leaves).

    Jumps left across perfect subtrees until pos + 1 is all ones in
    binary; the bit length of that value minus one is the height.
    """
    _check_non_negative("pos", pos)
    pos += 1
    while pos & (pos + 1) != 0:
        most_significant = 1 << (pos.bit_length() - 1)
        pos -= most_significant - 1
    return pos.bit_length() - 1


def sibling_offset(height: int) -> int:
    """Distance between a node and its sibling at the given height."""
    return (2 << height) - 1


def parent_offset(height: int) -> int:
    """Distance from a left child at the given height to its parent."""
    return 2 << height


def _peak_pos_by_height(height: int) -> int:
    return (1 << (height + 1)) - 2


def _left_peak_height_pos(mmr_size: int) -> tuple[int, int]:
    height = 1
    prev_pos = 0
    pos = _peak_pos_by_height(height)
    while pos < mmr_size:
        height += 1
        prev_pos = pos
        pos = _peak_pos_by_height(height)
    return height - 1, prev_pos


def _right_peak(height: int, pos: int, mmr_size: int) -> tuple[int, int] | None:
    # step to the right sibling, then descend left until inside the tree
    pos += sibling_offset(height)
    while pos > mmr_size - 1:
        if height == 0:
            return None
        pos -= parent_offset(height - 1)
        height -= 1
    return height, pos


def get_peaks(mmr_size: int) -> list[int]:
    """
    Positions of the peaks of an MMR of the given size, left to right.

    Args:
        mmr_size: Total node count (0 for an empty MMR)

    Returns:
        Peak positions ordered by decreasing mountain size; [] when empty

    Example:
        >>> get_peaks(7)
        [6]
        >>> get_peaks(8)
        [6, 7]
    """
    _check_non_negative("mmr_size", mmr_size)
    if mmr_size == 0:
        return []

    height, pos = _left_peak_height_pos(mmr_size)
    positions = [pos]
    while height > 0:
        peak = _right_peak(height, pos, mmr_size)
        if peak is None:
            break
        height, pos = peak
        positions.append(pos)
    return positions


def is_valid_mmr_size(mmr_size: int) -> bool:
    """Check that mmr_size is reachable by appending whole leaves."""
    if mmr_size < 0:
        return False
    if mmr_size == 0:
        return True
    peaks = get_peaks(mmr_size)
    if peaks[-1] != mmr_size - 1:
        return False
    # mountains must shrink strictly from left to right
    heights = [pos_height_in_tree(p) for p in peaks]
    return all(left > right for left, right in zip(heights, heights[1:]))


def _path_to_peak(pos: int, peak_pos: int) -> list[int]:
    path: list[int] = []
    height = pos_height_in_tree(pos)
    while pos < peak_pos:
        next_height = pos_height_in_tree(pos + 1)
        if next_height > height:
            # pos is a right child
            path.append(pos - sibling_offset(height))
            pos += 1
        else:
            path.append(pos + sibling_offset(height))
            pos += parent_offset(height)
        height += 1
    return path


def gen_proof_positions(
    target_position: int,
    mmr_size: int,
) -> tuple[list[int], list[int], int]:
    """
    Node positions whose hashes make up an inclusion proof.

    Args:
        target_position: Position of the leaf being proven
        mmr_size: Size of the MMR the proof is against

    Returns:
        (path_positions, peak_positions, target_peak_index) where
        path_positions are the siblings from the leaf up to its peak
        (bottom-up), peak_positions are every other peak left to right,
        and target_peak_index is where the leaf's own peak sits among them.

    Raises:
        ValueError: If target_position is not inside the MMR

    Example:
        >>> gen_proof_positions(1, 7)
        ([0, 5], [], 0)
    """
    _check_non_negative("target_position", target_position)
    if target_position >= mmr_size:
        raise ValueError(
            f"Position {target_position} out of range for MMR size {mmr_size}"
        )

    path_positions: list[int] = []
    peak_positions: list[int] = []
    target_peak_index = -1

    for peak_pos in get_peaks(mmr_size):
        if target_peak_index < 0 and target_position <= peak_pos:
            target_peak_index = len(peak_positions)
            path_positions = _path_to_peak(target_position, peak_pos)
        else:
            peak_positions.append(peak_pos)

    return path_positions, peak_positions, target_peak_index


__all__ = [
    "leaf_index_to_mmr_size",
    "leaf_index_to_pos",
    "pos_height_in_tree",
    "sibling_offset",
    "parent_offset",
    "get_peaks",
    "is_valid_mmr_size",
    "gen_proof_positions",
]
