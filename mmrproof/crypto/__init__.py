"""
Digest codec and the MMR merge function.
"""
from .hashing import (
    DIGEST_SIZE,
    EMPTY_ROOT,
    Digest,
    PositionedDigest,
    blake2b_256,
    merge,
    encode_digest,
    decode_digest,
)

__all__ = [
    "DIGEST_SIZE",
    "EMPTY_ROOT",
    "Digest",
    "PositionedDigest",
    "blake2b_256",
    "merge",
    "encode_digest",
    "decode_digest",
]
