"""
Digest Codec and Hashing Utilities

This module provides:
- Digest: immutable 32-byte value that cannot be built with another length
- Hex encoding/decoding of digests with 0x prefix
- The MMR merge function (blake2b-256 over the concatenated children)

Security/Determinism Notes:
- Decoding never truncates or pads; anything but 64 lowercase hex chars is rejected
- Encoding always produces lowercase hex
- All operations are deterministic
"""
from __future__ import annotations

import hashlib
import re
from typing import NamedTuple

from mmrproof.schemas.errors import MalformedDigestError


DIGEST_SIZE = 32
HEX_PREFIX = "0x"

_LOWER_HEX = re.compile(r"[0-9a-f]{64}")


class Digest(bytes):
    """
    A 32-byte hash value.

    Construction validates the length, so holding a Digest guarantees
    it is exactly DIGEST_SIZE bytes.

    Example:
        >>> Digest(b"\\x00" * 32).hex()[:4]
        '0000'
    """

    __slots__ = ()

    def __new__(cls, value: bytes) -> "Digest":
        if isinstance(value, str):
            raise TypeError("Digest requires bytes; use decode_digest() for hex text")
        value = bytes(value)
        if len(value) != DIGEST_SIZE:
            raise MalformedDigestError(
                f"Digest must be {DIGEST_SIZE} bytes, got {len(value)}",
                value=value.hex(),
            )
        return super().__new__(cls, value)

    def __repr__(self) -> str:
        return f"Digest({encode_digest(self)})"


class PositionedDigest(NamedTuple):
    """An MMR node: its postorder position and its hash."""
    position: int
    digest: Digest


def blake2b_256(data: bytes) -> Digest:
    """
    Compute the 32-byte BLAKE2b hash of raw bytes.

    Args:
        data: Raw bytes to hash

    Returns:
        32-byte Digest
    """
    return Digest(hashlib.blake2b(data, digest_size=DIGEST_SIZE).digest())


def merge(left: bytes, right: bytes) -> Digest:
    """
    Compute the parent hash of two MMR nodes.

    parent = blake2b_256(left || right)

    Args:
        left: Left child hash
        right: Right child hash

    Returns:
        Parent Digest
    """
    return blake2b_256(bytes(left) + bytes(right))


# Root of an MMR with no leaves
EMPTY_ROOT: Digest = blake2b_256(b"")


def encode_digest(digest: bytes) -> str:
    """
    Convert a digest to lowercase hex with 0x prefix.

    Args:
        digest: 32-byte digest

    Returns:
        66-character string (e.g. "0x1234...")
    """
    return HEX_PREFIX + bytes(digest).hex()


def decode_digest(text: str, position: int | None = None) -> Digest:
    """
    Convert 0x-prefixed hex text into a Digest.

    Args:
        text: Hex string with 0x prefix and exactly 64 lowercase hex characters
        position: MMR position the text was read for, used in error details

    Returns:
        Decoded Digest

    Raises:
        MalformedDigestError: If the prefix is missing, the hex is invalid,
            or the decoded value is not 32 bytes
    """
    if not isinstance(text, str):
        raise MalformedDigestError(
            f"Digest must be a string, got {type(text).__name__}",
            position=position,
        )

    if not text.startswith(HEX_PREFIX):
        raise MalformedDigestError(
            f"Digest must start with '{HEX_PREFIX}' prefix, got: {text[:10]}...",
            value=text,
            position=position,
        )

    hex_content = text[len(HEX_PREFIX):]
    if len(hex_content) != DIGEST_SIZE * 2:
        raise MalformedDigestError(
            f"Digest must have {DIGEST_SIZE * 2} hex characters, got {len(hex_content)}",
            value=text,
            position=position,
        )

    if not _LOWER_HEX.fullmatch(hex_content):
        raise MalformedDigestError(
            "Invalid hex characters in digest: only 0-9 and a-f are allowed",
            value=text,
            position=position,
        )

    return Digest(bytes.fromhex(hex_content))


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
