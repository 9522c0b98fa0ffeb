"""
Digest Codec Unit Tests
Tests for mmrproof/crypto/hashing.py

Tests:
- Digest length enforcement
- blake2b-256 merge and the empty root
- encode/decode with strict 0x + 64 hex rule
"""
import hashlib
import pytest

from mmrproof.crypto.hashing import (
    DIGEST_SIZE,
    EMPTY_ROOT,
    Digest,
    PositionedDigest,
    blake2b_256,
    merge,
    encode_digest,
    decode_digest,
)
from mmrproof.schemas.errors import ErrorCodes, MalformedDigestError


class TestDigest:
    """Tests for the Digest value type."""

    def test_accepts_32_bytes(self):
        digest = Digest(b"\x01" * 32)

        assert len(digest) == DIGEST_SIZE
        assert digest == b"\x01" * 32

    @pytest.mark.parametrize("size", [0, 31, 33, 64])
    def test_rejects_other_lengths(self, size):
        """Any length but 32 raises MalformedDigestError."""
        with pytest.raises(MalformedDigestError) as exc_info:
            Digest(b"\x00" * size)

        assert exc_info.value.code == ErrorCodes.MALFORMED_DIGEST

    def test_rejects_text(self):
        """Hex text must go through decode_digest."""
        with pytest.raises(TypeError):
            Digest("00" * 32)

    def test_repr_shows_hex(self):
        digest = Digest(b"\xab" * 32)
        assert repr(digest) == f"Digest(0x{'ab' * 32})"

    def test_positioned_digest_fields(self):
        node = PositionedDigest(6, Digest(b"\x02" * 32))
        assert node.position == 6
        assert node.digest == b"\x02" * 32


class TestBlake2b:
    """Tests for blake2b_256() and merge()."""

    def test_known_value(self):
        expected = hashlib.blake2b(b"hello", digest_size=32).digest()
        assert blake2b_256(b"hello") == expected

    def test_empty_root_is_hash_of_empty_input(self):
        """EMPTY_ROOT == blake2b-256 of the empty byte string."""
        assert EMPTY_ROOT == hashlib.blake2b(b"", digest_size=32).digest()
        assert isinstance(EMPTY_ROOT, Digest)

    def test_merge_hashes_concatenation(self):
        left = blake2b_256(b"left")
        right = blake2b_256(b"right")

        assert merge(left, right) == blake2b_256(left + right)

    def test_merge_order_matters(self):
        a = blake2b_256(b"a")
        b = blake2b_256(b"b")

        assert merge(a, b) != merge(b, a)


class TestEncodeDigest:
    """Tests for encode_digest()."""

    def test_format(self):
        text = encode_digest(Digest(b"\xAB" * 32))

        assert text.startswith("0x")
        assert len(text) == 66
        assert text == text.lower()


class TestDecodeDigest:
    """Tests for decode_digest()."""

    def test_valid(self):
        text = "0x" + "12" * 32
        assert decode_digest(text) == bytes.fromhex("12" * 32)

    def test_round_trip(self):
        digest = blake2b_256(b"round trip")
        assert decode_digest(encode_digest(digest)) == digest

    @pytest.mark.parametrize("text", [
        "0x" + "AB" * 32,
        "0x" + "ab" * 31 + "aB",
        "0X" + "ab" * 32,
    ])
    def test_uppercase_hex_rejected(self, text):
        """Only lowercase hex is a valid textual digest."""
        with pytest.raises(MalformedDigestError):
            decode_digest(text)

    def test_whitespace_rejected(self):
        """bytes.fromhex would skip spaces; the codec must not."""
        with pytest.raises(MalformedDigestError, match="Invalid hex"):
            decode_digest("0x" + "ab" * 31 + " a")

    def test_missing_prefix(self):
        with pytest.raises(MalformedDigestError, match="prefix"):
            decode_digest("12" * 32)

    def test_31_bytes_rejected(self):
        """Short hashes are never padded."""
        with pytest.raises(MalformedDigestError, match="64 hex"):
            decode_digest("0x" + "ab" * 31)

    def test_33_bytes_rejected(self):
        """Long hashes are never truncated."""
        with pytest.raises(MalformedDigestError, match="64 hex"):
            decode_digest("0x" + "ab" * 33)

    def test_invalid_chars(self):
        with pytest.raises(MalformedDigestError, match="Invalid hex"):
            decode_digest("0x" + "zz" * 32)

    def test_non_string(self):
        with pytest.raises(MalformedDigestError):
            decode_digest(None)

    def test_position_in_details(self):
        """The position the hash was read for travels with the error."""
        with pytest.raises(MalformedDigestError) as exc_info:
            decode_digest("0x1234", position=9)

        assert exc_info.value.position == 9
        assert exc_info.value.details["position"] == 9
        assert exc_info.value.details["value"] == "0x1234"
