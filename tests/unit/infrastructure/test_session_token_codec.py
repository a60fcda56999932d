"""
Unit tests for SessionTokenCodec.

Tests round trip, tamper detection, secret rotation and expiry.

Usage:
    python -m tests.unit.infrastructure.test_session_token_codec
    pytest tests/unit/infrastructure/test_session_token_codec.py
"""

import pytest

from sceau.domain.entities import VerifiedIdentity
from sceau.domain.exceptions import TokenCorruptError, TokenExpiredError
from sceau.infrastructure.auth import SessionTokenCodec
from sceau.infrastructure.auth.session_token_codec import derive_token_key
from tests.helpers.factories import (
    EPOCH,
    TEST_NETWORKS,
    TEST_SECRET,
    FrozenClock,
    make_challenge,
)
from tests.helpers.harness import SceauTest

B64URL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
SESSION_TTL = 3600


class TestSessionTokenCodec(SceauTest):
    """Unit tests for SessionTokenCodec."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def setup_test(self):
        self.clock = FrozenClock()
        self.codec = self._codec(TEST_SECRET)
        self.identity = VerifiedIdentity.from_challenge(make_challenge())

    def _codec(self, secret: str, networks=TEST_NETWORKS) -> SessionTokenCodec:
        return SessionTokenCodec(
            secret=secret,
            session_ttl_seconds=SESSION_TTL,
            supported_networks=networks,
            clock=self.clock,
        )

    # ================================================================
    # Round trip
    # ================================================================

    def test_decode_returns_identity(self):
        """Test decode(encode(identity)) == identity before expiry."""
        self.reporter.info("Testing token round trip", context="Test")

        token = self.codec.encode(self.identity)

        assert self.codec.decode(token) == self.identity

        self.reporter.info("Identity restored", context="Test")

    def test_claims_carry_token_lifetime(self):
        """Test token has its own expiry, independent of the challenge."""
        claims = self.codec.decode_claims(self.codec.encode(self.identity))

        assert claims.issued_at == EPOCH
        assert (claims.expires_at - claims.issued_at).total_seconds() == SESSION_TTL
        assert claims.identity.expiration_time == self.identity.expiration_time
        assert claims.token_id

    def test_token_is_compact_jwe(self):
        """Test token is five-part compact JWE with empty key segment."""
        segments = self.codec.encode(self.identity).split(".")

        assert len(segments) == 5
        assert segments[1] == ""

    def test_payload_is_encrypted(self):
        """Test address does not appear in the token."""
        token = self.codec.encode(self.identity)

        assert self.identity.address not in token
        assert "solana" not in token

    def test_fresh_iv_every_encode(self):
        """Test same identity encodes to different tokens and IVs."""
        first = self.codec.encode(self.identity)
        second = self.codec.encode(self.identity)

        assert first != second
        assert first.split(".")[2] != second.split(".")[2]
        assert self.codec.decode(first) == self.codec.decode(second)

    # ================================================================
    # Integrity
    # ================================================================

    def test_wrong_secret_is_corrupt(self):
        """Test token sealed under another secret fails as corrupt."""
        token = self._codec("another-session-secret-abcdefghijklmnop").encode(
            self.identity
        )

        with pytest.raises(TokenCorruptError):
            self.codec.decode(token)

    def test_any_modified_character_is_corrupt(self):
        """Test every single-character change is rejected."""
        self.reporter.info("Testing every token position", context="Test")

        token = self.codec.encode(self.identity)

        for index, char in enumerate(token):
            if char == ".":
                continue
            replacement = "A" if char != "A" else "B"
            tampered = token[:index] + replacement + token[index + 1:]
            with pytest.raises(TokenCorruptError):
                self.codec.decode(tampered)

        self.reporter.info(f"{len(token)} positions rejected", context="Test")

    def test_any_flipped_bit_is_corrupt(self):
        """Test bit flips in the ciphertext and tag are rejected."""
        token = self.codec.encode(self.identity)
        header, key, iv, ciphertext, tag = token.split(".")

        for segment_index in (2, 3, 4):
            segments = [header, key, iv, ciphertext, tag]
            original = segments[segment_index]
            for position in range(len(original)):
                value = B64URL_ALPHABET.index(original[position])
                flipped = B64URL_ALPHABET[value ^ 1]
                segments[segment_index] = (
                    original[:position] + flipped + original[position + 1:]
                )
                with pytest.raises(TokenCorruptError):
                    self.codec.decode(".".join(segments))

    def test_structural_garbage_is_corrupt(self):
        """Test malformed tokens never raise anything but corrupt."""
        token = self.codec.encode(self.identity)
        cases = [
            "",
            "not-a-token",
            token + ".",
            token + "=",
            token.replace(".", "", 1),
            ".".join(["a"] * 5),
            token[: len(token) // 2],
        ]

        for bad in cases:
            with pytest.raises(TokenCorruptError):
                self.codec.decode(bad)

    def test_disabled_network_is_rejected(self):
        """Test tokens for networks no longer enabled are refused."""
        token = self.codec.encode(self.identity)
        restricted = self._codec(TEST_SECRET, networks=["ethereum-mainnet"])

        with pytest.raises(TokenCorruptError):
            restricted.decode(token)

    # ================================================================
    # Expiry
    # ================================================================

    def test_expired_token(self):
        """Test token past its own expiration decodes only to expired."""
        token = self.codec.encode(self.identity)

        self.clock.advance(SESSION_TTL - 1)
        assert self.codec.decode(token) == self.identity

        self.clock.advance(1)
        with pytest.raises(TokenExpiredError):
            self.codec.decode(token)

    def test_challenge_expiry_does_not_end_session(self):
        """Test session outlives the challenge expiration time."""
        token = self.codec.encode(self.identity)
        self.clock.advance(600)

        assert self.codec.decode(token).address == self.identity.address

    # ================================================================
    # Key handling
    # ================================================================

    def test_key_derivation(self):
        """Test derived key is 256 bits and secret-dependent."""
        key = derive_token_key(TEST_SECRET)

        assert len(key) == 32
        assert key == derive_token_key(TEST_SECRET)
        assert key != derive_token_key(TEST_SECRET + "x")

    def test_repr_hides_secret(self):
        """Test repr never shows the secret or key."""
        assert TEST_SECRET not in repr(self.codec)

    def test_empty_secret_rejected(self):
        """Test codec cannot be built without a secret."""
        with pytest.raises(ValueError):
            self._codec("")


if __name__ == "__main__":
    TestSessionTokenCodec.run_as_main()
