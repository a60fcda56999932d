"""
Session token codec.

Seals a VerifiedIdentity into a JWE compact token (dir + A256GCM) and opens
it again. The AEAD key is derived from the configured session secret with
HKDF-SHA256, so tokens sealed under another secret fail exactly like
tampered ones.
"""

import base64
import binascii
import json
import math
import secrets
from datetime import datetime, timezone
from typing import Iterable

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF
from jose import jwe
from jose.constants import ALGORITHMS
from jose.exceptions import JOSEError

from sceau.domain.clock import Clock, utc_now
from sceau.domain.entities.session_claims import SessionClaims
from sceau.domain.entities.verified_identity import VerifiedIdentity
from sceau.domain.exceptions import TokenCorruptError, TokenExpiredError
from sceau.domain.services.i_session_token_codec import ISessionTokenCodec
from sceau.domain.services.message_composer import (
    format_timestamp,
    parse_timestamp,
)
from sceau.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

KEY_INFO = b"sceau session token v1"
JWE_SEGMENTS = 5

# jose surfaces malformed headers as assorted builtin errors
DECRYPT_ERRORS = (
    JOSEError,
    InvalidTag,
    ValueError,
    TypeError,
    KeyError,
    AttributeError,
)


def derive_token_key(secret: str) -> bytes:
    """
    Derive the 256-bit content encryption key from the session secret.

    Args:
        secret: Server-held session secret

    Returns:
        32-byte key for A256GCM
    """
    return HKDF(
        algorithm=hashes.SHA256(),
        length=32,
        salt=None,
        info=KEY_INFO,
    ).derive(secret.encode("utf-8"))


def _is_canonical_b64url(segment: str) -> bool:
    """Check segment is unpadded base64url that re-encodes to itself."""
    try:
        raw = base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))
    except (binascii.Error, ValueError):
        return False
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=") == segment


class SessionTokenCodec(ISessionTokenCodec):
    """
    Encrypted, integrity-protected session tokens.

    Payload (JSON, encrypted):
        jti            - random token id (revocation key)
        sub            - profile id
        address        - wallet address
        network        - network id
        iat / exp      - token issue / expiry (epoch seconds)
        challenge_iat  - challenge issued_at (canonical timestamp)
        challenge_exp  - challenge expiration_time (canonical timestamp)
    """

    def __init__(
        self,
        secret: str,
        session_ttl_seconds: int,
        supported_networks: Iterable[str],
        clock: Clock = utc_now,
    ):
        """
        Initialize codec.

        Args:
            secret: Session secret (never logged)
            session_ttl_seconds: Lifetime of each issued token
            supported_networks: Networks accepted at decode time
            clock: Time source
        """
        if not secret:
            raise ValueError("Session secret is required")
        self._key = derive_token_key(secret)
        self.session_ttl_seconds = session_ttl_seconds
        self.supported_networks = frozenset(supported_networks)
        self.clock = clock

    def __repr__(self) -> str:
        return (
            f"SessionTokenCodec(ttl={self.session_ttl_seconds}s, "
            f"networks={sorted(self.supported_networks)})"
        )

    def encode(self, identity: VerifiedIdentity) -> str:
        """
        Seal identity into a new token.

        Args:
            identity: Identity from a successful verification

        Returns:
            JWE compact serialisation
        """
        now = self.clock().timestamp()
        payload = {
            "jti": secrets.token_urlsafe(16),
            "sub": identity.profile_id,
            "address": identity.address,
            "network": identity.network,
            "iat": math.floor(now),
            "exp": math.floor(now) + self.session_ttl_seconds,
            "challenge_iat": format_timestamp(identity.issued_at),
            "challenge_exp": format_timestamp(identity.expiration_time),
        }
        plaintext = json.dumps(payload, separators=(",", ":"), sort_keys=True)

        # jose draws a fresh random IV for every call
        token = jwe.encrypt(
            plaintext.encode("utf-8"),
            self._key,
            algorithm=ALGORITHMS.DIR,
            encryption=ALGORITHMS.A256GCM,
        )
        return token.decode("ascii") if isinstance(token, bytes) else token

    def decode_claims(self, token: str) -> SessionClaims:
        """
        Open and validate a token.

        Args:
            token: Token presented by the client

        Returns:
            SessionClaims with the verified identity

        Raises:
            TokenCorruptError: Tampered, foreign-key or malformed token
            TokenExpiredError: Token past its own expiration
        """
        if not isinstance(token, str) or not token:
            raise TokenCorruptError()

        segments = token.split(".")
        if len(segments) != JWE_SEGMENTS or segments[1] != "":
            raise TokenCorruptError()

        # Any edit of a segment, including unused trailing bits, must fail
        for index in (0, 2, 3, 4):
            if not segments[index] or not _is_canonical_b64url(segments[index]):
                raise TokenCorruptError()

        try:
            plaintext = jwe.decrypt(token, self._key)
        except DECRYPT_ERRORS:
            logger.debug("Session token failed AEAD verification")
            raise TokenCorruptError()

        try:
            claims = json.loads(plaintext)
            address = claims["address"]
            network = claims["network"]
            issued_at = datetime.fromtimestamp(int(claims["iat"]), tz=timezone.utc)
            expires_at = datetime.fromtimestamp(int(claims["exp"]), tz=timezone.utc)
            identity = VerifiedIdentity.from_claims(
                address=address,
                network=network,
                issued_at=parse_timestamp(claims["challenge_iat"]),
                expiration_time=parse_timestamp(claims["challenge_exp"]),
            )
            token_id = claims["jti"]
        except (ValueError, TypeError, KeyError, OverflowError):
            raise TokenCorruptError()

        if not all(isinstance(v, str) for v in (address, network, token_id)):
            raise TokenCorruptError()

        if claims.get("sub") != identity.profile_id:
            raise TokenCorruptError()

        if network not in self.supported_networks:
            logger.info(
                "Session token for disabled network rejected",
                extra={"network": network},
            )
            raise TokenCorruptError()

        if self.clock() >= expires_at:
            raise TokenExpiredError()

        return SessionClaims(
            token_id=token_id,
            identity=identity,
            issued_at=issued_at,
            expires_at=expires_at,
        )
