"""
Session lifecycle controller.

Ties challenge issuance, signature verification and the session token
codec into the sign-in state machine:

    UNAUTHENTICATED --issue--> CHALLENGE_ISSUED
    CHALLENGE_ISSUED --verify ok--> AUTHENTICATED (token emitted)
    CHALLENGE_ISSUED --verify error--> UNAUTHENTICATED
    AUTHENTICATED --expiry / decode error--> UNAUTHENTICATED (lazy)
    AUTHENTICATED --logout--> UNAUTHENTICATED

The server keeps no session rows; state is recovered from the token on
each presentation.
"""

from enum import Enum
from typing import Optional

from sceau.application.dto.auth_dto import AuthenticatedSession, IssuedChallenge
from sceau.application.use_cases.issue_challenge import IssueChallenge
from sceau.application.use_cases.verify_wallet_signature import (
    VerifyWalletSignature,
)
from sceau.domain.clock import Clock, utc_now
from sceau.domain.entities.session_claims import SessionClaims
from sceau.domain.exceptions import (
    TokenError,
    TokenExpiredError,
    TokenRevokedError,
)
from sceau.domain.services.i_session_token_codec import ISessionTokenCodec
from sceau.domain.services.i_token_denylist import ITokenDenylist
from sceau.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class SessionState(str, Enum):
    """Client session states as seen by the server."""

    UNAUTHENTICATED = "unauthenticated"
    CHALLENGE_ISSUED = "challenge_issued"
    AUTHENTICATED = "authenticated"
    EXPIRED = "expired"
    LOGGED_OUT = "logged_out"


class SessionLifecycle:
    """
    Entry point for the sign-in flow.

    Revocation is optional: without a denylist, logout is purely a
    client-side discard of the token.
    """

    def __init__(
        self,
        issue_challenge: IssueChallenge,
        verify_signature: VerifyWalletSignature,
        token_codec: ISessionTokenCodec,
        token_denylist: Optional[ITokenDenylist] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize controller with the sign-in use cases.

        Args:
            issue_challenge: Challenge issuance use case
            verify_signature: Signature verification use case
            token_codec: Session token encoder/decoder
            token_denylist: Revocation store; None disables revocation
            clock: Time source
        """
        self.issue_challenge = issue_challenge
        self.verify_signature = verify_signature
        self.token_codec = token_codec
        self.token_denylist = token_denylist
        self.clock = clock

    @property
    def revocation_enabled(self) -> bool:
        """True when logout can invalidate a token server-side."""
        return self.token_denylist is not None

    async def request_challenge(self, address: str, network: str) -> IssuedChallenge:
        """UNAUTHENTICATED -> CHALLENGE_ISSUED."""
        return await self.issue_challenge.execute(address=address, network=network)

    async def authenticate(
        self,
        message: str,
        signature: str,
        network: str,
        address: Optional[str] = None,
    ) -> AuthenticatedSession:
        """
        CHALLENGE_ISSUED -> AUTHENTICATED.

        Any verification error leaves the client unauthenticated; no token
        is produced.
        """
        identity = await self.verify_signature.execute(
            message=message,
            signature=signature,
            network=network,
            address=address,
        )
        token = self.token_codec.encode(identity)
        claims = self.token_codec.decode_claims(token)

        return AuthenticatedSession(
            identity=identity,
            token=token,
            token_expires_at=claims.expires_at,
        )

    async def current_session(self, token: str) -> SessionClaims:
        """
        Decode a presented token.

        Raises:
            TokenCorruptError: Tampered or foreign token
            TokenExpiredError: Token past its expiration
            TokenRevokedError: Token logged out before expiry
        """
        try:
            claims = self.token_codec.decode_claims(token)
            if self.token_denylist is not None:
                if await self.token_denylist.is_revoked(claims.token_id):
                    raise TokenRevokedError()
        except TokenError as e:
            metrics.token_decodes_total.labels(outcome=e.code).inc()
            raise

        metrics.token_decodes_total.labels(outcome="success").inc()
        return claims

    async def session_state(self, token: Optional[str]) -> SessionState:
        """State of the client presenting token (None for no credential)."""
        if not token:
            return SessionState.UNAUTHENTICATED
        try:
            await self.current_session(token)
        except TokenRevokedError:
            return SessionState.LOGGED_OUT
        except TokenExpiredError:
            return SessionState.EXPIRED
        except TokenError:
            return SessionState.UNAUTHENTICATED
        return SessionState.AUTHENTICATED

    async def logout(self, token: Optional[str]) -> bool:
        """
        AUTHENTICATED -> UNAUTHENTICATED.

        Returns:
            True if the token was added to the denylist
        """
        if not token or self.token_denylist is None:
            return False

        try:
            claims = self.token_codec.decode_claims(token)
        except TokenError as e:
            logger.debug("Logout with unusable token", extra={"code": e.code})
            return False

        await self.token_denylist.revoke(
            claims.token_id, claims.remaining_seconds(self.clock())
        )
        logger.info("Session revoked", extra={"profile_id": claims.identity.profile_id})
        return True
