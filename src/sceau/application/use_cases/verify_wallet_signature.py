"""
Verify Wallet Signature use case.
"""

import time
from typing import Optional

from sceau.domain.entities.verified_identity import VerifiedIdentity
from sceau.domain.exceptions import (
    InvalidAddressError,
    InvalidSignatureError,
    SceauException,
    TamperedMessageError,
)
from sceau.domain.services import message_composer
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.value_objects.wallet_address import WalletAddress
from sceau.infrastructure.auth.network_registry import NetworkRegistry
from sceau.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)


class VerifyWalletSignature:
    """
    Verify a signed challenge and produce a verified identity.

    Business rules:
    - The nonce is located by parsing, but every security decision is
      made against the stored challenge
    - The challenge is consumed before the signature is checked, so any
      failure after the claim is terminal for that nonce
    - Identity expiration is copied from the challenge, never extended
    """

    def __init__(
        self,
        challenge_store: IChallengeStore,
        network_registry: NetworkRegistry,
    ):
        """
        Initialize use case with dependencies.

        Args:
            challenge_store: Store holding pending challenges
            network_registry: Enabled networks and their schemes
        """
        self.challenge_store = challenge_store
        self.network_registry = network_registry

    async def execute(
        self,
        message: str,
        signature: str,
        network: str,
        address: Optional[str] = None,
    ) -> VerifiedIdentity:
        """
        Execute signature verification.

        Args:
            message: Message text exactly as signed
            signature: Signature in the network's wire encoding
            network: Network identifier
            address: Claimed wallet address (defaults to the one in message)

        Returns:
            VerifiedIdentity for the wallet

        Raises:
            UnsupportedNetworkError: Network not enabled
            MalformedMessageError: Message does not follow the grammar
            ChallengeNotFoundError / ChallengeAlreadyUsedError /
            ChallengeExpiredError: Store claim failed
            TamperedMessageError: Message differs from the stored challenge
            MalformedSignatureError: Signature cannot be decoded
            InvalidSignatureError: Signature does not verify
        """
        start = time.perf_counter()
        try:
            identity = await self._verify(message, signature, network, address)
        except SceauException as e:
            # Unbounded client input must not become a label value
            if not self.network_registry.is_supported(network):
                network = "unsupported"
            metrics.verifications_total.labels(network=network, outcome=e.code).inc()
            logger.info("Signature verification failed", extra={"code": e.code})
            raise

        metrics.verifications_total.labels(network=network, outcome="success").inc()
        metrics.verification_duration_seconds.labels(network=network).observe(
            time.perf_counter() - start
        )
        logger.info(
            "Wallet verified",
            extra={
                "wallet": str(WalletAddress(identity.address, identity.network)),
                "profile_id": identity.profile_id,
            },
        )
        return identity

    async def _verify(
        self,
        message: str,
        signature: str,
        network: str,
        address: Optional[str],
    ) -> VerifiedIdentity:
        scheme = self.network_registry.scheme_for(network)

        # 1. Parse only to locate the nonce
        parsed = message_composer.parse(message)
        claimed_address = scheme.normalize_address(
            address if address is not None else parsed.address
        )

        try:
            wallet = WalletAddress(address=claimed_address, network=network)
        except ValueError as e:
            raise InvalidAddressError(claimed_address, network, str(e)) from e

        # 2. Consume; from here on the nonce is spent
        challenge = await self.challenge_store.claim_and_consume(
            wallet, parsed.nonce
        )

        # 3. Byte-exact match against the server's own rendering
        if message != message_composer.compose(challenge):
            logger.warning("Tampered challenge message", extra={"wallet": str(wallet)})
            raise TamperedMessageError()

        # 4. Decode signature
        signature_bytes = scheme.decode_signature(signature)

        # 5. Verify over the exact message bytes
        key = scheme.derive_verifying_key(challenge.address)
        if not scheme.verify_signature(key, message.encode("utf-8"), signature_bytes):
            raise InvalidSignatureError()

        # 6. Identity bound to the stored challenge
        return VerifiedIdentity.from_challenge(challenge)
