"""
Issue Challenge use case.
"""

import secrets
from datetime import timedelta
from typing import Optional

import base58

from sceau.application.dto.auth_dto import IssuedChallenge
from sceau.domain.clock import Clock, utc_now
from sceau.domain.entities.challenge import Challenge
from sceau.domain.exceptions import InvalidAddressError, SceauException
from sceau.domain.services import message_composer
from sceau.domain.services.i_address_validator import IAddressValidator
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.value_objects.wallet_address import WalletAddress
from sceau.infrastructure.auth.network_registry import NetworkRegistry
from sceau.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)

NONCE_BYTES = 16
MAX_NONCE_ATTEMPTS = 5

# Late attempts must still find the entry to report EXPIRED
MIN_RETENTION_SECONDS = 1


def generate_nonce() -> str:
    """128-bit nonce from the OS CSPRNG, base58 encoded."""
    return base58.b58encode(secrets.token_bytes(NONCE_BYTES)).decode("ascii")


class IssueChallenge:
    """
    Issue a sign-in challenge for a wallet.

    Business rules:
    - Network must be enabled; address must be well-formed for it
    - Nonce is fresh CSPRNG output, never reused while live
    - expiration_time = issued_at + timeout
    - Challenge is stored before the message is returned
    """

    def __init__(
        self,
        challenge_store: IChallengeStore,
        network_registry: NetworkRegistry,
        domain: str,
        uri: str,
        statement: str,
        timeout_seconds: int,
        retention_seconds: int = MIN_RETENTION_SECONDS,
        version: str = "1",
        address_validator: Optional[IAddressValidator] = None,
        clock: Clock = utc_now,
    ):
        """
        Initialize use case with dependencies.

        Args:
            challenge_store: Store for pending challenges
            network_registry: Enabled networks and their schemes
            domain: Trusted origin bound into every message
            uri: Verifying endpoint bound into every message
            statement: Human-readable purpose text
            timeout_seconds: Challenge lifetime
            retention_seconds: Extra store retention after expiry
            version: Message version tag
            address_validator: Optional delegated address check
            clock: Time source
        """
        self.challenge_store = challenge_store
        self.network_registry = network_registry
        self.domain = domain
        self.uri = uri
        self.statement = statement
        self.timeout_seconds = timeout_seconds
        self.retention_seconds = retention_seconds
        self.version = version
        self.address_validator = address_validator
        self.clock = clock

    async def execute(self, address: str, network: str) -> IssuedChallenge:
        """
        Execute challenge issuance.

        Args:
            address: Wallet address requesting sign-in
            network: Network identifier

        Returns:
            IssuedChallenge with message, nonce and expiration time

        Raises:
            UnsupportedNetworkError: If network is not enabled
            InvalidAddressError: If address is malformed or rejected
            DependencyUnavailableError: If delegated validation is down
        """
        scheme = self.network_registry.validate_address(address, network)
        address = scheme.normalize_address(address)

        if self.address_validator is not None:
            if not await self.address_validator.is_valid(address, network):
                raise InvalidAddressError(
                    address, network, "rejected by address validation service"
                )

        try:
            wallet = WalletAddress(address=address, network=network)
        except ValueError as e:
            raise InvalidAddressError(address, network, str(e)) from e

        now = self.clock()
        challenge = Challenge(
            address=address,
            network=network,
            domain=self.domain,
            uri=self.uri,
            statement=self.statement,
            nonce=generate_nonce(),
            issued_at=now,
            expiration_time=now + timedelta(seconds=self.timeout_seconds),
            version=self.version,
        )

        ttl = self.timeout_seconds + max(self.retention_seconds, MIN_RETENTION_SECONDS)
        for _ in range(MAX_NONCE_ATTEMPTS):
            if await self.challenge_store.put(wallet, challenge, ttl):
                break
            logger.warning(
                "Nonce collision, regenerating", extra={"wallet": str(wallet)}
            )
            challenge = challenge.with_nonce(generate_nonce())
        else:
            raise SceauException(
                "Could not allocate a unique nonce", code="NONCE_EXHAUSTED"
            )

        metrics.challenges_issued_total.labels(network=network).inc()
        logger.info(
            "Challenge issued",
            extra={
                "wallet": str(wallet),
                "expires_at": challenge.expiration_time.isoformat(),
            },
        )

        return IssuedChallenge(
            message=message_composer.compose(challenge),
            nonce=challenge.nonce,
            expiration_time=challenge.expiration_time,
        )
