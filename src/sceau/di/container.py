"""
Dependency Injection Container for Sceau.

Builds every component from one validated Settings instance; no component
reads global configuration on its own.
"""

from typing import Optional

import redis.asyncio as aioredis

from sceau.application.session_lifecycle import SessionLifecycle
from sceau.application.use_cases.issue_challenge import IssueChallenge
from sceau.application.use_cases.verify_wallet_signature import (
    VerifyWalletSignature,
)
from sceau.config.settings import Settings, get_settings
from sceau.domain.clock import Clock, utc_now
from sceau.domain.services.i_address_validator import IAddressValidator
from sceau.domain.services.i_challenge_store import IChallengeStore
from sceau.domain.services.i_session_token_codec import ISessionTokenCodec
from sceau.domain.services.i_token_denylist import ITokenDenylist
from sceau.infrastructure.auth.network_registry import NetworkRegistry
from sceau.infrastructure.auth.session_token_codec import SessionTokenCodec
from sceau.infrastructure.cache.in_memory_challenge_store import (
    InMemoryChallengeStore,
)
from sceau.infrastructure.cache.redis_challenge_store import RedisChallengeStore
from sceau.infrastructure.cache.token_denylist import (
    InMemoryTokenDenylist,
    RedisTokenDenylist,
)
from sceau.infrastructure.external.address_validation_client import (
    AddressValidationClient,
)
from sceau.infrastructure.monitoring import get_logger

logger = get_logger(__name__)


class DIContainer:
    """
    Dependency Injection Container.

    Manages singleton instances of all services. Redis backs the
    challenge store and denylist when REDIS_ENABLED, otherwise both live
    in process memory.
    """

    def __init__(self, settings: Settings, clock: Clock = utc_now):
        """
        Initialize container.

        Args:
            settings: Validated settings
            clock: Time source shared by every component
        """
        self.settings = settings
        self.clock = clock

        # Infrastructure
        self._redis_client: Optional[aioredis.Redis] = None

        # Domain services
        self._network_registry: Optional[NetworkRegistry] = None
        self._challenge_store: Optional[IChallengeStore] = None
        self._token_denylist: Optional[ITokenDenylist] = None
        self._token_codec: Optional[ISessionTokenCodec] = None
        self._address_validator: Optional[IAddressValidator] = None

        # Use cases
        self._issue_challenge: Optional[IssueChallenge] = None
        self._verify_wallet_signature: Optional[VerifyWalletSignature] = None
        self._session_lifecycle: Optional[SessionLifecycle] = None

    async def initialize(self) -> None:
        """Build services and check connections."""
        if self.settings.REDIS_ENABLED:
            await self.redis_client.ping()
            logger.info("Redis connected")

        # Fail at startup rather than on the first request
        _ = self.session_lifecycle

    async def shutdown(self) -> None:
        """Cleanup resources and close connections."""
        if self._address_validator:
            await self._address_validator.close()

        if self._redis_client:
            await self._redis_client.aclose()
            self._redis_client = None

    # Infrastructure Getters

    @property
    def redis_client(self) -> aioredis.Redis:
        """Get Redis client instance."""
        if self._redis_client is None:
            self._redis_client = aioredis.Redis(
                host=self.settings.REDIS_HOST,
                port=self.settings.REDIS_PORT,
                db=self.settings.REDIS_DB,
                password=self.settings.REDIS_PASSWORD or None,
            )
        return self._redis_client

    # Domain Service Getters

    @property
    def network_registry(self) -> NetworkRegistry:
        """Get network registry instance."""
        if self._network_registry is None:
            self._network_registry = NetworkRegistry(
                self.settings.SUPPORTED_NETWORKS
            )
        return self._network_registry

    @property
    def challenge_store(self) -> IChallengeStore:
        """Get challenge store instance."""
        if self._challenge_store is None:
            if self.settings.REDIS_ENABLED:
                self._challenge_store = RedisChallengeStore(
                    redis_client=self.redis_client, clock=self.clock
                )
            else:
                self._challenge_store = InMemoryChallengeStore(clock=self.clock)
        return self._challenge_store

    @property
    def token_denylist(self) -> Optional[ITokenDenylist]:
        """Get token denylist instance (None when revocation is disabled)."""
        if self._token_denylist is None and self.settings.REVOCATION_ENABLED:
            if self.settings.REDIS_ENABLED:
                self._token_denylist = RedisTokenDenylist(
                    redis_client=self.redis_client
                )
            else:
                self._token_denylist = InMemoryTokenDenylist(clock=self.clock)
        return self._token_denylist

    @property
    def token_codec(self) -> ISessionTokenCodec:
        """Get session token codec instance."""
        if self._token_codec is None:
            self._token_codec = SessionTokenCodec(
                secret=self.settings.SESSION_SECRET,
                session_ttl_seconds=self.settings.SESSION_TTL_SECONDS,
                supported_networks=self.settings.SUPPORTED_NETWORKS,
                clock=self.clock,
            )
        return self._token_codec

    @property
    def address_validator(self) -> Optional[IAddressValidator]:
        """Get delegated address validator (None when not configured)."""
        if self._address_validator is None and (
            self.settings.address_validation_enabled
        ):
            self._address_validator = AddressValidationClient(
                base_url=self.settings.ADDRESS_VALIDATION_URL,
                api_key=self.settings.ADDRESS_VALIDATION_API_KEY,
                timeout=self.settings.ADDRESS_VALIDATION_TIMEOUT,
            )
        return self._address_validator

    # Use Case Getters

    @property
    def issue_challenge(self) -> IssueChallenge:
        """Get IssueChallenge use case."""
        if self._issue_challenge is None:
            self._issue_challenge = IssueChallenge(
                challenge_store=self.challenge_store,
                network_registry=self.network_registry,
                domain=self.settings.AUTH_DOMAIN,
                uri=self.settings.AUTH_URI,
                statement=self.settings.AUTH_STATEMENT,
                timeout_seconds=self.settings.CHALLENGE_TIMEOUT_SECONDS,
                retention_seconds=self.settings.CHALLENGE_RETENTION_SECONDS,
                version=self.settings.MESSAGE_VERSION,
                address_validator=self.address_validator,
                clock=self.clock,
            )
        return self._issue_challenge

    @property
    def verify_wallet_signature(self) -> VerifyWalletSignature:
        """Get VerifyWalletSignature use case."""
        if self._verify_wallet_signature is None:
            self._verify_wallet_signature = VerifyWalletSignature(
                challenge_store=self.challenge_store,
                network_registry=self.network_registry,
            )
        return self._verify_wallet_signature

    @property
    def session_lifecycle(self) -> SessionLifecycle:
        """Get session lifecycle controller."""
        if self._session_lifecycle is None:
            self._session_lifecycle = SessionLifecycle(
                issue_challenge=self.issue_challenge,
                verify_signature=self.verify_wallet_signature,
                token_codec=self.token_codec,
                token_denylist=self.token_denylist,
                clock=self.clock,
            )
        return self._session_lifecycle


# Global container instance
_container: Optional[DIContainer] = None


def get_container() -> DIContainer:
    """Get global DI container instance."""
    global _container
    if _container is None:
        _container = DIContainer(get_settings())
    return _container


def set_container(container: Optional[DIContainer]) -> None:
    """Replace global DI container (app factory and tests)."""
    global _container
    _container = container


async def initialize_container() -> DIContainer:
    """Initialize and return DI container."""
    container = get_container()
    await container.initialize()
    return container


async def shutdown_container() -> None:
    """Shutdown DI container."""
    if _container is not None:
        await _container.shutdown()
