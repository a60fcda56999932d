"""
Unit tests for IssueChallenge use case.

Usage:
    python -m tests.unit.application.test_issue_challenge
    pytest tests/unit/application/test_issue_challenge.py
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import base58
import pytest

from sceau.application.use_cases import IssueChallenge
from sceau.domain.exceptions import (
    DependencyUnavailableError,
    InvalidAddressError,
    SceauException,
    UnsupportedNetworkError,
)
from sceau.domain.services import message_composer
from sceau.domain.value_objects import WalletAddress
from sceau.infrastructure.auth import NetworkRegistry
from sceau.infrastructure.cache import InMemoryChallengeStore
from tests.helpers.factories import (
    EPOCH,
    TEST_DOMAIN,
    TEST_NETWORKS,
    TEST_STATEMENT,
    TEST_URI,
    FrozenClock,
)
from tests.helpers.harness import SceauTest
from tests.helpers.sign_message import new_solana_keypair, solana_address


class TestIssueChallenge(SceauTest):
    """Unit tests for IssueChallenge use case."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def setup_test(self):
        self.clock = FrozenClock()
        self.store = InMemoryChallengeStore(clock=self.clock)
        self.address = solana_address(new_solana_keypair())

    def _use_case(
        self, store=None, address_validator=None, retention_seconds=300
    ) -> IssueChallenge:
        return IssueChallenge(
            challenge_store=store or self.store,
            network_registry=NetworkRegistry(TEST_NETWORKS),
            domain=TEST_DOMAIN,
            uri=TEST_URI,
            statement=TEST_STATEMENT,
            timeout_seconds=120,
            retention_seconds=retention_seconds,
            address_validator=address_validator,
            clock=self.clock,
        )

    # ================================================================
    # Issuance
    # ================================================================

    async def test_issue_returns_composed_message(self):
        """Test message binds all fields and expires after timeout."""
        self.reporter.info("Testing challenge issuance", context="Test")

        issued = await self._use_case().execute(self.address, "solana-devnet")

        challenge = message_composer.parse(issued.message)
        assert challenge.address == self.address
        assert challenge.network == "solana-devnet"
        assert challenge.domain == TEST_DOMAIN
        assert challenge.uri == TEST_URI
        assert challenge.statement == TEST_STATEMENT
        assert challenge.nonce == issued.nonce
        assert challenge.issued_at == EPOCH
        assert issued.expiration_time == EPOCH + timedelta(seconds=120)

        self.reporter.info(f"Issued nonce {issued.nonce}", context="Test")

    async def test_issue_stores_challenge(self):
        """Test issued challenge is claimable from the store."""
        issued = await self._use_case().execute(self.address, "solana-devnet")

        claimed = await self.store.claim_and_consume(
            WalletAddress(self.address, "solana-devnet"), issued.nonce
        )

        assert message_composer.compose(claimed) == issued.message

    async def test_nonce_has_128_bits(self):
        """Test nonce encodes 16 random bytes."""
        issued = await self._use_case().execute(self.address, "solana-devnet")

        assert len(base58.b58decode(issued.nonce)) == 16

    async def test_nonces_are_unique(self):
        """Test repeated issuance yields distinct nonces."""
        use_case = self._use_case()

        nonces = {
            (await use_case.execute(self.address, "solana-devnet")).nonce
            for _ in range(100)
        }

        assert len(nonces) == 100

    async def test_collision_regenerates_nonce(self):
        """Test a nonce already live in the store is never reused."""
        store = AsyncMock()
        store.put.side_effect = [False, True]

        issued = await self._use_case(store=store).execute(
            self.address, "solana-devnet"
        )

        assert store.put.call_count == 2
        first = store.put.call_args_list[0][0][1]
        second = store.put.call_args_list[1][0][1]
        assert first.nonce != second.nonce
        assert issued.nonce == second.nonce

    async def test_store_ttl_covers_retention(self):
        """Test store entry outlives the challenge by the retention window."""
        store = AsyncMock()
        store.put.return_value = True

        await self._use_case(store=store).execute(self.address, "solana-devnet")

        assert store.put.call_args[0][2] == 420

    async def test_zero_retention_still_outlives_challenge(self):
        """Test store entry survives the deadline so late attempts read EXPIRED."""
        store = AsyncMock()
        store.put.return_value = True

        await self._use_case(store=store, retention_seconds=0).execute(
            self.address, "solana-devnet"
        )

        assert store.put.call_args[0][2] > 120

    async def test_nonce_exhaustion(self):
        """Test persistent collisions fail instead of looping forever."""
        store = AsyncMock()
        store.put.return_value = False

        with pytest.raises(SceauException) as exc_info:
            await self._use_case(store=store).execute(self.address, "solana-devnet")

        assert exc_info.value.code == "NONCE_EXHAUSTED"

    # ================================================================
    # Rejections
    # ================================================================

    async def test_unsupported_network(self):
        """Test unknown network is rejected and nothing is stored."""
        with pytest.raises(UnsupportedNetworkError):
            await self._use_case().execute(self.address, "solana-localnet")

        assert len(self.store) == 0

    async def test_known_but_disabled_network(self):
        """Test known network outside configuration is rejected."""
        with pytest.raises(UnsupportedNetworkError):
            await self._use_case().execute(self.address, "solana-testnet")

    async def test_invalid_address(self):
        """Test malformed address is rejected and nothing is stored."""
        with pytest.raises(InvalidAddressError):
            await self._use_case().execute("not-a-wallet", "solana-devnet")

        assert len(self.store) == 0

    async def test_address_for_wrong_family(self):
        """Test Solana address on an Ethereum network is rejected."""
        with pytest.raises(InvalidAddressError):
            await self._use_case().execute(self.address, "ethereum-mainnet")

    # ================================================================
    # Delegated validation
    # ================================================================

    async def test_delegated_validation_accepts(self):
        """Test validator is consulted with address and network."""
        validator = AsyncMock()
        validator.is_valid.return_value = True

        await self._use_case(address_validator=validator).execute(
            self.address, "solana-devnet"
        )

        validator.is_valid.assert_called_once_with(self.address, "solana-devnet")

    async def test_delegated_validation_rejects(self):
        """Test negative answer is an invalid address."""
        validator = AsyncMock()
        validator.is_valid.return_value = False

        with pytest.raises(InvalidAddressError):
            await self._use_case(address_validator=validator).execute(
                self.address, "solana-devnet"
            )

        assert len(self.store) == 0

    async def test_delegated_validation_unavailable(self):
        """Test dependency failure propagates unchanged."""
        validator = AsyncMock()
        validator.is_valid.side_effect = DependencyUnavailableError(
            "address-validation", "timeout"
        )

        with pytest.raises(DependencyUnavailableError):
            await self._use_case(address_validator=validator).execute(
                self.address, "solana-devnet"
            )

        assert len(self.store) == 0


if __name__ == "__main__":
    TestIssueChallenge.run_as_main()
