"""
Unit tests for AddressValidationClient.

The validation service is simulated with httpx.MockTransport.

Usage:
    python -m tests.unit.infrastructure.test_address_validation_client
    pytest tests/unit/infrastructure/test_address_validation_client.py
"""

import json

import httpx
import pytest

from sceau.domain.exceptions import DependencyUnavailableError
from sceau.infrastructure.external import AddressValidationClient
from tests.helpers.harness import SceauTest

BASE_URL = "https://validator.test/v1"
API_KEY = "validator-api-key"


class TestAddressValidationClient(SceauTest):
    """Unit tests for AddressValidationClient."""

    # ================================================================
    # Helper Methods
    # ================================================================

    def _client(self, handler) -> AddressValidationClient:
        return AddressValidationClient(
            base_url=BASE_URL,
            api_key=API_KEY,
            timeout=1.0,
            transport=httpx.MockTransport(handler),
        )

    # ================================================================
    # Test Methods
    # ================================================================

    async def test_valid_address(self):
        """Test request shape and positive answer."""
        self.reporter.info("Testing delegated validation request", context="Test")

        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["api_key"] = request.headers.get("X-API-Key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"valid": True})

        client = self._client(handler)
        try:
            assert await client.is_valid("Addr1111", "solana-devnet") is True
        finally:
            await client.close()

        assert seen["url"] == f"{BASE_URL}/validate"
        assert seen["api_key"] == API_KEY
        assert seen["body"] == {"address": "Addr1111", "network": "solana-devnet"}

    async def test_invalid_address(self):
        """Test negative answer is returned, not raised."""
        client = self._client(lambda request: httpx.Response(200, json={"valid": False}))
        try:
            assert await client.is_valid("Addr1111", "solana-devnet") is False
        finally:
            await client.close()

    async def test_client_error_means_invalid(self):
        """Test 4xx (other than auth/rate limit) rejects the address."""
        client = self._client(lambda request: httpx.Response(422, json={}))
        try:
            assert await client.is_valid("Addr1111", "solana-devnet") is False
        finally:
            await client.close()

    async def test_timeout_is_dependency_error(self):
        """Test timeouts are retryable dependency failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timed out", request=request)

        client = self._client(handler)
        try:
            with pytest.raises(DependencyUnavailableError):
                await client.is_valid("Addr1111", "solana-devnet")
        finally:
            await client.close()

    async def test_transport_error_is_dependency_error(self):
        """Test connection failures are dependency failures."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = self._client(handler)
        try:
            with pytest.raises(DependencyUnavailableError):
                await client.is_valid("Addr1111", "solana-devnet")
        finally:
            await client.close()

    async def test_server_and_auth_errors_are_dependency_errors(self):
        """Test 5xx, 401, 403 and 429 never count as an invalid address."""
        for status_code in (500, 503, 401, 403, 429):
            client = self._client(
                lambda request, code=status_code: httpx.Response(code)
            )
            try:
                with pytest.raises(DependencyUnavailableError):
                    await client.is_valid("Addr1111", "solana-devnet")
            finally:
                await client.close()

    async def test_unreadable_body_is_dependency_error(self):
        """Test a 200 without the expected field is a dependency failure."""
        client = self._client(lambda request: httpx.Response(200, text="ok"))
        try:
            with pytest.raises(DependencyUnavailableError):
                await client.is_valid("Addr1111", "solana-devnet")
        finally:
            await client.close()

    async def test_api_key_not_in_error(self):
        """Test error messages never carry the API key."""
        client = self._client(lambda request: httpx.Response(500))
        try:
            with pytest.raises(DependencyUnavailableError) as exc_info:
                await client.is_valid("Addr1111", "solana-devnet")
        finally:
            await client.close()

        assert API_KEY not in exc_info.value.message


if __name__ == "__main__":
    TestAddressValidationClient.run_as_main()
