"""
Delegated address validation client.

Asks an external HTTP service whether an address is valid on a network
before a challenge is issued. Transport failures are dependency errors,
never protocol errors.
"""

import asyncio
from typing import Optional

import httpx

from sceau.domain.exceptions import DependencyUnavailableError
from sceau.domain.services.i_address_validator import IAddressValidator
from sceau.infrastructure.monitoring import get_logger, metrics

logger = get_logger(__name__)

SERVICE_NAME = "address-validation"


class AddressValidationClient(IAddressValidator):
    """
    HTTP client for the address validation service.

    Request:  POST {base_url}/validate {"address": ..., "network": ...}
              header X-API-Key
    Response: {"valid": bool}

    Client is lazily initialised; every call is bounded by the timeout.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        timeout: float = 5.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize address validation client.

        Args:
            base_url: Service base URL
            api_key: API key sent as X-API-Key (never logged)
            timeout: Request timeout in seconds
            transport: Optional transport override (tests)
        """
        self.base_url = base_url.rstrip("/")
        self._api_key = api_key
        self.timeout = timeout
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None
        self._lock = asyncio.Lock()

    async def _ensure_client(self) -> httpx.AsyncClient:
        """Ensure HTTP client is initialized (lazy)."""
        if self._client is None:
            async with self._lock:
                if self._client is None:
                    self._client = httpx.AsyncClient(
                        base_url=self.base_url,
                        timeout=self.timeout,
                        headers={"X-API-Key": self._api_key},
                        transport=self._transport,
                    )
        return self._client

    async def is_valid(self, address: str, network: str) -> bool:
        """
        Ask the service whether address is valid on network.

        Returns:
            True if the service accepts the address

        Raises:
            DependencyUnavailableError: Timeout, transport error, 5xx or
                unreadable response
        """
        client = await self._ensure_client()

        try:
            response = await client.post(
                "/validate", json={"address": address, "network": network}
            )
        except httpx.TimeoutException as e:
            metrics.address_validation_requests_total.labels(outcome="timeout").inc()
            raise DependencyUnavailableError(SERVICE_NAME, "timeout") from e
        except httpx.HTTPError as e:
            metrics.address_validation_requests_total.labels(outcome="error").inc()
            raise DependencyUnavailableError(SERVICE_NAME, type(e).__name__) from e

        if response.status_code >= 500 or response.status_code in (401, 403, 429):
            metrics.address_validation_requests_total.labels(outcome="error").inc()
            logger.warning(
                "Address validation service rejected request",
                extra={"status_code": response.status_code},
            )
            raise DependencyUnavailableError(
                SERVICE_NAME, f"HTTP {response.status_code}"
            )

        if response.status_code >= 400:
            # 4xx other than auth/rate limit: the address itself was refused
            metrics.address_validation_requests_total.labels(outcome="invalid").inc()
            return False

        try:
            valid = response.json()["valid"]
        except (ValueError, KeyError, TypeError) as e:
            metrics.address_validation_requests_total.labels(outcome="error").inc()
            raise DependencyUnavailableError(SERVICE_NAME, "unreadable response") from e

        outcome = "valid" if valid is True else "invalid"
        metrics.address_validation_requests_total.labels(outcome=outcome).inc()
        return valid is True

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
