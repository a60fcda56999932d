"""
Signature scheme service interface.

One implementation per network family: how addresses are encoded, how the
verifying key is derived from an address, and how signatures are checked.
"""

from abc import ABC, abstractmethod
from typing import Any


class ISignatureScheme(ABC):
    """
    Capability set for a network's signature scheme.

    Implementations are stateless and safe to share between requests.
    """

    #: Network family handled by this scheme (e.g. "solana")
    family: str = ""

    @abstractmethod
    def validate_address(self, address: str) -> bool:
        """
        Check address encoding for this network.

        Args:
            address: Address as supplied by the client

        Returns:
            True if the address is well-formed
        """

    def normalize_address(self, address: str) -> str:
        """
        Canonical spelling of a well-formed address.

        Store keys, messages and profile ids all use this form, so one
        wallet maps to one identity however the client spells it.
        """
        return address

    @abstractmethod
    def derive_verifying_key(self, address: str) -> Any:
        """
        Derive the verifying key material for an address.

        Args:
            address: Well-formed address

        Returns:
            Scheme-specific key object

        Raises:
            InvalidAddressError: If no key can be derived
        """

    @abstractmethod
    def decode_signature(self, signature: str) -> bytes:
        """
        Decode a signature from its wire encoding.

        Raises:
            MalformedSignatureError: If the encoding or length is invalid
        """

    @abstractmethod
    def verify_signature(self, key: Any, message: bytes, signature: bytes) -> bool:
        """
        Verify signature over the exact message bytes.

        Returns:
            True if signature is valid, False otherwise
        """
