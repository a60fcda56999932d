"""
Solana wallet signature scheme.

Implements wallet signature verification using Ed25519. A Solana address
is the base58 encoding of the Ed25519 public key, so the verifying key is
decoded directly from the address.
"""

import base58
from nacl.exceptions import BadSignatureError
from nacl.signing import VerifyKey

from sceau.domain.exceptions import InvalidAddressError, MalformedSignatureError
from sceau.domain.services.i_signature_scheme import ISignatureScheme

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64


class SolanaWalletAdapter(ISignatureScheme):
    """
    Solana wallet authentication using Ed25519 signatures.

    Wallets (Phantom, Backpack, ...) sign the UTF-8 message bytes and
    return a base58 encoded 64-byte signature.
    """

    family = "solana"

    def validate_address(self, address: str) -> bool:
        """
        Check address is base58 and decodes to a 32-byte public key.

        Args:
            address: Solana wallet address (base58)

        Returns:
            True if well-formed
        """
        if not 32 <= len(address) <= 44:
            return False
        try:
            return len(base58.b58decode(address)) == PUBLIC_KEY_LENGTH
        except ValueError:
            return False

    def derive_verifying_key(self, address: str) -> VerifyKey:
        """
        Decode wallet public key from base58.

        Raises:
            InvalidAddressError: If address is not a 32-byte key
        """
        if not self.validate_address(address):
            raise InvalidAddressError(address, self.family, "not a base58 public key")
        return VerifyKey(base58.b58decode(address))

    def decode_signature(self, signature: str) -> bytes:
        """
        Decode signature from base58.

        Raises:
            MalformedSignatureError: If not base58 or not 64 bytes
        """
        if not signature:
            raise MalformedSignatureError("empty signature")
        try:
            signature_bytes = base58.b58decode(signature)
        except ValueError as e:
            raise MalformedSignatureError("not base58") from e

        if len(signature_bytes) != SIGNATURE_LENGTH:
            raise MalformedSignatureError(
                f"expected {SIGNATURE_LENGTH} bytes, got {len(signature_bytes)}"
            )
        return signature_bytes

    def verify_signature(
        self, key: VerifyKey, message: bytes, signature: bytes
    ) -> bool:
        """
        Verify Ed25519 signature over message bytes.

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            key.verify(message, signature)
            return True
        except (BadSignatureError, ValueError):
            return False
