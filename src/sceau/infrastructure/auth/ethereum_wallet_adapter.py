"""
Ethereum wallet signature scheme.

EVM addresses are a hash of the public key, so the key cannot be decoded
from the address. Verification recovers the signer from an EIP-191
personal-message signature and compares it with the claimed address.
"""

import re

from eth_account import Account
from eth_account.messages import encode_defunct
from eth_keys.exceptions import BadSignature, ValidationError
from eth_utils import to_checksum_address

from sceau.domain.exceptions import InvalidAddressError, MalformedSignatureError
from sceau.domain.services.i_signature_scheme import ISignatureScheme

ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
SIGNATURE_LENGTH = 65

# Recovery id byte; EIP-155 style values alias these and are refused
RECOVERY_IDS = (0, 1, 27, 28)


class EthereumWalletAdapter(ISignatureScheme):
    """
    Ethereum wallet authentication using secp256k1 recovery.

    Wallets (MetaMask, ...) sign with personal_sign and return a 0x-hex
    65-byte signature (r || s || v).
    """

    family = "ethereum"

    def validate_address(self, address: str) -> bool:
        """Check 0x-prefixed 20-byte hex address."""
        return bool(ADDRESS_PATTERN.match(address))

    def normalize_address(self, address: str) -> str:
        """EIP-55 checksum form; malformed input is returned untouched."""
        if not self.validate_address(address):
            return address
        return to_checksum_address(address)

    def derive_verifying_key(self, address: str) -> str:
        """
        Normalise address to its EIP-55 checksum form.

        The checksummed address is the comparison target for recovery.

        Raises:
            InvalidAddressError: If address is not 20-byte hex
        """
        if not self.validate_address(address):
            raise InvalidAddressError(address, self.family, "not a 0x hex address")
        return to_checksum_address(address)

    def decode_signature(self, signature: str) -> bytes:
        """
        Decode 0x-prefixed hex signature.

        Raises:
            MalformedSignatureError: If not hex or not 65 bytes
        """
        if not signature:
            raise MalformedSignatureError("empty signature")
        hex_part = signature[2:] if signature.startswith("0x") else signature
        try:
            signature_bytes = bytes.fromhex(hex_part)
        except ValueError as e:
            raise MalformedSignatureError("not hex") from e

        if len(signature_bytes) != SIGNATURE_LENGTH:
            raise MalformedSignatureError(
                f"expected {SIGNATURE_LENGTH} bytes, got {len(signature_bytes)}"
            )
        if signature_bytes[-1] not in RECOVERY_IDS:
            raise MalformedSignatureError("invalid recovery id")
        return signature_bytes

    def verify_signature(self, key: str, message: bytes, signature: bytes) -> bool:
        """
        Recover signer of the personal message and compare with key.

        Returns:
            True if the recovered address equals the expected address
        """
        if len(signature) != SIGNATURE_LENGTH or signature[-1] not in RECOVERY_IDS:
            return False
        try:
            recovered = Account.recover_message(
                encode_defunct(primitive=message), signature=signature
            )
        except (BadSignature, ValidationError, ValueError, TypeError):
            return False
        return recovered == key
