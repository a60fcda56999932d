"""
WalletAddress value object - Immutable (address, network) pair.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class WalletAddress:
    """
    Value object identifying a wallet on one network.

    Business rules:
    - Address and network are non-empty, whitespace-free strings
    - Network-specific encoding is checked by the network's scheme
    - Immutable once created; hashable, usable as a store key
    """

    address: str
    network: str

    def __post_init__(self):
        """Validate wallet address on creation."""
        if not self.address:
            raise ValueError("Wallet address cannot be empty")

        if not self.network:
            raise ValueError("Network cannot be empty")

        if any(ch.isspace() for ch in self.address + self.network):
            raise ValueError("Wallet address contains whitespace")

    def truncated(self) -> str:
        """Return truncated address for display (e.g., 'ABC123...WXYZ')."""
        if len(self.address) <= 12:
            return self.address
        return f"{self.address[:6]}...{self.address[-4:]}"

    def key(self) -> str:
        """Stable string key (network:address)."""
        return f"{self.network}:{self.address}"

    def __str__(self) -> str:
        """String representation for logs (truncated)."""
        return f"{self.truncated()}@{self.network}"
