"""
Network registry - maps network identifiers to signature schemes.
"""

from typing import Dict, Iterable, List

from sceau.domain.exceptions import InvalidAddressError, UnsupportedNetworkError
from sceau.domain.services.i_signature_scheme import ISignatureScheme
from sceau.infrastructure.auth.ethereum_wallet_adapter import (
    EthereumWalletAdapter,
)
from sceau.infrastructure.auth.solana_wallet_adapter import SolanaWalletAdapter

# Network id -> scheme family
NETWORK_FAMILIES: Dict[str, str] = {
    "solana-mainnet": "solana",
    "solana-devnet": "solana",
    "solana-testnet": "solana",
    "ethereum-mainnet": "ethereum",
    "ethereum-sepolia": "ethereum",
}


class NetworkRegistry:
    """
    Selects the signature scheme for a network.

    Only networks enabled in configuration resolve; every lookup
    revalidates the client-supplied network string.
    """

    def __init__(self, supported_networks: Iterable[str]):
        """
        Initialize registry.

        Args:
            supported_networks: Network ids enabled for this deployment

        Raises:
            UnsupportedNetworkError: If a network id has no known scheme
        """
        schemes: Dict[str, ISignatureScheme] = {
            "solana": SolanaWalletAdapter(),
            "ethereum": EthereumWalletAdapter(),
        }
        self._schemes: Dict[str, ISignatureScheme] = {}
        for network in supported_networks:
            family = NETWORK_FAMILIES.get(network)
            if family is None:
                raise UnsupportedNetworkError(network)
            self._schemes[network] = schemes[family]

    @property
    def networks(self) -> List[str]:
        """Enabled network ids."""
        return sorted(self._schemes)

    def is_supported(self, network: str) -> bool:
        """Check if network is enabled."""
        return network in self._schemes

    def scheme_for(self, network: str) -> ISignatureScheme:
        """
        Get signature scheme for network.

        Raises:
            UnsupportedNetworkError: If network is not enabled
        """
        scheme = self._schemes.get(network)
        if scheme is None:
            raise UnsupportedNetworkError(network)
        return scheme

    def validate_address(self, address: str, network: str) -> ISignatureScheme:
        """
        Validate address format for network.

        Returns:
            Scheme for the network

        Raises:
            UnsupportedNetworkError: If network is not enabled
            InvalidAddressError: If address is malformed for network
        """
        scheme = self.scheme_for(network)
        if not scheme.validate_address(address):
            raise InvalidAddressError(address, network)
        return scheme
