"""
Authentication infrastructure package.
"""

from sceau.infrastructure.auth.ethereum_wallet_adapter import (
    EthereumWalletAdapter,
)
from sceau.infrastructure.auth.network_registry import NetworkRegistry
from sceau.infrastructure.auth.session_token_codec import SessionTokenCodec
from sceau.infrastructure.auth.solana_wallet_adapter import (
    SolanaWalletAdapter,
)

__all__ = [
    "EthereumWalletAdapter",
    "NetworkRegistry",
    "SessionTokenCodec",
    "SolanaWalletAdapter",
]
