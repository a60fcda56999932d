"""
Domain value objects.
"""

from sceau.domain.value_objects.wallet_address import WalletAddress

__all__ = [
    "WalletAddress",
]
