"""
Address validator service interface.
"""

from abc import ABC, abstractmethod


class IAddressValidator(ABC):
    """
    External check that an address exists / is allowed on a network.

    Raises DependencyUnavailableError on transport failure; a negative
    answer is returned as False, not raised.
    """

    @abstractmethod
    async def is_valid(self, address: str, network: str) -> bool:
        """Ask the delegated service whether address is valid on network."""

    async def close(self) -> None:
        """Release underlying resources."""
