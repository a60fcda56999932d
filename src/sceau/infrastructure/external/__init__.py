"""
Clients for delegated external services.
"""

from sceau.infrastructure.external.address_validation_client import (
    AddressValidationClient,
)

__all__ = [
    "AddressValidationClient",
]
