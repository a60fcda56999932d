"""
Challenge domain exceptions.

Raised by challenge issuance and by the challenge store. Store errors are
user-recoverable: the client requests a new challenge.
"""

from sceau.domain.exceptions.base import SceauException


class InvalidAddressError(SceauException):
    """Raised when an address is not valid for the requested network."""

    def __init__(self, address: str, network: str, reason: str = "invalid format"):
        self.address = address
        self.network = network
        message = f"Invalid address for {network}: {reason}"
        super().__init__(message, code="INVALID_ADDRESS")


class UnsupportedNetworkError(SceauException):
    """Raised when a network identifier is not enabled."""

    def __init__(self, network: str):
        self.network = network
        super().__init__(
            f"Unsupported network: {network!r}", code="UNSUPPORTED_NETWORK"
        )


class ChallengeError(SceauException):
    """Base class for challenge store failures."""


class ChallengeNotFoundError(ChallengeError):
    """Raised when no challenge exists for address, network and nonce."""

    def __init__(self):
        super().__init__("Challenge not found", code="NOT_FOUND")


class ChallengeAlreadyUsedError(ChallengeError):
    """Raised when a challenge has already been consumed."""

    def __init__(self):
        super().__init__("Challenge has already been used", code="ALREADY_USED")


class ChallengeExpiredError(ChallengeError):
    """Raised when a challenge is presented after its expiration time."""

    def __init__(self):
        super().__init__("Challenge has expired", code="EXPIRED")
