"""
Signature verification exceptions.

Every verification failure is terminal for the attempt: the nonce is
already consumed and the client must request a new challenge.
"""

from sceau.domain.exceptions.base import SceauException


class VerificationError(SceauException):
    """Base class for signature verification failures."""


class MalformedMessageError(VerificationError):
    """Raised when a message does not follow the challenge grammar."""

    def __init__(self, reason: str = "unparseable message"):
        self.reason = reason
        super().__init__(f"Malformed message: {reason}", code="MALFORMED_MESSAGE")


class TamperedMessageError(VerificationError):
    """Raised when a message differs from the stored challenge rendering."""

    def __init__(self):
        super().__init__(
            "Message does not match the issued challenge",
            code="TAMPERED_MESSAGE",
        )


class MalformedSignatureError(VerificationError):
    """Raised when a signature cannot be decoded from its wire encoding."""

    def __init__(self, reason: str = "undecodable signature"):
        self.reason = reason
        super().__init__(
            f"Malformed signature: {reason}", code="MALFORMED_SIGNATURE"
        )


class InvalidSignatureError(VerificationError):
    """Raised when a wallet signature does not verify."""

    def __init__(self):
        super().__init__("Invalid wallet signature", code="INVALID_SIGNATURE")
