"""
Session token exceptions.

Callers treat every TokenError as "not authenticated".
"""

from sceau.domain.exceptions.base import SceauException


class TokenError(SceauException):
    """Base class for session token failures."""


class TokenCorruptError(TokenError):
    """Raised when a token fails decryption or carries invalid claims."""

    def __init__(self):
        super().__init__("Invalid session token", code="TOKEN_CORRUPT")


class TokenExpiredError(TokenError):
    """Raised when a session token is past its own expiration."""

    def __init__(self):
        super().__init__("Session token has expired", code="TOKEN_EXPIRED")


class TokenRevokedError(TokenError):
    """Raised when a session token was revoked before expiry."""

    def __init__(self):
        super().__init__("Session token has been revoked", code="TOKEN_REVOKED")
