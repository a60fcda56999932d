"""Application DTOs."""

from sceau.application.dto.auth_dto import AuthenticatedSession, IssuedChallenge

__all__ = [
    "AuthenticatedSession",
    "IssuedChallenge",
]
