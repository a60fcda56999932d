"""Application use cases."""

from sceau.application.use_cases.issue_challenge import IssueChallenge
from sceau.application.use_cases.verify_wallet_signature import (
    VerifyWalletSignature,
)

__all__ = [
    "IssueChallenge",
    "VerifyWalletSignature",
]
