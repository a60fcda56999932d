"""
Authentication API schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

# ================================================================
# Challenge Schemas
# ================================================================


class ChallengeRequest(BaseModel):
    """Request a sign-in challenge for a wallet."""

    address: str = Field(
        ...,
        min_length=1,
        max_length=128,
        description="Wallet address in the network's native encoding",
    )
    network: str = Field(
        ...,
        min_length=1,
        max_length=64,
        description="Network identifier (e.g. solana-devnet)",
    )


class ChallengeResponse(BaseModel):
    """Challenge message to be signed by the wallet."""

    message: str = Field(..., description="Message to sign, byte for byte")
    nonce: str = Field(..., description="Single-use challenge nonce")
    expiration_time: datetime = Field(..., description="Challenge deadline (UTC)")


# ================================================================
# Verify Schemas
# ================================================================


class VerifyRequest(BaseModel):
    """Signed challenge returned by the wallet."""

    message: str = Field(
        ..., min_length=1, max_length=4096, description="Message exactly as signed"
    )
    signature: str = Field(
        ...,
        min_length=1,
        max_length=512,
        description="Signature (base58 for Solana, 0x-hex for Ethereum)",
    )
    network: str = Field(..., min_length=1, max_length=64)
    address: Optional[str] = Field(
        None,
        max_length=128,
        description="Claimed address (defaults to the address in message)",
    )


class VerifyResponse(BaseModel):
    """Verified identity plus the session credential."""

    address: str
    network: str
    profile_id: str
    expiration_time: datetime = Field(
        ..., description="Expiration time of the signed challenge"
    )
    access_token: str = Field(..., description="Encrypted session token")
    token_type: str = Field(default="bearer")
    token_expires_at: datetime


# ================================================================
# Session Schemas
# ================================================================


class SessionResponse(BaseModel):
    """Decoded session claims, or authenticated=false."""

    authenticated: bool
    address: Optional[str] = None
    network: Optional[str] = None
    profile_id: Optional[str] = None
    expiration_time: Optional[datetime] = None
    token_expires_at: Optional[datetime] = None


class LogoutResponse(BaseModel):
    """Logout acknowledgement."""

    logged_out: bool = True
    revoked: bool = Field(
        default=False, description="Token was added to the server denylist"
    )
