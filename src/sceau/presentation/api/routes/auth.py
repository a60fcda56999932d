"""
Authentication API routes.

Domain errors propagate to the global exception handler, which maps each
error code to its HTTP status. Only the session endpoint converts token
errors into an unauthenticated answer.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status

from sceau.application.session_lifecycle import SessionLifecycle
from sceau.config.settings import Settings
from sceau.di.dependencies import get_app_settings, get_session_lifecycle
from sceau.domain.exceptions import TokenError
from sceau.presentation.schemas.auth_schemas import (
    ChallengeRequest,
    ChallengeResponse,
    LogoutResponse,
    SessionResponse,
    VerifyRequest,
    VerifyResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def presented_token(request: Request, settings: Settings) -> Optional[str]:
    """Bearer token from Authorization header, else the session cookie."""
    authorization = request.headers.get("Authorization", "")
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return request.cookies.get(settings.SESSION_COOKIE_NAME)


def _clear_cookie(response: Response, settings: Settings) -> None:
    response.delete_cookie(
        key=settings.SESSION_COOKIE_NAME,
        path="/",
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )


# ================================================================
# Challenge Endpoint
# ================================================================


@router.post(
    "/challenge",
    response_model=ChallengeResponse,
    status_code=status.HTTP_200_OK,
    summary="Request sign-in challenge",
    description="Issue a single-use, time-bound message for the wallet to sign",
)
async def request_challenge(
    request: ChallengeRequest,
    lifecycle: SessionLifecycle = Depends(get_session_lifecycle),
) -> ChallengeResponse:
    """
    Issue a challenge.

    Errors: INVALID_ADDRESS, UNSUPPORTED_NETWORK, DEPENDENCY_UNAVAILABLE.
    """
    issued = await lifecycle.request_challenge(
        address=request.address, network=request.network
    )
    return ChallengeResponse(
        message=issued.message,
        nonce=issued.nonce,
        expiration_time=issued.expiration_time,
    )


# ================================================================
# Verify Endpoint
# ================================================================


@router.post(
    "/verify",
    response_model=VerifyResponse,
    status_code=status.HTTP_200_OK,
    summary="Verify signed challenge",
    description="Verify wallet signature and open a session",
)
async def verify(
    request: VerifyRequest,
    response: Response,
    lifecycle: SessionLifecycle = Depends(get_session_lifecycle),
    settings: Settings = Depends(get_app_settings),
) -> VerifyResponse:
    """
    Verify signature and issue the session credential.

    Flow:
    1. Verify signature against the stored challenge (nonce consumed)
    2. Encrypt identity into a session token
    3. Set token as HttpOnly cookie and return it for bearer use

    No credential is issued on any error.
    """
    session = await lifecycle.authenticate(
        message=request.message,
        signature=request.signature,
        network=request.network,
        address=request.address,
    )

    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=session.token,
        max_age=settings.SESSION_TTL_SECONDS,
        path="/",
        secure=settings.SESSION_COOKIE_SECURE,
        httponly=True,
        samesite="lax",
    )

    identity = session.identity
    return VerifyResponse(
        address=identity.address,
        network=identity.network,
        profile_id=identity.profile_id,
        expiration_time=identity.expiration_time,
        access_token=session.token,
        token_expires_at=session.token_expires_at,
    )


# ================================================================
# Session Endpoint
# ================================================================


@router.get(
    "/session",
    response_model=SessionResponse,
    status_code=status.HTTP_200_OK,
    summary="Current session",
    description="Decode the presented credential",
)
async def current_session(
    request: Request,
    response: Response,
    lifecycle: SessionLifecycle = Depends(get_session_lifecycle),
    settings: Settings = Depends(get_app_settings),
) -> SessionResponse:
    """Return decoded claims, or authenticated=false."""
    token = presented_token(request, settings)
    if not token:
        return SessionResponse(authenticated=False)

    try:
        claims = await lifecycle.current_session(token)
    except TokenError:
        if request.cookies.get(settings.SESSION_COOKIE_NAME):
            _clear_cookie(response, settings)
        return SessionResponse(authenticated=False)

    identity = claims.identity
    return SessionResponse(
        authenticated=True,
        address=identity.address,
        network=identity.network,
        profile_id=identity.profile_id,
        expiration_time=identity.expiration_time,
        token_expires_at=claims.expires_at,
    )


# ================================================================
# Logout Endpoint
# ================================================================


@router.post(
    "/logout",
    response_model=LogoutResponse,
    status_code=status.HTTP_200_OK,
    summary="Logout",
    description="Clear the session cookie (and revoke the token if enabled)",
)
async def logout(
    request: Request,
    response: Response,
    lifecycle: SessionLifecycle = Depends(get_session_lifecycle),
    settings: Settings = Depends(get_app_settings),
) -> LogoutResponse:
    """Clear the client-held credential."""
    revoked = await lifecycle.logout(presented_token(request, settings))
    _clear_cookie(response, settings)
    return LogoutResponse(logged_out=True, revoked=revoked)
