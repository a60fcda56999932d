"""
Global error handling middleware.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse

from sceau.domain.exceptions import SceauException
from sceau.infrastructure.monitoring import get_logger

logger = get_logger(__name__)

STATUS_CODE_MAP = {
    # Challenge issuance
    "INVALID_ADDRESS": status.HTTP_400_BAD_REQUEST,
    "UNSUPPORTED_NETWORK": status.HTTP_400_BAD_REQUEST,
    # Challenge store
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "ALREADY_USED": status.HTTP_409_CONFLICT,
    "EXPIRED": status.HTTP_410_GONE,
    # Verification
    "MALFORMED_MESSAGE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "MALFORMED_SIGNATURE": status.HTTP_422_UNPROCESSABLE_ENTITY,
    "TAMPERED_MESSAGE": status.HTTP_401_UNAUTHORIZED,
    "INVALID_SIGNATURE": status.HTTP_401_UNAUTHORIZED,
    # Session token
    "TOKEN_CORRUPT": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "TOKEN_REVOKED": status.HTTP_401_UNAUTHORIZED,
    # Dependencies
    "DEPENDENCY_UNAVAILABLE": status.HTTP_503_SERVICE_UNAVAILABLE,
    "NONCE_EXHAUSTED": status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def sceau_exception_handler(request: Request, exc: SceauException) -> JSONResponse:
    """
    Handle Sceau domain exceptions.

    Converts domain exceptions to HTTP responses carrying the error code,
    so clients can tell "sign again" from "reconnect wallet".
    """
    status_code = STATUS_CODE_MAP.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)

    if status_code >= 500:
        logger.error(
            "Request failed",
            extra={"code": exc.code, "path": request.url.path},
        )

    return JSONResponse(
        status_code=status_code,
        content={
            "error": exc.code,
            "message": exc.message,
        },
    )
