"""
Request ID middleware for request tracking.
"""

import re
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from sceau.infrastructure.monitoring.logger import request_id_ctx

REQUEST_ID_HEADER = "X-Request-ID"

# Client ids end up in every log line of the request
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._:\-]{1,128}$")


def incoming_request_id(request: Request) -> str | None:
    """Caller-supplied request id, or None when absent or unusable."""
    value = request.headers.get(REQUEST_ID_HEADER)
    if value and _ACCEPTED_REQUEST_ID.match(value):
        return value
    return None


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Echo (or mint) X-Request-ID and bind it to the logging context.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = incoming_request_id(request) or str(uuid4())
        token = request_id_ctx.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_ctx.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
