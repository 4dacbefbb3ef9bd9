"""
HTTP middleware for the standalone server.

- CorrelationIdMiddleware: binds a request id for log records and echoes it.
- PreflightCORSMiddleware: answers every OPTIONS request directly and stamps
  the allow-origin header on every other response.
"""

from typing import Any

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from contact_relay.shared.logging import correlation_id_var, generate_correlation_id

CORRELATION_ID_HEADER = "X-Correlation-ID"
REQUEST_ID_HEADER = "X-Request-ID"

PREFLIGHT_METHODS = "POST, OPTIONS"
PREFLIGHT_HEADERS = "Content-Type"


def cors_headers(allow_origin: str = "*") -> dict[str, str]:
    """Headers returned on a preflight response."""
    return {
        "Access-Control-Allow-Origin": allow_origin,
        "Access-Control-Allow-Methods": PREFLIGHT_METHODS,
        "Access-Control-Allow-Headers": PREFLIGHT_HEADERS,
    }


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        correlation_id = (
            request.headers.get(REQUEST_ID_HEADER)
            or request.headers.get(CORRELATION_ID_HEADER)
            or generate_correlation_id()
        )
        token = correlation_id_var.set(correlation_id)
        try:
            response = await call_next(request)
        finally:
            correlation_id_var.reset(token)
        response.headers[REQUEST_ID_HEADER] = correlation_id
        return response


class PreflightCORSMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: Any, allow_origin: str = "*") -> None:
        super().__init__(app)
        self.allow_origin = allow_origin

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        if request.method == "OPTIONS":
            return Response(status_code=204, headers=cors_headers(self.allow_origin))

        response = await call_next(request)
        response.headers.setdefault("Access-Control-Allow-Origin", self.allow_origin)
        return response
