"""Request context middleware for tracing."""

import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from loanflow.domain.entities import RequestMetadata
from loanflow.domain.entities.actor import UNKNOWN

# Context variable for request ID
request_id_var: ContextVar[Optional[str]] = ContextVar("request_id", default=None)


def get_request_id() -> Optional[str]:
    """Get the current request ID from context."""
    return request_id_var.get()


def get_request_metadata(request: Request) -> RequestMetadata:
    """
    Requester IP and user agent for the audit trail.

    The IP is the first X-Forwarded-For hop, then X-Real-IP, else "unknown".
    """
    forwarded = request.headers.get("x-forwarded-for")
    ip_address = forwarded.split(",")[0].strip() if forwarded else ""
    if not ip_address:
        ip_address = (request.headers.get("x-real-ip") or "").strip() or UNKNOWN

    return RequestMetadata(
        ip_address=ip_address,
        user_agent=request.headers.get("user-agent") or UNKNOWN,
    )


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Middleware that sets up request context.

    Generates or extracts a request ID for tracing and adds it to
    the response headers.
    """

    HEADER_NAME = "X-Request-ID"

    async def dispatch(self, request: Request, call_next):
        """Process request and set up context."""
        request_id = request.headers.get(self.HEADER_NAME) or str(uuid.uuid4())
        token = request_id_var.set(request_id)

        try:
            response = await call_next(request)
            response.headers[self.HEADER_NAME] = request_id
            return response
        finally:
            request_id_var.reset(token)
