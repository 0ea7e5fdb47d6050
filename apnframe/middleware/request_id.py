"""
Middleware to add request ID to all requests.

Generates and propagates request IDs across async boundaries for log correlation.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from starlette.middleware.base import BaseHTTPMiddleware

from apnframe.utils.request_context import (
    bind_request_id,
    get_request_id,
    reset_request_id,
)

if TYPE_CHECKING:
    from fastapi import Request

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Middleware to track request IDs across async contexts."""

    async def dispatch(self, request: Request, call_next):  # type: ignore[no-untyped-def]
        """Process request and bind its request ID in context."""
        token = bind_request_id(request.headers.get("X-Request-ID"))
        request_id = get_request_id()

        should_log = not request.url.path.startswith("/health")

        if should_log:
            logger.info(
                "Request started",
                extra={
                    "method": request.method,
                    "path": request.url.path,
                },
            )

        try:
            response = await call_next(request)
            response.headers["X-Request-ID"] = request_id

            if should_log:
                logger.info(
                    "Request completed",
                    extra={"status_code": response.status_code},
                )

            return response
        finally:
            reset_request_id(token)
