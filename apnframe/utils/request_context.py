"""
Request ID tracking for log correlation.

The middleware binds one ID per HTTP request and resets it afterwards;
RequestIDFilter reads it so every log line of a request carries the same ID.
"""

from __future__ import annotations

import contextvars
import uuid

request_id_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "apnframe_request_id",
    default=None,
)


def get_request_id() -> str | None:
    """Get current request ID from context."""
    return request_id_var.get()


def bind_request_id(request_id: str | None = None) -> contextvars.Token[str | None]:
    """
    Bind a request ID to the current context.

    Args:
        request_id: ID supplied by the client; a new one is generated when missing

    Returns:
        Token to pass to reset_request_id() once the request is done
    """
    return request_id_var.set(request_id or uuid.uuid4().hex)


def reset_request_id(token: contextvars.Token[str | None]) -> None:
    """Restore the request ID that was bound before bind_request_id()."""
    request_id_var.reset(token)
