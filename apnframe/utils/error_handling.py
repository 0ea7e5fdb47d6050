"""
Error handling utilities for the frame encoder.

Provides a logging decorator and API error formatting.
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any, TypeVar

from apnframe.exceptions import APNFrameError

logger = logging.getLogger(__name__)

T = TypeVar("T")


def log_errors(operation_name: str) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator to log errors with context.

    Exceptions are logged with the operation name, the function name and,
    for APNFrameError, the error's context. The exception is re-raised
    after logging.

    Args:
        operation_name: Name of the operation for logging context

    Returns:
        Decorated function that logs errors before re-raising

    Example:
        @log_errors("encode_frame")
        def encode_preview(request: FrameEncodeRequest) -> EncodedFrame:
            return encode_frame(request.to_notification(), request.device_token)
    """

    def _log(func: Callable[..., Any], e: Exception) -> None:
        context = e.context if isinstance(e, APNFrameError) else {}
        logger.exception(
            f"Error in {operation_name}",
            extra={
                "operation": operation_name,
                "error_type": type(e).__name__,
                "function": func.__name__,
                **context,
            },
        )

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        async def async_wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except Exception as e:
                _log(func, e)
                raise

        @wraps(func)
        def sync_wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except Exception as e:
                _log(func, e)
                raise

        if inspect.iscoroutinefunction(func):
            return async_wrapper  # type: ignore[return-value]
        return sync_wrapper  # type: ignore[return-value]

    return decorator


def format_exception_for_response(e: Exception) -> dict[str, object]:
    """
    Format exception for API error response.

    Args:
        e: Exception to format

    Returns:
        Dictionary with error details suitable for API response

    Example:
        try:
            encode_frame(notification, token)
        except ExceededMessageSizeError as e:
            raise HTTPException(
                status_code=413,
                detail=format_exception_for_response(e)
            )
    """
    error_dict: dict[str, object] = {
        "error": type(e).__name__,
        "message": str(e),
    }

    if isinstance(e, APNFrameError) and e.context:
        error_dict["context"] = e.context

    return error_dict
