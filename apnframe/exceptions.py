"""
Custom exception classes with context for the frame encoder.

All exceptions inherit from APNFrameError and support attaching
contextual information for structured logging.
"""

from __future__ import annotations


class APNFrameError(Exception):
    """
    Base exception for the frame encoder.

    Attributes:
        message: Human-readable error message
        context: Optional dictionary with additional context for logging/debugging
    """

    def __init__(self, message: str, context: dict[str, object] | None = None):
        """
        Initialize exception with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dictionary with contextual information
        """
        super().__init__(message)
        self.context = context or {}


class ExceededMessageSizeError(APNFrameError):
    """
    Encoded frame is larger than the gateway allows.

    Raised when the frame is still over the ceiling after the alert has
    been truncated, or when there is no alert to truncate. The attempted
    frame is kept on ``frame`` for diagnostics. Not retriable.

    Example:
        raise ExceededMessageSizeError(
            frame,
            max_frame_size=256,
        )
    """

    def __init__(self, frame: bytes, max_frame_size: int = 256):
        super().__init__(
            f"Frame of {len(frame)} bytes exceeds the {max_frame_size} byte limit",
            context={
                "frame_size": len(frame),
                "max_frame_size": max_frame_size,
            },
        )
        self.frame = frame


class InvalidDeviceTokenError(APNFrameError):
    """
    Device token is not 32 bytes of hex once delimiters are stripped.

    Example:
        raise InvalidDeviceTokenError(
            "Device token must be 64 hex characters",
            context={"length": 12}
        )
    """


class PayloadLengthError(APNFrameError):
    """
    Payload cannot be described by the 16-bit payload length field.

    Example:
        raise PayloadLengthError(
            "Payload too long for frame length field",
            context={"payload_size": 70000, "max_payload_size": 65535}
        )
    """


class ConfigurationError(APNFrameError):
    """
    Configuration error.

    Raised when configuration loading, validation, or parsing fails.

    Example:
        raise ConfigurationError(
            "Invalid YAML in config.yaml",
            context={"config_file": "/app/config.yaml"}
        )
    """
