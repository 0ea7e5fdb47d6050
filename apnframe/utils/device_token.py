"""Device token normalization and decoding."""

from __future__ import annotations

import binascii
import re

from apnframe.exceptions import InvalidDeviceTokenError

TOKEN_BYTES = 32

_DELIMITERS = re.compile(r"[<\s>]")
_TOKEN_FORMAT = re.compile(r"^[0-9a-fA-F]{64}$")


def normalize_token(token: str) -> str:
    """
    Strip angle brackets and whitespace from a device token.

    Some device APIs describe tokens as ``<abc123 def456 ...>``; the
    gateway only wants the hex digits.

    Args:
        token: Raw device token string

    Returns:
        Token with ``<``, ``>`` and whitespace removed
    """
    return _DELIMITERS.sub("", token)


def validate_token_format(token: str) -> bool:
    """
    Validate a normalized device token.

    Args:
        token: Device token to validate

    Returns:
        True if token is 64 hexadecimal characters, False otherwise
    """
    return bool(_TOKEN_FORMAT.match(token))


def token_to_bytes(token: str) -> bytes:
    """
    Normalize a device token and decode it to its raw 32 bytes.

    Args:
        token: Raw device token string

    Returns:
        Raw token bytes

    Raises:
        InvalidDeviceTokenError: If the normalized token is not 64 hex digits
    """
    normalized = normalize_token(token)
    if not validate_token_format(normalized):
        msg = f"Device token must be {TOKEN_BYTES * 2} hex characters"
        raise InvalidDeviceTokenError(
            msg,
            context={"length": len(normalized), "token": mask_token(normalized)},
        )
    return binascii.unhexlify(normalized)


def mask_token(token: str) -> str:
    """Return a log-safe form of a token showing only its last 6 characters."""
    return f"...{normalize_token(token)[-6:]}"
