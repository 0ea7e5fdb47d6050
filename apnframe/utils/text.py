"""
Text truncation helpers for notification alerts.

Two limits apply to an alert: a character limit enforced when the alert is
assigned, and a byte limit enforced when the frame is too large for the
gateway. Byte truncation never leaves a partial UTF-8 sequence behind.
"""

from __future__ import annotations

from collections.abc import Callable

ELLIPSIS = "..."


def truncate_chars(text: str, length: int, omission: str = ELLIPSIS) -> str:
    """
    Truncate text to at most ``length`` characters, ending with ``omission``.

    Text that already fits is returned unchanged.

    Args:
        text: Text to truncate
        length: Maximum number of characters in the result
        omission: Suffix appended when truncation happens

    Returns:
        Original text, or its first ``length - len(omission)`` characters
        followed by ``omission``
    """
    if len(text) <= length:
        return text
    keep = max(length - len(omission), 0)
    return f"{text[:keep]}{omission}"


def truncate_bytes(
    text: str,
    max_bytes: int,
    omission: str = ELLIPSIS,
    measure: Callable[[str], int] | None = None,
) -> str:
    """
    Truncate text so that it plus ``omission`` fits in ``max_bytes`` bytes.

    The cut always falls on a character boundary. When not a single
    character fits, only ``omission`` is returned.

    Args:
        text: Text to truncate
        max_bytes: Byte budget for the result including ``omission``
        omission: Suffix always appended to the result
        measure: Size function for the result; defaults to its UTF-8 length.
            Must never report less than the UTF-8 length.

    Returns:
        Shortened text ending with ``omission``
    """
    measure = measure or utf8_length
    budget = max_bytes - measure(omission)
    if budget <= 0:
        return omission

    # A slice of valid UTF-8 can only be broken at its tail; "ignore" drops
    # the partial character there and nothing else.
    head = text.encode("utf-8")[:budget].decode("utf-8", errors="ignore")
    while head and measure(f"{head}{omission}") > max_bytes:
        head = head[:-1]
    return f"{head}{omission}"


def utf8_length(text: str) -> int:
    """Return the UTF-8 encoded length of text."""
    return len(text.encode("utf-8"))
