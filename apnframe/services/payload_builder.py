"""Build and serialize the JSON payload carried inside a frame."""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from apnframe.models.notification import Notification

logger = logging.getLogger(__name__)

DEFAULT_SOUND = "1.aiff"
RESERVED_KEY = "aps"


def stringify(value: Any) -> str:
    """
    Convert a custom property value to its payload string.

    Never raises: booleans render as ``true``/``false``, ``None`` as an
    empty string, anything else through ``str()``.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_fields(notification: Notification) -> dict[str, Any]:
    """
    Create the dict that becomes the payload of a notification.

    Only fields that are set end up in ``aps``, in the order alert, badge,
    sound. Custom properties become top-level siblings of ``aps`` with
    their values stringified. A custom property named ``aps`` is dropped
    so it can never replace the notification fields.

    Args:
        notification: Notification to convert

    Returns:
        Ordered payload fields

    Example:
        >>> build_fields(Notification(badge=0, sound=True, custom_properties={"typ": 1}))
        {'aps': {'badge': 0, 'sound': '1.aiff'}, 'typ': '1'}
    """
    aps: dict[str, Any] = {}

    if notification.alert:
        aps["alert"] = notification.alert

    if notification.badge is not None:
        aps["badge"] = int(notification.badge)

    sound = notification.sound
    if sound is True:
        aps["sound"] = DEFAULT_SOUND
    elif isinstance(sound, str):
        aps["sound"] = sound

    fields: dict[str, Any] = {"aps": aps}

    if notification.custom_properties:
        for key, value in notification.custom_properties.items():
            name = stringify(key)
            if name == RESERVED_KEY:
                logger.warning(
                    "Dropped custom property with reserved key",
                    extra={"key": name},
                )
                continue
            fields[name] = stringify(value)

    return fields


def with_blank_alert(fields: dict[str, Any]) -> dict[str, Any]:
    """Return a copy of ``fields`` whose alert is an empty string."""
    blanked = dict(fields)
    blanked["aps"] = {**fields["aps"], "alert": ""}
    return blanked


def with_alert(fields: dict[str, Any], alert: str) -> dict[str, Any]:
    """Return a copy of ``fields`` carrying a replacement alert."""
    replaced = dict(fields)
    replaced["aps"] = {**fields["aps"], "alert": alert}
    return replaced


def serialize(fields: dict[str, Any]) -> bytes:
    """
    Serialize payload fields to compact UTF-8 JSON.

    Keys keep insertion order and non-ASCII text is written as UTF-8
    rather than escaped, so the byte length is what the gateway sees.
    """
    return json.dumps(fields, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def json_text_length(text: str) -> int:
    """Return the byte length of text once written as a JSON string, minus quotes."""
    return len(json.dumps(text, ensure_ascii=False).encode("utf-8")) - 2
