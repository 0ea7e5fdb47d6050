"""Binary frame encoder for the legacy push gateway protocol."""

from __future__ import annotations

import logging
import struct
from dataclasses import dataclass
from typing import TYPE_CHECKING

from apnframe.exceptions import ExceededMessageSizeError, PayloadLengthError
from apnframe.services.payload_builder import (
    build_fields,
    json_text_length,
    serialize,
    with_alert,
    with_blank_alert,
)
from apnframe.utils.device_token import mask_token, token_to_bytes
from apnframe.utils.text import truncate_bytes

if TYPE_CHECKING:
    from apnframe.models.notification import Notification

logger = logging.getLogger(__name__)

COMMAND = 0
MAX_FRAME_SIZE = 256

# |COMMAND|TOKEN-LEN:2|{token:32}|PAYLOAD-LEN:2|{payload}
# Both lengths are big-endian, so for any payload under 256 bytes the
# high byte is 0 and the low byte carries the length.
_HEADER = struct.Struct("!BH32sH")
HEADER_SIZE = _HEADER.size
MAX_PAYLOAD_FIELD = 0xFFFF


@dataclass(frozen=True)
class EncodedFrame:
    """A frame ready for the gateway plus what went into it."""

    frame: bytes
    payload: bytes
    alert_truncated: bool

    @property
    def size(self) -> int:
        return len(self.frame)


def assemble_frame(token: bytes, payload: bytes) -> bytes:
    """
    Pack header, raw token and payload into a single frame.

    Args:
        token: Raw 32-byte device token
        payload: Serialized JSON payload

    Returns:
        Frame bytes

    Raises:
        PayloadLengthError: If the payload does not fit the length field
    """
    if len(payload) > MAX_PAYLOAD_FIELD:
        msg = "Payload too long for frame length field"
        raise PayloadLengthError(
            msg,
            context={"payload_size": len(payload), "max_payload_size": MAX_PAYLOAD_FIELD},
        )
    return _HEADER.pack(COMMAND, len(token), token, len(payload)) + payload


def encode_frame(notification: Notification, device_token: str) -> EncodedFrame:
    """
    Encode a notification into a frame no larger than 256 bytes.

    When the first encoding is too large and the notification has an
    alert, the alert is cut down to the room left by an otherwise
    identical payload with an empty alert (measured as escaped JSON text),
    and the frame is rebuilt once.

    Args:
        notification: Notification to encode
        device_token: Device token, hex with optional ``<``, ``>`` and spaces

    Returns:
        EncodedFrame for the notification

    Raises:
        InvalidDeviceTokenError: If the token is not 32 bytes of hex
        ExceededMessageSizeError: If the frame cannot be made to fit
    """
    token = token_to_bytes(device_token)
    fields = build_fields(notification)
    payload = serialize(fields)
    frame = assemble_frame(token, payload)

    if len(frame) <= MAX_FRAME_SIZE:
        logger.debug(
            "Frame encoded",
            extra={"token": mask_token(device_token), "frame_size": len(frame)},
        )
        return EncodedFrame(frame=frame, payload=payload, alert_truncated=False)

    if not notification.alert:
        logger.warning(
            "Frame exceeds size limit and has no alert to truncate",
            extra={"token": mask_token(device_token), "frame_size": len(frame)},
        )
        raise ExceededMessageSizeError(frame, MAX_FRAME_SIZE)

    baseline = assemble_frame(token, serialize(with_blank_alert(fields)))
    allowed = (MAX_FRAME_SIZE - 1) - len(baseline)
    alert = truncate_bytes(notification.alert, allowed, measure=json_text_length)

    payload = serialize(with_alert(fields, alert))
    frame = assemble_frame(token, payload)

    if len(frame) > MAX_FRAME_SIZE:
        logger.warning(
            "Frame exceeds size limit after alert truncation",
            extra={
                "token": mask_token(device_token),
                "frame_size": len(frame),
                "baseline_size": len(baseline),
            },
        )
        raise ExceededMessageSizeError(frame, MAX_FRAME_SIZE)

    logger.info(
        "Alert truncated to fit frame",
        extra={
            "token": mask_token(device_token),
            "frame_size": len(frame),
            "alert_bytes": allowed,
        },
    )
    return EncodedFrame(frame=frame, payload=payload, alert_truncated=True)


def encode(notification: Notification, device_token: str) -> bytes:
    """Encode a notification and return only the frame bytes."""
    return encode_frame(notification, device_token).frame
