"""Models for the frame encoder."""

from apnframe.models.frames import FrameEncodeRequest, FrameEncodeResponse
from apnframe.models.notification import ALERT_MAX_CHARS, Notification

__all__ = [
    "ALERT_MAX_CHARS",
    "FrameEncodeRequest",
    "FrameEncodeResponse",
    "Notification",
]
