"""Request/response models for the frame API."""

from typing import Any

from pydantic import BaseModel, Field

from apnframe.models.notification import Notification


class FrameEncodeRequest(BaseModel):
    """Frame encode request."""

    device_token: str = Field(
        ...,
        description="Device token (64 hex characters, optionally wrapped in <...>)",
    )
    alert: str | None = Field(None, description="Alert text")
    badge: int | None = Field(None, ge=0, description="Badge count (optional)")
    sound: bool | str | None = Field(
        None,
        description="Sound file name, or true for the default sound",
    )
    custom_properties: dict[str, Any] | None = Field(
        None,
        description="Custom data placed beside the aps object",
    )

    def to_notification(self) -> Notification:
        """Build the notification value for the encoder."""
        return Notification(
            alert=self.alert,
            badge=self.badge,
            sound=self.sound,
            custom_properties=self.custom_properties,
        )


class FrameEncodeResponse(BaseModel):
    """Frame encode response."""

    frame_hex: str = Field(..., description="Encoded frame as hex")
    frame_size: int = Field(..., description="Frame size in bytes")
    payload: str = Field(..., description="JSON payload carried by the frame")
    alert_truncated: bool = Field(
        ...,
        description="Whether the alert was shortened to fit the frame",
    )
