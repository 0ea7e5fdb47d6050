"""Notification value passed to the frame encoder."""

from __future__ import annotations

import math
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from apnframe.utils.text import truncate_chars

ALERT_MAX_CHARS = 150


class Notification(BaseModel):
    """
    A single push notification.

    The alert is shortened to 150 characters (with a trailing ``...``)
    every time it is assigned, so it is already bounded before any binary
    encoding happens.

    Example:
        notification = Notification(badge=5, sound="my_sound.aiff")
        notification.alert = "Hello!"
    """

    model_config = ConfigDict(validate_assignment=True)

    alert: str | None = Field(None, description="Alert text shown to the user")
    badge: int | float | None = Field(None, description="Badge count")
    sound: bool | str | None = Field(
        None,
        description="Sound file name, or true for the default sound",
    )
    custom_properties: dict[Any, Any] | None = Field(
        None,
        description="Extra key/value pairs placed beside the aps object",
    )
    sent_at: datetime | None = Field(
        None,
        description="When the frame was handed to the transport",
    )

    @field_validator("alert", mode="after")
    @classmethod
    def truncate_alert(cls, v: str | None) -> str | None:
        """Limit the alert to 150 characters."""
        if v:
            return truncate_chars(v, ALERT_MAX_CHARS)
        return v

    @field_validator("badge", mode="after")
    @classmethod
    def validate_badge(cls, v: int | float | None) -> int | float | None:
        """Reject negative and non-finite badge counts."""
        if v is None:
            return v
        if isinstance(v, float) and not math.isfinite(v):
            msg = "badge must be a finite number"
            raise ValueError(msg)
        if v < 0:
            msg = "badge must be non-negative"
            raise ValueError(msg)
        return v
