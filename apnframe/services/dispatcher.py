"""Hand encoded frames to a gateway transport."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Protocol

from apnframe.exceptions import ExceededMessageSizeError, InvalidDeviceTokenError
from apnframe.services.frame_encoder import encode_frame
from apnframe.utils.device_token import mask_token
from apnframe.utils.error_handling import log_errors

if TYPE_CHECKING:
    from apnframe.models.notification import Notification

logger = logging.getLogger(__name__)


class FrameTransport(Protocol):
    """Connection to the push gateway."""

    async def send_frame(self, frame: bytes) -> None:
        """Write one frame to the gateway."""
        ...


@dataclass(frozen=True)
class DispatchResult:
    """Outcome for a single notification."""

    token: str
    status: str
    error: str | None = None


@dataclass
class DispatchSummary:
    """Summary of a dispatch run."""

    sent: int = 0
    failed: int = 0
    oversized: int = 0
    results: list[DispatchResult] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.failed == 0 and self.oversized == 0


class PushDispatcher:
    """Encodes pending notifications and writes their frames to a transport."""

    def __init__(self, transport: FrameTransport) -> None:
        self.transport = transport

    @log_errors("send_notifications")
    async def send_notifications(
        self,
        items: Iterable[tuple[Notification, str]],
    ) -> DispatchSummary:
        """
        Encode and send each notification.

        A notification that cannot be encoded is recorded and skipped;
        it is never retried. Successfully sent notifications get their
        ``sent_at`` stamped so a caller can avoid sending them twice.

        Args:
            items: Pairs of (notification, device token)

        Returns:
            Summary of send results.
        """
        summary = DispatchSummary()

        for notification, device_token in items:
            masked = mask_token(device_token)

            try:
                encoded = encode_frame(notification, device_token)
            except ExceededMessageSizeError as e:
                summary.oversized += 1
                summary.results.append(
                    DispatchResult(token=masked, status="oversized", error=str(e))
                )
                logger.warning(
                    "Skipping oversized notification",
                    extra={"token": masked, **e.context},
                )
                continue
            except InvalidDeviceTokenError as e:
                summary.failed += 1
                summary.results.append(
                    DispatchResult(token=masked, status="invalid_token", error=str(e))
                )
                logger.warning(
                    "Skipping notification with invalid token",
                    extra={"token": masked, **e.context},
                )
                continue

            try:
                await self.transport.send_frame(encoded.frame)
            except Exception as e:
                summary.failed += 1
                summary.results.append(
                    DispatchResult(token=masked, status="failed", error=str(e))
                )
                logger.exception(
                    "Failed to send frame",
                    extra={"token": masked, "error_type": type(e).__name__},
                )
                continue

            notification.sent_at = datetime.now(UTC)
            summary.sent += 1
            summary.results.append(DispatchResult(token=masked, status="sent"))

        logger.info(
            "Dispatch completed",
            extra={
                "sent": summary.sent,
                "failed": summary.failed,
                "oversized": summary.oversized,
            },
        )

        return summary
