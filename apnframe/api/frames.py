"""Frame encoding API endpoints."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from apnframe.dependencies import verify_token
from apnframe.exceptions import ExceededMessageSizeError, InvalidDeviceTokenError
from apnframe.models.frames import FrameEncodeRequest, FrameEncodeResponse
from apnframe.services.frame_encoder import encode_frame
from apnframe.utils.device_token import mask_token
from apnframe.utils.error_handling import format_exception_for_response

logger = logging.getLogger(__name__)
router = APIRouter(tags=["frames"])


@router.post("/frames", response_model=FrameEncodeResponse)
async def encode_notification(
    request: FrameEncodeRequest,
    _: None = Depends(verify_token),
) -> FrameEncodeResponse:
    """
    Encode a notification into a gateway frame without sending it.

    Useful for checking how a notification will be truncated before it
    is queued for delivery.
    """
    try:
        encoded = encode_frame(request.to_notification(), request.device_token)

    except InvalidDeviceTokenError as e:
        logger.warning(
            "Rejected frame request with invalid token",
            extra={"token": mask_token(request.device_token)},
        )
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=format_exception_for_response(e),
        ) from e

    except ExceededMessageSizeError as e:
        logger.warning(
            "Notification too large for a frame",
            extra={"token": mask_token(request.device_token), **e.context},
        )
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=format_exception_for_response(e),
        ) from e

    return FrameEncodeResponse(
        frame_hex=encoded.frame.hex(),
        frame_size=encoded.size,
        payload=encoded.payload.decode("utf-8"),
        alert_truncated=encoded.alert_truncated,
    )
