import json
import logging

import requests
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from app.api.deps import get_notification_service
from app.core.config import settings
from app.core.messages import messages
from app.core.rate_limiter import limiter
from app.schemas.booking import BookingRequest
from app.services.email_service import EmailNotConfiguredError
from app.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["booking"])


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _validation_message(e: ValidationError) -> str:
    parts = []
    for err in e.errors():
        field = ".".join(str(loc) for loc in err["loc"])
        parts.append(f"{field}: {err['msg']}" if field else err["msg"])
    return "; ".join(parts)


@router.post("/booking")
@limiter.limit(settings.rate_limit_booking)
async def create_booking(
    request: Request,
    notifications: NotificationService = Depends(get_notification_service),
):
    """
    Приём заявки на бронирование. Заявка не сохраняется, владелец получает письмо.
    """
    try:
        payload = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return _error(400, "Invalid JSON body")

    try:
        booking = BookingRequest.model_validate(payload)
    except ValidationError as e:
        logger.info(f"Rejected booking request: {_validation_message(e)}")
        return _error(400, _validation_message(e))

    try:
        result = await notifications.notify_booking(booking)
    except EmailNotConfiguredError:
        logger.error("Booking request received but email service is not configured")
        return _error(500, messages.EMAIL_NOT_CONFIGURED)
    except requests.RequestException as e:
        logger.error(f"Failed to deliver booking request: {e}", exc_info=True)
        return _error(500, messages.BOOKING_FAILED)

    return result.model_dump(mode="json", by_alias=True)
