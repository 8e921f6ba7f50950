"""
Уведомления о заявках на бронирование: письмо владельцу + копия в Telegram.
"""
import asyncio
import datetime
import logging
from typing import Optional

from app.core.config import settings
from app.core.messages import messages
from app.schemas.booking import (
    BookedRoomOut,
    BookingRequest,
    BookingResponse,
    BookingResponseData,
    GuestsOut,
)
from app.services.email_service import EmailNotConfiguredError, EmailService
from app.telegram.bot import get_bot

logger = logging.getLogger(__name__)


class NotificationService:
    """Delivers a booking request to the owner. Nothing is stored."""

    def __init__(
        self,
        email: Optional[EmailService] = None,
        receiver: Optional[str] = None,
        chat_id: Optional[int] = None,
    ):
        self.email = email if email is not None else EmailService()
        self.receiver = settings.receiver_email if receiver is None else receiver
        self.chat_id = settings.telegram_chat_id if chat_id is None else chat_id

    async def notify_booking(self, request: BookingRequest) -> BookingResponse:
        """
        Отправка заявки владельцу.

        Raises:
            EmailNotConfiguredError: no Resend key or receiver address
            requests.RequestException: delivery failed
        """
        if not self.email.is_configured or not self.receiver:
            raise EmailNotConfiguredError(messages.EMAIL_NOT_CONFIGURED)

        received_at = datetime.datetime.now()
        message_id = await asyncio.to_thread(
            self.email.send,
            [self.receiver],
            messages.booking_email_subject(request.name),
            messages.booking_email_html(request, received_at),
        )
        logger.info(
            f"Booking request from {request.name}: "
            f"{request.start_date} - {request.end_date}, {request.nights} nights"
        )

        await self._send_telegram(request)

        room = None
        if request.room_name and request.room_number:
            room = BookedRoomOut(name=request.room_name, number=request.room_number)

        return BookingResponse(
            success=True,
            message=messages.BOOKING_SUBMITTED,
            data=BookingResponseData(
                booking_id=message_id,
                guest_name=request.name,
                check_in=request.start_date,
                check_out=request.end_date,
                nights=request.nights,
                room=room,
                guests=GuestsOut(
                    adults=request.adults,
                    children=request.children,
                    pets=request.pets,
                    total=request.guests_total,
                ),
            ),
        )

    async def _send_telegram(self, request: BookingRequest) -> None:
        bot = get_bot()
        if bot is None:
            return
        try:
            await bot.send_message(chat_id=self.chat_id, text=messages.booking_telegram(request))
        except Exception as e:
            # Email already went out, Telegram copy is optional
            logger.error(f"Failed to send Telegram notification: {e}", exc_info=True)
