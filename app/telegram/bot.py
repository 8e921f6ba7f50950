from typing import Optional

from aiogram import Bot
from aiogram.client.default import DefaultBotProperties
from aiogram.enums import ParseMode

from app.core.config import settings

# Created on first use: the Telegram copy of booking requests is optional
_bot: Optional[Bot] = None


def get_bot() -> Optional[Bot]:
    """Shared bot instance, or None when TELEGRAM_BOT_TOKEN / TELEGRAM_CHAT_ID are not set."""
    global _bot
    if not settings.telegram_bot_token or not settings.telegram_chat_id:
        return None
    if _bot is None:
        _bot = Bot(
            token=settings.telegram_bot_token,
            default=DefaultBotProperties(parse_mode=ParseMode.HTML),
        )
    return _bot


async def close_bot() -> None:
    global _bot
    if _bot is not None:
        await _bot.session.close()
        _bot = None
