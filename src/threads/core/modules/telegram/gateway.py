"""Telegram message sending via Bot API."""

import structlog
from telegram import Bot, InlineKeyboardButton, InlineKeyboardMarkup, Message
from telegram.constants import ParseMode
from telegram.error import TelegramError

from threads.errors import DeliveryError

logger = structlog.get_logger(__name__)


def login_keyboard(url: str) -> InlineKeyboardMarkup:
    """Single-button keyboard that opens the login page."""
    return InlineKeyboardMarkup([[InlineKeyboardButton(text="Login to Threads", url=url)]])


class TelegramGateway:
    """Sends HTML-formatted messages to Telegram chats."""

    def __init__(self, bot_token: str) -> None:
        self._bot = Bot(token=bot_token)

    async def send_message(self, chat_id: int, text: str, reply_markup: InlineKeyboardMarkup | None = None) -> Message:
        """Send a text message to a chat.

        Args:
            chat_id: Target Telegram chat ID
            text: Message text, already HTML-escaped where needed
            reply_markup: Optional inline keyboard

        Raises:
            DeliveryError: If the Bot API rejects the request
        """
        try:
            message = await self._bot.send_message(
                chat_id=chat_id, text=text, parse_mode=ParseMode.HTML, reply_markup=reply_markup
            )
        except TelegramError as e:
            logger.warning("telegram_send_failed", chat_id=chat_id, error=str(e))
            raise DeliveryError(f"Failed to send message to chat {chat_id}: {e}") from e
        logger.debug("telegram_message_sent", chat_id=chat_id)
        return message

    async def close(self) -> None:
        await self._bot.shutdown()
