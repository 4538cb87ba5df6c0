import secrets
from typing import Any

import structlog
from pydantic import ValidationError as PydanticValidationError
from pymongo.errors import PyMongoError
from telegram import InlineKeyboardMarkup

from threads.core.core import Service
from threads.core.modules.telegram.gateway import login_keyboard
from threads.core.modules.telegram.models import BotCommand, TelegramChat, TelegramUpdate
from threads.core.modules.telegram.rendering import (
    render_help_message,
    render_quit_failed_message,
    render_quit_message,
    render_sync_message,
    render_token_message,
)
from threads.core.modules.token.codec import user_id_from_chat_id
from threads.errors import AccessDeniedError

logger = structlog.get_logger(__name__)


class BotService(Service):
    """Handles webhook updates from the Telegram bot.

    Holds no per-chat state: every update is processed on its own and all
    replies are sent as deferred tasks.
    """

    def verify_secret(self, secret: str | None) -> None:
        """Reject requests that do not carry the configured webhook secret."""
        expected = self.core.config.bot_secret
        if not secret or not secrets.compare_digest(secret.encode("utf-8"), expected.encode("utf-8")):
            logger.warning("telegram_webhook_forbidden")
            raise AccessDeniedError("Forbidden")

    def parse_update(self, payload: Any) -> TelegramUpdate | None:
        try:
            return TelegramUpdate.model_validate(payload)
        except PydanticValidationError:
            logger.debug("telegram_update_malformed")
            return None

    async def handle_update(self, update: TelegramUpdate) -> bool:
        """Process an update. Returns False if it was ignored."""
        message = update.private_text_message
        if message is None or message.chat is None or message.text is None:
            return False

        chat = message.chat
        match message.text:
            case BotCommand.START | BotCommand.HELP:
                self._reply(chat.id, render_help_message())
            case BotCommand.AUTH | BotCommand.START_AUTH:
                await self._handle_auth(chat)
            case BotCommand.SYNC:
                await self._handle_sync(chat)
            case BotCommand.QUIT:
                await self._handle_quit(chat)
            case _:
                return False

        logger.info("telegram_command_handled", command=message.text, chat_id=chat.id)
        return True

    async def _handle_auth(self, chat: TelegramChat) -> None:
        user_id = user_id_from_chat_id(chat.id)
        await self.core.services.user.add_user(user_id, chat.display_name)
        token = await self.core.services.token.issue(user_id)
        login_url = f"{self.core.config.website_url}/login?token={token}"
        self._reply(
            chat.id,
            render_token_message(token, self.core.config.token_ttl_minutes),
            reply_markup=login_keyboard(login_url),
        )

    async def _handle_sync(self, chat: TelegramChat) -> None:
        user = await self.core.services.user.sync_user(user_id_from_chat_id(chat.id), chat.display_name)
        self._reply(chat.id, render_sync_message(user.name))

    async def _handle_quit(self, chat: TelegramChat) -> None:
        user_id = user_id_from_chat_id(chat.id)
        try:
            count = await self.core.services.session.destroy_all_sessions(user_id)
        except PyMongoError as e:
            logger.exception("sessions_destroy_failed", user_id=user_id, error=str(e))
            self._reply(chat.id, render_quit_failed_message())
            return
        self._reply(chat.id, render_quit_message(count))

    def _reply(self, chat_id: int, text: str, reply_markup: InlineKeyboardMarkup | None = None) -> None:
        self.core.tasks.spawn(
            self.core.gateway.send_message(chat_id, text, reply_markup=reply_markup),
            name="telegram_reply",
        )
