"""Subset of the Telegram Bot API update payload used by the bot webhook."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict


class BotCommand(StrEnum):
    """Commands recognized by exact message text."""

    START = "/start"
    HELP = "/help"
    AUTH = "/auth"
    START_AUTH = "/start auth"  # deep link t.me/<bot>?start=auth
    SYNC = "/sync"
    QUIT = "/quit"


class TelegramChat(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    type: str
    first_name: str = ""
    last_name: str | None = None

    @property
    def display_name(self) -> str:
        if self.last_name:
            return f"{self.first_name} {self.last_name}"
        return self.first_name


class TelegramMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    chat: TelegramChat | None = None


class TelegramUpdate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: TelegramMessage | None = None

    @property
    def private_text_message(self) -> TelegramMessage | None:
        """The message if it is a text message in a private chat, else None."""
        message = self.message
        if message is None or not message.text or message.chat is None or message.chat.type != "private":
            return None
        return message
