import re

from pydantic import field_validator
from pydantic_settings import BaseSettings

BOT_SECRET_RE = re.compile(r"^[A-Za-z0-9_-]{1,255}$")


class Config(BaseSettings):
    """Application configuration loaded from environment variables."""

    database_url: str  # MongoDB URL including the database name, e.g. mongodb://localhost/threads
    host: str
    port: int
    debug: bool
    bot_token: str  # Telegram Bot API token from @BotFather
    bot_secret: str  # Shared secret Telegram sends in X-Telegram-Bot-Api-Secret-Token
    website_url: str  # Public URL of the site, used for login links in bot messages
    cors_origins: list[str] = []
    token_ttl_minutes: int = 10  # Lifetime of one-time login tokens
    cookie_secure: bool = True  # Set to False for local development over plain HTTP
    session_cookie_max_age_days: int = 30

    model_config = {
        "env_file": [".env"],
        "env_prefix": "THREADS_",
        "extra": "ignore",
    }

    @field_validator("bot_secret")
    @classmethod
    def validate_bot_secret(cls, value: str) -> str:
        # Telegram only accepts A-Z, a-z, 0-9, _ and - in webhook secrets
        if not BOT_SECRET_RE.fullmatch(value):
            raise ValueError("bot_secret must be 1-255 characters of A-Z, a-z, 0-9, _ or -")
        return value

    @field_validator("website_url")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")
