from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

from pymongo import AsyncMongoClient

from threads.config import Config
from threads.core.core import Core
from threads.core.modules.access.models import SessionCredentials, SignInResult
from threads.core.modules.session.models import ClientInfo, CurrentSession, SessionView
from threads.core.modules.telegram.gateway import TelegramGateway
from threads.core.modules.token.codec import validate_token_format
from threads.errors import ValidationError


class App:
    """Facade for all application operations, resolves authentication before delegating to Core."""

    def __init__(
        self,
        config: Config,
        mongo_client: AsyncMongoClient[dict[str, Any]] | None = None,
        gateway: TelegramGateway | None = None,
    ) -> None:
        self._core = Core(config, mongo_client=mongo_client, gateway=gateway)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    # === Telegram bot ===
    async def handle_telegram_webhook(self, secret: str | None, payload: Any) -> bool:
        """Authenticate and process a bot update. Returns False if the update was ignored."""
        bot = self._core.services.telegram
        bot.verify_secret(secret)
        update = bot.parse_update(payload)
        if update is None:
            return False
        return await bot.handle_update(update)

    # === Authentication ===
    async def sign_in(self, token: str | None, client: ClientInfo) -> SignInResult:
        """Redeem a login token and open a session."""
        return await self._core.services.access.sign_in(token, client)

    async def sign_out(self, credentials: SessionCredentials) -> None:
        """Close the current session, if any."""
        await self._core.services.access.sign_out(credentials)

    async def is_login_token_valid(self, token: str) -> bool:
        """Check a login token without consuming it."""
        try:
            validate_token_format(token)
        except ValidationError:
            return False
        return await self._core.services.token.get_valid_token(token) is not None

    async def get_current_session(self, credentials: SessionCredentials, client: ClientInfo) -> CurrentSession | None:
        return await self._core.services.access.get_current_session(credentials, client)

    async def require_authentication(
        self, credentials: SessionCredentials, client: ClientInfo, next_path: str | None = None
    ) -> CurrentSession:
        """Get the current session. Raises LoginRequiredError if there is none."""
        return await self._core.services.access.require_authentication(credentials, client, next_path)

    async def is_authenticated(self, credentials: SessionCredentials, client: ClientInfo) -> bool:
        return await self._core.services.access.is_authenticated(credentials, client)

    # === Sessions ===
    async def get_user_sessions(self, current: CurrentSession) -> list[SessionView]:
        """List the current user's sessions."""
        sessions = await self._core.services.session.get_user_sessions(current.user.id)
        return [SessionView.from_domain(session, current_id=str(current.session.id)) for session in sessions]

    async def terminate_all_sessions(self, current: CurrentSession) -> int:
        """Log the current user out everywhere."""
        return await self._core.services.session.destroy_all_sessions(current.user.id)
