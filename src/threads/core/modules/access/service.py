import secrets

import structlog

from threads.core.core import Service
from threads.core.modules.access.models import SessionCredentials, SignInResult
from threads.core.modules.session.models import ClientInfo, CurrentSession
from threads.core.modules.telegram.rendering import render_login_message
from threads.core.modules.token.codec import chat_id_from_user_id, validate_token_format
from threads.errors import InvalidOrExpiredTokenError, LoginRequiredError, ValidationError

logger = structlog.get_logger(__name__)


class AccessService(Service):
    """Request-time authentication: reading sessions from cookies, signing in and out."""

    async def get_current_session(self, credentials: SessionCredentials, client: ClientInfo) -> CurrentSession | None:
        """Resolve the cookie pair to a session, or None if unauthenticated."""
        if not credentials.session_id or not credentials.session_token:
            return None

        current = await self.core.services.session.get_session_with_user(credentials.session_id)
        if current is None:
            return None

        if not secrets.compare_digest(current.session.token.encode("utf-8"), credentials.session_token.encode("utf-8")):
            logger.warning("session_token_mismatch", session_id=current.session.id)
            return None

        self.core.tasks.spawn(
            self.core.services.session.touch_session(credentials.session_id, client.device),
            name="session_touch",
        )
        return current

    async def require_authentication(
        self, credentials: SessionCredentials, client: ClientInfo, next_path: str | None = None
    ) -> CurrentSession:
        """Return the current session or raise LoginRequiredError."""
        current = await self.get_current_session(credentials, client)
        if current is None:
            raise LoginRequiredError(next_path)
        return current

    async def is_authenticated(self, credentials: SessionCredentials, client: ClientInfo) -> bool:
        return await self.get_current_session(credentials, client) is not None

    async def sign_in(self, token: str | None, client: ClientInfo) -> SignInResult:
        """Exchange a one-time login token for a new session."""
        try:
            token = validate_token_format(token)
        except ValidationError as e:
            return SignInResult(ok=False, message=str(e), error_type="validation_error")

        user = await self.core.services.token.redeem(token)
        if user is None:
            return SignInResult(ok=False, message=str(InvalidOrExpiredTokenError()), error_type="invalid_token")

        session = await self.core.services.session.create_session(user.id, client)

        self.core.tasks.spawn(
            self.core.gateway.send_message(chat_id_from_user_id(user.id), render_login_message(client, token)),
            name="login_notification",
        )
        self.core.tasks.spawn(self.core.services.token.revoke(token), name="token_revoke")

        logger.info("user_signed_in", user_id=user.id, session_id=session.id)
        return SignInResult(ok=True, session=session)

    async def sign_out(self, credentials: SessionCredentials) -> bool:
        """Destroy the session behind the cookies if the pair is valid. Returns True if one was removed."""
        if not credentials.session_id or not credentials.session_token:
            return False

        session = await self.core.services.session.get_session(credentials.session_id)
        if session is None:
            return False
        if not secrets.compare_digest(session.token.encode("utf-8"), credentials.session_token.encode("utf-8")):
            return False

        destroyed = await self.core.services.session.destroy_session(credentials.session_id)
        logger.info("user_signed_out", user_id=session.user_id, session_id=session.id)
        return destroyed
