from datetime import timedelta
from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from threads.core.core import Service
from threads.core.modules.token.codec import build_auth_token
from threads.core.modules.token.models import AuthToken
from threads.core.modules.user.models import User
from threads.utils import now

logger = structlog.get_logger(__name__)


class TokenService(Service):
    """Issues, redeems and revokes one-time login tokens.

    Expiry is enforced when reading: every lookup filters on expires_at > now.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("auth_tokens")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("token", 1)], unique=True)
        # Storage hygiene only, MongoDB removes expired rows lazily
        await self._collection.create_index([("expires_at", 1)], expireAfterSeconds=0)

    @property
    def ttl(self) -> timedelta:
        return timedelta(minutes=self.core.config.token_ttl_minutes)

    async def issue(self, user_id: str) -> str:
        """Create or replace the user's login token. Any previous token stops working."""
        token = build_auth_token(user_id)
        expires_at = now() + self.ttl
        await self._collection.update_one(
            {"_id": user_id},
            {"$set": {"token": token, "expires_at": expires_at}},
            upsert=True,
        )
        logger.info("auth_token_issued", user_id=user_id, expires_at=expires_at.isoformat())
        return token

    async def redeem(self, token: str) -> User | None:
        """Consume a live token and return its owner.

        Lookup and delete happen in one atomic operation, so concurrent redemptions
        of the same token cannot both succeed.
        """
        auth_token = AuthToken.from_mongo(
            await self._collection.find_one_and_delete({"token": token, "expires_at": {"$gt": now()}})
        )
        if auth_token is None:
            logger.info("auth_token_rejected")
            return None

        user = await self.core.services.user.find_user(auth_token.id)
        if user is None:
            logger.warning("auth_token_owner_missing", user_id=auth_token.id)
            return None

        logger.info("auth_token_redeemed", user_id=user.id)
        return user

    async def revoke(self, token: str) -> bool:
        """Delete a token by value. Safe to call on a token that is already gone."""
        result = await self._collection.delete_one({"token": token})
        return result.deleted_count > 0

    async def get_valid_token(self, token: str) -> AuthToken | None:
        """Look up a live token without consuming it."""
        return AuthToken.from_mongo(await self._collection.find_one({"token": token, "expires_at": {"$gt": now()}}))
