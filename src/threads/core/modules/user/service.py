from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from threads.core.core import Service
from threads.core.modules.user.models import User
from threads.errors import NotFoundError
from threads.utils import now

logger = structlog.get_logger(__name__)


class UserService(Service):
    """Stores users keyed by their Telegram-derived id."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("users")

    async def add_user(self, user_id: str, name: str) -> User:
        """Create the user if absent. An existing user keeps its current name."""
        result = await self._collection.update_one(
            {"_id": user_id},
            {"$setOnInsert": {"name": name, "created_at": now()}},
            upsert=True,
        )
        if result.upserted_id is not None:
            logger.info("user_created", user_id=user_id)
        return await self.get_user(user_id)

    async def sync_user(self, user_id: str, name: str) -> User:
        """Create the user or overwrite its name with the one from Telegram."""
        await self._collection.update_one(
            {"_id": user_id},
            {"$set": {"name": name}, "$setOnInsert": {"created_at": now()}},
            upsert=True,
        )
        logger.info("user_synced", user_id=user_id)
        return await self.get_user(user_id)

    async def find_user(self, user_id: str) -> User | None:
        return User.from_mongo(await self._collection.find_one({"_id": user_id}))

    async def get_user(self, user_id: str) -> User:
        """Get user by ID, raise NotFoundError if missing."""
        user = await self.find_user(user_id)
        if user is None:
            raise NotFoundError(f"User '{user_id}' not found")
        return user
