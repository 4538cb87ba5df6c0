from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from threads.core.core import Service
from threads.core.db import parse_uuid
from threads.core.modules.session.models import ClientInfo, CurrentSession, Session
from threads.core.modules.token.codec import generate_token
from threads.utils import now

logger = structlog.get_logger(__name__)


class SessionService(Service):
    """Service for managing user sessions."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("sessions")

    async def on_start(self) -> None:
        """Create indexes on startup."""
        await self._collection.create_index([("user_id", 1)])
        await self._collection.create_index([("last_active", -1)])

    async def create_session(self, user_id: str, client: ClientInfo) -> Session:
        """Insert a new session with a fresh 32-byte secret."""
        session = Session(
            user_id=user_id,
            token=generate_token(32),
            device=client.device,
            ip=client.ip,
            location=client.location,
        )
        await self._collection.insert_one(session.to_mongo())
        logger.info("session_created", user_id=user_id, session_id=session.id)
        return session

    async def get_session(self, session_id: str) -> Session | None:
        sid = parse_uuid(session_id)
        if sid is None:
            return None
        return Session.from_mongo(await self._collection.find_one({"_id": sid}))

    async def get_session_with_user(self, session_id: str) -> CurrentSession | None:
        """Get a session and its owner. Sessions whose user no longer exists are treated as missing."""
        session = await self.get_session(session_id)
        if session is None:
            return None
        user = await self.core.services.user.find_user(session.user_id)
        if user is None:
            return None
        return CurrentSession(session=session, user=user)

    async def touch_session(self, session_id: str, device: str) -> None:
        """Record activity on a session."""
        sid = parse_uuid(session_id)
        if sid is None:
            return
        await self._collection.update_one({"_id": sid}, {"$set": {"last_active": now(), "device": device}})

    async def destroy_session(self, session_id: str) -> bool:
        sid = parse_uuid(session_id)
        if sid is None:
            return False
        result = await self._collection.delete_one({"_id": sid})
        if result.deleted_count:
            logger.info("session_destroyed", session_id=sid)
        return result.deleted_count > 0

    async def destroy_all_sessions(self, user_id: str) -> int:
        """Delete every session of a user. Returns the number of sessions removed."""
        result = await self._collection.delete_many({"user_id": user_id})
        logger.info("sessions_destroyed", user_id=user_id, count=result.deleted_count)
        return result.deleted_count

    async def get_user_sessions(self, user_id: str) -> list[Session]:
        """List a user's sessions, most recently active first."""
        cursor = self._collection.find({"user_id": user_id}).sort("last_active", -1)
        return await Session.list_cursor(cursor)
