from datetime import datetime

from pydantic import BaseModel, Field

from threads.core.db import MongoModel
from threads.utils import now


class User(MongoModel):
    """Telegram-backed user account.

    The id is the hex encoding of the user's private chat id and never changes.
    """

    id: str = Field(alias="_id", serialization_alias="id")  # type: ignore[assignment]
    name: str
    created_at: datetime = Field(default_factory=now)


class UserView(BaseModel):
    """User account information (API representation)."""

    id: str = Field(..., description="User ID (hex-encoded Telegram chat id)")
    name: str = Field(..., description="Display name synced from Telegram")
    created_at: datetime = Field(..., description="When the account was first created")

    @classmethod
    def from_domain(cls, user: User) -> "UserView":
        """Create view model from domain model."""
        return cls(id=user.id, name=user.name, created_at=user.created_at)
