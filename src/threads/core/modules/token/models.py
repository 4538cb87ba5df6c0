from datetime import datetime

from pydantic import Field

from threads.core.db import MongoModel


class AuthToken(MongoModel):
    """One-time login token.

    Keyed by the owning user id, so issuing a new token replaces the previous one.
    Indexed on token - unique, expires_at (TTL, cleanup only).
    """

    id: str = Field(alias="_id", serialization_alias="id")  # type: ignore[assignment]
    token: str
    expires_at: datetime
