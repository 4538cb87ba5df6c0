"""Session management models."""

from datetime import datetime

from pydantic import BaseModel, Field

from threads.core.db import MongoModel
from threads.core.modules.user.models import User
from threads.utils import now


class ClientInfo(BaseModel):
    """Request context captured once per request: device summary, IP and coarse location."""

    device: str = "Unknown Device"
    ip: str | None = None
    location: str | None = None


class Session(MongoModel):
    """Browser session created by redeeming a login token.

    Indexed on user_id and last_active.
    """

    user_id: str
    token: str
    device: str
    ip: str | None = None
    location: str | None = None
    created_at: datetime = Field(default_factory=now)
    last_active: datetime = Field(default_factory=now)


class CurrentSession(BaseModel):
    """A validated session together with its owner."""

    session: Session
    user: User


class SessionView(BaseModel):
    """Session information (API representation). Never exposes the session secret."""

    id: str = Field(..., description="Session ID")
    device: str = Field(..., description="Device, OS and browser summary")
    ip: str | None = Field(None, description="IP address at sign-in")
    location: str | None = Field(None, description="Approximate location at sign-in")
    created_at: datetime = Field(..., description="Sign-in time")
    last_active: datetime = Field(..., description="Time of the last authenticated request")
    current: bool = Field(False, description="Whether this is the session making the request")

    @classmethod
    def from_domain(cls, session: Session, current_id: str | None = None) -> "SessionView":
        return cls(
            id=str(session.id),
            device=session.device,
            ip=session.ip,
            location=session.location,
            created_at=session.created_at,
            last_active=session.last_active,
            current=str(session.id) == current_id,
        )
