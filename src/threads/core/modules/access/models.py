from pydantic import BaseModel

from threads.core.modules.session.models import Session


class SessionCredentials(BaseModel):
    """The pair of values kept in the session cookies."""

    session_id: str | None = None
    session_token: str | None = None


class SignInResult(BaseModel):
    """Outcome of a login form submission.

    On failure `message` is safe to show to the user and `error_type` tells the
    reason class apart for API clients.
    """

    ok: bool
    session: Session | None = None
    message: str | None = None
    error_type: str | None = None
