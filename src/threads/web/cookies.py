from fastapi import Response

from threads.config import Config
from threads.core.modules.session.models import Session

SESSION_ID_COOKIE = "session_id"
SESSION_TOKEN_COOKIE = "session_token"


def set_session_cookies(response: Response, session: Session, config: Config) -> None:
    max_age = config.session_cookie_max_age_days * 24 * 60 * 60
    for key, value in ((SESSION_ID_COOKIE, str(session.id)), (SESSION_TOKEN_COOKIE, session.token)):
        response.set_cookie(
            key=key,
            value=value,
            httponly=True,
            samesite="lax",
            secure=config.cookie_secure,
            max_age=max_age,
            path="/",
        )


def clear_session_cookies(response: Response) -> None:
    response.delete_cookie(SESSION_ID_COOKIE, path="/")
    response.delete_cookie(SESSION_TOKEN_COOKIE, path="/")
