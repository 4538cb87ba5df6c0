from typing import Annotated, cast

from fastapi import Depends, Request
from fastapi.security import APIKeyCookie

from threads.app import App
from threads.config import Config
from threads.core.modules.access.models import SessionCredentials
from threads.core.modules.session.models import ClientInfo, CurrentSession
from threads.errors import AuthenticationError
from threads.web.client_info import get_client_info
from threads.web.cookies import SESSION_ID_COOKIE, SESSION_TOKEN_COOKIE

# Security schemes
session_id_scheme = APIKeyCookie(name=SESSION_ID_COOKIE, auto_error=False)
session_token_scheme = APIKeyCookie(name=SESSION_TOKEN_COOKIE, auto_error=False)


async def get_app(request: Request) -> App:
    return cast(App, request.app.state.app)


async def get_config(request: Request) -> Config:
    return cast(Config, request.app.state.config)


async def get_credentials(
    session_id: Annotated[str | None, Depends(session_id_scheme)],
    session_token: Annotated[str | None, Depends(session_token_scheme)],
) -> SessionCredentials:
    """Read the session cookie pair."""
    return SessionCredentials(session_id=session_id, session_token=session_token)


async def get_current_session(
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[SessionCredentials, Depends(get_credentials)],
    client: Annotated[ClientInfo, Depends(get_client_info)],
) -> CurrentSession | None:
    return await app.get_current_session(credentials, client)


async def require_session(
    request: Request,
    app: Annotated[App, Depends(get_app)],
    credentials: Annotated[SessionCredentials, Depends(get_credentials)],
    client: Annotated[ClientInfo, Depends(get_client_info)],
) -> CurrentSession:
    """Session for page-style routes: unauthenticated requests are redirected to the login page."""
    return await app.require_authentication(credentials, client, next_path=request.url.path)


async def require_api_session(
    current: Annotated[CurrentSession | None, Depends(get_current_session)],
) -> CurrentSession:
    """Session for JSON routes: unauthenticated requests get 401."""
    if current is None:
        raise AuthenticationError("Not authenticated")
    return current


# Type aliases for dependencies
AppDep = Annotated[App, Depends(get_app)]
ConfigDep = Annotated[Config, Depends(get_config)]
ClientInfoDep = Annotated[ClientInfo, Depends(get_client_info)]
CredentialsDep = Annotated[SessionCredentials, Depends(get_credentials)]
OptionalSessionDep = Annotated[CurrentSession | None, Depends(get_current_session)]
SessionDep = Annotated[CurrentSession, Depends(require_session)]
ApiSessionDep = Annotated[CurrentSession, Depends(require_api_session)]
