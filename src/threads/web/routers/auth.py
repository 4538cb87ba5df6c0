from typing import Annotated

from fastapi import APIRouter, Form, Query, Request, status
from fastapi.responses import RedirectResponse, Response
from pydantic import BaseModel, Field

from threads.utils import is_safe_redirect_path
from threads.web.cookies import clear_session_cookies, set_session_cookies
from threads.web.deps import AppDep, ClientInfoDep, ConfigDep, CredentialsDep
from threads.web.error_handlers import LOGIN_PATH, create_json_error_response
from threads.web.openapi import ErrorResponse

router = APIRouter(tags=["auth"])

DEFAULT_REDIRECT = "/home"


class TokenStatusResponse(BaseModel):
    """Whether a login token can still be redeemed."""

    valid: bool = Field(..., description="True if the token exists and has not expired")


@router.post(
    "/login",
    summary="Sign in with a bot token",
    description="Redeem the one-time token sent by the Telegram bot. Sets the session cookies and redirects.",
    operation_id="login",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={
        303: {"description": "Signed in, redirecting to the destination page"},
        400: {"model": ErrorResponse, "description": "Malformed, invalid or expired token"},
    },
)
async def login(
    request: Request,
    app: AppDep,
    config: ConfigDep,
    client: ClientInfoDep,
    token: Annotated[str, Form(description="45-character token from the bot")] = "",
    to: Annotated[str | None, Form(description="Path to open after signing in")] = None,
) -> Response:
    result = await app.sign_in(token, client)
    if not result.ok or result.session is None:
        return create_json_error_response(
            status_code=400, message=result.message or "Invalid or expired token.", error_type=result.error_type
        )

    destination = to or request.query_params.get("to")
    if not destination or not is_safe_redirect_path(destination):
        destination = DEFAULT_REDIRECT

    response = RedirectResponse(destination, status_code=status.HTTP_303_SEE_OTHER)
    set_session_cookies(response, result.session, config)
    return response


@router.get(
    "/login/token",
    summary="Check a login token",
    description="Tell whether a token from the bot link is still valid, without consuming it.",
    operation_id="checkLoginToken",
)
async def check_login_token(app: AppDep, token: Annotated[str, Query()] = "") -> TokenStatusResponse:
    return TokenStatusResponse(valid=await app.is_login_token_valid(token))


@router.api_route(
    "/logout",
    methods=["GET", "POST"],
    summary="End session",
    description="Destroy the current session, clear the session cookies and redirect to the login page.",
    operation_id="logout",
    status_code=status.HTTP_303_SEE_OTHER,
    responses={303: {"description": "Signed out, redirecting to the login page"}},
)
async def logout(app: AppDep, credentials: CredentialsDep) -> Response:
    await app.sign_out(credentials)
    response = RedirectResponse(LOGIN_PATH, status_code=status.HTTP_303_SEE_OTHER)
    clear_session_cookies(response)
    return response
