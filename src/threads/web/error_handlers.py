from urllib.parse import urlencode

import structlog
from fastapi import Request, status
from fastapi.responses import JSONResponse, RedirectResponse, Response

from threads.errors import (
    AccessDeniedError,
    AuthenticationError,
    InvalidOrExpiredTokenError,
    LoginRequiredError,
    NotFoundError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

LOGIN_PATH = "/login"


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


def login_redirect_url(next_path: str | None) -> str:
    if not next_path or next_path == LOGIN_PATH:
        return LOGIN_PATH
    return f"{LOGIN_PATH}?{urlencode({'to': next_path})}"


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    # Determine the appropriate status code and type based on error
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, AccessDeniedError):
        status_code = 403
        error_type = "access_denied"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    elif isinstance(exc, ValidationError):
        status_code = 400
        error_type = "validation_error"
    elif isinstance(exc, InvalidOrExpiredTokenError):
        status_code = 400
        error_type = "invalid_token"
    else:
        # Default for any other UserError subclass
        status_code = 400
        error_type = "bad_request"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def login_required_handler(_: Request, exc: Exception) -> Response:
    """Send unauthenticated visitors of protected pages to the login page."""
    next_path = exc.next_path if isinstance(exc, LoginRequiredError) else None
    return RedirectResponse(login_redirect_url(next_path), status_code=status.HTTP_303_SEE_OTHER)


async def general_exception_handler(_: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", error=str(exc))
    return create_json_error_response(
        status_code=500, message="An unexpected error occurred.", error_type="internal_server_error"
    )
