from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi
from pydantic import BaseModel, Field

from threads.web.cookies import SESSION_ID_COOKIE, SESSION_TOKEN_COOKIE


def set_custom_openapi(app: FastAPI) -> None:
    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title="Threads API",
            version="0.1.0",
            summary="Telegram-bot login and session management for Threads",
            routes=app.routes,
        )

        # Session cookies are issued by POST /login
        openapi_schema.setdefault("components", {})["securitySchemes"] = {
            "SessionIdCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_ID_COOKIE,
                "description": "Session identifier",
            },
            "SessionTokenCookie": {
                "type": "apiKey",
                "in": "cookie",
                "name": SESSION_TOKEN_COOKIE,
                "description": "Session secret paired with the identifier",
            },
        }

        # Both cookies are required together
        openapi_schema["security"] = [{"SessionIdCookie": [], "SessionTokenCookie": []}]

        # Remove security from public endpoints
        public_endpoints = {
            ("POST", "/telegram"),
            ("POST", "/login"),
            ("GET", "/login/token"),
            ("GET", "/logout"),
            ("POST", "/logout"),
            ("GET", "/health"),
        }

        for path, path_item in openapi_schema["paths"].items():
            for method, operation in path_item.items():
                if (method.upper(), path) in public_endpoints:
                    # Mark as public endpoint (no security required)
                    operation["security"] = []

        app.openapi_schema = openapi_schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore[method-assign]


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Invalid or expired token.", "type": "invalid_token"},
                {"message": "Token must be exactly 45 characters long.", "type": "validation_error"},
                {"message": "Forbidden", "type": "access_denied"},
            ]
        }
    }
