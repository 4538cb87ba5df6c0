from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from threads.app import App
from threads.config import Config
from threads.errors import LoginRequiredError, UserError
from threads.web.error_handlers import general_exception_handler, login_required_handler, user_error_handler
from threads.web.openapi import set_custom_openapi
from threads.web.routers import account_router, auth_router, profile_router, telegram_router


def create_fastapi_app(app_instance: App, config: Config) -> FastAPI:
    """Create and configure FastAPI application."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
        """FastAPI application lifespan management."""
        async with app_instance.lifespan():
            yield

    app = FastAPI(
        title="Threads API",
        lifespan=lifespan,
        openapi_tags=[],  # Tags will be added by custom OpenAPI function
    )

    # Store app instance and config in app state
    app.state.app = app_instance
    app.state.config = config

    # Add CORS middleware for frontend development
    if config.cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    # Health check endpoint (at root level, not versioned)
    @app.get("/health")
    async def health_check() -> dict[str, str]:
        return {"status": "healthy"}

    # Bot webhook and browser-facing auth routes
    app.include_router(telegram_router)
    app.include_router(auth_router)
    app.include_router(profile_router)

    # API v1 routes
    app.include_router(account_router, prefix="/api/v1")

    # Register error handlers
    app.add_exception_handler(UserError, user_error_handler)
    app.add_exception_handler(LoginRequiredError, login_required_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    set_custom_openapi(app)

    return app
