from threads.web.routers.account import router as account_router
from threads.web.routers.auth import router as auth_router
from threads.web.routers.profile import router as profile_router
from threads.web.routers.telegram import router as telegram_router

__all__ = [
    "account_router",
    "auth_router",
    "profile_router",
    "telegram_router",
]
