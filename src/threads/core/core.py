from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, cast

from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from threads.config import Config
from threads.core.db import database_name
from threads.core.modules.telegram.gateway import TelegramGateway
from threads.core.tasks import DeferredTasks

if TYPE_CHECKING:
    from threads.core.modules.access.service import AccessService
    from threads.core.modules.session.service import SessionService
    from threads.core.modules.telegram.service import BotService
    from threads.core.modules.token.service import TokenService
    from threads.core.modules.user.service import UserService


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    user: UserService
    token: TokenService
    session: SessionService
    access: AccessService
    telegram: BotService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # Service configuration: (attribute_name, module_path, class_name)
        # Order matters for initialization - user must be first
        service_configs = [
            ("user", "threads.core.modules.user.service", "UserService"),
            ("token", "threads.core.modules.token.service", "TokenService"),
            ("session", "threads.core.modules.session.service", "SessionService"),
            ("access", "threads.core.modules.access.service", "AccessService"),
            ("telegram", "threads.core.modules.telegram.service", "BotService"),
        ]

        # Dynamically import and instantiate services
        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in self._services:
            await service.on_stop()


class Core:
    """Container providing config, database, messaging gateway, deferred tasks and all service instances.

    The Mongo client and the gateway can be passed in explicitly; otherwise they are built from config.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    gateway: TelegramGateway
    tasks: DeferredTasks
    services: Services

    def __init__(
        self,
        config: Config,
        mongo_client: AsyncMongoClient[dict[str, Any]] | None = None,
        gateway: TelegramGateway | None = None,
    ) -> None:
        """Initialize core with config, MongoDB, Telegram gateway, and auto-register services."""
        self.config = config
        self.mongo_client = mongo_client or AsyncMongoClient(config.database_url, uuidRepresentation="standard", tz_aware=True)
        self.database = self.mongo_client.get_database(database_name(config.database_url))
        self.gateway = gateway or TelegramGateway(config.bot_token)
        self.tasks = DeferredTasks()
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()

    async def on_stop(self) -> None:
        """Finish pending deferred tasks, stop services and close connections on shutdown."""
        await self.tasks.drain()
        await self.services.stop_all()
        await self.gateway.close()
        await self.mongo_client.aclose()
