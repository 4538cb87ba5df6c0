"""Shared pytest fixtures."""

import pytest
from fakes import FakeDatabase, FakeGateway, FakeMongoClient
from fastapi.testclient import TestClient

from threads.app import App
from threads.config import Config
from threads.core.core import Core
from threads.web.server import create_fastapi_app

BOT_SECRET = "test-webhook-secret"


@pytest.fixture
def config():
    """Configuration for tests, independent of the environment."""
    return Config(
        _env_file=None,
        database_url="mongodb://localhost/threads_test",
        host="127.0.0.1",
        port=3100,
        debug=True,
        bot_token="123456:test-token",
        bot_secret=BOT_SECRET,
        website_url="https://threads.test/",
        cookie_secure=False,
    )


@pytest.fixture
def mongo_client():
    return FakeMongoClient()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def app(config, mongo_client, gateway):
    return App(config, mongo_client=mongo_client, gateway=gateway)


@pytest.fixture
def core(app) -> Core:
    return app._core


@pytest.fixture
def database(core) -> FakeDatabase:
    return core.database


@pytest.fixture
def client(app, config):
    """Test client with the application lifespan running."""
    with TestClient(create_fastapi_app(app, config)) as test_client:
        yield test_client

